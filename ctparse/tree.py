"""Parse trees built by the criteria grammar and their evaluation to relations."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Iterable

from ctparse import variables
from ctparse.relation import Limit, Relation, set_score, sort_relations


def _quote(s: str) -> str:
    return json.dumps(s, ensure_ascii=False)


def _size(node: Node | None) -> int:
    return 0 if node is None else node.size()


def _contains(node: Node | None, other: Node | None) -> bool:
    if other is None:
        return True
    if node is None:
        return False
    return node.contains(other)


@dataclass
class Node:
    """A node of a parse tree; leaves hold the values of parsed items."""

    value: str
    left: Node | None = None
    right: Node | None = None

    def size(self) -> int:
        """Return the number of leaves (terminals) under the node."""
        if self.left is None and self.right is None:
            return 1
        return _size(self.left) + _size(self.right)

    def contains(self, other: Node | None) -> bool:
        """Return True if this node contains the other node and its children."""
        if other is None:
            return True
        if self.value != other.value:
            return False
        return _contains(self.left, other.left) and _contains(self.right, other.right)

    def __str__(self) -> str:
        s = f'{{"value":{_quote(self.value)}'
        if self.left is not None:
            s += f',"left":{self.left}'
        if self.right is not None:
            s += f',"right":{self.right}'
        return s + "}"

    def eval_variable(self) -> str:
        """Return the variable name held by a V node."""
        name = self.left.left.value
        if self.right is not None:
            name += "/" + self.right.right.left.value
        return name

    def eval_nums(self) -> list[str]:
        """Return the distinct numbers under the node, sorted."""
        nums: set[str] = set()

        def walk(node: Node) -> None:
            for child in (node.left, node.right):
                if child is None:
                    continue
                if child.value == "N":
                    nums.add(child.left.value)
                else:
                    walk(child)

        walk(self)
        return sorted(nums)

    def eval_unit(self) -> str:
        """Return the first unit found under the node, or an empty string."""

        def find(node: Node) -> str:
            for child in (node.left, node.right):
                if child is None:
                    continue
                if child.value == "U":
                    return child.left.value
                found = find(child)
                if found:
                    return found
            return ""

        return find(self)

    def eval_bound(self) -> tuple[Limit | None, bool]:
        """Return the bound held by a B node and whether it is a lower bound."""
        if self.left.value == "L" and self.right.value == "T":
            self.left, self.right = self.right, self.left
        comparison = self.left
        if comparison.value != "T":
            return None, False
        op = comparison.left.value
        limit = Limit(incl=op in ("≤", "≥"))
        lower = op in (">", "≥")
        limit.value = self.right.left.left.value
        return limit, lower

    def eval_range(self) -> Limit:
        """Return the inclusive range bound held by an L or Y node."""
        nums = self.eval_nums()
        return Limit(incl=True, value=nums[0] if len(nums) == 1 else "")

    def eval_relation(self) -> Relation:
        """Return the relation held by an R node; raise ValueError without a variable."""
        relation = Relation()
        left, right = self.left, self.right
        if left is None or left.value != "V":
            left, right = right, left
        if left is None or left.value != "V":
            raise ValueError(
                "bad or missing variable node: "
                f"{left.value if left else ''}, {right.value if right else ''}"
            )
        relation.name = left.eval_variable()
        relation.id = variables.get_catalog().id_of(relation.name) or ""

        if right is None or right.value != "A":
            return relation

        attribute = right
        relation.unit = attribute.eval_unit()

        def set_bound(limit: Limit | None, lower: bool) -> None:
            if lower:
                if relation.lower is None:
                    relation.lower = limit
            elif relation.upper is None:
                relation.upper = limit

        first = attribute.left
        if first.value == "E":
            relation.value = attribute.eval_nums()
            return relation
        if first.value == "B":
            set_bound(*first.eval_bound())
        elif first.value in ("L", "Y"):
            relation.lower = first.eval_range()

        second = attribute.right
        if second is None:
            return relation
        if second.value == "W":
            set_bound(*second.right.eval_bound())
        elif second.value == "B":
            set_bound(*second.eval_bound())
        elif second.value == "Y":
            relation.upper = second.eval_range()
        return relation

    def eval_relations(self) -> tuple[list[Relation], list[Relation]]:
        """Return the 'or' and 'and' relations held under the node."""
        if self.left is None:
            return [], []
        if self.right is None and self.left.value == "C":
            return self.left.eval_relations()
        if self.right is None and self.left.value == "R":
            return [], [self.left.eval_relation()]
        node = self.right
        conjunction = "and"
        if node.right is not None:
            conjunction = node.left.left.value
            node = node.right
        else:
            node = node.left
        or_rels, and_rels = self.left.eval_relations()
        try:
            relation = node.eval_relation()
        except ValueError:
            return or_rels, and_rels
        if conjunction == "or":
            return [*or_rels, relation, *and_rels], []
        return [], [*and_rels, relation, *or_rels]


@dataclass
class Tree:
    """A scored parse tree."""

    root: Node | None
    score: float = 0.0

    def size(self) -> int:
        """Return the number of leaves of the tree."""
        return _size(self.root)

    def contains(self, other: Tree) -> bool:
        """Return True if the other tree is a sub-tree of this one or the same."""
        return _contains(self.root, other.root)

    def __str__(self) -> str:
        return f'{{"score":{self.score:.3f},"tree":{self.root}}}'

    def relations(self) -> tuple[list[Relation], list[Relation]]:
        """Return the scored and sorted 'or' and 'and' relations of the tree."""
        if self.root is None:
            return [], []
        or_rels, and_rels = self.root.eval_relations()
        for rels in (or_rels, and_rels):
            set_score(rels, self.score)
            sort_relations(rels)
        return or_rels, and_rels


def dedupe_trees(trees: list[Tree]) -> None:
    """Sort trees by size, largest first, and drop duplicates and contained stumps, in place."""
    if len(trees) < 2:
        return
    trees.sort(key=Tree.size, reverse=True)
    ordered = list(trees)
    trees[:] = [
        tree
        for i, tree in enumerate(ordered)
        if not any(earlier.contains(tree) for earlier in ordered[:i])
    ]


def trees_relations(trees: Iterable[Tree]) -> tuple[list[Relation], list[Relation]]:
    """Return the 'or' and 'and' relations of all trees."""
    or_rels: list[Relation] = []
    and_rels: list[Relation] = []
    for tree in trees:
        ors, ands = tree.relations()
        or_rels.extend(ors)
        and_rels.extend(ands)
    return or_rels, and_rels


def format_trees(trees: Iterable[Tree]) -> str:
    """Return the string representation of the trees, one per line."""
    return "\n".join(str(t) for t in trees)