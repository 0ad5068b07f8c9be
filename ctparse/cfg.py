"""Context-free grammar parsing of items into parse trees with the CYK algorithm."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Sequence

from ctparse.items import Item
from ctparse.rules import Element, load_rules
from ctparse.tree import Node, Tree


class Grammar(ABC):
    """Grammar that parses items into parse trees."""

    @abstractmethod
    def build_trees(self, items: Sequence[Item]) -> list[Tree]:
        """Return the parse trees of the items."""


class ContextFreeGrammar(Grammar):
    """Context-free grammar given by its production rules in binary normal form."""

    def __init__(self, rules_text: str) -> None:
        self.rules = load_rules(rules_text)

    def _close_unary(
        self,
        cell: dict[str, None],
        kids: dict[str, Element],
        begin: int,
        split: int,
        end: int,
    ) -> None:
        added = True
        while added:
            added = False
            for body, heads in self.rules.unary_rules.items():
                if body.left not in cell:
                    continue
                for head in sorted(heads):
                    if head not in cell:
                        cell[head] = None
                        kids[head] = replace(body, begin=begin, split=split, end=end)
                        added = True

    def build_trees(self, items: Sequence[Item]) -> list[Tree]:
        """Return the parse trees covering the most items (Lange-Leiss CYK)."""
        size = len(items)
        if size == 0:
            return []
        rules = self.rules
        state = [[{} for _ in range(size)] for _ in range(size)]
        children: list[list[dict[str, Element]]] = [
            [{} for _ in range(size)] for _ in range(size)
        ]

        dim = 0
        for item in items:
            heads = rules.terminal_rules.get(item.type)
            if not heads:
                continue
            k = dim
            for head in sorted(heads):
                state[k][k][head] = None
                children[k][k][head] = Element(item.value, begin=k, split=k, end=k)
            self._close_unary(state[k][k], children[k][k], k, k, k)
            dim += 1

        for span in range(2, dim + 1):
            for begin in range(dim - span + 1):
                end = begin + span - 1
                cell, kids = state[begin][end], children[begin][end]
                for split in range(begin, end):
                    for b in state[begin][split]:
                        for c in state[split + 1][end]:
                            body = Element(b, c)
                            for head in sorted(rules.binary_rules.get(body, ())):
                                cell[head] = None
                                kids[head] = replace(body, begin=begin, split=split, end=end)
                self._close_unary(cell, kids, begin, end, end)

        def expand(node: Node, p: Element) -> None:
            child = Node(p.left)
            node.left = child
            nxt = children[p.begin][p.split].get(p.left)
            if nxt is not None:
                expand(child, nxt)
            if p.is_unary():
                return
            child = Node(p.right)
            node.right = child
            nxt = children[p.split + 1][p.end].get(p.right)
            if nxt is not None:
                expand(child, nxt)

        trees: list[Tree] = []
        for k in range(dim):
            score = 1.0 - 0.5 * k / dim
            for i in range(k + 1):
                start = children[i][dim + i - k - 1].get("S")
                if start is None:
                    continue
                root = Node("S")
                expand(root, start)
                if root.size() > 1:
                    trees.append(Tree(root, score))
            if trees:
                break
        return trees