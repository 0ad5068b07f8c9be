"""Nodes of a vocabulary taxonomy."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

Normalizer = Callable[[str], "tuple[str, str]"]


def identity(s: str) -> tuple[str, str]:
    """Normalizer that leaves the string unchanged."""
    return s, s


def letter_prefix(s: str) -> str:
    """Return the leading letters of a string, such as the category of a tree number."""
    end = next((i for i, c in enumerate(s) if not c.isalpha()), len(s))
    return s[:end]


@dataclass
class TaxonomyNode:
    """A taxonomy node with synonyms, tree numbers and child nodes."""

    name: str
    children: list[TaxonomyNode] = field(default_factory=list)
    synonyms: set[str] = field(default_factory=set)
    tree_numbers: set[str] = field(default_factory=set)

    def all_synonyms(self) -> set[str]:
        """Return the synonyms of the node and all its descendants."""
        result = set(self.synonyms)
        for child in self.children:
            result |= child.all_synonyms()
        return result

    def all_tree_numbers(self) -> set[str]:
        """Return the tree numbers of the node and its direct children."""
        result = set(self.tree_numbers)
        for child in self.children:
            result |= child.tree_numbers
        return result

    def categories(self) -> set[str]:
        """Return the categories of the node and all its descendants."""
        result = {letter_prefix(tn) for tn in self.tree_numbers}
        for child in self.children:
            result |= child.categories()
        return result

    def size(self, level: int, target: int) -> int:
        """Return the number of nodes at the target level, counting leaves above it."""
        if not self.children or level == target:
            return 1
        return sum(child.size(level + 1, target) for child in self.children)

    def leafs(self) -> int:
        """Return the number of leaf synonyms, each leaf not counting its own name."""
        if not self.children:
            return len(self.synonyms) - 1
        return sum(child.leafs() for child in self.children)

    def add_child(self, child: TaxonomyNode) -> None:
        """Append a child node."""
        self.children.append(child)

    def add_synonym(self, *synonyms: str) -> None:
        """Add synonyms to the node."""
        self.synonyms.update(synonyms)

    def add_tree_number(self, *tree_numbers: str) -> None:
        """Add tree numbers to the node."""
        self.tree_numbers.update(tree_numbers)

    def update(self, other: TaxonomyNode) -> bool:
        """Merge the other node into the first leaf with the same name.

        Names are compared case-insensitively. Returns False if no leaf matched.
        """
        if not self.children and self.name.lower() == other.name.lower():
            self.synonyms |= other.synonyms
            self.tree_numbers |= other.tree_numbers
            return True
        return any(child.update(other) for child in self.children)

    def normalize(self, normalizer: Normalizer) -> None:
        """Replace the synonyms of the node and its descendants by both normalized forms."""
        self.synonyms = {form for s in self.synonyms for form in normalizer(s)}
        for child in self.children:
            child.normalize(normalizer)


def load_nodes(*paths: str | Path) -> list[TaxonomyNode]:
    """Load nodes from tab-separated files of name, synonym and optional tree numbers.

    Lines with the same name, ignoring case, are joined into one node.
    Raises ValueError on a line with too few or too many columns.
    """
    index: dict[str, TaxonomyNode] = {}
    nodes: list[TaxonomyNode] = []
    for path in paths:
        with open(path, encoding="utf-8") as f:
            for line_no, raw in enumerate(f, start=1):
                line = raw.strip()
                if not line:
                    continue
                values = [v.strip() for v in line.split("\t")]
                values = [v for v in values if v]
                if len(values) < 2:
                    raise ValueError(f"{path}: Too few columns: line {line_no}: '{line}'")
                if len(values) > 3:
                    raise ValueError(f"{path}: Too many columns: line {line_no}: '{line}'")
                tree_numbers = values[2].split("|") if len(values) == 3 else []
                concept, synonym = values[0], values[1]
                key = concept.lower()
                node = index.get(key)
                if node is None:
                    node = TaxonomyNode(concept)
                    node.add_synonym(concept)
                    index[key] = node
                    nodes.append(node)
                node.add_synonym(synonym)
                node.add_tree_number(*tree_numbers)
    return nodes