"""Vocabulary taxonomy with approximate string matching of terms to concepts."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator

from ctparse.taxonomy_node import Normalizer, TaxonomyNode, identity
from ctparse.terms import (
    PriorityQueue,
    Term,
    dedupe_terms,
    default_terms,
    sort_by_key,
    sort_by_value,
    top_delta,
)

CAPACITY = 20
MIN_SCORE = 0.4
_SHINGLE_SIZE = 3


def _shingles(s: str) -> set[str]:
    if len(s) <= _SHINGLE_SIZE:
        return {s}
    return {s[i : i + _SHINGLE_SIZE] for i in range(len(s) - _SHINGLE_SIZE + 1)}


def _similarity(a: str, b: str) -> float:
    """Jaccard similarity of the character shingles of two strings."""
    sa, sb = _shingles(a), _shingles(b)
    union = sa | sb
    if not union:
        return 0.0
    return len(sa & sb) / len(union)


class Taxonomy:
    """A vocabulary taxonomy whose concepts can be matched against free text."""

    def __init__(self, root: TaxonomyNode) -> None:
        self.root = root
        self.normalizer: Normalizer = identity
        self.capacity = CAPACITY
        self.min_score = MIN_SCORE
        self._base_index: list[int] = []

    def add_nodes(self, nodes: Iterable[TaxonomyNode]) -> int:
        """Add nodes, joining those with known names; return the number of new nodes."""
        return sum(1 for node in nodes if self.add_node(node))

    def add_node(self, node: TaxonomyNode) -> bool:
        """Join the node to a leaf of the same name, or add it as a new child.

        Returns True if the node was added as a new child.
        """
        if self.root.update(node):
            return False
        self.root.add_child(node)
        return True

    def normalize(self, normalizer: Normalizer) -> None:
        """Normalize all synonyms and use the normalizer for matching."""
        self.normalizer = normalizer
        self.root.normalize(normalizer)

    def info(self) -> dict[str, int]:
        """Count descriptors, concepts and terms, print the counts and return them."""
        counts = {
            "Descriptors": self.root.size(0, 1),
            "Concepts": self.root.size(0, 2),
            "Terms": self.root.leafs(),
        }
        for label, count in counts.items():
            print(f"{label + ':':<13}{count:6d}")
        return counts

    def store(self, path: str | Path, sep: str) -> None:
        """Write one line per descriptor, concept and tree number to the file."""
        with open(path, "w", encoding="utf-8") as f:
            for descriptor in self.root.children:
                for concept in descriptor.children:
                    synonyms = "|".join(sorted(concept.synonyms))
                    for tn in sorted(concept.tree_numbers):
                        f.write(
                            sep.join((descriptor.name, concept.name, tn, synonyms)) + "\n"
                        )

    def set_base_index(self) -> None:
        """Index the taxonomy so that every top-level node is searched."""
        self._base_index = list(range(len(self.root.children)))

    def _match_node(self, node: TaxonomyNode, s: str) -> Iterator[Term]:
        for synonym in sorted(node.synonyms):
            score = _similarity(s, synonym)
            if score >= self.min_score:
                yield Term(
                    key=node.name,
                    value=score,
                    categories=node.categories(),
                    tree_numbers=node.all_tree_numbers(),
                )
        for child in node.children:
            yield from self._match_node(child, s)

    def match(
        self, s: str, delta: float, categories: set[str] | None = None
    ) -> list[Term]:
        """Match a string to terms of the taxonomy.

        Returns the best terms within delta of the top score, restricted to
        the given categories; a single zero-valued term if nothing matches.
        Raises RuntimeError if the search index is not set.
        """
        if not self._base_index:
            raise RuntimeError("search index not set")
        categories = categories or set()
        ordered, normalized = self.normalizer(s)
        if not ordered:
            return default_terms(s, normalized)
        queue = PriorityQueue(self.capacity)
        for i in self._base_index:
            for term in self._match_node(self.root.children[i], ordered):
                if term.pass_filter(categories):
                    queue.insert(term.trim_categories(categories))
        terms = top_delta(
            sort_by_value(dedupe_terms(sort_by_key(queue.terms()))), delta
        )
        if not terms:
            return default_terms(s, normalized)
        terms[0].normalized = normalized
        return terms