"""Vocabulary terms with match scores, and a bounded priority queue of terms."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from ctparse.taxonomy_node import letter_prefix


def _format_set(values: Iterable[str]) -> str:
    return "[" + " ".join(sorted(values)) + "]"


@dataclass
class Term:
    """A vocabulary term or concept with a key (name) and a value (score)."""

    key: str
    value: float = 0.0
    categories: set[str] = field(default_factory=set)
    tree_numbers: set[str] = field(default_factory=set)
    normalized: str = ""

    def pass_filter(self, categories: set[str]) -> bool:
        """Return True if the filter is empty or shares a category with the term."""
        if not categories:
            return True
        return bool(self.categories & categories)

    def trim_categories(self, categories: set[str]) -> Term:
        """Drop categories and tree numbers outside the given categories, in place."""
        if not categories:
            return self
        self.categories &= categories
        self.tree_numbers = {
            tn for tn in self.tree_numbers if letter_prefix(tn) in categories
        }
        return self

    def __str__(self) -> str:
        return (
            f"{self.key}: {self.value:.2f} | {_format_set(self.categories)}"
            f" | {_format_set(self.tree_numbers)}"
        )


def default_terms(key: str, normalized: str) -> list[Term]:
    """Return a single zero-valued term for the key."""
    return [Term(key=key, normalized=normalized)]


def dedupe_terms(terms: list[Term]) -> list[Term]:
    """Merge adjacent terms with the same key.

    The merged term keeps the highest value and joins categories and
    tree numbers.
    """
    if len(terms) < 2:
        return list(terms)
    out: list[Term] = []
    for term in terms:
        if out and out[-1].key == term.key:
            last = out[-1]
            last.value = max(last.value, term.value)
            last.categories |= term.categories
            last.tree_numbers |= term.tree_numbers
        else:
            out.append(
                Term(
                    key=term.key,
                    value=term.value,
                    categories=set(term.categories),
                    tree_numbers=set(term.tree_numbers),
                    normalized=term.normalized,
                )
            )
    return out


def filter_terms(terms: list[Term], categories: set[str]) -> list[Term]:
    """Keep terms sharing a category with the filter, trimmed to it."""
    if not categories:
        return list(terms)
    return [t.trim_categories(categories) for t in terms if t.categories & categories]


def top_delta(terms: list[Term], delta: float) -> list[Term]:
    """Keep the leading terms whose value is within delta of the first."""
    if len(terms) < 2:
        return list(terms)
    top = terms[0].value
    kept = [terms[0]]
    for term in terms[1:]:
        if top - term.value > delta:
            break
        kept.append(term)
    return kept


def sort_by_value(terms: list[Term]) -> list[Term]:
    """Return the terms sorted by value, highest first."""
    return sorted(terms, key=lambda t: t.value, reverse=True)


def sort_by_key(terms: list[Term]) -> list[Term]:
    """Return the terms sorted by key."""
    return sorted(terms, key=lambda t: t.key)


def max_value(terms: list[Term]) -> float:
    """Return the value of the first term, or -1 for no terms."""
    return terms[0].value if terms else -1.0


def max_key(terms: list[Term]) -> str:
    """Return the key of the first term, or an empty string."""
    return terms[0].key if terms else ""


def normalized_key(terms: list[Term]) -> str:
    """Return the normalized key of the first term, or an empty string."""
    return terms[0].normalized if terms else ""


def term_keys(terms: Iterable[Term]) -> list[str]:
    """Return the distinct keys, sorted."""
    return sorted({t.key for t in terms})


def term_categories(terms: Iterable[Term]) -> list[str]:
    """Return the distinct categories, sorted."""
    return sorted({c for t in terms for c in t.categories})


def term_tree_numbers(terms: Iterable[Term]) -> list[str]:
    """Return the distinct tree numbers, sorted."""
    return sorted({tn for t in terms for tn in t.tree_numbers})


def format_terms(terms: Iterable[Term]) -> str:
    """Return the terms one per line."""
    return "\n".join(str(t) for t in terms)


class PriorityQueue:
    """Bounded queue keeping the highest-valued terms, highest first."""

    def __init__(self, capacity: int) -> None:
        self.capacity = capacity
        self._terms: list[Term] = []

    def __len__(self) -> int:
        return len(self._terms)

    def insert(self, term: Term) -> None:
        """Insert the term after any term of equal or higher value."""
        position = next(
            (i for i, t in enumerate(self._terms) if term.value > t.value),
            len(self._terms),
        )
        self._terms.insert(position, term)
        del self._terms[max(self.capacity, 0):]

    def terms(self) -> list[Term]:
        """Return the queued terms, highest value first."""
        return list(self._terms)