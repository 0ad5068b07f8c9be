"""Eligibility criterion records and their parsed relations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from ctparse.relation import Relation, relations_to_json


@dataclass
class Criterion:
    """A raw criterion text with the relations parsed from it."""

    text: str
    score: float = 0.0
    relations: list[Relation] = field(default_factory=list)
    cluster_id: int = 0
    cluster_topic: str = ""

    def names(self) -> str:
        """Return the relation names joined by spaces."""
        if not self.relations:
            return ""
        if len(self.relations) == 1:
            return self.relations[0].name
        return " ".join([self.relations[0].name, *(r.name for r in self.relations)])

    def to_json(self) -> str:
        """Return the relations as a JSON array."""
        return relations_to_json(self.relations)

    def contains(self, criteria: Iterable[Criterion]) -> bool:
        """Return True if an equal criterion is among the criteria."""
        return any(self == c for c in criteria)

    def __str__(self) -> str:
        return self.text


def criteria_relations(criteria: Iterable[Criterion]) -> list[Relation]:
    """Return all relations of the criteria."""
    return [r for c in criteria for r in c.relations]


def format_criteria(criteria: Iterable[Criterion]) -> str:
    """Return the criteria texts, each followed by a newline."""
    return "".join(f"{c}\n" for c in criteria)