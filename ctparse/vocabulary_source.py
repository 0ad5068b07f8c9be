"""Vocabulary sources."""

from __future__ import annotations

from enum import Enum


class VocabularySource(Enum):
    """Origin of a vocabulary."""

    UNKNOWN = 0
    MESH = 1
    UMLS = 2

    def __str__(self) -> str:
        return {VocabularySource.MESH: "mesh", VocabularySource.UMLS: "umls"}.get(
            self, "unknown"
        )


def parse_source(s: str) -> VocabularySource:
    """Convert a string to a vocabulary source."""
    return {"mesh": VocabularySource.MESH, "umls": VocabularySource.UMLS}.get(
        s.strip().lower(), VocabularySource.UNKNOWN
    )