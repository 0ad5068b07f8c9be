"""Eligibility criteria types."""

from __future__ import annotations

from enum import Enum


class CriteriaType(Enum):
    """Kind of eligibility criterion."""

    UNKNOWN = 0
    INCLUSION = 1
    EXCLUSION = 2

    def __str__(self) -> str:
        return {
            CriteriaType.INCLUSION: "inclusion",
            CriteriaType.EXCLUSION: "exclusion",
        }.get(self, "unknown")


def parse_type(s: str) -> CriteriaType:
    """Convert a string to an eligibility criteria type."""
    return {
        "inclusion": CriteriaType.INCLUSION,
        "exclusion": CriteriaType.EXCLUSION,
    }.get(s.lower(), CriteriaType.UNKNOWN)