"""Extraction and splitting of eligibility criteria text."""

from __future__ import annotations

import re

_HEADER_TAIL = r"(?: *:| criteria(?:[^:\n]*?:| *\n))"

_DELETE_CRITERION = re.compile(
    r"([^\n]+meet inclusion criteria|[^\n]*inclusion/exclusion criteria)\W? *(\n|\Z)",
    re.IGNORECASE | re.ASCII,
)
_MATCH_INCLUSIONS = re.compile(
    r"inclusions?" + _HEADER_TAIL + r"(.*?)(?:[^\n]*\bexclusions?" + _HEADER_TAIL + r"|\Z)",
    re.IGNORECASE | re.DOTALL | re.ASCII,
)
_MATCH_EXCLUSIONS = re.compile(
    r"exclusions?" + _HEADER_TAIL + r"(.*?)(?:[^\n]*\binclusions?" + _HEADER_TAIL + r"|\Z)",
    re.IGNORECASE | re.DOTALL | re.ASCII,
)
_TRIMMER = re.compile(r"^(\s*-\s*)?(\s*\d+\.?\s*)?", re.ASCII)
_MATCH_TABS = re.compile(
    r"the following(\s+criteria)?(\s*:)?\s*\n\s*(-|\d+\.|[a-z]\s)\s*", re.ASCII
)
_MATCH_TAB_LINE = re.compile(r"the following")
_MATCH_BULLET_LINE = re.compile(r"^\s*(-|\d+\.|[a-z]\s)\s*", re.ASCII)


def normalize(s: str) -> str:
    """Remove non-informative criteria such as "does not meet inclusion criteria"."""
    return _DELETE_CRITERION.sub("", s)


def _extract(s: str, pattern: re.Pattern[str]) -> list[str]:
    blocks = (m.group(1).strip() for m in pattern.finditer(s))
    return [b for b in blocks if b]


def extract_inclusion_criteria(s: str) -> list[str]:
    """Extract the blocks of inclusion criteria."""
    return _extract(s, _MATCH_INCLUSIONS)


def extract_exclusion_criteria(s: str) -> list[str]:
    """Extract the blocks of exclusion criteria."""
    return _extract(s, _MATCH_EXCLUSIONS)


def trim_criterion(s: str) -> str:
    """Remove leading bullets and numbering, and surrounding punctuation."""
    s = _TRIMMER.sub("", s, count=1)
    s = " ".join(s.split())
    return s.strip(' ,.;:/"')


def check_line(rule: str, header: str, found_tab: bool) -> tuple[str, str, bool]:
    """Attach bullet lines to a preceding "the following" header."""
    if found_tab and _MATCH_BULLET_LINE.search(rule):
        return f"{header} {trim_criterion(rule)}", header, found_tab
    if _MATCH_TAB_LINE.search(rule):
        return "", rule, True
    return rule, "", False


def split(s: str) -> list[str]:
    """Split an eligibility criteria block into individual criteria."""
    rules = s.split("\n\n")
    if not _MATCH_TABS.search(s):
        return rules
    header, found_tab = "", False
    result = []
    for rule in rules:
        rule, header, found_tab = check_line(rule, header, found_tab)
        if rule:
            result.append(rule)
    return result