"""Lexical items produced by the criteria parser and operations on them."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from ctparse import units


class ItemType(Enum):
    """Type of a parsed item."""

    UNKNOWN = "unknown"
    OR = "or"
    AND = "and"
    PUNCTUATION = "punctuation"
    SLASH = "slash"
    VARIABLE = "variable"
    COMPARISON = "comparison"
    RANGE = "range"
    NUMBER = "number"
    UNIT = "unit"

    def __str__(self) -> str:
        return self.value


def parse_item_type(s: str) -> ItemType:
    """Convert a string to an item type."""
    try:
        return ItemType(s)
    except ValueError:
        return ItemType.UNKNOWN


_NEGATIONS = {"<": "≥", "≤": ">", ">": "≤", "≥": "<"}


def _quote(s: str) -> str:
    return json.dumps(s, ensure_ascii=False)


@dataclass(frozen=True)
class Item:
    """A lexical item built from lexer tokens."""

    type: ItemType = ItemType.UNKNOWN
    value: str = ""

    def is_valid(self) -> bool:
        """Return True if the type is known and the value is not empty."""
        return self.type != ItemType.UNKNOWN and bool(self.value)

    def negate(self) -> Item:
        """Return the comparison item with the opposite meaning."""
        negated = _NEGATIONS.get(self.value)
        if negated is None:
            return Item()
        return Item(ItemType.COMPARISON, negated)

    def __str__(self) -> str:
        return f"{{type:{_quote(str(self.type))},value:{_quote(self.value)}}}"


_NAMED = (ItemType.VARIABLE, ItemType.UNIT)


def values_of(items: Iterable[Item] | None, item_type: ItemType) -> set[str]:
    """Return the values of the items of the given type."""
    if items is None:
        return set()
    return {i.value for i in items if i.type == item_type}


def fix_missing_variable(items: list[Item]) -> bool:
    """Prepend a variable inferred from the units if no variable is present.

    Returns True if the items hold a variable afterwards.
    """
    if values_of(items, ItemType.VARIABLE):
        return True
    catalog = units.get_catalog()
    candidates = {
        v for u in values_of(items, ItemType.UNIT) if (v := catalog.variable(u)) is not None
    }
    if len(candidates) == 1:
        items.insert(0, Item(ItemType.VARIABLE, candidates.pop()))
        return True
    return False


def trim_unknown_items(items: list[Item]) -> list[Item]:
    """Merge runs of unknown items, drop a leading unknown item, and drop
    unknown items next to variable or unit items."""
    if len(items) < 2:
        return list(items)
    merged: list[Item] = []
    for item in items:
        if merged and merged[-1].type == ItemType.UNKNOWN and item.type == ItemType.UNKNOWN:
            continue
        merged.append(item)
    trimmed = merged[1:] if merged[0].type == ItemType.UNKNOWN else merged
    if not trimmed:
        # Only unknown items: they collapse to one.
        return merged
    out = [trimmed[0]]
    for item in trimmed[1:]:
        last = out[-1]
        if last.type in _NAMED and item.type == ItemType.UNKNOWN:
            continue
        if last.type == ItemType.UNKNOWN and item.type in _NAMED:
            out[-1] = item
            continue
        out.append(item)
    return out


def trim_known_items(items: list[Item]) -> list[Item]:
    """Merge consecutive equal variable, unit and comparison items."""
    if len(items) < 2:
        return list(items)
    out = [items[0]]
    for item in items[1:]:
        last = out[-1]
        if last.type in (*_NAMED, ItemType.COMPARISON) and item == last:
            continue
        out.append(item)
    return out


def trim_range_items(items: list[Item]) -> list[Item]:
    """Drop range items that directly precede a comparison item."""
    if len(items) < 2:
        return list(items)
    followers = [*items[1:], None]
    return [
        item
        for item, nxt in zip(items, followers)
        if not (
            item.type == ItemType.RANGE
            and nxt is not None
            and nxt.type == ItemType.COMPARISON
        )
    ]


def trim_items(segments: list[list[Item]]) -> None:
    """Trim unknown, known and range items in every segment, in place."""
    segments[:] = [
        trim_range_items(trim_known_items(trim_unknown_items(s))) for s in segments
    ]


def sort_segments(segments: list[list[Item]]) -> None:
    """Sort segments by length, longest first, keeping ties in order."""
    segments.sort(key=len, reverse=True)


def format_items(items: Iterable[Item]) -> str:
    """Return the string representation of the items."""
    return "".join(str(i) for i in items)


def format_segments(segments: Iterable[Iterable[Item]]) -> str:
    """Return the string representation of the segments, one per line."""
    return "\n".join(format_items(s) for s in segments)