"""Word-level phrase dictionary mapping aliases to canonical names."""

from __future__ import annotations

from dataclasses import dataclass, field

_WILDCARD = "*"


@dataclass
class _TrieNode:
    children: dict[str, _TrieNode] = field(default_factory=dict)
    stems: dict[str, _TrieNode] = field(default_factory=dict)
    name: str | None = None


def _words(phrase: str) -> list[str]:
    return phrase.lower().split()


def customize_slash(alias: str) -> list[str]:
    """Return the alias together with its variants spaced around slashes."""
    variants = [alias]
    if "/" in alias:
        for sep in (" / ", "/ ", " /"):
            variant = " ".join(alias.replace("/", sep).split())
            if variant not in variants:
                variants.append(variant)
    return variants


class PhraseDictionary:
    """Dictionary of multi-word aliases.

    An alias word ending in ``*`` matches any word that starts with the
    part before the star.
    """

    def __init__(self) -> None:
        self._root = _TrieNode()

    def put(self, name: str, *aliases: str) -> None:
        """Register the aliases as names for ``name``."""
        for alias in aliases:
            words = _words(alias)
            if not words:
                continue
            node = self._root
            for word in words:
                if word.endswith(_WILDCARD):
                    node = node.stems.setdefault(word.rstrip(_WILDCARD), _TrieNode())
                else:
                    node = node.children.setdefault(word, _TrieNode())
            node.name = name

    def _walk(self, candidate: str) -> list[_TrieNode]:
        words = _words(candidate)
        if not words:
            return []
        nodes = [self._root]
        for word in words:
            reached = []
            for node in nodes:
                child = node.children.get(word)
                if child is not None:
                    reached.append(child)
                reached.extend(
                    child for stem, child in node.stems.items() if word.startswith(stem)
                )
            nodes = reached
            if not nodes:
                break
        return nodes

    def match(self, candidate: str) -> bool:
        """Return True if the candidate is an alias or the beginning of one."""
        return bool(self._walk(candidate))

    def get(self, candidate: str) -> str | None:
        """Return the name registered for the candidate, or None."""
        for node in self._walk(candidate):
            if node.name is not None:
                return node.name
        return None