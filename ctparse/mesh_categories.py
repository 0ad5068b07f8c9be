"""Top-level categories of the MeSH descriptor hierarchy."""

from __future__ import annotations

from typing import Iterable

from ctparse.taxonomy_node import letter_prefix

_CATEGORY_TABLE = """
A Anatomy
B Organisms
C Diseases
D Chemicals and Drugs
E Analytical, Diagnostic and Therapeutic Techniques and Equipment
F Psychiatry and Psychology
G Biological Sciences
H Physical Sciences
I Anthropology, Education, Sociology and Social Phenomena
J Technology and Food and Beverages
K Humanities
L Information Science
M Persons
N Health Care
V Publication Characteristics
Z Geographic Locations
"""

CATEGORIES: dict[str, str] = dict(
    line.split(" ", 1) for line in _CATEGORY_TABLE.strip().splitlines()
)

_CLINICAL_LETTERS = frozenset("ABCDEFGMV")

CLINICAL_CATEGORIES: dict[str, str] = {
    letter: title for letter, title in CATEGORIES.items() if letter in _CLINICAL_LETTERS
}

ANIMAL_CODES: dict[str, str] = dict([("C22", "Animal Diseases")])

ANIMALS: tuple[str, ...] = tuple(
    "Canine Canid Bovine Equid Feline Duck Gallid Woodchuck Cercopithecine Simian Suid".split()
)


def get_top_code(tree_number: str) -> str:
    """Return the top code of a tree number."""
    return tree_number.partition(".")[0]


def get_top_codes(tree_numbers: Iterable[str]) -> set[str]:
    """Return the top codes of the tree numbers."""
    return set(map(get_top_code, tree_numbers))


def get_categories(tree_numbers: Iterable[str]) -> set[str]:
    """Return the categories of the tree numbers."""
    return set(map(letter_prefix, tree_numbers))


def has_clinical_category(tree_numbers: Iterable[str]) -> bool:
    """Return True if any tree number is in a clinical category."""
    return not get_categories(tree_numbers).isdisjoint(CLINICAL_CATEGORIES)


def has_animal_code(tree_numbers: Iterable[str]) -> bool:
    """Return True if any top code is an animal code."""
    return not get_top_codes(tree_numbers).isdisjoint(ANIMAL_CODES)


def trim(tree_numbers: Iterable[str]) -> list[str]:
    """Return the tree numbers in clinical categories, in their order."""
    return [tn for tn in tree_numbers if letter_prefix(tn) in CLINICAL_CATEGORIES]


def is_animal_concept(name: str) -> bool:
    """Return True if the concept name mentions an animal."""
    return any(animal in name for animal in ANIMALS)