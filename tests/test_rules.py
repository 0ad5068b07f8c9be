import pytest

from ctparse.items import ItemType
from ctparse.rules import CRITERION_RULES, TEST_RULES, Element, load_rules


def test_test_rules_terminals():
    rules = load_rules(TEST_RULES)
    assert rules.terminal_rules == {ItemType.OR: {"A", "C"}, ItemType.AND: {"B"}}


def test_test_rules_binary():
    rules = load_rules(TEST_RULES)
    assert rules.binary_rules == {
        Element("A", "B"): {"S", "C"},
        Element("B", "C"): {"S"},
        Element("B", "A"): {"A"},
        Element("C", "C"): {"B"},
    }
    assert rules.unary_rules == {}
    assert rules.non_terminals == {"S", "A", "B", "C"}


def test_criterion_rules_unary():
    rules = load_rules(CRITERION_RULES)
    assert rules.unary_rules[Element("C")] == {"S"}
    assert rules.unary_rules[Element("R")] == {"C", "X"}
    assert rules.binary_rules[Element("V1", "V2")] == {"V"}


def test_criterion_rules_terminals():
    rules = load_rules(CRITERION_RULES)
    assert rules.terminal_rules[ItemType.AND] == {"O", "D"}
    assert rules.terminal_rules[ItemType.UNKNOWN] == {"V1"}
    assert rules.terminal_rules[ItemType.SLASH] == {"H"}
    assert "V2" in rules.non_terminals


def test_element_is_unary():
    assert Element("A").is_unary()
    assert not Element("A", "B").is_unary()
    assert Element("A") == Element("A", "", 0, 0, 0)


def test_empty_alternative_raises():
    with pytest.raises(ValueError):
        load_rules("#nonterminals:\nS -> A |\n")


def test_lines_outside_sections_ignored():
    rules = load_rules("S -> A B\n")
    assert rules.binary_rules == {}
    assert rules.non_terminals == set()


def test_malformed_lines_ignored():
    rules = load_rules("#nonterminals:\nS A B\nS -> A -> B\nS -> A B\n")
    assert rules.binary_rules == {Element("A", "B"): {"S"}}