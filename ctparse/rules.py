"""Grammar production rules for the criteria parser."""

from __future__ import annotations

from dataclasses import dataclass, field

from ctparse.items import ItemType, parse_item_type

CRITERION_RULES = """

#nonterminals:

S -> C
C -> C X | R
X -> O R | R
R -> V A | A V | V
V -> V1 V2 | V1
V2 -> H V1
A -> L Y | Y Y | B W | B B | B | E
E -> E N | E Z | N
Z -> O N
B -> T L | L T
W -> O B
L -> N U | N
Y -> D L

#terminals:

O -> or | and | punctuation
V1 -> variable | unknown
T -> comparison
N -> number
U -> unit
D -> range | and
H -> slash

"""

TEST_RULES = """

#nonterminals:

S -> A B | B C
A -> B A
B -> C C
C -> A B

#terminals:

A -> or
B -> and
C -> or

"""


@dataclass(frozen=True)
class Element:
    """Right-hand side of a production, with the span it covers in a parse."""

    left: str
    right: str = ""
    begin: int = 0
    split: int = 0
    end: int = 0

    def is_unary(self) -> bool:
        """Return True if the element has a single symbol."""
        return not self.right


@dataclass
class Rules:
    """Production rules indexed by their right-hand sides."""

    terminal_rules: dict[ItemType, set[str]] = field(default_factory=dict)
    unary_rules: dict[Element, set[str]] = field(default_factory=dict)
    binary_rules: dict[Element, set[str]] = field(default_factory=dict)
    non_terminals: set[str] = field(default_factory=set)


def load_rules(text: str) -> Rules:
    """Load production rules; raise ValueError on an empty alternative."""
    rules = Rules()
    section = None
    for line in text.split("\n"):
        line = line.strip()
        if line.startswith("#terminals"):
            section = "terminals"
        elif line.startswith("#nonterminals"):
            section = "nonterminals"
        if section is None or not line or line.startswith("#"):
            continue
        parts = line.split("->")
        if len(parts) != 2:
            continue
        head = parts[0].strip()
        alternatives = [a.strip() for a in parts[1].split("|")]
        rules.non_terminals.add(head)
        if section == "terminals":
            for alt in alternatives:
                rules.terminal_rules.setdefault(parse_item_type(alt), set()).add(head)
            continue
        for alt in alternatives:
            symbols = alt.split()
            if not symbols:
                raise ValueError(f"cannot read production rule: {line}")
            if len(symbols) == 1:
                element = Element(symbols[0])
                rules.unary_rules.setdefault(element, set()).add(head)
                rules.non_terminals.add(element.left)
            else:
                element = Element(symbols[0], symbols[1])
                rules.binary_rules.setdefault(element, set()).add(head)
                rules.non_terminals.update((element.left, element.right))
    return rules