"""Criterion relations: boolean, categorical and numerical conditions on variables."""

from __future__ import annotations

import functools
import json
import math
import re
from dataclasses import dataclass, field
from typing import Any, Iterable

from ctparse import variables
from ctparse.variables import Variable, VariableType

_MISSING_ZERO = re.compile(r",00$")
_RADIX_COMMA = re.compile(r"^\d{1,2},\d$", re.ASCII)
_TIMES = re.compile(r"\s*(?:x|×)\s*")
_POWER_OF_TEN = re.compile(r"^10(?:\^|\*\*)?([-+]?\d+)$", re.ASCII)
_ROMAN = re.compile(r"^(x{0,3})(ix|iv|v?i{0,3})$", re.IGNORECASE)
_ROMAN_VALUES = {"i": 1, "v": 5, "x": 10}
_SUPERSCRIPTS = str.maketrans("⁰¹²³⁴⁵⁶⁷⁸⁹⁻⁺", "0123456789-+")
_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


@dataclass
class Limit:
    """Lower or upper bound of a numerical relation."""

    incl: bool = False
    value: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"incl": self.incl, "value": self.value}


@dataclass
class Relation:
    """A boolean, nominal, ordinal or numerical criterion."""

    id: str = ""
    name: str = ""
    display_name: str = ""
    unit: str = ""
    value: list[str] | None = None
    lower: Limit | None = None
    upper: Limit | None = None
    variable_type: VariableType = VariableType.UNKNOWN
    score: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Return the relation as a JSON-ready dictionary."""
        d: dict[str, Any] = {}
        if self.id:
            d["id"] = self.id
        d["name"] = self.name
        if self.unit:
            d["unit"] = self.unit
        if self.value:
            d["value"] = list(self.value)
        if self.lower is not None:
            d["lower"] = self.lower.to_dict()
        if self.upper is not None:
            d["upper"] = self.upper.to_dict()
        d["variableType"] = self.variable_type.value
        d["score"] = _json_number(self.score)
        return d

    def to_json(self) -> str:
        """Return the relation as a compact JSON string."""
        return _dumps(self.to_dict())

    def human_readable(self) -> str:
        """Return the relation in a human readable form."""
        if self.variable_type == VariableType.NUMERICAL:
            s = ""
            if self.lower is not None:
                s = self.display_name + (" ≥ " if self.lower.incl else " > ") + self.lower.value
            if self.upper is not None:
                if self.lower is not None:
                    s += " and " if self.lower.value < self.upper.value else " or "
                s += self.display_name + (" ≤ " if self.upper.incl else " < ") + self.upper.value
            if self.unit:
                s += " " + self.unit
            return s
        return _join([_title(v) for v in self.value or []], ", ", " or ")

    def set_variable_fields(self, variable: Variable) -> None:
        """Take the display name and type from the variable."""
        self.display_name = variable.display
        self.variable_type = variable.kind

    def set_unit_field(self, variable: Variable) -> None:
        """Take the unit from the variable's default unit."""
        self.unit = variable.unit_name

    def normalize(self, value_range: list[str] | None) -> None:
        """Make the relation content consistent with its variable type."""
        kind = self.variable_type
        if kind in (VariableType.BOOLEAN, VariableType.NOMINAL):
            self.lower = None
            self.upper = None
        elif kind == VariableType.ORDINAL:
            self._roman_to_arabic()
            if self.lower is not None or self.upper is not None:
                self.value = self._apply(value_range or [])
            self.lower = None
            self.upper = None
        elif kind == VariableType.NUMERICAL:
            if self.lower is not None or self.upper is not None:
                self.value = None

    def _roman_to_arabic(self) -> None:
        if self.value is not None:
            self.value = [_roman_to_arabic(a) for a in self.value]
        if self.lower is not None:
            self.lower.value = _roman_to_arabic(self.lower.value)
        if self.upper is not None:
            self.upper.value = _roman_to_arabic(self.upper.value)

    def _apply(self, value_range: Iterable[str]) -> list[str]:
        values = set()
        for a in value_range:
            try:
                values.add(int(a))
            except ValueError:
                continue
        if self.lower is not None:
            bound = _atoi(self.lower.value)
            values = {a for a in values if a > bound or (a == bound and self.lower.incl)}
        if self.upper is not None:
            bound = _atoi(self.upper.value)
            values = {a for a in values if a < bound or (a == bound and self.upper.incl)}
        return [str(a) for a in sorted(values)]

    def is_valid(self) -> bool:
        """Return False if the relation lacks an id or name, values or limits."""
        if not self.id or not self.name:
            return False
        if self.variable_type in (
            VariableType.BOOLEAN,
            VariableType.NOMINAL,
            VariableType.ORDINAL,
        ):
            return bool(self.value)
        if self.variable_type == VariableType.NUMERICAL:
            return self.lower is not None or self.upper is not None
        return True

    def negate(self, value_range: list[str] | None) -> None:
        """Negate the relation: swap and flip the limits, complement the values."""
        self.lower, self.upper = self.upper, self.lower
        if self.lower is not None:
            self.lower.incl = not self.lower.incl
        if self.upper is not None:
            self.upper.incl = not self.upper.incl
        if value_range is not None and self.value:
            self.value = sorted(set(value_range) - set(self.value))

    def transform(self) -> None:
        """Convert parsed limit values to valid literals.

        The score drops to zero if a literal cannot be inferred or if a
        boolean relation accepts both answers.
        """
        variable = variables.get_catalog().variable(self.id)
        if self.variable_type == VariableType.BOOLEAN:
            if self.id != variables.ZERO and _is_yes_no(self.value or []):
                self.score = 0.0
        elif self.variable_type == VariableType.NUMERICAL:
            for limit in (self.lower, self.upper):
                if limit is None:
                    continue
                try:
                    limit.value = _transform_value(variable, limit.value)
                except ValueError:
                    self.score = 0.0

    def split(self) -> list[Relation]:
        """Split a combination relation such as ``sbp/dbp`` into its parts."""
        names = self.name.split("/")
        if len(names) != 2:
            return [self]
        names = [n.strip() for n in names]
        catalog = variables.get_catalog()
        ids = [catalog.id_of(n) for n in names]
        if None in ids:
            return [self]
        parts = [
            Relation(
                id=i,
                name=n,
                unit=self.unit,
                variable_type=self.variable_type,
                score=self.score,
            )
            for i, n in zip(ids, names)
        ]
        for attr in ("lower", "upper"):
            limit = getattr(self, attr)
            if limit is None:
                continue
            values = [v.strip() for v in limit.value.split("/")]
            if len(values) == 1:
                values = values * 2
            if len(values) == 2:
                for part, v in zip(parts, values):
                    setattr(part, attr, Limit(limit.incl, v))
        return parts

    def less(self, other: Relation) -> bool:
        """Order two numerical relations of the same variable by their limits."""
        if self.id != other.id or self.variable_type != VariableType.NUMERICAL:
            return False
        mine = self.upper or self.lower
        theirs = other.lower or other.upper
        return (mine.value if mine else "") < (theirs.value if theirs else "")


def new_categorical(variable: Variable, answer: list[str], score: float) -> Relation:
    """Create a boolean, nominal or ordinal relation for the variable."""
    return Relation(
        id=variable.id,
        name=variable.name,
        display_name=variable.display,
        variable_type=variable.kind,
        value=answer,
        score=score,
    )


def _limit_from(d: dict[str, Any] | None) -> Limit | None:
    if d is None:
        return None
    return Limit(bool(d.get("incl", False)), str(d.get("value", "")))


def parse_relation(s: str) -> Relation:
    """Parse a JSON string to a relation."""
    d = json.loads(s)
    value = d.get("value")
    return Relation(
        id=d.get("id", ""),
        name=d.get("name", ""),
        unit=d.get("unit", ""),
        value=list(value) if value is not None else None,
        lower=_limit_from(d.get("lower")),
        upper=_limit_from(d.get("upper")),
        variable_type=VariableType(d.get("variableType", "")),
        score=float(d.get("score", 0)),
    )


def relations_to_json(relations: Iterable[Relation]) -> str:
    """Return the relations as a compact JSON array."""
    return _dumps([r.to_dict() for r in relations])


def set_score(relations: Iterable[Relation], score: float) -> None:
    """Set the confidence score of every relation."""
    for r in relations:
        r.score = score


def min_score(relations: Iterable[Relation]) -> float:
    """Return the lowest score, or 0 for no relations."""
    return min((r.score for r in relations), default=0.0)


def _compare(a: Relation, b: Relation) -> int:
    if a.id == b.id:
        if a.less(b):
            return -1
        return 1 if b.less(a) else 0
    return -1 if a.id < b.id else 1


def sort_relations(relations: list[Relation]) -> None:
    """Sort relations by id, then by their limits, in place."""
    relations.sort(key=functools.cmp_to_key(_compare))


def dedupe_relations(relations: list[Relation]) -> None:
    """Sort relations and drop adjacent ones with the same name, in place."""
    if len(relations) < 2:
        return
    sort_relations(relations)
    kept: list[Relation] = []
    for r in relations:
        if kept and kept[-1].name == r.name:
            continue
        kept.append(r)
    relations[:] = kept


def process_relations(relations: list[Relation]) -> None:
    """Split, type, normalize, validate and sort relations, in place."""
    relations[:] = [part for r in relations for part in r.split()]
    catalog = variables.get_catalog()
    for r in relations:
        v = catalog.variable(r.id)
        if v is not None:
            r.set_variable_fields(v)
            if not r.unit:
                r.set_unit_field(v)
    for r in relations:
        v = catalog.variable(r.id)
        if v is not None:
            r.normalize(v.value_range)
    relations[:] = [r for r in relations if r.is_valid()]
    sort_relations(relations)


def negate_relations(relations: Iterable[Relation]) -> None:
    """Negate every relation against its variable's value range."""
    catalog = variables.get_catalog()
    for r in relations:
        v = catalog.variable(r.id)
        r.negate(v.value_range if v is not None else None)


def transform_relations(relations: Iterable[Relation]) -> None:
    """Transform every relation."""
    for r in relations:
        r.transform()


def variable_ids(relations: Iterable[Relation]) -> list[str]:
    """Return the variable ids of the relations."""
    return [r.id for r in relations]


def _json_number(x: float) -> int | float:
    if math.isfinite(x) and x == int(x) and abs(x) < 1e21:
        return int(x)
    return x


def _dumps(obj: Any) -> str:
    s = json.dumps(obj, ensure_ascii=False, separators=(",", ":"))
    for char, escape in _HTML_ESCAPES.items():
        s = s.replace(char, escape)
    return s


def _atoi(s: str) -> int:
    try:
        return int(s)
    except ValueError:
        return 0


def _roman_to_arabic(s: str) -> str:
    m = _ROMAN.match(s)
    if not s or m is None:
        return s
    digits = [_ROMAN_VALUES[c] for c in s.lower()]
    total = 0
    for d, nxt in zip(digits, [*digits[1:], 0]):
        total += -d if d < nxt else d
    return str(total)


def _is_yes_no(values: Iterable[str]) -> bool:
    return {"yes", "no"} <= {v.strip().lower() for v in values}


def _title(s: str) -> str:
    return re.sub(r"(^|[^\w'])(\w)", lambda m: m.group(1) + m.group(2).upper(), s)


def _join(values: list[str], sep: str, last: str) -> str:
    if len(values) < 2:
        return "".join(values)
    return sep.join(values[:-1]) + last + values[-1]


def _scientific_multiplier(s: str) -> str:
    m = _POWER_OF_TEN.match(s.strip().translate(_SUPERSCRIPTS))
    if m is None:
        raise ValueError(f"unrecognized multiplier: {s!r}")
    return "e" + m.group(1)


def _parse_float(s: str) -> float:
    if not s or s != s.strip() or "_" in s:
        raise ValueError(f"invalid number: {s!r}")
    return float(s)


def _transform_value(variable: Variable | None, s: str) -> str:
    """Normalize commas and multipliers; raise ValueError if not a valid number."""
    if _RADIX_COMMA.match(s):
        s = s.replace(",", ".", 1)
    else:
        # For wbc, 100,00 may mean 10,000.
        if variable is None or variable.name != "wbc":
            s = _MISSING_ZERO.sub("000", s)
        s = s.replace(",", "")
    parts = _TIMES.split(s, maxsplit=1)
    if len(parts) == 2:
        s = parts[0] + _scientific_multiplier(parts[1])
    value = _parse_float(s)
    if variable is not None and not variable.in_range(value):
        raise ValueError(f"value {s!r} not in valid range of variable: {variable.name}")
    return s