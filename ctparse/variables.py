"""Variable schema and the catalog of known criterion variables."""

from __future__ import annotations

import csv
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator

from ctparse.dictionary import PhraseDictionary, customize_slash

ZERO = "0"
COMMENT = "#"
FIELD_SEP = "|"


class VariableType(str, Enum):
    """Type of a criterion variable."""

    UNKNOWN = ""
    BOOLEAN = "boolean"
    NOMINAL = "nominal"
    ORDINAL = "ordinal"
    NUMERICAL = "numerical"

    def __str__(self) -> str:
        return self.value


def parse_type(s: str) -> VariableType:
    """Convert a string to a variable type."""
    s = s.strip().lower()
    if s in ("boolean", "nominal", "ordinal", "numerical"):
        return VariableType(s)
    return VariableType.UNKNOWN


def parse_types(s: str) -> list[VariableType]:
    """Convert a comma-separated string to variable types."""
    return [parse_type(a) for a in s.split(",")]


def format_types(types: Iterable[VariableType]) -> str:
    """Join variable types with commas."""
    return ",".join(str(t) for t in types)


@dataclass
class Variable:
    """A criterion variable."""

    id: str
    kind: VariableType
    name: str
    display: str
    value_range: list[str] | None = None
    num_range: list[float] = field(default_factory=list)
    unit_name: str = ""

    def in_range(self, value: float) -> bool:
        """Return True if the value is in range or no range is specified."""
        if not self.num_range or self.kind != VariableType.NUMERICAL:
            return True
        return self.num_range[0] <= value <= self.num_range[1]


class VariableCatalog:
    """Collection of variables searchable by their aliases."""

    def __init__(self) -> None:
        self._ids: dict[str, str] = {}
        self._variables: dict[str, Variable] = {}
        self._questions: dict[str, str] = {}
        self._dictionary = PhraseDictionary()

    def __len__(self) -> int:
        return len(self._variables)

    def add(
        self,
        var_id: str,
        kind: VariableType,
        name: str,
        display: str,
        aliases: Iterable[str],
        bounds: list[str] | None,
        unit_name: str,
        question: str,
    ) -> None:
        """Add a variable; raise ValueError on duplicates or bad bounds."""
        if var_id in self._variables:
            raise ValueError(f"duplicate variable id: {var_id} (name: {name})")
        if name in self._ids:
            raise ValueError(f"duplicate variable name: {name} (id: {var_id})")
        num_range: list[float] = []
        if kind == VariableType.NUMERICAL and bounds is not None and len(bounds) == 2:
            num_range = [float(bounds[0]), float(bounds[1])]
            bounds = None
        self._variables[var_id] = Variable(
            var_id, kind, name, display, bounds, num_range, unit_name
        )
        self._ids[name] = var_id
        self._questions[var_id] = question
        for alias in aliases:
            self._dictionary.put(name, *customize_slash(alias))

    def variable(self, var_id: str) -> Variable | None:
        """Return the variable with the id, or None."""
        return self._variables.get(var_id)

    def id_of(self, name: str) -> str | None:
        """Return the id of the variable name, or None."""
        return self._ids.get(name)

    def question(self, var_id: str) -> str:
        """Return the question associated with the variable id."""
        return self._questions.get(var_id, "")

    def match(self, candidate: str) -> bool:
        """Return True if the candidate is, or begins, a variable alias."""
        return self._dictionary.match(candidate)

    def get(self, candidate: str) -> str | None:
        """Return the variable name for the candidate alias, or None."""
        return self._dictionary.get(candidate)


def _data_lines(lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        if line.strip() and not line.startswith(COMMENT):
            yield line


def load_variables(path: str | Path) -> VariableCatalog:
    """Load a variable catalog from a CSV file."""
    catalog = VariableCatalog()
    with open(path, newline="", encoding="utf-8") as f:
        for row in csv.reader(_data_lines(f)):
            if len(row) < 8:
                raise ValueError(f"{path}: too few columns, at least 8 needed: {row}")
            try:
                catalog.add(
                    row[0],
                    parse_type(row[1]),
                    row[2],
                    row[3],
                    row[4].split(FIELD_SEP),
                    row[5].split(FIELD_SEP),
                    row[6],
                    row[7],
                )
            except ValueError as err:
                raise ValueError(f"{path}: {err}") from err
    return catalog


def default_catalog() -> VariableCatalog:
    """Return the built-in variable catalog."""
    c = VariableCatalog()
    num = VariableType.NUMERICAL
    c.add(ZERO, num, "_", "", [], None, "", "")
    c.add("102", VariableType.ORDINAL, "nyha", "", ["nyha", "new york heart association"],
          ["1", "2", "3", "4"], "", "")
    c.add("100", VariableType.ORDINAL, "ecog", "", ["ecog", "eastern cooperative oncology group"],
          ["0", "1", "2", "3", "4"], "", "")
    entries = [
        ("200", "age", ["age", "ages", "aged"], ""),
        ("201", "height", ["height*"], ""),
        ("202", "weight", ["weigh*", "body weigh*"], ""),
        ("203", "bmi", ["bmi", "body mass index"], ""),
        ("206", "life_expectancy", ["life expectancy"], ""),
        ("300", "sbp", ["systolic blood pressure", "systolic", "sbp"], ""),
        ("301", "dbp", ["diastolic blood pressure", "diastolic", "dbp"], ""),
        ("302", "sbp/dbp", ["SBP/DBP", "blood pressure", "bp"], ""),
        ("400", "a1c", ["a1c", "hba1c", "hgba1c", "hemoglobin a1c"], ""),
        ("403", "hb_count", ["hemoglobin count", "hb count"], ""),
        ("404", "wbc", ["wbc", "white blood cell count", "white blood cell",
                        "leukocytes", "leucocytes"], ""),
        ("405", "platelet_count", ["platelet count", "platelet"], ""),
        ("408", "anc", ["absolute neutrophil count"], ""),
        ("411", "ast", ["aspartate aminotransferase", "ast", "sgot"], ""),
        ("412", "alt", ["alanine aminotransferase", "alt", "sgpt"], ""),
        ("413", "ast/alt", ["ast/alt", "sgot/sgpt",
                            "aspartate aminotransferase or alanine aminotransferase"], ""),
        ("414", "ast/alt_ratio", ["ast/alt ratio", "sgot/sgpt ratio"], ""),
        ("500", "total_cholesterol", ["plasma total cholesterol", "total cholesterol",
                                      "serum cholesterol", "cholesterol"], ""),
        ("501", "ldl_cholesterol", ["ldl", "ldl-cholesterol", "ldl cholesterol", "ldl-c",
                                    "low-density lipoprotein cholesterol"], ""),
        ("505", "fasting_triglyceride_level", ["fasting triglyceride level*",
                                               "fasting triglyceride*",
                                               "fasting plasma triglyceride*",
                                               "fasting serum triglyceride*"], ""),
        ("506", "triglyceride_level", ["triglyceride level*", "triglyceride*",
                                       "plasma triglyceride*", "serum triglyceride*"], ""),
        ("600", "karnofsky_score", ["karnofsky", "karnofsky performance score", "lansky",
                                    "karnofsky score", "kps"], ""),
        ("904", "pf_ratio", ["p/f ratio", "pao2/fio2", "pao2/fio2 ratio"], "mmhg"),
    ]
    for var_id, name, aliases, unit in entries:
        c.add(var_id, num, name, "", aliases, None, unit, "")
    return c


_active: dict[str, VariableCatalog] = {"catalog": default_catalog()}


def get_catalog() -> VariableCatalog:
    """Return the active variable catalog."""
    return _active["catalog"]


def set_catalog(catalog: VariableCatalog) -> VariableCatalog:
    """Replace the active variable catalog and return the one it replaced.

    Raises TypeError if the argument is not a VariableCatalog.
    """
    if not isinstance(catalog, VariableCatalog):
        raise TypeError(f"expected a VariableCatalog, got {type(catalog).__name__}")
    previous = _active["catalog"]
    _active["catalog"] = catalog
    return previous