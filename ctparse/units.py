"""Unit schema and the catalog of known measurement units."""

from __future__ import annotations

import csv
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from ctparse.dictionary import PhraseDictionary, customize_slash

ZERO = "0"
COMMENT = "#"
FIELD_SEP = "|"


@dataclass(frozen=True)
class Unit:
    """A measurement unit."""

    id: str
    name: str
    display: str
    variable_name: str = ""


class UnitCatalog:
    """Collection of units searchable by their aliases."""

    def __init__(self) -> None:
        self._ids: dict[str, str] = {}
        self._units: dict[str, Unit] = {}
        self._variables: dict[str, str] = {}
        self._dictionary = PhraseDictionary()

    def __len__(self) -> int:
        return len(self._units)

    def add(
        self,
        unit_id: str,
        name: str,
        display: str,
        aliases: Iterable[str],
        variable_name: str,
    ) -> None:
        """Add a unit; raise ValueError on a duplicate id or name."""
        if unit_id in self._units:
            raise ValueError(f"duplicate unit id: {unit_id} (name: {name})")
        if name in self._ids:
            raise ValueError(f"duplicate unit name: {name} (id: {unit_id})")
        self._ids[name] = unit_id
        self._units[unit_id] = Unit(unit_id, name, display, variable_name)
        if variable_name:
            self._variables[name] = variable_name
        for alias in aliases:
            self._dictionary.put(name, *customize_slash(alias))

    def unit(self, unit_id: str) -> Unit | None:
        """Return the unit with the id, or None."""
        return self._units.get(unit_id)

    def id_of(self, name: str) -> str | None:
        """Return the id of the unit name, or None."""
        return self._ids.get(name)

    def variable(self, name: str) -> str | None:
        """Return the variable uniquely associated with the unit name, or None."""
        return self._variables.get(name)

    def match(self, candidate: str) -> bool:
        """Return True if the candidate is, or begins, a unit alias."""
        return self._dictionary.match(candidate)

    def get(self, candidate: str) -> str | None:
        """Return the unit name for the candidate alias, or None."""
        return self._dictionary.get(candidate)


def _data_lines(lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        if line.strip() and not line.startswith(COMMENT):
            yield line


def load_units(path: str | Path) -> UnitCatalog:
    """Load a unit catalog from a CSV file."""
    catalog = UnitCatalog()
    with open(path, newline="", encoding="utf-8") as f:
        for row in csv.reader(_data_lines(f)):
            if len(row) < 5:
                raise ValueError(f"too few columns, at least 5 needed: {row}")
            try:
                catalog.add(row[0], row[1], row[2], row[3].split(FIELD_SEP), row[4])
            except ValueError as err:
                raise ValueError(f"{path}: {err}") from err
    return catalog


def default_catalog() -> UnitCatalog:
    """Return the built-in unit catalog."""
    c = UnitCatalog()
    entries = [
        ("100", "%", "%", ["%"], ""),
        ("200", "kg", "kg", ["kg", "kilograms"], "weight"),
        ("201", "g", "g", ["g", "grams"], ""),
        ("202", "mg", "mg", ["mg"], ""),
        ("203", "lb", "pound", ["lb", "lbs", "pound", "pounds"], "weight"),
        ("303", "day", "day", ["day*"], ""),
        ("304", "week", "week", ["week*"], ""),
        ("305", "month", "month*", ["month"], ""),
        ("306", "year", "year", ["year*"], ""),
        ("400", "ml/min", "ml/min", ["ml/min"], ""),
        ("401", "g/day", "g/day", ["g/day"], ""),
        ("403", "g/dl", "g/dl", ["g/dl"], ""),
        ("404", "ng/dl", "ng/dl", ["ng/dl"], ""),
        ("405", "ng/ml", "ng/ml", ["ng/ml"], ""),
        ("407", "mg/dl", "mg/dl", ["mg/dl"], ""),
        ("410", "cells/ul", "cells/ul", ["cells/ul", "/ul", "mm3"], ""),
        ("414", "mL/min/1.73_m2", "mL/min/1.73 m2", ["ml/min/1"], ""),
        ("416", "cells/l", "cells/L", ["cells/l", "/l"], ""),
        ("501", "cm", "cm", ["cm"], ""),
        ("502", "m", "m", ["m"], ""),
        ("600", "mmhg", "", ["mmhg"], ""),
        ("602", "kg/m2", "kg/m2",
         ["kg/m2", "kg/m^2", "kg/m²", "kilogram per meter square"], "bmi"),
        ("603", "uln", "uln",
         ["uln", "upper limit of normal", "upper limits of normal", "laboratory normal"], ""),
        ("604", "lln", "lln", ["lln", "lower limit of normal", "lower limits of normal"], ""),
    ]
    for unit_id, name, display, aliases, variable_name in entries:
        c.add(unit_id, name, display, aliases, variable_name)
    return c


_active: dict[str, UnitCatalog] = {"catalog": default_catalog()}


def get_catalog() -> UnitCatalog:
    """Return the active unit catalog."""
    return _active["catalog"]


def set_catalog(catalog: UnitCatalog) -> UnitCatalog:
    """Replace the active unit catalog and return the one it replaced.

    Raises TypeError if the argument is not a UnitCatalog.
    """
    if not isinstance(catalog, UnitCatalog):
        raise TypeError(f"expected a UnitCatalog, got {type(catalog).__name__}")
    previous = _active["catalog"]
    _active["catalog"] = catalog
    return previous