"""Reading of crop, management, meteo list and simulation list files."""

from __future__ import annotations

import os
import re
from dataclasses import asdict, dataclass, field
from typing import Any, Sequence, Union

from .crop import Crop, CropTables
from .parameters import CropParameters, ManagementParameters
from .tables import AfgenTable, DateEntry, DateTable

PathLike = Union[str, "os.PathLike[str]"]

WEATHER_TYPES = ("TMIN", "TMAX", "RADIATION", "RAIN", "WINDSPEED", "VAPOUR")

_MAX_WORD = 98
_MAX_DATE = 5

_WORD = re.compile(r"\S+")
_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INT = re.compile(r"\s*([+-]?\d+)")
_DATE = re.compile(r"\s*([+-]?\d+)-\s*([+-]?\d+)")


class ConfigError(Exception):
    """An input file is missing or does not have the expected content."""


@dataclass
class MeteoSpec:
    """One block of a meteo list: mask file, years and the weather files."""

    mask: str
    start_year: int
    end_year: int
    seasons: int
    files: dict[str, str] = field(default_factory=dict)
    variables: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SimulationSpec:
    """One line of a simulation list: input files, start date and outputs."""

    crop_file: str
    soil_file: str
    management_file: str
    site_file: str
    start: str
    emergence: bool
    output_daily: str
    output_annual: str
    index: int


@dataclass
class _Management(ManagementParameters):
    """Management parameters with fertilizer and irrigation tables."""

    n_fert_table: DateTable = field(default_factory=DateTable)
    p_fert_table: DateTable = field(default_factory=DateTable)
    k_fert_table: DateTable = field(default_factory=DateTable)
    irrigation: DateTable = field(default_factory=DateTable)


def _read_text(path: PathLike) -> str:
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            return handle.read()
    except OSError as exc:
        raise ConfigError(f"Cannot open input file {path}.") from exc


def _read_lines(path: PathLike) -> list[str]:
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            return handle.readlines()
    except OSError as exc:
        raise ConfigError(f"Cannot open input file {path}.") from exc


def _is_skipped(line: str, leaders: str) -> bool:
    return not line or line[0] in leaders


def _scan(text: str, spec: str) -> list[Any]:
    """Read whitespace-separated fields by kind: s string, d integer, f float.

    Stops at the first field that cannot be read.
    """
    values: list[Any] = []
    pos = 0
    for kind in spec:
        if kind == "s":
            match = _WORD.search(text, pos)
            if match is None:
                break
            values.append(match.group())
        elif kind == "d":
            match = _INT.match(text, pos)
            if match is None:
                break
            values.append(int(match.group(1)))
        else:
            match = _FLOAT.match(text, pos)
            if match is None:
                break
            values.append(float(match.group(1)))
        pos = match.end()
    return values


def _check_word(word: str, path: PathLike) -> None:
    if len(word) > _MAX_WORD:
        raise ConfigError(f"Check the input file {path}: very long strings.")


def _value_after(text: str, pos: int, name: str, path: PathLike) -> tuple[float, int]:
    eq = text.find("=", pos)
    if eq < 0:
        raise ConfigError(f"No '=' after {name} in file {path}.")
    match = _FLOAT.match(text, eq + 1)
    if match is None:
        raise ConfigError(f"No value for {name} in file {path}.")
    return float(match.group(1)), match.end()


def read_parameters(path: PathLike, names: Sequence[str]) -> dict[str, float]:
    """Return the values written as ``NAME = value`` for the names present.

    Each name is looked up from the start of the file; its first occurrence
    as a whitespace-separated word counts.
    """
    text = _read_text(path)
    found: dict[str, float] = {}
    for name in names:
        pos = 0
        while (word_match := _WORD.search(text, pos)) is not None:
            word = word_match.group()
            _check_word(word, path)
            pos = word_match.end()
            if word == name:
                found[name], _ = _value_after(text, pos, name, path)
                break
    return found


def _read_parameters_in_order(path: PathLike, names: Sequence[str]) -> list[float]:
    """Read all ``names`` in one pass; each must follow the one before it."""
    text = _read_text(path)
    values: list[float] = []
    pos = 0
    while (word_match := _WORD.search(text, pos)) is not None:
        word = word_match.group()
        _check_word(word, path)
        pos = word_match.end()
        if len(values) < len(names) and word == names[len(values)]:
            value, pos = _value_after(text, pos, word, path)
            values.append(value)
    if len(values) != len(names):
        raise ConfigError(f"Something wrong with the Management variables in file {path}.")
    return values


def read_tables(path: PathLike, names: Sequence[str]) -> dict[str, AfgenTable]:
    """Return the interpolation tables present in the file.

    A table starts on a line ``NAME = x, y,`` and continues on the following
    lines that hold an ``x, y`` pair.
    """
    lines = _read_lines(path)
    tables: dict[str, AfgenTable] = {}
    for name in names:
        for index, line in enumerate(lines):
            if _is_skipped(line, "* \n\r"):
                continue
            first = _WORD.search(line)
            if first is None or first.group() != name:
                continue
            head = _scan(line, "ssfsf")
            if len(head) < 5:
                raise ConfigError(f"Table {name} in file {path} has no first point.")
            points = [(head[2], head[4])]
            for follow in lines[index + 1:]:
                row = _scan(follow, "fsf")
                if len(row) != 3:
                    break
                points.append((row[0], row[2]))
            tables[name] = AfgenTable(points)
            break
    return tables


def _date_entry(date_string: str, amount: float, path: PathLike) -> DateEntry:
    if len(date_string) > _MAX_DATE:
        raise ConfigError(f"Date {date_string!r} in file {path} is too long.")
    match = _DATE.match(date_string)
    if match is None:
        raise ConfigError(f"Date {date_string!r} in file {path} is not month-day.")
    return DateEntry(month=int(match.group(1)), day=int(match.group(2)), amount=amount)


def read_date_tables(path: PathLike, names: Sequence[str]) -> dict[str, DateTable]:
    """Return the date tables present in the file.

    A table starts on a line ``NAME = MM-DD amount`` and continues on the
    following lines that hold ``MM-DD amount``.
    """
    lines = _read_lines(path)
    tables: dict[str, DateTable] = {}
    for name in names:
        for index, line in enumerate(lines):
            if _is_skipped(line, "* \n"):
                continue
            first = _WORD.search(line)
            if first is None or first.group() != name:
                continue
            head = _scan(line, "sssf")
            if len(head) < 4:
                raise ConfigError(f"Table {name} in file {path} has no first entry.")
            entries = [_date_entry(head[2], head[3], path)]
            for follow in lines[index + 1:]:
                row = _scan(follow, "sf")
                if len(row) != 2:
                    break
                entries.append(_date_entry(row[0], row[1], path))
            tables[name] = DateTable(entries)
            break
    return tables


def load_crop(
    path: PathLike, parameter_names: Sequence[str], table_names: Sequence[str]
) -> Crop:
    """Read a crop file into a new crop that has not been sown yet.

    Up to two parameters and one table may be missing; missing parameters
    read as zero.
    """
    names = list(parameter_names)
    found = read_parameters(path, names)
    if len(found) not in (len(names), len(names) - 2):
        raise ConfigError(f"Something wrong with the Crop variables in file {path}.")
    try:
        prm = CropParameters.from_values([found.get(name, 0.0) for name in names])
    except ValueError as exc:
        raise ConfigError(f"Crop variables in file {path}: {exc}") from exc

    tnames = list(table_names)
    tables = read_tables(path, tnames)
    if len(tables) not in (len(tnames), len(tnames) - 1):
        raise ConfigError(f"Something wrong with the Crop tables in file {path}.")
    try:
        crop_tables = CropTables.from_list(
            [tables.get(name) for name in tnames], prm.identify_anthesis
        )
    except ValueError as exc:
        raise ConfigError(f"Crop tables in file {path}: {exc}") from exc

    return Crop(prm=prm, tables=crop_tables)


def load_management(
    path: PathLike, parameter_names: Sequence[str], table_names: Sequence[str]
) -> _Management:
    """Read a management file.

    The parameters must appear in the given order. ``table_names`` names the
    N, P and K fertilizer tables and the irrigation table, all required.
    """
    values = _read_parameters_in_order(path, list(parameter_names))
    try:
        params = ManagementParameters.from_values(values)
    except ValueError as exc:
        raise ConfigError(f"Management variables in file {path}: {exc}") from exc

    tnames = list(table_names)
    if len(tnames) != 4:
        raise ConfigError("management needs four tables: N, P, K fertilizer and irrigation")
    tables = read_date_tables(path, tnames)
    if len(tables) != len(tnames):
        raise ConfigError(f"Something wrong with the Management tables in file {path}.")

    n_name, p_name, k_name, irrigation_name = tnames
    return _Management(
        **asdict(params),
        n_fert_table=tables[n_name],
        p_fert_table=tables[p_name],
        k_fert_table=tables[k_name],
        irrigation=tables[irrigation_name],
    )


def read_meteo_list(path: PathLike) -> list[MeteoSpec]:
    """Read a meteo list.

    Each block is a line ``directory start_year end_year seasons mask``
    followed by one line per weather type: ``file TYPE variable``. A comment
    line among those takes the place of a type.
    """
    lines = iter(_read_lines(path))
    specs: list[MeteoSpec] = []
    for line in lines:
        if _is_skipped(line, "* \n"):
            continue
        head = _scan(line, "sddds")
        if len(head) < 5:
            raise ConfigError(f"Incomplete meteo line in {path}: {line.strip()!r}")
        directory, start_year, end_year, seasons, mask = head
        spec = MeteoSpec(mask=mask, start_year=start_year, end_year=end_year, seasons=seasons)
        for _ in WEATHER_TYPES:
            entry = next(lines, None)
            if entry is None:
                raise ConfigError("Missing meteo types")
            if _is_skipped(entry, "* \n"):
                continue
            row = _scan(entry, "sss")
            if len(row) < 3:
                raise ConfigError(f"Incomplete meteo type line in {path}: {entry.strip()!r}")
            filename, kind, varname = row
            if kind not in WEATHER_TYPES:
                raise ConfigError(f"Unknown meteo type {kind}")
            spec.files[kind] = directory + filename
            spec.variables[kind] = varname
        specs.append(spec)
    return specs


def read_simulation_list(path: PathLike) -> list[SimulationSpec]:
    """Read a simulation list.

    Each line holds a directory, the crop, soil, management and site files,
    the start date, the emergence flag (1 at emergence, 0 at sowing) and the
    daily and annual output files.
    """
    specs: list[SimulationSpec] = []
    for line in _read_lines(path):
        if _is_skipped(line, "* \n"):
            continue
        row = _scan(line, "ssssssdss")
        if len(row) < 9:
            raise ConfigError(f"Incomplete simulation line in {path}: {line.strip()!r}")
        directory, crop, soil, management, site, start, emergence, daily, annual = row
        specs.append(
            SimulationSpec(
                crop_file=directory + crop,
                soil_file=directory + soil,
                management_file=directory + management,
                site_file=directory + site,
                start=start,
                emergence=bool(emergence),
                output_daily=daily,
                output_annual=annual,
                index=len(specs),
            )
        )
    return specs


def is_sowing_day(date_string: str, month: int, day: int, year: int, end_year: int) -> bool:
    """Return whether the date ``MM-DD`` is the given day, within ``end_year``.

    ``month`` counts from 1.
    """
    match = _DATE.match(date_string)
    if match is None:
        raise ConfigError(f"Sowing date {date_string!r} is not month-day.")
    return (
        month == int(match.group(1))
        and day == int(match.group(2))
        and year <= end_year
    )