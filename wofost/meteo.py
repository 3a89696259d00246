"""Loading of gridded weather and site data from netCDF files."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np
from scipy.io import netcdf_file

from .config import WEATHER_TYPES, MeteoSpec
from .mathutil import leap_year

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

MISSING = -99.0
_MASK_VARIABLES = ("sow_a1", "HA", "tsumEA", "tsumAM")
_DECIMALS = {
    "TMIN": 1,
    "TMAX": 1,
    "RADIATION": 1,
    "RAIN": 2,
    "WINDSPEED": 1,
    "VAPOUR": 1,
}


class MeteoError(Exception):
    """A weather or mask file is missing, unreadable or inconsistent."""


@dataclass(eq=False)
class MeteoGrid:
    """Weather series and site data on a longitude by latitude grid.

    Two-dimensional arrays are indexed ``[lon, lat]``, weather series
    ``[lon, lat, day]``. Cells outside the harvested area hold -99.
    """

    latitude: np.ndarray
    longitude: np.ndarray
    years: np.ndarray
    days: np.ndarray
    sow_a1: np.ndarray
    ha: np.ndarray
    tsum_ea: np.ndarray
    tsum_am: np.ndarray
    tmin: np.ndarray
    tmax: np.ndarray
    radiation: np.ndarray
    rain: np.ndarray
    windspeed: np.ndarray
    vapour: np.ndarray
    angst_a: np.ndarray
    angst_b: np.ndarray
    altitude: np.ndarray

    @property
    def nlon(self) -> int:
        return int(self.ha.shape[0])

    @property
    def nlat(self) -> int:
        return int(self.ha.shape[1])

    @property
    def ntime(self) -> int:
        return int(self.years.shape[0])

    def series(self, kind: str) -> np.ndarray:
        """Return the weather array of a type such as ``"TMIN"``."""
        if kind not in WEATHER_TYPES:
            raise KeyError(f"unknown weather type {kind}")
        return getattr(self, kind.lower())


def build_calendar(start_year: int, length: int) -> list[tuple[int, int]]:
    """Return ``(year, day of year)`` for ``length`` days from 1 January of ``start_year``."""
    calendar: list[tuple[int, int]] = []
    year, day = start_year, 1
    for _ in range(length):
        calendar.append((year, day))
        day += 1
        if day > leap_year(year):
            year += 1
            day = 1
    return calendar


def round_to(value, decimals: int):
    """Round half up to ``decimals`` places; works on numbers and arrays."""
    scale = 10.0 ** decimals
    result = np.floor(np.asarray(value, dtype=np.float64) * scale + 0.5) / scale
    if result.ndim == 0:
        return float(result)
    return result


def _open(path: PathLike) -> netcdf_file:
    try:
        return netcdf_file(path, "r", mmap=False)
    except (OSError, TypeError, ValueError) as exc:
        raise MeteoError(f"Cannot open {path}: {exc}") from exc


def _coordinate(handle: netcdf_file, name: str, path: PathLike) -> np.ndarray:
    try:
        return np.array(handle.variables[name].data, dtype=np.float64).reshape(-1)
    except KeyError as exc:
        raise MeteoError(f"No variable {name} in {path}") from exc


def _grid(
    handle: netcdf_file, name: str, dims: Sequence[str], path: PathLike
) -> np.ndarray:
    try:
        variable = handle.variables[name]
    except KeyError as exc:
        raise MeteoError(f"No variable {name} in {path}") from exc
    var_dims = tuple(variable.dimensions)
    if sorted(var_dims) != sorted(dims):
        raise MeteoError(
            f"Variable {name} in {path} has dimensions {var_dims}, expected {tuple(dims)}"
        )
    data = np.array(variable.data, dtype=np.float32)
    return data.transpose([var_dims.index(d) for d in dims]).copy()


def _bounds(latitude: np.ndarray, longitude: np.ndarray) -> tuple[float, float, float, float]:
    return (
        float(latitude.min()),
        float(latitude.max()),
        float(longitude.min()),
        float(longitude.max()),
    )


def _check_calendar(calendar: list[tuple[int, int]], spec: MeteoSpec) -> None:
    if not calendar:
        raise MeteoError("Weather file has no time steps")
    min_year, min_day = calendar[0]
    max_year, max_day = calendar[-1]
    last_day = leap_year(spec.end_year)
    if not (
        min_year <= spec.start_year
        and min_day == 1
        and max_year == spec.end_year
        and max_day == last_day
    ):
        raise MeteoError(
            f"Year and/or day domain {min_year}:{max_year} - {min_day}:{max_day} "
            f"are different from supplied domain {spec.start_year}:{spec.end_year}"
            f" - 1:{last_day}"
        )


def load_meteo(spec: MeteoSpec) -> MeteoGrid:
    """Load the mask and weather files of a meteo block into a grid.

    Every weather file must cover the mask's latitude and longitude range
    and run from 1 January of the start year to 31 December of the end year.
    Values in the harvested area are rounded; radiation is converted from
    kJ to J m-2 d-1.
    """
    with _open(spec.mask) as handle:
        latitude = _coordinate(handle, "lat", spec.mask)
        longitude = _coordinate(handle, "lon", spec.mask)
        if latitude.size == 0 or longitude.size == 0:
            raise MeteoError(f"Empty latitude or longitude domain in {spec.mask}")
        mask_bounds = _bounds(latitude, longitude)
        mask_data = {}
        for name in _MASK_VARIABLES:
            logger.info("Started loading forcing data for %s", name)
            mask_data[name] = _grid(handle, name, ("lon", "lat"), spec.mask)

    harvested = mask_data["HA"] > 0
    weather: dict[str, np.ndarray] = {}
    calendar: list[tuple[int, int]] = []

    for kind in WEATHER_TYPES:
        path = spec.files.get(kind)
        varname = spec.variables.get(kind)
        if path is None or varname is None:
            raise MeteoError(f"No file given for meteo type {kind}")
        with _open(path) as handle:
            latitude = _coordinate(handle, "lat", path)
            longitude = _coordinate(handle, "lon", path)
            if latitude.size == 0 or longitude.size == 0:
                raise MeteoError(f"Empty latitude or longitude domain in {path}")
            bounds = _bounds(latitude, longitude)
            if bounds != mask_bounds:
                raise MeteoError(
                    "Latitude and/or longitude domain %g:%g - %g:%g is different "
                    "from mask domain %g:%g - %g:%g" % (bounds + mask_bounds)
                )
            if "time" not in handle.dimensions:
                raise MeteoError(f"No time dimension in {path}")
            logger.info("Started loading forcing data for %s", kind)
            data = _grid(handle, varname, ("lon", "lat", "time"), path)

        if data.shape[:2] != harvested.shape:
            raise MeteoError(f"Grid of {path} does not match the mask grid")
        calendar = build_calendar(spec.start_year, data.shape[2])
        _check_calendar(calendar, spec)
        data[~harvested] = MISSING
        weather[kind] = data

    for kind, data in weather.items():
        rounded = round_to(data[harvested], _DECIMALS[kind])
        if kind == "RADIATION":
            rounded = 1000.0 * rounded
        data[harvested] = rounded

    nlon, nlat = harvested.shape
    lat_axis = np.zeros(nlat)
    lat_axis[: min(nlat, latitude.size)] = latitude[:nlat]
    # Angstrom B uses the longitude at the latitude index; missing entries count as 0.
    lon_by_lat = np.zeros(nlat)
    count = min(nlat, longitude.size)
    lon_by_lat[:count] = longitude[:count]

    angst_a = np.broadcast_to(0.4885 - 0.0052 * lat_axis, (nlon, nlat)).astype(np.float32)
    angst_b = np.broadcast_to(0.1563 + 0.0074 * lon_by_lat, (nlon, nlat)).astype(np.float32)
    altitude = np.full((nlon, nlat), 100.0, dtype=np.float32)
    for array in (angst_a, angst_b, altitude):
        array[~harvested] = MISSING

    years = np.array([year for year, _ in calendar], dtype=int)
    days = np.array([day for _, day in calendar], dtype=int)

    return MeteoGrid(
        latitude=latitude,
        longitude=longitude,
        years=years,
        days=days,
        sow_a1=mask_data["sow_a1"],
        ha=mask_data["HA"],
        tsum_ea=mask_data["tsumEA"],
        tsum_am=mask_data["tsumAM"],
        tmin=weather["TMIN"],
        tmax=weather["TMAX"],
        radiation=weather["RADIATION"],
        rain=weather["RAIN"],
        windspeed=weather["WINDSPEED"],
        vapour=weather["VAPOUR"],
        angst_a=angst_a,
        angst_b=angst_b,
        altitude=altitude,
    )