# wofost

The daily crop processes of the WOFOST crop growth model as plain Python
functions, together with readers for the model's text input files and a
loader for gridded daily weather in netCDF files.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `wofost.mathutil` – `limit`, `notnul`, `insw` and `leap_year` (days in a
  year, 365 or 366).
- `wofost.tables` – `AfgenTable`, a callable piecewise linear table that
  returns the first y-value at or below its first x, the last y-value beyond
  its last x and interpolates in between; `DateTable` of `DateEntry`
  (month, day, amount), whose `amount_on(month, day, year, end_year)` returns
  the amount for that date, or 0 when none applies or `year` is past
  `end_year`.
- `wofost.statistics` – `moment(data)` returns `Moments` (average, average
  deviation, standard deviation, variance, skewness, kurtosis); it needs at
  least two values and raises `ValueError` otherwise.
- `wofost.parameters` – `CropParameters`, `SoilConstants`, `SiteParameters`
  and `ManagementParameters`, each built with `from_values(values)` from a
  sequence in file order.
- `wofost.astro` – `astro(day_of_year, latitude, radiation)` returns an
  `AstroResult` with day length, photoactive day length, solar elevation
  integrals, Angot radiation, atmospheric transmission and diffuse radiation.
  Latitudes beyond ±90 raise `ValueError`.
- `wofost.crop` – the `Crop` dataclass with its parameters, `CropTables`,
  states, rates, nutrient states and leaf age classes (`LeafClass`);
  `emergence_crop` accumulates the emergence temperature sum and
  `initialize_crop` sets the states at emergence.
- `wofost.leaves` – `leaf_area_index`, `leave_growth` (adds the youngest leaf
  class) and `dying_leaves` (removes leaves from the oldest classes by
  stress, shading, nutrient shortage and age).
- `wofost.growth` – `development_rate` (temperature, day length and
  vernalization), `partitioning`, `conversion`, `growth` and
  `integrate_crop`.
- `wofost.assimilation` – `instant_assimilation`,
  `daily_total_assimilation` (three-point Gaussian integration over canopy
  and day) and `correct` (low minimum temperature correction and conversion
  from CO2 to carbohydrate).
- `wofost.evaporation` – `sweaf` and `evapotranspiration`, which takes
  `PenmanRates` and a `WaterBalance` and returns `EvapotranspirationRates`.
  Drought and oxygen stress are computed, but the water stress applied to
  transpiration is held at 1.
- `wofost.nutrients` – `initialize_nutrients` (returns `SoilNutrients`),
  `nutrient_partitioning`, `crop_nutrient_rates`, `nutrient_loss` and
  `integrate_nutrients` for N, P and K.
- `wofost.config` – input file readers; errors raise `ConfigError`.
- `wofost.meteo` – `load_meteo(spec)` reads a mask file and the six weather
  files of a `MeteoSpec` into a `MeteoGrid`; errors raise `MeteoError`.
  `build_calendar` and `round_to` are exposed as helpers.

## Input files

Crop and management files hold scalar parameters as `NAME = value`. Crop
tables start on a line `NAME = x1, y1` and continue on following `x, y`
lines; management date tables start with `NAME = MM-DD amount` and continue
with `MM-DD amount` lines. Lines starting with `*` are skipped.

The parameter and table names are passed in by the caller:

```python
from wofost.config import load_crop, load_management

crop = load_crop("crop.txt", crop_parameter_names, crop_table_names)
management = load_management("manage.txt", manage_parameter_names,
                             ["N_FERT", "P_FERT", "K_FERT", "IRRIGATION"])
```

`load_crop` allows up to two missing parameters (read as 0) and one missing
table (the vernalization table, used only when `identify_anthesis` is 2).
`load_management` requires its parameters in the given order and exactly four
tables: N, P and K fertilizer and irrigation.

The simulation list has per line a directory, the crop, soil, management and
site files, the start date (`MM-DD`), the emergence flag (`1` at emergence,
`0` at sowing) and the daily and annual output file names;
`read_simulation_list` returns `SimulationSpec` objects. The meteo list has
blocks of a line `directory start_year end_year seasons mask` followed by
one `file TYPE variable` line per weather type (`TMIN`, `TMAX`, `RADIATION`,
`RAIN`, `WINDSPEED`, `VAPOUR`); `read_meteo_list` returns `MeteoSpec`
objects.

```python
from wofost.config import read_meteo_list, read_simulation_list
from wofost.meteo import load_meteo

simulations = read_simulation_list("list.txt")
grid = load_meteo(read_meteo_list("meteolist.txt")[0])
tmin = grid.series("TMIN")   # indexed [lon, lat, day]
```

Weather files are read with SciPy's netCDF reader, which handles classic
(version 3) netCDF files. Each must cover the mask's latitude and longitude
range and run from 1 January of the start year to 31 December of the end
year. Values in cells with a harvested area (`HA` > 0) are rounded, radiation
is converted from kJ to J m-2 d-1, and other cells hold -99.

## Small building blocks

```python
from wofost.astro import astro
from wofost.mathutil import insw, leap_year, limit
from wofost.statistics import moment

limit(0.0, 1.0, 1.5)     # 1.0
insw(-1.0, 2.0, 3.0)     # 2.0
leap_year(2000)          # 366

sun = astro(day_of_year=172, latitude=52.0, radiation=20_000_000.0)
stats = moment([1.0, 2.0, 3.0, 4.0])
```

## What this package does not do

There is no command-line program and no driver that runs a whole season or
a grid: the caller calls the process functions day by day. The package does
not read soil or site files, does not compute Penman potential evaporation
(it takes `PenmanRates` as input), has no soil water balance, and writes no
output files.