import pytest

from wofost.config import (
    ConfigError,
    is_sowing_day,
    load_crop,
    load_management,
    read_date_tables,
    read_meteo_list,
    read_parameters,
    read_simulation_list,
    read_tables,
)
from wofost.tables import DateEntry

PARAM_NAMES = [f"CP{i:02d}" for i in range(66)]
TABLE_NAMES = [f"CT{i:02d}" for i in range(22)]
MNG_NAMES = [f"M{i}" for i in range(9)]
MNG_TABLES = ["N_TB", "P_TB", "K_TB", "IRR_TB"]


def _write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text)
    return str(path)


def _crop_text(identify_anthesis=1, skip_params=(), skip_tables=()):
    lines = ["** crop file"]
    for i, name in enumerate(PARAM_NAMES):
        if name in skip_params:
            continue
        value = identify_anthesis if i == 3 else i + 0.5
        lines.append(f"{name} = {value}")
    for i, name in enumerate(TABLE_NAMES):
        if name in skip_tables:
            continue
        lines.append(f"{name} = 0.0, {i}.0,")
        lines.append(f"       2.0, {i}.5")
    return "\n".join(lines) + "\n"


def _management_text(order=MNG_NAMES, skip_tables=()):
    lines = [f"{name} = 0.{i}" for i, name in enumerate(order)]
    tables = {
        "N_TB": ["N_TB = 04-15 50.0", "       05-01 30.0"],
        "P_TB": ["P_TB = 04-15 10.0"],
        "K_TB": ["K_TB = 04-15 20.0"],
        "IRR_TB": ["IRR_TB = 06-01 5.0"],
    }
    for name, rows in tables.items():
        if name not in skip_tables:
            lines.extend(rows)
    return "\n".join(lines) + "\n"


def test_read_parameters_values(tmp_path):
    path = _write(tmp_path, "p.txt", "A = 1.5\nB = -2.5e1\n* note\nC =\n  3\n")
    found = read_parameters(path, ["A", "B", "C", "D"])
    assert found == {"A": 1.5, "B": -25.0, "C": 3.0}


def test_read_parameters_first_occurrence(tmp_path):
    path = _write(tmp_path, "p.txt", "A = 1\nA = 2\n")
    assert read_parameters(path, ["A"]) == {"A": 1.0}


def test_read_parameters_word_must_stand_alone(tmp_path):
    path = _write(tmp_path, "p.txt", "B= 4\n")
    assert read_parameters(path, ["B"]) == {}


def test_read_parameters_long_word(tmp_path):
    path = _write(tmp_path, "p.txt", "x" * 99 + "\nA = 1\n")
    with pytest.raises(ConfigError):
        read_parameters(path, ["Z"])


def test_read_parameters_missing_equals(tmp_path):
    path = _write(tmp_path, "p.txt", "A 1\n")
    with pytest.raises(ConfigError):
        read_parameters(path, ["A"])


def test_read_parameters_missing_value(tmp_path):
    path = _write(tmp_path, "p.txt", "A = none\n")
    with pytest.raises(ConfigError):
        read_parameters(path, ["A"])


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        read_parameters(str(tmp_path / "absent.txt"), ["A"])


def test_read_tables(tmp_path):
    text = (
        "* comment\n"
        "AMAXTB = 0.00, 35.83,\n"
        "         1.00, 35.83,\n"
        "         2.00,  4.48\n"
        "SLATB  = 0.0, 0.002\n"
        " XTB = 1.0, 2.0\n"
    )
    path = _write(tmp_path, "t.txt", text)
    tables = read_tables(path, ["AMAXTB", "SLATB", "XTB"])
    assert tables["AMAXTB"].points == ((0.0, 35.83), (1.0, 35.83), (2.0, 4.48))
    assert tables["SLATB"].points == ((0.0, 0.002),)
    assert "XTB" not in tables


def test_read_tables_bad_head(tmp_path):
    path = _write(tmp_path, "t.txt", "BAD = x\n")
    with pytest.raises(ConfigError):
        read_tables(path, ["BAD"])


def test_read_date_tables(tmp_path):
    text = "N_TABLE = 04-15 50.0\n          05-01 30.0\n* end\nP_TABLE = 03-01 10\n"
    path = _write(tmp_path, "d.txt", text)
    tables = read_date_tables(path, ["N_TABLE", "P_TABLE"])
    assert tables["N_TABLE"].entries == (DateEntry(4, 15, 50.0), DateEntry(5, 1, 30.0))
    assert tables["P_TABLE"].entries == (DateEntry(3, 1, 10.0),)


@pytest.mark.parametrize("date", ["2020-04-15", "ab-cd"])
def test_read_date_tables_bad_date(tmp_path, date):
    path = _write(tmp_path, "d.txt", f"N_TABLE = {date} 50.0\n")
    with pytest.raises(ConfigError):
        read_date_tables(path, ["N_TABLE"])


def test_load_crop(tmp_path):
    path = _write(tmp_path, "crop.txt", _crop_text())
    crop = load_crop(path, PARAM_NAMES, TABLE_NAMES)
    assert crop.prm.temp_eff_max == 1.5
    assert crop.prm.identify_anthesis == 1
    assert crop.prm.sat_vern_requirement == -99.0
    assert crop.tables.vernalization_rate is None
    assert crop.tables.delta_temp_sum.points == ((0.0, 1.0), (2.0, 1.5))
    assert crop.sowing == 0 and crop.emergence is False
    assert crop.n_st.indx == 1.0 and crop.st.development == 0.0


def test_load_crop_with_vernalization(tmp_path):
    path = _write(tmp_path, "crop.txt", _crop_text(identify_anthesis=2))
    crop = load_crop(path, PARAM_NAMES, TABLE_NAMES)
    assert crop.prm.sat_vern_requirement == 6.5
    assert crop.tables.vernalization_rate.points == ((0.0, 0.0), (2.0, 0.5))


def test_load_crop_two_missing_parameters(tmp_path):
    path = _write(tmp_path, "crop.txt", _crop_text(skip_params=("CP06", "CP07")))
    crop = load_crop(path, PARAM_NAMES, TABLE_NAMES)
    assert crop.prm.base_vern_requirement == -99.0


def test_load_crop_three_missing_parameters(tmp_path):
    path = _write(tmp_path, "crop.txt", _crop_text(skip_params=("CP06", "CP07", "CP08")))
    with pytest.raises(ConfigError):
        load_crop(path, PARAM_NAMES, TABLE_NAMES)


def test_load_crop_missing_required_table(tmp_path):
    path = _write(tmp_path, "crop.txt", _crop_text(skip_tables=("CT05",)))
    with pytest.raises(ConfigError):
        load_crop(path, PARAM_NAMES, TABLE_NAMES)


def test_load_crop_missing_vernalization_table(tmp_path):
    path = _write(tmp_path, "crop.txt", _crop_text(identify_anthesis=2, skip_tables=("CT00",)))
    with pytest.raises(ConfigError):
        load_crop(path, PARAM_NAMES, TABLE_NAMES)


def test_load_crop_two_missing_tables(tmp_path):
    path = _write(tmp_path, "crop.txt", _crop_text(skip_tables=("CT00", "CT05")))
    with pytest.raises(ConfigError):
        load_crop(path, PARAM_NAMES, TABLE_NAMES)


def test_load_management(tmp_path):
    path = _write(tmp_path, "mng.txt", _management_text())
    mng = load_management(path, MNG_NAMES, MNG_TABLES)
    assert mng.n_uptake_frac == 0.0
    assert mng.k_recovery_frac == 0.8
    assert mng.n_fert_table.amount_on(4, 15, 2000, 2001) == 50.0
    assert mng.n_fert_table.amount_on(5, 1, 2000, 2001) == 30.0
    assert mng.irrigation.entries == (DateEntry(6, 1, 5.0),)


def test_load_management_out_of_order(tmp_path):
    order = ["M1", "M0"] + MNG_NAMES[2:]
    path = _write(tmp_path, "mng.txt", _management_text(order=order))
    with pytest.raises(ConfigError):
        load_management(path, MNG_NAMES, MNG_TABLES)


def test_load_management_missing_table(tmp_path):
    path = _write(tmp_path, "mng.txt", _management_text(skip_tables=("K_TB",)))
    with pytest.raises(ConfigError):
        load_management(path, MNG_NAMES, MNG_TABLES)


def test_load_management_needs_four_tables(tmp_path):
    path = _write(tmp_path, "mng.txt", _management_text())
    with pytest.raises(ConfigError):
        load_management(path, MNG_NAMES, MNG_TABLES[:3])


METEO_TYPES = [
    "tmin.nc TMIN tn",
    "tmax.nc TMAX tx",
    "rad.nc RADIATION rsds",
    "rain.nc RAIN pr",
    "wind.nc WINDSPEED ws",
    "vap.nc VAPOUR vp",
]


def test_read_meteo_list(tmp_path):
    text = "* meteo\n/data/ 2000 2001 1 mask.nc\n" + "\n".join(METEO_TYPES) + "\n"
    specs = read_meteo_list(_write(tmp_path, "meteo.txt", text))
    assert len(specs) == 1
    spec = specs[0]
    assert (spec.start_year, spec.end_year, spec.seasons) == (2000, 2001, 1)
    assert spec.mask == "mask.nc"
    assert spec.files["TMIN"] == "/data/tmin.nc"
    assert spec.variables["RADIATION"] == "rsds"
    assert len(spec.files) == 6


def test_read_meteo_list_comment_takes_a_slot(tmp_path):
    text = "/data/ 2000 2001 1 mask.nc\n* note\n" + "\n".join(METEO_TYPES[:5]) + "\n"
    specs = read_meteo_list(_write(tmp_path, "meteo.txt", text))
    assert len(specs) == 1
    assert "VAPOUR" not in specs[0].files
    assert len(specs[0].files) == 5


def test_read_meteo_list_unknown_type(tmp_path):
    text = "/data/ 2000 2001 1 mask.nc\nsnow.nc SNOW sn\n"
    with pytest.raises(ConfigError, match="Unknown meteo type"):
        read_meteo_list(_write(tmp_path, "meteo.txt", text))


def test_read_meteo_list_missing_types(tmp_path):
    text = "/data/ 2000 2001 1 mask.nc\n" + "\n".join(METEO_TYPES[:3]) + "\n"
    with pytest.raises(ConfigError, match="Missing meteo types"):
        read_meteo_list(_write(tmp_path, "meteo.txt", text))


def test_read_simulation_list(tmp_path):
    text = (
        "* list\n"
        "/run/ crop.cab soil.dat mng.dat site.dat 04-01 1 out_d.txt out_a.txt\n"
        "/alt/ c2.cab s2.dat m2.dat t2.dat 05-10 0 d2.txt a2.txt\n"
    )
    specs = read_simulation_list(_write(tmp_path, "list.txt", text))
    assert len(specs) == 2
    first, second = specs
    assert first.crop_file == "/run/crop.cab"
    assert first.soil_file == "/run/soil.dat"
    assert first.management_file == "/run/mng.dat"
    assert first.site_file == "/run/site.dat"
    assert first.start == "04-01"
    assert first.emergence is True
    assert first.output_daily == "out_d.txt"
    assert first.output_annual == "out_a.txt"
    assert first.index == 0
    assert second.emergence is False
    assert second.index == 1


def test_read_simulation_list_incomplete(tmp_path):
    text = "/run/ crop.cab soil.dat\n"
    with pytest.raises(ConfigError):
        read_simulation_list(_write(tmp_path, "list.txt", text))


def test_is_sowing_day():
    assert is_sowing_day("04-15", 4, 15, 2000, 2000) is True
    assert is_sowing_day("04-15", 4, 16, 2000, 2000) is False
    assert is_sowing_day("04-15", 5, 15, 2000, 2000) is False
    assert is_sowing_day("04-15", 4, 15, 2001, 2000) is False


def test_is_sowing_day_bad_date():
    with pytest.raises(ConfigError):
        is_sowing_day("April", 4, 15, 2000, 2000)