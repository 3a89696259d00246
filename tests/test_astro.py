import pytest

from wofost.astro import astro

RADIATION = 15.0e6


def test_equator_daylength_is_twelve_hours():
    for day in (1, 80, 172, 300):
        assert astro(day, 0.0, RADIATION).daylength == pytest.approx(12.0)


def test_daylength_within_bounds():
    for latitude in (-60.0, -30.0, 0.0, 30.0, 52.0, 60.0):
        for day in (1, 100, 172, 250, 355):
            result = astro(day, latitude, RADIATION)
            assert 0.0 <= result.daylength <= 24.0
            assert 0.0 <= result.par_daylength <= 24.0


def test_par_daylength_exceeds_astronomical_daylength():
    result = astro(120, 45.0, RADIATION)
    assert result.par_daylength > result.daylength


def test_northern_summer_longer_than_winter():
    summer = astro(172, 52.0, RADIATION)
    winter = astro(355, 52.0, RADIATION)
    assert summer.daylength > 12.0 > winter.daylength


def test_hemispheres_mirror():
    north = astro(172, 40.0, RADIATION)
    south = astro(172, -40.0, RADIATION)
    assert north.daylength + south.daylength == pytest.approx(24.0, abs=1e-3)


def test_transmission_is_radiation_over_angot():
    result = astro(150, 52.0, RADIATION)
    assert result.atmosph_transm == pytest.approx(RADIATION / result.angot_radiation)


def test_clear_sky_diffuse_fraction():
    angot = astro(150, 52.0, RADIATION).angot_radiation
    result = astro(150, 52.0, 0.9 * angot)
    assert result.diff_rad_pp == pytest.approx(
        0.5 * 0.23 * result.atmosph_transm * result.solar_constant
    )


def test_overcast_sky_all_diffuse():
    angot = astro(150, 52.0, RADIATION).angot_radiation
    result = astro(150, 52.0, 0.01 * angot)
    assert result.diff_rad_pp == pytest.approx(
        0.5 * result.atmosph_transm * result.solar_constant
    )


def test_intermediate_transmission_diffuse_fraction():
    angot = astro(150, 52.0, RADIATION).angot_radiation
    result = astro(150, 52.0, 0.5 * angot)
    fraction = result.diff_rad_pp / (0.5 * result.atmosph_transm * result.solar_constant)
    assert 0.23 < fraction < 1.0


def test_latitude_out_of_range_rejected():
    with pytest.raises(ValueError):
        astro(100, 91.0, RADIATION)
    with pytest.raises(ValueError):
        astro(100, -90.5, RADIATION)