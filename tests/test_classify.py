import astropy.units as u
import pytest

from protodisk import EnvironmentClassifier
from protodisk.base.planet import Planetesimal


def test_earth_like_planet(sun_params, earth) -> None:
    EnvironmentClassifier(sun_params).classify([earth])

    assert earth.period.to(u.d).value == pytest.approx(365.25, rel=1e-3)
    assert earth.orbital_zone == 1
    assert earth.radius.to(u.km).value == pytest.approx(6376.0, rel=0.02)
    assert earth.density.to(u.g / u.cm**3).value == pytest.approx(5.5, rel=0.05)
    assert earth.surface_gravity.to(u.m / u.s**2).value == pytest.approx(9.8, rel=0.05)
    assert earth.escape_velocity.to(u.km / u.s).value == pytest.approx(11.2, rel=0.05)
    assert earth.hill_radius.to(u.AU).value == pytest.approx(0.01)
    assert earth.equilibrium_temperature.to(u.K).value == pytest.approx(255.0, abs=3.0)


def test_gas_giant(sun_params, jupiter) -> None:
    EnvironmentClassifier(sun_params).classify([jupiter])

    assert jupiter.orbital_zone == 2
    assert jupiter.density.to(u.g / u.cm**3).value == pytest.approx(1.64, rel=0.02)
    assert 50_000 < jupiter.radius.to(u.km).value < 100_000


def test_orbits_and_masses_are_untouched(sun_params, earth, jupiter) -> None:
    jupiter.moons.append(Planetesimal("io", 0.003, 0.0, 4.5e-8))
    planets = [earth, jupiter]
    before = [planet.record() for planet in planets]
    EnvironmentClassifier(sun_params).classify(planets)
    assert [planet.record() for planet in planets] == before


def test_moons_orbit_their_planet(sun_params, jupiter) -> None:
    moon = Planetesimal("moon", 0.01, 0.0, 1.0e-7)
    jupiter.moons.append(moon)
    EnvironmentClassifier(sun_params).classify([jupiter])

    assert moon.period.to(u.d).value < 30.0
    assert moon.orbital_zone == jupiter.orbital_zone
    assert moon.equilibrium_temperature == jupiter.equilibrium_temperature
    assert moon.radius is not None


def test_classification_is_repeatable(sun_params, earth) -> None:
    classifier = EnvironmentClassifier(sun_params)
    classifier.classify([earth])
    first = (earth.period, earth.radius, earth.density)
    classifier.classify([earth])
    assert (earth.period, earth.radius, earth.density) == first
