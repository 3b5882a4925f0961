import numpy as np
import pytest

from protodisk import (
    AccretionEngine,
    DustBandTable,
    EventLog,
    StellarEnvironment,
    StellarParams,
)
from protodisk.accrete.engine import draw_planetesimal
from protodisk.base.planet import Planetesimal
from protodisk.events import PLANETESIMAL_ACCRETED
from protodisk.util import dole


def _engine(environment, seed, **kwargs):
    dust = DustBandTable.initialize(environment.params.stellar_mass)
    return AccretionEngine(environment, dust, np.random.default_rng(seed), **kwargs)


def test_accretion_sweeps_the_planet_forming_region(environment) -> None:
    log = EventLog()
    engine = _engine(environment, 3, observer=log)
    planets = []
    report = engine.accrete(planets)

    assert report.converged
    assert not engine.dust.dust_available(
        environment.inner_planet_limit, environment.outer_planet_limit
    )
    assert planets
    assert [planet.a for planet in planets] == sorted(planet.a for planet in planets)
    assert all(planet.mass > dole.PROTOPLANET_MASS for planet in planets)
    assert log.names().count(PLANETESIMAL_ACCRETED) == report.accreted
    assert report.accreted <= report.iterations


def test_gas_giants_are_flagged_by_critical_mass(environment) -> None:
    planets = []
    _engine(environment, 3).accrete(planets)
    for planet in planets:
        if not planet.gas_giant:
            assert planet.mass < environment.critical_mass(planet.a, planet.e)


def test_iteration_cap_stops_the_loop(environment) -> None:
    engine = _engine(environment, 3, max_iterations=3)
    report = engine.accrete([])
    assert report.iterations == 3
    assert not report.converged


def test_degenerate_environment_forms_nothing() -> None:
    environment = StellarEnvironment.from_params(StellarParams(0.0, 0.0))
    assert environment.degenerate
    planets = []
    report = _engine(environment, 3).accrete(planets)
    assert planets == []
    assert report.iterations == 0


def test_inverted_luminosity_is_degenerate() -> None:
    environment = StellarEnvironment.from_params(StellarParams(1.0, -1.0))
    assert environment.degenerate


@pytest.mark.parametrize("cloud_eccentricity", [1.0, -1.0])
def test_unbound_cloud_is_degenerate(cloud_eccentricity) -> None:
    params = StellarParams(1.0, 1.0, cloud_eccentricity=cloud_eccentricity)
    assert StellarEnvironment.from_params(params).degenerate
    assert not StellarEnvironment.from_params(StellarParams(1.0, 1.0)).degenerate


def test_growth_in_a_fresh_cloud(environment) -> None:
    engine = _engine(environment, 3)
    body = Planetesimal("p", 1.0, 0.0, dole.PROTOPLANET_MASS)
    assert engine.grow(body)
    assert body.mass > dole.PROTOPLANET_MASS


def test_growth_cap(environment) -> None:
    engine = _engine(environment, 3, max_growth_iterations=1)
    body = Planetesimal("p", 1.0, 0.0, dole.PROTOPLANET_MASS)
    assert not engine.grow(body)
    assert body.mass > dole.PROTOPLANET_MASS


def test_random_planetesimals_stay_in_the_planet_forming_region(environment) -> None:
    engine = _engine(environment, 11)
    bodies = [engine.random_planetesimal() for _ in range(200)]
    assert [body.id for body in bodies[:2]] == ["p00001", "p00002"]
    for body in bodies:
        assert environment.inner_planet_limit <= body.a <= environment.outer_planet_limit
        assert 0.0 <= body.e < 1.0
        assert body.mass == dole.PROTOPLANET_MASS


def test_semi_major_axis_is_drawn_before_eccentricity() -> None:
    body = draw_planetesimal(np.random.default_rng(5), 0.3, 50.0, "x", 1.0e-15)
    rng = np.random.default_rng(5)
    a = rng.uniform(0.3, 50.0)
    e = dole.random_eccentricity(rng.uniform(0.0, 1.0))
    assert body.a == a
    assert body.e == e


def test_same_stream_same_planets(environment) -> None:
    first = []
    second = []
    _engine(environment, 21).accrete(first)
    _engine(environment, 21).accrete(second)
    assert [planet.record() for planet in first] == [planet.record() for planet in second]
    assert [planet.id for planet in first] == [planet.id for planet in second]


def test_critical_mass_uses_the_stellar_luminosity() -> None:
    params = StellarParams(1.0, 1.0)
    bright = StellarParams(1.0, 16.0)
    assert StellarEnvironment.from_params(bright).critical_mass(
        5.0, 0.0
    ) < StellarEnvironment.from_params(params).critical_mass(5.0, 0.0)
    assert StellarEnvironment.from_params(bright).critical_mass(
        5.0, 0.0
    ) == pytest.approx(dole.critical_mass(5.0, 0.0, 16.0))
