from __future__ import annotations

import pytest

from protodisk import Accrete, CollisionResolver, StellarEnvironment, StellarParams
from protodisk.base.planet import Planetesimal


@pytest.fixture
def sun_params() -> StellarParams:
    return StellarParams(stellar_mass=1.0, stellar_luminosity=1.0)


@pytest.fixture
def environment(sun_params: StellarParams) -> StellarEnvironment:
    return StellarEnvironment.from_params(sun_params)


@pytest.fixture
def resolver(environment: StellarEnvironment) -> CollisionResolver:
    return CollisionResolver(environment)


@pytest.fixture
def earth() -> Planetesimal:
    return Planetesimal("earth", 1.0, 0.0, 3.0e-6)


@pytest.fixture
def jupiter() -> Planetesimal:
    return Planetesimal("jupiter", 5.2, 0.0, 1.0e-3, gas_giant=True)


@pytest.fixture(scope="session")
def seed_1_system():
    # Shared by the read-only tests, a full build takes a moment
    return Accrete(1, post_accretion_intensity=100).planetary_system()
