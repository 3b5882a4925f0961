"""
Configuration of a build and the pipeline tying the stages together.

Parameters (defaults in brackets):

- ``stellar_mass``: primary mass in solar masses [drawn from 0.6-1.3, the
  F-G-K main sequence range]
- ``dust_density_coeff``: "A" in Dole's paper, recommended 0.00125-0.0015
  [0.0015]
- ``k``: dust-to-gas ratio, recommended 50-100 [50]
- ``cloud_eccentricity``: eccentricity of the dust cloud particles, higher
  values give fewer planets, recommended 0.15-0.25 [0.2]
- ``b``: critical mass coefficient, recommended 1.0e-5 to 1.2e-5 [1.2e-5]
- ``post_accretion_intensity``: bodies thrown at the finished system [1000]
- ``bombardment_mass``: mass of each of those bodies [1e-8]
- ``stellar_luminosity``: luminosity in solar units [main sequence value
  for ``stellar_mass``]
- ``planet_a``, ``planet_e``, ``planet_mass``: orbit and mass of a
  standalone planet [drawn from 0.3-50 AU, Dole's eccentricity distribution
  and 3.3e-10-500 earth masses]
"""

from __future__ import annotations

import logging

import numpy as np

import protodisk.events as events
import protodisk.util.misc as misc
from protodisk.accrete.bombardment import BOMBARDMENT_MASS, PostAccretionBombardment
from protodisk.accrete.classify import EnvironmentClassifier
from protodisk.accrete.collision import CollisionResolver, MoonCapturePolicy
from protodisk.accrete.dust import DustBandTable
from protodisk.accrete.engine import (
    MAX_ACCRETION_ITERATIONS,
    MAX_GROWTH_ITERATIONS,
    AccretionEngine,
)
from protodisk.accrete.environment import StellarEnvironment
from protodisk.base.planet import Planetesimal
from protodisk.base.star import StellarParams, Star
from protodisk.base.system import System
from protodisk.util import dole

logger = logging.getLogger(__name__)

CONFIG_KEYS = (
    "stellar_mass",
    "dust_density_coeff",
    "k",
    "cloud_eccentricity",
    "b",
    "post_accretion_intensity",
    "bombardment_mass",
    "stellar_luminosity",
    "planet_a",
    "planet_e",
    "planet_mass",
    "capture_policy",
    "max_growth_iterations",
    "max_accretion_iterations",
)


class Accrete:
    """
    Configuration of a build, seeded from a single integer. Parameters left
    unset are drawn from the seed's stream in a fixed order (stellar mass,
    planet a, planet e, planet mass) before any override is applied, so a
    seed always yields the same defaults.

    Args:
        seed (int):
            Seed of the build's random stream
        **overrides:
            Any of the parameters listed in the module docstring
    """

    def __init__(self, seed=0, **overrides):
        unknown = set(overrides) - set(CONFIG_KEYS)
        if unknown:
            raise ValueError(f"Unknown Accrete parameters: {sorted(unknown)}")

        self.seed = seed
        rng = np.random.default_rng(seed)
        self.stellar_mass = rng.uniform(0.6, 1.3)
        self.planet_a = rng.uniform(0.3, 50.0)
        self.planet_e = dole.random_eccentricity(rng.uniform(0.0, 1.0))
        self.planet_mass = (
            rng.uniform(dole.PROTOPLANET_MASS * dole.EARTH_MASSES_PER_SOLAR_MASS, 500.0)
            / dole.EARTH_MASSES_PER_SOLAR_MASS
        )
        self._rng_state = rng.bit_generator.state

        self.dust_density_coeff = dole.DUST_DENSITY_COEFF
        self.k = dole.K
        self.cloud_eccentricity = dole.CLOUD_ECCENTRICITY
        self.b = dole.B
        self.post_accretion_intensity = 1000
        self.bombardment_mass = BOMBARDMENT_MASS
        self.stellar_luminosity = None
        self.capture_policy = MoonCapturePolicy()
        self.max_growth_iterations = MAX_GROWTH_ITERATIONS
        self.max_accretion_iterations = MAX_ACCRETION_ITERATIONS

        for key, value in overrides.items():
            setattr(self, key, value)

    @classmethod
    def from_dict(cls, params):
        """
        Build from a parameter dictionary, ``seed`` defaults to 0
        """
        params = dict(params)
        seed = params.pop("seed", 0)
        if isinstance(params.get("capture_policy"), dict):
            params["capture_policy"] = MoonCapturePolicy(**params["capture_policy"])
        return cls(seed, **params)

    def __repr__(self):
        return (
            f"{type(self).__name__}(seed={self.seed}, "
            f"stellar_mass={self.stellar_mass}, "
            f"dust_density_coeff={self.dust_density_coeff}, k={self.k}, "
            f"cloud_eccentricity={self.cloud_eccentricity}, b={self.b}, "
            f"post_accretion_intensity={self.post_accretion_intensity})"
        )

    def rng(self):
        """
        Fresh generator positioned right after the default parameter draws,
        every build of this configuration replays the same stream
        """
        rng = np.random.default_rng()
        rng.bit_generator.state = self._rng_state
        return rng

    def stellar_params(self):
        stellar_luminosity = self.stellar_luminosity
        if stellar_luminosity is None:
            stellar_luminosity = misc.luminosity(self.stellar_mass)
        return StellarParams(
            stellar_mass=self.stellar_mass,
            stellar_luminosity=stellar_luminosity,
            dust_density_coeff=self.dust_density_coeff,
            k=self.k,
            cloud_eccentricity=self.cloud_eccentricity,
            b=self.b,
        )

    def planetary_system(self, observer=None):
        """
        Generate a planetary system
        Args:
            observer (callable):
                Optional callback receiving ``AccretionEvent`` objects
        Returns:
            System: the finalized system
        """
        rng = self.rng()
        params = self.stellar_params()
        environment = StellarEnvironment.from_params(params)
        system = System(
            Star(params), dust=DustBandTable.initialize(params.stellar_mass)
        )
        system.seed = self.seed
        events.emit(
            observer,
            events.SYSTEM_SETUP,
            stellar_mass=params.stellar_mass,
            stellar_luminosity=params.stellar_luminosity,
            inner_planet_limit=environment.inner_planet_limit,
            outer_planet_limit=environment.outer_planet_limit,
        )

        resolver = CollisionResolver(
            environment, self.capture_policy, observer=observer
        )
        engine = AccretionEngine(
            environment,
            system.dust,
            rng,
            resolver,
            observer=observer,
            max_growth_iterations=self.max_growth_iterations,
            max_iterations=self.max_accretion_iterations,
        )
        report = engine.accrete(system.planets)
        system.accretion_converged = report.converged
        system.accretion_iterations = report.iterations
        system.growth_cap_hits = report.growth_cap_hits

        bombardment = PostAccretionBombardment(
            environment,
            rng,
            resolver,
            self.post_accretion_intensity,
            self.bombardment_mass,
            observer=observer,
        )
        system.bombardment = bombardment.bombard(system.planets)

        EnvironmentClassifier(params).classify(system.planets)
        events.emit(observer, events.ENVIRONMENT_GENERATED, planets=len(system.planets))

        system.finalize()
        events.emit(observer, events.SYSTEM_COMPLETE, planets=len(system.planets))
        logger.info(
            "Seed %s: %d planets around a %.3f solar mass star",
            self.seed,
            len(system.planets),
            params.stellar_mass,
        )
        return system

    def planet(self, observer=None):
        """
        Generate a single planet on the configured orbit, bombarded by
        ``post_accretion_intensity`` bodies crossing its swept region
        Returns:
            Planetesimal: the classified planet
        """
        rng = self.rng()
        params = self.stellar_params()
        environment = StellarEnvironment.from_params(params)

        planet = Planetesimal("p00001", self.planet_a, self.planet_e, self.planet_mass)
        planet.gas_giant = bool(
            planet.mass >= environment.critical_mass(planet.a, planet.e)
        )
        planets = [planet]
        region = None
        if not environment.degenerate:
            region = environment.swept_limits(planet)

        resolver = CollisionResolver(
            environment, self.capture_policy, observer=observer
        )
        PostAccretionBombardment(
            environment,
            rng,
            resolver,
            self.post_accretion_intensity,
            self.bombardment_mass,
            region=region,
            observer=observer,
        ).bombard(planets)

        EnvironmentClassifier(params).classify(planets)
        planet = planets[0]
        planet.moons = tuple(planet.moons)
        planet.rings = tuple(planet.rings)
        return planet
