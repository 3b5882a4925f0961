"""
The accretion loop: planetesimal nuclei are injected at random orbits, grow
by sweeping up dust (and gas once they pass the critical mass) and collide
with the bodies already formed, until the planet forming region is swept
clean.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import protodisk.events as events
from protodisk.accrete.collision import CollisionResolver
from protodisk.base.planet import Planetesimal
from protodisk.util import dole

logger = logging.getLogger(__name__)

GROWTH_TOLERANCE = 1.0e-4
MAX_GROWTH_ITERATIONS = 1000
MAX_ACCRETION_ITERATIONS = 100_000


@dataclass
class AccretionReport:
    """What happened during one accretion run"""

    iterations: int = 0
    accreted: int = 0
    growth_cap_hits: int = 0
    converged: bool = True


class AccretionEngine:
    """
    Args:
        environment (StellarEnvironment):
            Stellar constants of the build
        dust (DustBandTable):
            Dust left in the cloud, swept in place
        rng (numpy.random.Generator):
            The build's random stream. Each iteration draws the semi-major
            axis first and then the eccentricity.
        resolver (CollisionResolver):
            Collision handling, a default one is built if not given
        observer (callable):
            Optional callback receiving ``AccretionEvent`` objects
    """

    def __init__(
        self,
        environment,
        dust,
        rng,
        resolver: Optional[CollisionResolver] = None,
        observer: Optional[events.Observer] = None,
        growth_tolerance: float = GROWTH_TOLERANCE,
        max_growth_iterations: int = MAX_GROWTH_ITERATIONS,
        max_iterations: int = MAX_ACCRETION_ITERATIONS,
    ):
        self.environment = environment
        self.dust = dust
        self.rng = rng
        self.observer = observer
        self.resolver = resolver or CollisionResolver(environment, observer=observer)
        self.growth_tolerance = growth_tolerance
        self.max_growth_iterations = max_growth_iterations
        self.max_iterations = max_iterations
        self._next_id = 0

    def new_id(self, prefix="p"):
        self._next_id += 1
        return f"{prefix}{self._next_id:05d}"

    def dust_left(self) -> bool:
        return self.dust.dust_available(
            self.environment.inner_planet_limit, self.environment.outer_planet_limit
        )

    def random_planetesimal(self):
        env = self.environment
        return draw_planetesimal(
            self.rng,
            env.inner_planet_limit,
            env.outer_planet_limit,
            self.new_id(),
            dole.PROTOPLANET_MASS,
        )

    def accrete(self, planets) -> AccretionReport:
        """
        Run the accretion loop until no dust is left in the planet forming
        region or the iteration cap is reached. Planets are added to
        ``planets`` in place.
        """
        report = AccretionReport()
        if self.environment.degenerate:
            logger.info("Degenerate stellar environment, no planets will form")
            return report

        while self.dust_left():
            if report.iterations >= self.max_iterations:
                report.converged = False
                logger.warning(
                    "Accretion stopped after %d iterations with dust left",
                    report.iterations,
                )
                break
            report.iterations += 1

            body = self.random_planetesimal()
            inner, outer = self.environment.swept_limits(body)
            if not self.dust.dust_available(inner, outer):
                continue

            if not self.grow(body):
                report.growth_cap_hits += 1
            body.gas_giant = bool(
                body.mass >= self.environment.critical_mass(body.a, body.e)
            )
            report.accreted += 1

            # The sweep covers the region of the grown candidate, not of
            # whatever it merges into
            inner, outer = self.environment.swept_limits(body)
            logger.debug(
                "Planetesimal %s grew to %.4g at a=%.4g e=%.4g",
                body.id,
                body.mass,
                body.a,
                body.e,
            )
            events.emit(
                self.observer,
                events.PLANETESIMAL_ACCRETED,
                id=body.id,
                a=body.a,
                e=body.e,
                mass=body.mass,
                gas_giant=body.gas_giant,
            )
            self.resolver.resolve(body, planets)
            self.dust.sweep(inner, outer, gas_remains=not body.gas_giant)

        logger.info(
            "Accretion finished after %d iterations, %d planets",
            report.iterations,
            len(planets),
        )
        return report

    def grow(self, body) -> bool:
        """
        Fixed-point iteration of the mass a nucleus reaches by sweeping up
        the material in its reach. Returns False if the iteration cap was
        hit before the increment dropped under the tolerance.
        """
        seed_mass = body.mass
        mass = seed_mass
        for _ in range(self.max_growth_iterations):
            grown = seed_mass + self.dust.collect_dust(
                mass, body.a, body.e, self.environment
            )
            converged = grown - mass < self.growth_tolerance * mass
            mass = max(grown, mass)
            if converged:
                body.mass = float(mass)
                return True
        body.mass = float(mass)
        logger.warning(
            "Growth of %s did not converge in %d iterations",
            body.id,
            self.max_growth_iterations,
        )
        return False


def draw_planetesimal(rng, inner, outer, id, mass):
    """
    Draw a body on a random orbit. The semi-major axis is always drawn
    before the eccentricity, this order is part of the reproducibility
    contract of a seed.
    """
    a = rng.uniform(inner, outer)
    e = dole.random_eccentricity(rng.uniform(0.0, 1.0))
    return Planetesimal(id, float(a), float(e), mass)
