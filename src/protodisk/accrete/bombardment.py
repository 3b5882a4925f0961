import logging

import protodisk.events as events
from protodisk.accrete.collision import CAPTURED, DISCARDED, MERGED
from protodisk.accrete.engine import draw_planetesimal

logger = logging.getLogger(__name__)

# About a quarter of a lunar mass
BOMBARDMENT_MASS = 1.0e-8


class PostAccretionBombardment:
    """
    Late bombardment of a finished system by bodies that no longer grow.
    They can be absorbed by a planet or captured as moons, but a body that
    hits nothing is dropped, so the number of planets never increases.

    Args:
        environment (StellarEnvironment):
            Stellar constants of the build
        rng (numpy.random.Generator):
            The build's random stream, continued from the accretion stage
        resolver (CollisionResolver):
            Collision handling shared with the accretion stage
        intensity (int):
            Number of bodies thrown at the system
        mass (float):
            Mass of every body in solar masses
        region (tuple):
            Inner and outer limit in AU of the semi-major axes drawn,
            defaults to the planet forming region
    """

    def __init__(
        self,
        environment,
        rng,
        resolver,
        intensity,
        mass=BOMBARDMENT_MASS,
        region=None,
        observer=None,
    ):
        self.environment = environment
        self.rng = rng
        self.resolver = resolver
        self.intensity = intensity
        self.mass = mass
        self.region = region or (
            environment.inner_planet_limit,
            environment.outer_planet_limit,
        )
        self.observer = observer

    def bombard(self, planets):
        """
        Throw ``intensity`` bodies at the planets, modified in place
        Returns:
            dict: number of bodies per outcome
        """
        outcomes = {MERGED: 0, CAPTURED: 0, DISCARDED: 0}
        inner, outer = self.region
        if self.environment.degenerate or not outer > inner:
            return outcomes

        for i in range(self.intensity):
            body = draw_planetesimal(self.rng, inner, outer, f"b{i + 1:05d}", self.mass)
            outcome = self.resolver.resolve(body, planets, allow_insert=False)
            outcomes[outcome] += 1

        logger.info(
            "Bombardment with %d bodies: %d absorbed, %d captured, %d missed",
            self.intensity,
            outcomes[MERGED],
            outcomes[CAPTURED],
            outcomes[DISCARDED],
        )
        events.emit(self.observer, events.BOMBARDMENT_COMPLETE, **outcomes)
        return outcomes
