"""
Collision handling between a new planetesimal and the bodies already formed.

Coalescence and moon capture are replaceable policies:

* ``coalesce`` combines two orbits conserving mass, orbital energy and
  angular momentum (Wetherill 1980 as used by Dole/Fogg/Burdick). The new
  semi-major axis is the mass-weighted harmonic mean of the two, and the new
  eccentricity follows from the summed angular momentum
  ``sum(m * sqrt(a * (1 - e**2)))``. If round-off pushes the result outside
  [0, 1) the orbit is taken as circular.
* ``MoonCapturePolicy`` decides when the smaller body is kept as a satellite
  instead of being absorbed. A satellite that ends up inside the planet's
  Roche limit is torn apart into a ring.
"""

from __future__ import annotations

import bisect
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

import numpy as np

import protodisk.events as events
import protodisk.util.misc as misc
from protodisk.base.planet import Planetesimal, Ring
from protodisk.exceptions import PlanetOrderError
from protodisk.util import dole

logger = logging.getLogger(__name__)

INSERTED = "inserted"
MERGED = "merged"
CAPTURED = "captured"
DISCARDED = "discarded"

# Moons are placed between these fractions of the parent's Hill radius
MIN_HILL_FRACTION = 0.0
MAX_HILL_FRACTION = 0.5

# Inner edge of a new ring as a fraction of the Roche limit
RING_INNER_FRACTION = 0.5


@dataclass(frozen=True)
class MoonCapturePolicy:
    """
    A colliding body becomes a moon when the planet outweighs it by at least
    ``mass_ratio``, it is heavier than ``min_moon_mass`` (solar masses), it
    has no moons of its own, and the planet's moons and rings would not
    exceed ``max_moon_fraction`` of the planet's mass. Anything else is absorbed.
    """

    mass_ratio: float = 100.0
    min_moon_mass: float = 1.0e-4 / dole.EARTH_MASSES_PER_SOLAR_MASS
    max_moon_fraction: float = 0.05

    def captures(self, planet: Planetesimal, body: Planetesimal) -> bool:
        return (
            not body.moons
            and body.mass >= self.min_moon_mass
            and planet.mass >= self.mass_ratio * body.mass
            and planet.moon_mass + planet.ring_mass + body.mass
            <= self.max_moon_fraction * planet.mass
        )


def coalesce(first: Planetesimal, second: Planetesimal) -> Planetesimal:
    """
    Combine two bodies into one. The result keeps the identifier of the
    heavier body, and its moons and rings are not carried over.
    """
    mass = first.mass + second.mass
    a = mass / (first.mass / first.a + second.mass / second.a)
    momentum = first.mass * np.sqrt(first.a * (1.0 - first.e**2)) + second.mass * np.sqrt(
        second.a * (1.0 - second.e**2)
    )
    temp = 1.0 - (momentum / (mass * np.sqrt(a))) ** 2
    if temp < 0.0 or temp >= 1.0:
        temp = 0.0
    e = float(np.sqrt(temp))

    heavier = first if first.mass >= second.mass else second
    return Planetesimal(
        heavier.id,
        float(a),
        e,
        float(mass),
        gas_giant=first.gas_giant or second.gas_giant,
    )


class CollisionResolver:
    """
    Decides whether a new body is inserted, merged or captured as a moon.

    Args:
        environment (StellarEnvironment):
            Stellar constants of the build
        capture_policy (MoonCapturePolicy):
            Rule deciding when a body becomes a moon
        combine (callable):
            Orbit combination rule, ``coalesce`` by default
        observer (callable):
            Optional callback receiving ``AccretionEvent`` objects
    """

    def __init__(
        self,
        environment,
        capture_policy: Optional[MoonCapturePolicy] = None,
        combine: Callable[[Planetesimal, Planetesimal], Planetesimal] = coalesce,
        observer: Optional[events.Observer] = None,
    ):
        self.environment = environment
        self.capture_policy = capture_policy or MoonCapturePolicy()
        self.combine = combine
        self.observer = observer

    def resolve(
        self, candidate: Planetesimal, planets: List[Planetesimal], allow_insert=True
    ) -> str:
        """
        Add a candidate to the planet list, merging it with every body it
        overlaps until the list is stable. The nearest overlapping planet is
        always handled first so the outcome does not depend on list order.
        Args:
            candidate (Planetesimal):
                The new body
            planets (list):
                Planets ordered by semi-major axis, modified in place
            allow_insert (bool):
                If False a candidate that overlaps nothing is discarded
        Returns:
            str: the outcome of the first collision test, one of
            "inserted", "merged", "captured" or "discarded"
        """
        params = self.environment.params
        outcome = None
        pending = [candidate]
        while pending:
            body = pending.pop()
            target = nearest_overlap(
                body, planets, params.stellar_mass, params.cloud_eccentricity
            )
            if target is None:
                if body is candidate and not allow_insert:
                    return DISCARDED
                insert_ordered(body, planets)
                outcome = outcome or INSERTED
                continue

            if self.capture_policy.captures(target, body):
                self.capture_moon(target, body)
                outcome = outcome or CAPTURED
                continue

            planets.remove(target)
            pending.append(self.merge(target, body))
            outcome = outcome or MERGED

        check_order(planets)
        return outcome

    def merge(self, planet: Planetesimal, body: Planetesimal) -> Planetesimal:
        merged = self.combine(planet, body)
        if merged.mass >= self.environment.critical_mass(merged.a, merged.e):
            merged.gas_giant = True

        for ring in planet.rings + body.rings:
            add_ring(ring, merged.rings)
        for moon in sorted(planet.moons + body.moons, key=lambda m: m.a):
            self.resolve_moon(merged, moon)

        logger.debug(
            "Coalesced %s (a=%.4g) and %s (a=%.4g) into a=%.4g e=%.4g mass=%.4g",
            planet.id,
            planet.a,
            body.id,
            body.a,
            merged.a,
            merged.e,
            merged.mass,
        )
        events.emit(
            self.observer,
            events.COALESCENCE,
            ids=(planet.id, body.id),
            a=merged.a,
            e=merged.e,
            mass=merged.mass,
        )
        return merged

    def capture_moon(self, planet: Planetesimal, body: Planetesimal) -> None:
        """
        Place the body on an orbit around the planet. The distance from the
        planet is a fraction of its Hill radius set by how far from the
        planet's orbit the body arrived. Inside the Roche limit the body
        becomes a ring instead.
        """
        stellar_mass = self.environment.params.stellar_mass
        inner, outer = planet.swept_limits(
            stellar_mass, self.environment.params.cloud_eccentricity
        )
        offset = min(2.0 * abs(body.a - planet.a) / (outer - inner), 1.0)
        fraction = MIN_HILL_FRACTION + (MAX_HILL_FRACTION - MIN_HILL_FRACTION) * offset
        hill = misc.hill_radius(planet.a, planet.e, planet.mass, stellar_mass)
        moon = Planetesimal(
            body.id, float(fraction * hill), body.e, body.mass, body.gas_giant
        )

        roche = misc.roche_limit(planet.mass)
        if moon.a < roche:
            self.form_ring(planet, moon, roche)
            return
        self.resolve_moon(planet, moon)

        logger.debug(
            "Planet %s captured %s at %.4g AU", planet.id, body.id, moon.a
        )
        events.emit(
            self.observer,
            events.MOON_CAPTURED,
            planet=planet.id,
            moon=body.id,
            a=moon.a,
            mass=moon.mass,
        )

    def resolve_moon(self, planet: Planetesimal, moon: Planetesimal) -> None:
        """
        Add a moon to a planet. Collisions are only tested against its
        siblings and always end in coalescence. A moon inside the planet's
        Roche limit is turned into a ring.
        """
        roche = misc.roche_limit(planet.mass)
        pending = [moon]
        while pending:
            body = pending.pop()
            if body.a < roche:
                self.form_ring(planet, body, roche)
                continue
            target = nearest_overlap(body, planet.moons, planet.mass, 0.0)
            if target is None:
                insert_ordered(body, planet.moons)
                continue
            planet.moons.remove(target)
            pending.append(self.combine(target, body))
        check_order(planet.moons)

    def form_ring(self, planet: Planetesimal, body: Planetesimal, roche: float) -> None:
        """
        Spread a body torn apart by tidal forces between its orbit (at least
        ``RING_INNER_FRACTION`` of the Roche limit) and the Roche limit
        """
        inner = max(body.a, RING_INNER_FRACTION * roche)
        ring = Ring(body.id, float(inner), float(roche), body.mass)
        add_ring(ring, planet.rings)

        logger.debug(
            "Planet %s tore %s into a ring at %.4g AU", planet.id, body.id, roche
        )
        events.emit(
            self.observer,
            events.RING_FORMED,
            planet=planet.id,
            ring=body.id,
            inner=ring.inner,
            outer=ring.outer,
            mass=ring.mass,
        )


def add_ring(ring, rings):
    """
    Add a ring to an ordered ring list, joining it with every ring it
    touches
    """
    while True:
        other = next((r for r in rings if r.overlaps(ring)), None)
        if other is None:
            break
        rings.remove(other)
        ring = ring.combine(other)
    index = bisect.bisect_right([r.inner for r in rings], ring.inner)
    rings.insert(index, ring)


def nearest_overlap(body, bodies, primary_mass, cloud_eccentricity):
    """
    The body in ``bodies`` closest in semi-major axis whose swept interval
    overlaps the one of ``body``, ties going to the lower semi-major axis
    """
    inner, outer = body.swept_limits(primary_mass, cloud_eccentricity)
    overlapping = []
    for other in bodies:
        other_inner, other_outer = other.swept_limits(primary_mass, cloud_eccentricity)
        if inner < other_outer and other_inner < outer:
            overlapping.append(other)
    if not overlapping:
        return None
    return min(overlapping, key=lambda other: (abs(other.a - body.a), other.a))


def insert_ordered(body, bodies):
    index = bisect.bisect_right([other.a for other in bodies], body.a)
    bodies.insert(index, body)


def check_order(bodies):
    for previous, body in zip(bodies, bodies[1:]):
        if body.a < previous.a:
            raise PlanetOrderError(
                f"Bodies out of order: {previous.id} at {previous.a} AU "
                f"before {body.id} at {body.a} AU"
            )
