from dataclasses import dataclass

import astropy.units as u
import pandas as pd

from protodisk.util import dole


@dataclass(frozen=True)
class Ring:
    """
    Debris of a body torn apart inside its planet's Roche limit, spread
    between ``inner`` and ``outer`` (AU from the planet)
    """

    id: str
    inner: float
    outer: float
    mass: float

    @property
    def width(self):
        return self.outer - self.inner

    def overlaps(self, other):
        return self.inner <= other.outer and other.inner <= self.outer

    def combine(self, other):
        heavier = self if self.mass >= other.mass else other
        return Ring(
            heavier.id,
            min(self.inner, other.inner),
            max(self.outer, other.outer),
            self.mass + other.mass,
        )

    def record(self):
        return (float(self.inner), float(self.outer), float(self.mass))


class Planetesimal:
    """
    Class for an accreting body. Top level planetesimals orbit the star,
    moons orbit their parent planet and use its mass as the primary mass.

    Args:
        id (str):
            Identifier, unique within a build
        a (float):
            Semi-major axis in AU
        e (float):
            Eccentricity
        mass (float):
            Mass in solar masses
        gas_giant (bool):
            Whether the body has retained gas
        moons (list):
            Planetesimals orbiting this body, ordered by semi-major axis
        rings (list):
            Rings around this body, ordered by inner edge
    """

    def __init__(
        self, id, a, e, mass, gas_giant=False, moons=None, rings=None
    ) -> None:
        self.id = id
        self.a = a
        self.e = e
        self.mass = mass
        self.gas_giant = gas_giant
        self.moons = list(moons) if moons is not None else []
        self.rings = list(rings) if rings is not None else []

        # Filled in by the environment classifier
        self.period = None
        self.orbital_zone = None
        self.radius = None
        self.density = None
        self.surface_gravity = None
        self.escape_velocity = None
        self.hill_radius = None
        self.equilibrium_temperature = None

    def __repr__(self):
        """
        Make dataframe with planetesimal attributes
        """
        params = self.dump_params()
        res = {}
        for key, val in params.items():
            if type(val) == u.Quantity:
                res[key] = val.value
            else:
                res[key] = val

        p_df = pd.DataFrame(res, index=[0])

        return f"{type(self).__name__} object\n{p_df}"

    def dump_params(self):
        params = {
            "id": self.id,
            "a": self.a,
            "e": self.e,
            "mass": self.mass,
            "earth_masses": self.earth_masses,
            "gas_giant": self.gas_giant,
            "n_moons": len(self.moons),
            "n_rings": len(self.rings),
            "period": self.period,
            "zone": self.orbital_zone,
            "radius": self.radius,
            "density": self.density,
        }
        return params

    @property
    def earth_masses(self):
        return self.mass * dole.EARTH_MASSES_PER_SOLAR_MASS

    @property
    def moon_mass(self):
        return sum(moon.mass for moon in self.moons)

    @property
    def ring_mass(self):
        return sum(ring.mass for ring in self.rings)

    def swept_limits(self, primary_mass, cloud_eccentricity):
        """
        Radial interval within which the body's gravity dominates. It is
        derived from the current elements on every call, so it always
        reflects the latest a, e and mass.
        Args:
            primary_mass (float):
                Mass of the body being orbited in solar masses
            cloud_eccentricity (float):
                Eccentricity of the material being swept, 0 for moons
        Returns:
            tuple: inner and outer limit in AU
        """
        return (
            dole.inner_swept_limit(
                self.a, self.e, self.mass, primary_mass, cloud_eccentricity
            ),
            dole.outer_swept_limit(
                self.a, self.e, self.mass, primary_mass, cloud_eccentricity
            ),
        )

    def record(self):
        """
        Plain nested tuple of the accretion results (a, e, mass, gas_giant,
        moons, rings), useful for exact comparisons between builds
        """
        return (
            float(self.a),
            float(self.e),
            float(self.mass),
            bool(self.gas_giant),
            tuple(moon.record() for moon in self.moons),
            tuple(ring.record() for ring in self.rings),
        )
