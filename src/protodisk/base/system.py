import astropy.units as u
import numpy as np
import pandas as pd

from protodisk.exceptions import FinalizedSystemError


class System:
    """
    Class for a single system. Holds the star, the dust left in its cloud and
    the planets ordered by semi-major axis. Once finalized the planet list
    and every moon and ring list become tuples and the system is read only.
    """

    def __init__(self, star, planets=None, dust=None) -> None:
        self.star = star
        self.planets = list(planets) if planets is not None else []
        if dust is None:
            from protodisk.accrete.dust import DustBandTable

            dust = DustBandTable.initialize(star.params.stellar_mass)
        self.dust = dust
        self.finalized = False

        # Filled in by the build
        self.seed = None
        self.accretion_converged = True
        self.accretion_iterations = 0
        self.growth_cap_hits = 0
        self.bombardment = {}

        self.planet_cleanup()

    def __repr__(self):
        return (
            f"Type:{self.star.spectral_type}\t"
            f"mass:{self.star.mass:.3f}\tplanets:{len(self.planets)}\n\n"
            f"Planets:\n{self.summary()}"
        )

    @property
    def params(self):
        return self.star.params

    def planet_cleanup(self):
        # Sort the planets in the system by semi-major axis
        self._check_mutable()
        a_vals = [planet.a for planet in self.planets]
        self.planets = np.array(self.planets, dtype=object)[
            np.argsort(a_vals, kind="stable")
        ].tolist()

    def finalize(self):
        self._check_mutable()
        for planet in self.planets:
            planet.moons = tuple(planet.moons)
            planet.rings = tuple(planet.rings)
        self.planets = tuple(self.planets)
        self.finalized = True

    def _check_mutable(self):
        if getattr(self, "finalized", False):
            raise FinalizedSystemError("System has been finalized")

    def getpattr(self, attr):
        # Return array of all planet's attribute value, e.g. all semi-major
        # axis values
        if not self.planets:
            return []
        if type(getattr(self.planets[0], attr)) == u.Quantity:
            return [getattr(planet, attr).value for planet in self.planets] * getattr(
                self.planets[0], attr
            ).unit
        else:
            return [getattr(planet, attr) for planet in self.planets]

    def summary(self):
        """
        DataFrame with one row per planet
        """
        patts = [
            "id",
            "a",
            "e",
            "mass",
            "earth_masses",
            "gas_giant",
            "period",
            "orbital_zone",
            "radius",
            "density",
            "surface_gravity",
            "equilibrium_temperature",
        ]
        p_df = pd.DataFrame()
        for att in patts:
            pattr = self.getpattr(att)
            if type(pattr) == u.Quantity:
                p_df[att] = pattr.value
            else:
                p_df[att] = pattr
        p_df["moons"] = [len(planet.moons) for planet in self.planets]
        p_df["rings"] = [len(planet.rings) for planet in self.planets]
        return p_df

    def moons_summary(self):
        """
        DataFrame with one row per moon and ring, indexed by the parent planet
        id. Rings fill ``inner`` and ``outer`` instead of the orbit columns.
        """
        rows = []
        for planet in self.planets:
            for moon in planet.moons:
                params = moon.dump_params()
                params["planet"] = planet.id
                params["kind"] = "moon"
                rows.append(
                    {
                        key: val.value if type(val) == u.Quantity else val
                        for key, val in params.items()
                    }
                )
            for ring in planet.rings:
                rows.append(
                    {
                        "planet": planet.id,
                        "kind": "ring",
                        "id": ring.id,
                        "mass": ring.mass,
                        "inner": ring.inner,
                        "outer": ring.outer,
                    }
                )
        if not rows:
            return pd.DataFrame()
        return pd.DataFrame(rows).set_index("planet")

    @property
    def total_mass(self):
        return sum(
            planet.mass + planet.moon_mass + planet.ring_mass for planet in self.planets
        )

    def record(self):
        """
        Exact nested tuple of (a, e, mass, gas_giant, moons, rings) per planet
        """
        return tuple(planet.record() for planet in self.planets)
