import astropy.constants as const
import astropy.units as u
import numpy as np

import protodisk.util.misc as misc


class EnvironmentClassifier:
    """
    Computes the physical and orbital attributes of finished bodies. It
    never draws random numbers and never changes a, e, mass or the gas giant
    flag, so the result does not depend on the order bodies are visited in.

    Args:
        params (StellarParams):
            Parameters of the primary star
    """

    def __init__(self, params):
        self.params = params
        self.r_ecosphere = misc.ecosphere_radius(params.stellar_luminosity)

    def classify(self, planets):
        for planet in planets:
            self.classify_body(planet, self.params.stellar_mass, planet.a)
            for moon in planet.moons:
                # Moons share the stellar flux of their planet
                self.classify_body(moon, planet.mass, planet.a)

    def classify_body(self, body, primary_mass, distance):
        """
        Args:
            body (Planetesimal):
                Body to classify
            primary_mass (float):
                Mass of the body it orbits in solar masses
            distance (float):
                Distance from the star in AU
        """
        luminosity = self.params.stellar_luminosity
        body.period = misc.period(body.a, body.mass, primary_mass)
        body.orbital_zone = misc.orbital_zone(luminosity, distance)

        if body.gas_giant:
            body.density = misc.empirical_density(
                body.mass, distance, self.r_ecosphere, True
            )
            body.radius = misc.volume_radius(body.mass, body.density)
        else:
            body.radius = misc.kothari_radius(body.mass, False, body.orbital_zone)
            body.density = misc.volume_density(body.mass, body.radius)

        mass = body.mass * u.M_sun
        body.surface_gravity = (const.G * mass / body.radius**2).to(u.m / u.s**2)
        body.escape_velocity = np.sqrt(2 * const.G * mass / body.radius).to(u.km / u.s)
        body.hill_radius = misc.hill_radius(body.a, body.e, body.mass, primary_mass) * u.AU
        body.equilibrium_temperature = misc.equilibrium_temperature(luminosity, distance)
