"""
Parameters and formulas of Dole's accretion model (Dole 1969, with the
Fogg 1985 and Burdick revisions). Masses are in solar masses and distances
in AU unless noted otherwise.
"""

import numpy as np

# Dust/gas ratio
K = 50.0

# Critical mass coefficient
B = 1.2e-5

# ALPHA and N both used in the dust density profile
ALPHA = 5.0
N = 3.0

# "A" in Dole's paper
DUST_DENSITY_COEFF = 1.5e-3
CLOUD_ECCENTRICITY = 0.2
ECCENTRICITY_COEFF = 0.077

# A zero draw would give a parabolic orbit
MAX_ECCENTRICITY = 0.99

# Mass of a freshly injected planetesimal nucleus
PROTOPLANET_MASS = 1.0e-15

EARTH_MASSES_PER_SOLAR_MASS = 332775.64


def perihelion_distance(a, e):
    """Distance between the orbiting body and its primary at closest approach"""
    return a * (1.0 - e)


def aphelion_distance(a, e):
    """Distance between the orbiting body and its primary at furthest approach"""
    return a * (1.0 + e)


def reduced_mass(mass, primary_mass=1.0):
    return mass / (primary_mass + mass)


def reduced_margin(mass, primary_mass=1.0):
    return reduced_mass(mass, primary_mass) ** 0.25


def critical_mass(a, e, luminosity, b=B):
    """
    Mass above which a planetesimal starts to retain gas and grow into a gas
    giant.
    """
    return b * (perihelion_distance(a, e) * np.sqrt(luminosity)) ** -0.75


def inner_effect_limit(a, e, mass, primary_mass=1.0):
    return perihelion_distance(a, e) * (1.0 - reduced_margin(mass, primary_mass))


def outer_effect_limit(a, e, mass, primary_mass=1.0):
    return aphelion_distance(a, e) * (1.0 + reduced_margin(mass, primary_mass))


def inner_swept_limit(a, e, mass, primary_mass=1.0, cloud_eccentricity=CLOUD_ECCENTRICITY):
    limit = inner_effect_limit(a, e, mass, primary_mass) / (1.0 + cloud_eccentricity)
    return max(limit, 0.0)


def outer_swept_limit(a, e, mass, primary_mass=1.0, cloud_eccentricity=CLOUD_ECCENTRICITY):
    return outer_effect_limit(a, e, mass, primary_mass) / (1.0 - cloud_eccentricity)


def dust_density(stellar_mass, a, dust_density_coeff=DUST_DENSITY_COEFF):
    return dust_density_coeff * np.sqrt(stellar_mass) * np.exp(-ALPHA * a ** (1.0 / N))


def mass_density(dust_density, critical_mass, mass, k=K):
    """
    Density of accretable material. Below the critical mass only dust is
    swept, above it the gas of the band is swept as well.
    """
    if mass < critical_mass:
        return dust_density
    return k * dust_density / (1.0 + np.sqrt(critical_mass / mass) * (k - 1.0))


def scale_cube_root_mass(scale, mass):
    return scale * mass**0.33


def inner_dust_limit(stellar_mass):
    return 0.0


def outer_dust_limit(stellar_mass):
    return scale_cube_root_mass(200.0, stellar_mass)


def innermost_planet(stellar_mass):
    return scale_cube_root_mass(0.3, stellar_mass)


def outermost_planet(stellar_mass):
    return scale_cube_root_mass(50.0, stellar_mass)


def random_eccentricity(random, eccentricity_coeff=ECCENTRICITY_COEFF):
    """
    Maps a uniform draw in [0, 1) onto Dole's eccentricity distribution,
    which strongly favors near circular orbits.
    """
    return min(1.0 - random**eccentricity_coeff, MAX_ECCENTRICITY)
