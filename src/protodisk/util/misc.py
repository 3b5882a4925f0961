import astropy.constants as const
import astropy.units as u
import numpy as np

"""
Physical relations used when turning accreted bodies into planets, mostly
following Fogg (1985) and Burdick's accrete/StarGen
"""

# Kothari radius constants (cgs)
A1_20 = 6.485e12
A2_20 = 4.0032e-8
BETA_20 = 5.71e12
JIMS_FUDGE = 1.004

EARTH_MASSES = (1 * u.M_sun).to(u.M_earth).value

# (atomic weight, atomic number) of the bulk material per orbital zone
ROCKY_COMPOSITION = {1: (15.0, 8.0), 2: (10.0, 5.0), 3: (10.0, 5.0)}
GIANT_COMPOSITION = {1: (9.5, 4.5), 2: (2.47, 2.0), 3: (7.0, 4.0)}

# Fluid body Roche limit coefficient and the density assumed for captured
# bodies
ROCHE_COEFF = 2.44
ROCHE_SATELLITE_DENSITY = 3.0 * u.g / u.cm**3


def luminosity(stellar_mass):
    """
    Main sequence luminosity from mass
    Args:
        stellar_mass (float):
            Stellar mass in solar masses
    Returns:
        float: luminosity in solar luminosities
    """
    if stellar_mass <= 0:
        return 0.0
    if stellar_mass < 1.0:
        n = 1.75 * (stellar_mass - 0.1) + 3.325
    else:
        n = 0.5 * (2.0 - stellar_mass) + 4.4
    return stellar_mass**n


def ecosphere_radius(stellar_luminosity):
    """Radius of the habitable zone center in AU"""
    return np.sqrt(stellar_luminosity)


def orbital_zone(stellar_luminosity, distance):
    """
    Temperature zone of an orbit, 1 is inside the ice line, 3 is the cold
    outer system
    Args:
        stellar_luminosity (float):
            Luminosity of the primary in solar luminosities
        distance (float):
            Distance from the primary in AU
    Returns:
        int: zone 1, 2 or 3
    """
    if distance < 4.0 * np.sqrt(stellar_luminosity):
        return 1
    if distance < 15.0 * np.sqrt(stellar_luminosity):
        return 2
    return 3


def period(a, mass, primary_mass):
    """
    Orbital period from Kepler's third law
    Args:
        a (float):
            Semi-major axis in AU
        mass (float):
            Mass of the orbiting body in solar masses
        primary_mass (float):
            Mass of the primary in solar masses
    Returns:
        T (astropy Quantity):
            Orbital period in days
    """
    mu = (const.G * (mass + primary_mass) * u.M_sun).decompose()
    return (2 * np.pi * np.sqrt((a * u.AU) ** 3 / mu)).to(u.d)


def kothari_radius(mass, gas_giant, zone):
    """
    Pressure based radius model of Kothari (1936) as used by Fogg (1985)
    Args:
        mass (float):
            Body mass in solar masses
        gas_giant (bool):
            Whether the body retained a gas envelope
        zone (int):
            Orbital zone of the body
    Returns:
        radius (astropy Quantity):
            Radius in km
    """
    composition = GIANT_COMPOSITION if gas_giant else ROCKY_COMPOSITION
    atomic_weight, atomic_num = composition[zone]
    solar_mass_grams = const.M_sun.to(u.g).value

    temp = (2.0 * BETA_20 * solar_mass_grams ** (1.0 / 3.0)) / (
        A1_20 * (atomic_weight * atomic_num) ** (1.0 / 3.0)
    )
    temp2 = (
        A2_20
        * atomic_weight ** (4.0 / 3.0)
        * solar_mass_grams ** (2.0 / 3.0)
        * mass ** (2.0 / 3.0)
    )
    temp2 = 1.0 + temp2 / (A1_20 * atomic_num**2)
    radius_cm = temp / temp2 * mass ** (1.0 / 3.0)
    return (radius_cm * u.cm).to(u.km) / JIMS_FUDGE


def empirical_density(mass, distance, r_ecosphere, gas_giant):
    """
    Fogg's empirical bulk density
    Args:
        mass (float):
            Body mass in solar masses
        distance (float):
            Distance from the star in AU
        r_ecosphere (float):
            Ecosphere radius of the star in AU
        gas_giant (bool):
            Whether the body retained a gas envelope
    Returns:
        density (astropy Quantity):
            Density in g/cm^3
    """
    temp = (mass * EARTH_MASSES) ** (1.0 / 8.0) * (r_ecosphere / distance) ** 0.25
    if gas_giant:
        return temp * 1.2 * u.g / u.cm**3
    return temp * 5.5 * u.g / u.cm**3


def volume_radius(mass, density):
    """Radius of a sphere of the given mass (solar masses) and density"""
    volume = (mass * u.M_sun) / density
    return ((3.0 * volume / (4.0 * np.pi)) ** (1.0 / 3.0)).to(u.km)


def volume_density(mass, radius):
    """Bulk density of a sphere of the given mass (solar masses) and radius"""
    volume = 4.0 / 3.0 * np.pi * radius**3
    return ((mass * u.M_sun) / volume).to(u.g / u.cm**3)


def hill_radius(a, e, mass, primary_mass):
    """Hill sphere radius at pericenter, same units as a"""
    return a * (1.0 - e) * (mass / (3.0 * primary_mass)) ** (1.0 / 3.0)


def roche_limit(primary_mass, satellite_density=ROCHE_SATELLITE_DENSITY):
    """
    Fluid Roche limit of a satellite of the given density, in AU
    Args:
        primary_mass (float):
            Mass of the body being orbited in solar masses
        satellite_density (astropy Quantity):
            Bulk density of the satellite
    Returns:
        float: distance from the primary in AU
    """
    scale = (3.0 * primary_mass * u.M_sun / (4.0 * np.pi * satellite_density)) ** (
        1.0 / 3.0
    )
    return ROCHE_COEFF * scale.to(u.AU).value


def equilibrium_temperature(stellar_luminosity, distance, albedo=0.3):
    """Blackbody equilibrium temperature of a fast rotator"""
    flux = const.L_sun * stellar_luminosity / (4 * np.pi * (distance * u.AU) ** 2)
    return ((flux * (1 - albedo) / (4 * const.sigma_sb)) ** 0.25).to(u.K)

