from dataclasses import dataclass

import astropy.units as u

import protodisk.util.misc as misc
from protodisk.util import dole

# (lower mass bound in solar masses, class), checked in order
SPECTRAL_CLASSES = [
    (16.0, "O"),
    (2.1, "B"),
    (1.4, "A"),
    (1.04, "F"),
    (0.8, "G"),
    (0.45, "K"),
    (0.08, "M"),
]


@dataclass(frozen=True)
class StellarParams:
    """
    Stellar and protoplanetary cloud parameters of a single build. Fixed
    for the whole run.
    """

    stellar_mass: float
    stellar_luminosity: float
    dust_density_coeff: float = dole.DUST_DENSITY_COEFF
    k: float = dole.K
    cloud_eccentricity: float = dole.CLOUD_ECCENTRICITY
    b: float = dole.B


class Star:
    """
    The primary star of a system
    """

    def __init__(self, params):
        self.params = params
        self.mass = params.stellar_mass * u.M_sun
        self.luminosity = params.stellar_luminosity * u.L_sun
        self.spectral_type = spectral_class(params.stellar_mass)
        self.solve_dependent_params()

    def __repr__(self):
        return (
            f"{type(self).__name__} object\n"
            f"Type:{self.spectral_type}\tmass:{self.mass:.3f}\t"
            f"luminosity:{self.luminosity:.3f}"
        )

    def solve_dependent_params(self):
        stellar_mass = self.params.stellar_mass
        stellar_luminosity = self.params.stellar_luminosity
        if stellar_mass <= 0:
            self.radius = 0 * u.R_sun
            self.effective_temperature = 0 * u.K
            self.lifetime = 0 * u.yr
            self.ecosphere_radius = 0 * u.AU
            return

        # Main sequence mass-radius relation
        if stellar_mass < 1.0:
            self.radius = stellar_mass**0.8 * u.R_sun
        else:
            self.radius = stellar_mass**0.57 * u.R_sun
        self.effective_temperature = (
            5778
            * u.K
            * (stellar_luminosity / (self.radius.to(u.R_sun).value ** 2)) ** 0.25
        )
        if stellar_luminosity > 0:
            self.lifetime = (1.0e10 * stellar_mass / stellar_luminosity) * u.yr
        else:
            self.lifetime = float("inf") * u.yr
        self.ecosphere_radius = misc.ecosphere_radius(stellar_luminosity) * u.AU


def spectral_class(stellar_mass):
    for lower_bound, name in SPECTRAL_CLASSES:
        if stellar_mass >= lower_bound:
            return name
    if stellar_mass > 0.001:
        return "Brown dwarf"
    return "Rogue planet"
