from __future__ import annotations

from dataclasses import dataclass

from protodisk.base.star import StellarParams
from protodisk.util import dole


@dataclass(frozen=True)
class StellarEnvironment:
    """
    Constants derived once from the stellar parameters: the extent of the
    dust cloud and of the region where planet nuclei are injected.
    """

    params: StellarParams
    inner_dust_limit: float
    outer_dust_limit: float
    inner_planet_limit: float
    outer_planet_limit: float

    @classmethod
    def from_params(cls, params: StellarParams) -> "StellarEnvironment":
        stellar_mass = max(params.stellar_mass, 0.0)
        return cls(
            params=params,
            inner_dust_limit=dole.inner_dust_limit(stellar_mass),
            outer_dust_limit=dole.outer_dust_limit(stellar_mass),
            inner_planet_limit=dole.innermost_planet(stellar_mass),
            outer_planet_limit=dole.outermost_planet(stellar_mass),
        )

    @property
    def degenerate(self) -> bool:
        """True when no planet can ever form in this environment"""
        return (
            self.params.stellar_mass <= 0
            or self.params.stellar_luminosity <= 0
            or not -1.0 < self.params.cloud_eccentricity < 1.0
            or self.outer_planet_limit <= self.inner_planet_limit
            or self.outer_dust_limit <= self.inner_planet_limit
        )

    def critical_mass(self, a: float, e: float) -> float:
        return dole.critical_mass(a, e, self.params.stellar_luminosity, self.params.b)

    def dust_density(self, a: float) -> float:
        return dole.dust_density(
            self.params.stellar_mass, a, self.params.dust_density_coeff
        )

    def swept_limits(self, body) -> tuple[float, float]:
        """Swept interval of a body orbiting the star"""
        return body.swept_limits(
            self.params.stellar_mass, self.params.cloud_eccentricity
        )
