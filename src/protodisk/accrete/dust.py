"""Radial bookkeeping of the dust and gas left in the protoplanetary cloud."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

import numpy as np

from protodisk.exceptions import DustBandInvariantError
from protodisk.util import dole

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DustBand:
    inner: float
    outer: float
    dust_present: bool = True
    gas_present: bool = True

    @property
    def width(self) -> float:
        return self.outer - self.inner

    def overlaps(self, inner: float, outer: float) -> bool:
        return self.inner < outer and self.outer > inner

    def same_flags(self, other: "DustBand") -> bool:
        return (
            self.dust_present == other.dust_present
            and self.gas_present == other.gas_present
        )


class DustBandTable:
    """
    Ordered, contiguous, non-overlapping set of dust bands. Every sweep
    re-validates the table and raises ``DustBandInvariantError`` if the
    bookkeeping is ever inconsistent.
    """

    def __init__(self, bands: List[DustBand]):
        self.bands = [band for band in bands if band.width > 0]
        self.sweeps = 0
        self.check_invariants()

    @classmethod
    def initialize(cls, stellar_mass: float) -> "DustBandTable":
        stellar_mass = max(stellar_mass, 0.0)
        inner = dole.inner_dust_limit(stellar_mass)
        outer = dole.outer_dust_limit(stellar_mass)
        return cls([DustBand(inner, outer, True, True)])

    def __len__(self):
        return len(self.bands)

    def __iter__(self):
        return iter(self.bands)

    def __repr__(self):
        rows = "\n".join(
            f"  [{band.inner:.6g}, {band.outer:.6g}] "
            f"dust={band.dust_present} gas={band.gas_present}"
            for band in self.bands
        )
        return f"{type(self).__name__} object\n{rows}"

    def dust_available(self, inner: float, outer: float) -> bool:
        if not outer > inner:
            return False
        return any(
            band.dust_present and band.overlaps(inner, outer) for band in self.bands
        )

    def sweep(self, inner: float, outer: float, gas_remains: bool) -> None:
        """
        Clear the dust, and the gas unless ``gas_remains``, between inner and
        outer. Bands straddling a boundary are split there and neighbours
        that end up with identical flags are merged back together.
        """
        if not outer > inner:
            return

        swept = []
        for band in self.bands:
            if not band.overlaps(inner, outer):
                swept.append(band)
                continue
            if band.inner < inner:
                swept.append(
                    DustBand(band.inner, inner, band.dust_present, band.gas_present)
                )
            swept.append(
                DustBand(
                    max(band.inner, inner),
                    min(band.outer, outer),
                    False,
                    band.gas_present and gas_remains,
                )
            )
            if band.outer > outer:
                swept.append(
                    DustBand(outer, band.outer, band.dust_present, band.gas_present)
                )

        self.bands = self._compress(swept)
        self.sweeps += 1
        self.check_invariants()
        logger.debug(
            "Swept [%.6g, %.6g] AU (gas_remains=%s), %d bands left",
            inner,
            outer,
            gas_remains,
            len(self.bands),
        )

    @staticmethod
    def _compress(bands):
        merged = []
        for band in bands:
            if not band.width > 0:
                continue
            if merged and merged[-1].same_flags(band) and merged[-1].outer == band.inner:
                previous = merged.pop()
                band = DustBand(
                    previous.inner, band.outer, band.dust_present, band.gas_present
                )
            merged.append(band)
        return merged

    def check_invariants(self) -> None:
        for band in self.bands:
            if not band.width > 0:
                raise DustBandInvariantError(
                    f"Dust band [{band.inner}, {band.outer}] has non-positive width"
                )
        for previous, band in zip(self.bands, self.bands[1:]):
            if band.inner < previous.outer:
                raise DustBandInvariantError(
                    f"Dust bands [{previous.inner}, {previous.outer}] and "
                    f"[{band.inner}, {band.outer}] overlap or are out of order"
                )
            if band.inner != previous.outer:
                raise DustBandInvariantError(
                    f"Gap between dust bands at {previous.outer} and {band.inner}"
                )

    def collect_dust(self, mass, a, e, environment) -> float:
        """
        Mass a body of the given mass and orbit would sweep up from the
        material left in the bands it reaches
        Args:
            mass (float):
                Current mass of the body in solar masses
            a (float):
                Semi-major axis in AU
            e (float):
                Eccentricity
            environment (StellarEnvironment):
                Stellar constants of the build
        Returns:
            float: collected mass in solar masses
        """
        params = environment.params
        r_inner = dole.inner_swept_limit(
            a, e, mass, params.stellar_mass, params.cloud_eccentricity
        )
        r_outer = dole.outer_swept_limit(
            a, e, mass, params.stellar_mass, params.cloud_eccentricity
        )
        bandwidth = r_outer - r_inner
        if not bandwidth > 0:
            return 0.0

        margin = dole.reduced_margin(mass, params.stellar_mass)
        crit_mass = environment.critical_mass(a, e)
        dust_density = environment.dust_density(a)

        collected = 0.0
        for band in self.bands:
            if not band.overlaps(r_inner, r_outer):
                continue
            band_dust = dust_density if band.dust_present else 0.0
            if band.gas_present:
                density = dole.mass_density(band_dust, crit_mass, mass, params.k)
            else:
                density = band_dust

            outside = max(r_outer - band.outer, 0.0)
            inside = max(band.inner - r_inner, 0.0)
            width = bandwidth - outside - inside
            volume = (
                4.0
                * np.pi
                * a**2
                * margin
                * (1.0 - e * (outside - inside) / bandwidth)
                * width
            )
            collected += volume * density
        return collected
