import numpy as np
import pytest

from protodisk import DustBand, DustBandInvariantError, DustBandTable


def _flags_at(table, r):
    for band in table:
        if band.inner <= r < band.outer:
            return band.dust_present, band.gas_present
    return None


def test_initialize_covers_the_whole_cloud() -> None:
    table = DustBandTable.initialize(1.0)
    assert len(table) == 1
    band = table.bands[0]
    assert band.inner == 0.0
    assert band.outer == pytest.approx(200.0)
    assert band.dust_present and band.gas_present


def test_initialize_with_no_mass_gives_an_empty_table() -> None:
    assert len(DustBandTable.initialize(0.0)) == 0
    assert len(DustBandTable.initialize(-1.0)) == 0


def test_sweep_splits_the_band_it_falls_in() -> None:
    table = DustBandTable.initialize(1.0)
    table.sweep(1.0, 2.0, gas_remains=True)

    assert [(band.inner, band.outer) for band in table] == [
        (0.0, 1.0),
        (1.0, 2.0),
        (2.0, table.bands[-1].outer),
    ]
    assert [(band.dust_present, band.gas_present) for band in table] == [
        (True, True),
        (False, True),
        (True, True),
    ]


def test_adjacent_swept_regions_merge_back_together() -> None:
    table = DustBandTable.initialize(1.0)
    table.sweep(1.0, 2.0, gas_remains=True)
    table.sweep(2.0, 3.0, gas_remains=True)

    assert len(table) == 3
    assert (table.bands[1].inner, table.bands[1].outer) == (1.0, 3.0)


def test_gas_is_only_cleared_when_it_does_not_remain() -> None:
    table = DustBandTable.initialize(1.0)
    table.sweep(1.0, 3.0, gas_remains=True)
    table.sweep(1.5, 2.5, gas_remains=False)

    assert _flags_at(table, 1.2) == (False, True)
    assert _flags_at(table, 2.0) == (False, False)
    assert _flags_at(table, 2.7) == (False, True)
    assert _flags_at(table, 0.5) == (True, True)


def test_sweeping_an_empty_interval_changes_nothing() -> None:
    table = DustBandTable.initialize(1.0)
    table.sweep(2.0, 2.0, gas_remains=False)
    table.sweep(3.0, 1.0, gas_remains=False)
    assert len(table) == 1
    assert table.sweeps == 0


def test_invariants_and_monotonic_flags_hold_over_random_sweeps() -> None:
    rng = np.random.default_rng(7)
    table = DustBandTable.initialize(1.0)
    outer_limit = table.bands[-1].outer
    radii = np.arange(0.123, outer_limit, 0.5)
    previous = [_flags_at(table, r) for r in radii]

    for _ in range(300):
        inner = rng.uniform(0.0, outer_limit)
        table.sweep(inner, inner + rng.uniform(0.0, 20.0), bool(rng.integers(2)))

        assert table.bands[0].inner == 0.0
        assert table.bands[-1].outer == outer_limit
        for band, following in zip(table.bands, table.bands[1:]):
            assert band.width > 0
            assert band.outer == following.inner
            assert not band.same_flags(following)

        current = [_flags_at(table, r) for r in radii]
        for (dust_before, gas_before), (dust_now, gas_now) in zip(previous, current):
            assert dust_now <= dust_before
            assert gas_now <= gas_before
        previous = current


def test_overlapping_bands_are_rejected() -> None:
    with pytest.raises(DustBandInvariantError):
        DustBandTable([DustBand(0.0, 2.0), DustBand(1.0, 3.0)])


def test_gaps_between_bands_are_rejected() -> None:
    with pytest.raises(DustBandInvariantError):
        DustBandTable([DustBand(0.0, 1.0), DustBand(2.0, 3.0)])


def test_zero_width_bands_are_dropped() -> None:
    table = DustBandTable([DustBand(0.0, 1.0), DustBand(1.0, 1.0), DustBand(1.0, 2.0)])
    assert len(table) == 2


def test_dust_available() -> None:
    table = DustBandTable.initialize(1.0)
    assert table.dust_available(0.3, 50.0)
    assert not table.dust_available(5.0, 5.0)

    table.sweep(0.0, 250.0, gas_remains=True)
    assert not table.dust_available(0.3, 50.0)


def test_collect_dust_from_a_fresh_cloud(environment) -> None:
    table = DustBandTable.initialize(1.0)
    assert table.collect_dust(1.0e-15, 1.0, 0.0, environment) > 0.0


def test_collect_dust_from_a_swept_cloud(environment) -> None:
    table = DustBandTable.initialize(1.0)
    table.sweep(0.0, 250.0, gas_remains=True)
    assert table.collect_dust(1.0e-4, 1.0, 0.0, environment) == 0.0


def test_gas_is_collected_above_the_critical_mass(environment) -> None:
    with_gas = DustBandTable([DustBand(0.0, 200.0, True, True)])
    without_gas = DustBandTable([DustBand(0.0, 200.0, True, False)])

    heavy = 1.0e-4
    assert heavy > environment.critical_mass(1.0, 0.0)
    assert with_gas.collect_dust(heavy, 1.0, 0.0, environment) > without_gas.collect_dust(
        heavy, 1.0, 0.0, environment
    )

    light = 1.0e-7
    assert with_gas.collect_dust(light, 1.0, 0.0, environment) == pytest.approx(
        without_gas.collect_dust(light, 1.0, 0.0, environment)
    )
