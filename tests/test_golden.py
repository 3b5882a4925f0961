import os
from pathlib import Path

import pytest

from protodisk import Accrete

FIXTURE = Path(__file__).parent / "fixtures" / "golden_seed_1.txt"

GOLDEN_PARAMS = {
    "seed": 1,
    "dust_density_coeff": 0.0015,
    "k": 50.0,
    "cloud_eccentricity": 0.2,
    "b": 1.2e-5,
}


def test_seed_1_matches_the_stored_system() -> None:
    record = repr(Accrete.from_dict(GOLDEN_PARAMS).planetary_system().record())

    # Only rewritten on request, a changed system must be reviewed first
    if os.environ.get("GENERATE_FIXTURES", "").lower() == "true":
        FIXTURE.parent.mkdir(parents=True, exist_ok=True)
        FIXTURE.write_text(record + "\n")

    if not FIXTURE.exists():
        pytest.fail(
            f"Missing {FIXTURE}, record it with "
            "GENERATE_FIXTURES=true pytest tests/test_golden.py"
        )
    assert FIXTURE.read_text().strip() == record
