from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def test_data_dir() -> Path:
    return Path(__file__).parent / "testdata"


@pytest.fixture(scope="session")
def regions_bed_path(test_data_dir: Path) -> Path:
    return test_data_dir / "regions.bed"
