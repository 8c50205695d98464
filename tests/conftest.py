"""Shared test fixtures for flexcalc."""

import io
from pathlib import Path

import pytest

from flexcalc.reader import FrameSource

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def two_frames_path():
    """Return the path to the two-frame, one-atom fixture."""
    return FIXTURES_DIR / "two_frames.traj"


@pytest.fixture
def three_frames_path():
    """Return the path to the three-frame, one-atom fixture."""
    return FIXTURES_DIR / "three_frames.traj"


@pytest.fixture
def water_path():
    """Return the path to the three-frame water fixture."""
    return FIXTURES_DIR / "water.traj"


@pytest.fixture
def mismatch_path():
    """Return the path to a fixture whose second frame is short one atom."""
    return FIXTURES_DIR / "mismatch.traj"


@pytest.fixture
def make_source():
    """Return a factory building a FrameSource over inline text."""

    def _make(text, **kwargs):
        return FrameSource(io.StringIO(text), **kwargs)

    return _make
