"""Random trajectory generation for testing and benchmarking."""

from __future__ import annotations

import logging
from typing import TextIO

import numpy as np

from flexcalc._constants import HEADER_MARKER

logger = logging.getLogger(__name__)


def write_random_trajectory(
    handle: TextIO,
    n_frames: int = 10000,
    n_atoms: int = 250,
    *,
    box: float = 100.0,
    seed: int | None = None,
    marker: str = HEADER_MARKER,
) -> None:
    """Write a trajectory of uniformly random coordinates.

    Frames are generated and written one at a time, so arbitrarily long
    trajectories can be produced in constant memory.  Headers are the
    0-based frame index and coordinates are written to three decimal
    places, each in ``[0, box)``.

    Args:
        handle: Writable text stream.
        n_frames: Number of frames to write.
        n_atoms: Number of atoms per frame.
        box: Upper bound of every coordinate.
        seed: Seed for :func:`numpy.random.default_rng`.
        marker: Header marker character.

    Raises:
        ValueError: If *n_frames* is negative, *n_atoms* is less than
            one, or *box* is not positive.
    """
    if n_frames < 0:
        raise ValueError(f"n_frames must be non-negative, got {n_frames}")
    if n_atoms < 1:
        raise ValueError(f"n_atoms must be at least 1, got {n_atoms}")
    if box <= 0:
        raise ValueError(f"box must be positive, got {box}")

    rng = np.random.default_rng(seed)
    for index in range(n_frames):
        handle.write(f"{marker}{index}\n")
        coords = rng.uniform(0.0, box, size=(n_atoms, 3))
        handle.writelines(
            f"{x:.3f} {y:.3f} {z:.3f}\n" for x, y, z in coords
        )
    logger.debug("Wrote %d random frames of %d atoms", n_frames, n_atoms)
