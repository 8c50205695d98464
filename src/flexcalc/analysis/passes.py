"""Single-pass trajectory statistics.

Each function performs exactly one forward scan of a
:class:`~flexcalc.reader.FrameSource` that the caller has already
rewound.  None of them keeps more than the frame currently being read
plus its own running result, so memory use depends only on the number
of atoms per frame, never on the trajectory length.
"""

from __future__ import annotations

import logging

import numpy as np

from flexcalc._constants import MEAN_FRAME_LABEL
from flexcalc.analysis.rmsd import rmsd
from flexcalc.errors import AllocationError, EmptyTrajectoryError, MismatchError
from flexcalc.model import Frame
from flexcalc.reader import FrameSource

logger = logging.getLogger(__name__)


def _check_atom_count(frame: Frame, expected: int) -> None:
    if frame.n_atoms != expected:
        raise MismatchError(frame.label, expected, frame.n_atoms)


def count_frames(source: FrameSource) -> int:
    """Count the header lines in the trajectory.

    Coordinate lines are not parsed, so malformed coordinates are only
    reported by the passes that read them.
    """
    n_frames = sum(1 for _ in source.scan_headers())
    logger.debug("Counted %d frames", n_frames)
    return n_frames


def compute_mean_frame(source: FrameSource, n_frames: int) -> Frame:
    """Build the per-atom mean of every frame in the trajectory.

    The first frame fixes the reference atom count.  The source is then
    rewound and each frame's coordinates are divided by *n_frames*
    before being added to the running total, which keeps the sum on the
    scale of a single coordinate for long trajectories.

    Args:
        source: Rewound frame source.
        n_frames: Number of frames, as returned by :func:`count_frames`.

    Returns:
        A synthetic :class:`Frame` labelled ``"<mean>"``.

    Raises:
        EmptyTrajectoryError: If *n_frames* is less than one or the
            source yields no frames.
        MismatchError: If any frame's atom count differs from the first.
    """
    if n_frames < 1:
        raise EmptyTrajectoryError(
            f"cannot average a trajectory of {n_frames} frames"
        )

    first = source.read_frame()
    if first is None:
        raise EmptyTrajectoryError("trajectory contains no frames")
    n_atoms = first.n_atoms
    try:
        total = np.zeros((n_atoms, 3), dtype=float)
    except MemoryError as exc:
        raise AllocationError(
            f"cannot allocate mean frame of {n_atoms} atoms"
        ) from exc
    del first

    source.rewind()
    for frame in source:
        _check_atom_count(frame, n_atoms)
        total += frame.coords / n_frames

    logger.debug("Computed mean of %d frames with %d atoms", n_frames, n_atoms)
    return Frame(coords=total, label=MEAN_FRAME_LABEL)


def find_closest_frame(
    source: FrameSource, mean_frame: Frame,
) -> tuple[Frame, float]:
    """Find the trajectory frame with the lowest RMSD to *mean_frame*.

    Ties are resolved in favour of the earliest frame: a later frame
    only replaces the current best when its RMSD is strictly lower.

    Args:
        source: Rewound frame source.
        mean_frame: Mean frame from :func:`compute_mean_frame`.

    Returns:
        Tuple of ``(closest_frame, rmsd_to_mean)``.  The frame is an
        independent copy that keeps its original header label.

    Raises:
        EmptyTrajectoryError: If the source yields no frames.
        MismatchError: If any frame's atom count differs from the mean's.
    """
    best: Frame | None = None
    best_rmsd = 0.0

    for frame in source:
        _check_atom_count(frame, mean_frame.n_atoms)
        value = rmsd(mean_frame, frame)
        if best is None or value < best_rmsd:
            best = frame.copy()
            best_rmsd = value

    if best is None:
        raise EmptyTrajectoryError("trajectory contains no frames")
    logger.debug(
        "Closest frame to mean is %r (RMSD %.6f)", best.label, best_rmsd,
    )
    return best, best_rmsd


def compute_mean_rmsd(
    source: FrameSource, closest_frame: Frame, n_frames: int,
) -> float:
    """Average the RMSD of every frame against *closest_frame*.

    Args:
        source: Rewound frame source.
        closest_frame: Reference frame from :func:`find_closest_frame`.
        n_frames: Number of frames, as returned by :func:`count_frames`.

    Returns:
        The sum of per-frame RMSD values divided by *n_frames*.

    Raises:
        EmptyTrajectoryError: If *n_frames* is less than one.
        MismatchError: If any frame's atom count differs from the
            reference frame's.
    """
    if n_frames < 1:
        raise EmptyTrajectoryError(
            f"cannot average a trajectory of {n_frames} frames"
        )

    total = 0.0
    for frame in source:
        _check_atom_count(frame, closest_frame.n_atoms)
        total += rmsd(closest_frame, frame)

    mean = total / n_frames
    logger.debug("Mean RMSD over %d frames is %.6f", n_frames, mean)
    return mean
