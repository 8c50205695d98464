"""Trajectory analysis: the RMSD primitive and the streaming passes."""

from flexcalc.analysis.passes import (
    compute_mean_frame,
    compute_mean_rmsd,
    count_frames,
    find_closest_frame,
)
from flexcalc.analysis.rmsd import rmsd

__all__ = [
    "compute_mean_frame",
    "compute_mean_rmsd",
    "count_frames",
    "find_closest_frame",
    "rmsd",
]
