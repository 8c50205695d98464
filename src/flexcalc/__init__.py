"""flexcalc: flexibility scores for long molecular-dynamics trajectories.

The flexibility score of a trajectory is the mean RMSD of every frame
to the frame closest to the trajectory's mean structure.  It is computed
by re-reading the trajectory file once per statistic, so only a single
frame is ever held in memory.

Example usage::

    from flexcalc import compute_flexibility

    result = compute_flexibility("trajectory.txt")
    print(result.format_score())
"""

from flexcalc.analysis import (
    compute_mean_frame,
    compute_mean_rmsd,
    count_frames,
    find_closest_frame,
    rmsd,
)
from flexcalc.config import FlexcalcConfig, load_config, save_config
from flexcalc.errors import (
    AllocationError,
    EmptyTrajectoryError,
    FlexcalcError,
    FormatError,
    MismatchError,
    PipelineStateError,
)
from flexcalc.model import Frame
from flexcalc.pipeline import (
    FlexibilityPipeline,
    FlexibilityResult,
    PipelineState,
    compute_flexibility,
)
from flexcalc.reader import FrameSource
from flexcalc.synthetic import write_random_trajectory

__all__ = [
    "AllocationError",
    "EmptyTrajectoryError",
    "FlexcalcConfig",
    "FlexcalcError",
    "FlexibilityPipeline",
    "FlexibilityResult",
    "FormatError",
    "Frame",
    "FrameSource",
    "MismatchError",
    "PipelineState",
    "PipelineStateError",
    "compute_flexibility",
    "compute_mean_frame",
    "compute_mean_rmsd",
    "count_frames",
    "find_closest_frame",
    "load_config",
    "rmsd",
    "save_config",
    "write_random_trajectory",
]
