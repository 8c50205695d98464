"""Multi-pass flexibility score pipeline.

The score is computed in four passes over the same rewindable stream:

1. count the frames;
2. average the coordinates into a mean frame;
3. find the real frame closest to that mean;
4. average the RMSD of every frame against the closest frame.

Each pass depends on the complete result of the one before it, so the
passes run strictly in sequence and the stream is rewound in between.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from flexcalc.analysis.passes import (
    compute_mean_frame,
    compute_mean_rmsd,
    count_frames,
    find_closest_frame,
)
from flexcalc.config import FlexcalcConfig
from flexcalc.errors import (
    AllocationError,
    EmptyTrajectoryError,
    PipelineStateError,
)
from flexcalc.model import Frame
from flexcalc.reader import FrameSource

logger = logging.getLogger(__name__)


class PipelineState(StrEnum):
    """Progress of a :class:`FlexibilityPipeline`."""

    INIT = "init"
    COUNTED = "counted"
    MEAN_COMPUTED = "mean_computed"
    CLOSEST_FOUND = "closest_found"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class FlexibilityResult:
    """Outcome of a completed pipeline run.

    Attributes:
        n_frames: Number of frames in the trajectory.
        n_atoms: Reference atom count.
        mean_frame: Per-atom mean of all frames.
        closest_frame: Copy of the frame closest to the mean.
        closest_rmsd: RMSD between *closest_frame* and *mean_frame*.
        mean_rmsd: Mean RMSD of all frames against *closest_frame*;
            the flexibility score.
    """

    n_frames: int
    n_atoms: int
    mean_frame: Frame
    closest_frame: Frame
    closest_rmsd: float
    mean_rmsd: float

    def format_score(self, precision: int = 4) -> str:
        """Return the score as a fixed-point string."""
        return f"{self.mean_rmsd:.{precision}f}"


class FlexibilityPipeline:
    """State machine driving the four passes over one frame source.

    The pipeline moves ``INIT -> COUNTED -> MEAN_COMPUTED ->
    CLOSEST_FOUND -> DONE``.  Any error moves it to ``FAILED``, which is
    final.  A ``DONE`` pipeline may be run again; the stream is rewound
    so the result is identical.

    Args:
        source: Frame source over a seekable stream.
    """

    def __init__(self, source: FrameSource) -> None:
        self.source = source
        self.state = PipelineState.INIT
        self.n_frames = 0
        self.mean_frame: Frame | None = None
        self.closest_frame: Frame | None = None
        self.closest_rmsd: float | None = None
        self.mean_rmsd: float | None = None

    def _count(self) -> None:
        self.n_frames = count_frames(self.source)
        if self.n_frames == 0:
            raise EmptyTrajectoryError("no frame header lines found")
        self.state = PipelineState.COUNTED

    def _mean(self) -> None:
        self.mean_frame = compute_mean_frame(self.source, self.n_frames)
        self.state = PipelineState.MEAN_COMPUTED

    def _closest(self) -> None:
        self.closest_frame, self.closest_rmsd = find_closest_frame(
            self.source, self.mean_frame,
        )
        self.state = PipelineState.CLOSEST_FOUND

    def _average(self) -> None:
        self.mean_rmsd = compute_mean_rmsd(
            self.source, self.closest_frame, self.n_frames,
        )
        self.state = PipelineState.DONE

    def run(self) -> FlexibilityResult:
        """Run every pass and return the result.

        Raises:
            PipelineStateError: If the pipeline has already failed.
            FlexcalcError: Any error raised by a pass.  The pipeline is
                left in the ``FAILED`` state by this or any other
                exception.
        """
        if self.state is PipelineState.FAILED:
            raise PipelineStateError("cannot rerun a failed pipeline")
        self.state = PipelineState.INIT

        try:
            for step in (self._count, self._mean, self._closest, self._average):
                self.source.rewind()
                step()
                logger.debug("Pipeline state: %s", self.state)
            self.source.rewind()
        except MemoryError as exc:
            self.state = PipelineState.FAILED
            if isinstance(exc, AllocationError):
                raise
            raise AllocationError("out of memory while reading frames") from exc
        except Exception:
            self.state = PipelineState.FAILED
            raise

        logger.info(
            "Flexibility of %d frames x %d atoms: %.4f (closest frame %r)",
            self.n_frames,
            self.mean_frame.n_atoms,
            self.mean_rmsd,
            self.closest_frame.label,
        )
        return FlexibilityResult(
            n_frames=self.n_frames,
            n_atoms=self.mean_frame.n_atoms,
            mean_frame=self.mean_frame,
            closest_frame=self.closest_frame,
            closest_rmsd=self.closest_rmsd,
            mean_rmsd=self.mean_rmsd,
        )


def compute_flexibility(
    path: str | Path, config: FlexcalcConfig | None = None,
) -> FlexibilityResult:
    """Compute the flexibility score of a trajectory file.

    Args:
        path: Path to a header-delimited trajectory file.
        config: Optional settings; only ``marker`` is used here.

    Returns:
        The :class:`FlexibilityResult` of the run.

    Raises:
        OSError: If the file cannot be opened.
        FlexcalcError: If the trajectory is empty or malformed.
    """
    if config is None:
        config = FlexcalcConfig()
    logger.debug("Reading trajectory from %s", path)
    with open(path, encoding="utf-8") as handle:
        source = FrameSource(handle, marker=config.marker)
        return FlexibilityPipeline(source).run()
