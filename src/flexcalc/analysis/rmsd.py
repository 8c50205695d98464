"""Root-mean-square deviation between two frames."""

from __future__ import annotations

import numpy as np

from flexcalc.errors import MismatchError
from flexcalc.model import Frame


def rmsd(reference: Frame, frame: Frame) -> float:
    """Return the RMSD between two frames of equal atom count.

    No superposition is performed: the deviation is taken between
    corresponding atoms exactly as they are stored.  The result is
    symmetric in its two arguments.

    Args:
        reference: First frame.
        frame: Second frame.  Its label is reported on mismatch.

    Returns:
        ``sqrt(mean_i |reference_i - frame_i|^2)``.

    Raises:
        MismatchError: If the frames hold different numbers of atoms.
        ValueError: If the frames hold no atoms.
    """
    if frame.n_atoms != reference.n_atoms:
        raise MismatchError(frame.label, reference.n_atoms, frame.n_atoms)
    if reference.n_atoms == 0:
        raise ValueError("RMSD is undefined for frames with no atoms")
    diff = reference.coords - frame.coords
    return float(np.sqrt(np.mean(np.sum(diff * diff, axis=1))))
