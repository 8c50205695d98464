from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from flexcalc.errors import AllocationError


@dataclass(frozen=True, eq=False)
class Frame:
    """A single snapshot of atomic coordinates.

    Frames are immutable: the coordinate array is made read-only on
    construction.  Use :meth:`copy` to obtain an independent frame that
    owns its own array.

    Attributes:
        coords: Cartesian coordinates, shape ``(n_atoms, 3)``.
        label: Frame header text.

    Raises:
        ValueError: If *coords* does not have shape ``(n_atoms, 3)``.
        AllocationError: If the coordinate array cannot be allocated.
    """

    coords: np.ndarray
    label: str = ""

    def __post_init__(self) -> None:
        try:
            coords = np.array(self.coords, dtype=float)
        except MemoryError as exc:
            raise AllocationError(
                f"cannot allocate coordinates for frame {self.label!r}"
            ) from exc
        if coords.ndim != 2 or coords.shape[1] != 3:
            raise ValueError(
                f"coords must have shape (n_atoms, 3), got {coords.shape}"
            )
        coords.flags.writeable = False
        object.__setattr__(self, "coords", coords)

    @property
    def n_atoms(self) -> int:
        """Number of atoms in the frame."""
        return int(self.coords.shape[0])

    def copy(self, label: str | None = None) -> Frame:
        """Return an independent copy, optionally with a new label."""
        return Frame(
            coords=self.coords,
            label=self.label if label is None else label,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Frame):
            return NotImplemented
        return (
            self.label == other.label
            and np.array_equal(self.coords, other.coords)
        )
