"""Exception hierarchy for flexcalc.

Every error raised by the library derives from :class:`FlexcalcError`.
The format and mismatch errors are also :class:`ValueError` subclasses
so callers that only care about bad input can catch those.
"""

from __future__ import annotations


class FlexcalcError(Exception):
    """Base class for all flexcalc errors."""

    kind = "error"


class EmptyTrajectoryError(FlexcalcError):
    """Raised when a trajectory contains no header lines."""

    kind = "empty trajectory"


class FormatError(FlexcalcError, ValueError):
    """Raised when a trajectory line cannot be parsed.

    Attributes:
        line_number: 1-based line number of the offending line, or
            ``None`` if not known.
        header: Header of the frame being read, if one had been seen.
    """

    kind = "format error"

    def __init__(
        self,
        message: str,
        *,
        line_number: int | None = None,
        header: str | None = None,
    ) -> None:
        self.line_number = line_number
        self.header = header
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class MismatchError(FlexcalcError, ValueError):
    """Raised when a frame's atom count differs from the reference count.

    Attributes:
        header: Header of the offending frame.
        expected: Reference atom count.
        found: Atom count of the offending frame.
    """

    kind = "atom count mismatch"

    def __init__(self, header: str, expected: int, found: int) -> None:
        self.header = header
        self.expected = expected
        self.found = found
        super().__init__(
            f"frame {header!r} has {found} atoms, expected {expected}"
        )


class AllocationError(FlexcalcError, MemoryError):
    """Raised when memory runs out while building a frame."""

    kind = "allocation failure"


class PipelineStateError(FlexcalcError, RuntimeError):
    """Raised when a pipeline is driven from a state that forbids it."""

    kind = "pipeline state error"
