"""Streaming reader for header-delimited trajectory files.

A trajectory file is a sequence of frames.  Each frame opens with a
header line whose first character is the marker (``>`` by default) and
continues with one ``x y z`` line per atom::

    >frame 1
    0.000 1.000 2.000
    3.000 4.000 5.000
    >frame 2
    ...

:class:`FrameSource` hands back one frame at a time so that a whole
trajectory never has to fit in memory.  Each analysis pass rewinds the
source and reads it again from the start.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TextIO

import numpy as np

from flexcalc._constants import HEADER_MARKER
from flexcalc.errors import AllocationError, FormatError
from flexcalc.model import Frame

logger = logging.getLogger(__name__)


def _parse_coordinate_line(
    text: str, line_number: int, header: str | None,
) -> tuple[float, float, float]:
    """Parse one ``x y z`` line into a float triple."""
    parts = text.split()
    if len(parts) != 3:
        raise FormatError(
            f"expected 3 coordinates, got {len(parts)}: {text.strip()!r}",
            line_number=line_number,
            header=header,
        )
    try:
        return (float(parts[0]), float(parts[1]), float(parts[2]))
    except ValueError:
        raise FormatError(
            f"cannot parse coordinates: {text.strip()!r}",
            line_number=line_number,
            header=header,
        ) from None


class FrameSource:
    """Restartable frame-at-a-time parser over a seekable text stream.

    The reader keeps one line of lookahead: finishing a frame means
    reading the header line of the next one, so that header is cached
    and used to label the frame returned by the following call.

    Args:
        handle: Open, seekable text stream.
        marker: Character that introduces a header line.

    Example::

        with open("traj.txt") as handle:
            source = FrameSource(handle)
            for frame in source:
                ...
            source.rewind()
    """

    def __init__(self, handle: TextIO, marker: str = HEADER_MARKER) -> None:
        if len(marker) != 1 or marker.isspace():
            raise ValueError(
                f"marker must be a single non-whitespace character, got {marker!r}"
            )
        self._handle = handle
        self._marker = marker
        self.reset()

    @property
    def marker(self) -> str:
        """Character that introduces a header line."""
        return self._marker

    def reset(self) -> None:
        """Re-arm the parser for a new pass.

        Must be paired with rewinding the underlying stream; use
        :meth:`rewind` to do both.
        """
        self._pending_header: str | None = None
        self._first_marker = True
        self._line_number = 0

    def rewind(self) -> None:
        """Seek the stream back to its start and reset the parser."""
        self._handle.seek(0)
        self.reset()
        logger.debug("Rewound trajectory stream")

    def _readline(self) -> str | None:
        try:
            line = self._handle.readline()
        except UnicodeDecodeError as exc:
            raise FormatError(
                f"cannot decode {exc.encoding} text: {exc.reason}",
            ) from exc
        if not line:
            return None
        self._line_number += 1
        return line.rstrip("\r\n")

    def read_frame(self) -> Frame | None:
        """Read the next frame from the stream.

        Returns:
            The next :class:`Frame`, or ``None`` once the stream holds
            no further frames.

        Raises:
            FormatError: If a coordinate line is not exactly three
                numbers, coordinates appear before the first header, or
                a header is followed by no coordinates.
            AllocationError: If memory runs out while building the frame.
        """
        header = self._pending_header
        self._pending_header = None
        header_line = self._line_number
        rows: list[tuple[float, float, float]] = []

        while True:
            text = self._readline()
            if text is None:
                break
            if text.startswith(self._marker):
                label = text[1:].strip()
                if self._first_marker:
                    # The first header opens a frame rather than closing one.
                    self._first_marker = False
                    header = label
                    header_line = self._line_number
                    continue
                self._pending_header = label
                break
            if not text.strip():
                continue
            if header is None:
                raise FormatError(
                    "coordinates found before the first header line",
                    line_number=self._line_number,
                )
            rows.append(_parse_coordinate_line(text, self._line_number, header))

        if header is None:
            return None
        if not rows:
            raise FormatError(
                f"frame {header!r} contains no coordinates",
                line_number=header_line,
                header=header,
            )
        try:
            coords = np.array(rows, dtype=float)
        except MemoryError as exc:
            raise AllocationError(
                f"cannot allocate {len(rows)} atoms for frame {header!r}"
            ) from exc
        return Frame(coords=coords, label=header)

    def __iter__(self) -> Iterator[Frame]:
        while True:
            frame = self.read_frame()
            if frame is None:
                return
            yield frame

    def scan_headers(self) -> Iterator[str]:
        """Yield the text of every header line without parsing coordinates.

        This consumes the stream; call :meth:`rewind` afterwards.
        """
        while True:
            text = self._readline()
            if text is None:
                return
            if text.startswith(self._marker):
                yield text[1:].strip()
