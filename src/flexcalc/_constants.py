"""Shared constants used across the reader, pipeline, and CLI."""

HEADER_MARKER: str = ">"
"""First character of a line that opens a new frame."""

MEAN_FRAME_LABEL: str = "<mean>"
"""Placeholder label carried by the synthetic mean frame."""

DEFAULT_PRECISION: int = 4
"""Decimal places used when printing the flexibility score."""
