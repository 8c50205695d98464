"""Core data model for flexcalc.

Everything is re-exported here so that ``from flexcalc.model import
Frame`` works.
"""

from flexcalc.model.frame import Frame

__all__ = [
    "Frame",
]
