"""Service module exports."""

from . import habits, labels, validation

__all__ = [
    "habits",
    "labels",
    "validation",
]
