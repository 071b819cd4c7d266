"""Removal threshold policy adapters."""

from .threshold import (
    FixedThresholdPolicy,
    MockThresholdPolicy,
    StaticThresholdPolicy,
)

__all__ = [
    "FixedThresholdPolicy",
    "MockThresholdPolicy",
    "StaticThresholdPolicy",
]
