"""
Error taxonomy for the tide engine.

Every error is a synchronous, local failure caused by bad input; retrying
with the same input fails the same way.  All of them derive from
:class:`ValueError` so existing ``except ValueError`` handlers keep working.

Degraded-but-successful paths (extrapolated dates, refinement fallback,
strength above the nominal ceiling) are not errors; they return a
best-effort result.
"""
from __future__ import annotations


class TideCalculationError(ValueError):
    """Base class for all tide engine input errors."""


class InvalidInputError(TideCalculationError):
    """Null, NaN or unparseable instant, or a non-finite numeric input."""


class EmptyConstituentsError(TideCalculationError):
    """Harmonic-constant list is empty where at least one is required."""


class UnknownConstituentError(TideCalculationError):
    """Constituent name not present in the constituent table."""

    def __init__(self, name: object):
        self.name = name
        super().__init__(f"Unknown tidal constituent: {name!r}")


class InvalidRangeError(TideCalculationError):
    """Search window whose end is not after its start."""


class InvalidDistanceFactorError(TideCalculationError):
    """Non-positive normalised moon-distance factor."""
