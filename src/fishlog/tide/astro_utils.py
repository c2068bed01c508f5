"""
Time and angle helpers shared by the astronomical and harmonic modules.

Instants are normalised to timezone-aware UTC :class:`pandas.Timestamp`
values; angle helpers accept scalars or numpy arrays.
"""
from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd

from .exceptions import InvalidInputError

J2000_EPOCH = pd.Timestamp('2000-01-01T12:00:00', tz='UTC')
"""J2000.0 epoch (Julian day 2451545.0)."""

DAYS_PER_JULIAN_CENTURY = 36525.0
HOURS_PER_JULIAN_CENTURY = DAYS_PER_JULIAN_CENTURY * 24.0

_ONE_HOUR = pd.Timedelta(hours=1)


def to_utc_timestamp(instant: Any) -> pd.Timestamp:
    """
    Parse *instant* into a timezone-aware UTC timestamp.

    Naive values are interpreted as UTC.

    Raises
    ------
    InvalidInputError
        If *instant* is ``None``, NaN/NaT, unparseable or outside the
        range pandas can represent.
    """
    if instant is None:
        raise InvalidInputError('Instant is required.')
    try:
        ts = pd.Timestamp(instant)
    except (TypeError, ValueError, OverflowError) as exc:
        raise InvalidInputError(f"Invalid instant provided: {instant!r}") from exc
    if pd.isna(ts):
        raise InvalidInputError(f"Invalid instant provided: {instant!r}")
    if ts.tzinfo is None:
        return ts.tz_localize('UTC')
    return ts.tz_convert('UTC')


def to_utc_index(time: Any) -> pd.DatetimeIndex:
    """Vector form of :func:`to_utc_timestamp`."""
    try:
        index = pd.DatetimeIndex(time)
    except (TypeError, ValueError, OverflowError) as exc:
        raise InvalidInputError('Invalid prediction times provided.') from exc
    if index.hasnans:
        raise InvalidInputError('Prediction times must not contain NaT.')
    if index.tz is None:
        return index.tz_localize('UTC')
    return index.tz_convert('UTC')


def hours_since_j2000(time: pd.Timestamp | pd.DatetimeIndex) -> float | np.ndarray:
    """Elapsed hours since J2000.0 for a UTC timestamp or index."""
    delta = time - J2000_EPOCH
    if isinstance(delta, pd.Timedelta):
        return delta / _ONE_HOUR
    return np.asarray(delta / _ONE_HOUR, dtype=float)


def julian_centuries(time: pd.Timestamp | pd.DatetimeIndex) -> float | np.ndarray:
    """Julian centuries since J2000.0."""
    return hours_since_j2000(time) / HOURS_PER_JULIAN_CENTURY


def normalize_angle(angle):
    """Wrap degrees into [0, 360)."""
    return np.mod(angle, 360.0)


def wrap_angle(angle):
    """Wrap degrees into (-180, 180]."""
    wrapped = 180.0 - np.mod(180.0 - np.asarray(angle, dtype=float), 360.0)
    if wrapped.ndim == 0:
        return float(wrapped)
    return wrapped


def polynomial(t, coeffs: tuple[float, ...]):
    """Evaluate ``c0 + c1*t + c2*t**2 + ...`` (Horner form)."""
    result = 0.0
    for c in reversed(coeffs):
        result = result * t + c
    return result
