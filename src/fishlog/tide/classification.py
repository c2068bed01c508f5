"""
Tide-type classification and tidal intensity score.

The five-way classification (spring, neap, medium, long, young) is a pure
function of lunar age read off a fixed day-range table.  The intensity
score combines a smooth lunar-age term peaking at new and full moon with
a perigee/apogee correction and a mild boost around the equinoxes; it is
nominally 0-100 but may exceed 100 at perigee (hard cap 120).
"""
from __future__ import annotations

import logging
from typing import Any

import numpy as np
import pandas as pd

from .astro_utils import to_utc_timestamp
from .celestial import SYNODIC_MONTH, calculate_moon_phase
from .exceptions import InvalidDistanceFactorError, InvalidInputError
from .models import MoonPhase, TideType

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Day-range table.  Intervals are (low, high, low_inclusive, high_inclusive)
# in days of lunar age; the first matching type wins, medium is the rest.
# ---------------------------------------------------------------------------

AGE_WRAP = 29.53
"""Ages at or above this are treated as a new moon (age 0)."""

TIDE_TYPE_RANGES: list[tuple[TideType, tuple[tuple[float, float, bool, bool], ...]]] = [
    (TideType.SPRING, (
        (0.0, 2.5, True, True),
        (27.5, AGE_WRAP, True, False),
        (12.0, 17.5, True, True),
    )),
    (TideType.NEAP, (
        (5.5, 9.0, True, True),
        (20.0, 24.0, True, True),
    )),
    (TideType.LONG, (
        (9.0, 10.5, False, True),
        (24.0, 25.5, False, True),
    )),
    (TideType.YOUNG, (
        (10.5, 12.0, False, False),
        (25.5, 27.5, False, False),
    )),
]
"""Ordered lunar-age ranges for every tide type except medium."""

FULL_MOON_AGE = 14.77
BASE_STRENGTH_MIN = 10.0
BASE_STRENGTH_SPAN = 40.0

DISTANCE_FACTOR_RANGE = (0.8, 1.2)
"""Practical range of the normalised moon distance; outside it a warning is logged."""

DISTANCE_CORRECTION_LIMITS = (0.8, 1.3)

SEASONAL_EQUINOX_DAYS = (79, 265)
SEASONAL_WINDOW_DAYS = 30
SEASONAL_AMPLITUDE = 0.1
SEASONAL_DECAY_DAYS = 15.0
"""Equinox boost: ``1 + 0.1*exp(-d/15)`` within 30 days of day 79 or 265."""

MAX_STRENGTH = 120


def _in_range(age: float, bounds: tuple[float, float, bool, bool]) -> bool:
    low, high, low_inclusive, high_inclusive = bounds
    above = age >= low if low_inclusive else age > low
    below = age <= high if high_inclusive else age < high
    return above and below


def _validate_moon_phase(moon_phase: MoonPhase) -> float:
    if moon_phase is None:
        raise InvalidInputError('Moon phase is required.')
    age = float(moon_phase.age)
    illumination = float(moon_phase.illumination)
    if not np.isfinite(age) or not 0.0 <= age <= SYNODIC_MONTH:
        raise InvalidInputError(
            f"Invalid moon age {moon_phase.age}: must be between 0 and {SYNODIC_MONTH}."
        )
    if not np.isfinite(illumination) or not 0.0 <= illumination <= 1.0:
        raise InvalidInputError(
            f"Invalid illumination {moon_phase.illumination}: must be between 0 and 1."
        )
    return age


def classify_tide_type(moon_phase: MoonPhase) -> TideType:
    """
    Classify the tide from lunar age.

    Parameters
    ----------
    moon_phase : MoonPhase
        Only ``age`` decides the type; ``illumination`` is validated.

    Returns
    -------
    TideType

    Raises
    ------
    InvalidInputError
        If the age is outside [0, synodic month] or the illumination
        outside [0, 1].
    """
    age = _validate_moon_phase(moon_phase)
    if age >= AGE_WRAP:
        age = 0.0

    for tide_type, ranges in TIDE_TYPE_RANGES:
        if any(_in_range(age, bounds) for bounds in ranges):
            return tide_type
    return TideType.MEDIUM


def base_strength(age: float) -> float:
    """Lunar-age term of the score: 90 at new and full moon, 10 at the quarters."""
    new_moon = np.cos(2.0 * np.pi * age / AGE_WRAP)
    full_moon = np.cos(2.0 * np.pi * (age - FULL_MOON_AGE) / AGE_WRAP)
    return BASE_STRENGTH_MIN + (max(new_moon, full_moon) + 1.0) * BASE_STRENGTH_SPAN


def seasonal_factor(day_of_year: int) -> float:
    """Multiplier in [1.0, 1.1] peaking on the equinoxes."""
    spring, autumn = SEASONAL_EQUINOX_DAYS
    spring_distance = min(abs(day_of_year - spring), abs(day_of_year - spring - 365))
    autumn_distance = abs(day_of_year - autumn)
    nearest = min(spring_distance, autumn_distance)
    if nearest <= SEASONAL_WINDOW_DAYS:
        return 1.0 + SEASONAL_AMPLITUDE * np.exp(-nearest / SEASONAL_DECAY_DAYS)
    return 1.0


def calculate_tide_strength(
    moon_phase: MoonPhase,
    moon_distance_factor: float,
    date: Any = None,
    logger: logging.Logger | None = None,
) -> int:
    """
    Tidal intensity score for a moon phase and lunar distance.

    Parameters
    ----------
    moon_phase : MoonPhase
        Lunar age and illumination.
    moon_distance_factor : float
        Lunar distance divided by its mean (1.0 = mean distance).
    date : str, datetime, numpy.datetime64 or pandas.Timestamp, optional
        Date whose day-of-year drives the equinox correction.  Defaults
        to the current UTC date.
    logger : logging.Logger, optional
        Logger instance for diagnostic messages.

    Returns
    -------
    int
        Score in [0, 120].  Values above 100 occur at perigee and are
        not clamped to 100.

    Raises
    ------
    InvalidInputError
        If the moon phase or *date* is invalid.
    InvalidDistanceFactorError
        If *moon_distance_factor* is not a positive finite number.
    """
    _log = logger or logging.getLogger(__name__)

    age = _validate_moon_phase(moon_phase)
    try:
        distance = float(moon_distance_factor)
    except (TypeError, ValueError) as exc:
        raise InvalidDistanceFactorError(
            f"Invalid moon distance factor: {moon_distance_factor!r}"
        ) from exc
    if not np.isfinite(distance) or distance <= 0:
        raise InvalidDistanceFactorError(
            f"Moon distance factor must be positive, got {moon_distance_factor}."
        )
    low, high = DISTANCE_FACTOR_RANGE
    if not low <= distance <= high:
        _log.warning(
            'Unusual moon distance factor %.3f; expected range %.1f-%.1f.',
            distance, low, high,
        )

    ts = pd.Timestamp.now(tz='UTC') if date is None else to_utc_timestamp(date)

    strength = base_strength(age)
    strength *= np.clip((1.0 / distance) ** 3, *DISTANCE_CORRECTION_LIMITS)
    strength *= seasonal_factor(ts.dayofyear)

    score = int(max(0, min(MAX_STRENGTH, round(strength))))
    _log.debug(
        'Tide strength %d at age %.2f d, distance factor %.3f, day %d.',
        score, age, distance, ts.dayofyear,
    )
    return score


def calculate_moon_phase_for_date(
    date: Any,
    logger: logging.Logger | None = None,
) -> MoonPhase:
    """Moon phase at *date*; see :func:`~fishlog.tide.celestial.calculate_moon_phase`."""
    return calculate_moon_phase(date, logger=logger)
