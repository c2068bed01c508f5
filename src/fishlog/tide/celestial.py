"""
Astronomical position calculator: lunar age and sun/moon ecliptic positions.

Lunar age is the time elapsed since a reference new moon modulo the mean
synodic month.  Solar and lunar coordinates use the truncated series of
Meeus, *Astronomical Algorithms* (2nd ed.), chapters 25 and 47: the sun to
about 0.01 deg, the moon to about 0.3 deg in longitude and a few hundred km
in distance.  Everything is closed-form, so a call costs well under a
millisecond.

References
----------
- Meeus, J. (1998). Astronomical Algorithms, 2nd ed.  Willmann-Bell.
"""
from __future__ import annotations

import logging
from typing import Any

import numpy as np
import pandas as pd

from .astro_utils import julian_centuries, normalize_angle, polynomial, to_utc_timestamp
from .models import (
    CelestialPosition,
    CelestialSnapshot,
    MoonPhase,
    MoonPhaseName,
    MoonPosition,
    SunPosition,
)

logger = logging.getLogger(__name__)

SYNODIC_MONTH = 29.530588853
"""Mean synodic month in days."""

NEW_MOON_EPOCH = pd.Timestamp('2000-01-06T18:14:00', tz='UTC')
"""Reference new moon for lunar-age computation."""

MEAN_LUNAR_DISTANCE_KM = 385000.56

MIN_PRACTICAL_YEAR = 1900
MAX_PRACTICAL_YEAR = 2100
"""Outside these years the series are extrapolated and a warning is logged."""

# Eight bands of one-eighth synodic month each, centred on the principal
# phases.  The first band edge sits half a band after new moon.
_PHASE_BAND = SYNODIC_MONTH / 8.0
_PHASE_ORDER = [
    MoonPhaseName.NEW,
    MoonPhaseName.WAXING_CRESCENT,
    MoonPhaseName.FIRST_QUARTER,
    MoonPhaseName.WAXING_GIBBOUS,
    MoonPhaseName.FULL,
    MoonPhaseName.WANING_GIBBOUS,
    MoonPhaseName.LAST_QUARTER,
    MoonPhaseName.WANING_CRESCENT,
]

# ---------------------------------------------------------------------------
# Fundamental arguments (degrees), polynomial coefficients in T.
# Meeus eqs. 25.2-25.3 and 47.1-47.5.
# ---------------------------------------------------------------------------

_SUN_MEAN_LONGITUDE = (280.46646, 36000.76983, 0.0003032)
_SUN_MEAN_ANOMALY = (357.52911, 35999.05029, -0.0001537)

_MOON_MEAN_LONGITUDE = (
    218.3164477, 481267.88123421, -0.0015786, 1.0 / 538841.0, -1.0 / 65194000.0,
)
_MOON_MEAN_ELONGATION = (
    297.8501921, 445267.1114034, -0.0018819, 1.0 / 545868.0, -1.0 / 113065000.0,
)
_SUN_MEAN_ANOMALY_LUNAR = (
    357.5291092, 35999.0502909, -0.0001536, 1.0 / 24490000.0,
)
_MOON_MEAN_ANOMALY = (
    134.9633964, 477198.8675055, 0.0087414, 1.0 / 69699.0, -1.0 / 14712000.0,
)
_MOON_ARGUMENT_OF_LATITUDE = (
    93.2720950, 483202.0175233, -0.0036539, -1.0 / 3526000.0, 1.0 / 863310000.0,
)

# Eccentricity of Earth's orbit correction for terms containing M.
_ECCENTRICITY = (1.0, -0.002516, -0.0000074)

# ---------------------------------------------------------------------------
# Periodic terms.  Columns: D, M, M', F multipliers, then coefficients.
# Longitude in 1e-6 deg (sine), distance in 1e-3 km (cosine).
# Meeus Table 47.A, leading terms.
# ---------------------------------------------------------------------------

_LUNAR_LONGITUDE_DISTANCE_TERMS = np.array([
    (0,  0,  1,  0,  6288774, -20905355),
    (2,  0, -1,  0,  1274027,  -3699111),
    (2,  0,  0,  0,   658314,  -2955968),
    (0,  0,  2,  0,   213618,   -569925),
    (0,  1,  0,  0,  -185116,     48888),
    (0,  0,  0,  2,  -114332,     -3149),
    (2,  0, -2,  0,    58793,    246158),
    (2, -1, -1,  0,    57066,   -152138),
    (2,  0,  1,  0,    53322,   -170733),
    (2, -1,  0,  0,    45758,   -204586),
    (0,  1, -1,  0,   -40923,   -129620),
    (1,  0,  0,  0,   -34720,    108743),
    (0,  1,  1,  0,   -30383,    104755),
    (2,  0,  0, -2,    15327,     10321),
    (0,  0,  1,  2,   -12528,         0),
    (0,  0,  1, -2,    10980,     79661),
    (4,  0, -1,  0,    10675,    -34782),
    (0,  0,  3,  0,    10034,    -23210),
    (4,  0, -2,  0,     8548,    -21636),
    (2,  1, -1,  0,    -7888,     24208),
    (2,  1,  0,  0,    -6766,     30824),
    (1,  0, -1,  0,    -5163,     -8379),
    (1,  1,  0,  0,     4987,    -16675),
    (2, -1,  1,  0,     4036,    -12831),
    (2,  0,  2,  0,     3994,    -10445),
    (4,  0,  0,  0,     3861,    -11650),
    (2,  0, -3,  0,     3665,     14403),
    (0,  1, -2,  0,    -2689,     -7003),
    (2,  0, -1,  2,    -2602,         0),
    (2, -1, -2,  0,     2390,     10056),
    (1,  0,  1,  0,    -2348,      6322),
    (2, -2,  0,  0,     2236,     -9884),
], dtype=float)

# Latitude in 1e-6 deg (sine).  Meeus Table 47.B, leading terms.
_LUNAR_LATITUDE_TERMS = np.array([
    (0,  0,  0,  1,  5128122),
    (0,  0,  1,  1,   280602),
    (0,  0,  1, -1,   277693),
    (2,  0,  0, -1,   173237),
    (2,  0, -1,  1,    55413),
    (2,  0, -1, -1,    46271),
    (2,  0,  0,  1,    32573),
    (0,  0,  2,  1,    17198),
    (2,  0,  1, -1,     9266),
    (0,  0,  2, -1,     8822),
    (2, -1,  0, -1,     8216),
    (2,  0, -2, -1,     4324),
    (2,  0,  1,  1,     4200),
    (2,  1,  0, -1,    -3359),
    (2, -1, -1,  1,     2463),
    (2, -1,  0,  1,     2211),
    (2, -1, -1, -1,     2065),
    (0,  1, -1, -1,    -1870),
    (4,  0, -1, -1,     1828),
    (0,  1,  0,  1,    -1794),
], dtype=float)


def _validate_instant(instant: Any, _log: logging.Logger) -> pd.Timestamp:
    ts = to_utc_timestamp(instant)
    if not MIN_PRACTICAL_YEAR <= ts.year <= MAX_PRACTICAL_YEAR:
        _log.warning(
            'Instant %s is outside the recommended range %d-%d; '
            'ephemeris series are extrapolated and accuracy may be reduced.',
            ts.isoformat(), MIN_PRACTICAL_YEAR, MAX_PRACTICAL_YEAR,
        )
    return ts


def _phase_name(age: float) -> MoonPhaseName:
    band = int((age + _PHASE_BAND / 2.0) // _PHASE_BAND) % 8
    return _PHASE_ORDER[band]


def _moon_phase(ts: pd.Timestamp) -> MoonPhase:
    elapsed_days = (ts - NEW_MOON_EPOCH) / pd.Timedelta(days=1)
    age = float(np.mod(elapsed_days, SYNODIC_MONTH))
    # Guard against the modulo of a tiny negative rounding to the period.
    if age >= SYNODIC_MONTH:
        age = 0.0
    illumination = (1.0 - np.cos(2.0 * np.pi * age / SYNODIC_MONTH)) / 2.0
    return MoonPhase(
        age=age,
        phase=_phase_name(age),
        illumination=float(np.clip(illumination, 0.0, 1.0)),
    )


def _solar_position(T: float) -> SunPosition:
    L0 = polynomial(T, _SUN_MEAN_LONGITUDE)
    M = np.radians(polynomial(T, _SUN_MEAN_ANOMALY))

    # Equation of the centre
    C = (
        (1.914602 - 0.004817 * T - 0.000014 * T * T) * np.sin(M)
        + (0.019993 - 0.000101 * T) * np.sin(2.0 * M)
        + 0.000289 * np.sin(3.0 * M)
    )
    # Ecliptic latitude of the sun never exceeds 1.2 arcsec.
    return SunPosition(longitude=float(normalize_angle(L0 + C)), latitude=0.0)


def _lunar_position(T: float) -> MoonPosition:
    Lp = polynomial(T, _MOON_MEAN_LONGITUDE)
    args = np.radians([
        polynomial(T, _MOON_MEAN_ELONGATION),
        polynomial(T, _SUN_MEAN_ANOMALY_LUNAR),
        polynomial(T, _MOON_MEAN_ANOMALY),
        polynomial(T, _MOON_ARGUMENT_OF_LATITUDE),
    ])
    E = polynomial(T, _ECCENTRICITY)

    lon_dist = _LUNAR_LONGITUDE_DISTANCE_TERMS
    arg = lon_dist[:, :4] @ args
    ecc = E ** np.abs(lon_dist[:, 1])
    sum_l = np.sum(ecc * lon_dist[:, 4] * np.sin(arg))
    sum_r = np.sum(ecc * lon_dist[:, 5] * np.cos(arg))

    lat = _LUNAR_LATITUDE_TERMS
    arg = lat[:, :4] @ args
    ecc = E ** np.abs(lat[:, 1])
    sum_b = np.sum(ecc * lat[:, 4] * np.sin(arg))

    return MoonPosition(
        longitude=float(normalize_angle(Lp + sum_l * 1e-6)),
        latitude=float(sum_b * 1e-6),
        distance=float(MEAN_LUNAR_DISTANCE_KM + sum_r * 1e-3),
    )


def _positions(ts: pd.Timestamp) -> CelestialPosition:
    T = julian_centuries(ts)
    return CelestialPosition(sun=_solar_position(T), moon=_lunar_position(T))


def calculate_moon_phase(
    instant: Any,
    logger: logging.Logger | None = None,
) -> MoonPhase:
    """
    Compute lunar age, named phase and illuminated fraction.

    Parameters
    ----------
    instant : str, datetime, numpy.datetime64 or pandas.Timestamp
        Absolute instant; naive values are taken as UTC.
    logger : logging.Logger, optional
        Logger instance for diagnostic messages.

    Returns
    -------
    MoonPhase
        ``age`` in days in [0, 29.53), ``phase`` bucketed into eight bands
        centred on new, first quarter, full and last quarter, and
        ``illumination = (1 - cos(2*pi*age/P)) / 2``.

    Raises
    ------
    InvalidInputError
        If *instant* is missing or unparseable.
    """
    _log = logger or logging.getLogger(__name__)
    return _moon_phase(_validate_instant(instant, _log))


def calculate_celestial_positions(
    instant: Any,
    logger: logging.Logger | None = None,
) -> CelestialPosition:
    """
    Compute geocentric ecliptic longitude/latitude of the sun and moon.

    The moon also carries its geocentric distance in km, which stays within
    roughly 356 000-407 000 km.  The sun's ecliptic latitude is reported
    as 0.0; its true value never exceeds 1.2 arcsec.

    Raises
    ------
    InvalidInputError
        If *instant* is missing or unparseable.
    """
    _log = logger or logging.getLogger(__name__)
    return _positions(_validate_instant(instant, _log))


def calculate_all(
    instant: Any,
    logger: logging.Logger | None = None,
) -> CelestialSnapshot:
    """Moon phase and celestial positions for one instant."""
    _log = logger or logging.getLogger(__name__)
    ts = _validate_instant(instant, _log)
    return CelestialSnapshot(moon_phase=_moon_phase(ts), positions=_positions(ts))


def moon_distance_factor(positions: CelestialPosition) -> float:
    """Lunar distance normalised so that 1.0 is the mean distance."""
    return positions.moon.distance / MEAN_LUNAR_DISTANCE_KM
