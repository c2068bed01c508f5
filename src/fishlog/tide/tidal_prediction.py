"""
Tidal prediction from harmonic constants.

Implements the harmonic synthesis formula::

    h(t) = H0 + sum{ f * A * cos[w*t + phi + u] }

where *t* is hours since J2000.0 (2000-01-01T12:00:00Z), *w* the
constituent speed in degrees/hour, *phi* the local phase and *(f, u)* the
nodal corrections of :mod:`~fishlog.tide.nodal_corrections` evaluated at
each prediction instant.  The instantaneous rate of change is the exact
analytic derivative of the same sum.

Entry points:

* :func:`calculate_tide_level`: level at one instant.
* :func:`predict_tide`: levels for a whole time index in one vectorised
  pass.
* :func:`predict_tide_curve`: evenly sampled curve as a
  :class:`pandas.Series` (graph source data).
* :func:`predict_from_constants`: prediction from plain amplitude/phase
  dictionaries.
* :func:`calculate_tide_rate` / :func:`calculate_tide_strength`: rate of
  change and its 0-10 strength band.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, NamedTuple, Sequence

import numpy as np
import pandas as pd

from .astro_utils import (
    HOURS_PER_JULIAN_CENTURY,
    hours_since_j2000,
    normalize_angle,
    to_utc_index,
    to_utc_timestamp,
)
from .constituents import CONSTITUENT_SPEEDS, parse_constituent
from .exceptions import EmptyConstituentsError, InvalidInputError, UnknownConstituentError
from .models import ConstituentName, HarmonicConstant, TideDirection, TideStrength
from .nodal_corrections import nodal_factors, node_longitude

logger = logging.getLogger(__name__)

STRENGTH_BREAKPOINTS = (2.0, 8.0, 20.0, 40.0)
"""
|rate| thresholds (cm/hour) between the stagnant, weak, moderate, strong and
saturating strength bands.  Display labels depend on these values.
"""


class HarmonicTerm(NamedTuple):
    name: ConstituentName
    amplitude: float
    phase: float


def resolve_constants(
    constants: Sequence[HarmonicConstant],
    logger: logging.Logger | None = None,
) -> list[HarmonicTerm]:
    """
    Validate *constants* and resolve their constituent names.

    Unknown constituents are logged and skipped; an empty list or a
    non-finite amplitude/phase is rejected.
    """
    _log = logger or logging.getLogger(__name__)

    if constants is None or len(constants) == 0:
        raise EmptyConstituentsError('Harmonic constants list cannot be empty.')

    terms = []
    for constant in constants:
        try:
            name = parse_constituent(constant.constituent)
        except UnknownConstituentError:
            _log.warning(
                'Skipping unknown constituent %r in harmonic constants.',
                constant.constituent,
            )
            continue

        try:
            amplitude = float(constant.amplitude)
            phase = float(constant.phase)
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(
                f"Non-numeric amplitude or phase for {name.value}: "
                f"{constant.amplitude!r}, {constant.phase!r}"
            ) from exc
        if not np.isfinite(amplitude):
            raise InvalidInputError(f"Invalid amplitude for {name.value}: {amplitude}")
        if not np.isfinite(phase):
            raise InvalidInputError(f"Invalid phase for {name.value}: {phase}")
        terms.append(HarmonicTerm(name, amplitude, phase))
    return terms


def harmonic_sum(
    hours: np.ndarray,
    terms: Iterable[HarmonicTerm],
    derivative: bool = False,
) -> np.ndarray:
    """
    Sum the constituent cosines (or their time derivative) at *hours*.

    Returns cm for the level, cm/hour for the derivative.
    """
    hours = np.asarray(hours, dtype=float)
    N = node_longitude(hours / HOURS_PER_JULIAN_CENTURY)
    total = np.zeros_like(hours)

    for name, amplitude, phase in terms:
        speed = CONSTITUENT_SPEEDS[name]
        f, u = nodal_factors(name, N)
        # Reduce the argument before trig evaluation; w*t reaches ~1e7 deg.
        arg = np.radians(normalize_angle(speed * hours + phase + u))
        if derivative:
            total = total - amplitude * f * np.radians(speed) * np.sin(arg)
        else:
            total = total + amplitude * f * np.cos(arg)
    return total


def calculate_tide_level(
    instant: Any,
    constants: Sequence[HarmonicConstant],
    logger: logging.Logger | None = None,
) -> float:
    """
    Synthesise the tide level at one instant.

    Parameters
    ----------
    instant : str, datetime, numpy.datetime64 or pandas.Timestamp
        Prediction instant; naive values are taken as UTC.
    constants : sequence of HarmonicConstant
        Local harmonic constants.  Entries whose constituent is unknown
        are skipped with a warning.
    logger : logging.Logger, optional
        Logger instance for diagnostic messages.

    Returns
    -------
    float
        Level in cm relative to mean sea level.

    Raises
    ------
    InvalidInputError
        If *instant* is unparseable or an amplitude/phase is non-numeric
        or not finite.
    EmptyConstituentsError
        If *constants* is empty.
    """
    _log = logger or logging.getLogger(__name__)

    ts = to_utc_timestamp(instant)
    terms = resolve_constants(constants, logger=_log)
    return float(harmonic_sum(hours_since_j2000(ts), terms))


def predict_tide(
    time: Any,
    constants: Sequence[HarmonicConstant],
    logger: logging.Logger | None = None,
) -> np.ndarray:
    """
    Generate tide levels for every timestamp in *time*.

    Parameters
    ----------
    time : pd.DatetimeIndex or array-like of timestamps
        Prediction times; naive values are taken as UTC.
    constants : sequence of HarmonicConstant
        Local harmonic constants.
    logger : logging.Logger, optional
        Logger instance for diagnostic messages.

    Returns
    -------
    np.ndarray
        Predicted levels (cm), same length as *time*.
    """
    _log = logger or logging.getLogger(__name__)

    index = to_utc_index(time)
    terms = resolve_constants(constants, logger=_log)
    _log.info(
        'Generating tidal predictions for %d time steps from %d constituents.',
        len(index), len(terms),
    )
    return harmonic_sum(hours_since_j2000(index), terms)


def predict_tide_curve(
    start: Any,
    constants: Sequence[HarmonicConstant],
    hours: float = 24.0,
    interval: str = '24min',
    logger: logging.Logger | None = None,
) -> pd.Series:
    """
    Sample the tide curve from *start* over *hours* at a fixed *interval*.

    Parameters
    ----------
    start : str, datetime, numpy.datetime64 or pandas.Timestamp
        First sample time.
    constants : sequence of HarmonicConstant
        Local harmonic constants.
    hours : float, optional
        Curve length in hours (default 24.0).  Both ends are sampled.
    interval : str, optional
        Sampling interval as a pandas frequency string (default ``"24min"``).
    logger : logging.Logger, optional
        Logger instance.

    Returns
    -------
    pd.Series
        Levels (cm) indexed by UTC timestamps.
    """
    ts = to_utc_timestamp(start)
    if not np.isfinite(hours) or hours <= 0:
        raise InvalidInputError(f"Curve length must be positive, got {hours}.")
    index = pd.date_range(
        start=ts, end=ts + pd.Timedelta(hours=hours), freq=interval,
    )
    levels = predict_tide(index, constants, logger=logger)
    return pd.Series(levels, index=index, name='level')


def predict_from_constants(
    time: Any,
    amplitudes: dict[str, float],
    phases: dict[str, float],
    mean_level: float = 0.0,
    logger: logging.Logger | None = None,
) -> np.ndarray:
    """
    Generate predictions from amplitude/phase dictionaries.

    Useful when harmonic constants arrive as two ``{name: value}`` maps
    (e.g. from a regional data table) rather than as
    :class:`HarmonicConstant` objects.

    Parameters
    ----------
    time : pd.DatetimeIndex or array-like of timestamps
        Prediction times.
    amplitudes : dict
        ``{constituent_name: amplitude}`` in cm.
    phases : dict
        ``{constituent_name: phase}`` in degrees.
    mean_level : float, optional
        Mean water level H0 added to every prediction (default 0.0).
    logger : logging.Logger, optional
        Logger instance.

    Returns
    -------
    np.ndarray
        Predicted levels (cm).

    Raises
    ------
    EmptyConstituentsError
        If no constituent appears in both dictionaries.
    """
    constants = _build_constants(amplitudes, phases)
    return mean_level + predict_tide(time, constants, logger=logger)


def _build_constants(
    amplitudes: dict[str, float],
    phases: dict[str, float],
) -> list[HarmonicConstant]:
    # Use only constituents present in both dicts
    names = sorted(set(amplitudes.keys()) & set(phases.keys()))
    if not names:
        raise EmptyConstituentsError(
            'No common constituents found in amplitudes and phases.'
        )
    return [
        HarmonicConstant(constituent=n, amplitude=amplitudes[n], phase=phases[n])
        for n in names
    ]


def calculate_tide_rate(
    instant: Any,
    constants: Sequence[HarmonicConstant],
    logger: logging.Logger | None = None,
) -> float:
    """
    Instantaneous rate of change of the tide level in cm/hour.

    Uses the analytic derivative ``-A*f*w*sin(w*t + phi + u)`` summed over
    constituents, with *w* in radians/hour.  The slow drift of *f* and *u*
    is neglected.
    """
    _log = logger or logging.getLogger(__name__)

    ts = to_utc_timestamp(instant)
    terms = resolve_constants(constants, logger=_log)
    return float(harmonic_sum(hours_since_j2000(ts), terms, derivative=True))


def strength_scale(abs_rate: float) -> float:
    """
    Map |rate| (cm/hour) onto the 0-10 strength scale.

    Below 2 cm/h the tide is stagnant (0); 2-8 maps to 1-3, 8-20 to 3-6,
    20-40 to 6-9, and the scale saturates from 9 towards 10 at 80 cm/h.
    """
    stagnant, weak, moderate, strong = STRENGTH_BREAKPOINTS
    if abs_rate < stagnant:
        return 0.0
    if abs_rate < weak:
        return 1.0 + (abs_rate - stagnant) / (weak - stagnant) * 2.0
    if abs_rate < moderate:
        return 3.0 + (abs_rate - weak) / (moderate - weak) * 3.0
    if abs_rate < strong:
        return 6.0 + (abs_rate - moderate) / (strong - moderate) * 3.0
    return 9.0 + min((abs_rate - strong) / strong, 1.0)


def strength_from_rate(rate: float) -> TideStrength:
    """Build the rounded :class:`TideStrength` for a rate in cm/hour."""
    direction = TideDirection.RISING if rate >= 0 else TideDirection.FALLING
    return TideStrength(
        value=round(strength_scale(abs(rate)), 1),
        rate=round(rate, 1),
        direction=direction,
    )


def calculate_tide_strength(
    instant: Any,
    constants: Sequence[HarmonicConstant],
    logger: logging.Logger | None = None,
) -> TideStrength:
    """
    Compute the tidal stream strength at *instant*.

    Returns
    -------
    TideStrength
        ``value`` on the 0-10 scale of :func:`strength_scale`, ``rate`` in
        cm/hour and ``direction`` (rising when ``rate >= 0``), each rounded
        to one decimal.

    Raises
    ------
    InvalidInputError
        If *instant* is unparseable or an amplitude/phase is non-numeric
        or not finite.
    EmptyConstituentsError
        If *constants* is empty.
    """
    return strength_from_rate(calculate_tide_rate(instant, constants, logger=logger))
