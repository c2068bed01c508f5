"""
Current tide information for one location and instant.

Combines level, stream strength, moon phase, tide type and the high/low
events of the UTC day containing the instant into one :class:`TideInfo`.
"""
from __future__ import annotations

import logging
from typing import Any, Sequence

import pandas as pd

from .astro_utils import hours_since_j2000, to_utc_timestamp
from .celestial import calculate_moon_phase
from .classification import classify_tide_type
from .extremes import find_tidal_extremes
from .models import (
    ExtremeType,
    HarmonicConstant,
    TidalExtreme,
    TideInfo,
    TideState,
)
from .tidal_prediction import harmonic_sum, resolve_constants, strength_from_rate

logger = logging.getLogger(__name__)

EVENT_PROXIMITY_MINUTES = 10
"""An event this close ahead of the instant sets the state to high/low."""


def find_next_event(
    instant: pd.Timestamp,
    events: Sequence[TidalExtreme],
) -> TidalExtreme | None:
    """First event strictly after *instant*, or ``None``."""
    return next((e for e in events if e.date_time > instant), None)


def determine_tide_state(
    instant: pd.Timestamp,
    next_event: TidalExtreme | None,
    rate: float,
) -> TideState:
    if next_event is None:
        return TideState.RISING if rate >= 0 else TideState.FALLING
    if next_event.date_time - instant <= pd.Timedelta(minutes=EVENT_PROXIMITY_MINUTES):
        return TideState(next_event.type.value)
    if next_event.type is ExtremeType.HIGH:
        return TideState.RISING
    return TideState.FALLING


def calculate_tide_info(
    instant: Any,
    constants: Sequence[HarmonicConstant],
    logger: logging.Logger | None = None,
) -> TideInfo:
    """
    Aggregate the engine outputs at *instant*.

    Parameters
    ----------
    instant : str, datetime, numpy.datetime64 or pandas.Timestamp
        Instant of interest; naive values are taken as UTC.
    constants : sequence of HarmonicConstant
        Local harmonic constants.
    logger : logging.Logger, optional
        Logger instance for diagnostic messages.

    Returns
    -------
    TideInfo
        ``events`` holds the extrema from 00:00 to 24:00 UTC of the day
        containing *instant*.

    Raises
    ------
    InvalidInputError
        If *instant* is unparseable or an amplitude/phase is not finite.
    EmptyConstituentsError
        If *constants* is empty.
    """
    _log = logger or logging.getLogger(__name__)

    ts = to_utc_timestamp(instant)
    terms = resolve_constants(constants, logger=_log)

    hours = hours_since_j2000(ts)
    level = float(harmonic_sum(hours, terms))
    rate = float(harmonic_sum(hours, terms, derivative=True))

    events: list[TidalExtreme] = []
    if terms:
        known = [
            HarmonicConstant(constituent=t.name, amplitude=t.amplitude, phase=t.phase)
            for t in terms
        ]
        day_start = ts.normalize()
        events = find_tidal_extremes(
            day_start, day_start + pd.Timedelta(days=1), known, logger=_log,
        )

    moon_phase = calculate_moon_phase(ts, logger=_log)
    next_event = find_next_event(ts, events)
    state = determine_tide_state(ts, next_event, rate)

    _log.debug(
        'Tide info at %s: level %.1f cm, state %s, %d events.',
        ts.isoformat(), level, state.value, len(events),
    )
    return TideInfo(
        instant=ts,
        level=round(level, 1),
        strength=strength_from_rate(rate),
        moon_phase=moon_phase,
        tide_type=classify_tide_type(moon_phase),
        state=state,
        events=tuple(events),
        next_event=next_event,
    )
