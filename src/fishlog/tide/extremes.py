"""
High- and low-water search over a synthesised tide curve.

The curve is sampled on a coarse grid and a candidate extremum is flagged
wherever the sign of the finite-difference slope changes.  Each candidate
bracket is then rescanned on a fine grid and the best sample is reported.
Zero slopes (plateaus) are stepped over, so a flat curve yields no
extrema at all.
"""
from __future__ import annotations

import logging
from typing import Any, Sequence

import numpy as np
import pandas as pd

from .astro_utils import hours_since_j2000, to_utc_timestamp
from .exceptions import InvalidInputError, InvalidRangeError
from .models import ExtremeType, HarmonicConstant, TidalExtreme
from .tidal_prediction import HarmonicTerm, harmonic_sum, resolve_constants

logger = logging.getLogger(__name__)

COARSE_STEP_MINUTES = 30
REFINE_STEP_MINUTES = 5
"""Default sampling steps of the two search passes."""


def find_tidal_extremes(
    start: Any,
    end: Any,
    constants: Sequence[HarmonicConstant],
    coarse_step_minutes: int = COARSE_STEP_MINUTES,
    refine_step_minutes: int = REFINE_STEP_MINUTES,
    logger: logging.Logger | None = None,
) -> list[TidalExtreme]:
    """
    Find high and low water between *start* and *end*.

    Parameters
    ----------
    start, end : str, datetime, numpy.datetime64 or pandas.Timestamp
        Search window; naive values are taken as UTC.
    constants : sequence of HarmonicConstant
        Local harmonic constants.
    coarse_step_minutes : int, optional
        Step of the slope-sign scan (default 30).
    refine_step_minutes : int, optional
        Step of the refinement scan inside each candidate bracket
        (default 5).
    logger : logging.Logger, optional
        Logger instance for diagnostic messages.

    Returns
    -------
    list of TidalExtreme
        Extrema in ascending time order, levels rounded to 0.1 cm.  Empty
        when the curve is flat.

    Raises
    ------
    InvalidRangeError
        If *end* is not after *start*.
    InvalidInputError
        If an instant is unparseable or a step is not positive.
    EmptyConstituentsError
        If *constants* is empty.
    """
    _log = logger or logging.getLogger(__name__)

    t0 = to_utc_timestamp(start)
    t1 = to_utc_timestamp(end)
    if t1 <= t0:
        raise InvalidRangeError(
            f"End time ({t1.isoformat()}) must be after start time "
            f"({t0.isoformat()})."
        )
    if coarse_step_minutes <= 0 or refine_step_minutes <= 0:
        raise InvalidInputError(
            f"Search steps must be positive, got coarse={coarse_step_minutes}, "
            f"refine={refine_step_minutes}."
        )

    terms = resolve_constants(constants, logger=_log)

    times = pd.date_range(t0, t1, freq=f'{coarse_step_minutes}min')
    levels = harmonic_sum(hours_since_j2000(times), terms)
    slopes = np.sign(np.diff(levels))

    extremes = []
    moving = np.flatnonzero(slopes)
    for i, j in zip(moving[:-1], moving[1:]):
        if slopes[i] == slopes[j]:
            continue
        kind = ExtremeType.HIGH if slopes[i] > 0 else ExtremeType.LOW
        extremes.append(
            _refine(times[i], times[j + 1], kind, terms,
                    refine_step_minutes, _log)
        )

    extremes.sort(key=lambda e: e.date_time)
    _log.info(
        'Extrema search %s to %s: %d high, %d low from %d coarse samples.',
        t0.isoformat(), t1.isoformat(),
        sum(e.type is ExtremeType.HIGH for e in extremes),
        sum(e.type is ExtremeType.LOW for e in extremes),
        len(times),
    )
    return extremes


def _refine(
    lo: pd.Timestamp,
    hi: pd.Timestamp,
    kind: ExtremeType,
    terms: list[HarmonicTerm],
    step_minutes: int,
    _log: logging.Logger,
) -> TidalExtreme:
    midpoint = lo + (hi - lo) / 2
    best_time = midpoint
    best_level = float(harmonic_sum(hours_since_j2000(midpoint), terms))

    fine = pd.date_range(lo, hi, freq=f'{step_minutes}min')
    fine_levels = harmonic_sum(hours_since_j2000(fine), terms)
    k = int(np.argmax(fine_levels) if kind is ExtremeType.HIGH else np.argmin(fine_levels))

    improved = (
        fine_levels[k] > best_level if kind is ExtremeType.HIGH
        else fine_levels[k] < best_level
    )
    if improved:
        best_time = fine[k]
        best_level = float(fine_levels[k])
    else:
        # Extremum within half a fine step of the midpoint.
        _log.debug(
            'No %s-water improvement in %s to %s; reporting bracket midpoint.',
            kind.value, lo.isoformat(), hi.isoformat(),
        )

    return TidalExtreme(date_time=best_time, level=round(best_level, 1), type=kind)
