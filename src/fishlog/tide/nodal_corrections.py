"""
Astronomical arguments and nodal corrections (f, u).

The 18.6-year regression of the lunar node modulates the amplitude and phase
of each lunar constituent.  The corrections are closed-form series in the
node longitude N::

    f = a0 + a1*cos(N) + a2*cos(2N) + a3*cos(3N)
    u = b1*sin(N) + b2*sin(2N) + b3*sin(3N)        (degrees)

S2 is purely solar, and the compound overtides M4 and MS4 are treated as
carrying no independent nodal modulation, so all three have ``f = 1`` and
``u = 0``.

All functions accept scalar or array Julian centuries so prediction over a
whole time index is one vectorised pass.
"""
from __future__ import annotations

import logging
from typing import Any, NamedTuple

import numpy as np

from .astro_utils import julian_centuries, normalize_angle, polynomial, to_utc_timestamp, wrap_angle
from .models import AstronomicalArguments, ConstituentFactor, ConstituentName

logger = logging.getLogger(__name__)

F_MIN = 0.5
F_MAX = 1.5
"""Realistic range for the nodal amplitude factor; values are clamped."""


class NodalSeries(NamedTuple):
    f_coeffs: tuple[float, ...]  # a0, a1, a2, ... on cos(kN)
    u_coeffs: tuple[float, ...]  # b1, b2, ... on sin(kN)


NODAL_SERIES: dict[ConstituentName, NodalSeries] = {
    ConstituentName.M2:  NodalSeries((1.000, 0.037, -0.0004), (-2.14, 0.0004)),
    ConstituentName.S2:  NodalSeries((1.000,), ()),
    ConstituentName.K1:  NodalSeries((1.006, 0.115, -0.0088, 0.0006), (8.86, 0.68, -0.07)),
    ConstituentName.O1:  NodalSeries((1.009, 0.187, -0.015, 0.0014), (10.8, -1.34, 0.19)),
    ConstituentName.Mf:  NodalSeries((1.043, 0.414, 0.006), (-23.7, 2.7, -0.4)),
    ConstituentName.Mm:  NodalSeries((1.000, -0.130, 0.009), ()),
    ConstituentName.M4:  NodalSeries((1.000,), ()),
    ConstituentName.MS4: NodalSeries((1.000,), ()),
}
"""Nodal correction coefficients for every constituent in the table."""

# Polynomials in Julian centuries since J2000.0 (degrees).
_NODE_LONGITUDE = (125.0445222, -1934.1362608, 0.0020708, 1.0 / 450000.0)
_LUNAR_PERIGEE = (
    83.3532465, 4069.0137287, -0.0103200, -1.0 / 80053.0, 1.0 / 18999000.0,
)
_SOLAR_MEAN_LONGITUDE = (280.4664567, 36000.7697489, 0.0003032, 1.0 / 49931000.0)
_LUNAR_MEAN_LONGITUDE = (
    218.3164477, 481267.88123421, -0.0015786, 1.0 / 538841.0, -1.0 / 65194000.0,
)
_SOLAR_PERIGEE = (282.9373, 1.71946, 0.0004528)


def node_longitude(T):
    """Longitude of the lunar ascending node N in [0, 360) degrees."""
    return normalize_angle(polynomial(T, _NODE_LONGITUDE))


def nodal_factors(name: ConstituentName, N_deg) -> tuple[Any, Any]:
    """
    Evaluate ``(f, u)`` for one constituent at node longitude *N_deg*.

    Works element-wise on arrays.  ``f`` is clamped to [F_MIN, F_MAX] and
    ``u`` wrapped into (-180, 180].
    """
    series = NODAL_SERIES[name]
    N = np.radians(N_deg)
    f = series.f_coeffs[0]
    for k, a in enumerate(series.f_coeffs[1:], start=1):
        f = f + a * np.cos(k * N)
    u = 0.0 * N
    for k, b in enumerate(series.u_coeffs, start=1):
        u = u + b * np.sin(k * N)
    return np.clip(f, F_MIN, F_MAX), wrap_angle(u)


def calculate_astronomical_arguments(instant: Any) -> AstronomicalArguments:
    """
    Mean astronomical longitudes N, p, h, s and ps at *instant*.

    Raises
    ------
    InvalidInputError
        If *instant* is missing or unparseable.
    """
    T = julian_centuries(to_utc_timestamp(instant))
    return AstronomicalArguments(
        N=float(node_longitude(T)),
        p=float(normalize_angle(polynomial(T, _LUNAR_PERIGEE))),
        h=float(normalize_angle(polynomial(T, _SOLAR_MEAN_LONGITUDE))),
        s=float(normalize_angle(polynomial(T, _LUNAR_MEAN_LONGITUDE))),
        ps=float(normalize_angle(polynomial(T, _SOLAR_PERIGEE))),
    )


def calculate_constituent_factors(
    instant: Any,
    logger: logging.Logger | None = None,
) -> list[ConstituentFactor]:
    """
    Compute the nodal corrections of every known constituent.

    Parameters
    ----------
    instant : str, datetime, numpy.datetime64 or pandas.Timestamp
        Absolute instant; naive values are taken as UTC.
    logger : logging.Logger, optional
        Logger instance for diagnostic messages.

    Returns
    -------
    list of ConstituentFactor
        One entry per constituent in table order.

    Raises
    ------
    InvalidInputError
        If *instant* is missing or unparseable.
    """
    _log = logger or logging.getLogger(__name__)

    args = calculate_astronomical_arguments(instant)
    factors = []
    for name in NODAL_SERIES:
        f, u = nodal_factors(name, args.N)
        factors.append(ConstituentFactor(constituent=name, f=float(f), u=float(u)))

    _log.debug(
        'Computed %d constituent factors at N=%.4f deg.', len(factors), args.N,
    )
    return factors
