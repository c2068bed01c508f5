"""
Value objects returned by the tide engine.

All objects are immutable, created per call and owned by the caller.  Each
one serialises to JSON-friendly primitives with ``to_dict()`` so an external
cache can store it without knowing the types.

Units throughout: centimetres, hours, degrees, kilometres, days.
"""
from __future__ import annotations

from dataclasses import dataclass, fields, is_dataclass
from enum import Enum
from typing import Any

import pandas as pd


class ConstituentName(str, Enum):
    """Closed set of tidal constituents known to the engine."""

    M2 = 'M2'
    S2 = 'S2'
    K1 = 'K1'
    O1 = 'O1'
    Mf = 'Mf'
    Mm = 'Mm'
    M4 = 'M4'
    MS4 = 'MS4'


class ConstituentClass(str, Enum):
    SEMIDIURNAL = 'semidiurnal'
    DIURNAL = 'diurnal'
    LONG_PERIOD = 'long_period'
    QUARTER_DIURNAL = 'quarter_diurnal'


class MoonPhaseName(str, Enum):
    NEW = 'new'
    WAXING_CRESCENT = 'waxing_crescent'
    FIRST_QUARTER = 'first_quarter'
    WAXING_GIBBOUS = 'waxing_gibbous'
    FULL = 'full'
    WANING_GIBBOUS = 'waning_gibbous'
    LAST_QUARTER = 'last_quarter'
    WANING_CRESCENT = 'waning_crescent'


class ExtremeType(str, Enum):
    HIGH = 'high'
    LOW = 'low'


class TideDirection(str, Enum):
    RISING = 'rising'
    FALLING = 'falling'


class TideState(str, Enum):
    RISING = 'rising'
    FALLING = 'falling'
    HIGH = 'high'
    LOW = 'low'


class TideType(str, Enum):
    """Five-way tide classification keyed to lunar age."""

    SPRING = 'spring'
    NEAP = 'neap'
    MEDIUM = 'medium'
    LONG = 'long'
    YOUNG = 'young'


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, pd.Timestamp):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if is_dataclass(value):
        return value.to_dict()
    return value


class _ValueObject:
    """Mixin adding ``to_dict()`` to frozen dataclasses."""

    def to_dict(self) -> dict[str, Any]:
        return {f.name: _plain(getattr(self, f.name)) for f in fields(self)}


@dataclass(frozen=True)
class HarmonicConstant(_ValueObject):
    """
    Location-specific amplitude and phase of one constituent.

    ``constituent`` is normally a :class:`ConstituentName`; plain strings
    from regional data are accepted and resolved at synthesis time, where
    unrecognised names are skipped with a warning.
    """

    constituent: ConstituentName | str
    amplitude: float  # cm
    phase: float  # degrees

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HarmonicConstant:
        return cls(
            constituent=data['constituent'],
            amplitude=float(data['amplitude']),
            phase=float(data['phase']),
        )


@dataclass(frozen=True)
class Constituent(_ValueObject):
    """One row of the static constituent table."""

    name: ConstituentName
    frequency: float  # degrees/hour
    period: float  # hours
    constituent_class: ConstituentClass


@dataclass(frozen=True)
class ConstituentFactor(_ValueObject):
    """Nodal amplitude factor ``f`` and phase correction ``u`` (degrees)."""

    constituent: ConstituentName
    f: float
    u: float


@dataclass(frozen=True)
class AstronomicalArguments(_ValueObject):
    """Mean astronomical longitudes in degrees, each in [0, 360)."""

    N: float  # lunar ascending node
    p: float  # lunar perigee
    h: float  # solar mean longitude
    s: float  # lunar mean longitude
    ps: float  # solar perigee


@dataclass(frozen=True)
class MoonPhase(_ValueObject):
    age: float  # days since new moon, [0, 29.53)
    phase: MoonPhaseName
    illumination: float  # [0, 1]


@dataclass(frozen=True)
class SunPosition(_ValueObject):
    longitude: float
    latitude: float


@dataclass(frozen=True)
class MoonPosition(_ValueObject):
    longitude: float
    latitude: float
    distance: float  # km


@dataclass(frozen=True)
class CelestialPosition(_ValueObject):
    """Geocentric ecliptic coordinates of the sun and moon."""

    sun: SunPosition
    moon: MoonPosition


@dataclass(frozen=True)
class CelestialSnapshot(_ValueObject):
    """Result of :func:`~fishlog.tide.celestial.calculate_all`."""

    moon_phase: MoonPhase
    positions: CelestialPosition


@dataclass(frozen=True)
class TidalExtreme(_ValueObject):
    date_time: pd.Timestamp
    level: float  # cm
    type: ExtremeType


@dataclass(frozen=True)
class TideStrength(_ValueObject):
    value: float  # 0-10 scale
    rate: float  # cm/hour
    direction: TideDirection


@dataclass(frozen=True)
class TideInfo(_ValueObject):
    """Aggregate of the engine outputs for one location and instant."""

    instant: pd.Timestamp
    level: float
    strength: TideStrength
    moon_phase: MoonPhase
    tide_type: TideType
    state: TideState
    events: tuple[TidalExtreme, ...]
    next_event: TidalExtreme | None
