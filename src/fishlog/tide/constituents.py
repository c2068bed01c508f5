"""
Tidal constituent definitions and speeds.

Defines the eight constituents the engine synthesises: the four principal
astronomical constituents (M2, S2, K1, O1), the two long-period lunar
constituents (Mf, Mm) and the two shallow-water overtides (M4, MS4).

Speeds are Schureman (1958) values rounded to six decimals.  Periods are
derived as ``360 / frequency`` so the two can never disagree.
"""
from __future__ import annotations

from .exceptions import UnknownConstituentError
from .models import Constituent, ConstituentClass, ConstituentName

# ---------------------------------------------------------------------------
# Constituent angular speeds in degrees per hour.
# ---------------------------------------------------------------------------

CONSTITUENT_SPEEDS: dict[ConstituentName, float] = {
    # Semidiurnal
    ConstituentName.M2:   28.984104,
    ConstituentName.S2:   30.000000,
    # Diurnal
    ConstituentName.K1:   15.041069,
    ConstituentName.O1:   13.943035,
    # Long-period
    ConstituentName.Mf:    1.098033,
    ConstituentName.Mm:    0.544375,
    # Shallow-water / overtides
    ConstituentName.M4:   57.968208,   # 2 x M2
    ConstituentName.MS4:  58.984104,   # M2 + S2
}
"""Angular speeds (degrees/hour) for every known constituent."""

CONSTITUENT_CLASSES: dict[ConstituentName, ConstituentClass] = {
    ConstituentName.M2: ConstituentClass.SEMIDIURNAL,
    ConstituentName.S2: ConstituentClass.SEMIDIURNAL,
    ConstituentName.K1: ConstituentClass.DIURNAL,
    ConstituentName.O1: ConstituentClass.DIURNAL,
    ConstituentName.Mf: ConstituentClass.LONG_PERIOD,
    ConstituentName.Mm: ConstituentClass.LONG_PERIOD,
    ConstituentName.M4: ConstituentClass.QUARTER_DIURNAL,
    ConstituentName.MS4: ConstituentClass.QUARTER_DIURNAL,
}

TIDAL_CONSTITUENTS: dict[ConstituentName, Constituent] = {
    name: Constituent(
        name=name,
        frequency=speed,
        period=360.0 / speed,
        constituent_class=CONSTITUENT_CLASSES[name],
    )
    for name, speed in CONSTITUENT_SPEEDS.items()
}
"""Static constituent table keyed by :class:`ConstituentName`."""

# ---------------------------------------------------------------------------
# Name normalisation.
#
# Regional data sources spell the long-period constituents in upper case
# ("MF", "MM") while the table uses the conventional mixed case.  Every
# accepted spelling is listed explicitly, keyed by its upper-cased form.
# ---------------------------------------------------------------------------

CONSTITUENT_NAME_MAP: dict[str, ConstituentName] = {
    'M2':  ConstituentName.M2,
    'S2':  ConstituentName.S2,
    'K1':  ConstituentName.K1,
    'O1':  ConstituentName.O1,
    'MF':  ConstituentName.Mf,
    'MM':  ConstituentName.Mm,
    'M4':  ConstituentName.M4,
    'MS4': ConstituentName.MS4,
}
"""Mapping of upper-cased constituent spellings to table names."""


def parse_constituent(name: ConstituentName | str) -> ConstituentName:
    """
    Resolve a constituent name to its :class:`ConstituentName`.

    Parameters
    ----------
    name : ConstituentName or str
        Enum member, or a name in any letter case with optional
        surrounding whitespace.

    Returns
    -------
    ConstituentName

    Raises
    ------
    UnknownConstituentError
        If the name is not in the constituent table.
    """
    if isinstance(name, ConstituentName):
        return name
    if not isinstance(name, str):
        raise UnknownConstituentError(name)
    try:
        return CONSTITUENT_NAME_MAP[name.strip().upper()]
    except KeyError:
        raise UnknownConstituentError(name) from None


def is_valid_constituent(name: ConstituentName | str) -> bool:
    try:
        parse_constituent(name)
    except UnknownConstituentError:
        return False
    return True


def get_constituent(name: ConstituentName | str) -> Constituent:
    """Return the table row for *name*."""
    return TIDAL_CONSTITUENTS[parse_constituent(name)]


def get_constituent_frequency(name: ConstituentName | str) -> float:
    """Angular speed of *name* in degrees/hour."""
    return get_constituent(name).frequency


def get_constituent_period(name: ConstituentName | str) -> float:
    """Period of *name* in hours."""
    return get_constituent(name).period


def get_constituent_class(name: ConstituentName | str) -> ConstituentClass:
    return get_constituent(name).constituent_class


def get_constituent_names() -> list[ConstituentName]:
    """All known constituents in table order."""
    return list(TIDAL_CONSTITUENTS)


def constituents_of_class(
    constituent_class: ConstituentClass | str,
) -> list[ConstituentName]:
    """Constituents belonging to *constituent_class*, in table order."""
    wanted = ConstituentClass(constituent_class)
    return [
        name for name, row in TIDAL_CONSTITUENTS.items()
        if row.constituent_class is wanted
    ]
