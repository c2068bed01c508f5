"""
Tidal Prediction Subpackage

Provides functionality for:
- Lunar age, moon phase and sun/moon ecliptic positions
- Tidal constituent definitions (M2, S2, K1, O1, Mf, Mm, M4, MS4)
- Astronomical arguments and nodal corrections
- Tide level synthesis from harmonic constants
- High/low water search and tidal stream strength
- Spring/neap/medium/long/young tide classification
- Current tide information aggregate
"""

from fishlog.tide.celestial import (
    SYNODIC_MONTH,
    calculate_all,
    calculate_celestial_positions,
    calculate_moon_phase,
    moon_distance_factor,
)
from fishlog.tide.classification import (
    calculate_moon_phase_for_date,
    classify_tide_type,
)
from fishlog.tide.classification import (
    calculate_tide_strength as calculate_tide_type_strength,
)
from fishlog.tide.constituents import (
    CONSTITUENT_SPEEDS,
    TIDAL_CONSTITUENTS,
    constituents_of_class,
    get_constituent,
    get_constituent_class,
    get_constituent_frequency,
    get_constituent_names,
    get_constituent_period,
    is_valid_constituent,
    parse_constituent,
)
from fishlog.tide.exceptions import (
    EmptyConstituentsError,
    InvalidDistanceFactorError,
    InvalidInputError,
    InvalidRangeError,
    TideCalculationError,
    UnknownConstituentError,
)
from fishlog.tide.extremes import find_tidal_extremes
from fishlog.tide.models import (
    AstronomicalArguments,
    CelestialPosition,
    CelestialSnapshot,
    Constituent,
    ConstituentClass,
    ConstituentFactor,
    ConstituentName,
    ExtremeType,
    HarmonicConstant,
    MoonPhase,
    MoonPhaseName,
    MoonPosition,
    SunPosition,
    TidalExtreme,
    TideDirection,
    TideInfo,
    TideState,
    TideStrength,
    TideType,
)
from fishlog.tide.nodal_corrections import (
    calculate_astronomical_arguments,
    calculate_constituent_factors,
)
from fishlog.tide.tidal_prediction import (
    calculate_tide_level,
    calculate_tide_rate,
    calculate_tide_strength,
    predict_from_constants,
    predict_tide,
    predict_tide_curve,
)
from fishlog.tide.tide_info import calculate_tide_info

__all__ = [
    # Value objects
    'HarmonicConstant',
    'Constituent',
    'ConstituentName',
    'ConstituentClass',
    'ConstituentFactor',
    'AstronomicalArguments',
    'MoonPhase',
    'MoonPhaseName',
    'SunPosition',
    'MoonPosition',
    'CelestialPosition',
    'CelestialSnapshot',
    'TidalExtreme',
    'ExtremeType',
    'TideStrength',
    'TideDirection',
    'TideState',
    'TideType',
    'TideInfo',
    # Errors
    'TideCalculationError',
    'InvalidInputError',
    'EmptyConstituentsError',
    'UnknownConstituentError',
    'InvalidRangeError',
    'InvalidDistanceFactorError',
    # Constituent definitions
    'TIDAL_CONSTITUENTS',
    'CONSTITUENT_SPEEDS',
    'parse_constituent',
    'is_valid_constituent',
    'get_constituent',
    'get_constituent_frequency',
    'get_constituent_period',
    'get_constituent_class',
    'get_constituent_names',
    'constituents_of_class',
    # Astronomical positions
    'SYNODIC_MONTH',
    'calculate_moon_phase',
    'calculate_celestial_positions',
    'calculate_all',
    'moon_distance_factor',
    # Nodal corrections
    'calculate_astronomical_arguments',
    'calculate_constituent_factors',
    # Tidal prediction
    'calculate_tide_level',
    'predict_tide',
    'predict_tide_curve',
    'predict_from_constants',
    'calculate_tide_rate',
    'calculate_tide_strength',
    # Extrema search
    'find_tidal_extremes',
    # Classification
    'classify_tide_type',
    'calculate_tide_type_strength',
    'calculate_moon_phase_for_date',
    # Current tide info
    'calculate_tide_info',
]
