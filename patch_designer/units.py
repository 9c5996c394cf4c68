"""
Unit conversion between display units and SI (Hz, m).
"""
from __future__ import annotations

from enum import Enum
from typing import Union


class LengthUnit(str, Enum):
    MM = "mm"
    CM = "cm"
    M = "m"
    MIL = "mil"
    INCH = "inch"


class FrequencyUnit(str, Enum):
    GHZ = "GHz"
    MHZ = "MHz"
    KHZ = "kHz"
    HZ = "Hz"


LENGTH_TO_M = {
    LengthUnit.MM: 1e-3,
    LengthUnit.CM: 1e-2,
    LengthUnit.M: 1.0,
    LengthUnit.MIL: 25.4e-6,
    LengthUnit.INCH: 0.0254,
}

FREQ_TO_HZ = {
    FrequencyUnit.GHZ: 1e9,
    FrequencyUnit.MHZ: 1e6,
    FrequencyUnit.KHZ: 1e3,
    FrequencyUnit.HZ: 1.0,
}


def length_to_si(value: float, unit: Union[str, LengthUnit]) -> float:
    """Convert a length in the given unit to metres."""
    return value * LENGTH_TO_M[LengthUnit(unit)]


def length_from_si(value_m: float, unit: Union[str, LengthUnit]) -> float:
    """Convert metres to the given display unit."""
    if value_m == 0:
        return 0.0
    return value_m / LENGTH_TO_M[LengthUnit(unit)]


def frequency_to_si(value: float, unit: Union[str, FrequencyUnit]) -> float:
    """Convert a frequency in the given unit to Hz."""
    return value * FREQ_TO_HZ[FrequencyUnit(unit)]


def frequency_from_si(value_hz: float, unit: Union[str, FrequencyUnit]) -> float:
    """Convert Hz to the given display unit."""
    if value_hz == 0:
        return 0.0
    return value_hz / FREQ_TO_HZ[FrequencyUnit(unit)]
