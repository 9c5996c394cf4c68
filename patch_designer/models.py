from __future__ import annotations

import math
import numbers
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .units import FrequencyUnit, LengthUnit, frequency_to_si, length_to_si


class QuadratureSettings(BaseModel):
    """Subdivision counts for the conductance and directivity integrals."""

    model_config = ConfigDict(frozen=True)

    n_conductance: int = Field(default=512, ge=2, description="1-D slot conductance / radiation integrals")
    n_directivity_theta: int = Field(default=128, ge=2, description="Outer (theta) subdivisions of the directivity integral")
    n_directivity_phi: int = Field(default=128, ge=2, description="Inner (phi) subdivisions of the directivity integral")


DEFAULT_SETTINGS = QuadratureSettings()


# ---- Failure signal ----

class FailureKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    NON_CONVERGENCE = "non_convergence"
    UNBRACKETED_ROOT = "unbracketed_root"


class DesignFailure(BaseModel):
    """Explicit absence of a result, with the reason it could not be produced."""

    model_config = ConfigDict(frozen=True)

    kind: FailureKind
    reason: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.reason}"


# ---- Results ----

class RectangularPatchResult(BaseModel):
    """Rectangular patch design at resonance (SI units)."""

    model_config = ConfigDict(frozen=True)

    fr_hz: float
    W: float
    L: float
    L_eff: float
    delta_L: float
    eps_eff: float
    G1: float
    G12: float
    R_in_edge: float
    y0_50ohm: Optional[float] = None
    directivity: float
    directivity_dbi: float
    lambda0: float

    @property
    def has_directivity(self) -> bool:
        return math.isfinite(self.directivity)

    def summary(self) -> dict:
        return {
            "fr_GHz": self.fr_hz / 1e9,
            "W_mm": self.W * 1e3,
            "L_mm": self.L * 1e3,
            "L_eff_mm": self.L_eff * 1e3,
            "eps_eff": self.eps_eff,
            "G1_S": self.G1,
            "G12_S": self.G12,
            "R_in_edge_ohm": self.R_in_edge,
            "y0_50ohm_mm": None if self.y0_50ohm is None else self.y0_50ohm * 1e3,
            "D0": self.directivity,
            "D0_dBi": self.directivity_dbi,
            "lambda0_mm": self.lambda0 * 1e3,
        }


class CircularPatchResult(BaseModel):
    """Circular patch design at resonance (SI units)."""

    model_config = ConfigDict(frozen=True)

    fr_hz: float
    F: float
    a: float
    a_e: float
    G_rad: float
    directivity: float
    directivity_dbi: float
    lambda0: float

    @property
    def has_directivity(self) -> bool:
        return math.isfinite(self.directivity)

    def summary(self) -> dict:
        return {
            "fr_GHz": self.fr_hz / 1e9,
            "a_mm": self.a * 1e3,
            "a_e_mm": self.a_e * 1e3,
            "G_rad_S": self.G_rad,
            "D0": self.directivity,
            "D0_dBi": self.directivity_dbi,
            "lambda0_mm": self.lambda0 * 1e3,
        }


PatchResult = Union[RectangularPatchResult, CircularPatchResult]


class ReverseSolution(BaseModel):
    """Frequency recovered from dimensions plus the forward design at that frequency."""

    model_config = ConfigDict(frozen=True)

    fr_hz: float
    result: PatchResult


# ---- Caller-side parameters ----

class RectangularPatchParams(BaseModel):
    """Inputs for a rectangular microstrip patch.

    Internally we use SI units. Give either frequency_hz (design mode) or both
    patch_width_m and patch_length_m (analysis mode).
    """

    frequency_hz: Optional[float] = Field(default=None, gt=0)
    eps_r: float = Field(ge=1)
    h_m: float = Field(gt=0)
    patch_width_m: Optional[float] = Field(default=None, gt=0)
    patch_length_m: Optional[float] = Field(default=None, gt=0)

    @model_validator(mode="after")
    def _one_mode(self) -> "RectangularPatchParams":
        dims = (self.patch_width_m, self.patch_length_m)
        if self.frequency_hz is None:
            if None in dims:
                raise ValueError("give frequency_hz, or both patch_width_m and patch_length_m")
        elif any(d is not None for d in dims):
            raise ValueError("frequency_hz cannot be combined with patch dimensions")
        return self

    @property
    def mode(self) -> str:
        return "frequency" if self.frequency_hz is not None else "dimensions"

    @classmethod
    def from_user_units(
        cls,
        *,
        er: float,
        h: float,
        frequency: Optional[float] = None,
        width: Optional[float] = None,
        length: Optional[float] = None,
        frequency_unit: Union[str, FrequencyUnit] = FrequencyUnit.GHZ,
        length_unit: Union[str, LengthUnit] = LengthUnit.MM,
    ) -> "RectangularPatchParams":
        return cls(
            frequency_hz=None if frequency is None else frequency_to_si(frequency, frequency_unit),
            eps_r=er,
            h_m=length_to_si(h, length_unit),
            patch_width_m=None if width is None else length_to_si(width, length_unit),
            patch_length_m=None if length is None else length_to_si(length, length_unit),
        )


class CircularPatchParams(BaseModel):
    """Inputs for a circular microstrip patch: frequency_hz or radius_m."""

    frequency_hz: Optional[float] = Field(default=None, gt=0)
    eps_r: float = Field(ge=1)
    h_m: float = Field(gt=0)
    radius_m: Optional[float] = Field(default=None, gt=0)

    @model_validator(mode="after")
    def _one_mode(self) -> "CircularPatchParams":
        if (self.frequency_hz is None) == (self.radius_m is None):
            raise ValueError("give exactly one of frequency_hz and radius_m")
        return self

    @property
    def mode(self) -> str:
        return "frequency" if self.frequency_hz is not None else "dimensions"

    @classmethod
    def from_user_units(
        cls,
        *,
        er: float,
        h: float,
        frequency: Optional[float] = None,
        radius: Optional[float] = None,
        frequency_unit: Union[str, FrequencyUnit] = FrequencyUnit.GHZ,
        length_unit: Union[str, LengthUnit] = LengthUnit.MM,
    ) -> "CircularPatchParams":
        return cls(
            frequency_hz=None if frequency is None else frequency_to_si(frequency, frequency_unit),
            eps_r=er,
            h_m=length_to_si(h, length_unit),
            radius_m=None if radius is None else length_to_si(radius, length_unit),
        )


def input_problem(**values: float) -> Optional[str]:
    """Describe the first out-of-domain design input, or None if all are valid.

    eps_r must be finite and >= 1, every other value finite and > 0.
    """
    for name, value in values.items():
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            return f"{name} must be a real number, got {value!r}"
        if name == "eps_r":
            if not (math.isfinite(value) and value >= 1.0):
                return f"eps_r must be >= 1, got {value}"
        elif not (math.isfinite(value) and value > 0.0):
            return f"{name} must be > 0, got {value}"
    return None
