from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict

from .circular import analyze_circular_patch, design_circular_patch
from .models import (
    DEFAULT_SETTINGS,
    CircularPatchParams,
    DesignFailure,
    PatchResult,
    QuadratureSettings,
    RectangularPatchParams,
)
from .rectangular import analyze_rectangular_patch, design_rectangular_patch

PatchParams = Union[RectangularPatchParams, CircularPatchParams]


class DesignReport(BaseModel):
    """Outcome of one calculation.

    computed is True when fr_hz was solved for from the dimensions rather than
    given as input.
    """

    model_config = ConfigDict(frozen=True)

    geometry: str
    fr_hz: float
    computed: bool
    result: PatchResult


def solve(params: PatchParams, settings: QuadratureSettings = DEFAULT_SETTINGS) -> Union[DesignReport, DesignFailure]:
    """Run the forward or reverse model that matches the parameter mode."""
    if isinstance(params, RectangularPatchParams):
        geometry = "rectangular"
        if params.mode == "frequency":
            out = design_rectangular_patch(params.frequency_hz, params.eps_r, params.h_m, settings)
        else:
            out = analyze_rectangular_patch(params.patch_width_m, params.patch_length_m, params.eps_r, params.h_m, settings)
    elif isinstance(params, CircularPatchParams):
        geometry = "circular"
        if params.mode == "frequency":
            out = design_circular_patch(params.frequency_hz, params.eps_r, params.h_m, settings)
        else:
            out = analyze_circular_patch(params.radius_m, params.eps_r, params.h_m, settings)
    else:
        raise TypeError(f"unsupported parameter type {type(params).__name__}")

    if isinstance(out, DesignFailure):
        return out
    if params.mode == "frequency":
        return DesignReport(geometry=geometry, fr_hz=out.fr_hz, computed=False, result=out)
    return DesignReport(geometry=geometry, fr_hz=out.fr_hz, computed=True, result=out.result)
