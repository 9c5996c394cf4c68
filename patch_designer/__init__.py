from loguru import logger

from .logsettings import LOG_CONTROLLER, set_loglevel
from .physics import c0, wavelength, wavenumber
from .bessel import bessel_j, bessel_j0, bessel_j2
from .quadrature import integrate_1d, integrate_2d
from .models import (
    CircularPatchParams,
    CircularPatchResult,
    DEFAULT_SETTINGS,
    DesignFailure,
    FailureKind,
    QuadratureSettings,
    RectangularPatchParams,
    RectangularPatchResult,
    ReverseSolution,
)
from .rectangular import analyze_rectangular_patch, design_rectangular_patch
from .circular import analyze_circular_patch, design_circular_patch
from .solver import DesignReport, solve
from .units import FrequencyUnit, LengthUnit, frequency_from_si, frequency_to_si, length_from_si, length_to_si

__version__ = "0.1.0"

logger.disable(__name__)

__all__ = [
    "c0",
    "wavelength",
    "wavenumber",
    "bessel_j",
    "bessel_j0",
    "bessel_j2",
    "integrate_1d",
    "integrate_2d",
    # Parameters / settings
    "RectangularPatchParams",
    "CircularPatchParams",
    "QuadratureSettings",
    "DEFAULT_SETTINGS",
    # Results
    "RectangularPatchResult",
    "CircularPatchResult",
    "ReverseSolution",
    "DesignFailure",
    "FailureKind",
    "DesignReport",
    # Entry points
    "design_rectangular_patch",
    "analyze_rectangular_patch",
    "design_circular_patch",
    "analyze_circular_patch",
    "solve",
    # Units
    "LengthUnit",
    "FrequencyUnit",
    "length_to_si",
    "length_from_si",
    "frequency_to_si",
    "frequency_from_si",
    "set_loglevel",
]
