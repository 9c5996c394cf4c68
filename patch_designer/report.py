from __future__ import annotations

import math
from typing import List, NamedTuple, Optional, Union

from .models import CircularPatchResult, RectangularPatchResult
from .units import FrequencyUnit, LengthUnit, frequency_from_si, length_from_si

MISSING = "—"


class ResultRow(NamedTuple):
    symbol: str
    label: str
    value: Optional[float]
    unit: str


def _fmt(value: Optional[float]) -> str:
    if value is None or not math.isfinite(value):
        return MISSING
    return f"{value:.6f}"


def result_rows(
    result: Union[RectangularPatchResult, CircularPatchResult],
    computed_fr_hz: Optional[float] = None,
    length_unit: Union[str, LengthUnit] = LengthUnit.MM,
    frequency_unit: Union[str, FrequencyUnit] = FrequencyUnit.GHZ,
) -> List[ResultRow]:
    """Rows of the results table in display units."""
    lu = LengthUnit(length_unit).value
    fu = FrequencyUnit(frequency_unit).value

    def length(v: Optional[float]) -> Optional[float]:
        return None if v is None else length_from_si(v, lu)

    rows: List[ResultRow] = []
    if computed_fr_hz is not None:
        rows.append(ResultRow("f_r", "resonant frequency", frequency_from_si(computed_fr_hz, fu), fu))
    if isinstance(result, RectangularPatchResult):
        rows += [
            ResultRow("W", "patch width", length(result.W), lu),
            ResultRow("L", "patch length", length(result.L), lu),
            ResultRow("L_eff", "effective length", length(result.L_eff), lu),
            ResultRow("ε_reff", "effective permittivity", result.eps_eff, ""),
            ResultRow("G1", "slot conductance", result.G1, "S"),
            ResultRow("G12", "mutual conductance", result.G12, "S"),
            ResultRow("R_in(0)", "edge input resistance", result.R_in_edge, "Ω"),
            ResultRow("y0", "50 Ω inset feed", length(result.y0_50ohm), lu),
        ]
    else:
        rows += [
            ResultRow("a", "physical radius", length(result.a), lu),
            ResultRow("a_e", "effective radius", length(result.a_e), lu),
        ]
    rows += [
        ResultRow("D0", "directivity", result.directivity, ""),
        ResultRow("D0", "directivity", result.directivity_dbi, "dBi"),
        ResultRow("λ0", "free-space wavelength", length(result.lambda0), lu),
    ]
    return rows


def format_table(rows: List[ResultRow], title: Optional[str] = None) -> str:
    """Plain-text table: parameter, value (6 decimals), unit."""
    names = [f"{r.symbol} — {r.label}" if r.label else r.symbol for r in rows]
    values = [_fmt(r.value) for r in rows]
    w_name = max([len("Parameter")] + [len(n) for n in names])
    w_value = max([len("Value")] + [len(v) for v in values])

    lines = []
    if title:
        lines.append(title)
    lines.append(f"{'Parameter':<{w_name}}  {'Value':>{w_value}}  Unit")
    lines.append("-" * (w_name + w_value + 8))
    for name, value, row in zip(names, values, rows):
        lines.append(f"{name:<{w_name}}  {value:>{w_value}}  {row.unit}".rstrip())
    return "\n".join(lines)
