from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from pydantic import ValidationError

from .logsettings import LOG_CONTROLLER, set_loglevel
from .models import CircularPatchParams, DesignFailure, RectangularPatchParams
from .report import format_table, result_rows
from .solver import solve
from .units import FrequencyUnit, LengthUnit


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--frequency", type=float, default=None, help="Resonant frequency (design mode)")
    p.add_argument("--frequency-unit", choices=[u.value for u in FrequencyUnit], default="GHz")
    p.add_argument("--er", type=float, required=True, help="Substrate relative permittivity")
    p.add_argument("--height", type=float, required=True, help="Substrate height")
    p.add_argument("--length-unit", choices=[u.value for u in LengthUnit], default="mm")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="patch_designer", description="Microstrip patch antenna calculator")
    parser.add_argument("--json", action="store_true", help="Print the full report as JSON")
    parser.add_argument("--log-level", default=None, choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="cmd", required=True)

    rect = sub.add_parser("rect", help="Rectangular patch: frequency -> W, L or W, L -> frequency")
    _add_common(rect)
    rect.add_argument("--width", type=float, default=None, help="Patch width (analysis mode)")
    rect.add_argument("--length", type=float, default=None, help="Patch length (analysis mode)")

    circ = sub.add_parser("circ", help="Circular patch: frequency -> a or a -> frequency")
    _add_common(circ)
    circ.add_argument("--radius", type=float, default=None, help="Patch radius (analysis mode)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    LOG_CONTROLLER.release_default_sink()
    if args.log_level:
        set_loglevel(args.log_level)
    else:
        LOG_CONTROLLER.set_default()

    units = dict(frequency_unit=args.frequency_unit, length_unit=args.length_unit)
    try:
        if args.cmd == "rect":
            params = RectangularPatchParams.from_user_units(
                er=args.er, h=args.height, frequency=args.frequency, width=args.width, length=args.length, **units
            )
        else:
            params = CircularPatchParams.from_user_units(
                er=args.er, h=args.height, frequency=args.frequency, radius=args.radius, **units
            )
    except ValidationError as e:
        print(f"Invalid input:\n{e}", file=sys.stderr)
        return 1

    report = solve(params)
    if isinstance(report, DesignFailure):
        print(f"Calculation failed ({report})", file=sys.stderr)
        return 1

    if args.json:
        print(report.model_dump_json(indent=2))
        return 0

    rows = result_rows(report.result, report.fr_hz if report.computed else None, **units)
    print(format_table(rows, title=f"{report.geometry.capitalize()} patch"))
    if not report.result.has_directivity:
        print("Directivity integral did not converge", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
