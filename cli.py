from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from hd_core.config import load_config
from hd_core.errors import InvalidInputError
from schemas import BirthPayload
from services.chart_services import compute_for_payload, render_chart_report
from utils.frames import activations_to_frame, decoded_frame

logger = logging.getLogger("hd.cli")


def _decode(args: argparse.Namespace) -> int:
    df = decoded_frame(args.longitudes)
    if args.csv:
        df.to_csv(args.csv, index=False)
        print(str(args.csv))
    else:
        print(df.to_string(index=False))
    return 0


def _report(args: argparse.Namespace) -> int:
    payload = BirthPayload(
        name=args.name,
        dateOfBirth=args.date,
        timeOfBirth=args.time,
        placeOfBirth=args.place,
        timeZone=args.tz,
        latitude=args.lat,
        longitude=args.lon,
    )
    data = compute_for_payload(payload, load_config(str(args.config) if args.config else None))
    if args.csv:
        frame = activations_to_frame(personality=data.chart.personality, design=data.chart.design)
        frame.to_csv(args.csv, index=False)
        logger.info("activations_written", extra={"path": str(args.csv), "rows": len(frame)})
    print(render_chart_report(payload, data), end="")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Human Design chart tools.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_decode = sub.add_parser("decode", help="Decode ecliptic longitudes into gate.line activations")
    p_decode.add_argument("longitudes", type=float, nargs="+")
    p_decode.add_argument("--csv", type=Path, default=None, help="Write the table to CSV instead of stdout")
    p_decode.set_defaults(func=_decode)

    p_report = sub.add_parser("report", help="Print a birth chart report")
    p_report.add_argument("--name", default="Anonymous")
    p_report.add_argument("--date", required=True, help="YYYY-MM-DD (local)")
    p_report.add_argument("--time", default="12:00", help="HH:MM[:SS] (local)")
    p_report.add_argument("--tz", default="UTC", help="IANA time zone")
    p_report.add_argument("--lat", type=float, default=0.0)
    p_report.add_argument("--lon", type=float, default=0.0)
    p_report.add_argument("--place", default=None)
    p_report.add_argument("--config", type=Path, default=None, help="Optional YAML chart config")
    p_report.add_argument("--csv", type=Path, default=None, help="Also write personality/design activations to CSV")
    p_report.set_defaults(func=_report)

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, str(args.log_level).upper(), logging.WARNING))

    try:
        return args.func(args)
    except InvalidInputError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
