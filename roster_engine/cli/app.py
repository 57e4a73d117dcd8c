"""Command line entry point: generate a weekly roster from a staff file."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Iterable

from ..adapters.config_loader import load_config, load_staff
from ..adapters.report import csv_writer, xlsx_writer
from ..infrastructure.config import default_catalog, default_policy, merged_config
from ..services.generator import RosterGenerator
from ..services.statistics import coverage_by_day

FORMATS = ("json", "csv", "xlsx")


def _parse_week(value: str) -> date:
    try:
        week = date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD") from exc
    if week.weekday() != 0:
        raise argparse.ArgumentTypeError(f"{value} is not a Monday")
    return week


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="roster-generate", description="Generate a weekly staff roster")
    parser.add_argument("staff", help="JSON or YAML file with staff profiles")
    parser.add_argument("--week", required=True, type=_parse_week, help="Monday the week starts on (YYYY-MM-DD)")
    parser.add_argument("--config", help="JSON or YAML file overriding shifts/policy")
    parser.add_argument("--format", choices=FORMATS, default="json")
    parser.add_argument("--output", help="Output file (stdout when omitted; required for xlsx)")
    parser.add_argument("--seed", type=int, help="Enable random day off with this seed")
    parser.add_argument("--summary", action="store_true", help="Print per-day coverage to stderr")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = merged_config(load_config(args.config) if args.config else None)
    if args.seed is not None:
        config["policy"].update({"random_day_off": True, "random_seed": args.seed})
    catalog = default_catalog(config)
    policy = default_policy(config)

    staff = load_staff(args.staff)
    if not staff:
        parser.error("no staff profiles to generate a roster")

    roster = RosterGenerator(catalog=catalog, policy=policy).generate(staff, args.week)

    if args.format == "xlsx":
        if not args.output:
            parser.error("--output is required for xlsx")
        xlsx_writer.write_grid(args.output, roster, args.week)
    elif args.format == "csv":
        if args.output:
            with Path(args.output).open("w", newline="", encoding="utf-8") as handle:
                csv_writer.write_grid(handle, roster)
        else:
            csv_writer.write_grid(sys.stdout, roster)
    else:
        payload = json.dumps(
            {"weekStartDate": args.week.isoformat(), "roster": [entry.to_dict() for entry in roster]},
            ensure_ascii=False,
            indent=2,
        )
        if args.output:
            Path(args.output).write_text(payload + "\n", encoding="utf-8")
        else:
            print(payload)

    if args.summary:
        for day, counts in coverage_by_day(roster, catalog).items():
            print(f"{day}: " + ", ".join(f"{name}={count}" for name, count in counts.items()), file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
