from __future__ import annotations

import argparse
import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from .eligibility.calculator import (
    calculate_season_age,
    evaluate_athlete,
    evaluate_program_eligibility,
    lookup_season_age,
)
from .eligibility.divisions import find_eligible_division, generate_divisions
from .eligibility.grades import calculate_current_grade, format_grade
from .profile import ProgramRecord
from .seasons.config_loader import load_league_config, resolve_sports_dir
from .seasons.control_date import derive_control_date, normalize_season
from .seasons.sports import load_sport_catalog
from .utils.time import format_display, parse_date


def _add_season_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--year", type=int, default=None, help="Season year (e.g. 2026)")
    p.add_argument("--term", choices=["spring", "fall"], default=None, help="Season term")
    p.add_argument("--start-date", default=None, help="Season start date YYYY-MM-DD (infers term/year)")
    p.add_argument("--sport", default=None, help="Sport name or id (default: league config)")
    p.add_argument("--age-control", default=None, help="Override the sport's age control date (MM-DD)")
    p.add_argument("--today", default=None, help="Evaluate as of this date YYYY-MM-DD (default: today, UTC)")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ylsports",
        description="Youth league age division and grade eligibility calculator.",
    )
    p.add_argument("--config", default=None, help="League config YAML (default: config/league.yaml)")
    p.add_argument("-v", "--verbose", action="store_true", help="Log data warnings to stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_control = sub.add_parser("control-date", help="Show the season age control date")
    _add_season_args(p_control)

    p_lookup = sub.add_parser("lookup", help="Find the eligible age division for a birth date")
    _add_season_args(p_lookup)
    p_lookup.add_argument("--dob", required=True, help="Athlete date of birth YYYY-MM-DD")

    p_table = sub.add_parser("table", help="List division birth date ranges (3U-18U)")
    _add_season_args(p_table)

    p_grade = sub.add_parser("grade", help="Current school grade from a graduation year")
    p_grade.add_argument("--graduation-year", type=int, required=True)
    p_grade.add_argument("--as-of", default=None, help="Date YYYY-MM-DD (default: today, UTC)")

    p_programs = sub.add_parser("programs", help="List programs an athlete may register for")
    p_programs.add_argument("--programs", required=True, help="YAML/JSON file with a list of programs")
    p_programs.add_argument("--dob", required=True, help="Athlete date of birth YYYY-MM-DD")
    p_programs.add_argument("--sex", default=None, help="Athlete sex (male/female)")
    return p


def _parse_date_arg(parser: argparse.ArgumentParser, value: Optional[str], name: str) -> Optional[date]:
    if value is None:
        return None
    parsed = parse_date(value)
    if parsed is None:
        parser.error(f"{name} must use YYYY-MM-DD (got {value!r})")
    return parsed


def _resolve_control_date(args: argparse.Namespace, config: Dict[str, Any], today: Optional[date]) -> Dict[str, Any]:
    season = {"year": args.year, "seasonType": args.term, "startDate": args.start_date}
    if all(v is None for v in season.values()):
        descriptor = normalize_season(None, today=today)
        season = {"year": descriptor.year, "seasonType": descriptor.term}

    sport_name = args.sport or config.get("default_sport")
    age_control = args.age_control
    if age_control is None and sport_name:
        catalog = load_sport_catalog(resolve_sports_dir(config))
        spec = catalog.get_sport(str(sport_name))
        if spec is not None:
            age_control = spec.age_control_date
            sport_name = spec.name

    control = derive_control_date(season, age_control, sport_name, today=today)
    return {"sport": sport_name, "age_control_date": age_control, "control_date": control}


def _load_programs(parser: argparse.ArgumentParser, path: Path) -> list[ProgramRecord]:
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        parser.error(f"Could not read programs file {path}: {exc}")
    if isinstance(raw, dict):
        raw = raw.get("programs")
    if not isinstance(raw, list):
        parser.error(f"Programs file {path} must contain a list of programs")
    try:
        return [ProgramRecord.model_validate(item) for item in raw]
    except ValidationError as exc:
        parser.error(f"Invalid program record in {path}: {exc}")


def _print(payload: Dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2))


def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.ERROR, format="[ylsports] %(message)s")
    config = load_league_config(Path(args.config) if args.config else None)

    if args.cmd == "grade":
        as_of = _parse_date_arg(p, args.as_of, "--as-of")
        grade = calculate_current_grade(args.graduation_year, as_of=as_of)
        _print({"graduation_year": args.graduation_year, "grade": grade, "grade_display": format_grade(grade)})
        return 0

    if args.cmd == "programs":
        if parse_date(args.dob) is None:
            p.error(f"--dob must use YYYY-MM-DD (got {args.dob!r})")
        programs = _load_programs(p, Path(args.programs))
        rows = []
        for prog in programs:
            check = evaluate_program_eligibility(prog, args.dob, args.sex)
            rows.append(
                {
                    "id": prog.id,
                    "name": prog.name,
                    "active": prog.active,
                    "eligible": check.ok and prog.active,
                    "reason": check.reason,
                }
            )
        _print({"date_of_birth": args.dob, "programs": rows})
        return 0

    today = _parse_date_arg(p, args.today, "--today")
    resolved = _resolve_control_date(args, config, today)
    control: date = resolved["control_date"]
    header = {
        "sport": resolved["sport"],
        "age_control_date": resolved["age_control_date"],
        "control_date": control.isoformat(),
        "control_date_display": format_display(control),
    }

    if args.cmd == "control-date":
        _print(header)
        return 0

    if args.cmd == "table":
        header["divisions"] = [row.to_dict() for row in generate_divisions(control)]
        _print(header)
        return 0

    if args.cmd == "lookup":
        _parse_date_arg(p, args.dob, "--dob")
        rows = generate_divisions(control)
        row = find_eligible_division(args.dob, rows)
        result = evaluate_athlete(args.dob, control, rows)
        header.update(
            {
                "date_of_birth": args.dob,
                "season_age": calculate_season_age(args.dob, control),
                "lookup_season_age": lookup_season_age(args.dob, control),
                "eligible_division": row.to_dict() if row is not None else None,
                "result": result.to_dict() if result is not None else None,
            }
        )
        _print(header)
        return 0

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
