from __future__ import annotations

from dataclasses import dataclass
from datetime import date
import logging
from typing import Any, Literal, Optional

from ..utils.records import field_value, normalized_text
from ..utils.time import parse_date, utc_date, utc_today
from .sports import default_rule_for, guess_known_sport, parse_mmdd

logger = logging.getLogger(__name__)

Term = Literal["spring", "fall"]

_SPRING_MONTHS = (3, 4, 5)
_FALL_MONTHS = (9, 10, 11)


@dataclass(frozen=True)
class SeasonDescriptor:
    term: Term
    year: int


def term_for_month(month: int) -> Term:
    if month in _FALL_MONTHS:
        return "fall"
    # Mar-May is spring; everything outside both windows also defaults to spring.
    return "spring"


def normalize_season(raw: Any, today: Optional[date] = None) -> SeasonDescriptor:
    """Reduce a season record to ``(term, year)``.

    An explicit numeric year together with a season type wins. Otherwise the
    term and year come from ``startDate``; failing that, spring of the
    current year.
    """
    today = today or utc_today()
    if raw is None:
        return SeasonDescriptor(term="spring", year=today.year)
    if isinstance(raw, SeasonDescriptor):
        return raw

    year = _as_int(field_value(raw, "year"))
    season_type = _season_type(raw)
    if year is not None and season_type:
        return SeasonDescriptor(term="fall" if season_type == "fall" else "spring", year=year)

    start_raw = field_value(raw, "start_date", "startDate")
    if start_raw not in (None, ""):
        start = parse_date(start_raw)
        if start is not None:
            return SeasonDescriptor(term=term_for_month(start.month), year=start.year)
        logger.warning("Could not parse season startDate %r for season normalization", start_raw)

    return SeasonDescriptor(term="spring", year=today.year)


def derive_control_date(
    season: Any,
    sport_age_control: Optional[str] = None,
    sport_name: Optional[str] = None,
    today: Optional[date] = None,
) -> date:
    """Return the date ages are measured against for ``season``.

    Fall seasons measure against the following calendar year. The month/day
    comes from the sport's "MM-DD" rule, then from a recognised sport name
    (baseball, softball). With neither, the result is Jan 1 of the current
    year, *not* of the control year.
    """
    today = today or utc_today()

    term: Term = "spring"
    start_year: Optional[int] = None
    season_type = _season_type(season)
    if season_type:
        term = "fall" if season_type == "fall" else "spring"
    else:
        start_raw = field_value(season, "start_date", "startDate")
        if start_raw not in (None, ""):
            start = parse_date(start_raw)
            if start is None:
                logger.warning("Could not parse season startDate %r for age control date", start_raw)
            else:
                term = term_for_month(start.month)
                start_year = start.year

    year = _as_int(field_value(season, "year"))
    if year is None:
        year = start_year if start_year is not None else today.year
    control_year = year + 1 if term == "fall" else year

    rules = [parse_mmdd(sport_age_control)]
    if sport_name:
        rules.append(default_rule_for(guess_known_sport(sport_name)))
    for rule in rules:
        if rule is None:
            continue
        try:
            return utc_date(control_year, rule.control_month, rule.control_day)
        except (ValueError, OverflowError):
            logger.warning(
                "Age control %02d-%02d gives no date in %d; trying next rule",
                rule.control_month + 1,
                rule.control_day,
                control_year,
            )
    return date(today.year, 1, 1)


def control_date_for_season(season: Any, sport: Any = None, today: Optional[date] = None) -> date:
    if isinstance(sport, str):
        return derive_control_date(season, None, sport, today=today)
    age_control = field_value(sport, "age_control_date", "ageControlDate")
    name = field_value(sport, "name")
    return derive_control_date(
        season,
        str(age_control) if age_control not in (None, "") else None,
        str(name) if name not in (None, "") else None,
        today=today,
    )


def _season_type(season: Any) -> Optional[str]:
    return normalized_text(field_value(season, "season_type", "seasonType", "term"))


def _as_int(value: Any) -> Optional[int]:
    if value in (None, "") or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
