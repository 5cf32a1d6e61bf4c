from __future__ import annotations

from datetime import date
from typing import Any, Optional

from ..utils.time import parse_date, utc_today

KINDERGARTEN = 0
SENIOR_GRADE = 12
# Age at which a child is in kindergarten for the season.
KINDERGARTEN_AGE = 6
# School years start in August (Aug-Dec belong to the new school year).
SCHOOL_YEAR_START_MONTH = 8


def _valid_grade(grade: int) -> Optional[int]:
    return grade if KINDERGARTEN <= grade <= SENIOR_GRADE else None


def grade_from_age(age: Any) -> Optional[int]:
    if isinstance(age, bool) or not isinstance(age, int):
        return None
    return _valid_grade(age - KINDERGARTEN_AGE)


def graduation_year_from_age(age: int, control_date: date) -> int:
    return control_date.year + 18 - age


def school_year_for(as_of: date) -> int:
    return as_of.year if as_of.month >= SCHOOL_YEAR_START_MONTH else as_of.year - 1


def calculate_current_grade(graduation_year: Any, as_of: Optional[date] = None) -> Optional[int]:
    """Grade a student is in on ``as_of`` given their graduation year.

    Uses the school calendar (new year in August), not a sport's control
    date. Returns ``None`` outside K-12 or when no graduation year is known.
    """
    if not graduation_year or isinstance(graduation_year, bool):
        return None
    try:
        graduation_year = int(graduation_year)
    except (TypeError, ValueError):
        return None
    as_of = as_of or utc_today()
    grade = SENIOR_GRADE - (graduation_year - school_year_for(as_of) - 1)
    return _valid_grade(grade)


def max_grade_from_birth_date(birth: Any, control_date: date) -> Optional[int]:
    # Year-only arithmetic; callers decide whether the value is a usable grade.
    bd = parse_date(birth)
    if bd is None:
        return None
    return control_date.year - bd.year - KINDERGARTEN_AGE


def max_grade_from_birth_date_current_school_year(birth: Any, today: Optional[date] = None) -> int:
    bd = parse_date(birth)
    if bd is None:
        return -1
    today = today or utc_today()
    return school_year_for(today) - bd.year - KINDERGARTEN_AGE


def suggest_program_max_grade(
    birth_date_start: Any,
    allow_grade_exemption: bool,
    today: Optional[date] = None,
) -> Optional[int]:
    """Max grade to pre-fill when an admin sets a program's earliest birth date."""
    if not allow_grade_exemption or not birth_date_start:
        return None
    if parse_date(birth_date_start) is None:
        return None
    return _valid_grade(max_grade_from_birth_date_current_school_year(birth_date_start, today=today))


def format_grade(grade: Optional[int]) -> str:
    if grade is None:
        return ""
    return "K" if grade == KINDERGARTEN else str(grade)
