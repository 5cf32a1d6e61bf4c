from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Optional

from ..utils.records import field_value, normalized_text
from ..utils.time import parse_date
from .divisions import AgeDivisionRow, find_eligible_division, generate_divisions
from .grades import grade_from_age, graduation_year_from_age


def calculate_season_age(birth: Any, control_date: date) -> Optional[int]:
    """Whole years old on ``control_date``.

    A birthday falling exactly on the control date counts as already had.
    Returns ``None`` when the birth date is missing or unparseable.
    """
    bd = parse_date(birth)
    if bd is None:
        return None
    age = control_date.year - bd.year
    if (control_date.month, control_date.day) < (bd.month, bd.day):
        age -= 1
    return age


def lookup_season_age(birth: Any, control_date: date) -> Optional[int]:
    """Season age as shown by the age-group lookup table.

    Unlike :func:`calculate_season_age`, a birthday on the control date is
    treated as not yet had.
    """
    bd = parse_date(birth)
    if bd is None:
        return None
    age = control_date.year - bd.year
    if (control_date.month, control_date.day) <= (bd.month, bd.day):
        age -= 1
    return age


@dataclass(frozen=True)
class EligibilityResult:
    season_age: int
    division_id: Optional[str]
    grade: Optional[int]
    graduation_year: int
    division: Optional[AgeDivisionRow] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "season_age": self.season_age,
            "division_id": self.division_id,
            "grade": self.grade,
            "graduation_year": self.graduation_year,
        }


def evaluate_athlete(
    birth: Any,
    control_date: date,
    rows: Optional[Iterable[AgeDivisionRow]] = None,
) -> Optional[EligibilityResult]:
    """Season age, division, grade and graduation year for one athlete.

    When a division row matches, its age is the season age, so a birth date
    on a row's first day reports that row's age rather than the standalone
    :func:`calculate_season_age` value.
    """
    season_age = calculate_season_age(birth, control_date)
    if season_age is None:
        return None
    table = list(rows) if rows is not None else generate_divisions(control_date)
    row = find_eligible_division(birth, table)
    if row is not None:
        season_age = row.age
    return EligibilityResult(
        season_age=season_age,
        division_id=row.division_id if row is not None else None,
        grade=grade_from_age(season_age),
        graduation_year=graduation_year_from_age(season_age, control_date),
        division=row,
    )


@dataclass(frozen=True)
class ProgramEligibility:
    ok: bool
    reason: Optional[str] = None


def evaluate_program_eligibility(program: Any, date_of_birth: Any, sex: Any) -> ProgramEligibility:
    bd = parse_date(date_of_birth)
    if bd is None:
        return ProgramEligibility(ok=False, reason="Please enter child date of birth")

    # ISO string comparison so a birth date equal to either bound is allowed.
    birth_iso = bd.isoformat()
    start = parse_date(field_value(program, "birth_date_start", "birthDateStart"))
    if start is not None and birth_iso < start.isoformat():
        return ProgramEligibility(ok=False, reason="Child is too old for this program")
    end = parse_date(field_value(program, "birth_date_end", "birthDateEnd"))
    if end is not None and birth_iso > end.isoformat():
        return ProgramEligibility(ok=False, reason="Child is too young for this program")

    restriction = normalized_text(field_value(program, "sex_restriction", "sexRestriction"))
    athlete_sex = normalized_text(sex)
    if restriction == "female" and athlete_sex != "female":
        return ProgramEligibility(ok=False, reason="Program is for females only")
    if restriction == "male" and athlete_sex != "male":
        return ProgramEligibility(ok=False, reason="Program is for males only")
    return ProgramEligibility(ok=True)


def eligible_programs(programs: Iterable[Any], date_of_birth: Any, sex: Any) -> list[Any]:
    out: list[Any] = []
    for program in programs:
        if field_value(program, "active") is False:
            continue
        if evaluate_program_eligibility(program, date_of_birth, sex).ok:
            out.append(program)
    return out

