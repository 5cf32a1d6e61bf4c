from __future__ import annotations

from .calculator import (
    EligibilityResult,
    ProgramEligibility,
    calculate_season_age,
    eligible_programs,
    evaluate_athlete,
    evaluate_program_eligibility,
    lookup_season_age,
)
from .divisions import (
    DIVISIONS,
    AgeDivisionRow,
    Division,
    division_birth_date_range,
    divisions_for_season,
    find_eligible_division,
    generate_divisions,
    get_division,
)
from .grades import (
    calculate_current_grade,
    format_grade,
    grade_from_age,
    graduation_year_from_age,
    max_grade_from_birth_date,
    max_grade_from_birth_date_current_school_year,
    suggest_program_max_grade,
)

__all__ = [
    "AgeDivisionRow",
    "DIVISIONS",
    "Division",
    "EligibilityResult",
    "ProgramEligibility",
    "calculate_current_grade",
    "calculate_season_age",
    "division_birth_date_range",
    "divisions_for_season",
    "eligible_programs",
    "evaluate_athlete",
    "evaluate_program_eligibility",
    "find_eligible_division",
    "format_grade",
    "generate_divisions",
    "get_division",
    "grade_from_age",
    "graduation_year_from_age",
    "lookup_season_age",
    "max_grade_from_birth_date",
    "max_grade_from_birth_date_current_school_year",
    "suggest_program_max_grade",
]
