from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Optional

from .eligibility.calculator import EligibilityResult, calculate_season_age, evaluate_athlete
from .eligibility.grades import SENIOR_GRADE, calculate_current_grade
from .utils.time import parse_date, utc_today

SEX_CATEGORIES = ("male", "female", "other")


def _parse_optional_int(value: object, field_name: str) -> Optional[int]:
    if value in (None, ""):
        return None
    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be a whole number.")
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValueError(f"{field_name} must be a whole number.") from None


@dataclass
class AthleteProfile:
    """A family member as read from the person records."""

    profile_id: str
    first_name: str
    last_name: str = ""
    date_of_birth: str = ""
    sex: str = "other"
    graduation_year: Optional[int] = None
    grade: Optional[int] = None
    school_name: Optional[str] = None

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def normalize(self, today: Optional[date] = None) -> None:
        self.first_name = (self.first_name or "").strip()
        self.last_name = (self.last_name or "").strip()
        sex = str(self.sex or "").strip().lower()
        self.sex = sex if sex in SEX_CATEGORIES else "other"
        self.date_of_birth = str(self.date_of_birth or "").strip()
        if not self.date_of_birth:
            raise ValueError("date_of_birth is required.")
        dob = parse_date(self.date_of_birth)
        if dob is None:
            raise ValueError("date_of_birth must use YYYY-MM-DD.")
        if dob > (today or utc_today()):
            raise ValueError("date_of_birth cannot be in the future.")
        self.date_of_birth = dob.isoformat()
        self.graduation_year = _parse_optional_int(self.graduation_year, "graduation_year")
        self.grade = _parse_optional_int(self.grade, "grade")
        if self.grade is not None and not 0 <= self.grade <= SENIOR_GRADE:
            raise ValueError("grade must be between 0 (K) and 12.")
        self.school_name = (self.school_name or "").strip() or None

    def display_grade(self, as_of: Optional[date] = None) -> Optional[int]:
        # An explicitly stored grade takes precedence over the graduation year.
        if self.grade is not None:
            return self.grade
        return calculate_current_grade(self.graduation_year, as_of=as_of)

    def season_age(self, control_date: date) -> Optional[int]:
        return calculate_season_age(self.date_of_birth, control_date)

    def eligibility(self, control_date: date) -> Optional[EligibilityResult]:
        return evaluate_athlete(self.date_of_birth, control_date)

    def to_dict(self) -> dict:
        self.normalize()
        return asdict(self)

    @staticmethod
    def from_dict(data: dict) -> "AthleteProfile":
        profile = AthleteProfile(
            profile_id=str(data.get("profile_id", data.get("id", ""))),
            first_name=str(data.get("first_name", data.get("firstName", ""))),
            last_name=str(data.get("last_name", data.get("lastName", ""))),
            date_of_birth=data.get("date_of_birth", data.get("dateOfBirth")),
            sex=str(data.get("sex", "other")),
            graduation_year=data.get("graduation_year", data.get("graduationYear")),
            grade=data.get("grade"),
            school_name=data.get("school_name", data.get("schoolName")),
        )
        profile.normalize()
        return profile
