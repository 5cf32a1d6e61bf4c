from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Iterable, Literal, Optional

from ..utils.time import format_display, parse_date, shift_years
from .grades import grade_from_age, graduation_year_from_age

SexRestriction = Literal["male", "female", "any"]

MIN_TABLE_AGE = 3
MAX_TABLE_AGE = 18


@dataclass(frozen=True)
class Division:
    division_id: str
    label: str
    min_age: int  # inclusive minimum season age
    max_age: int  # inclusive maximum season age
    sex: SexRestriction = "any"


def _build_catalog() -> dict[str, Division]:
    catalog: dict[str, Division] = {}
    for u in range(4, 19):
        key = f"{u}u"
        catalog[key] = Division(division_id=key, label=f"{u}U", min_age=u - 1, max_age=u)
    # Legacy sport-specific naming kept for existing programs.
    catalog["4u-baseball"] = Division(division_id="4u-baseball", label="4U Baseball", min_age=3, max_age=4)
    return catalog


DIVISIONS: dict[str, Division] = _build_catalog()


def get_division(division_id: str) -> Optional[Division]:
    if not division_id:
        return None
    return DIVISIONS.get(division_id)


def divisions_for_season(division_ids: Optional[Iterable[str]] = None) -> list[Division]:
    ids = [str(i) for i in (division_ids or []) if str(i).strip()]
    if not ids:
        return list(DIVISIONS.values())
    out: list[Division] = []
    for division_id in ids:
        div = DIVISIONS.get(division_id)
        if div is None:
            div = Division(division_id=division_id, label=division_id, min_age=0, max_age=100)
        out.append(div)
    return out


@dataclass(frozen=True)
class BirthDateRange:
    from_date: date
    to_date: date

    @property
    def from_display(self) -> str:
        return format_display(self.from_date)

    @property
    def to_display(self) -> str:
        return format_display(self.to_date)

    def contains(self, birth: date) -> bool:
        return self.from_date <= birth <= self.to_date


def _window(control_date: date, oldest_age: int, youngest_age: int) -> BirthDateRange:
    # [control - (oldest + 1) years, control - youngest years - 1 day], both inclusive.
    from_date = shift_years(control_date, -(oldest_age + 1))
    to_date = shift_years(control_date, -youngest_age) - timedelta(days=1)
    return BirthDateRange(from_date=from_date, to_date=to_date)


def division_birth_date_range(control_date: date, division_id: str) -> Optional[BirthDateRange]:
    div = get_division(division_id)
    if div is None:
        return None
    return _window(control_date, div.max_age, div.min_age)


@dataclass(frozen=True)
class AgeDivisionRow:
    """One row of the age-division lookup table for a control date."""

    age: int
    from_date: date
    to_date: date
    grade: Optional[int]
    graduation_year: int

    @property
    def label(self) -> str:
        return f"{self.age}U"

    @property
    def division_id(self) -> str:
        return f"{self.age}u"

    @property
    def from_iso(self) -> str:
        return self.from_date.isoformat()

    @property
    def to_iso(self) -> str:
        return self.to_date.isoformat()

    @property
    def from_display(self) -> str:
        return format_display(self.from_date)

    @property
    def to_display(self) -> str:
        return format_display(self.to_date)

    def to_dict(self) -> dict[str, Any]:
        return {
            "age_group": self.label,
            "age": self.age,
            "from_date": self.from_iso,
            "to_date": self.to_iso,
            "from_date_display": self.from_display,
            "to_date_display": self.to_display,
            "grade": self.grade,
            "graduation_year": self.graduation_year,
        }


def generate_divisions(control_date: date) -> list[AgeDivisionRow]:
    rows: list[AgeDivisionRow] = []
    for age in range(MIN_TABLE_AGE, MAX_TABLE_AGE + 1):
        window = _window(control_date, age, age)
        rows.append(
            AgeDivisionRow(
                age=age,
                from_date=window.from_date,
                to_date=window.to_date,
                grade=grade_from_age(age),
                graduation_year=graduation_year_from_age(age, control_date),
            )
        )
    return rows


def find_eligible_division(birth: Any, rows: Iterable[AgeDivisionRow]) -> Optional[AgeDivisionRow]:
    bd = parse_date(birth)
    if bd is None:
        return None
    birth_iso = bd.isoformat()
    for row in rows:
        if row.from_iso <= birth_iso <= row.to_iso:
            return row
    return None
