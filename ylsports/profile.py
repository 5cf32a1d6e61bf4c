from __future__ import annotations

from datetime import date
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

SeasonType = Literal["spring", "fall"]
SexRestriction = Literal["female", "male", "any"]

# Shapes of the document-store records the calculator reads. Field aliases
# keep the store's camelCase keys so raw snapshots validate directly.


class SportRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    id: Optional[str] = None
    name: str
    age_control_date: Optional[str] = Field(default=None, alias="ageControlDate")  # MM-DD


class SeasonRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    id: Optional[str] = None
    name: Optional[str] = None  # e.g. "Spring 2026"
    season_type: Optional[str] = Field(default=None, alias="seasonType")
    year: Optional[int] = None
    start_date: Optional[str] = Field(default=None, alias="startDate")


class ProgramRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    id: str
    name: str
    sport: Optional[str] = None
    season_id: Optional[str] = Field(default=None, alias="seasonId")
    age_group: Optional[str] = Field(default=None, alias="ageGroup")  # e.g. "10U"
    sex_restriction: SexRestriction = Field(default="any", alias="sexRestriction")
    birth_date_start: Optional[str] = Field(default=None, alias="birthDateStart")  # earliest allowed
    birth_date_end: Optional[str] = Field(default=None, alias="birthDateEnd")  # latest allowed
    max_grade: Optional[int] = Field(default=None, alias="maxGrade")  # K=0
    allow_grade_exemption: bool = Field(default=False, alias="allowGradeExemption")
    active: bool = True

    @field_validator("birth_date_start", "birth_date_end", mode="before")
    @classmethod
    def coerce_iso_date(cls, value: Any) -> Any:
        # YAML/JSON loaders may already have produced date objects.
        if isinstance(value, date):
            return value.isoformat()
        return value
