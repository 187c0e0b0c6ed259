from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from .config import DEGREE_HIERARCHY
from .normalize import to_naive_utc


class EducationLevel(str, Enum):
    HIGH_SCHOOL = "High School"
    ASSOCIATE = "Associate"
    BACHELOR = "Bachelor"
    MASTER = "Master"
    DOCTORATE = "Doctorate"

    @property
    def ordinal(self) -> int:
        return DEGREE_HIERARCHY[self.value]

    @classmethod
    def parse(cls, value: Any) -> Optional["EducationLevel"]:
        """Case-insensitive lookup; returns None for unrecognized values."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        wanted = " ".join(value.split()).lower()
        for level in cls:
            if level.value.lower() == wanted:
                return level
        return None

    @classmethod
    def ordinal_of(cls, value: Any) -> int:
        """Ordinal of a free-text degree, 0 when it is not a known level."""
        level = cls.parse(value)
        return level.ordinal if level else 0


class Record(BaseModel):
    """Base for records that arrive as camelCase documents."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def none_to_empty_list(cls, value: Any, info: ValidationInfo) -> Any:
        field = cls.model_fields.get(info.field_name)
        if value is None and field is not None and field.default_factory is list:
            return []
        return value


class EducationEntry(Record):
    level: Optional[str] = None
    degree: Optional[str] = None
    school_name: Optional[str] = None
    from_: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None
    units: Optional[str] = None
    year_graduated: Optional[str] = None
    honors: Optional[str] = None

    @field_validator("from_", "to", "year_graduated", mode="before")
    @classmethod
    def stringify(cls, value: Any) -> Any:
        # PDS years are often extracted as numbers; 2014.0 reads as "2014"
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class WorkExperienceEntry(Record):
    position: Optional[str] = None
    company: Optional[str] = None
    start_date: Optional[Union[datetime, date]] = Field(
        default=None,
        validation_alias=AliasChoices("startDate", "start_date", "from"),
        serialization_alias="startDate",
    )
    end_date: Optional[Union[datetime, date]] = Field(
        default=None,
        validation_alias=AliasChoices("endDate", "end_date", "to"),
        serialization_alias="endDate",
    )
    is_current_position: bool = False

    def effective_end(self, now: datetime) -> Optional[datetime]:
        """End of the span: ``now`` for a current position, else the recorded end."""
        if self.is_current_position:
            return now
        if self.end_date is None:
            return None
        return to_naive_utc(self.end_date)


class CivilServiceEntry(Record):
    exam_title: Optional[str] = None
    rating: Optional[str] = None
    exam_date: Optional[Union[datetime, date]] = None
    exam_place: Optional[str] = None
    license_number: Optional[str] = None
    validity: Optional[str] = None


class CandidateProfile(Record):
    """Parsed personal data sheet of one applicant."""

    education: List[EducationEntry] = Field(default_factory=list)
    work_experience: List[WorkExperienceEntry] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    eligibility: List[str] = Field(default_factory=list)
    civil_service: List[CivilServiceEntry] = Field(default_factory=list)

    @model_validator(mode="after")
    def eligibility_from_civil_service(self) -> "CandidateProfile":
        # The PDS records civil-service eligibilities as exam entries
        if "eligibility" not in self.model_fields_set and self.civil_service:
            self.eligibility = [e.exam_title for e in self.civil_service if e.exam_title]
        return self


class Applicant(Record):
    id: Optional[Union[str, int]] = None
    name: Optional[str] = None
    is_active: bool = True
    profile: Optional[CandidateProfile] = None


class JobRequirement(Record):
    """Matching-relevant fields of a job posting."""

    id: Optional[Union[str, int]] = None
    title: Optional[str] = None
    company_id: Optional[Union[str, int]] = None
    status: Optional[str] = None
    expiry_date: Optional[Union[datetime, date]] = None
    education_level: Optional[EducationLevel] = None
    experience_years_min: Optional[float] = Field(default=None, ge=0)
    experience_years_max: Optional[float] = Field(default=None, ge=0)
    skills: List[str] = Field(default_factory=list)
    eligibility: List[str] = Field(default_factory=list)

    @field_validator("education_level", mode="before")
    @classmethod
    def parse_education_level(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        level = EducationLevel.parse(value)
        if level is None:
            allowed = ", ".join(item.value for item in EducationLevel)
            raise ValueError(f"unknown education level {value!r}; expected one of: {allowed}")
        return level

    def is_open(self, now: datetime) -> bool:
        """True if the posting is active and not yet expired."""
        if self.status is not None and self.status.lower() != "active":
            return False
        if self.expiry_date is not None and to_naive_utc(self.expiry_date) <= to_naive_utc(now):
            return False
        return True


class MatchResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    total_score: float = Field(ge=0.0, le=1.0)
    education_score: float = Field(ge=0.0, le=1.0)
    experience_score: float = Field(ge=0.0, le=1.0)
    skills_score: float = Field(ge=0.0, le=1.0)
    eligibility_score: float = Field(ge=0.0, le=1.0)


class JobMatch(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    job: JobRequirement
    match_score: float
    match_details: MatchResult


class CandidateMatch(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    applicant: Applicant
    match_score: float
    match_details: MatchResult
