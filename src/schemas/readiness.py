from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StrictInt, model_validator
from pydantic.alias_generators import to_camel

from services.readiness_engine.models import CategorySummary, ReadinessMetric
from services.readiness_engine.scorer import overall_average

# Slider positions must arrive as JSON integers; true, "3" and 4.0 are rejected
RawScores = Dict[str, List[Optional[StrictInt]]]


class CamelModel(BaseModel):
    """Accepts both camelCase (front end) and snake_case keys; serializes camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def check_average(totals: List[ReadinessMetric], avg: int) -> None:
    expected = overall_average(totals)
    if avg != expected:
        raise ValueError(f"avg {avg} does not match the mean readiness of totals ({expected})")


class UserInfo(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    company: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


class AnswerDetail(CamelModel):
    title: str
    left: str
    right: str
    selection_label: str
    selection_text: str


class AnswerGroup(CamelModel):
    enabler_name: str
    questions: List[AnswerDetail]


class ReportData(CamelModel):
    """Everything the report renderer needs; optional parts are simply left out of the PDF."""
    totals: List[ReadinessMetric]
    avg: int = Field(..., ge=0, le=100)
    user_info: Optional[UserInfo] = None
    created_at: Optional[datetime] = None
    answers: Optional[List[AnswerGroup]] = None

    @model_validator(mode="after")
    def check_avg_matches_totals(self):
        check_average(self.totals, self.avg)
        return self


class ResultSubmission(CamelModel):
    """
    Payload posted by the survey when the respondent reaches the results page.

    Either pre-computed ``totals`` + ``avg`` (as the browser shows them) or
    ``raw_answers`` for server-side scoring must be present.
    """
    totals: Optional[List[ReadinessMetric]] = None
    avg: Optional[int] = Field(default=None, ge=0, le=100)
    user_info: Optional[UserInfo] = None
    answers: Optional[List[AnswerGroup]] = None
    created_at: Optional[datetime] = None  # ISO-8601; server time when omitted
    raw_answers: Optional[RawScores] = None

    @model_validator(mode="after")
    def check_avg_matches_totals(self):
        if self.totals is not None and self.avg is not None:
            check_average(self.totals, self.avg)
        return self


class ScoreRequest(BaseModel):
    answers: RawScores  # category name -> one 0..4 score per theme


class ScoreResponse(CamelModel):
    totals: List[ReadinessMetric]
    avg: int
    answers: List[CategorySummary]
    catalog_version: str


class SlugResponse(BaseModel):
    slug: str


class ResultListItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    slug: str
    avg: int
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    company: Optional[str] = None
    created_at: datetime


class ResultListResponse(CamelModel):
    results: List[ResultListItem]
    total_count: int
    page: int
    page_size: int
