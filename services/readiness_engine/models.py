from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel
from typing import List, Literal, Optional

Alignment = Literal["left", "right", "neutral"]
Status = Literal["Critical", "At Risk", "Established", "Leading"]

# (exclusive upper bound, label); anything at or above the last bound is "Leading"
STATUS_THRESHOLDS = (
    (25, "Critical"),
    (50, "At Risk"),
    (75, "Established"),
)
TOP_STATUS = "Leading"


def classify_readiness(readiness: float) -> str:
    """Four-bucket status label for a 0..100 readiness value."""
    for upper_bound, label in STATUS_THRESHOLDS:
        if readiness < upper_bound:
            return label
    return TOP_STATUS


class Theme(BaseModel):
    """One bipolar statement pair. ``left`` is the statement a score of 0 fully endorses."""
    model_config = ConfigDict(frozen=True)

    title: str
    left: str
    right: str


class Category(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    themes: List[Theme] = Field(..., min_length=1)


class ReadinessCatalog(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: str
    released_at: str  # Kept as a string, same as the YAML
    categories: List[Category]

    def get_category(self, name: str) -> Optional[Category]:
        for category in self.categories:
            if category.name == name:
                return category
        return None


class ReadinessMetric(BaseModel):
    name: str
    sum: int
    readiness: int = Field(..., ge=0, le=100)
    status: Status

    @model_validator(mode="after")
    def check_status_matches_readiness(self):
        expected = classify_readiness(self.readiness)
        if self.status != expected:
            raise ValueError(
                f"Status '{self.status}' does not match readiness {self.readiness} (expected '{expected}')"
            )
        return self


class QuestionSummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str
    left: str
    right: str
    alignment: Alignment
    intensity: str
    selection_label: str
    selection_text: str


class CategorySummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    enabler_name: str
    questions: List[QuestionSummary]


class ReadinessReport(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    totals: List[ReadinessMetric]
    avg: int
    answers: List[CategorySummary]
    catalog_version: str


# Custom Error Classes
class InvalidScoreError(ValueError):
    """Raised when a raw score is not an integer in 0..4."""
    pass

class UnknownCategoryError(ValueError):
    """Raised when an answer references a category that is not in the catalog."""
    pass

class InvalidSubmissionError(ValueError):
    """Raised for structurally invalid answer data (e.g. more scores than questions)."""
    pass

class ScoringInvariantError(ArithmeticError):
    """Raised when a computed readiness value falls outside 0..100."""
    pass

class SessionFrozenError(RuntimeError):
    """Raised when a frozen survey session is mutated."""
    pass
