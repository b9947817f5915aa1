from .engine import ReadinessEngine
from .loader import DEFAULT_CATALOG_PATH, CatalogValidationError, load_catalog_data, load_catalog_from_file
from .models import (
    CategorySummary,
    InvalidScoreError,
    InvalidSubmissionError,
    QuestionSummary,
    ReadinessCatalog,
    ReadinessMetric,
    ReadinessReport,
    ScoringInvariantError,
    SessionFrozenError,
    UnknownCategoryError,
)
from .scorer import classify_readiness, compute_metrics, normalize_score, overall_average
from .session import SurveySession
from .summarizer import summarize_answers

__all__ = [
    "ReadinessEngine",
    "DEFAULT_CATALOG_PATH",
    "CatalogValidationError",
    "load_catalog_data",
    "load_catalog_from_file",
    "CategorySummary",
    "InvalidScoreError",
    "InvalidSubmissionError",
    "QuestionSummary",
    "ReadinessCatalog",
    "ReadinessMetric",
    "ReadinessReport",
    "ScoringInvariantError",
    "SessionFrozenError",
    "UnknownCategoryError",
    "classify_readiness",
    "compute_metrics",
    "normalize_score",
    "overall_average",
    "SurveySession",
    "summarize_answers",
]
