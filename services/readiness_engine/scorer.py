"""
Readiness Scoring Engine

Turns raw slider answers (0..4 per theme) into per-category readiness metrics
and an overall average.

Raw scale: 0 means the left-hand statement is always true, 4 means the
right-hand statement is always true, 2 is neutral. Scoring flips the scale
(4 - score) and re-centres it on zero (- 2), so a theme contributes
``2 - score``: +2 for a strong left answer, -2 for a strong right answer.
"""
import logging
import math
from typing import Dict, List, Optional, Sequence

from .models import (
    Category,
    InvalidScoreError,
    InvalidSubmissionError,
    ReadinessCatalog,
    ReadinessMetric,
    ScoringInvariantError,
    UnknownCategoryError,
    classify_readiness,
)

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 2
MIN_SCORE = 0
MAX_SCORE = 4

RawAnswers = Dict[str, Sequence[Optional[int]]]


def round_half_up(value: float) -> int:
    """Rounds .5 towards positive infinity, the same as JavaScript's Math.round."""
    return int(math.floor(value + 0.5))


def validate_score(score: object) -> int:
    # bool is an int subclass; True/False are never valid slider positions
    if isinstance(score, bool) or not isinstance(score, int):
        raise InvalidScoreError(f"Invalid score {score!r}. Expected an integer between {MIN_SCORE} and {MAX_SCORE}.")
    if not MIN_SCORE <= score <= MAX_SCORE:
        raise InvalidScoreError(f"Invalid score {score}. Expected an integer between {MIN_SCORE} and {MAX_SCORE}.")
    return score


def normalize_score(score: int) -> int:
    """Maps a raw score onto the centred scale: 0 -> +2, 2 -> 0, 4 -> -2."""
    flipped = MAX_SCORE - validate_score(score)
    return flipped - NEUTRAL_SCORE


def resolve_category_scores(category: Category, scores: Optional[Sequence[Optional[int]]]) -> List[int]:
    """
    Returns one validated raw score per theme of ``category``.

    Missing lists, short lists and ``None`` entries all mean "unanswered" and
    default to the neutral score.
    """
    scores = list(scores or [])
    if len(scores) > len(category.themes):
        raise InvalidSubmissionError(
            f"Category '{category.name}' has {len(category.themes)} questions but {len(scores)} scores were submitted."
        )

    resolved = []
    for index in range(len(category.themes)):
        raw = scores[index] if index < len(scores) else None
        resolved.append(NEUTRAL_SCORE if raw is None else validate_score(raw))
    return resolved


def check_known_categories(answers: RawAnswers, catalog: ReadinessCatalog) -> None:
    known = {category.name for category in catalog.categories}
    unknown = sorted(name for name in answers if name not in known)
    if unknown:
        raise UnknownCategoryError(f"Answers reference unknown categories: {unknown}")


def score_category(category: Category, scores: Optional[Sequence[Optional[int]]]) -> ReadinessMetric:
    """Computes the readiness metric for a single category."""
    resolved = resolve_category_scores(category, scores)
    total = sum(normalize_score(score) for score in resolved)

    # Largest possible |sum|: 2 points either side per theme
    max_abs = max(1, len(resolved) * 2)
    readiness = round_half_up(((total + max_abs) / (2 * max_abs)) * 100)
    if not 0 <= readiness <= 100:
        raise ScoringInvariantError(
            f"Readiness {readiness} for category '{category.name}' is outside 0..100 (sum={total}, max_abs={max_abs})"
        )

    return ReadinessMetric(
        name=category.name,
        sum=total,
        readiness=readiness,
        status=classify_readiness(readiness),
    )


def compute_metrics(answers: RawAnswers, catalog: ReadinessCatalog) -> List[ReadinessMetric]:
    """One ReadinessMetric per catalog category, in catalog order."""
    check_known_categories(answers, catalog)
    metrics = [score_category(category, answers.get(category.name)) for category in catalog.categories]
    logger.debug(f"Computed readiness for {len(metrics)} categories")
    return metrics


def overall_average(metrics: Sequence[ReadinessMetric]) -> int:
    """Rounded mean readiness; an empty list averages to 0."""
    total = sum(metric.readiness for metric in metrics)
    return round_half_up(total / max(1, len(metrics)))
