# Builds the human-readable "your selection" text for each answered theme.
# Alignment and intensity are read from the raw 0..4 score, not the
# normalized value used for scoring.

import logging
from typing import List

from .models import CategorySummary, QuestionSummary, ReadinessCatalog, Theme
from .scorer import RawAnswers, check_known_categories, resolve_category_scores

logger = logging.getLogger(__name__)

NEUTRAL_SELECTION_TEXT = "You indicated a neutral position between the two statements."

INTENSITY_LABELS = {
    0: "Always true",
    1: "Sometimes true",
    2: "Neutral / Don't know",
    3: "Sometimes true",
    4: "Always true",
}

ALIGNMENT_LABELS = {
    "left": "Closer to the left-hand statement",
    "right": "Closer to the right-hand statement",
    "neutral": "Neutral between the two statements",
}


def alignment_for_score(score: int) -> str:
    if score <= 1:
        return "left"
    if score >= 3:
        return "right"
    return "neutral"


def intensity_for_score(score: int) -> str:
    return INTENSITY_LABELS[score]


def summarize_theme(theme: Theme, score: int) -> QuestionSummary:
    alignment = alignment_for_score(score)
    intensity = intensity_for_score(score)

    if alignment == "left":
        selection_text = theme.left
    elif alignment == "right":
        selection_text = theme.right
    else:
        selection_text = NEUTRAL_SELECTION_TEXT

    return QuestionSummary(
        title=theme.title,
        left=theme.left,
        right=theme.right,
        alignment=alignment,
        intensity=intensity,
        selection_label=f"{ALIGNMENT_LABELS[alignment]} — {intensity}",
        selection_text=selection_text,
    )


def summarize_answers(answers: RawAnswers, catalog: ReadinessCatalog) -> List[CategorySummary]:
    """One CategorySummary per catalog category, questions in catalog order."""
    check_known_categories(answers, catalog)
    summaries = []
    for category in catalog.categories:
        scores = resolve_category_scores(category, answers.get(category.name))
        summaries.append(
            CategorySummary(
                enabler_name=category.name,
                questions=[summarize_theme(theme, score) for theme, score in zip(category.themes, scores)],
            )
        )
    return summaries
