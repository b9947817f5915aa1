import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .loader import DEFAULT_CATALOG_PATH, load_catalog_from_file
from .models import ReadinessCatalog, ReadinessReport
from .scorer import RawAnswers, compute_metrics, overall_average
from .summarizer import summarize_answers

logger = logging.getLogger(__name__)


class ReadinessEngine:
    """
    Binds a question catalog to the scoring and summarizing functions.

    The engine holds no per-session state; one instance can serve any number
    of concurrent requests.
    """
    def __init__(
        self,
        catalog: Optional[ReadinessCatalog] = None,
        catalog_path: Union[str, Path] = DEFAULT_CATALOG_PATH,
    ):
        """
        Args:
            catalog: An already validated catalog. Takes precedence over ``catalog_path``.
            catalog_path: Path to the catalog YAML, used when ``catalog`` is not given.
        """
        self.catalog = catalog if catalog is not None else load_catalog_from_file(catalog_path)
        logger.info(
            f"Readiness engine ready with catalog version {self.catalog.version} "
            f"({len(self.catalog.categories)} categories)"
        )

    def get_questions(self) -> List[Dict[str, Any]]:
        """Catalog in the shape the survey front end consumes."""
        return [
            {
                "id": category.id,
                "name": category.name,
                "themes": [theme.model_dump() for theme in category.themes],
            }
            for category in self.catalog.categories
        ]

    def calculate(self, answers: RawAnswers) -> ReadinessReport:
        """
        Scores and summarizes one set of raw answers.

        Raises:
            UnknownCategoryError: An answer key is not a catalog category.
            InvalidSubmissionError: A category has more scores than questions.
            InvalidScoreError: A score is not an integer in 0..4.
        """
        totals = compute_metrics(answers, self.catalog)
        return ReadinessReport(
            totals=totals,
            avg=overall_average(totals),
            answers=summarize_answers(answers, self.catalog),
            catalog_version=self.catalog.version,
        )
