import logging
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from .models import ReadinessCatalog, SessionFrozenError, UnknownCategoryError
from .scorer import NEUTRAL_SCORE, validate_score

logger = logging.getLogger(__name__)


class SurveySession:
    """
    Raw answers for one respondent working through the survey.

    Every theme starts at the neutral score. Scores change one cell at a time
    until the session is frozen for review/results; ``restart`` throws
    everything away and starts over.
    """

    def __init__(self, catalog: ReadinessCatalog, user_info: Optional[Dict[str, str]] = None):
        self.catalog = catalog
        self.user_info = dict(user_info or {})
        self.completed_at: Optional[datetime] = None
        self._frozen = False
        self._scores: Dict[str, List[int]] = self._initial_scores()

    def _initial_scores(self) -> Dict[str, List[int]]:
        return {category.name: [NEUTRAL_SCORE] * len(category.themes) for category in self.catalog.categories}

    @property
    def frozen(self) -> bool:
        return self._frozen

    def set_score(self, category_name: str, index: int, score: int) -> None:
        if self._frozen:
            raise SessionFrozenError("Survey session is frozen; restart it to change answers.")
        if category_name not in self._scores:
            raise UnknownCategoryError(f"Unknown category: '{category_name}'")
        row = self._scores[category_name]
        if not 0 <= index < len(row):
            raise IndexError(f"Category '{category_name}' has no question at index {index}")
        row[index] = validate_score(score)

    def get_score(self, category_name: str, index: int) -> int:
        return self._scores[category_name][index]

    def snapshot(self) -> Mapping[str, Tuple[int, ...]]:
        """Read-only copy of the current answers."""
        return MappingProxyType({name: tuple(scores) for name, scores in self._scores.items()})

    def freeze(self, completed_at: Optional[datetime] = None) -> Mapping[str, Tuple[int, ...]]:
        """Stops further edits, stamps the completion time and returns the final answers."""
        if not self._frozen:
            self._frozen = True
            self.completed_at = completed_at or datetime.now(timezone.utc)
            logger.info(f"Survey session frozen at {self.completed_at.isoformat()}")
        return self.snapshot()

    def restart(self) -> None:
        self._scores = self._initial_scores()
        self.user_info = {}
        self.completed_at = None
        self._frozen = False
