import asyncio
import logging
import re
import secrets
import string
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple
from urllib.parse import urlparse

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import ReadinessResult
from src.reporting.renderer import ReportRenderer
from src.schemas.readiness import ReportData

from .storage import ArtifactStore, StorageError, report_key

logger = logging.getLogger(__name__)

SLUG_ALPHABET = string.ascii_lowercase + string.digits
SLUG_LENGTH = 6
MAX_SLUG_ATTEMPTS = 5

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class PersistenceError(Exception):
    """Raised when a result row cannot be written."""
    pass


class SlugAllocationError(PersistenceError):
    """Raised when every generated slug was already taken."""
    pass


def generate_slug(length: int = SLUG_LENGTH) -> str:
    return "".join(secrets.choice(SLUG_ALPHABET) for _ in range(length))


_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _parse_int(value: Optional[str]) -> Optional[int]:
    # Lenient like parseInt: "3", " 3", "3abc" -> 3; "abc" -> None
    if value is None:
        return None
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


def parse_pagination(page: Optional[str], page_size: Optional[str]) -> Tuple[int, int]:
    """
    Turns raw query values into a (page, page_size) pair.

    Unparsable or zero values fall back to the defaults; page is at least 1
    and page_size is clamped to 1..100.
    """
    parsed_page = _parse_int(page) or DEFAULT_PAGE
    parsed_size = _parse_int(page_size) or DEFAULT_PAGE_SIZE
    return max(parsed_page, 1), min(max(parsed_size, 1), MAX_PAGE_SIZE)


def _as_utc(value: Optional[datetime]) -> datetime:
    if value is None:
        return datetime.now(timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class ResultService:
    """
    Persists completed checks and serves them back.

    Persisting runs as: allocate slug -> render durable PDF -> store PDF ->
    insert row. There is no transaction spanning the artifact store and the
    database; an upload failure still records the row (with a NULL locator),
    while a render or insert failure fails the whole call.
    """

    def __init__(
        self,
        session: AsyncSession,
        store: ArtifactStore,
        renderer: ReportRenderer,
        slug_factory: Callable[[], str] = generate_slug,
        max_slug_attempts: int = MAX_SLUG_ATTEMPTS,
    ):
        self.session = session
        self.store = store
        self.renderer = renderer
        self.slug_factory = slug_factory
        self.max_slug_attempts = max_slug_attempts

    async def _slug_exists(self, slug: str) -> bool:
        existing = await self.session.scalar(select(ReadinessResult.id).where(ReadinessResult.slug == slug))
        return existing is not None

    async def allocate_slug(self) -> str:
        for attempt in range(1, self.max_slug_attempts + 1):
            slug = self.slug_factory()
            if not await self._slug_exists(slug):
                return slug
            logger.warning(f"Slug collision on '{slug}' (attempt {attempt}/{self.max_slug_attempts})")
        raise SlugAllocationError(f"Could not allocate an unused slug after {self.max_slug_attempts} attempts")

    async def persist(self, data: ReportData, catalog_version: Optional[str] = None) -> str:
        """
        Stores one completed check and returns its slug.

        Raises:
            SlugAllocationError: Every generated slug was already taken.
            PersistenceError: The result row could not be inserted.
        """
        report = data.model_copy(update={"created_at": _as_utc(data.created_at)})
        slug = await self.allocate_slug()

        # Blocking work runs off the event loop
        pdf_bytes = await asyncio.to_thread(self.renderer.render, report)

        locator: Optional[str] = None
        try:
            locator = await asyncio.to_thread(self.store.store, report_key(slug), pdf_bytes)
        except StorageError as e:
            logger.error(f"Report upload failed for slug '{slug}'; recording result without a PDF: {e}")

        user = report.user_info
        row = ReadinessResult(
            slug=slug,
            totals=[metric.model_dump() for metric in report.totals],
            avg=report.avg,
            user_name=(user.full_name or None) if user else None,
            user_email=(user.email or None) if user else None,
            company=(user.company or None) if user else None,
            pdf_locator=locator,
            catalog_version=catalog_version,
            created_at=report.created_at,
        )
        self.session.add(row)
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            if locator:
                logger.error(f"Result insert failed; artifact '{locator}' has no result row")
            raise PersistenceError(f"Failed to insert result '{slug}': {e}") from e

        logger.info(f"Persisted readiness result '{slug}' (avg={report.avg}, pdf={'yes' if locator else 'no'})")
        return slug

    async def list_results(self, page: int, page_size: int) -> Tuple[List[ReadinessResult], int]:
        """Newest first; returns (rows for the page, total row count)."""
        stmt = (
            select(ReadinessResult)
            .order_by(ReadinessResult.created_at.desc())
            .limit(page_size)
            .offset((page - 1) * page_size)
        )
        rows = list((await self.session.execute(stmt)).scalars().all())
        total = await self.session.scalar(select(func.count()).select_from(ReadinessResult))
        return rows, int(total or 0)

    async def resolve_pdf_url(self, slug: str) -> Optional[str]:
        """
        Absolute http(s) URL of the stored report, or None when the slug is
        unknown, has no PDF, or its locator cannot be resolved.
        """
        locator = await self.session.scalar(
            select(ReadinessResult.pdf_locator).where(ReadinessResult.slug == slug)
        )
        if not locator:
            return None

        try:
            url = await asyncio.to_thread(self.store.resolve, locator)
        except StorageError as e:
            logger.error(f"Could not resolve report for slug '{slug}': {e}")
            return None

        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            logger.warning(f"Resolved report URL for slug '{slug}' is not an absolute http(s) URL: {url}")
            return None
        return url
