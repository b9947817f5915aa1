import asyncio
import logging
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Dict, List, Optional, Tuple

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Response
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import app_settings, report_settings, storage_settings
from services.readiness_engine import (
    DEFAULT_CATALOG_PATH,
    InvalidScoreError,
    InvalidSubmissionError,
    ReadinessEngine,
    UnknownCategoryError,
)
from src.db.session import db_session
from src.reporting.renderer import ReportRenderer, durable_renderer, interactive_renderer
from src.reporting.theme import ThemeSettings
from src.schemas.readiness import (
    AnswerGroup,
    ReportData,
    ResultListItem,
    ResultListResponse,
    ResultSubmission,
    ScoreRequest,
    ScoreResponse,
    SlugResponse,
)
from src.services.results import ResultService, parse_pagination
from src.services.storage import ArtifactStore, create_artifact_store

router = APIRouter()
# Short links live outside the API prefix
redirect_router = APIRouter()
logger = logging.getLogger(__name__)

REPORT_FILENAME = "leadai-ai-readiness.pdf"
MISSING_TOTALS_DETAIL = "Invalid payload: totals/avg missing"
PERSIST_FAILED_DETAIL = "Failed to persist AI readiness results"
LIST_FAILED_DETAIL = "Failed to fetch AI readiness results"

ANSWER_ERRORS = (InvalidScoreError, UnknownCategoryError, InvalidSubmissionError)


@lru_cache
def get_readiness_engine() -> ReadinessEngine:
    return ReadinessEngine(catalog_path=app_settings.catalog_path or DEFAULT_CATALOG_PATH)


@lru_cache
def get_artifact_store() -> ArtifactStore:
    return create_artifact_store(storage_settings)


@lru_cache
def get_durable_renderer() -> ReportRenderer:
    theme = ThemeSettings(preference=report_settings.theme)
    return durable_renderer(theme=theme, logo_path=report_settings.logo_path)


def get_result_service(
    session: AsyncSession = Depends(db_session),
    store: ArtifactStore = Depends(get_artifact_store),
    renderer: ReportRenderer = Depends(get_durable_renderer),
) -> ResultService:
    return ResultService(session, store, renderer)


def build_report_data(submission: ResultSubmission, engine: ReadinessEngine) -> Tuple[ReportData, str]:
    """
    Turns a submission into renderable report data.

    Raw answers are scored server side and take precedence over any totals
    the client sent along.

    Raises:
        HTTPException(400): Neither totals + avg nor raw answers were sent.
        InvalidScoreError, UnknownCategoryError, InvalidSubmissionError: Raw answers are malformed.
    """
    if submission.raw_answers is not None:
        report = engine.calculate(submission.raw_answers)
        answers = [AnswerGroup.model_validate(group.model_dump()) for group in report.answers]
        totals, avg = report.totals, report.avg
    elif submission.totals is not None and submission.avg is not None:
        totals, avg, answers = submission.totals, submission.avg, submission.answers
    else:
        logger.error("Result submission rejected: no totals/avg and no raw answers")
        raise HTTPException(status_code=400, detail=MISSING_TOTALS_DETAIL)

    data = ReportData(
        totals=totals,
        avg=avg,
        user_info=submission.user_info,
        created_at=submission.created_at or datetime.now(timezone.utc),
        answers=answers,
    )
    return data, engine.catalog.version


@router.get("/readiness/catalog")
async def get_catalog(engine: ReadinessEngine = Depends(get_readiness_engine)) -> Dict[str, Any]:
    return {"version": engine.catalog.version, "categories": engine.get_questions()}


@router.post("/readiness/score", response_model=ScoreResponse)
async def score_answers(request: ScoreRequest, engine: ReadinessEngine = Depends(get_readiness_engine)):
    """Scores raw slider answers and returns per-category metrics plus answer summaries."""
    try:
        report = engine.calculate(request.answers)
    except ANSWER_ERRORS as e:
        logger.error(f"Invalid answers: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        logger.exception(f"Unexpected error while scoring answers: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")

    return ScoreResponse(
        totals=report.totals,
        avg=report.avg,
        answers=report.answers,
        catalog_version=report.catalog_version,
    )


@router.post("/readiness/report")
async def download_report(
    submission: ResultSubmission,
    theme: Optional[str] = Query(None, description="light, dark or system"),
    sec_ch_prefers_color_scheme: Optional[str] = Header(None),
    engine: ReadinessEngine = Depends(get_readiness_engine),
):
    """Renders the report for immediate download. Nothing is stored."""
    try:
        data, _ = build_report_data(submission, engine)
    except ANSWER_ERRORS as e:
        logger.error(f"Invalid answers in report request: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    settings = ThemeSettings.from_request(theme, sec_ch_prefers_color_scheme, default=report_settings.theme)
    renderer = interactive_renderer(theme=settings, logo_path=report_settings.logo_path)
    try:
        pdf_bytes = await asyncio.to_thread(renderer.render, data)
    except Exception as e:
        logger.exception(f"Report rendering failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate AI readiness report")
    finally:
        renderer.close()

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{REPORT_FILENAME}"'},
    )


@router.post("/readiness/results", response_model=SlugResponse)
async def submit_results(
    submission: ResultSubmission,
    engine: ReadinessEngine = Depends(get_readiness_engine),
    service: ResultService = Depends(get_result_service),
):
    """
    Persists a completed check: renders and stores the durable PDF, then
    records the result row. Returns the short-link slug.
    """
    try:
        data, catalog_version = build_report_data(submission, engine)
    except ANSWER_ERRORS as e:
        logger.error(f"Invalid answers in result submission: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    try:
        slug = await service.persist(data, catalog_version=catalog_version)
    except Exception as e:
        logger.exception(f"Persisting readiness result failed: {e}")
        raise HTTPException(status_code=500, detail=PERSIST_FAILED_DETAIL)

    return SlugResponse(slug=slug)


@router.get("/readiness/results", response_model=ResultListResponse)
async def list_results(
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    service: ResultService = Depends(get_result_service),
):
    """Admin listing, newest first."""
    page_number, size = parse_pagination(page, page_size)
    try:
        rows, total = await service.list_results(page_number, size)
    except Exception as e:
        logger.exception(f"Listing readiness results failed: {e}")
        raise HTTPException(status_code=500, detail=LIST_FAILED_DETAIL)

    results: List[ResultListItem] = [ResultListItem.model_validate(row) for row in rows]
    return ResultListResponse(results=results, total_count=total, page=page_number, page_size=size)


@redirect_router.get("/r/{slug}")
async def follow_short_link(slug: str, service: ResultService = Depends(get_result_service)):
    """Sends the visitor to the stored PDF, or back to the survey when there is none."""
    url = None
    try:
        url = await service.resolve_pdf_url(slug)
    except Exception as e:
        logger.exception(f"Short link lookup failed for '{slug}': {e}")

    if url is None:
        logger.info(f"No report for short link '{slug}'; redirecting to survey")
        return RedirectResponse(url=app_settings.survey_path, status_code=302)
    return RedirectResponse(url=url, status_code=302)
