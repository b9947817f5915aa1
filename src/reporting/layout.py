"""
Report layout model.

The PDF is described once as an ordered list of draw commands per page
(text, rectangle, line, image) in A4 points with a top-left origin; text is
positioned by its baseline. The reportlab and fpdf2 backends only translate
these commands into their own drawing calls, so both produce the same
structure and content.
"""
import logging
import os
from datetime import datetime, timezone
from typing import Annotated, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, Field

from services.readiness_engine.scorer import classify_readiness
from src.schemas.readiness import ReportData

from .text import FONT_BOLD, FONT_REGULAR, to_latin1_safe, wrap_text
from .theme import RGB, STATUS_COLORS, palette_for

logger = logging.getLogger(__name__)

# A4 in points
PAGE_WIDTH = 595.28
PAGE_HEIGHT = 841.89

MARGIN_X = 40
HEADER_HEIGHT = 80
CONTENT_TOP = 120
# Lowest baseline allowed for body text; the footer lives below it
CONTENT_BOTTOM = PAGE_HEIGHT - 80
FOOTER_RULE_Y = PAGE_HEIGHT - 60
LOGO_SIZE = 48

TITLE = "LeadAI - AI Readiness Check"
SUBTITLE = "ISO 42001 and EU AI Act aligned readiness diagnostic"
FOOTER_LINE = "LeadAI | ISO 42001 and EU AI Act aligned readiness diagnostic"
FOOTER_COPYRIGHT = "LeadAI (c) 2025"
LEGEND = "0-24% Critical / 25-49% At Risk / 50-74% Established / 75-100% Leading"
RESPONSE_DETAILS_HEADING = "Response details"

TABLE_COLUMNS = {"name": 40, "total": 260, "readiness": 320, "status": 420}
TABLE_HEADINGS = (("name", "Enabler"), ("total", "Total"), ("readiness", "Readiness %"), ("status", "Status"))
NAME_COLUMN_WIDTH = TABLE_COLUMNS["total"] - TABLE_COLUMNS["name"] - 10
BODY_LINE_HEIGHT = 12


class TextCommand(BaseModel):
    kind: Literal["text"] = "text"
    x: float
    y: float
    text: str
    font: str = FONT_REGULAR
    size: float = 10
    color: RGB = (0.0, 0.0, 0.0)


class RectCommand(BaseModel):
    kind: Literal["rect"] = "rect"
    x: float
    y: float
    width: float
    height: float
    color: RGB


class LineCommand(BaseModel):
    kind: Literal["line"] = "line"
    x1: float
    y1: float
    x2: float
    y2: float
    width: float = 0.5
    color: RGB = (0.0, 0.0, 0.0)


class ImageCommand(BaseModel):
    kind: Literal["image"] = "image"
    x: float
    y: float
    width: float
    height: float
    path: str


DrawCommand = Annotated[Union[TextCommand, RectCommand, LineCommand, ImageCommand], Field(discriminator="kind")]


class ReportPage(BaseModel):
    commands: List[DrawCommand] = Field(default_factory=list)

    def texts(self) -> List[str]:
        return [cmd.text for cmd in self.commands if isinstance(cmd, TextCommand)]


class ReportDocument(BaseModel):
    title: str
    theme: str = "light"
    width: float = PAGE_WIDTH
    height: float = PAGE_HEIGHT
    pages: List[ReportPage] = Field(default_factory=list)

    def page_texts(self) -> List[List[str]]:
        return [page.texts() for page in self.pages]


def status_color(value: float) -> RGB:
    return STATUS_COLORS[classify_readiness(value)]


def format_timestamp(value: datetime) -> str:
    # Naive timestamps are treated as UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")


def usable_logo(logo_path: Optional[str]) -> Optional[str]:
    if not logo_path:
        return None
    if not os.path.isfile(logo_path):
        logger.warning(f"Report logo not found at '{logo_path}'; rendering without it")
        return None
    return logo_path


class _LayoutBuilder:
    def __init__(self, theme: str, logo_path: Optional[str]):
        self.palette = palette_for(theme)
        self.logo_path = logo_path
        self.pages: List[ReportPage] = []
        self.y = CONTENT_TOP
        self.new_page()

    # --- primitives -------------------------------------------------------

    @property
    def page(self) -> ReportPage:
        return self.pages[-1]

    def text(self, x: float, y: float, text: str, font: str = FONT_REGULAR, size: float = 10, color: Optional[RGB] = None):
        self.page.commands.append(
            TextCommand(x=x, y=y, text=to_latin1_safe(text), font=font, size=size, color=color or self.palette["text"])
        )

    def rule(self, y: float, color: Optional[RGB] = None):
        self.page.commands.append(
            LineCommand(x1=MARGIN_X, y1=y, x2=PAGE_WIDTH - MARGIN_X, y2=y, width=0.5, color=color or self.palette["rule"])
        )

    def new_page(self):
        self.pages.append(ReportPage())
        if self.palette["page"] is not None:
            self.page.commands.append(RectCommand(x=0, y=0, width=PAGE_WIDTH, height=PAGE_HEIGHT, color=self.palette["page"]))
        self._header()
        self.y = CONTENT_TOP

    def ensure_line(self):
        """Starts a new page when the next baseline would run into the footer."""
        if self.y > CONTENT_BOTTOM:
            self.new_page()

    def line(self, text: str, font: str = FONT_REGULAR, size: float = 9, advance: float = BODY_LINE_HEIGHT,
             x: float = MARGIN_X, color: Optional[RGB] = None):
        self.ensure_line()
        self.text(x, self.y, text, font=font, size=size, color=color)
        self.y += advance

    # --- fixed page furniture --------------------------------------------

    def _header(self):
        brand = self.palette["brand"]
        on_brand = self.palette["on_brand"]
        self.page.commands.append(RectCommand(x=0, y=0, width=PAGE_WIDTH, height=HEADER_HEIGHT, color=brand))
        if self.logo_path:
            self.page.commands.append(
                ImageCommand(
                    x=PAGE_WIDTH - MARGIN_X - LOGO_SIZE,
                    y=(HEADER_HEIGHT - LOGO_SIZE) / 2,
                    width=LOGO_SIZE,
                    height=LOGO_SIZE,
                    path=self.logo_path,
                )
            )
        self.text(MARGIN_X, 40, TITLE, font=FONT_BOLD, size=18, color=on_brand)
        self.text(MARGIN_X, 58, SUBTITLE, size=9, color=on_brand)

    def add_footers(self):
        total = len(self.pages)
        for number, page in enumerate(self.pages, start=1):
            muted = self.palette["muted"]
            page.commands.append(
                LineCommand(x1=MARGIN_X, y1=FOOTER_RULE_Y, x2=PAGE_WIDTH - MARGIN_X, y2=FOOTER_RULE_Y,
                            width=0.5, color=self.palette["rule"])
            )
            page.commands.append(TextCommand(x=MARGIN_X, y=PAGE_HEIGHT - 48, text=FOOTER_LINE, size=8, color=muted))
            page.commands.append(TextCommand(x=MARGIN_X, y=PAGE_HEIGHT - 36, text=FOOTER_COPYRIGHT, size=8, color=muted))
            page.commands.append(
                TextCommand(x=PAGE_WIDTH - MARGIN_X - 60, y=PAGE_HEIGHT - 36, text=f"Page {number} of {total}", size=8, color=muted)
            )

    # --- sections ---------------------------------------------------------

    def assessment_details(self, data: ReportData):
        self.line("Assessment details", font=FONT_BOLD, size=12, advance=14)

        details = []
        info = data.user_info
        if info is not None:
            if info.company:
                details.append(f"Company: {info.company}")
            if info.full_name:
                details.append(f"Name: {info.full_name}")
            if info.email:
                details.append(f"Email: {info.email}")
        if data.created_at is not None:
            details.append(f"Date & time: {format_timestamp(data.created_at)}")

        for detail in details:
            self.line(detail, size=10)

    def overall(self, avg: int):
        self.y += 8
        self.line("Overall AI Readiness", font=FONT_BOLD, size=12, advance=20)
        self.ensure_line()
        self.text(MARGIN_X, self.y, f"{avg}%", font=FONT_BOLD, size=24, color=status_color(avg))
        self.text(MARGIN_X + 80, self.y - 4, f"({classify_readiness(avg)})", size=12)
        self.y += 18
        self.line(LEGEND, size=9, advance=22, color=self.palette["muted"])

    def table_header(self):
        for key, label in TABLE_HEADINGS:
            self.text(TABLE_COLUMNS[key], self.y, label, font=FONT_BOLD, size=10)
        self.y += 8
        self.rule(self.y)
        self.y += 12

    def category_table(self, data: ReportData):
        cols = TABLE_COLUMNS
        self.ensure_line()
        self.table_header()

        for row in data.totals:
            for index, name_line in enumerate(wrap_text(row.name, FONT_REGULAR, 9, NAME_COLUMN_WIDTH)):
                # Rows carried over to a new page get the column headings again
                if self.y > CONTENT_BOTTOM:
                    self.new_page()
                    self.table_header()
                self.text(cols["name"], self.y, name_line, size=9)
                if index == 0:
                    self.text(cols["total"], self.y, str(row.sum), size=9)
                    self.text(cols["readiness"], self.y, f"{row.readiness}%", size=9)
                    self.text(cols["status"], self.y, row.status, font=FONT_BOLD, size=9,
                              color=status_color(row.readiness))
                self.y += BODY_LINE_HEIGHT
            self.y += 2

    def response_details(self, data: ReportData):
        self.new_page()
        self.line(RESPONSE_DETAILS_HEADING, font=FONT_BOLD, size=12, advance=16)

        max_width = PAGE_WIDTH - 2 * MARGIN_X
        for group in data.answers or []:
            self.line(group.enabler_name, font=FONT_BOLD, size=11, advance=14)
            for question in group.questions:
                block: List[Tuple[str, str]] = [
                    (f"Question: {question.title}", FONT_BOLD),
                    (f"Left: {question.left}", FONT_REGULAR),
                    (f"Right: {question.right}", FONT_REGULAR),
                    (f"Your selection: {question.selection_label}", FONT_REGULAR),
                    (f"Explanation: {question.selection_text}", FONT_REGULAR),
                ]
                for text, font in block:
                    for wrapped in wrap_text(text, font, 9, max_width):
                        self.line(wrapped, font=font, size=9)
                    self.y += 2
                self.y += 4
            self.y += 6


def build_report_layout(
    data: ReportData,
    theme: str = "light",
    logo_path: Optional[str] = None,
) -> ReportDocument:
    """
    Lays out the readiness report.

    Args:
        data: Scores, respondent details and optional answer summaries.
        theme: Resolved colour scheme, "light" or "dark".
        logo_path: Optional header logo; skipped when the file is missing.
    """
    builder = _LayoutBuilder(theme, usable_logo(logo_path))
    builder.assessment_details(data)
    builder.overall(data.avg)
    builder.category_table(data)
    if data.answers:
        builder.response_details(data)
    builder.add_footers()

    subject = ""
    if data.user_info is not None:
        subject = data.user_info.company or data.user_info.full_name
    title = f"AI Readiness Check - {subject}" if subject else "AI Readiness Check"

    return ReportDocument(title=to_latin1_safe(title), theme=theme, pages=builder.pages)
