from .layout import ReportDocument, ReportPage, build_report_layout
from .renderer import (
    DURABLE_BACKEND,
    INTERACTIVE_BACKEND,
    ReportRenderer,
    durable_renderer,
    interactive_renderer,
)
from .text import to_latin1_safe, wrap_text
from .theme import ThemeSettings

__all__ = [
    "ReportDocument",
    "ReportPage",
    "build_report_layout",
    "DURABLE_BACKEND",
    "INTERACTIVE_BACKEND",
    "ReportRenderer",
    "durable_renderer",
    "interactive_renderer",
    "to_latin1_safe",
    "wrap_text",
    "ThemeSettings",
]
