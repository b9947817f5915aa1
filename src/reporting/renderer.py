import logging
from types import ModuleType
from typing import Dict, Optional

from src.schemas.readiness import ReportData

from .backends import fpdf_backend, reportlab_backend
from .layout import ReportDocument, build_report_layout
from .theme import ThemeSettings

logger = logging.getLogger(__name__)

BACKENDS: Dict[str, ModuleType] = {
    reportlab_backend.name: reportlab_backend,
    fpdf_backend.name: fpdf_backend,
}

# The stored copy and the immediate download use different libraries on purpose;
# both draw the same ReportDocument.
DURABLE_BACKEND = reportlab_backend.name
INTERACTIVE_BACKEND = fpdf_backend.name


class ReportRenderer:
    """
    Renders ReportData to PDF bytes with one backend.

    The ThemeSettings object is shared, not copied: the renderer subscribes
    to it and picks up preference or system-theme changes for the next render.
    """

    def __init__(self, backend: str = DURABLE_BACKEND, theme: Optional[ThemeSettings] = None, logo_path: Optional[str] = None):
        if backend not in BACKENDS:
            raise ValueError(f"Unknown report backend '{backend}'. Expected one of {sorted(BACKENDS)}")
        self.backend_name = backend
        self._backend = BACKENDS[backend]
        self.logo_path = logo_path
        self.theme = theme or ThemeSettings(preference="light")
        self._resolved_theme = self.theme.resolved
        self._unsubscribe = self.theme.subscribe(self._on_theme_change)

    def _on_theme_change(self, resolved: str) -> None:
        logger.debug(f"{self.backend_name} renderer switching to {resolved} theme")
        self._resolved_theme = resolved

    @property
    def resolved_theme(self) -> str:
        return self._resolved_theme

    def layout(self, data: ReportData) -> ReportDocument:
        return build_report_layout(data, theme=self._resolved_theme, logo_path=self.logo_path)

    def render(self, data: ReportData) -> bytes:
        document = self.layout(data)
        pdf_bytes = self._backend.render_pdf(document)
        logger.info(
            f"Rendered readiness report with {self.backend_name}: {len(document.pages)} pages, "
            f"{len(pdf_bytes)} bytes, theme={self._resolved_theme}"
        )
        return pdf_bytes

    def close(self) -> None:
        """Stops listening to theme changes."""
        self._unsubscribe()


def durable_renderer(theme: Optional[ThemeSettings] = None, logo_path: Optional[str] = None) -> ReportRenderer:
    return ReportRenderer(DURABLE_BACKEND, theme=theme, logo_path=logo_path)


def interactive_renderer(theme: Optional[ThemeSettings] = None, logo_path: Optional[str] = None) -> ReportRenderer:
    return ReportRenderer(INTERACTIVE_BACKEND, theme=theme, logo_path=logo_path)
