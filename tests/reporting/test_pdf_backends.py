import pytest

from src.reporting.backends import fpdf_backend, reportlab_backend
from src.reporting.layout import build_report_layout
from src.reporting.renderer import (
    DURABLE_BACKEND,
    INTERACTIVE_BACKEND,
    ReportRenderer,
    durable_renderer,
    interactive_renderer,
)
from src.reporting.theme import ThemeSettings

BACKENDS = [reportlab_backend, fpdf_backend]


@pytest.mark.parametrize("backend", BACKENDS, ids=lambda b: b.name)
def test_backend_emits_pdf(backend, report_data):
    data = backend.render_pdf(build_report_layout(report_data))
    assert data.startswith(b"%PDF")
    assert b"%%EOF" in data[-32:]


@pytest.mark.parametrize("backend", BACKENDS, ids=lambda b: b.name)
def test_backend_renders_dark_theme(backend, minimal_report_data):
    data = backend.render_pdf(build_report_layout(minimal_report_data, theme="dark"))
    assert data.startswith(b"%PDF")


@pytest.mark.parametrize("backend", BACKENDS, ids=lambda b: b.name)
def test_undecodable_logo_is_skipped(backend, minimal_report_data, tmp_path, caplog):
    logo = tmp_path / "logo.png"
    logo.write_bytes(b"definitely not an image")
    data = backend.render_pdf(build_report_layout(minimal_report_data, logo_path=str(logo)))
    assert data.startswith(b"%PDF")
    assert "Could not draw report logo" in caplog.text


def test_renderer_defaults():
    assert durable_renderer().backend_name == DURABLE_BACKEND == "reportlab"
    assert interactive_renderer().backend_name == INTERACTIVE_BACKEND == "fpdf"


def test_unknown_backend_rejected():
    with pytest.raises(ValueError, match="Unknown report backend"):
        ReportRenderer("wkhtmltopdf")


def test_renderer_tracks_shared_theme_settings(minimal_report_data):
    theme = ThemeSettings(preference="system", system="light")
    renderer = interactive_renderer(theme=theme)
    assert renderer.layout(minimal_report_data).theme == "light"

    theme.update_system_theme("dark")

    assert renderer.resolved_theme == "dark"
    assert renderer.layout(minimal_report_data).theme == "dark"


def test_closed_renderer_ignores_theme_changes():
    theme = ThemeSettings(preference="light")
    renderer = durable_renderer(theme=theme)
    renderer.close()
    theme.set_preference("dark")
    assert renderer.resolved_theme == "light"


@pytest.mark.parametrize("factory", [durable_renderer, interactive_renderer])
def test_render_returns_pdf_bytes(factory, report_data):
    assert factory().render(report_data).startswith(b"%PDF")
