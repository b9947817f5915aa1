"""Interactive (download) PDF backend built on fpdf2."""
import logging

from fpdf import FPDF

from ..layout import ImageCommand, LineCommand, RectCommand, ReportDocument, TextCommand
from ..text import FONT_BOLD, FONT_REGULAR

logger = logging.getLogger(__name__)

name = "fpdf"

_FONTS = {
    FONT_REGULAR: ("helvetica", ""),
    FONT_BOLD: ("helvetica", "B"),
}


def _rgb255(color):
    return tuple(int(round(channel * 255)) for channel in color)


def _draw(pdf: FPDF, command) -> None:
    # fpdf2 shares the layout's top-left origin, so coordinates pass straight through
    if isinstance(command, TextCommand):
        family, style = _FONTS[command.font]
        pdf.set_font(family, style, command.size)
        pdf.set_text_color(*_rgb255(command.color))
        pdf.text(command.x, command.y, command.text)
    elif isinstance(command, RectCommand):
        pdf.set_fill_color(*_rgb255(command.color))
        pdf.rect(command.x, command.y, command.width, command.height, style="F")
    elif isinstance(command, LineCommand):
        pdf.set_draw_color(*_rgb255(command.color))
        pdf.set_line_width(command.width)
        pdf.line(command.x1, command.y1, command.x2, command.y2)
    elif isinstance(command, ImageCommand):
        try:
            pdf.image(command.path, x=command.x, y=command.y, w=command.width, h=command.height, keep_aspect_ratio=True)
        except Exception as e:
            logger.warning(f"Could not draw report logo '{command.path}', skipping it: {e}")
    else:
        raise TypeError(f"Unsupported draw command: {type(command).__name__}")


def render_pdf(document: ReportDocument) -> bytes:
    pdf = FPDF(unit="pt", format=(document.width, document.height))
    pdf.set_auto_page_break(False)
    pdf.set_margins(0, 0, 0)
    pdf.set_title(document.title)
    pdf.set_author("LeadAI")
    for page in document.pages:
        pdf.add_page()
        for command in page.commands:
            _draw(pdf, command)
    data = bytes(pdf.output())
    logger.debug(f"fpdf2 rendered {len(document.pages)} pages ({len(data)} bytes)")
    return data
