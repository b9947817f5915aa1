"""Durable (server-side) PDF backend built on reportlab's canvas."""
import logging
from io import BytesIO

from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from ..layout import ImageCommand, LineCommand, RectCommand, ReportDocument, TextCommand

logger = logging.getLogger(__name__)

name = "reportlab"


def _draw(pdf: canvas.Canvas, command, page_height: float) -> None:
    # reportlab's origin is bottom-left; the layout's is top-left
    if isinstance(command, TextCommand):
        pdf.setFont(command.font, command.size)
        pdf.setFillColorRGB(*command.color)
        pdf.drawString(command.x, page_height - command.y, command.text)
    elif isinstance(command, RectCommand):
        pdf.setFillColorRGB(*command.color)
        pdf.rect(command.x, page_height - command.y - command.height, command.width, command.height, stroke=0, fill=1)
    elif isinstance(command, LineCommand):
        pdf.setStrokeColorRGB(*command.color)
        pdf.setLineWidth(command.width)
        pdf.line(command.x1, page_height - command.y1, command.x2, page_height - command.y2)
    elif isinstance(command, ImageCommand):
        try:
            pdf.drawImage(
                ImageReader(command.path),
                command.x,
                page_height - command.y - command.height,
                width=command.width,
                height=command.height,
                preserveAspectRatio=True,
                mask="auto",
            )
        except Exception as e:
            logger.warning(f"Could not draw report logo '{command.path}', skipping it: {e}")
    else:
        raise TypeError(f"Unsupported draw command: {type(command).__name__}")


def render_pdf(document: ReportDocument) -> bytes:
    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=(document.width, document.height))
    pdf.setTitle(document.title)
    pdf.setAuthor("LeadAI")
    for page in document.pages:
        for command in page.commands:
            _draw(pdf, command, document.height)
        pdf.showPage()
    pdf.save()
    data = buffer.getvalue()
    logger.debug(f"reportlab rendered {len(document.pages)} pages ({len(data)} bytes)")
    return data
