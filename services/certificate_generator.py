# services/certificate_generator.py
from __future__ import annotations

import logging
import os
import tempfile
from datetime import date
from typing import Dict, Optional, Tuple

from reportlab.lib.pagesizes import letter, landscape
from reportlab.pdfgen import canvas
from svglib.svglib import svg2rlg

from services import config
from services.colors import PRIMARY, SECONDARY, Color
from services.pdf_canvas import DrawColor, FillColor, PageCursor, Point, TextColor

logger = logging.getLogger(__name__)

TITLE = "Certificate of Completion"
SUBTITLE = "This certificate is awarded to"
STATEMENT = (
    "For successfully completing the Creating a PDF exercise in the course "
    "Gophercises programming course for budding Gophers (Go developers)"
)

DARK_TEXT = Color(50, 50, 50)
MUTED = Color(100, 100, 100)

LOGO_WIDTH = 100.0
SIGNATURE_SCALE = 0.5

# Signature rules: (left x, width)
DATE_RULE = (60.0, 240.0)
SIGNATURE_RULE = (490.0, 240.0)


class CertificateError(RuntimeError):
    pass


def clean_name(name: str) -> str:
    """Trim the name and collapse runs of whitespace to single spaces."""
    return " ".join((name or "").split())


def format_issue_date(d: date) -> str:
    """Numeric month/day/year without zero padding, e.g. 3/7/2024."""
    return f"{d.month}/{d.day}/{d.year}"


def load_signature(path: str):
    try:
        drawing = svg2rlg(path)
    except Exception as e:
        raise CertificateError(f"Could not parse signature SVG {path}: {e}") from e
    if drawing is None:
        raise CertificateError(f"Could not parse signature SVG {path}")
    return drawing


def _draw_banners(pdf: PageCursor) -> None:
    w, h = pdf.page_width, pdf.page_height

    # top
    pdf.polygon([Point(0, 0), Point(0, h / 9.0), Point(w - w / 6.0, 0)], FillColor(SECONDARY))
    pdf.polygon([Point(w / 6.0, 0), Point(w, 0), Point(w, h / 9.0)], FillColor(PRIMARY))

    # bottom
    pdf.polygon([Point(w, h), Point(w, h - h / 8.0), Point(w / 6.0, h)], FillColor(SECONDARY))
    pdf.polygon([Point(0, h), Point(0, h - h / 8.0), Point(w - w / 6.0, h)], FillColor(PRIMARY))


def draw_grid(pdf: PageCursor) -> None:
    """Labelled layout grid, handy when nudging coordinates."""
    w, h = pdf.page_width, pdf.page_height
    step = w / 20.0

    pdf.set_font("courier", "", 12)
    DrawColor(Color(200, 200, 200)).apply(pdf)

    x = 0.0
    while x < w:
        TextColor(Color(200, 200, 200)).apply(pdf)
        pdf.line(x, 0, x, h)
        pdf.move_abs(x, pdf.line_height)
        pdf.text(str(int(x)))
        x += step

    y = 0.0
    while y < h:
        TextColor(Color(80, 80, 80)).apply(pdf)
        pdf.line(0, y, w, y)
        pdf.move_abs(0, y)
        pdf.text(str(int(y)))
        y += step


def generate_certificate(
    student_name: str,
    output_path: Optional[str] = None,
    logo_path: Optional[str] = None,
    signature_path: Optional[str] = None,
    issued_on: Optional[date] = None,
    grid: Optional[bool] = None,
) -> Dict[str, str]:
    """
    Draws the one-page certificate of completion and writes it to output_path.
    Raises CertificateError if the signature cannot be parsed or the PDF cannot be saved.
    """
    output_path = output_path or config.OUTPUT_PATH
    logo_path = logo_path or config.LOGO_PATH
    signature_path = signature_path or config.SIGNATURE_PATH
    student_name = clean_name(student_name)
    grid = config.DEBUG_GRID if grid is None else grid
    issue_date = format_issue_date(issued_on or date.today())

    logger.info("Generating certificate for %r -> %s", student_name, output_path)
    logger.debug("logo=%s signature=%s", logo_path, signature_path)

    # Parse before touching the output so a bad signature leaves nothing behind
    sig = load_signature(signature_path)
    sig_height = sig.height

    page_size = landscape(letter)
    c = canvas.Canvas(output_path, pagesize=page_size)
    c.setTitle(TITLE)
    c.setSubject(student_name)

    pdf = PageCursor(c, page_size)
    w = pdf.page_width

    _draw_banners(pdf)

    # ===== TITLE =====
    pdf.set_font("times", "B", 50)
    TextColor(DARK_TEXT).apply(pdf)
    pdf.move_abs(0, 100)
    line_ht = pdf.line_height
    pdf.write_centered(TITLE, line_ht)
    pdf.move(0, line_ht * 2.0)

    # ===== AWARDED TO =====
    pdf.set_font("arial", "", 28)
    line_ht = pdf.line_height
    pdf.write_centered(SUBTITLE, line_ht)
    pdf.move(0, line_ht * 2.0)

    # ===== STUDENT NAME =====
    pdf.set_font("times", "B", 42)
    line_ht = pdf.line_height
    pdf.write_centered(student_name, line_ht)
    pdf.move(0, line_ht * 1.75)

    # ===== COMPLETION STATEMENT =====
    pdf.set_font("arial", "", 22)
    line_ht = pdf.line_height
    pdf.write_centered(STATEMENT, line_ht * 1.5)
    pdf.move(0, line_ht * 4.5)

    # ===== LOGO =====
    pdf.image(logo_path, w / 2.0 - LOGO_WIDTH / 2.0, LOGO_WIDTH)

    # ===== RULES =====
    pdf.move(0, 65.0)
    FillColor(MUTED).apply(pdf)
    pdf.rect(DATE_RULE[0], pdf.y, DATE_RULE[1], 1.0)
    pdf.rect(SIGNATURE_RULE[0], pdf.y, SIGNATURE_RULE[1], 1.0)

    # ===== CAPTIONS =====
    # line_ht still belongs to the 22pt statement font
    pdf.set_font("arial", "", 12)
    pdf.move(0, line_ht / 1.5)
    TextColor(MUTED).apply(pdf)
    pdf.move_abs(DATE_RULE[0] + 105.0, pdf.y)
    pdf.text("Date")
    pdf.move_abs(SIGNATURE_RULE[0] + 60.0, pdf.y)
    pdf.text("Student Signature")

    # ===== DATE =====
    pdf.move_abs(DATE_RULE[0], pdf.y - line_ht / 1.5)
    pdf.set_font("times", "", 22)
    line_ht = pdf.line_height
    pdf.move(0, -line_ht)
    TextColor(DARK_TEXT).apply(pdf)
    pdf.cell(DATE_RULE[1], line_ht, issue_date)

    # ===== SIGNATURE =====
    pdf.move_abs(SIGNATURE_RULE[0], pdf.y)
    pdf.move(0, -(0.45 * sig_height - line_ht))
    pdf.drawing(sig, SIGNATURE_SCALE)

    if grid:
        draw_grid(pdf)

    c.showPage()
    try:
        c.save()
    except OSError as e:
        raise CertificateError(f"Could not write {output_path}: {e}") from e

    logger.info("Certificate written to %s", output_path)
    return {
        "file_path": output_path,
        "student_name": student_name,
        "issue_date": issue_date,
    }


def render_certificate(student_name: str, **kwargs) -> Tuple[bytes, Dict[str, str]]:
    """
    Builds the certificate in a private temporary directory and returns its bytes.
    Concurrent callers (e.g. Streamlit sessions) never share an output file.
    """
    with tempfile.TemporaryDirectory(prefix="cert-") as tmp:
        path = os.path.join(tmp, os.path.basename(config.OUTPUT_PATH) or "cert.pdf")
        cert = generate_certificate(student_name, output_path=path, **kwargs)
        with open(path, "rb") as f:
            data = f.read()

    # the temporary file is gone, only its name is still meaningful
    cert["file_name"] = os.path.basename(cert.pop("file_path"))
    return data, cert
