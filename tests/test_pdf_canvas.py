import io
import os

import pytest
from PIL import Image
from reportlab.lib.pagesizes import letter, landscape
from reportlab.pdfgen import canvas
from svglib.svglib import svg2rlg

from services import config
from services.colors import RGB, SECONDARY, Color, flatten, to_unit
from services.pdf_canvas import DrawColor, FillColor, PageCursor, Point, TextColor, font_name

PAGE = landscape(letter)


@pytest.fixture
def buffer():
    return io.BytesIO()


@pytest.fixture
def cursor(buffer):
    c = canvas.Canvas(buffer, pagesize=PAGE)
    return PageCursor(c, PAGE)


def _finish(cursor, buffer):
    cursor.canvas.showPage()
    cursor.canvas.save()
    return buffer.getvalue()


def _floats(args):
    return [float(a) for a in args]


def _operands(ops, operator):
    return [_floats(args) for args, op in ops if op == operator]


def test_move_abs_then_move(cursor):
    cursor.move_abs(60.0, 100.0)
    cursor.move(5.5, -20.0)
    assert cursor.position == (65.5, 80.0)
    assert cursor.surface_position == (65.5, PAGE[1] - 80.0)


def test_moves_accumulate(cursor):
    cursor.move(0, 100)
    cursor.move(0, 50)
    cursor.move(10, 0)
    assert cursor.position == (10, 150)


def test_text_keeps_position(cursor):
    cursor.set_font("arial", "", 12)
    cursor.move_abs(165, 400)
    before = cursor.position
    cursor.text("Date")
    assert cursor.position == before


def test_text_reaches_canvas(cursor, buffer, pdf_operations, pdf_fonts, shown_text):
    cursor.set_font("arial", "", 12)
    TextColor(Color(100, 100, 100)).apply(cursor)
    cursor.move_abs(165, 400)
    cursor.text("Date")

    data = _finish(cursor, buffer)
    ops = pdf_operations(data)
    assert "Date" in shown_text(ops)
    assert "/Helvetica" in pdf_fonts(data)
    assert any(rg == pytest.approx(list(to_unit(RGB(100, 100, 100))), abs=1e-3) for rg in _operands(ops, b"rg"))


def test_write_centered_and_cell_keep_position(cursor):
    cursor.set_font("arial", "", 22)
    cursor.move_abs(60, 300)
    cursor.write_centered("short line", 33)
    cursor.cell(240, 22, "1/2/2024")
    assert cursor.position == (60, 300)


def test_write_centered_wraps_long_text(cursor):
    cursor.set_font("arial", "", 22)
    lines = cursor.write_centered("word " * 60, 33)
    assert lines > 1


def test_polygon_options_apply_in_order(cursor):
    pts = [Point(0, 0), Point(0, 50), Point(50, 0)]
    cursor.polygon(pts, FillColor(Color(10, 20, 30)), FillColor(Color(103, 60, 79, 255)))
    assert cursor.fill_color == RGB(103, 60, 79)
    assert cursor.position == (0.0, 0.0)


def test_polygon_flattens_alpha(cursor):
    cursor.polygon([Point(0, 0), Point(10, 10), Point(20, 0)], FillColor(Color(0, 0, 0, 0)))
    assert cursor.fill_color == RGB(255, 255, 255)


def test_polygon_draws_filled_path(cursor, buffer, pdf_operations):
    w, h = PAGE
    cursor.polygon([Point(0, 0), Point(0, h / 9.0), Point(w - w / 6.0, 0)], FillColor(SECONDARY))

    ops = pdf_operations(_finish(cursor, buffer))
    operators = [op for _, op in ops]

    # top-left origin is flipped onto the PDF's bottom-left one
    assert _operands(ops, b"m") == [pytest.approx([0.0, h])]
    assert _operands(ops, b"l") == [
        pytest.approx([0.0, h - h / 9.0]),
        pytest.approx([w - w / 6.0, h]),
    ]
    assert b"f" in operators or b"f*" in operators

    secondary = list(to_unit(flatten(SECONDARY)))
    assert any(rg == pytest.approx(secondary, abs=1e-3) for rg in _operands(ops, b"rg"))


def test_rect_is_filled_from_top_left(cursor, buffer, pdf_operations):
    FillColor(Color(100, 100, 100)).apply(cursor)
    cursor.rect(60, 400, 240, 1)

    ops = pdf_operations(_finish(cursor, buffer))
    assert _operands(ops, b"re") == [pytest.approx([60.0, PAGE[1] - 401.0, 240.0, 1.0])]
    assert any(op in (b"f", b"f*") for _, op in ops)


def test_line_is_stroked(cursor, buffer, pdf_operations):
    DrawColor(Color(200, 200, 200)).apply(cursor)
    cursor.line(0, 0, 0, PAGE[1])

    ops = pdf_operations(_finish(cursor, buffer))
    assert [op for _, op in ops].count(b"S") == 1
    grey = list(to_unit(RGB(200, 200, 200)))
    assert any(rg == pytest.approx(grey, abs=1e-3) for rg in _operands(ops, b"RG"))


def test_colour_options_are_independent(cursor):
    TextColor(Color(50, 50, 50)).apply(cursor)
    FillColor(Color(100, 100, 100)).apply(cursor)
    DrawColor(Color(200, 200, 200)).apply(cursor)
    assert cursor.text_color == RGB(50, 50, 50)
    assert cursor.fill_color == RGB(100, 100, 100)
    assert cursor.draw_color == RGB(200, 200, 200)


def test_font_lookup():
    assert font_name("times", "B") == "Times-Bold"
    assert font_name("Arial", "") == "Helvetica"
    assert font_name("times", "IB") == "Times-BoldItalic"


def test_unknown_font_raises(cursor):
    with pytest.raises(ValueError):
        cursor.set_font("comic sans", "", 12)


def test_line_height_follows_font(cursor):
    cursor.set_font("times", "B", 50)
    assert cursor.line_height == 50


def test_image_keeps_aspect_ratio(cursor, tmp_path):
    logo = tmp_path / "logo.png"
    Image.new("RGB", (200, 100), (103, 60, 79)).save(logo)
    cursor.move_abs(0, 200)
    assert cursor.image(str(logo), 346, 100) == pytest.approx(50.0)
    assert cursor.position == (0, 200)


def test_drawing_leaves_source_untouched(cursor, buffer, pdf_operations):
    sig = svg2rlg(os.path.join(config.ASSETS_DIR, "sig.svg"))
    size, transform = (sig.width, sig.height), tuple(sig.transform)

    cursor.move_abs(490, 400)
    cursor.drawing(sig, 0.5)
    cursor.drawing(sig, 0.5)

    assert (sig.width, sig.height) == size
    assert tuple(sig.transform) == transform
    assert cursor.position == (490, 400)

    ops = pdf_operations(_finish(cursor, buffer))
    assert [op for _, op in ops].count(b"S") >= 2
