# services/pdf_canvas.py
from __future__ import annotations

from typing import NamedTuple, Sequence, Tuple

from reportlab.graphics import renderPDF
from reportlab.graphics.shapes import Drawing, Group
from reportlab.lib.units import cm
from reportlab.lib.utils import ImageReader, simpleSplit

from services.colors import RGB, Color, flatten, to_unit

# (family, style) -> reportlab base-14 font
FONTS = {
    ("times", ""): "Times-Roman",
    ("times", "B"): "Times-Bold",
    ("times", "I"): "Times-Italic",
    ("times", "BI"): "Times-BoldItalic",
    ("arial", ""): "Helvetica",
    ("arial", "B"): "Helvetica-Bold",
    ("arial", "I"): "Helvetica-Oblique",
    ("arial", "BI"): "Helvetica-BoldOblique",
    ("courier", ""): "Courier",
    ("courier", "B"): "Courier-Bold",
}

# Left/right page margin for wrapped text
MARGIN = 1 * cm

BLACK = RGB(0, 0, 0)


class Point(NamedTuple):
    x: float
    y: float


# -----------------------------------------
# Drawing options (applied in order before a draw)
# -----------------------------------------
class FillColor(NamedTuple):
    color: Color

    def apply(self, cursor: "PageCursor") -> None:
        cursor.fill_color = flatten(self.color)


class DrawColor(NamedTuple):
    color: Color

    def apply(self, cursor: "PageCursor") -> None:
        cursor.draw_color = flatten(self.color)


class TextColor(NamedTuple):
    color: Color

    def apply(self, cursor: "PageCursor") -> None:
        cursor.text_color = flatten(self.color)


def font_name(family: str, style: str = "") -> str:
    key = (family.lower(), "".join(sorted(style.upper())))
    if key not in FONTS:
        raise ValueError(f"Unsupported font: {family!r} style {style!r}")
    return FONTS[key]


class PageCursor:
    """
    Drawing position over a reportlab canvas, measured from the top-left corner
    with y growing down the page.

    The cursor owns x/y and the drawing context (font, fill/stroke/text colours).
    The canvas only ever receives converted coordinates and colours at draw time.
    """

    def __init__(self, canvas, page_size: Tuple[float, float]):
        self.canvas = canvas
        self.page_width, self.page_height = page_size
        self.x = 0.0
        self.y = 0.0

        self.fill_color = BLACK
        self.draw_color = BLACK
        self.text_color = BLACK
        self.font_name = "Helvetica"
        self.font_size = 12.0

    # -----------------------------
    # Position
    # -----------------------------
    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y

    def to_surface(self, x: float, y: float) -> Tuple[float, float]:
        return x, self.page_height - y

    @property
    def surface_position(self) -> Tuple[float, float]:
        return self.to_surface(self.x, self.y)

    def move(self, dx: float, dy: float) -> None:
        self.x += dx
        self.y += dy

    def move_abs(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    # -----------------------------
    # Context
    # -----------------------------
    def set_font(self, family: str, style: str, size: float) -> None:
        self.font_name = font_name(family, style)
        self.font_size = float(size)

    @property
    def line_height(self) -> float:
        # page units are points, so one line is one font size
        return self.font_size

    def _push_font(self) -> None:
        self.canvas.setFont(self.font_name, self.font_size)

    def _push_text_color(self) -> None:
        self.canvas.setFillColorRGB(*to_unit(self.text_color))

    def _push_fill_color(self) -> None:
        self.canvas.setFillColorRGB(*to_unit(self.fill_color))

    def _baseline(self, top: float, height: float) -> float:
        return top + 0.5 * height + 0.3 * self.font_size

    # -----------------------------
    # Drawing
    # -----------------------------
    def text(self, text: str) -> None:
        """Text with its baseline at the cursor."""
        self._push_font()
        self._push_text_color()
        self.canvas.drawString(*self.surface_position, text)

    def polygon(self, points: Sequence[Point], *options) -> None:
        for opt in options:
            opt.apply(self)

        first, *rest = points
        path = self.canvas.beginPath()
        path.moveTo(*self.to_surface(*first))
        for pt in rest:
            path.lineTo(*self.to_surface(*pt))
        path.close()

        self._push_fill_color()
        self.canvas.drawPath(path, stroke=0, fill=1)

    def rect(self, x: float, y: float, width: float, height: float) -> None:
        """Filled rectangle, (x, y) is its top-left corner."""
        self._push_fill_color()
        self.canvas.rect(x, self.page_height - y - height, width, height, stroke=0, fill=1)

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self.canvas.setStrokeColorRGB(*to_unit(self.draw_color))
        self.canvas.line(*self.to_surface(x1, y1), *self.to_surface(x2, y2))

    def write_centered(self, text: str, line_height: float) -> int:
        """
        Wrap text to the page width (minus margins) and centre each line,
        starting at the cursor's y. Returns the number of lines written.
        The cursor is not moved.
        """
        max_width = self.page_width - 2 * MARGIN
        lines = simpleSplit(text, self.font_name, self.font_size, max_width) or [""]

        self._push_font()
        self._push_text_color()
        center = self.page_width / 2.0
        top = self.y
        for line in lines:
            _, base = self.to_surface(0, self._baseline(top, line_height))
            self.canvas.drawCentredString(center, base, line)
            top += line_height
        return len(lines)

    def cell(self, width: float, height: float, text: str) -> None:
        """Text centred inside a width x height box whose top-left is the cursor."""
        self._push_font()
        self._push_text_color()
        _, base = self.to_surface(0, self._baseline(self.y, height))
        self.canvas.drawCentredString(self.x + width / 2.0, base, text)

    def image(self, path: str, x: float, width: float) -> float:
        """
        Raster image with its top edge at the cursor's y, scaled to width.
        Returns the drawn height.
        """
        reader = ImageReader(path)
        img_w, img_h = reader.getSize()
        height = width * img_h / float(img_w)
        self.canvas.drawImage(
            reader,
            x,
            self.page_height - self.y - height,
            width=width,
            height=height,
            mask="auto",
        )
        return height

    def drawing(self, drawing, scale: float = 1.0) -> None:
        """
        reportlab Drawing (e.g. from svglib) with its top-left at the cursor.
        The caller's drawing is wrapped, never rescaled, so it can be drawn again.
        """
        framed = Drawing(drawing.width * scale, drawing.height * scale)
        group = Group(drawing)
        group.scale(scale, scale)
        framed.add(group)
        renderPDF.draw(framed, self.canvas, self.x, self.page_height - self.y - framed.height)
