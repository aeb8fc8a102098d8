import io

import pytest
from pypdf import PdfReader


def _reader(source):
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)
    return PdfReader(source)


def _text_operand(value) -> str:
    if isinstance(value, bytes):
        return value.decode("latin-1")
    return str(value)


@pytest.fixture
def pdf_operations():
    """(operands, operator) pairs from the first page's content stream."""

    def _ops(source):
        return _reader(source).pages[0].get_contents().operations

    return _ops


@pytest.fixture
def pdf_fonts():
    """BaseFont names referenced by the first page, e.g. {"/Courier"}."""

    def _fonts(source):
        fonts = _reader(source).pages[0]["/Resources"]["/Font"]
        return {str(f.get_object()["/BaseFont"]) for f in fonts.values()}

    return _fonts


@pytest.fixture
def shown_text():
    """Every string passed to Tj on the first page."""

    def _text(ops):
        return [_text_operand(args[0]) for args, op in ops if op == b"Tj"]

    return _text
