from __future__ import annotations

import io
from typing import Callable

from pdfrw import PageMerge, PdfReader, PdfWriter
from reportlab.pdfgen import canvas

from contracts.errors import InvalidDocument

DrawFn = Callable[[canvas.Canvas], None]


def read_pdf(data: bytes) -> PdfReader:
    """Parse a document with pdfrw; anything unreadable or page-less is `InvalidDocument`."""
    if not isinstance(data, (bytes, bytearray)) or not data:
        raise InvalidDocument("Document bytes are empty")
    try:
        reader = PdfReader(io.BytesIO(bytes(data)))
        pages = reader.pages
    except Exception as e:
        raise InvalidDocument("Bytes do not parse as a PDF document", detail={"error": str(e)}) from e
    if not pages:
        raise InvalidDocument("Document has no pages")
    return reader


def page_size(page) -> tuple[float, float]:
    """(width, height) in points from the page's (possibly inherited) MediaBox."""
    box = page.inheritable.MediaBox
    if box is None:
        raise InvalidDocument("Page has no MediaBox")
    llx, lly, urx, ury = (float(v) for v in box)
    return urx - llx, ury - lly


def new_canvas(buf: io.BytesIO, width: float, height: float) -> canvas.Canvas:
    """
    Overlay canvas with deterministic output: `invariant` removes the creation
    date and random file id, and uncompressed pages let pdfrw wrap the content
    stream as a form XObject.
    """

    return canvas.Canvas(buf, pagesize=(width, height), invariant=1, pageCompression=0)


def render_overlay(width: float, height: float, draw: DrawFn) -> PdfReader:
    buf = io.BytesIO()
    c = new_canvas(buf, width, height)
    draw(c)
    c.save()
    return PdfReader(io.BytesIO(buf.getvalue()))


def write_pdf(writer: PdfWriter) -> bytes:
    buf = io.BytesIO()
    writer.write(buf)
    return buf.getvalue()


def overlay_first_page(document_bytes: bytes, draw: Callable[[canvas.Canvas, float, float], None]) -> bytes:
    """
    Draw on a page-sized overlay and merge it on top of the document's first
    page; the remaining pages are written through unchanged.
    """

    reader = read_pdf(document_bytes)
    first = reader.pages[0]
    width, height = page_size(first)

    overlay = render_overlay(width, height, lambda c: draw(c, width, height))
    PageMerge(first).add(overlay.pages[0]).render()

    return write_pdf(PdfWriter(trailer=reader))


def compose_over_background(background_bytes: bytes, overlay_pages: list) -> bytes:
    """
    One output page per overlay page, each drawn over the background
    document's first page.
    """

    template = read_pdf(background_bytes)
    background = PageMerge().add(template.pages[0])[0]

    writer = PdfWriter()
    for page in overlay_pages:
        writer.addpage(PageMerge().add(background).add(page).render())
    return write_pdf(writer)
