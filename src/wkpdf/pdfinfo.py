"""Checks on rendered PDF bytes using PyMuPDF."""

import logging

import pymupdf

from .exceptions import RenderError

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF-"


def is_pdf(data: bytes) -> bool:
    """Return True if data starts with the PDF magic header."""
    return data[: len(PDF_MAGIC)] == PDF_MAGIC


def count_pages(data: bytes) -> int:
    """Count the pages of an in-memory PDF.

    Args:
        data: PDF bytes

    Returns:
        Number of pages in the PDF

    Raises:
        RenderError: If the bytes are not a readable PDF
    """
    if not is_pdf(data):
        raise RenderError("Renderer output is not a PDF")

    try:
        doc = pymupdf.open(stream=data, filetype="pdf")
    except (RuntimeError, ValueError) as e:
        raise RenderError(f"Renderer output is not a readable PDF: {e}") from e

    try:
        page_count = len(doc)
    finally:
        doc.close()

    logger.debug(f"PDF has {page_count} pages")
    return page_count
