"""
PDF text acquisition with pdfplumber.

Produces the line-preserving text block the contaminant table parser works
on. Only the embedded text layer is read; scanned pages without one yield
empty text.
"""

import io
from pathlib import Path
from typing import Tuple, Union

import pdfplumber

PdfSource = Union[str, Path, bytes, bytearray]


def extract_pdf_text(source: PdfSource) -> Tuple[str, int]:
    """
    Extract the text of every page of a PDF.

    Args:
        source: Path to a PDF file, or the raw PDF bytes

    Returns:
        Tuple of (text, page_count); each page contributes its text followed by
        a newline

    Raises:
        FileNotFoundError: If a path is given and does not exist
        pdfminer / pdfplumber errors: If the document cannot be parsed
    """
    if isinstance(source, (bytes, bytearray)):
        opened = pdfplumber.open(io.BytesIO(bytes(source)))
    else:
        opened = pdfplumber.open(Path(source))

    text_parts = []
    with opened as pdf:
        for page in pdf.pages:
            page_text = page.extract_text() or ""
            text_parts.append(f"{page_text}\n")
        page_count = len(pdf.pages)

    return "".join(text_parts), page_count
