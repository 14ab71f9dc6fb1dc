"""
manuscript.py

Loads manuscript text from disk.

Plain-text manuscripts (.fountain, .txt, .spmd, anything not a PDF) are read as
UTF-8. Screenplay PDFs are read page by page with pdfplumber; pagination noise
such as "(CONTINUED)" and page numbers is dropped so the result parses like a
hand-written manuscript.

The PDF opener is injectable (pdf_open=...) so tests can run without a PDF.
"""
from __future__ import annotations

import os
from typing import Any, Callable, List

import pdfplumber

from screenplay_project.errors import ManuscriptLoadError
from screenplay_project.text.cleaners import clean_layout_lines

TEXT_SUFFIXES = (".fountain", ".spmd", ".txt", ".md")


def is_pdf(path: str) -> bool:
    return path.lower().endswith(".pdf")


def read_pdf_text(path: str, *, pdf_open: Callable[..., Any] = pdfplumber.open) -> str:
    pages: List[str] = []
    with pdf_open(path) as pdf:
        for p in pdf.pages:
            pages.append(p.extract_text() or "")

    lines: List[str] = []
    for txt in pages:
        lines.extend(txt.splitlines())
        # Page boundaries end whatever block was open.
        lines.append("")
    return "\n".join(clean_layout_lines(lines))


def load_manuscript(path: str, *, pdf_open: Callable[..., Any] = pdfplumber.open) -> str:
    """
    Read a manuscript file into a single string.

    Raises:
        ManuscriptLoadError: the file is missing, unreadable, or not UTF-8 text.
    """
    if not os.path.isfile(path):
        raise ManuscriptLoadError(path, "no such file")
    try:
        if is_pdf(path):
            return read_pdf_text(path, pdf_open=pdf_open)
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except UnicodeDecodeError as exc:
        raise ManuscriptLoadError(path, f"not UTF-8 text ({exc.reason})") from exc
    except OSError as exc:
        raise ManuscriptLoadError(path, exc.strerror or str(exc)) from exc
