"""
parser.py

Entry point of the parsing pipeline:

    text -> lines -> raw blocks -> (title page, body) -> classified lines -> Document

parse() is a pure function of its input. It holds no state between calls and
never raises on string input: every manuscript yields some Document, with
anything odd reported through Document.diagnostics.
"""
from __future__ import annotations

from typing import List

from screenplay_project.errors import ManuscriptError
from screenplay_project.parse.assembler import assemble
from screenplay_project.parse.classifier import classify_blocks
from screenplay_project.parse.document import Diagnostic, DiagnosticKind, Document
from screenplay_project.parse.titlepage import extract_title_page
from screenplay_project.text.blocks import split_blocks
from screenplay_project.text.cleaners import normalize_lines


def parse(text: str) -> Document:
    if not isinstance(text, str):
        raise ManuscriptError(f"manuscript must be a string, got {type(text).__name__}")

    raw_blocks = split_blocks(normalize_lines(text))
    if not raw_blocks:
        empty = Diagnostic(kind=DiagnosticKind.EMPTY_INPUT, line=0, message="manuscript has no content")
        return Document(diagnostics=(empty,))

    title_page, body, diagnostics = extract_title_page(raw_blocks)
    found: List[Diagnostic] = list(diagnostics)
    return assemble(classify_blocks(body), title_page=title_page, diagnostics=found)
