from __future__ import annotations

import re
from typing import List

# Any line-ending convention: CRLF (Windows), lone CR (old Mac), LF.
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")

_BOM = "\ufeff"


def normalize_lines(text: str) -> List[str]:
    """
    Split a manuscript into logical lines.

    This is the first step of parsing and it is total: any string is accepted.
    - Line endings are unified (\\r\\n, \\r and \\n all split).
    - Trailing whitespace is stripped from every line.
    - Leading whitespace is preserved, because indentation is significant for
      title page continuations.
    - A leading byte-order mark is dropped.

    Whitespace-only lines come back as "" so that split_blocks() sees them as
    block separators.

    Args:
        text: Raw manuscript text.

    Returns:
        The manuscript's lines, in source order. Empty input yields [].
    """
    if not text:
        return []
    if text.startswith(_BOM):
        text = text[len(_BOM):]

    lines = [ln.rstrip() for ln in _LINE_BREAK_RE.split(text)]
    # A terminating newline does not open an extra line.
    if lines and lines[-1] == "":
        lines.pop()
    return lines


# Pagination noise left behind when a screenplay is extracted from a PDF.
_LAYOUT_JUNK_RE = re.compile(
    r"""(
        ^\s*\(CONTINUED\)\s*$   |  # (CONTINUED)
        ^\s*CONTINUED:?\s*$     |  # CONTINUED:
        ^\s*\(MORE\)\s*$        |  # (MORE) at the foot of a page
        ^\s*PAGE\s+\d+\s*$      |  # page footer like 'PAGE 12'
        ^\s*\d{1,3}\.\s*$          # bare page number like '12.'
    )""",
    re.IGNORECASE | re.VERBOSE,
)


def clean_layout_lines(lines: List[str]) -> List[str]:
    """
    Remove page layout boilerplate from extracted screenplay lines.

    Only used for manuscripts that come out of a PDF. Plain-text manuscripts
    are taken as written.
    - Drops continuation markers, (MORE) and page number lines.
    - Keeps all other lines and all blank lines, so block boundaries survive.

    Args:
        lines: Lines as extracted page by page.

    Returns:
        A new list without the layout lines.
    """
    cleaned: List[str] = []
    for ln in lines:
        if ln.strip() and _LAYOUT_JUNK_RE.search(ln):
            continue
        cleaned.append(ln)
    return cleaned
