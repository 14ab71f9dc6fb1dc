"""
titlepage.py

Extracts the optional title page from the head of a manuscript.

A title page is a run of "Key: value" blocks before the screenplay body:

    Title:
        Alien
    Author:
        Dan O'Bannon

    INT. MESS

Each key line may carry its value on the same line ("Title: ALIEN") or on the
following indented lines, one value per line. Extraction is a greedy prefix
match that stops at the first block which does not have this shape; that block
and everything after it is body.

Ambiguous blocks are left to the body. In particular:
- a line that reads as a scene heading ("INT. HOUSE: NIGHT") is never a key;
- keys may not start with whitespace or a forced element marker;
- a single-line block with a key that is not a well-known title page key
  ("Title", "Author", "Draft date", ...) only counts when it opens the
  manuscript and carries a same-line value. "FADE IN:" stays body, and so
  does a body action line after the title page that happens to contain a
  colon.
"""
from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple

from screenplay_project.parse.document import (
    Diagnostic,
    DiagnosticKind,
    TitlePage,
    TitlePageEntry,
    normalize_title_key,
)
from screenplay_project.parse.rules import is_scene_heading
from screenplay_project.text.blocks import RawBlock

KEY_LINE_RE = re.compile(r"^(?P<key>[^\s:!@.>~#=(][^:]*):(?P<value>.*)$")

KNOWN_TITLE_KEYS = {
    "title",
    "credit",
    "author",
    "authors",
    "source",
    "draft date",
    "date",
    "contact",
    "copyright",
    "notes",
    "revision",
}


def _match_key_line(line: str) -> Optional[Tuple[str, str]]:
    m = KEY_LINE_RE.match(line)
    if not m:
        return None
    if is_scene_heading(line):
        return None
    key = m.group("key").strip()
    if not key:
        return None
    return key, m.group("value").strip()


def _parse_block(block: RawBlock) -> Optional[List[Tuple[str, List[str]]]]:
    """
    Resolve one block into (key, values) items.

    Returns None when the block cannot be fully resolved: its first line is
    not a key line, or a later line is neither indented nor a key line.
    """
    first = _match_key_line(block.first)
    if first is None:
        return None

    items: List[Tuple[str, List[str]]] = []
    key, value = first
    items.append((key, [value] if value else []))

    for ln in block.lines[1:]:
        if ln[:1].isspace():
            items[-1][1].append(ln.strip())
            continue
        kv = _match_key_line(ln)
        if kv is None:
            return None
        key, value = kv
        items.append((key, [value] if value else []))
    return items


def looks_like_title_block(block: RawBlock) -> bool:
    return _match_key_line(block.first) is not None


def extract_title_page(
    blocks: List[RawBlock],
) -> Tuple[Optional[TitlePage], List[RawBlock], List[Diagnostic]]:
    """
    Split leading title page blocks from the body.

    Args:
        blocks: All raw blocks of the manuscript, in order.

    Returns:
        (title_page, body_blocks, diagnostics). title_page is None when the
        first block is not title page syntax. A block that starts like a title
        page entry but cannot be resolved is returned as body and reported as
        MALFORMED_TITLE_PAGE.
    """
    diagnostics: List[Diagnostic] = []
    order: List[str] = []
    merged: Dict[str, TitlePageEntry] = {}
    consumed = 0

    for block in blocks:
        items = _parse_block(block)
        if items is None:
            if looks_like_title_block(block):
                diagnostics.append(
                    Diagnostic(
                        kind=DiagnosticKind.MALFORMED_TITLE_PAGE,
                        line=block.line_no,
                        message="block starts like a title page entry but has "
                        "unindented non-key lines; treated as body",
                    )
                )
            break

        key, values = items[0]
        if block.is_single_line() and normalize_title_key(key) not in KNOWN_TITLE_KEYS:
            # "FADE IN:" or a stray "Note: ..." line after the title page.
            if consumed > 0 or not values:
                break

        for key, values in items:
            norm = normalize_title_key(key)
            if norm in merged:
                prev = merged[norm]
                merged[norm] = TitlePageEntry(key=prev.key, values=prev.values + tuple(values))
            else:
                order.append(norm)
                merged[norm] = TitlePageEntry(key=key, values=tuple(values))
        consumed += 1

    if consumed == 0:
        return None, list(blocks), diagnostics

    entries = []
    for norm in order:
        entry = merged[norm]
        if not entry.values:
            entry = TitlePageEntry(key=entry.key, values=("",))
        entries.append(entry)

    return TitlePage(entries=tuple(entries)), list(blocks[consumed:]), diagnostics
