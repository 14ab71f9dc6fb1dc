"""
blocks.py

This module groups a manuscript's normalized lines into raw blocks.

Purpose in the pipeline
-----------------------
Screenplay structure is carried by blank lines: a scene heading, an action
paragraph, or a character cue with its dialogue are each separated from their
neighbours by one or more empty lines.

    INT. MESS                      <- block 1

    The entire crew is seated.     <- block 2

    KANE                           <- block 3
    First thing I'm going to do...

split_blocks() turns the line sequence into RawBlock objects. Blank lines are
separators only; they are never kept as blocks. Each RawBlock remembers the
1-based source line of its first line so later stages can report findings
against the manuscript.

This module is deterministic and knows nothing about screenplay semantics.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class RawBlock:
    """
    lines: non-blank source lines, trailing whitespace already stripped
    line_no: 1-based source line number of lines[0]
    """
    lines: Tuple[str, ...]
    line_no: int

    @property
    def first(self) -> str:
        return self.lines[0]

    def is_single_line(self) -> bool:
        return len(self.lines) == 1


def split_blocks(lines: List[str]) -> List[RawBlock]:
    blocks: List[RawBlock] = []
    cur: List[str] = []
    start = 0
    for idx, ln in enumerate(lines, start=1):
        if ln.strip() == "":
            if cur:
                blocks.append(RawBlock(lines=tuple(cur), line_no=start))
                cur = []
        else:
            if not cur:
                start = idx
            cur.append(ln)
    if cur:
        blocks.append(RawBlock(lines=tuple(cur), line_no=start))
    return blocks
