"""
classifier.py

This module assigns a screenplay element to every body line.

Purpose in the pipeline
-----------------------
After the title page is split off, the body is a list of RawBlocks. A block's
meaning depends on its own lines and, for a bare character cue, on the block
that follows it:

    KANE                     <- cue: uppercase, dialogue follows
    (stands up)              <- parenthetical inside the speaker run
    Ooooooh.                 <- dialogue inside the speaker run

The classifier walks the blocks once, carrying an explicit ClassifierState
between lines. The state only survives a block boundary when a cue stands
alone in its block; the next block is then that cue's dialogue run.
Classification never backtracks: a decision about one block is final and does
not depend on how later blocks turn out.

Rules for the opening line of a block, first match wins:

1) forced markers: ! action, @ cue, . scene heading, >x< centered,
   > transition, ~ lyric
2) === page break, # section, = synopsis
3) scene heading (INT/EXT/EST/INT/EXT/I/E prefix, or "PLACE - NIGHT")
4) transition (single-line block, "CUT TO:" and friends, "...TO:")
5) character cue (uppercase name, with dialogue to own)
6) action

The output is a flat list of ClassifiedLine. Grouping into speaker turns is
left to the assembler.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from screenplay_project.parse.document import (
    Action,
    Centered,
    CharacterCue,
    Dialogue,
    Lyric,
    PageBreak,
    Parenthetical,
    SceneHeading,
    Section,
    Synopsis,
    Transition,
)
from screenplay_project.parse.rules import (
    CueParts,
    forced_action,
    forced_centered,
    forced_lyric,
    forced_transition,
    is_forced_scene_heading,
    is_page_break,
    is_parenthetical,
    is_scene_heading,
    is_transition,
    match_section,
    match_synopsis,
    parse_cue,
    split_scene_number,
)
from screenplay_project.text.blocks import RawBlock


class ClassifierState(Enum):
    NONE = "none"
    AFTER_CUE = "after_cue"
    AFTER_PARENTHETICAL = "after_parenthetical"
    IN_DIALOGUE = "in_dialogue"


@dataclass(frozen=True)
class ClassifiedLine:
    """
    element: leaf element for this line (never a SpeakerTurn or group)
    line_no: 1-based source line
    block_idx: index of the RawBlock the line came from
    """
    element: object
    line_no: int
    block_idx: int


def _cue_element(parts: CueParts) -> CharacterCue:
    return CharacterCue(
        name=parts.name,
        extension=parts.extension,
        dual=parts.dual,
        forced=parts.forced,
    )


def _forced_element(line: str) -> Optional[object]:
    """Element for a line carrying a forced marker, or None."""
    text = forced_action(line)
    if text is not None:
        return Action(text)
    if line.lstrip().startswith("@"):
        parts = parse_cue(line)
        if parts is not None:
            return _cue_element(parts)
    if is_forced_scene_heading(line):
        text, number = split_scene_number(line.lstrip()[1:])
        return SceneHeading(text=text, scene_number=number)
    text = forced_centered(line)
    if text is not None:
        return Centered(text)
    text = forced_transition(line)
    if text is not None:
        return Transition(text)
    text = forced_lyric(line)
    if text is not None:
        return Lyric(text)
    return None


def _structural_element(block: RawBlock) -> Optional[object]:
    """Page breaks, sections, synopses, scene headings and transitions."""
    head = block.first
    if block.is_single_line() and is_page_break(head):
        return PageBreak()
    section = match_section(head)
    if section is not None:
        level, text = section
        return Section(text=text, level=level)
    synopsis = match_synopsis(head)
    if synopsis is not None:
        return Synopsis(synopsis)
    if is_scene_heading(head):
        text, number = split_scene_number(head)
        return SceneHeading(text=text, scene_number=number)
    if block.is_single_line() and is_transition(head):
        return Transition(head.strip())
    return None


def can_carry_dialogue(block: Optional[RawBlock]) -> bool:
    """
    Whether a block may serve as the dialogue run of a bare cue above it.

    Headings, transitions, page breaks, sections, synopses, forced elements
    and blocks that are themselves speaker blocks cannot.
    """
    if block is None:
        return False
    head = block.first
    if _forced_element(head) is not None:
        return False
    if _structural_element(block) is not None:
        return False
    if not block.is_single_line() and parse_cue(head) is not None:
        return False
    return True


def _open_block(
    block: RawBlock, next_block: Optional[RawBlock]
) -> Tuple[object, ClassifierState, bool]:
    """
    Classify the first line of a block.

    Returns (element, state, carries) where carries is True when a cue stands
    alone in its block and the next block becomes its dialogue run.
    """
    head = block.first

    element = _forced_element(head)
    if element is None:
        element = _structural_element(block)
    if element is None:
        parts = parse_cue(head)
        if parts is not None and (not block.is_single_line() or can_carry_dialogue(next_block)):
            element = _cue_element(parts)
    if element is None:
        element = Action(head)

    if isinstance(element, CharacterCue):
        carries = block.is_single_line() and can_carry_dialogue(next_block)
        return element, ClassifierState.AFTER_CUE, carries
    return element, ClassifierState.NONE, False


def _speaker_line(line: str) -> Tuple[object, ClassifierState]:
    """Classify a line inside a speaker run."""
    text = forced_action(line)
    if text is not None:
        return Action(text), ClassifierState.NONE
    if line.lstrip().startswith("@"):
        parts = parse_cue(line)
        if parts is not None:
            return _cue_element(parts), ClassifierState.AFTER_CUE
    if is_parenthetical(line):
        return Parenthetical(line.strip()), ClassifierState.AFTER_PARENTHETICAL
    return Dialogue(line.strip()), ClassifierState.IN_DIALOGUE


def _continuation_line(line: str) -> Tuple[object, ClassifierState]:
    """Classify a non-opening line outside a speaker run."""
    element = _forced_element(line)
    if element is None:
        return Action(line), ClassifierState.NONE
    if isinstance(element, CharacterCue):
        return element, ClassifierState.AFTER_CUE
    return element, ClassifierState.NONE


def classify_blocks(blocks: List[RawBlock]) -> List[ClassifiedLine]:
    """
    Classify every line of the body blocks in a single forward pass.

    Args:
        blocks: Body blocks in source order (title page already removed).

    Returns:
        One ClassifiedLine per source line, in source order.
    """
    out: List[ClassifiedLine] = []
    state = ClassifierState.NONE
    carried = False

    for bi, block in enumerate(blocks):
        next_block = blocks[bi + 1] if bi + 1 < len(blocks) else None
        if not carried:
            state = ClassifierState.NONE
        carried = False

        for li, line in enumerate(block.lines):
            line_no = block.line_no + li
            if state is not ClassifierState.NONE:
                element, state = _speaker_line(line)
            elif li == 0:
                element, state, carried = _open_block(block, next_block)
            else:
                element, state = _continuation_line(line)
            out.append(ClassifiedLine(element=element, line_no=line_no, block_idx=bi))

    return out
