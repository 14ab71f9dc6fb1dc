"""
assembler.py

Builds the Document tree from classified lines.

The assembler restructures, it never reclassifies:
- consecutive action (or lyric, or centered) lines from the same block become
  one block, lines joined with "\\n";
- a CharacterCue opens a SpeakerTurn that owns the parentheticals and dialogue
  lines after it; consecutive dialogue lines from one block are joined;
- a turn whose cue is flagged dual is merged with the turn right before it
  into a DualDialogueGroup. With no turn right before it, the flag is kept on
  the cue and the turn stands alone.

A turn with no dialogue at all is kept (it renders as a bare cue) and reported
as UNTERMINATED_SPEAKER_RUN.
"""
from __future__ import annotations

from typing import List, Optional

from screenplay_project.parse.classifier import ClassifiedLine
from screenplay_project.parse.document import (
    Action,
    Block,
    Centered,
    CharacterCue,
    Diagnostic,
    DiagnosticKind,
    Dialogue,
    Document,
    DualDialogueGroup,
    Lyric,
    Parenthetical,
    SpeakerTurn,
    TitlePage,
)

_JOINABLE = (Action, Lyric, Centered)


class _OpenTurn:
    def __init__(self, cue: CharacterCue, line_no: int):
        self.cue = cue
        self.line_no = line_no
        self.lines: List[object] = []
        self.last_block_idx: Optional[int] = None

    def add(self, element: object, block_idx: int) -> None:
        prev = self.lines[-1] if self.lines else None
        if (
            isinstance(element, Dialogue)
            and isinstance(prev, Dialogue)
            and self.last_block_idx == block_idx
        ):
            self.lines[-1] = Dialogue(f"{prev.text}\n{element.text}")
        else:
            self.lines.append(element)
        self.last_block_idx = block_idx

    def close(self) -> SpeakerTurn:
        return SpeakerTurn(cue=self.cue, lines=tuple(self.lines))


def assemble(
    lines: List[ClassifiedLine],
    title_page: Optional[TitlePage] = None,
    diagnostics: Optional[List[Diagnostic]] = None,
) -> Document:
    """
    Group classified lines into the final Document.

    Args:
        lines: Output of classify_blocks(), in source order.
        title_page: Extracted title page, if any.
        diagnostics: Findings from earlier stages; assembler findings are
            appended after them.

    Returns:
        The Document for this parse.
    """
    found: List[Diagnostic] = list(diagnostics or [])
    blocks: List[Block] = []
    turn: Optional[_OpenTurn] = None
    last_joined_block: Optional[int] = None

    def emit(block: Block) -> None:
        nonlocal last_joined_block
        blocks.append(block)
        last_joined_block = None

    def close_turn() -> None:
        nonlocal turn
        if turn is None:
            return
        closed = turn.close()
        if not any(isinstance(ln, Dialogue) for ln in closed.lines):
            found.append(
                Diagnostic(
                    kind=DiagnosticKind.UNTERMINATED_SPEAKER_RUN,
                    line=turn.line_no,
                    message=f"cue {closed.cue.name!r} has no dialogue",
                )
            )
        turn = None
        if closed.cue.dual and blocks and isinstance(blocks[-1], SpeakerTurn):
            left = blocks.pop()
            emit(DualDialogueGroup(left=left, right=closed))
        else:
            emit(closed)

    for cl in lines:
        el = cl.element

        if isinstance(el, CharacterCue):
            close_turn()
            turn = _OpenTurn(el, cl.line_no)
            continue

        if isinstance(el, (Parenthetical, Dialogue)):
            if turn is None:
                # The classifier only emits these inside a speaker run.
                emit(Action(el.text))
            else:
                turn.add(el, cl.block_idx)
            continue

        close_turn()

        if (
            isinstance(el, _JOINABLE)
            and blocks
            and type(blocks[-1]) is type(el)
            and last_joined_block == cl.block_idx
        ):
            prev = blocks[-1]
            blocks[-1] = type(el)(f"{prev.text}\n{el.text}")
            continue

        emit(el)
        if isinstance(el, _JOINABLE):
            last_joined_block = cl.block_idx

    close_turn()

    return Document(title_page=title_page, blocks=tuple(blocks), diagnostics=tuple(found))
