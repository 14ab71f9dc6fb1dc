"""
document.py

Datatypes for a parsed screenplay.

A Document is the root of one parse call: an optional TitlePage followed by an
ordered tuple of Blocks. Every block kind is a small frozen dataclass tagged
with a BlockKind; the set of kinds is closed, and both the assembler and the
renderer dispatch over it exhaustively.

Nesting
-------
Dialogue and parentheticals never stand alone in Document.blocks. They live
inside the SpeakerTurn opened by their CharacterCue:

    SpeakerTurn(
        cue=CharacterCue(name="KANE"),
        lines=(Parenthetical("(stands up)"), Dialogue("Ooooooh.")),
    )

Two consecutive turns, the second flagged as dual, are merged into one
DualDialogueGroup which owns both turns by value.

Everything here is immutable, so two parses of identical text compare equal.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union


class BlockKind(str, Enum):
    SCENE_HEADING = "scene_heading"
    ACTION = "action"
    CHARACTER_CUE = "character_cue"
    PARENTHETICAL = "parenthetical"
    DIALOGUE = "dialogue"
    TRANSITION = "transition"
    SPEAKER_TURN = "speaker_turn"
    DUAL_DIALOGUE = "dual_dialogue"
    PAGE_BREAK = "page_break"
    SECTION = "section"
    SYNOPSIS = "synopsis"
    CENTERED = "centered"
    LYRIC = "lyric"


class DiagnosticKind(str, Enum):
    EMPTY_INPUT = "empty_input"
    MALFORMED_TITLE_PAGE = "malformed_title_page"
    UNTERMINATED_SPEAKER_RUN = "unterminated_speaker_run"


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal finding. line is the 1-based source line, 0 when not tied to one."""
    kind: DiagnosticKind
    line: int
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "line": self.line, "message": self.message}


@dataclass(frozen=True)
class TitlePageEntry:
    key: str
    values: Tuple[str, ...]


@dataclass(frozen=True)
class TitlePage:
    """
    Title page metadata in source order.

    Keys keep their source spelling for display; lookups are trimmed and
    case-insensitive. A key written once with a single value reads back as a
    plain string, a multi-line key reads back as a tuple of strings.
    """
    entries: Tuple[TitlePageEntry, ...]

    def _find(self, key: str) -> Optional[TitlePageEntry]:
        wanted = normalize_title_key(key)
        for entry in self.entries:
            if normalize_title_key(entry.key) == wanted:
                return entry
        return None

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._find(key) is not None

    def __getitem__(self, key: str) -> Union[str, Tuple[str, ...]]:
        entry = self._find(key)
        if entry is None:
            raise KeyError(key)
        return _entry_value(entry)

    def get(self, key: str, default: Any = None) -> Any:
        entry = self._find(key)
        return default if entry is None else _entry_value(entry)

    def keys(self) -> List[str]:
        return [e.key for e in self.entries]

    def as_dict(self) -> Dict[str, Union[str, Tuple[str, ...]]]:
        return {e.key: _entry_value(e) for e in self.entries}


def normalize_title_key(key: str) -> str:
    return " ".join(key.split()).lower()


def _entry_value(entry: TitlePageEntry) -> Union[str, Tuple[str, ...]]:
    if len(entry.values) == 1:
        return entry.values[0]
    return entry.values


@dataclass(frozen=True)
class SceneHeading:
    """scene_number: printed label such as "12A" when the heading carries #12A#."""
    text: str
    scene_number: Optional[str] = None
    kind: BlockKind = field(default=BlockKind.SCENE_HEADING, init=False)


@dataclass(frozen=True)
class Action:
    text: str
    kind: BlockKind = field(default=BlockKind.ACTION, init=False)


@dataclass(frozen=True)
class CharacterCue:
    """
    name: speaker name without markers, e.g. "KANE"
    extension: trailing parenthetical such as "(CONT'D)" or "(V.O.)", if any
    dual: the cue carried a ^ dual-dialogue marker
    forced: the cue was forced with @
    """
    name: str
    extension: Optional[str] = None
    dual: bool = False
    forced: bool = False
    kind: BlockKind = field(default=BlockKind.CHARACTER_CUE, init=False)

    @property
    def text(self) -> str:
        return f"{self.name} {self.extension}" if self.extension else self.name


@dataclass(frozen=True)
class Parenthetical:
    text: str
    kind: BlockKind = field(default=BlockKind.PARENTHETICAL, init=False)


@dataclass(frozen=True)
class Dialogue:
    text: str
    kind: BlockKind = field(default=BlockKind.DIALOGUE, init=False)


@dataclass(frozen=True)
class Transition:
    text: str
    kind: BlockKind = field(default=BlockKind.TRANSITION, init=False)


@dataclass(frozen=True)
class SpeakerTurn:
    cue: CharacterCue
    lines: Tuple[Union[Parenthetical, Dialogue], ...] = ()
    kind: BlockKind = field(default=BlockKind.SPEAKER_TURN, init=False)


@dataclass(frozen=True)
class DualDialogueGroup:
    left: SpeakerTurn
    right: SpeakerTurn
    kind: BlockKind = field(default=BlockKind.DUAL_DIALOGUE, init=False)


@dataclass(frozen=True)
class PageBreak:
    kind: BlockKind = field(default=BlockKind.PAGE_BREAK, init=False)


@dataclass(frozen=True)
class Section:
    text: str
    level: int
    kind: BlockKind = field(default=BlockKind.SECTION, init=False)


@dataclass(frozen=True)
class Synopsis:
    text: str
    kind: BlockKind = field(default=BlockKind.SYNOPSIS, init=False)


@dataclass(frozen=True)
class Centered:
    text: str
    kind: BlockKind = field(default=BlockKind.CENTERED, init=False)


@dataclass(frozen=True)
class Lyric:
    text: str
    kind: BlockKind = field(default=BlockKind.LYRIC, init=False)


Block = Union[
    SceneHeading,
    Action,
    Transition,
    SpeakerTurn,
    DualDialogueGroup,
    PageBreak,
    Section,
    Synopsis,
    Centered,
    Lyric,
]


@dataclass(frozen=True)
class Document:
    title_page: Optional[TitlePage] = None
    blocks: Tuple[Block, ...] = ()
    diagnostics: Tuple[Diagnostic, ...] = ()

    def is_empty(self) -> bool:
        return self.title_page is None and not self.blocks

    def speaker_turns(self) -> List[SpeakerTurn]:
        """All speaker turns in source order, dual groups flattened left then right."""
        turns: List[SpeakerTurn] = []
        for b in self.blocks:
            if isinstance(b, SpeakerTurn):
                turns.append(b)
            elif isinstance(b, DualDialogueGroup):
                turns.extend([b.left, b.right])
        return turns

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serialisable form, used for dumps and inspection."""
        title = None
        if self.title_page is not None:
            title = [{"key": e.key, "values": list(e.values)} for e in self.title_page.entries]
        return {
            "title_page": title,
            "blocks": [block_to_dict(b) for b in self.blocks],
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }


def block_to_dict(block: Any) -> Dict[str, Any]:
    kind = block.kind
    if kind is BlockKind.SPEAKER_TURN:
        return {
            "kind": kind.value,
            "cue": block_to_dict(block.cue),
            "lines": [block_to_dict(ln) for ln in block.lines],
        }
    if kind is BlockKind.DUAL_DIALOGUE:
        return {
            "kind": kind.value,
            "left": block_to_dict(block.left),
            "right": block_to_dict(block.right),
        }
    if kind is BlockKind.CHARACTER_CUE:
        return {
            "kind": kind.value,
            "name": block.name,
            "extension": block.extension,
            "dual": block.dual,
            "forced": block.forced,
        }
    if kind is BlockKind.PAGE_BREAK:
        return {"kind": kind.value}
    out: Dict[str, Any] = {"kind": kind.value, "text": block.text}
    if kind is BlockKind.SCENE_HEADING:
        out["scene_number"] = block.scene_number
    elif kind is BlockKind.SECTION:
        out["level"] = block.level
    return out
