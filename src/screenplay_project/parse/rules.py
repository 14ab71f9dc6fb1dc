"""
rules.py

Line-level lexical rules for screenplay elements.

Every predicate here looks at a single line and nothing else. Context (what
precedes or follows a line) is the classifier's job; keeping the two apart
means each rule can be tested on its own.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple

# Scene heading prefixes, any case, followed by "." or whitespace:
# - INT. / EXT. / EST.
# - INT/EXT, INT./EXT., EXT/INT (spaces around the slash allowed)
# - I/E
SCENE_PREFIX_RE = re.compile(
    r"""^\s*
    (?:
        INT\.?\s*/\s*EXT |
        EXT\.?\s*/\s*INT |
        I\s*/\s*E |
        INT | EXT | EST
    )
    (?:\.|\s)
    """,
    re.IGNORECASE | re.VERBOSE,
)

TIME_OF_DAY = (
    "DAY",
    "NIGHT",
    "MORNING",
    "AFTERNOON",
    "EVENING",
    "DAWN",
    "DUSK",
    "NOON",
    "MIDNIGHT",
    "SUNRISE",
    "SUNSET",
    "CONTINUOUS",
    "LATER",
    "MOMENTS LATER",
    "SAME",
    "SAME TIME",
)

# "KITCHEN - NIGHT", "ENGINE ROOM -- CONTINUOUS"
TIME_OF_DAY_RE = re.compile(
    r"^.*\S\s*[-–—]+\s*(?:%s)\s*$" % "|".join(re.escape(t) for t in TIME_OF_DAY)
)

# Trailing scene number, e.g. "INT. HOUSE - DAY #12A#"
SCENE_NUMBER_RE = re.compile(r"\s*#(?P<num>[\w.\-]+)#\s*$")

TRANSITIONS = {
    "CUT TO:",
    "DISSOLVE TO:",
    "SMASH CUT TO:",
    "MATCH CUT TO:",
    "JUMP CUT TO:",
    "TIME CUT:",
    "FADE TO:",
    "FADE OUT.",
    "FADE OUT:",
    "FADE TO BLACK.",
    "CUT TO BLACK.",
    "INTERCUT WITH:",
    "BACK TO:",
}

# "KANE (V.O.) (CONT'D)" -> name="KANE", ext="(V.O.) (CONT'D)"
CUE_RE = re.compile(r"^(?P<name>[^()]*?)\s*(?P<ext>(?:\([^()]*\)\s*)+)?$")

PAGE_BREAK_RE = re.compile(r"^={3,}$")
SECTION_RE = re.compile(r"^(?P<marks>#+)\s*(?P<text>.*)$")
SYNOPSIS_RE = re.compile(r"^=(?!=)\s*(?P<text>.*)$")


def clean_spaces(s: str) -> str:
    return re.sub(r"\s+", " ", s).strip()


def is_all_caps(s: str) -> bool:
    """No lowercase letters and at least one uppercase letter."""
    if any(c.islower() for c in s):
        return False
    return any(c.isupper() for c in s)


def is_scene_heading(line: str) -> bool:
    if SCENE_PREFIX_RE.match(line):
        return True
    s = line.strip()
    return is_all_caps(s) and bool(TIME_OF_DAY_RE.match(s))


def split_scene_number(text: str) -> Tuple[str, Optional[str]]:
    m = SCENE_NUMBER_RE.search(text)
    if not m:
        return text.strip(), None
    return text[: m.start()].strip(), m.group("num")


def is_transition(line: str) -> bool:
    s = clean_spaces(line)
    if not is_all_caps(s):
        return False
    return s in TRANSITIONS or s.endswith("TO:")


def is_parenthetical(line: str) -> bool:
    s = line.strip()
    return len(s) >= 2 and s.startswith("(") and s.endswith(")")


def is_page_break(line: str) -> bool:
    return bool(PAGE_BREAK_RE.match(line.strip()))


def match_section(line: str) -> Optional[Tuple[int, str]]:
    m = SECTION_RE.match(line.strip())
    if not m:
        return None
    return len(m.group("marks")), m.group("text").strip()


def match_synopsis(line: str) -> Optional[str]:
    m = SYNOPSIS_RE.match(line.strip())
    if not m:
        return None
    return m.group("text").strip()


@dataclass(frozen=True)
class CueParts:
    name: str
    extension: Optional[str]
    dual: bool
    forced: bool


def parse_cue(line: str) -> Optional[CueParts]:
    """
    Read a line as a character cue.

    Accepted shape: [@][^]NAME [(EXT)...][ ^]
    - "@" forces a cue even for a lowercase name.
    - "^", leading or trailing, marks dual dialogue.
    - Without "@" the name must be uppercase with at least one letter, must
      not end with ":" and must not read as a scene heading or transition.

    Returns None when the line is not a cue.
    """
    s = line.strip()
    forced = s.startswith("@")
    if forced:
        s = s[1:].strip()

    dual = False
    if s.startswith("^"):
        dual = True
        s = s[1:].strip()
    if s.endswith("^"):
        dual = True
        s = s[:-1].strip()

    m = CUE_RE.match(s)
    if not m:
        return None
    name = clean_spaces(m.group("name"))
    if not name:
        return None
    ext = m.group("ext")
    ext = clean_spaces(ext) if ext else None

    if not forced:
        if not is_all_caps(name) or name.endswith(":"):
            return None
        if is_scene_heading(s) or is_transition(s):
            return None

    return CueParts(name=name, extension=ext, dual=dual, forced=forced)


def is_forced_scene_heading(line: str) -> bool:
    s = line.lstrip()
    return s.startswith(".") and not s.startswith("..") and len(s) > 1


def forced_centered(line: str) -> Optional[str]:
    s = line.strip()
    if len(s) >= 2 and s.startswith(">") and s.endswith("<"):
        return s[1:-1].strip()
    return None


def forced_transition(line: str) -> Optional[str]:
    s = line.strip()
    if s.startswith(">") and not s.endswith("<"):
        return s[1:].strip()
    return None


def forced_lyric(line: str) -> Optional[str]:
    s = line.lstrip()
    if s.startswith("~"):
        return s[1:].strip()
    return None


def forced_action(line: str) -> Optional[str]:
    s = line.lstrip()
    if s.startswith("!"):
        return s[1:].strip()
    return None
