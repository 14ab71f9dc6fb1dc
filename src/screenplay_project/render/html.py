"""
html.py

Renders a parsed Document as HTML.

Every block kind maps to one fixed element/class pair, so stylesheets can rely
on the markup:

    scene heading   <h3 class="scene-heading">
    action          <p class="action">
    speaker turn    <div class="speaker-turn"> holding
                        <p class="character">, <p class="parenthetical">,
                        <p class="dialogue">
    dual dialogue   <div class="dual-dialogue"> with
                        <div class="dual-dialogue-left"> / <div class="dual-dialogue-right">
    transition      <p class="transition">
    page break      <hr class="page-break">
    section         <p class="section section-N">
    synopsis        <p class="synopsis">
    centered        <p class="centered">
    lyric           <p class="lyric">

The title page, when present, comes first as <section class="title-page">.

All manuscript text goes through html.escape(); nothing from the input is ever
emitted as markup. Line breaks inside a block become <br>. A block of a kind
this module does not know renders as action with an extra "unknown-block"
class instead of failing.
"""
from __future__ import annotations

from html import escape as html_escape
from typing import Any, Callable, Dict, List, Optional

from screenplay_project.parse.document import (
    BlockKind,
    Document,
    DualDialogueGroup,
    SpeakerTurn,
    TitlePage,
)

STYLE = """\
body { font-family: "Courier Prime", "Courier New", Courier, monospace; font-size: 12pt; }
.screenplay { max-width: 6in; margin: 0 auto; }
.title-page { text-align: center; margin-bottom: 3em; }
.title-page-key { display: none; }
.scene-heading { font-size: 12pt; font-weight: bold; text-transform: uppercase; margin-top: 2em; }
.scene-number { float: right; }
.character { margin: 1em 0 0 2in; text-transform: uppercase; }
.parenthetical { margin: 0 0 0 1.5in; }
.dialogue { margin: 0 1.5in 0 1in; }
.transition { text-align: right; text-transform: uppercase; }
.centered { text-align: center; }
.lyric { font-style: italic; margin-left: 1in; }
.section, .synopsis { color: #888; }
.dual-dialogue { display: flex; }
.dual-dialogue > div { flex: 1; }
.dual-dialogue .character { margin-left: 1in; }
.dual-dialogue .parenthetical { margin-left: 0.5in; }
.dual-dialogue .dialogue { margin: 0 0.25in 0 0; }
hr.page-break { border: none; page-break-after: always; }
"""


def esc(text: str) -> str:
    """Escape text for element content and attribute values, keeping line breaks."""
    return "<br>".join(html_escape(part, quote=True) for part in text.split("\n"))


def _p(cls: str, text: str) -> str:
    return f'<p class="{cls}">{esc(text)}</p>'


def render_title_page(title_page: TitlePage) -> str:
    parts: List[str] = ['<section class="title-page">']
    for entry in title_page.entries:
        parts.append('<div class="title-page-entry">')
        parts.append(f'<span class="title-page-key">{esc(entry.key)}</span>')
        for value in entry.values:
            parts.append(f'<span class="title-page-value">{esc(value)}</span>')
        parts.append("</div>")
    parts.append("</section>")
    return "\n".join(parts)


def _scene_heading(block: Any) -> str:
    number = ""
    if block.scene_number:
        number = f'<span class="scene-number">{esc(block.scene_number)}</span>'
    return f'<h3 class="scene-heading">{esc(block.text)}{number}</h3>'


def _speaker_turn(turn: SpeakerTurn) -> str:
    parts = [_p("character", turn.cue.text)]
    for ln in turn.lines:
        parts.append(_render_block(ln))
    return '<div class="speaker-turn">\n' + "\n".join(parts) + "\n</div>"


def _dual_dialogue(group: DualDialogueGroup) -> str:
    return "\n".join(
        [
            '<div class="dual-dialogue">',
            '<div class="dual-dialogue-left">',
            _speaker_turn(group.left),
            "</div>",
            '<div class="dual-dialogue-right">',
            _speaker_turn(group.right),
            "</div>",
            "</div>",
        ]
    )


_RENDERERS: Dict[BlockKind, Callable[[Any], str]] = {
    BlockKind.SCENE_HEADING: _scene_heading,
    BlockKind.ACTION: lambda b: _p("action", b.text),
    BlockKind.CHARACTER_CUE: lambda b: _p("character", b.text),
    BlockKind.PARENTHETICAL: lambda b: _p("parenthetical", b.text),
    BlockKind.DIALOGUE: lambda b: _p("dialogue", b.text),
    BlockKind.TRANSITION: lambda b: _p("transition", b.text),
    BlockKind.SPEAKER_TURN: _speaker_turn,
    BlockKind.DUAL_DIALOGUE: _dual_dialogue,
    BlockKind.PAGE_BREAK: lambda b: '<hr class="page-break">',
    BlockKind.SECTION: lambda b: _p(f"section section-{b.level}", b.text),
    BlockKind.SYNOPSIS: lambda b: _p("synopsis", b.text),
    BlockKind.CENTERED: lambda b: _p("centered", b.text),
    BlockKind.LYRIC: lambda b: _p("lyric", b.text),
}


def _render_block(block: Any) -> str:
    render = _RENDERERS.get(getattr(block, "kind", None))
    if render is None:
        return _p("action unknown-block", str(getattr(block, "text", "")))
    return render(block)


def render_fragment(document: Document) -> str:
    parts: List[str] = []
    if document.title_page is not None:
        parts.append(render_title_page(document.title_page))
    parts.extend(_render_block(b) for b in document.blocks)
    return "\n".join(parts)


def render_html(document: Document, *, standalone: bool = False, title: Optional[str] = None) -> str:
    """
    Serialize a Document to HTML.

    Args:
        document: Parsed screenplay.
        standalone: If True, wrap the markup in a complete HTML page with an
            embedded stylesheet; otherwise return the bare fragment.
        title: Page <title> for standalone output. Defaults to the title page's
            "Title" value, or "Untitled".

    Returns:
        The markup. An empty Document renders as "" (or as an empty page when
        standalone).
    """
    body = render_fragment(document)
    if not standalone:
        return body

    if title is None:
        title = "Untitled"
        if document.title_page is not None:
            value = document.title_page.get("title")
            if isinstance(value, tuple):
                value = " ".join(value)
            if value:
                title = value

    return "\n".join(
        [
            "<!DOCTYPE html>",
            "<html>",
            "<head>",
            '<meta charset="utf-8">',
            f"<title>{esc(title)}</title>",
            "<style>",
            STYLE,
            "</style>",
            "</head>",
            "<body>",
            '<article class="screenplay">',
            body,
            "</article>",
            "</body>",
            "</html>",
            "",
        ]
    )
