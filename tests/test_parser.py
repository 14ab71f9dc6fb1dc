import os

import pytest

from screenplay_project.errors import ManuscriptError
from screenplay_project.parse.document import (
    Action,
    BlockKind,
    CharacterCue,
    DiagnosticKind,
    Dialogue,
    Document,
    DualDialogueGroup,
    Lyric,
    Parenthetical,
    SceneHeading,
    SpeakerTurn,
    Transition,
)
from screenplay_project.parse.parser import parse

ALIEN = os.path.join(os.path.dirname(__file__), "data", "alien.fountain")


def _read(path):
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def test_kane_speaker_turn():
    doc = parse("KANE\nFirst thing I'm going to do when we get back is eat some decent food.")
    assert doc.blocks == (
        SpeakerTurn(
            cue=CharacterCue(name="KANE"),
            lines=(Dialogue("First thing I'm going to do when we get back is eat some decent food."),),
        ),
    )
    assert doc.title_page is None
    assert doc.diagnostics == ()


def test_kane_parenthetical_turn():
    doc = parse("KANE\n(stands up)\nOoooooh.\n")
    assert doc.blocks == (
        SpeakerTurn(
            cue=CharacterCue(name="KANE"),
            lines=(Parenthetical("(stands up)"), Dialogue("Ooooooh.")),
        ),
    )


def test_isolated_scene_heading():
    assert parse("INT. MESS").blocks == (SceneHeading("INT. MESS"),)


def test_original_small_document():
    text = (
        "INT. Public library\n\n"
        "Lights up on a table, totally empty except for a book.\n\n"
        "LIBRARIAN\n(scared)\nIs anyone there?\n\n"
        "CUT TO:\n\n"
        "EXT. YOGA RETREAT\n\n"
        "> Fade out\n"
    )
    assert parse(text).blocks == (
        SceneHeading("INT. Public library"),
        Action("Lights up on a table, totally empty except for a book."),
        SpeakerTurn(
            cue=CharacterCue(name="LIBRARIAN"),
            lines=(Parenthetical("(scared)"), Dialogue("Is anyone there?")),
        ),
        Transition("CUT TO:"),
        SceneHeading("EXT. YOGA RETREAT"),
        Transition("Fade out"),
    )


def test_alien_sample():
    doc = parse(_read(ALIEN))
    assert doc.title_page.as_dict() == {"Title": "Alien", "Author": "Dan O'Bannon"}
    assert doc.blocks[0] == SceneHeading("INT. MESS")
    assert doc.blocks[1].kind is BlockKind.ACTION

    names = [t.cue.name for t in doc.speaker_turns()]
    assert names == ["KANE", "PARKER", "LAMBERT", "PARKER", "KANE", "RIPLEY", "ASH", "KANE", "BRETT", "KANE"]
    assert Action("Pause.") in doc.blocks
    assert doc.diagnostics == ()


def test_multi_line_dialogue_and_action_are_joined():
    doc = parse("The door opens.\nRipley enters.\n\nRIPLEY\nHello?\nAnyone?\n")
    assert doc.blocks == (
        Action("The door opens.\nRipley enters."),
        SpeakerTurn(cue=CharacterCue(name="RIPLEY"), lines=(Dialogue("Hello?\nAnyone?"),)),
    )


def test_dialogue_lines_split_by_parenthetical_stay_separate():
    doc = parse("ASH\nBreathe.\n(beat)\nDeeply.\n")
    assert doc.blocks[0].lines == (Dialogue("Breathe."), Parenthetical("(beat)"), Dialogue("Deeply."))


def test_cue_extension_is_kept():
    turn = parse("KANE (CONT'D)\nNo kidding.\n").blocks[0]
    assert turn.cue == CharacterCue(name="KANE", extension="(CONT'D)")
    assert turn.cue.text == "KANE (CONT'D)"


def test_dual_dialogue_groups_two_turns():
    doc = parse("BRICK\nScrew retirement.\n\nSTEEL ^\nScrew retirement.\n")
    assert doc.blocks == (
        DualDialogueGroup(
            left=SpeakerTurn(cue=CharacterCue(name="BRICK"), lines=(Dialogue("Screw retirement."),)),
            right=SpeakerTurn(cue=CharacterCue(name="STEEL", dual=True), lines=(Dialogue("Screw retirement."),)),
        ),
    )


def test_dual_marker_without_previous_turn_stays_sequential():
    doc = parse("Kane sits.\n\n^STEEL\nHi.\n")
    assert [b.kind for b in doc.blocks] == [BlockKind.ACTION, BlockKind.SPEAKER_TURN]
    assert doc.blocks[1].cue.dual


def test_unterminated_speaker_run():
    doc = parse("INT. MESS\n\n@KANE\n")
    assert doc.blocks[-1] == SpeakerTurn(cue=CharacterCue(name="KANE", forced=True), lines=())
    assert [d.kind for d in doc.diagnostics] == [DiagnosticKind.UNTERMINATED_SPEAKER_RUN]
    assert doc.diagnostics[0].line == 3


def test_lyrics_join():
    assert parse("~Willy Wonka!\n~Willy Wonka!\n").blocks == (Lyric("Willy Wonka!\nWilly Wonka!"),)


def test_empty_input():
    for text in ("", "\n\n   \n"):
        doc = parse(text)
        assert doc.is_empty()
        assert [d.kind for d in doc.diagnostics] == [DiagnosticKind.EMPTY_INPUT]


def test_title_page_only():
    doc = parse("Title:\n    Alien\nAuthor:\n    Dan O'Bannon\n\n")
    assert doc.title_page.as_dict() == {"Title": "Alien", "Author": "Dan O'Bannon"}
    assert doc.blocks == ()
    assert doc.diagnostics == ()


def test_parse_is_deterministic():
    text = _read(ALIEN)
    assert parse(text) == parse(text)


def test_source_order_is_preserved():
    doc = parse("INT. MESS\n\nPause.\n\nKANE\nHi.\n\nCUT TO:\n")
    assert [b.kind for b in doc.blocks] == [
        BlockKind.SCENE_HEADING,
        BlockKind.ACTION,
        BlockKind.SPEAKER_TURN,
        BlockKind.TRANSITION,
    ]


def test_non_string_input_is_rejected():
    with pytest.raises(ManuscriptError):
        parse(None)


def test_to_dict():
    doc = parse("Title: Alien\n\nINT. MESS #1#\n\nKANE\n(beat)\nHi.\n")
    d = doc.to_dict()
    assert d["title_page"] == [{"key": "Title", "values": ["Alien"]}]
    assert d["blocks"][0] == {"kind": "scene_heading", "text": "INT. MESS", "scene_number": "1"}
    assert d["blocks"][1]["cue"]["name"] == "KANE"
    assert d["blocks"][1]["lines"] == [
        {"kind": "parenthetical", "text": "(beat)"},
        {"kind": "dialogue", "text": "Hi."},
    ]
    assert d["diagnostics"] == []


def test_document_default_is_empty():
    assert Document().is_empty()


def test_parenthetical_only_turn_is_unterminated():
    doc = parse("KANE\n\n(beat)\n\nHello")
    assert doc.blocks == (
        SpeakerTurn(cue=CharacterCue(name="KANE"), lines=(Parenthetical("(beat)"),)),
        Action("Hello"),
    )
    assert [d.kind for d in doc.diagnostics] == [DiagnosticKind.UNTERMINATED_SPEAKER_RUN]
    assert doc.diagnostics[0].line == 1


def test_forced_action_drops_space_after_marker():
    assert parse("! He fires.").blocks == (Action("He fires."),)
