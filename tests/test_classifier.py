from screenplay_project.parse.classifier import can_carry_dialogue, classify_blocks
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
from screenplay_project.text.blocks import RawBlock, split_blocks
from screenplay_project.text.cleaners import normalize_lines


def _elements(text):
    return [cl.element for cl in classify_blocks(split_blocks(normalize_lines(text)))]


def test_cue_parenthetical_dialogue():
    assert _elements("KANE\n(stands up)\nOoooooh.\n") == [
        CharacterCue(name="KANE"),
        Parenthetical("(stands up)"),
        Dialogue("Ooooooh."),
    ]


def test_line_numbers_and_block_index():
    lines = classify_blocks(split_blocks(normalize_lines("INT. MESS\n\nKANE\nHello.\n")))
    assert [(cl.line_no, cl.block_idx) for cl in lines] == [(1, 0), (3, 1), (4, 1)]


def test_bare_cue_owns_next_block():
    assert _elements("KANE\n\nFirst thing I'm going to do.\n\nPause.\n") == [
        CharacterCue(name="KANE"),
        Dialogue("First thing I'm going to do."),
        Action("Pause."),
    ]


def test_bare_uppercase_line_without_dialogue_is_action():
    assert _elements("Pause.\n\nTHE END\n") == [Action("Pause."), Action("THE END")]
    assert _elements("BOOM\n\nINT. MESS\n") == [Action("BOOM"), SceneHeading("INT. MESS")]


def test_dialogue_run_ends_at_blank_line():
    assert _elements("KANE\nHello.\n\nKane sits.\n") == [
        CharacterCue(name="KANE"),
        Dialogue("Hello."),
        Action("Kane sits."),
    ]


def test_heading_transition_and_structure():
    text = "# Act One\n\n= The crew wakes.\n\nINT. MESS #1#\n\nCUT TO:\n\n===\n\n> THE END <\n"
    assert _elements(text) == [
        Section(text="Act One", level=1),
        Synopsis("The crew wakes."),
        SceneHeading(text="INT. MESS", scene_number="1"),
        Transition("CUT TO:"),
        PageBreak(),
        Centered("THE END"),
    ]


def test_heading_block_remainder_is_action():
    assert _elements("INT. MESS\nThe crew eats.\n") == [SceneHeading("INT. MESS"), Action("The crew eats.")]


def test_forced_elements():
    text = "!SCANNING THE AREA\n\n.SNIPER SCOPE POV\n\n> Burn to white.\n\n~Willy Wonka!\n~Willy Wonka!\n"
    assert _elements(text) == [
        Action("SCANNING THE AREA"),
        SceneHeading("SNIPER SCOPE POV"),
        Transition("Burn to white."),
        Lyric("Willy Wonka!"),
        Lyric("Willy Wonka!"),
    ]


def test_forced_cue_and_forced_action_inside_run():
    assert _elements("@McCLANE\nYippee ki-yay.\n!He fires.\n") == [
        CharacterCue(name="McCLANE", forced=True),
        Dialogue("Yippee ki-yay."),
        Action("He fires."),
    ]


def test_forced_cue_mid_block_starts_new_run():
    assert _elements("The door opens.\n@bob\nHi.\n") == [
        Action("The door opens."),
        CharacterCue(name="bob", forced=True),
        Dialogue("Hi."),
    ]


def test_dual_marker_on_cue():
    els = _elements("BRICK\nScrew retirement.\n\nSTEEL ^\nScrew retirement.\n")
    assert els[2] == CharacterCue(name="STEEL", dual=True)


def test_can_carry_dialogue():
    assert can_carry_dialogue(RawBlock(lines=("Hello.",), line_no=1))
    assert can_carry_dialogue(RawBlock(lines=("NO!",), line_no=1))
    assert not can_carry_dialogue(None)
    assert not can_carry_dialogue(RawBlock(lines=("INT. MESS",), line_no=1))
    assert not can_carry_dialogue(RawBlock(lines=("CUT TO:",), line_no=1))
    assert not can_carry_dialogue(RawBlock(lines=("PARKER", "Hi."), line_no=1))
    assert not can_carry_dialogue(RawBlock(lines=("!Action.",), line_no=1))


def test_classification_is_deterministic():
    text = "KANE\nHello.\n\nPause.\n"
    assert _elements(text) == _elements(text)
