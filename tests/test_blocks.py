from screenplay_project.text.blocks import RawBlock, split_blocks
from screenplay_project.text.cleaners import clean_layout_lines, normalize_lines


def test_normalize_lines_handles_every_line_ending():
    assert normalize_lines("a\r\nb\rc\nd") == ["a", "b", "c", "d"]


def test_normalize_lines_strips_trailing_but_keeps_leading_whitespace():
    assert normalize_lines("Title:  \n    Alien   \n") == ["Title:", "    Alien"]


def test_normalize_lines_empty_input():
    assert normalize_lines("") == []


def test_normalize_lines_drops_bom():
    assert normalize_lines("\ufeffINT. MESS") == ["INT. MESS"]


def test_split_blocks_groups_on_blank_runs():
    lines = ["INT. MESS", "", "", "KANE", "Hello.", "   ", "Pause."]
    blocks = split_blocks(lines)
    assert blocks == [
        RawBlock(lines=("INT. MESS",), line_no=1),
        RawBlock(lines=("KANE", "Hello."), line_no=4),
        RawBlock(lines=("Pause.",), line_no=7),
    ]


def test_split_blocks_no_content():
    assert split_blocks([]) == []
    assert split_blocks(["", "  ", ""]) == []


def test_raw_block_helpers():
    b = RawBlock(lines=("KANE", "Hello."), line_no=3)
    assert b.first == "KANE"
    assert not b.is_single_line()


def test_clean_layout_lines_drops_pagination_noise():
    lines = ["KANE", "I'm fine.", "(MORE)", "", "12.", "(CONTINUED)", "CONTINUED:", "PAGE 3", "Pause."]
    assert clean_layout_lines(lines) == ["KANE", "I'm fine.", "", "Pause."]
