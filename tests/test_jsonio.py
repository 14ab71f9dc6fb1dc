import json

from screenplay_project.io.jsonio import safe_write_json, safe_write_text


def test_safe_write_json_creates_dirs_and_leaves_no_temp(tmp_path):
    path = tmp_path / "nested" / "doc.json"
    safe_write_json(str(path), {"title": "Alien", "author": "Dan O'Bannon"})

    assert json.loads(path.read_text(encoding="utf-8")) == {"title": "Alien", "author": "Dan O'Bannon"}
    assert not (tmp_path / "nested" / "doc.json.tmp").exists()


def test_safe_write_text_replaces_existing_file(tmp_path):
    path = tmp_path / "mess.html"
    path.write_text("old", encoding="utf-8")
    safe_write_text(str(path), "<h3 class=\"scene-heading\">INT. MESS</h3>")
    assert path.read_text(encoding="utf-8") == "<h3 class=\"scene-heading\">INT. MESS</h3>"
