#!/usr/bin/env python3
"""
Inspect how a manuscript was parsed.

This script is intentionally simple and "human-in-the-loop":
- Print block counts, speaker counts and scene headings.
- Drill into one character's lines (name contains substring).
- Print parse diagnostics.
- Export every speaker turn to CSV (optional).

Use cases:
1) Quick quality check of a new manuscript:
   python scripts/inspect_screenplay.py --file data/raw/alien.fountain --stats

2) Read everything KANE says:
   python scripts/inspect_screenplay.py --file data/raw/alien.fountain --character kane

3) List scene headings:
   python scripts/inspect_screenplay.py --file data/raw/alien.fountain --scenes

4) Export all turns for spreadsheet review:
   python scripts/inspect_screenplay.py --file data/raw/alien.fountain --csv data/processed/turns.csv
"""

from __future__ import annotations

import argparse
import csv
import os
import sys
from collections import Counter
from typing import Any, Dict, List, Optional

from screenplay_project.errors import ManuscriptLoadError
from screenplay_project.io.manuscript import load_manuscript
from screenplay_project.parse.document import BlockKind, Document, SceneHeading
from screenplay_project.parse.parser import parse


def normalize(s: str) -> str:
    """Lowercase + collapse whitespace for loose matching."""
    return " ".join(s.lower().split())


def turn_rows(doc: Document) -> List[Dict[str, Any]]:
    """One row per speaker turn, with the scene it belongs to."""
    rows: List[Dict[str, Any]] = []
    scene = ""
    for b in doc.blocks:
        if isinstance(b, SceneHeading):
            scene = b.text
            continue
        if b.kind is BlockKind.SPEAKER_TURN:
            turns = [(b, False)]
        elif b.kind is BlockKind.DUAL_DIALOGUE:
            turns = [(b.left, True), (b.right, True)]
        else:
            continue
        for turn, dual in turns:
            rows.append(
                {
                    "scene": scene,
                    "character": turn.cue.name,
                    "extension": turn.cue.extension or "",
                    "dual": dual,
                    "text": " / ".join(ln.text.replace("\n", " ") for ln in turn.lines),
                }
            )
    return rows


def print_stats(doc: Document) -> None:
    counts = Counter(b.kind.value for b in doc.blocks)
    speakers = Counter(t.cue.name for t in doc.speaker_turns())
    print(f"Title page: {'yes' if doc.title_page else 'no'}")
    print(f"Blocks: {len(doc.blocks)}")
    for k, v in counts.most_common():
        print(f"  {k}: {v}")
    print(f"Speakers: {len(speakers)}")
    for k, v in speakers.most_common():
        print(f"  {k}: {v}")


def print_character(doc: Document, name_substr: str) -> int:
    wanted = normalize(name_substr)
    shown = 0
    for row in turn_rows(doc):
        if wanted not in normalize(row["character"]):
            continue
        print("=" * 80)
        print(f"{row['character']} {row['extension']}".rstrip() + f"  |  scene={row['scene']}")
        print(f"  {row['text']}")
        shown += 1
    return shown


def export_csv(rows: List[Dict[str, Any]], out_csv: str) -> None:
    """Export speaker turns as CSV."""
    os.makedirs(os.path.dirname(out_csv) or ".", exist_ok=True)
    fieldnames = ["scene", "character", "extension", "dual", "text"]
    with open(out_csv, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        for row in rows:
            w.writerow(row)


def main(argv: Optional[List[str]] = None) -> None:
    ap = argparse.ArgumentParser(description="Inspect the parse of a screenplay manuscript.")
    ap.add_argument("--file", required=True, help="Path to the manuscript (.fountain, .txt, .pdf).")
    ap.add_argument("--stats", action="store_true", help="Print block and speaker counts.")
    ap.add_argument("--scenes", action="store_true", help="Print scene headings in order.")
    ap.add_argument("--character", default=None, help="Print turns whose speaker contains this substring.")
    ap.add_argument("--diagnostics", action="store_true", help="Print parse diagnostics.")
    ap.add_argument("--csv", default=None, help="If set, export all speaker turns to this CSV path.")

    args = ap.parse_args(argv)
    try:
        doc = parse(load_manuscript(args.file))
    except ManuscriptLoadError as exc:
        print(f"[error] {exc}", file=sys.stderr)
        sys.exit(1)

    if args.stats:
        print_stats(doc)

    if args.scenes:
        for i, b in enumerate(x for x in doc.blocks if isinstance(x, SceneHeading)):
            label = f" #{b.scene_number}" if b.scene_number else ""
            print(f"{i:>4}{label}  {b.text}")

    if args.character:
        if print_character(doc, args.character) == 0:
            print("[info] No turns matched your filter.")

    if args.diagnostics:
        for d in doc.diagnostics:
            print(f"[warn] line {d.line}: {d.kind.value}: {d.message}")
        if not doc.diagnostics:
            print("[info] No diagnostics.")

    if args.csv:
        export_csv(turn_rows(doc), args.csv)
        print(f"[ok] wrote CSV: {args.csv}")


if __name__ == "__main__":
    main()
