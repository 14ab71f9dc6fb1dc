"""
convert.py

This module implements manuscript-to-HTML conversion, for one string and for
batches of files.

Overview
--------
render_manuscript() is the single entry point of the core:

    manuscript text -> parse() -> Document -> render_html() -> markup

It is pure and raises only ManuscriptError, when it is handed something that
is not a string.

convert_many() is the batch driver used by scripts/render_screenplay.py:

1) Collect input files (directories are expanded to manuscript files).
2) Load each manuscript (plain text, or PDF through pdfplumber).
3) Parse and render it; write <stem>.html, and optionally <stem>.json with the
   document tree.
4) Report parse diagnostics as warnings and return a summary dict, also
   written to disk when summary_path is given.

A file that cannot be loaded is reported and skipped; the batch continues.
"""
from __future__ import annotations

import os
import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import pdfplumber
from tqdm import tqdm

from screenplay_project.errors import ManuscriptError, ManuscriptLoadError
from screenplay_project.io.jsonio import safe_write_json, safe_write_text
from screenplay_project.io.manuscript import TEXT_SUFFIXES, load_manuscript
from screenplay_project.parse.document import Document
from screenplay_project.parse.parser import parse
from screenplay_project.render.html import render_html


def render_manuscript(text: str, *, standalone: bool = False) -> str:
    """
    Parse a manuscript and render it to HTML.

    Args:
        text: Full manuscript text.
        standalone: Return a complete HTML page instead of a fragment.

    Raises:
        ManuscriptError: text is not a string.
    """
    if text is None:
        raise ManuscriptError("manuscript is missing")
    return render_html(parse(text), standalone=standalone)


@dataclass
class ConversionResult:
    """
    Outcome for one input file.

    Fields:
        source: Input path.
        html_path: Written HTML path, None when the file was skipped.
        json_path: Written document dump, if requested.
        block_counts: Top-level block kinds and how often they occur.
        speaker_turns: Number of speaker turns, dual groups counted per side.
        diagnostics: Parse diagnostics as dicts.
        error: Load error message when the file was skipped.
    """
    source: str
    html_path: Optional[str] = None
    json_path: Optional[str] = None
    block_counts: Dict[str, int] = field(default_factory=dict)
    speaker_turns: int = 0
    diagnostics: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "html_path": self.html_path,
            "json_path": self.json_path,
            "block_counts": dict(self.block_counts),
            "speaker_turns": self.speaker_turns,
            "diagnostics": list(self.diagnostics),
            "error": self.error,
        }


def collect_inputs(paths: List[str]) -> List[str]:
    """Expand directories to the manuscript files they contain, sorted."""
    out: List[str] = []
    for p in paths:
        if os.path.isdir(p):
            found = []
            for root, _dirs, files in os.walk(p):
                for name in files:
                    low = name.lower()
                    if low.endswith(TEXT_SUFFIXES) or low.endswith(".pdf"):
                        found.append(os.path.join(root, name))
            out.extend(sorted(found))
        else:
            out.append(p)
    return out


def _output_stem(path: str) -> str:
    return os.path.splitext(os.path.basename(path))[0]


def summarize_document(doc: Document) -> Dict[str, Any]:
    counts = Counter(b.kind.value for b in doc.blocks)
    return {
        "block_counts": dict(sorted(counts.items())),
        "speaker_turns": len(doc.speaker_turns()),
    }


def convert_file(
    path: str,
    out_dir: str,
    *,
    standalone: bool = True,
    dump_json: bool = False,
    pdf_open: Callable[..., Any] = pdfplumber.open,
) -> ConversionResult:
    """
    Convert one manuscript file.

    Raises:
        ManuscriptLoadError: the file could not be read.
    """
    text = load_manuscript(path, pdf_open=pdf_open)
    doc = parse(text)

    stem = _output_stem(path)
    html_path = os.path.join(out_dir, f"{stem}.html")
    safe_write_text(html_path, render_html(doc, standalone=standalone))

    json_path = None
    if dump_json:
        json_path = os.path.join(out_dir, f"{stem}.json")
        safe_write_json(json_path, {"source": path, "document": doc.to_dict()})

    summary = summarize_document(doc)
    return ConversionResult(
        source=path,
        html_path=html_path,
        json_path=json_path,
        block_counts=summary["block_counts"],
        speaker_turns=summary["speaker_turns"],
        diagnostics=[d.to_dict() for d in doc.diagnostics],
    )


def convert_many(
    *,
    inputs: List[str],
    out_dir: str,
    standalone: bool = True,
    dump_json: bool = False,
    summary_path: Optional[str] = None,
    pdf_open: Callable[..., Any] = pdfplumber.open,
    show_progress: bool = True,
) -> Dict[str, Any]:
    """
    Batch conversion of manuscript files to HTML.

    Args:
        inputs: Files and/or directories to convert.
        out_dir: Directory receiving <stem>.html (and <stem>.json).
        standalone: Write complete HTML pages rather than fragments.
        dump_json: Also write the parsed document tree as JSON.
        summary_path: Optional path for the run summary JSON.
        pdf_open: PDF opener, pdfplumber.open by default.
        show_progress: Show a tqdm progress bar.

    Returns:
        A dict with per-file results and run totals.
    """
    t0 = time.time()
    print("[phase] collect inputs...", flush=True)
    files = collect_inputs(inputs)
    if not files:
        print("[warn] no manuscript files found", flush=True)

    print("[phase] parse + render...", flush=True)
    results: List[ConversionResult] = []
    for path in tqdm(files, desc="render", disable=not show_progress):
        try:
            res = convert_file(
                path,
                out_dir,
                standalone=standalone,
                dump_json=dump_json,
                pdf_open=pdf_open,
            )
        except ManuscriptLoadError as exc:
            print(f"[warn] skipping {exc.path}: {exc.reason}", flush=True)
            results.append(ConversionResult(source=path, error=exc.reason))
            continue

        for d in res.diagnostics:
            print(f"[warn] {path}:{d['line']}: {d['kind']}: {d['message']}", flush=True)
        results.append(res)

    converted = sum(1 for r in results if r.error is None)
    summary = {
        "out_dir": out_dir,
        "files_total": len(files),
        "files_converted": converted,
        "files_skipped": len(files) - converted,
        "elapsed_sec": round(time.time() - t0, 3),
        "results": [r.to_dict() for r in results],
    }

    if summary_path:
        safe_write_json(summary_path, summary)

    print(f"[ok] converted={converted}/{len(files)} -> {out_dir}", flush=True)
    return summary
