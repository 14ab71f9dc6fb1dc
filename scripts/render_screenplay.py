#!/usr/bin/env python
import argparse
import os
import sys

from screenplay_project.errors import ManuscriptLoadError
from screenplay_project.io.manuscript import load_manuscript
from screenplay_project.pipeline.convert import convert_many, render_manuscript


def main() -> None:
    """
    Command-line entry point for manuscript-to-HTML conversion.

    This script is intentionally thin: all the real work happens in
    screenplay_project.pipeline.convert.
    """
    ap = argparse.ArgumentParser(description="Render plain-text screenplays to HTML.")
    ap.add_argument("inputs", nargs="+", help="Manuscript files (.fountain, .txt, .pdf) or directories.")
    ap.add_argument(
        "--out_dir",
        default=os.environ.get("SCREENPLAY_OUT_DIR", "data/rendered"),
        help="Directory for the rendered HTML files.",
    )
    ap.add_argument(
        "--fragment",
        action="store_true",
        help="Write bare HTML fragments instead of complete pages.",
    )
    ap.add_argument(
        "--dump_json",
        action="store_true",
        help="Also write the parsed document tree as <name>.json.",
    )
    ap.add_argument(
        "--summary_path",
        default=None,
        help="Optional path for a JSON summary of the run.",
    )
    ap.add_argument(
        "--print",
        dest="print_html",
        action="store_true",
        help="Render a single manuscript to stdout instead of writing files.",
    )
    ap.add_argument("--no_progress", action="store_true", help="Hide the progress bar.")

    args = ap.parse_args()

    if args.print_html:
        if len(args.inputs) != 1:
            ap.error("--print takes exactly one input file")
        try:
            text = load_manuscript(args.inputs[0])
        except ManuscriptLoadError as exc:
            print(f"[error] {exc}", file=sys.stderr)
            sys.exit(1)
        print(render_manuscript(text, standalone=not args.fragment))
        return

    summary = convert_many(
        inputs=args.inputs,
        out_dir=args.out_dir,
        standalone=not args.fragment,
        dump_json=args.dump_json,
        summary_path=args.summary_path,
        show_progress=not args.no_progress,
    )
    if summary["files_skipped"]:
        sys.exit(1)


if __name__ == "__main__":
    main()
