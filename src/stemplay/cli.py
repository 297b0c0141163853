"""
Parse a blueprint text into a simulation config.

Usage:
  stemplay-parse blueprint.txt                  # JSON config to stdout
  stemplay-parse blueprint.txt --format yaml --out cfg.yaml
  cat blueprint.txt | stemplay-parse - --trace  # also print line-by-line trace
  stemplay-parse notes.txt --formulas           # list catalog formulas found

Exit codes: 0 ok, 1 config failed validation, 2 bad input or settings.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .errors import StemplayError
from .formulas import detect_formulas
from .io_utils import FORMATS, dump_config, ensure_dir, read_text, write_json, write_yaml
from .logging_config import setup_logging
from .parser import parse_blueprint_with_trace, summarize_trace
from .schema_validate import validate_config
from .settings import load_settings


def _print_trace(trace) -> None:
    for rec in trace:
        section = rec.section.value if rec.section else "-"
        print(f"  {rec.line_no:>4}  {section:<9} {rec.kind.value:<10} {rec.text}", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Turn a physics blueprint into a simulation config")
    ap.add_argument("blueprint", help="Blueprint text file, or '-' for stdin")
    ap.add_argument("--title", default=None, help="Scene title used when the blueprint has none")
    ap.add_argument("--format", choices=FORMATS, default="json")
    ap.add_argument("--out", type=Path, default=None, help="Write the config here instead of stdout")
    ap.add_argument("--trace", action="store_true", help="Print how each line was classified")
    ap.add_argument("--validate", action="store_true", help="Validate the config and report problems")
    ap.add_argument("--formulas", action="store_true", help="List known formulas found in the text")
    ap.add_argument("--settings", type=Path, default=None, help="Settings YAML (default: ./stemplay.yaml if present)")
    ap.add_argument("--log-level", default=None)
    args = ap.parse_args(argv)

    try:
        settings = load_settings(args.settings)
        setup_logging(args.log_level or settings.log_level, settings.log_file)
        text = read_text(args.blueprint, max_chars=settings.max_blueprint_chars)
    except StemplayError as e:
        print(f"[ERR] {e}", file=sys.stderr)
        return 2

    cfg, trace = parse_blueprint_with_trace(text, args.title or settings.default_scene_title)
    data = cfg.to_dict()

    if args.trace:
        summary = summarize_trace(trace)
        print(f"[INFO] {summary['lines']} lines: {summary['kinds']}", file=sys.stderr)
        _print_trace(trace)

    if args.formulas:
        for match in detect_formulas(text, with_default=False):
            print(f"[INFO] formula {match.formula}: {match.description}", file=sys.stderr)

    if args.out is not None:
        ensure_dir(args.out.parent)
        if args.format == "yaml":
            write_yaml(args.out, data)
        else:
            write_json(args.out, data)
        print(f"[OK] Wrote {args.out}", file=sys.stderr)
    else:
        sys.stdout.write(dump_config(data, args.format))

    if args.validate:
        ok, errors, _ = validate_config(data)
        if not ok:
            for msg in errors:
                print(f"[WARN] {msg}", file=sys.stderr)
            return 1
        print("[OK] config is valid", file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
