#!/usr/bin/env python3
"""
Sanity checks for a folder of sample blueprints.

What it checks per blueprint file:
- the parser produces a config that passes validate_config().
- how many lines were dropped (no section yet, or not matching the section's line shapes).
- whether variables came from a Variables section or from formula-symbol inference.

Usage:
  python tools/check_blueprints.py samples/ [more/*.txt ...]
  python tools/check_blueprints.py samples/ --summary-json out/summary.json
"""
from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from stemplay.classifiers import LineKind
from stemplay.errors import BlueprintInputError
from stemplay.io_utils import ensure_dir, read_text, write_json
from stemplay.parser import parse_blueprint_with_trace
from stemplay.schema_validate import validate_config


@dataclass
class BlueprintResult:
    path: Path
    errors: List[str] = field(default_factory=list)
    dropped: List[int] = field(default_factory=list)
    inferred_variables: bool = False
    synthesized_object: bool = False
    counts: Dict[str, int] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


def _iter_blueprints(path: Path) -> List[Path]:
    if path.is_dir():
        return sorted(p for p in path.rglob("*.txt") if p.is_file())
    if path.is_file():
        return [path]
    return []


def check_blueprint(path: Path) -> BlueprintResult:
    res = BlueprintResult(path=path)
    try:
        text = read_text(path)
    except BlueprintInputError as e:
        res.errors.append(str(e))
        return res

    cfg, trace = parse_blueprint_with_trace(text)
    ok, errors, _ = validate_config(cfg.to_dict())
    if not ok:
        res.errors.extend(errors)
    res.dropped = [rec.line_no for rec in trace if rec.kind is LineKind.DROPPED]
    explicit_vars = any(rec.kind is LineKind.VARIABLE for rec in trace)
    res.inferred_variables = bool(cfg.variables) and not explicit_vars
    res.synthesized_object = not any(rec.kind is LineKind.OBJECT for rec in trace)
    res.counts = {
        "objects": len(cfg.objects),
        "variables": len(cfg.variables),
        "events": len(cfg.timeline),
        "timed_events": sum(1 for e in cfg.timeline if e.time is not None),
    }
    return res


def _print_result(res: BlueprintResult) -> None:
    counts = ", ".join(f"{k}={v}" for k, v in res.counts.items())
    if not res.ok:
        print(f"[FAIL] {res.path.name}: " + "; ".join(res.errors))
        return
    notes = []
    if res.dropped:
        notes.append(f"dropped lines {res.dropped}")
    if res.inferred_variables:
        notes.append("variables inferred")
    if res.synthesized_object:
        notes.append("default object")
    tag = "[WARN]" if notes else "[OK]"
    print(f"{tag} {res.path.name}: {counts}" + (f" ({'; '.join(notes)})" if notes else ""))


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="STEMPlay blueprint sample checks")
    ap.add_argument("paths", nargs="+", type=Path, help="Blueprint .txt files or folders of them")
    ap.add_argument("--summary-json", type=Path, default=None, help="Also write per-file results as JSON")
    args = ap.parse_args(argv)

    files: List[Path] = []
    for p in args.paths:
        found = _iter_blueprints(p)
        if not found:
            print(f"[WARN] {p}: no .txt blueprints found")
        files.extend(found)
    if not files:
        print("No blueprints to check.")
        return 1

    results = [check_blueprint(f) for f in files]
    for res in results:
        _print_result(res)

    failed = sum(1 for r in results if not r.ok)
    print(f"\nChecked {len(results)} blueprints, {failed} failed validation.")

    if args.summary_json is not None:
        ensure_dir(args.summary_json.parent)
        rows: List[Dict[str, Any]] = [
            {
                "file": str(r.path),
                "ok": r.ok,
                "errors": r.errors,
                "dropped": r.dropped,
                "inferred_variables": r.inferred_variables,
                "synthesized_object": r.synthesized_object,
                **r.counts,
            }
            for r in results
        ]
        write_json(args.summary_json, rows)
        print(f"[OK] Wrote {args.summary_json}")
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
