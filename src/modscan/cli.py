#!/usr/bin/env python3
"""CLI: find the module-data reference in a binary (load -> scan -> report)."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from modscan.orchestrator import run as orchestrator_run
from modscan.signatures import ALL_ARCHS, Arch
from modscan.types import ScanOptions, ScanReport


def _int_auto(text: str) -> int:
    return int(text, 0)


def _report_json(report: ScanReport) -> str:
    return json.dumps(
        {
            "sample": str(report.sample_path),
            "format": report.format,
            "sections": [
                {"name": s.name, "base": s.base, "size": len(s.data)} for s in report.sections
            ],
            "matches": [
                {
                    "arch": m.arch.value,
                    "section": sec,
                    "offset": m.offset,
                    "module_data_va": m.module_data_va,
                }
                for m, sec in zip(report.matches, report.match_sections)
            ],
            "error": report.error,
        },
        indent=2,
    )


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="modscan: locate the runtime module data pointer in code sections")
    p.add_argument("sample", type=Path, help="Path to PE/ELF binary (or raw code blob with --raw)")
    p.add_argument(
        "--arch",
        dest="archs",
        action="append",
        choices=[a.value for a in ALL_ARCHS],
        help="Architecture signature to scan for (repeatable; default: all)",
    )
    p.add_argument("--section", dest="sections", action="append", default=[], help="Only scan this section (repeatable)")
    p.add_argument("--raw", action="store_true", help="Treat the file as a single raw code section")
    p.add_argument("--base", type=_int_auto, default=None, help="Load address of the raw section (requires --raw; default 0)")
    p.add_argument("--json", action="store_true", help="Print a JSON report")
    p.add_argument("-v", "--verbose", action="store_true", help="Print scan log")
    p.add_argument("--debug", action="store_true", help="Enable debug logging to stderr")
    args = p.parse_args(argv)
    if args.base is not None and not args.raw:
        p.error("--base requires --raw")

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    options = ScanOptions(
        archs=tuple(Arch(a) for a in args.archs) if args.archs else ALL_ARCHS,
        section_names=tuple(args.sections),
        raw=args.raw,
        raw_base=args.base or 0,
    )
    report = orchestrator_run(args.sample, options)

    if args.json:
        print(_report_json(report))
    else:
        if args.verbose:
            for line in report.log:
                print(line)
        for m, sec in zip(report.matches, report.match_sections):
            print(f"{m.arch.value:<7} {sec:<12} +{m.offset:#010x}  moduledata={m.module_data_va:#x}")
        if not report.error and not report.found:
            print("No module data reference found")
    if report.error:
        print(f"Error: {report.error}", file=sys.stderr)

    return 0 if report.error is None and report.found else 1


if __name__ == "__main__":
    raise SystemExit(main())
