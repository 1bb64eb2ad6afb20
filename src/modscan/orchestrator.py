"""
Orchestrator: load code sections -> scan each for the module-data idiom -> report.
"""
from __future__ import annotations

import logging
from pathlib import Path

from modscan.collector import find_moduledata
from modscan.loader import LoadError, load_code_sections
from modscan.types import CodeSection, ScanOptions, ScanReport

logger = logging.getLogger(__name__)


def _raw_section(sample_path: Path, base: int) -> CodeSection:
    return CodeSection(name="raw", data=sample_path.read_bytes(), base=base)


def run(sample_path: Path, options: ScanOptions | None = None) -> ScanReport:
    """
    Full pipeline for one sample. Failures are recorded in report.error rather
    than raised.
    """
    options = options or ScanOptions()
    report = ScanReport(sample_path=sample_path)

    if not sample_path.is_file():
        report.error = f"File not found: {sample_path}"
        return report

    try:
        if options.raw:
            report.format = "raw"
            report.sections = [_raw_section(sample_path, options.raw_base)]
        else:
            fmt, sections = load_code_sections(sample_path, options.section_names)
            report.format = fmt
            report.sections = sections
    except OSError as e:
        report.error = f"Cannot read {sample_path}: {e}"
        return report
    except LoadError as e:
        report.error = str(e)
        return report

    if report.format is None:
        report.error = f"Unsupported format (not PE or ELF): {sample_path}"
        return report
    report.log.append(f"format: {report.format}")

    if not report.sections:
        report.error = "No executable sections to scan"
        return report

    archs = ", ".join(a.value for a in options.archs)
    for section in report.sections:
        report.log.append(
            f"scanning {section.name or '<unnamed>'} [{section.base:#x}-{section.end:#x}) for {archs}"
        )
        found = find_moduledata(section.data, section.base, options.archs)
        for m in found:
            report.log.append(f"  {m.arch.value} match at +{m.offset:#x} -> {m.module_data_va:#x}")
        report.matches.extend(found)
        report.match_sections.extend(section.name for _ in found)

    logger.debug("%s: %d match(es) in %d section(s)", sample_path, len(report.matches), len(report.sections))
    return report
