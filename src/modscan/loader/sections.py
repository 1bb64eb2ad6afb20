"""
Executable section extraction (PE and ELF). Each section is scanned on its own
with the address it is mapped at.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

import pefile
from elftools.common.exceptions import ELFError

from modscan.loader.format_ import LoadError, parse_elf, parse_pe, sniff_format
from modscan.types import CodeSection

logger = logging.getLogger(__name__)

IMAGE_SCN_MEM_EXECUTE = 0x20000000

# ELF
SHF_EXECINSTR = 0x4
PF_X = 1
PT_LOAD = 1


def code_sections_pe(pe: object) -> list[CodeSection]:
    out: list[CodeSection] = []
    image_base = pe.OPTIONAL_HEADER.ImageBase
    for sec in pe.sections:
        if not (sec.Characteristics & IMAGE_SCN_MEM_EXECUTE):
            continue
        name = sec.Name.decode("utf-8", errors="ignore").strip("\x00")
        out.append(CodeSection(name=name, data=bytes(sec.get_data()), base=image_base + sec.VirtualAddress))
    return out


def code_sections_elf(elf: object) -> list[CodeSection]:
    out: list[CodeSection] = []
    for sec in elf.iter_sections():
        if not (sec["sh_flags"] & SHF_EXECINSTR):
            continue
        if sec["sh_type"] == "SHT_NOBITS":
            continue
        out.append(CodeSection(name=sec.name or "", data=bytes(sec.data()), base=sec["sh_addr"]))
    if out:
        return out

    # Stripped section headers: fall back to executable PT_LOAD segments
    for i, seg in enumerate(elf.iter_segments()):
        if seg["p_type"] != "PT_LOAD" and seg["p_type"] != PT_LOAD:
            continue
        if not (seg["p_flags"] & PF_X):
            continue
        out.append(CodeSection(name=f"LOAD[{i}]", data=bytes(seg.data()), base=seg["p_vaddr"]))
    return out


def filter_sections(sections: list[CodeSection], names: Optional[Iterable[str]]) -> list[CodeSection]:
    """Keep sections whose name is in names; no names keeps everything."""
    wanted = set(names or ())
    if not wanted:
        return sections
    return [s for s in sections if s.name in wanted]


def load_code_sections(
    sample_path: Path,
    names: Optional[Iterable[str]] = None,
) -> tuple[str | None, list[CodeSection]]:
    """
    Return (format, executable sections) for a PE or ELF file, or (None, [])
    when the magic is neither. Raises LoadError if the file cannot be read or
    its headers are corrupt; section tables are walked here so lazy parse
    errors surface as LoadError too.
    """
    try:
        image = sample_path.read_bytes()
    except OSError as e:
        raise LoadError(f"Cannot read {sample_path}: {e}") from e

    fmt = sniff_format(image[:4])
    if fmt == "pe":
        pe = parse_pe(image)
        try:
            sections = code_sections_pe(pe)
        except pefile.PEFormatError as e:
            raise LoadError(f"PE section table: {e}") from e
    elif fmt == "elf":
        elf = parse_elf(image)
        try:
            sections = code_sections_elf(elf)
        except ELFError as e:
            raise LoadError(f"ELF section table: {e}") from e
    else:
        return None, []

    logger.debug("%s: %s, %d executable section(s)", sample_path, fmt, len(sections))
    return fmt, filter_sections(sections, names)
