"""
Format sniffing and PE/ELF parsing from an in-memory image.

Parse failures raise LoadError with the parser's reason so the caller can report
why a sample was skipped.
"""
from __future__ import annotations

import io

import pefile
from elftools.common.exceptions import ELFError
from elftools.elf.elffile import ELFFile

MAGICS: tuple[tuple[bytes, str], ...] = (
    (b"MZ", "pe"),
    (b"\x7fELF", "elf"),
)


class LoadError(Exception):
    """Sample is unreadable or does not parse as the format its magic claims."""


def sniff_format(head: bytes) -> str | None:
    """'pe' or 'elf' from the leading bytes of an image, None for anything else."""
    for magic, fmt in MAGICS:
        if head.startswith(magic):
            return fmt
    return None


def parse_pe(image: bytes) -> pefile.PE:
    try:
        return pefile.PE(data=image, fast_load=True)
    except pefile.PEFormatError as e:
        raise LoadError(f"PE parse failed: {e}") from e


def parse_elf(image: bytes) -> ELFFile:
    # ELFFile only reads the file header here; sections are parsed on access
    try:
        return ELFFile(io.BytesIO(image))
    except ELFError as e:
        raise LoadError(f"ELF parse failed: {e}") from e
