"""
Shared data types for the module-data scan.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from modscan.signatures import ALL_ARCHS, Arch


@dataclass(frozen=True)
class SignatureMatch:
    """Single resolved module-data reference."""
    module_data_va: int  # unsigned 64-bit; absolute VA or pointer as encoded, see resolvers
    arch: Arch
    offset: int  # start of the matched idiom in the scanned buffer


@dataclass
class CodeSection:
    """Executable region of a binary and the address it is mapped at."""
    name: str
    data: bytes
    base: int

    @property
    def end(self) -> int:
        return self.base + len(self.data)


@dataclass
class ScanOptions:
    """Options for scanning a sample."""
    archs: tuple[Arch, ...] = ALL_ARCHS
    section_names: tuple[str, ...] = ()  # empty: every executable section
    raw: bool = False  # treat the whole file as one code section
    raw_base: int = 0


@dataclass
class ScanReport:
    """Result of scanning one sample."""
    sample_path: Path
    format: Optional[str] = None
    sections: list[CodeSection] = field(default_factory=list)
    matches: list[SignatureMatch] = field(default_factory=list)
    match_sections: list[str] = field(default_factory=list)  # parallel to matches
    log: list[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def found(self) -> bool:
        return bool(self.matches)

    @property
    def module_data_vas(self) -> list[int]:
        """Resolved values without duplicates, in first-seen order."""
        seen: dict[int, None] = {}
        for m in self.matches:
            seen.setdefault(m.module_data_va, None)
        return list(seen)
