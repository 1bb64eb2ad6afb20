"""
Base interface for per-architecture module-data resolvers.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from modscan.signatures import Arch, Signature
from modscan.types import SignatureMatch

U64_MASK = (1 << 64) - 1


class BaseResolver(ABC):
    """Scans a code buffer for one architecture's signature and resolves each hit."""

    @property
    @abstractmethod
    def arch(self) -> Arch:
        ...

    @property
    @abstractmethod
    def signature(self) -> Signature:
        ...

    @property
    def name(self) -> str:
        """Arch name for logging (e.g. 'x64')."""
        return self.arch.value

    @abstractmethod
    def resolve(self, data: bytes, section_base: int) -> list[SignatureMatch]:
        """Return every resolved module-data reference in data, in offset order."""
        ...
