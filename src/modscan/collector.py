"""
Match collector: runs every enabled architecture resolver over the same buffer
and concatenates the results.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from modscan.resolvers import iter_resolvers
from modscan.signatures import ALL_ARCHS, Arch
from modscan.types import SignatureMatch

logger = logging.getLogger(__name__)


def find_moduledata(
    data: bytes,
    section_base: int,
    archs: Optional[Iterable[Arch]] = None,
) -> list[SignatureMatch]:
    """
    Scan data (mapped at section_base) with each architecture signature, in
    x64, x86, ppc-be order. Results are not deduplicated across architectures.
    """
    matches: list[SignatureMatch] = []
    for resolver in iter_resolvers(ALL_ARCHS if archs is None else archs):
        found = resolver.resolve(data, section_base)
        logger.debug("%s: %d match(es) in %d bytes at %#x", resolver.name, len(found), len(data), section_base)
        matches.extend(found)
    return matches


class ModuleDataCollector:
    """Runs the enabled architecture scans over a code buffer."""

    def __init__(
        self,
        use_x64: bool = True,
        use_x86: bool = True,
        use_ppc_be: bool = True,
    ):
        enabled = {Arch.X64: use_x64, Arch.X86: use_x86, Arch.PPC_BE: use_ppc_be}
        self.archs: tuple[Arch, ...] = tuple(a for a in ALL_ARCHS if enabled[a])

    @classmethod
    def for_archs(cls, archs: Iterable[Arch]) -> ModuleDataCollector:
        wanted = set(archs)
        return cls(
            use_x64=Arch.X64 in wanted,
            use_x86=Arch.X86 in wanted,
            use_ppc_be=Arch.PPC_BE in wanted,
        )

    def collect(self, data: bytes, section_base: int) -> list[SignatureMatch]:
        return find_moduledata(data, section_base, self.archs)
