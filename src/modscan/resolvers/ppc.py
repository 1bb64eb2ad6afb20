"""
PowerPC big-endian: `lis rN, hi` + `addi rN, rN, lo` materializing the module data address.
"""
from __future__ import annotations

import struct

from modscan.resolvers.base import U64_MASK, BaseResolver
from modscan.scanner import find_pattern
from modscan.signatures import PPC_BE_SIGNATURE, Arch, PPCSignature
from modscan.types import SignatureMatch


class PPCBigEndianResolver(BaseResolver):
    def __init__(self, signature: PPCSignature = PPC_BE_SIGNATURE):
        self._signature = signature

    @property
    def arch(self) -> Arch:
        return Arch.PPC_BE

    @property
    def signature(self) -> PPCSignature:
        return self._signature

    def resolve(self, data: bytes, section_base: int) -> list[SignatureMatch]:
        # section_base is not applied: lis/addi build an absolute address
        sig = self._signature

        def on_match(offset: int) -> list[SignatureMatch]:
            (hi,) = struct.unpack_from(">H", data, offset + sig.ptr_hi_loc)
            # addi takes a signed immediate
            (lo,) = struct.unpack_from(">h", data, offset + sig.ptr_lo_loc)
            va = ((hi << 16) + lo) & U64_MASK
            return [SignatureMatch(module_data_va=va, arch=self.arch, offset=offset)]

        return find_pattern(data, sig.pattern, on_match)
