"""
x86-64: `lea reg, [rip+rel32]` of the module data.
"""
from __future__ import annotations

import struct

from modscan.resolvers.base import U64_MASK, BaseResolver
from modscan.scanner import find_pattern
from modscan.signatures import X64_SIGNATURE, Arch, X64Signature
from modscan.types import SignatureMatch


class X64Resolver(BaseResolver):
    def __init__(self, signature: X64Signature = X64_SIGNATURE):
        self._signature = signature

    @property
    def arch(self) -> Arch:
        return Arch.X64

    @property
    def signature(self) -> X64Signature:
        return self._signature

    def resolve(self, data: bytes, section_base: int) -> list[SignatureMatch]:
        sig = self._signature

        def on_match(offset: int) -> list[SignatureMatch]:
            # rel32 counts from the next instruction: section_base + offset + next_ip_loc
            # rel32 is signed; reading it unsigned would misplace targets below the lea
            (disp,) = struct.unpack_from("<i", data, offset + sig.ptr_loc)
            next_ip = offset + sig.next_ip_loc
            va = (disp + next_ip + section_base) & U64_MASK
            return [SignatureMatch(module_data_va=va, arch=self.arch, offset=offset)]

        return find_pattern(data, sig.pattern, on_match)
