"""
x86: `lea reg, ds:abs32` of the module data, followed within a short distance by
the loop that walks the module list. The loop is what tells this lea apart from
the many unrelated ones.
"""
from __future__ import annotations

import struct

from modscan.patterns import pattern_size
from modscan.resolvers.base import BaseResolver
from modscan.scanner import find_pattern
from modscan.signatures import X86_SIGNATURE, Arch, X86Signature
from modscan.types import SignatureMatch


class X86Resolver(BaseResolver):
    def __init__(self, signature: X86Signature = X86_SIGNATURE):
        self._signature = signature

    @property
    def arch(self) -> Arch:
        return Arch.X86

    @property
    def signature(self) -> X86Signature:
        return self._signature

    def resolve(self, data: bytes, section_base: int) -> list[SignatureMatch]:
        # section_base is not applied: the lea operand is already an absolute VA
        sig = self._signature
        # Nested scan stops where a loop match would start at loop_max_distance
        window = sig.loop_max_distance - 1 + pattern_size(sig.loop_pattern)

        def on_match(offset: int) -> list[SignatureMatch]:
            def on_loop(loop_offset: int) -> list[SignatureMatch]:
                # guard: the window already keeps loop_offset below the bound
                if loop_offset >= sig.loop_max_distance:
                    return []
                (ptr,) = struct.unpack_from("<I", data, offset + sig.ptr_loc)
                return [SignatureMatch(module_data_va=ptr, arch=self.arch, offset=offset)]

            return find_pattern(data, sig.loop_pattern, on_loop, start=offset, end=offset + window)

        return find_pattern(data, sig.pattern, on_match)
