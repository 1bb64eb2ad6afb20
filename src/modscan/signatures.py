"""
Static signatures for the module-data load in the runtime's module init routine,
one per supported instruction set. Patterns use '?' as a nibble wildcard.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from modscan.patterns import PatternError, pattern_size, validate_pattern


class Arch(str, Enum):
    X64 = "x64"
    X86 = "x86"
    PPC_BE = "ppc-be"


# Scan order used by the collector
ALL_ARCHS: tuple[Arch, ...] = (Arch.X64, Arch.X86, Arch.PPC_BE)


def _check_operand(pattern: str, loc: int, width: int) -> None:
    if loc < 0 or loc + width > pattern_size(pattern):
        raise PatternError(f"operand at {loc}+{width} outside pattern {pattern!r}")


@dataclass(frozen=True)
class X64Signature:
    """RIP-relative lea of the module data."""
    ptr_loc: int  # offset of the rel32 displacement inside the match
    next_ip_loc: int  # offset of the instruction after the lea; rel32 is relative to it
    pattern: str

    def __post_init__(self) -> None:
        validate_pattern(self.pattern)
        _check_operand(self.pattern, self.ptr_loc, 4)
        _check_operand(self.pattern, 0, self.next_ip_loc)


@dataclass(frozen=True)
class X86Signature:
    """Absolute lea of the module data, confirmed by the module list loop shortly after."""
    ptr_loc: int  # offset of the absolute 32-bit pointer inside the match
    pattern: str
    loop_max_distance: int  # loop match must start before this many bytes from the lea
    loop_pattern: str

    def __post_init__(self) -> None:
        validate_pattern(self.pattern)
        validate_pattern(self.loop_pattern)
        _check_operand(self.pattern, self.ptr_loc, 4)


@dataclass(frozen=True)
class PPCSignature:
    """lis/addi pair materializing the module data address (big-endian)."""
    ptr_hi_loc: int  # lis immediate
    ptr_lo_loc: int  # addi immediate, signed
    pattern: str

    def __post_init__(self) -> None:
        validate_pattern(self.pattern)
        _check_operand(self.pattern, self.ptr_hi_loc, 2)
        _check_operand(self.pattern, self.ptr_lo_loc, 2)


Signature = Union[X64Signature, X86Signature, PPCSignature]


# .text:000000000044D80A 48 8D 0D 8F DA 26 00     lea     rcx, runtime_firstmoduledata
# .text:000000000044D811 EB 0D                    jmp     short loc_44D820
# .text:000000000044D813 48 8B 89 30 02 00 00     mov     rcx, [rcx+230h]
# .text:000000000044D81A 66 0F 1F 44 00 00        nop     word ptr [rax+rax+00h]
X64_SIGNATURE = X64Signature(
    ptr_loc=3,
    next_ip_loc=7,
    pattern="48 8D 0? ?? ?? ?? ?? EB ?? 48 8? 8? ?? 02 00 00 66 0F 1F 44 00 00",
)

# .text:00438A94 8D 05 60 49 6A 00               lea     eax, off_6A4960
# .text:00438A9A EB 1A                           jmp     short loc_438AB6
# ...
# .text:00438AAC 8B 80 18 01 00 00               mov     eax, [eax+118h]
# .text:00438AB2 8B 54 24 20                     mov     edx, [esp+2Ch+var_C]
# .text:00438AB6 85 C0                           test    eax, eax
# .text:00438AB8 75 E2                           jnz     short loc_438A9C
X86_SIGNATURE = X86Signature(
    ptr_loc=2,
    pattern="8D ?? ?? ?? ?? ?? EB 1A",
    loop_max_distance=50,
    loop_pattern="8B ?? ?? ?? ?? ?? 8B ?? 24 20 85 ?? 75 E2",
)

# 0x61a74:  3C 80 00 2C    lis  r4, 0x2c
# 0x61a78:  38 84 80 00    addi r4, r4, -0x8000
# 0x61a7c:  48 00 00 08    b    0x61a84
# 0x61a80:  E8 84 02 30    ld   r4, 0x230(r4)
# 0x61a84:  7C 24 00 00    cmpd r4, r0
# 0x61a88:  41 82 01 A8    beq  0x61c30
PPC_BE_SIGNATURE = PPCSignature(
    ptr_hi_loc=2,
    ptr_lo_loc=6,
    pattern="3? 80 00 2C 3? ?? 80 00 48 ?? ?? 08 E? ?? 02 30 7C ?? 00 00 41 82 ?? ??",
)

SIGNATURES: dict[Arch, Signature] = {
    Arch.X64: X64_SIGNATURE,
    Arch.X86: X86_SIGNATURE,
    Arch.PPC_BE: PPC_BE_SIGNATURE,
}
