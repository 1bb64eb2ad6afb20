"""Shared test data: one instance of each architecture's module-data idiom, and a tiny ELF builder."""
import struct
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

# lea rcx, [rip+0x26DA8F]; jmp short; mov rcx, [rcx+230h]; nop word ptr [rax+rax+00h]
X64_IDIOM = bytes.fromhex("48 8D 0D 8F DA 26 00 EB 0D 48 8B 89 30 02 00 00 66 0F 1F 44 00 00")

# lea eax, off_6A4960; jmp short +1Ah
X86_LEA = bytes.fromhex("8D 05 60 49 6A 00 EB 1A")
# mov eax, [eax+118h]; mov edx, [esp+20h]; test eax, eax; jnz short
X86_LOOP = bytes.fromhex("8B 80 18 01 00 00 8B 54 24 20 85 C0 75 E2")

# lis r4, 0x2c; addi r4, r4, -0x8000; b; ld r4, 0x230(r4); cmpd r4, r0; beq
PPC_IDIOM = bytes.fromhex("3C 80 00 2C 38 84 80 00 48 00 00 08 E8 84 02 30 7C 24 00 00 41 82 01 A8")


def x86_idiom(loop_distance: int) -> bytes:
    """lea followed by the loop starting loop_distance bytes after the lea start."""
    gap = loop_distance - len(X86_LEA)
    assert gap >= 0
    return X86_LEA + b"\x90" * gap + X86_LOOP


def build_elf64(text: bytes, text_addr: int = 0x401000) -> bytes:
    """Minimal little-endian ELF64 with .text and .shstrtab and no program headers."""
    shstrtab = b"\x00.text\x00.shstrtab\x00"
    text_off = 64
    shstr_off = text_off + len(text)
    shoff = (shstr_off + len(shstrtab) + 7) & ~7

    ident = b"\x7fELF" + bytes([2, 1, 1, 0]) + b"\x00" * 8
    header = ident + struct.pack(
        "<HHIQQQIHHHHHH",
        2,  # ET_EXEC
        62,  # EM_X86_64
        1,
        text_addr,
        0,  # e_phoff
        shoff,
        0,
        64,
        56,
        0,  # e_phnum
        64,
        3,  # e_shnum
        2,  # e_shstrndx
    )
    sh = struct.Struct("<IIQQQQIIQQ")
    sections = (
        sh.pack(0, 0, 0, 0, 0, 0, 0, 0, 0, 0)
        + sh.pack(1, 1, 0x6, text_addr, text_off, len(text), 0, 0, 16, 0)  # PROGBITS, ALLOC|EXECINSTR
        + sh.pack(7, 3, 0, 0, shstr_off, len(shstrtab), 0, 0, 1, 0)  # STRTAB
    )
    body = header + text + shstrtab
    return body + b"\x00" * (shoff - len(body)) + sections


def build_elf64_segments_only(text: bytes, vaddr: int = 0x10000) -> bytes:
    """Little-endian ELF64 with no section headers and a single R+X PT_LOAD over text."""
    text_off = 64 + 56
    ident = b"\x7fELF" + bytes([2, 1, 1, 0]) + b"\x00" * 8
    header = ident + struct.pack(
        "<HHIQQQIHHHHHH",
        2,  # ET_EXEC
        62,  # EM_X86_64
        1,
        vaddr,
        64,  # e_phoff
        0,  # e_shoff
        0,
        64,
        56,
        1,  # e_phnum
        64,
        0,  # e_shnum
        0,  # e_shstrndx
    )
    phdr = struct.pack(
        "<IIQQQQQQ",
        1,  # PT_LOAD
        5,  # PF_R | PF_X
        text_off,
        vaddr,
        vaddr,
        len(text),
        len(text),
        0x1000,
    )
    return header + phdr + text


def build_pe64(text: bytes, image_base: int = 0x140000000) -> bytes:
    """Minimal PE32+ with an executable .text at RVA 0x1000 and a data-only .rdata at RVA 0x2000."""
    file_align = 0x200
    assert len(text) <= file_align
    pe_off = 0x40

    dos = bytearray(pe_off)
    dos[0:2] = b"MZ"
    struct.pack_into("<I", dos, 0x3C, pe_off)

    file_header = struct.pack(
        "<HHIIIHH",
        0x8664,  # AMD64
        2,  # NumberOfSections
        0,
        0,
        0,
        240,  # SizeOfOptionalHeader
        0x22,  # EXECUTABLE_IMAGE | LARGE_ADDRESS_AWARE
    )
    optional_header = struct.pack(
        "<HBBIIIIIQIIHHHHHHIIIIHHQQQQII",
        0x20B,  # PE32+
        0,
        0,
        file_align,  # SizeOfCode
        file_align,  # SizeOfInitializedData
        0,
        0x1000,  # AddressOfEntryPoint
        0x1000,  # BaseOfCode
        image_base,
        0x1000,  # SectionAlignment
        file_align,
        6,
        0,
        0,
        0,
        6,
        0,
        0,
        0x3000,  # SizeOfImage
        file_align,  # SizeOfHeaders
        0,
        3,  # IMAGE_SUBSYSTEM_WINDOWS_CUI
        0,
        0x100000,
        0x1000,
        0x100000,
        0x1000,
        0,
        16,  # NumberOfRvaAndSizes
    ) + b"\x00" * (16 * 8)
    section = struct.Struct("<8sIIIIIIHHI")
    sections = section.pack(
        b".text", len(text), 0x1000, file_align, file_align, 0, 0, 0, 0, 0x60000020
    ) + section.pack(
        b".rdata", 8, 0x2000, file_align, 2 * file_align, 0, 0, 0, 0, 0x40000040
    )

    headers = bytes(dos) + b"PE\x00\x00" + file_header + optional_header + sections
    headers += b"\x00" * (file_align - len(headers))
    text_raw = text + b"\x00" * (file_align - len(text))
    rdata_raw = b"rdata!!\x00" + b"\x00" * (file_align - 8)
    return headers + text_raw + rdata_raw
