"""
Binary loading: format sniffing and executable section extraction. Supports PE and ELF.
"""
from modscan.loader.format_ import LoadError, parse_elf, parse_pe, sniff_format
from modscan.loader.sections import (
    code_sections_elf,
    code_sections_pe,
    filter_sections,
    load_code_sections,
)

__all__ = [
    "LoadError",
    "parse_elf",
    "parse_pe",
    "sniff_format",
    "code_sections_elf",
    "code_sections_pe",
    "filter_sections",
    "load_code_sections",
]
