"""
modscan: locate the runtime module-data pointer load in compiled code sections.
"""
__version__ = "0.1.0"

from modscan.collector import ModuleDataCollector, find_moduledata
from modscan.signatures import Arch
from modscan.types import (
    CodeSection,
    ScanOptions,
    ScanReport,
    SignatureMatch,
)

__all__ = [
    "__version__",
    "Arch",
    "CodeSection",
    "ModuleDataCollector",
    "ScanOptions",
    "ScanReport",
    "SignatureMatch",
    "find_moduledata",
]
