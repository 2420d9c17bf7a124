"""cssgsub: rename CSS classes to short tokens in a stylesheet and its paired script."""

from __future__ import annotations

__version__ = "0.1.0"

from cssgsub.config import GsubConfig
from cssgsub.engine import SubstitutionEngine
from cssgsub.pipeline import SourceFile, gsub, process_file

__all__ = [
    "GsubConfig",
    "SourceFile",
    "SubstitutionEngine",
    "gsub",
    "process_file",
]
