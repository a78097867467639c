"""Source loading and syntax-tree helpers for TypeScript projects."""

from .loader import ParsedFile, detect_language, load_project, parse_source, validate_root

__all__ = [
    "ParsedFile",
    "detect_language",
    "load_project",
    "parse_source",
    "validate_root",
]
