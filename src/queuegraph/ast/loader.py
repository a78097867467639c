"""Project loading: path validation, file discovery and tree-sitter parsing."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Iterable, List, Optional

import tree_sitter_typescript
from tree_sitter import Language, Parser, Tree

from ..config import AnalyzerConfig, DEFAULT_CONFIG
from ..errors import AnalysisError
from ..log import get_logger

logger = get_logger(__name__)

LANGUAGE_EXTENSIONS = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}


@dataclass(slots=True)
class ParsedFile:
    """A source file together with its syntax tree."""

    path: Path
    source: bytes
    tree: Tree

    @property
    def root(self):
        return self.tree.root_node


def detect_language(path: Path) -> Optional[str]:
    """Detect the grammar to use from the file extension."""
    if path.name.endswith(".d.ts"):
        return None
    return LANGUAGE_EXTENSIONS.get(path.suffix.lower())


@lru_cache(maxsize=None)
def _language(name: str) -> Language:
    if name == "tsx":
        return Language(tree_sitter_typescript.language_tsx())
    return Language(tree_sitter_typescript.language_typescript())


def parse_source(source: bytes, path: Path, language: str = "typescript") -> ParsedFile:
    """Parse ``source`` into a :class:`ParsedFile`.

    A fresh parser is created per call; tree-sitter parsers are not meant to
    be shared between threads.
    """
    parser = Parser(_language(language))
    return ParsedFile(path=path, source=source, tree=parser.parse(source))


def validate_root(raw: str | Path) -> Path:
    """Check that ``raw`` names an absolute, readable directory.

    Raises
    ------
    AnalysisError
        ``INVALID_INPUT_PATH`` when the path is relative,
        ``INACCESSIBLE_PATH`` when it is missing or unreadable and
        ``PROJECT_NOT_FOUND`` when it is not a directory.
    """
    text = str(raw).strip()
    if not text or not os.path.isabs(text):
        raise AnalysisError.invalid_path(raw)

    path = Path(text)
    if not path.exists() or not os.access(path, os.R_OK):
        logger.debug("Cannot access %s", path)
        raise AnalysisError.inaccessible(path)
    if not path.is_dir():
        raise AnalysisError.project_not_found(path)
    return path


def _is_excluded(path: Path, root: Path, exclude_dirs: Iterable[str]) -> bool:
    excluded = set(exclude_dirs)
    return any(part in excluded for part in path.relative_to(root).parts[:-1])


def _iter_source_files(root: Path, config: AnalyzerConfig) -> List[Path]:
    found = set()
    for pattern in config.source_globs:
        for file_path in root.glob(pattern):
            if not file_path.is_file() or not detect_language(file_path):
                continue
            if _is_excluded(file_path, root, config.exclude_dirs):
                continue
            found.add(file_path.resolve())
    return sorted(found)


def load_project(root: Path, config: AnalyzerConfig | None = None) -> List[ParsedFile]:
    """Parse every source file of the project rooted at ``root``.

    Parameters
    ----------
    root:
        Validated project root (see :func:`validate_root`).
    config:
        Analyzer settings; decides the project marker file and source globs.

    Returns
    -------
    Parsed files sorted by path. Files that cannot be read are skipped.
    """
    active = config or DEFAULT_CONFIG
    project_file = root / active.project_file
    if not project_file.is_file():
        raise AnalysisError.config_not_found(root, f"missing {active.project_file}")

    parsed: List[ParsedFile] = []
    for file_path in _iter_source_files(root, active):
        try:
            source = file_path.read_bytes()
        except OSError as exc:
            logger.warning("Skipping unreadable file %s: %s", file_path, exc)
            continue
        parsed.append(parse_source(source, file_path, detect_language(file_path) or "typescript"))

    logger.info("Parsed %d source files under %s", len(parsed), root)
    return parsed
