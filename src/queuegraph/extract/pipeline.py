"""Run listener and sender extraction over a whole project."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List

from .listeners import listeners_in_file
from .senders import senders_in_file
from ..ast.loader import ParsedFile
from ..ast.types import ClassIndex, TypeResolver
from ..config import AnalyzerConfig, DEFAULT_CONFIG
from ..graph.model import MethodRecord
from ..log import get_logger

logger = get_logger(__name__)


def extract_records(files: Iterable[ParsedFile], config: AnalyzerConfig | None = None) -> List[MethodRecord]:
    """Collect listener and sender records from every file.

    Files are independent once the class index is built, so with
    ``config.workers > 1`` they are processed on a thread pool. All results
    are gathered, in file order, before returning.
    """
    active = config or DEFAULT_CONFIG
    files = list(files)
    resolver = TypeResolver(ClassIndex.from_files(files))

    def _extract(parsed: ParsedFile) -> List[MethodRecord]:
        return listeners_in_file(parsed, active) + senders_in_file(parsed, resolver, active)

    if active.workers > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=active.workers) as executor:
            per_file = list(executor.map(_extract, files))
    else:
        per_file = [_extract(parsed) for parsed in files]

    records = [record for file_records in per_file for record in file_records]
    logger.info("Extracted %d method records from %d files", len(records), len(files))
    return records
