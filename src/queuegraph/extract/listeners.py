"""Find methods decorated as queue listeners."""

from __future__ import annotations

from typing import Iterable, List

from .queue_key import resolve_queue_key
from ..ast.loader import ParsedFile
from ..ast.nodes import class_name, decorator_call, iter_classes, iter_methods
from ..config import AnalyzerConfig, DEFAULT_CONFIG
from ..graph.model import MethodRecord, Role
from ..log import get_logger

logger = get_logger(__name__)


def listeners_in_file(parsed: ParsedFile, config: AnalyzerConfig | None = None) -> List[MethodRecord]:
    """Listener records for every route decorator in ``parsed``.

    Each decorator occurrence with a resolvable queue yields its own record.
    """
    marker = (config or DEFAULT_CONFIG).route_marker
    records: List[MethodRecord] = []

    for class_node in iter_classes(parsed.root):
        owner = class_name(class_node)
        for method in iter_methods(class_node):
            for decorator in method.decorators:
                name, arguments = decorator_call(decorator)
                if name != marker:
                    continue
                queue = resolve_queue_key(arguments[0] if arguments else None)
                if queue is None:
                    logger.debug(
                        "Skipping @%s on %s.%s in %s: no resolvable queue",
                        marker,
                        owner,
                        method.name,
                        parsed.path,
                    )
                    continue
                records.append(
                    MethodRecord(
                        file=str(parsed.path),
                        class_name=owner,
                        name=method.name,
                        role=Role.LISTENER,
                        queue=queue,
                    )
                )
    return records


def extract_listeners(files: Iterable[ParsedFile], config: AnalyzerConfig | None = None) -> List[MethodRecord]:
    records: List[MethodRecord] = []
    for parsed in files:
        records.extend(listeners_in_file(parsed, config))
    return records
