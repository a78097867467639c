"""Find methods that publish through the message service."""

from __future__ import annotations

from typing import Iterable, List, Optional

from tree_sitter import Node

from .queue_key import resolve_queue_key
from ..ast.loader import ParsedFile
from ..ast.nodes import (
    call_arguments,
    class_name,
    iter_classes,
    iter_descendants,
    iter_methods,
    node_text,
    unwrap_expression,
)
from ..ast.types import ClassIndex, TypeResolver
from ..config import AnalyzerConfig, DEFAULT_CONFIG
from ..graph.model import MethodRecord, Role
from ..log import get_logger

logger = get_logger(__name__)


def _callee_member(call: Node) -> Optional[Node]:
    """Member access being called, looking through a leading ``await``.

    ``await x.send<A, B>(...)`` parses with the ``await`` wrapped around the
    callee rather than around the whole call.
    """
    callee = call.child_by_field_name("function")
    while callee is not None and callee.type == "await_expression":
        inner = [c for c in callee.named_children if c.type != "comment"]
        callee = unwrap_expression(inner[0]) if inner else None
    if callee is None or callee.type != "member_expression":
        return None
    return callee


def senders_in_file(
    parsed: ParsedFile,
    resolver: TypeResolver,
    config: AnalyzerConfig | None = None,
) -> List[MethodRecord]:
    """Sender records for qualifying send calls inside methods of ``parsed``.

    A call qualifies when its callee is ``<expr>.<send_method>`` and the
    declared type of ``<expr>`` is exactly ``service_type``. The record is
    attributed to the enclosing method, one per qualifying call.
    """
    active = config or DEFAULT_CONFIG
    records: List[MethodRecord] = []

    for class_node in iter_classes(parsed.root):
        owner = class_name(class_node)
        for method in iter_methods(class_node):
            body = method.body
            if body is None:
                continue
            for call in iter_descendants(body, "call_expression"):
                callee = _callee_member(call)
                if callee is None:
                    continue
                if node_text(callee.child_by_field_name("property")) != active.send_method:
                    continue
                target = callee.child_by_field_name("object")
                if target is None:
                    continue
                if resolver.expression_type(target, method.node, class_node) != active.service_type:
                    continue

                arguments = call_arguments(call)
                queue = resolve_queue_key(arguments[0] if arguments else None)
                if queue is None:
                    logger.debug(
                        "Skipping send in %s.%s (%s:%d): no resolvable queue",
                        owner,
                        method.name,
                        parsed.path,
                        call.start_point[0] + 1,
                    )
                    continue
                records.append(
                    MethodRecord(
                        file=str(parsed.path),
                        class_name=owner,
                        name=method.name,
                        role=Role.SENDER,
                        queue=queue,
                    )
                )
    return records


def extract_senders(
    files: Iterable[ParsedFile],
    config: AnalyzerConfig | None = None,
    resolver: TypeResolver | None = None,
) -> List[MethodRecord]:
    """Sender records across ``files``.

    Without an explicit ``resolver`` one is built over ``files`` so that
    inherited service members resolve within the same set of files.
    """
    files = list(files)
    if resolver is None:
        resolver = TypeResolver(ClassIndex.from_files(files))
    records: List[MethodRecord] = []
    for parsed in files:
        records.extend(senders_in_file(parsed, resolver, config))
    return records
