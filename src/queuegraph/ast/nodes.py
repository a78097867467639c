"""Helpers for reading TypeScript tree-sitter nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from tree_sitter import Node

CLASS_NODE_TYPES = ("class_declaration", "abstract_class_declaration", "class")
PARAMETER_NODE_TYPES = ("required_parameter", "optional_parameter")

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}


@dataclass(slots=True)
class MethodInfo:
    """A class method and the decorators attached to it."""

    name: str
    node: Node
    decorators: List[Node] = field(default_factory=list)

    @property
    def body(self) -> Optional[Node]:
        return self.node.child_by_field_name("body")


def node_text(node: Optional[Node]) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def _named(node: Node) -> List[Node]:
    """Named children without interleaved comments."""
    return [child for child in node.named_children if child.type != "comment"]


def _decode_escape(raw: str) -> str:
    body = raw[1:]
    if not body:
        return ""
    head = body[0]
    if head in _SIMPLE_ESCAPES and len(body) == 1:
        return _SIMPLE_ESCAPES[head]
    if head in ("\n", "\r"):
        # line continuation
        return ""
    if head in ("x", "u"):
        digits = body[1:].strip("{}")
        try:
            return chr(int(digits, 16))
        except ValueError:
            return raw
    return body


def string_value(node: Node) -> Optional[str]:
    """Return the value of a string literal node, or ``None`` for other nodes."""
    if node.type != "string":
        return None
    parts = []
    for child in node.named_children:
        if child.type == "string_fragment":
            parts.append(node_text(child))
        elif child.type == "escape_sequence":
            parts.append(_decode_escape(node_text(child)))
    return "".join(parts)


def unwrap_expression(node: Node) -> Node:
    """Strip parentheses and non-null assertions around an expression."""
    while node.type in ("parenthesized_expression", "non_null_expression"):
        inner = _named(node)
        if not inner:
            break
        node = inner[0]
    return node


def iter_classes(root: Node) -> Iterator[Node]:
    """Yield top-level class declarations, including exported ones."""
    for child in root.named_children:
        if child.type in CLASS_NODE_TYPES:
            yield child
        elif child.type == "export_statement":
            for target in child.named_children:
                if target.type in CLASS_NODE_TYPES:
                    yield target


def class_name(class_node: Node) -> str:
    return node_text(class_node.child_by_field_name("name"))


def superclass_name(class_node: Node) -> Optional[str]:
    """Name of the class this one extends, last segment for qualified names."""
    for child in class_node.named_children:
        if child.type != "class_heritage":
            continue
        for clause in _named(child):
            if clause.type == "implements_clause":
                continue
            if clause.type == "extends_clause":
                target = clause.child_by_field_name("value")
                if target is None:
                    candidates = _named(clause)
                    target = candidates[0] if candidates else None
            else:
                target = clause
            if target is None:
                return None
            if target.type == "member_expression":
                return node_text(target.child_by_field_name("property")) or None
            if target.type == "identifier":
                return node_text(target)
            return None
    return None


def _is_accessor(method_node: Node) -> bool:
    return any(
        not child.is_named and child.type in ("get", "set")
        for child in method_node.children
    )


def iter_class_members(class_node: Node) -> Iterator[Node]:
    body = class_node.child_by_field_name("body")
    if body is None:
        return
    yield from body.named_children


def iter_methods(class_node: Node, include_constructor: bool = False) -> Iterator[MethodInfo]:
    """Yield the methods of ``class_node`` with their decorators.

    Decorators are collected both from preceding siblings in the class body
    and from children of the method node itself, since grammar versions
    differ on where they attach. Accessors are not methods.
    """
    pending: List[Node] = []
    for child in iter_class_members(class_node):
        if child.type == "decorator":
            pending.append(child)
            continue
        if child.type == "comment":
            continue
        if child.type == "method_definition" and not _is_accessor(child):
            name = node_text(child.child_by_field_name("name"))
            if name != "constructor" or include_constructor:
                own = [c for c in child.named_children if c.type == "decorator"]
                yield MethodInfo(name=name, node=child, decorators=pending + own)
        pending = []


def find_constructor(class_node: Node) -> Optional[Node]:
    for method in iter_methods(class_node, include_constructor=True):
        if method.name == "constructor":
            return method.node
    return None


def call_arguments(call_node: Node) -> List[Node]:
    """Positional argument expressions of a call or decorator call."""
    arguments = call_node.child_by_field_name("arguments")
    if arguments is None or arguments.type != "arguments":
        return []
    return _named(arguments)


def callee_name(node: Optional[Node]) -> str:
    """Simple name of a callee: the identifier or the accessed property."""
    if node is None:
        return ""
    if node.type == "identifier":
        return node_text(node)
    if node.type == "member_expression":
        return node_text(node.child_by_field_name("property"))
    return ""


def decorator_call(decorator: Node) -> Tuple[str, List[Node]]:
    """Return the decorator's name and positional arguments.

    ``@Name`` has no arguments; ``@Name(a, b)`` and ``@ns.Name(a)`` yield the
    call arguments.
    """
    inner = _named(decorator)
    if not inner:
        return "", []
    expression = inner[0]
    if expression.type == "call_expression":
        return callee_name(expression.child_by_field_name("function")), call_arguments(expression)
    return callee_name(expression), []


def iter_descendants(node: Node, node_type: str) -> Iterator[Node]:
    """Pre-order walk yielding every descendant of the given type."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == node_type:
            yield current
        stack.extend(reversed(current.named_children))


def type_annotation_text(node: Optional[Node]) -> Optional[str]:
    """Text of the type inside a ``: Type`` annotation attached to ``node``."""
    if node is None:
        return None
    annotation = node.child_by_field_name("type")
    if annotation is None or annotation.type != "type_annotation":
        annotation = next(
            (child for child in node.named_children if child.type == "type_annotation"),
            None,
        )
    if annotation is None:
        return None
    inner = _named(annotation)
    if not inner:
        return None
    return node_text(inner[0])


def parameter_name(parameter: Node) -> str:
    pattern = parameter.child_by_field_name("pattern")
    if pattern is None:
        pattern = next((c for c in parameter.named_children if c.type == "identifier"), None)
    if pattern is None or pattern.type != "identifier":
        return ""
    return node_text(pattern)


def is_parameter_property(parameter: Node) -> bool:
    """True for constructor parameters that also declare a class member."""
    for child in parameter.children:
        if child.type in ("accessibility_modifier", "override_modifier"):
            return True
        if not child.is_named and child.type == "readonly":
            return True
    return False


def iter_parameters(function_node: Node) -> Iterator[Node]:
    parameters = function_node.child_by_field_name("parameters")
    if parameters is None:
        return
    for child in parameters.named_children:
        if child.type in PARAMETER_NODE_TYPES:
            yield child
