"""Declared-type lookup for expressions inside class methods.

There is no compiler behind this: types come from annotations written in the
source (fields, constructor parameter properties, method parameters and local
variables), from ``new T(...)`` initialisers and from simple aliases such as
``const rmq = this.rmq``. Members are also looked up along ``extends`` chains
of classes declared in the same project.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set

from tree_sitter import Node

from .loader import ParsedFile
from .nodes import (
    class_name,
    find_constructor,
    is_parameter_property,
    iter_class_members,
    iter_classes,
    iter_parameters,
    node_text,
    parameter_name,
    superclass_name,
    type_annotation_text,
    unwrap_expression,
)
from ..log import get_logger

logger = get_logger(__name__)

MAX_ALIAS_DEPTH = 8

FUNCTION_NODE_TYPES = (
    "method_definition",
    "arrow_function",
    "function_expression",
    "function",
    "function_declaration",
    "generator_function",
    "generator_function_declaration",
)
DECLARATION_NODE_TYPES = ("lexical_declaration", "variable_declaration")


class ClassIndex:
    """Project-wide map from class name to its declaration node."""

    def __init__(self) -> None:
        self._classes: Dict[str, Node] = {}

    @classmethod
    def from_files(cls, files: Iterable[ParsedFile]) -> "ClassIndex":
        index = cls()
        for parsed in files:
            index.add_file(parsed)
        return index

    def add_file(self, parsed: ParsedFile) -> None:
        for class_node in iter_classes(parsed.root):
            name = class_name(class_node)
            if not name:
                continue
            if name in self._classes:
                logger.debug("Duplicate class %s in %s; keeping the first", name, parsed.path)
                continue
            self._classes[name] = class_node

    def get(self, name: str) -> Optional[Node]:
        return self._classes.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._classes

    def __len__(self) -> int:
        return len(self._classes)


def _new_expression_type(node: Optional[Node]) -> Optional[str]:
    if node is None:
        return None
    node = unwrap_expression(node)
    if node.type != "new_expression":
        return None
    return node_text(node.child_by_field_name("constructor")) or None


def _preceding_declarator(scope: Node, name: str, site: int) -> Optional[Node]:
    """Closest declarator of ``name`` among the direct statements of ``scope``
    that end before byte offset ``site``."""
    found: Optional[Node] = None
    for statement in scope.named_children:
        if statement.start_byte >= site:
            break
        if statement.type not in DECLARATION_NODE_TYPES or statement.end_byte > site:
            continue
        for declarator in statement.named_children:
            if declarator.type != "variable_declarator":
                continue
            target = declarator.child_by_field_name("name")
            if target is not None and target.type == "identifier" and node_text(target) == name:
                found = declarator
    return found


class TypeResolver:
    """Answer "what is the declared type of this expression" for a method."""

    def __init__(self, index: ClassIndex | None = None):
        self.index = index or ClassIndex()

    def member_type(self, class_node: Node, member: str) -> Optional[str]:
        """Declared type of ``this.<member>``, searching superclasses too."""
        visited: Set[str] = set()
        current: Optional[Node] = class_node
        while current is not None:
            found = self._own_member_type(current, member)
            if found:
                return found
            parent = superclass_name(current)
            if not parent or parent in visited:
                return None
            visited.add(parent)
            current = self.index.get(parent)
        return None

    def _own_member_type(self, class_node: Node, member: str) -> Optional[str]:
        for child in iter_class_members(class_node):
            if child.type != "public_field_definition":
                continue
            if node_text(child.child_by_field_name("name")) != member:
                continue
            declared = type_annotation_text(child)
            if declared:
                return declared
            return _new_expression_type(child.child_by_field_name("value"))

        constructor = find_constructor(class_node)
        if constructor is None:
            return None
        for parameter in iter_parameters(constructor):
            if is_parameter_property(parameter) and parameter_name(parameter) == member:
                return type_annotation_text(parameter)
        return None

    def local_type(
        self,
        identifier: Node,
        method_node: Node,
        class_node: Node,
        depth: int = 0,
    ) -> Optional[str]:
        """Declared type of ``identifier`` as seen from where it is used.

        Scopes are searched from the use site outwards: declarations that
        precede it in each enclosing block, then the parameters of each
        enclosing function, stopping at ``method_node``.
        """
        name = node_text(identifier)
        site = identifier.start_byte
        current = identifier.parent
        while current is not None:
            declarator = _preceding_declarator(current, name, site)
            if declarator is not None:
                declared = type_annotation_text(declarator)
                if declared:
                    return declared
                value = declarator.child_by_field_name("value")
                if value is None:
                    return None
                return self.expression_type(value, method_node, class_node, depth + 1)

            if current.type in FUNCTION_NODE_TYPES:
                single = current.child_by_field_name("parameter")
                if single is not None and node_text(single) == name:
                    return None
                for parameter in iter_parameters(current):
                    if parameter_name(parameter) == name:
                        return type_annotation_text(parameter)
            if current == method_node:
                return None
            current = current.parent
        return None

    def expression_type(
        self,
        expression: Node,
        method_node: Node,
        class_node: Node,
        depth: int = 0,
    ) -> Optional[str]:
        """Resolve the declared type text of ``expression``, or ``None``."""
        if depth > MAX_ALIAS_DEPTH:
            return None
        expression = unwrap_expression(expression)

        if expression.type == "member_expression":
            owner = expression.child_by_field_name("object")
            if owner is None or unwrap_expression(owner).type != "this":
                return None
            return self.member_type(class_node, node_text(expression.child_by_field_name("property")))
        if expression.type == "identifier":
            return self.local_type(expression, method_node, class_node, depth)
        if expression.type == "new_expression":
            return _new_expression_type(expression)
        if expression.type == "as_expression":
            parts: List[Node] = [c for c in expression.named_children if c.type != "comment"]
            if len(parts) == 2:
                return node_text(parts[1])
        return None
