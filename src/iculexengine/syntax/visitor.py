"""Visitor pattern for AST traversal.

Enables tools to traverse the message AST without modifying node classes.

NOTE: This module follows Python stdlib ast.NodeVisitor naming convention.
Methods are named visit_NodeName (PascalCase) rather than visit_node_name (snake_case).

Python 3.13+.
"""

from collections.abc import Callable
from dataclasses import Field, fields
from typing import ClassVar

from .ast import ASTNode

__all__ = ["ASTVisitor"]


class ASTVisitor[T = ASTNode]:
    """Base visitor for traversing the message AST.

    Follows stdlib ast.NodeVisitor convention: generic_visit() automatically
    traverses all child nodes (case bodies included). Override
    visit_NodeType methods to add custom behavior.

    Uses a class-level dispatch table built once per subclass via
    __init_subclass__.

    Example:
        >>> class CountPlaceholders(ASTVisitor):
        ...     def __init__(self):
        ...         super().__init__()
        ...         self.count = 0
        ...
        ...     def visit_Placeholder(self, node: Placeholder) -> ASTNode:
        ...         self.count += 1
        ...         return self.generic_visit(node)
        ...
        >>> visitor = CountPlaceholders()
        >>> _ = visitor.visit(parse("{a} and {b}"))
        >>> visitor.count
        2
    """

    __slots__ = ("_instance_dispatch_cache",)

    _class_visit_methods: ClassVar[dict[str, str]] = {}

    _fields_cache: ClassVar[dict[type, tuple[Field[object], ...]]] = {}

    def __init_subclass__(cls, **kwargs: object) -> None:
        """Build class-level dispatch table when subclass is defined."""
        super().__init_subclass__(**kwargs)
        cls._class_visit_methods = {}
        for name in dir(cls):
            if name.startswith("visit_") and name != "visit":
                cls._class_visit_methods[name[6:]] = name

    def __init__(self) -> None:
        """Initialize visitor dispatch cache.

        Subclasses MUST call super().__init__().
        """
        self._instance_dispatch_cache: dict[type, Callable[[ASTNode], T]] = {}

    def visit(self, node: ASTNode) -> T:
        """Visit a node, dispatching to visit_<NodeName> or generic_visit."""
        node_type = type(node)

        if node_type in self._instance_dispatch_cache:
            return self._instance_dispatch_cache[node_type](node)

        method_name = self._class_visit_methods.get(node_type.__name__)
        method = getattr(self, method_name) if method_name else self.generic_visit

        self._instance_dispatch_cache[node_type] = method
        return method(node)  # type: ignore[no-any-return]  # getattr returns Any

    def generic_visit(self, node: ASTNode) -> T:
        """Default visitor: traverse dataclass children, return the node."""
        node_type = type(node)
        if node_type not in ASTVisitor._fields_cache:
            ASTVisitor._fields_cache[node_type] = fields(node_type)

        for field in ASTVisitor._fields_cache[node_type]:
            value = getattr(node, field.name)

            if isinstance(value, tuple):
                for item in value:
                    if hasattr(item, "__dataclass_fields__"):
                        self.visit(item)
            elif hasattr(value, "__dataclass_fields__"):
                self.visit(value)

        return node  # type: ignore[return-value]  # T defaults to ASTNode
