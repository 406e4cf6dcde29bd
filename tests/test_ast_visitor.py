"""Tests for AST nodes and ASTVisitor traversal."""

import dataclasses

import pytest

from iculexengine.syntax import (
    ASTNode,
    ASTVisitor,
    Case,
    FormatCustom,
    Message,
    Placeholder,
    Plural,
    Select,
    Text,
    parse,
)


class CountPlaceholders(ASTVisitor):
    def __init__(self) -> None:
        super().__init__()
        self.count = 0

    def visit_Placeholder(self, node: Placeholder) -> ASTNode:
        self.count += 1
        return self.generic_visit(node)


class TestNodes:
    """Immutability and derived lookups."""

    def test_nodes_are_frozen(self) -> None:
        """Compiled nodes cannot be mutated."""
        node = Placeholder("x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.key = "y"  # type: ignore[misc]

    def test_case_index(self) -> None:
        """Case lists expose a read-only selector index."""
        node = Select("g", (Case("a", Message((Text("A"),))), Case("other", Message())))
        assert node.index["a"] == Message((Text("A"),))
        with pytest.raises(TypeError):
            node.index["b"] = Message()  # type: ignore[index]

    def test_index_excluded_from_equality(self) -> None:
        """Equality depends on declared fields only."""
        cases = (Case("other", Message()),)
        assert Plural("n", 0, cases) == Plural("n", 0, cases)
        assert Plural("n", 0, cases) != Plural("n", 1, cases)

    def test_type_guards(self) -> None:
        """Static guards identify node types."""
        assert Text.guard(Text("x"))
        assert not Text.guard(Placeholder("x"))
        assert Placeholder.guard(Placeholder("x"))
        assert FormatCustom.guard(FormatCustom("x", "f"))
        assert Message.guard(Message())
        assert Select.guard(Select("g", (Case("other", Message()),)))
        assert Plural.guard(Plural("n", 0, (Case("other", Message()),)))


class TestVisitor:
    """Generic traversal reaches every node."""

    def test_counts_top_level(self) -> None:
        """Top-level placeholders are visited."""
        visitor = CountPlaceholders()
        visitor.visit(parse("{a} and {b}"))
        assert visitor.count == 2

    def test_descends_into_cases(self) -> None:
        """Case bodies at any depth are visited."""
        visitor = CountPlaceholders()
        visitor.visit(
            parse("{g, select, a {{x}} other {{n, plural, one {{y}} other {{z} {w}}}}}")
        )
        assert visitor.count == 4

    def test_visit_returns_node_by_default(self) -> None:
        """generic_visit returns the visited node."""
        message = parse("hi")
        assert ASTVisitor().visit(message) is message

    def test_dispatch_per_subclass(self) -> None:
        """Dispatch tables are built per subclass."""

        class CountText(ASTVisitor):
            def __init__(self) -> None:
                super().__init__()
                self.texts: list[str] = []

            def visit_Text(self, node: Text) -> ASTNode:
                self.texts.append(node.value)
                return node

        visitor = CountText()
        visitor.visit(parse("a{x}b{g, select, other {c}}"))
        assert visitor.texts == ["a", "b", "c"]
