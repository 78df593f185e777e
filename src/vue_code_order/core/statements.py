"""
Statement descriptors for the top level of a script setup block
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .estree import Node, ensure_node

logger = logging.getLogger(__name__)


class StatementKind(Enum):
    """Structural kind of a top-level statement"""

    IMPORT = "import"
    TYPE_DECLARATION = "type-declaration"
    VARIABLE = "variable"
    EXPRESSION_CALL = "expression-call"
    EXPRESSION = "expression"
    FUNCTION_DECLARATION = "function-declaration"
    OTHER = "other"


TYPE_DECLARATION_NODES = frozenset(
    {
        "TSInterfaceDeclaration",
        "TSTypeAliasDeclaration",
        "TSEnumDeclaration",
    }
)


@dataclass
class StatementDescriptor:
    """One top-level statement together with its position and comments"""

    node: Node
    ordinal: int
    leading_comments: list[str] = field(default_factory=list)

    @property
    def kind(self) -> StatementKind:
        node_type = self.node.type
        if node_type == "ImportDeclaration":
            return StatementKind.IMPORT
        if node_type in TYPE_DECLARATION_NODES:
            return StatementKind.TYPE_DECLARATION
        if node_type == "VariableDeclaration":
            return StatementKind.VARIABLE
        if node_type == "ExpressionStatement":
            expression = self.node.expression
            if isinstance(expression, Node) and expression.is_type("CallExpression"):
                return StatementKind.EXPRESSION_CALL
            return StatementKind.EXPRESSION
        if node_type == "FunctionDeclaration":
            return StatementKind.FUNCTION_DECLARATION
        return StatementKind.OTHER

    @property
    def declarations(self) -> list[tuple[Node, Node | None]]:
        """(binding pattern, initializer) pairs of a variable statement"""
        if self.kind != StatementKind.VARIABLE:
            return []
        pairs = []
        for declarator in self.node.declarations or []:
            if not isinstance(declarator, Node) or not isinstance(declarator.id, Node):
                continue
            init = declarator.init if isinstance(declarator.init, Node) else None
            pairs.append((declarator.id, init))
        return pairs

    @property
    def call(self) -> Node | None:
        """The call expression wrapped by an expression statement"""
        if self.kind != StatementKind.EXPRESSION_CALL:
            return None
        return self.node.expression

    @property
    def function_name(self) -> str | None:
        if self.kind != StatementKind.FUNCTION_DECLARATION:
            return None
        identifier = self.node.id
        if isinstance(identifier, Node) and identifier.is_type("Identifier"):
            return identifier.name
        return None

    @property
    def line(self) -> int | None:
        return self.node.line

    @property
    def column(self) -> int | None:
        return self.node.column


def _comment_text(comment: Any) -> str | None:
    if isinstance(comment, Node):
        value = comment.value
    elif isinstance(comment, dict):
        value = comment.get("value")
    else:
        value = comment
    return value.strip() if isinstance(value, str) else None


def _attached_comments(node: Node) -> list[str]:
    texts = []
    for comment in node.leadingComments or []:
        text = _comment_text(comment)
        if text is not None:
            texts.append(text)
    return texts


def build_statements(
    nodes: Sequence[Node | dict[str, Any]],
    comments: Iterable[Node | dict[str, Any]] | None = None,
) -> list[StatementDescriptor]:
    """Wrap top-level nodes into descriptors and attach preceding comments.

    A comment precedes a statement when it lies between the end of the
    previous statement (or the start of the block) and the start of the
    statement. Parsers that attach ``leadingComments`` directly to nodes are
    honoured as well; both sources are combined without duplicates.

    Args:
        nodes: Top-level statement nodes in source order
        comments: Comment nodes of the block, as found in ``Program.comments``

    Returns:
        list[StatementDescriptor]: One descriptor per node, ordinal = index
    """
    statement_nodes = [ensure_node(node) for node in nodes]
    positioned_comments = []
    for comment in comments or []:
        comment_node = ensure_node(comment)
        text = _comment_text(comment_node)
        if text is None or comment_node.start_offset is None:
            continue
        positioned_comments.append((comment_node.start_offset, comment_node.end_offset, text))

    statements = []
    previous_end = -1
    for ordinal, node in enumerate(statement_nodes):
        leading = _attached_comments(node)
        start = node.start_offset
        if start is not None:
            for comment_start, comment_end, text in positioned_comments:
                if comment_start >= previous_end and (comment_end or comment_start) <= start:
                    if text not in leading:
                        leading.append(text)
        statements.append(
            StatementDescriptor(node=node, ordinal=ordinal, leading_comments=leading)
        )
        if node.end_offset is not None:
            previous_end = node.end_offset

    return statements


def statements_from_program(program: Node | dict[str, Any]) -> list[StatementDescriptor]:
    """Build descriptors for the body of an ESTree ``Program`` node.

    Raises:
        ValueError: If the node is not a Program
    """
    program_node = ensure_node(program)
    if program_node.type != "Program":
        raise ValueError(f"Expected a Program node, got {program_node.type}")
    body = program_node.body or []
    statements = build_statements(body, program_node.comments or [])
    logger.debug(f"Built {len(statements)} statement descriptors")
    return statements
