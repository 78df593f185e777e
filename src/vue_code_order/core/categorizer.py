"""
Statement categorization.

Combines structural statement rules with name-pattern matching to place
every top-level statement in exactly one category.
"""

import logging
from collections.abc import Mapping

from .classification_rule_category import (
    DEFAULT_CATEGORY,
    IMPORTS_CATEGORY,
    TYPES_CATEGORY,
    CategoryRule,
)
from .estree import Node
from .extractor import (
    extract_call_name,
    extract_callee,
    get_array_pattern_names,
    get_object_pattern_names,
)
from .pattern_matcher import PatternMatcher
from .statements import StatementDescriptor, StatementKind

logger = logging.getLogger(__name__)


class Categorizer:
    """Assign categories to statements.

    Unclassifiable statements land in the default category (application
    logic) instead of escaping the ordering check.
    """

    def __init__(
        self,
        rules: Mapping[str, CategoryRule],
        default_category: str = DEFAULT_CATEGORY,
        matcher: PatternMatcher | None = None,
    ):
        """
        Initialize categorizer

        Args:
            rules: Category rule table, in matching order
            default_category: Category for statements no rule claims
            matcher: Pattern matcher to share; a fresh one is built if omitted
        """
        self.rules = rules
        self.default_category = default_category
        self.matcher = matcher or PatternMatcher(rules)

    def categorize(self, statement: StatementDescriptor | Node) -> str:
        """Return the category of a statement, never None."""
        if isinstance(statement, Node):
            statement = StatementDescriptor(node=statement, ordinal=0)

        kind = statement.kind

        if kind == StatementKind.IMPORT:
            return IMPORTS_CATEGORY

        if kind == StatementKind.TYPE_DECLARATION:
            return TYPES_CATEGORY

        if kind == StatementKind.VARIABLE:
            for pattern, init in statement.declarations:
                category = self.classify_declaration(pattern, init)
                if category:
                    return category
            return self.default_category

        if kind == StatementKind.EXPRESSION_CALL:
            return self.matcher.match(extract_call_name(statement.call)) or self.default_category

        if kind == StatementKind.FUNCTION_DECLARATION:
            return self.matcher.match(statement.function_name or "") or self.default_category

        return self.default_category

    def classify_declaration(self, pattern: Node, init: Node | None) -> str | None:
        """Classify one declarator: callee first, then destructured names, then the identifier."""
        category = self.matcher.match(extract_callee(init))
        if category:
            return category

        for name in get_object_pattern_names(pattern):
            category = self.matcher.match(name)
            if category:
                return category

        for name in get_array_pattern_names(pattern):
            category = self.matcher.match(name)
            if category:
                return category

        if pattern.type == "Identifier":
            return self.matcher.match(pattern.name or "")

        return None

    def categorize_all(self, statements: list[StatementDescriptor]) -> list[str]:
        """Categories of a statement sequence, index-aligned with it."""
        categories = [self.categorize(statement) for statement in statements]
        logger.debug(f"Categorized {len(categories)} statements: {categories}")
        return categories
