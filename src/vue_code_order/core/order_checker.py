"""
Order checking strategies and diagnostics.

Two strategies are provided and selected by name:

- ``pairwise``: for each checked statement, scan backward to the nearest
  earlier statement of a higher rank and decide between reporting an
  ordering violation, reporting a cyclic dependency, or suppressing.
- ``watermark``: scan forward keeping the highest rank seen so far and
  report every statement that falls below it. No cycle or directive logic.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .classification_rule_category import CategoryRule
from .cycle_detector import CycleDetector
from .dependency_analyzer import BindingInfo
from .statements import StatementDescriptor, StatementKind
from .suppression import PLUGIN_NAME, RULE_NAME, has_disable_directive

logger = logging.getLogger(__name__)


class DiagnosticKind(Enum):
    """Kind of reported problem"""

    ORDER = "order"
    CYCLIC = "cyclic"


MESSAGE_IDS = {
    DiagnosticKind.ORDER: "incorrectOrder",
    DiagnosticKind.CYCLIC: "cyclicDependencyDetected",
}

MESSAGES = {
    DiagnosticKind.ORDER: (
        'Code should be ordered correctly. "{actual}" should come before "{expected}"'
    ),
    DiagnosticKind.CYCLIC: (
        'Cyclic dependency detected between "{actual}" and "{expected}". '
        "Consider using allowCyclicDependencies option or eslint-disable comment."
    ),
}

# Statement kinds the pairwise strategy reports on
CHECKED_KINDS = frozenset(
    {
        StatementKind.IMPORT,
        StatementKind.VARIABLE,
        StatementKind.EXPRESSION_CALL,
        StatementKind.EXPRESSION,
        StatementKind.FUNCTION_DECLARATION,
    }
)


@dataclass
class Diagnostic:
    """A reported problem, anchored at the offending statement"""

    statement: StatementDescriptor
    kind: DiagnosticKind
    actual_category: str
    expected_category: str
    actual_description: str
    expected_description: str
    # Autofix is never offered
    fix: None = None

    @property
    def message_id(self) -> str:
        return MESSAGE_IDS[self.kind]

    @property
    def message(self) -> str:
        return MESSAGES[self.kind].format(
            actual=self.actual_description,
            expected=self.expected_description,
        )

    @property
    def line(self) -> int | None:
        return self.statement.line

    @property
    def column(self) -> int | None:
        return self.statement.column

    def to_dict(self) -> dict[str, Any]:
        return {
            "ordinal": self.statement.ordinal,
            "line": self.line,
            "column": self.column,
            "kind": self.kind.value,
            "message_id": self.message_id,
            "message": self.message,
            "actual_category": self.actual_category,
            "expected_category": self.expected_category,
        }


@dataclass
class CheckContext:
    """Everything a strategy needs about one block"""

    categories: list[str]
    order: list[str]
    rules: Mapping[str, CategoryRule]
    bindings: list[BindingInfo] = field(default_factory=list)
    allow_cyclic_dependencies: bool = False
    skip_categories: frozenset[str] = frozenset()
    rule_name: str = RULE_NAME
    plugin_name: str = PLUGIN_NAME
    _cycle_detector: CycleDetector | None = field(default=None, init=False, repr=False)

    @property
    def cycle_detector(self) -> CycleDetector:
        if self._cycle_detector is None:
            self._cycle_detector = CycleDetector(self.bindings)
        return self._cycle_detector

    def rank(self, category: str | None) -> int:
        """Position of a category in the order; unlisted categories rank last."""
        if category is None or category not in self.order:
            return len(self.order)
        return self.order.index(category)

    def describe(self, category: str | None) -> str:
        if category is None:
            return "unknown"
        rule = self.rules.get(category)
        if rule is not None and rule.description:
            return rule.description
        return category


class OrderStrategy(ABC):
    """Abstract base class for order checking strategies"""

    name: str = ""

    @abstractmethod
    def check(
        self,
        statements: list[StatementDescriptor],
        context: CheckContext,
    ) -> list[Diagnostic]:
        """
        Check a statement sequence

        Args:
            statements: Top-level statements of one block
            context: Categories (index-aligned with statements), order and options

        Returns:
            Diagnostics in statement order
        """
        pass

    def make_diagnostic(
        self,
        statement: StatementDescriptor,
        kind: DiagnosticKind,
        actual: str | None,
        expected: str | None,
        context: CheckContext,
    ) -> Diagnostic:
        return Diagnostic(
            statement=statement,
            kind=kind,
            actual_category=actual or "unknown",
            expected_category=expected or "unknown",
            actual_description=context.describe(actual),
            expected_description=context.describe(expected),
        )


class PairwisePredecessorStrategy(OrderStrategy):
    """Compare each statement with its nearest higher-ranked predecessor."""

    name = "pairwise"

    def check(
        self,
        statements: list[StatementDescriptor],
        context: CheckContext,
    ) -> list[Diagnostic]:
        diagnostics = []

        for index, statement in enumerate(statements):
            if statement.kind not in CHECKED_KINDS:
                continue

            current = context.categories[index]
            current_rank = context.rank(current)

            for previous_index in range(index - 1, -1, -1):
                previous = context.categories[previous_index]
                if context.rank(previous) <= current_rank:
                    continue

                diagnostic = self.evaluate(statement, current, previous, context)
                if diagnostic is not None:
                    diagnostics.append(diagnostic)
                break

        return diagnostics

    def evaluate(
        self,
        statement: StatementDescriptor,
        current: str,
        previous: str,
        context: CheckContext,
    ) -> Diagnostic | None:
        """Decide between reporting and suppressing one out-of-order pair."""
        if has_disable_directive(
            statement.leading_comments, context.rule_name, context.plugin_name
        ):
            logger.debug(f"Statement {statement.ordinal} suppressed by directive")
            return None

        if current in context.skip_categories or previous in context.skip_categories:
            logger.debug(f"Skipping {current} vs {previous}: category in skip list")
            return None

        cyclic = context.cycle_detector.has_cycle(current, previous)
        if cyclic and context.allow_cyclic_dependencies:
            logger.debug(f"Allowing {current} vs {previous}: cyclic dependency")
            return None

        kind = DiagnosticKind.CYCLIC if cyclic else DiagnosticKind.ORDER
        return self.make_diagnostic(statement, kind, current, previous, context)


class HighWatermarkStrategy(OrderStrategy):
    """Report every statement ranked below the highest rank seen before it."""

    name = "watermark"

    def check(
        self,
        statements: list[StatementDescriptor],
        context: CheckContext,
    ) -> list[Diagnostic]:
        diagnostics = []
        watermark = -1
        watermark_category = None

        for index, statement in enumerate(statements):
            category = context.categories[index]
            rank = context.rank(category)

            if rank < watermark:
                diagnostics.append(
                    self.make_diagnostic(
                        statement,
                        DiagnosticKind.ORDER,
                        category,
                        watermark_category,
                        context,
                    )
                )
            else:
                watermark = rank
                watermark_category = category

        return diagnostics


STRATEGIES: dict[str, type[OrderStrategy]] = {
    PairwisePredecessorStrategy.name: PairwisePredecessorStrategy,
    HighWatermarkStrategy.name: HighWatermarkStrategy,
}


def get_strategy(name: str) -> OrderStrategy:
    """Instantiate a strategy by name, falling back to pairwise."""
    strategy_class = STRATEGIES.get(name)
    if strategy_class is None:
        logger.warning(f"Unknown order strategy {name!r}, using pairwise")
        strategy_class = PairwisePredecessorStrategy
    return strategy_class()
