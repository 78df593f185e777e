"""
Dependency Analysis for Script Setup Bindings.

Analyzes which top-level bindings an initializer refers to, so ordering
violations caused by mutual dependencies between categories can be told apart
from plain misplacements.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from .categorizer import Categorizer
from .estree import Node, NodeVisitor
from .extractor import extract_introduced_names
from .statements import StatementDescriptor

logger = logging.getLogger(__name__)

# Reactive primitive constructors are framework idioms, not data dependencies
DEFAULT_REACTIVE_CONSTRUCTORS = frozenset(
    {
        "ref",
        "computed",
        "watch",
        "reactive",
        "readonly",
        "shallowRef",
        "shallowReactive",
        "toRef",
        "toRefs",
        "nextTick",
        "watchEffect",
        "useFetch",
        "useLazyFetch",
        "useAsyncData",
        "useLazyAsyncData",
    }
)


@dataclass(frozen=True)
class BindingInfo:
    """A name introduced at the top level of a block"""

    name: str
    category: str | None
    dependencies: frozenset[str]
    ordinal: int


class IdentifierCollector(NodeVisitor):
    """Collect identifier names referenced as values, in first-seen order."""

    def __init__(self, denylist: Iterable[str] = ()):
        self.denylist = frozenset(denylist)
        self.names: list[str] = []
        self._seen: set[str] = set()

    def visit_Identifier(self, node: Node) -> None:
        name = node.name
        if isinstance(name, str) and name not in self.denylist and name not in self._seen:
            self._seen.add(name)
            self.names.append(name)

    def visit_Property(self, node: Node) -> None:
        # Plain keys name a slot, they do not read a binding
        if node.computed and isinstance(node.key, Node):
            self.visit(node.key)
        if isinstance(node.value, Node):
            self.visit(node.value)

    def visit_MemberExpression(self, node: Node) -> None:
        if isinstance(node.object, Node):
            self.visit(node.object)
        if node.computed and isinstance(node.property, Node):
            self.visit(node.property)


class DependencyAnalyzer:
    """Analyzes dependencies between top-level bindings."""

    def __init__(
        self,
        categorizer: Categorizer,
        reactive_constructors: Iterable[str] = DEFAULT_REACTIVE_CONSTRUCTORS,
    ):
        self.categorizer = categorizer
        self.reactive_constructors = frozenset(reactive_constructors)

    def collect_identifiers(self, node: Node) -> list[str]:
        """Identifier names referenced anywhere inside an expression tree."""
        collector = IdentifierCollector(self.reactive_constructors)
        collector.visit(node)
        return collector.names

    def extract_dependencies(self, statement: StatementDescriptor) -> list[str]:
        """
        Referenced names in the initializers of a variable statement.

        Args:
            statement: Statement to inspect

        Returns:
            Deduplicated names, in first-seen order; empty for non-variable statements
        """
        dependencies: list[str] = []
        for _pattern, init in statement.declarations:
            if init is None:
                continue
            for name in self.collect_identifiers(init):
                if name not in dependencies:
                    dependencies.append(name)
        return dependencies

    def analyze(
        self,
        statements: list[StatementDescriptor],
        categories: list[str] | None = None,
    ) -> list[BindingInfo]:
        """
        Build one BindingInfo per introduced name.

        Dependencies are restricted to names introduced somewhere in the same
        statement list, excluding names introduced by the statement itself.

        Args:
            statements: Top-level statements of one block
            categories: Precomputed categories, index-aligned with ``statements``

        Returns:
            List of BindingInfo in source order
        """
        if categories is None:
            categories = self.categorizer.categorize_all(statements)

        introduced = [extract_introduced_names(statement) for statement in statements]
        local_names = {name for names in introduced for name in names}

        bindings = []
        for index, statement in enumerate(statements):
            names = introduced[index]
            if not names:
                continue

            dependencies = frozenset(
                dep
                for dep in self.extract_dependencies(statement)
                if dep in local_names and dep not in names
            )
            for name in names:
                bindings.append(
                    BindingInfo(
                        name=name,
                        category=categories[index],
                        dependencies=dependencies,
                        ordinal=statement.ordinal,
                    )
                )

        logger.debug(f"Analyzed {len(bindings)} bindings")
        return bindings
