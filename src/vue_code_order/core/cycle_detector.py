"""
Cross-category dependency cycle detection.

Works on category-level aggregation: category X depends on category Y when
at least one binding of X names a binding of Y among its dependencies.
Only direct cycles (A <-> B) and loops through exactly one intermediate
category (A -> C -> B -> A, either rotation) are detected; longer loops are
not.
"""

import logging
from collections.abc import Iterable

from .dependency_analyzer import BindingInfo

logger = logging.getLogger(__name__)


class CycleDetector:
    """Category dependency relation of one block, built once and queried per pair."""

    def __init__(self, bindings: Iterable[BindingInfo]):
        self.bindings = list(bindings)
        self.categories: list[str] = []
        self.edges: set[tuple[str, str]] = set()
        self._build()

    def _build(self) -> None:
        categories_by_name: dict[str, set[str]] = {}
        for binding in self.bindings:
            if binding.category is None:
                continue
            if binding.category not in self.categories:
                self.categories.append(binding.category)
            categories_by_name.setdefault(binding.name, set()).add(binding.category)

        for binding in self.bindings:
            if binding.category is None:
                continue
            for dependency in binding.dependencies:
                for target in categories_by_name.get(dependency, ()):
                    self.edges.add((binding.category, target))

        logger.debug(f"Category dependency edges: {sorted(self.edges)}")

    def depends_on(self, from_category: str, to_category: str) -> bool:
        return (from_category, to_category) in self.edges

    def has_direct_cycle(self, category_a: str, category_b: str) -> bool:
        return self.depends_on(category_a, category_b) and self.depends_on(
            category_b, category_a
        )

    def has_transitive_cycle(self, category_a: str, category_b: str) -> bool:
        for intermediate in self.categories:
            if intermediate in (category_a, category_b):
                continue

            # A -> C -> B and B -> A
            if (
                self.depends_on(category_a, intermediate)
                and self.depends_on(intermediate, category_b)
                and self.depends_on(category_b, category_a)
            ):
                return True

            # B -> C -> A and A -> B
            if (
                self.depends_on(category_b, intermediate)
                and self.depends_on(intermediate, category_a)
                and self.depends_on(category_a, category_b)
            ):
                return True

        return False

    def has_cycle(self, category_a: str, category_b: str) -> bool:
        return self.has_direct_cycle(category_a, category_b) or self.has_transitive_cycle(
            category_a, category_b
        )


def depends_on(bindings: Iterable[BindingInfo], from_category: str, to_category: str) -> bool:
    """True if some binding of ``from_category`` depends on a binding of ``to_category``."""
    return CycleDetector(bindings).depends_on(from_category, to_category)


def has_direct_cycle(bindings: Iterable[BindingInfo], category_a: str, category_b: str) -> bool:
    """True if each of the two categories depends on the other."""
    return CycleDetector(bindings).has_direct_cycle(category_a, category_b)


def has_transitive_cycle(
    bindings: Iterable[BindingInfo], category_a: str, category_b: str
) -> bool:
    """True if the two categories close a loop through exactly one third category."""
    return CycleDetector(bindings).has_transitive_cycle(category_a, category_b)
