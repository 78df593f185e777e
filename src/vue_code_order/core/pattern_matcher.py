"""
Name matching against the category rule table
"""

import logging
import re
from collections.abc import Mapping

from .classification_rule_category import CategoryRule

logger = logging.getLogger(__name__)


class PatternMatcher:
    """Match bare identifier names against category patterns.

    Compiled patterns are cached on the instance, keyed by the raw pattern
    string. Build one matcher per lint run so a cache never outlives the
    rule table it was filled from.
    """

    def __init__(self, rules: Mapping[str, CategoryRule]):
        self.rules = rules
        self._compiled: dict[str, re.Pattern | None] = {}

    def compile(self, pattern: str) -> re.Pattern | None:
        """Compile a pattern, returning None (and warning once) when it is malformed."""
        if not isinstance(pattern, str):
            logger.warning(f"Ignoring non-string pattern {pattern!r}")
            return None

        if pattern in self._compiled:
            return self._compiled[pattern]

        try:
            compiled = re.compile(pattern)
        except re.error as e:
            logger.warning(f"Invalid regex pattern {pattern!r}, treated as non-matching: {e}")
            compiled = None

        self._compiled[pattern] = compiled
        return compiled

    def match(self, name: str) -> str | None:
        """Return the first category owning a pattern found in ``name``.

        Categories are tried in table order and patterns in list order;
        patterns are searched, not anchored.
        """
        if not name:
            return None

        for category, rule in self.rules.items():
            for pattern in rule.patterns:
                compiled = self.compile(pattern)
                if compiled is not None and compiled.search(name):
                    return category

        return None


def find_category_by_pattern(
    name: str,
    rules: Mapping[str, CategoryRule],
) -> str | None:
    """One-off lookup with a throwaway matcher."""
    return PatternMatcher(rules).match(name)
