"""
Category lookup for editor integrations.

A degraded-input variant of the categorizer for contexts without a syntax
tree: an editor hover only knows the word under the cursor and the raw text
of its line.
"""

import logging
import re
from dataclasses import dataclass

from .config import LintConfig
from .pattern_matcher import PatternMatcher

logger = logging.getLogger(__name__)

# Probable callee of a line, most specific form first
LINE_CALL_PATTERNS = [
    # const data = useData()
    re.compile(r"const\s+[\w{}\[\],\s]+\s*=\s*(?:await\s+)?(\w+)\s*\("),
    # let result = await useFetch()
    re.compile(r"let\s+[\w{}\[\],\s]+\s*=\s*(?:await\s+)?(\w+)\s*\("),
    # var info = someFunction()
    re.compile(r"var\s+[\w{}\[\],\s]+\s*=\s*(?:await\s+)?(\w+)\s*\("),
    # const { data } = useQuery()
    re.compile(r"const\s*\{[^}]+\}\s*=\s*(?:await\s+)?(\w+)\s*\("),
    # const [state, setState] = useState()
    re.compile(r"const\s*\[[^\]]+\]\s*=\s*(?:await\s+)?(\w+)\s*\("),
    # bare call anywhere on the line
    re.compile(r"(\w+)\s*\("),
]

SCRIPT_SETUP_OPEN = re.compile(r"<script\s+setup[^>]*>", re.IGNORECASE)
SCRIPT_CLOSE = re.compile(r"</script>", re.IGNORECASE)


@dataclass
class CategoryLookup:
    """Hover information for one identifier"""

    name: str
    description: str
    order_rank: int | None = None


def extract_function_call(line_text: str) -> str | None:
    """Regex-extract the probable callee of a line of source text."""
    for pattern in LINE_CALL_PATTERNS:
        match = pattern.search(line_text)
        if match and match.group(1):
            return match.group(1)
    return None


def lookup_category(
    identifier: str,
    line_text: str = "",
    config: LintConfig | None = None,
) -> CategoryLookup | None:
    """
    Find the category of an identifier shown in an editor.

    The identifier itself is matched first, then the callee guessed from the
    line text; anything else falls back to the default category.

    Args:
        identifier: Word under the cursor
        line_text: Full text of the line holding the word
        config: Configuration providing rules and order (defaults if omitted)

    Returns:
        CategoryLookup, or None when both inputs are blank
    """
    if not identifier.strip() and not line_text.strip():
        return None

    config = config or LintConfig()
    rules = config.build_rules()
    matcher = PatternMatcher(rules)

    category = matcher.match(identifier.strip())
    if not category:
        function_call = extract_function_call(line_text)
        if function_call:
            category = matcher.match(function_call)

    if not category:
        logger.debug(f"No category for {identifier!r}, using {config.default_category}")
        category = config.default_category

    rule = rules.get(category)
    return CategoryLookup(
        name=category,
        description=rule.description if rule else category,
        order_rank=config.order.index(category) if category in config.order else None,
    )


def is_in_script_setup_block(text: str, offset: int) -> bool:
    """Check whether a character offset lies inside a ``<script setup>`` block."""
    for opening in SCRIPT_SETUP_OPEN.finditer(text):
        start = opening.end()
        closing = SCRIPT_CLOSE.search(text, start)
        if closing and start <= offset <= closing.start():
            return True
    return False


def format_hover(lookup: CategoryLookup, show_description: bool = True) -> str:
    """Render a lookup as hover markdown."""
    content = f"**Vue Code Order Category:** `{lookup.name}`"
    if show_description and lookup.description:
        content += f"\n\n{lookup.description}"
    if lookup.order_rank is not None:
        content += f"\n\n*Order position: {lookup.order_rank + 1}*"
    return content
