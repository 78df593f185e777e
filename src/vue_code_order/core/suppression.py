"""
Inline suppression directives
"""

from collections.abc import Iterable

# "eslint-disable" also covers "eslint-disable-next-line" and "eslint-disable-line"
DISABLE_DIRECTIVES = ("eslint-disable-next-line", "eslint-disable")

RULE_NAME = "vue-script-setup-order"
PLUGIN_NAME = "vue-code-order"


def has_disable_directive(
    comments: Iterable[str],
    rule_name: str = RULE_NAME,
    plugin_name: str = PLUGIN_NAME,
) -> bool:
    """Check whether any preceding comment disables this rule.

    A comment counts when it carries a disable directive together with
    either the rule name or the plugin-wide name.

    Args:
        comments: Texts of the comments immediately preceding a statement
        rule_name: Identifier of this rule
        plugin_name: Identifier covering every rule of the plugin

    Returns:
        True if the statement is suppressed
    """
    for comment in comments:
        text = comment.strip()
        if not any(directive in text for directive in DISABLE_DIRECTIVES):
            continue
        if rule_name in text or plugin_name in text:
            return True
    return False
