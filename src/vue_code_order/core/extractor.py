"""
Call and binding name extraction.

Derives the "names of interest" of a statement: the callee name of a
(possibly awaited, possibly chained or optional) call, and the identifiers a
variable statement introduces.
"""

import logging

from .estree import Node
from .statements import StatementDescriptor

logger = logging.getLogger(__name__)

# Receivers whose methods mirror Nuxt composables: nuxtApp.cookie() -> useCookie
FRAMEWORK_APP_OBJECTS = frozenset({"$nuxt", "nuxtApp"})


def _is(node, *types: str) -> bool:
    return isinstance(node, Node) and node.is_type(*types)


def extract_call_name(node: Node | None) -> str:
    """Return the callee name of a call expression, or ``""``.

    Handles ``f()``, ``a.b()``, ``a?.b?.()`` and nested member chains.
    """
    if _is(node, "ChainExpression"):
        node = node.expression
    if not _is(node, "CallExpression"):
        return ""

    callee = node.callee
    if _is(callee, "ChainExpression"):
        callee = callee.expression

    if _is(callee, "Identifier"):
        return callee.name or ""
    if _is(callee, "MemberExpression"):
        return get_member_call_name(callee)

    return ""


def get_member_call_name(node: Node | None) -> str:
    """Resolve the method name of a member-expression callee.

    The innermost resolvable method of a chain wins (``a.b.c()`` -> ``b``);
    the outer property is used when the object side yields nothing.
    """
    if not _is(node, "MemberExpression"):
        return ""

    prop = node.property
    if not _is(prop, "Identifier") or not prop.name:
        return ""
    method_name = prop.name

    receiver = node.object
    if _is(receiver, "Identifier"):
        if receiver.name in FRAMEWORK_APP_OBJECTS:
            return f"use{method_name[0].upper()}{method_name[1:]}"
        return method_name

    if _is(receiver, "MemberExpression"):
        return get_member_call_name(receiver) or method_name

    return method_name


def extract_callee(init: Node | None) -> str:
    """Callee name of an initializer or expression, unwrapping one ``await``."""
    if init is None:
        return ""
    if _is(init, "AwaitExpression"):
        init = init.argument
    return extract_call_name(init)


def get_object_pattern_names(pattern: Node | None) -> list[str]:
    """Property key names (and rest identifier) of a flat object pattern."""
    if not _is(pattern, "ObjectPattern"):
        return []

    names = []
    for prop in pattern.properties or []:
        if _is(prop, "Property") and _is(prop.key, "Identifier"):
            names.append(prop.key.name)
        elif _is(prop, "RestElement") and _is(prop.argument, "Identifier"):
            names.append(prop.argument.name)
    return names


def get_array_pattern_names(pattern: Node | None) -> list[str]:
    """Positional identifiers (and rest identifier) of a flat array pattern."""
    if not _is(pattern, "ArrayPattern"):
        return []

    names = []
    for element in pattern.elements or []:
        if _is(element, "Identifier"):
            names.append(element.name)
        elif _is(element, "RestElement") and _is(element.argument, "Identifier"):
            names.append(element.argument.name)
    return names


def get_binding_names(pattern: Node | None) -> list[str]:
    """Names introduced by one declarator's binding pattern."""
    if _is(pattern, "Identifier"):
        return [pattern.name] if pattern.name else []
    if _is(pattern, "ObjectPattern"):
        return get_object_pattern_names(pattern)
    if _is(pattern, "ArrayPattern"):
        return get_array_pattern_names(pattern)
    logger.debug(f"Unsupported binding pattern: {getattr(pattern, 'type', pattern)!r}")
    return []


def extract_introduced_names(statement: StatementDescriptor) -> list[str]:
    """Ordered names introduced by a statement (variable statements only)."""
    names = []
    for pattern, _init in statement.declarations:
        names.extend(get_binding_names(pattern))
    return names
