"""
Unit tests for binding dependency analysis
"""

import pytest
from builders import (
    arrow,
    call,
    const,
    expr,
    function_decl,
    ident,
    member,
    obj,
    obj_pattern,
)
from vue_code_order.core.categorizer import Categorizer
from vue_code_order.core.classification_rule_category import get_default_category_rules
from vue_code_order.core.dependency_analyzer import (
    DEFAULT_REACTIVE_CONSTRUCTORS,
    BindingInfo,
    DependencyAnalyzer,
)
from vue_code_order.core.estree import Node
from vue_code_order.core.statements import build_statements


@pytest.fixture
def analyzer():
    return DependencyAnalyzer(Categorizer(get_default_category_rules()))


def by_name(bindings: list[BindingInfo]) -> dict[str, BindingInfo]:
    return {binding.name: binding for binding in bindings}


class TestIdentifierCollection:
    """Test which identifiers count as references"""

    def test_reactive_constructors_are_ignored(self, analyzer):
        """Test ref/computed/... are not dependencies"""
        names = analyzer.collect_identifiers(
            Node.from_dict(call("computed", arrow(call("ref", ident("count")))))
        )

        assert names == ["count"]

    def test_plain_object_keys_are_ignored(self, analyzer):
        """Test non-computed keys name slots, values are references"""
        names = analyzer.collect_identifiers(Node.from_dict(obj(route=ident("currentRoute"))))

        assert names == ["currentRoute"]

    def test_computed_keys_are_references(self, analyzer):
        """Test [key]: value collects both sides"""
        data = {
            "type": "ObjectExpression",
            "properties": [
                {
                    "type": "Property",
                    "key": ident("field"),
                    "value": ident("value"),
                    "computed": True,
                    "shorthand": False,
                }
            ],
        }

        assert analyzer.collect_identifiers(Node.from_dict(data)) == ["field", "value"]

    def test_member_properties(self, analyzer):
        """Test a.b collects a only, a[b] collects both"""
        dotted = Node.from_dict(member("store", "route"))
        indexed = Node.from_dict(member("store", "route", computed=True))

        assert analyzer.collect_identifiers(dotted) == ["store"]
        assert analyzer.collect_identifiers(indexed) == ["store", "route"]

    def test_first_seen_order_without_duplicates(self, analyzer):
        names = analyzer.collect_identifiers(
            Node.from_dict(call("f", ident("b"), ident("a"), ident("b")))
        )

        assert names == ["f", "b", "a"]

    def test_custom_denylist(self):
        """Test the reactive constructor list is configurable"""
        analyzer = DependencyAnalyzer(
            Categorizer(get_default_category_rules()), reactive_constructors=["f"]
        )

        assert analyzer.collect_identifiers(Node.from_dict(call("f", ident("ref")))) == ["ref"]

    def test_default_denylist(self):
        assert {"ref", "computed", "watch", "useFetch", "useAsyncData"} <= (
            DEFAULT_REACTIVE_CONSTRUCTORS
        )


class TestAnalyze:
    """Test binding construction for a block"""

    def test_mutual_dependencies(self, analyzer):
        """Test two bindings referring to each other"""
        statements = build_statements(
            [
                const("a", call("ref", ident("b"))),
                const("b", call("computed", arrow(ident("a")))),
            ]
        )

        bindings = by_name(analyzer.analyze(statements))

        assert bindings["a"].dependencies == frozenset({"b"})
        assert bindings["a"].category == "libraries"
        assert bindings["b"].dependencies == frozenset({"a"})
        assert bindings["b"].category == "computed-hooks"

    def test_only_block_names_are_dependencies(self, analyzer):
        """Test globals and imports outside the bindings are dropped"""
        statements = build_statements(
            [
                const("route", call("useRoute")),
                const("title", call("useTitle", ident("window"), member("route", "name"))),
            ]
        )

        bindings = by_name(analyzer.analyze(statements))

        assert bindings["title"].dependencies == frozenset({"route"})
        assert bindings["route"].dependencies == frozenset()

    def test_own_names_are_excluded(self, analyzer):
        """Test a statement never depends on the names it introduces"""
        statements = build_statements(
            [
                const(
                    obj_pattern("data", "refresh"),
                    call("useAsyncData", "key", arrow(call("refresh"))),
                )
            ]
        )

        bindings = analyzer.analyze(statements)

        assert [b.name for b in bindings] == ["data", "refresh"]
        assert all(b.dependencies == frozenset() for b in bindings)

    def test_destructured_names_share_statement_data(self, analyzer):
        """Test every name of a statement gets its category and dependencies"""
        statements = build_statements(
            [
                const("userId", call("ref", 1)),
                const(obj_pattern("data", "pending"), call("useFetch", ident("userId"))),
            ]
        )

        bindings = by_name(analyzer.analyze(statements))

        assert bindings["data"].category == "server-requests"
        assert bindings["pending"].dependencies == frozenset({"userId"})
        assert bindings["pending"].ordinal == 1

    def test_forward_references_count(self, analyzer):
        """Test dependencies on names declared later in the block"""
        statements = build_statements(
            [
                const("total", call("computed", arrow(member("cart", "items")))),
                const("cart", call("useCartStore")),
            ]
        )

        bindings = by_name(analyzer.analyze(statements))

        assert bindings["total"].dependencies == frozenset({"cart"})

    def test_non_variable_statements_have_no_bindings(self, analyzer):
        """Test calls and functions introduce no bindings"""
        statements = build_statements(
            [
                expr(call("watch", ident("route"))),
                function_decl("handleClick"),
                const("route", call("useRoute")),
            ]
        )

        bindings = analyzer.analyze(statements)

        assert [b.name for b in bindings] == ["route"]
        assert analyzer.extract_dependencies(statements[0]) == []

    def test_precomputed_categories(self, analyzer):
        """Test supplied categories are used as-is"""
        statements = build_statements([const("x", call("ref"))])

        bindings = analyzer.analyze(statements, ["custom"])

        assert bindings[0].category == "custom"

    def test_declarator_without_init(self, analyzer):
        statements = build_statements([const("later", kind="let")])

        bindings = analyzer.analyze(statements)

        assert bindings[0].name == "later"
        assert bindings[0].dependencies == frozenset()
