"""
Unit tests for the editor category lookup
"""

import pytest
from vue_code_order.core.config import LintConfig
from vue_code_order.core.hover import (
    CategoryLookup,
    extract_function_call,
    format_hover,
    is_in_script_setup_block,
    lookup_category,
)


class TestExtractFunctionCall:
    """Test callee guessing from raw line text"""

    @pytest.mark.parametrize(
        "line, expected",
        [
            ("const data = useData()", "useData"),
            ("let result = await useFetch('/api')", "useFetch"),
            ("var info = someFunction(1, 2)", "someFunction"),
            ("const { data, pending } = await useAsyncData('key', load)", "useAsyncData"),
            ("const [state, setState] = useState(0)", "useState"),
            ("watch(route, () => refresh())", "watch"),
            ("  onMounted(() => {", "onMounted"),
        ],
    )
    def test_callee(self, line, expected):
        assert extract_function_call(line) == expected

    def test_no_call(self):
        assert extract_function_call("const count = 1") is None
        assert extract_function_call("") is None


class TestLookupCategory:
    """Test identifier lookups"""

    def test_identifier_match(self):
        """Test the identifier itself is matched first"""
        result = lookup_category("useUserStore")

        assert result == CategoryLookup(
            name="stores",
            description="Store initialization",
            order_rank=3,
        )

    def test_line_fallback(self):
        """Test the callee of the line is used when the identifier is unknown"""
        result = lookup_category("events", "const { data: events } = await useFetch('/api')")

        assert result.name == "server-requests"

    def test_identifier_wins_over_line(self):
        result = lookup_category("message", "const message = useRoute()")

        assert result.name == "variables"

    def test_default_category(self):
        """Test unknown names get the default category"""
        result = lookup_category("zzz", "zzz = 1")

        assert result.name == "app-functions"
        assert result.description == "Application functions and event handlers"

    def test_blank_input(self):
        assert lookup_category("", "") is None
        assert lookup_category("  ", "   ") is None

    def test_custom_config(self):
        """Test groups and order of a configuration are used"""
        config = LintConfig(
            order=["analytics"],
            groups={"analytics": {"patterns": ["^useTracker"], "description": "Trackers"}},
        )

        custom = lookup_category("useTrackerEvents", config=config)
        unlisted = lookup_category("useUserStore", config=config)

        assert custom == CategoryLookup(name="analytics", description="Trackers", order_rank=0)
        assert unlisted.order_rank is None


class TestEditorHelpers:
    """Test script setup detection and hover rendering"""

    SFC = (
        "<template>\n  <div>{{ message }}</div>\n</template>\n\n"
        '<script setup lang="ts">\nconst message = ref("Hello")\n</script>\n'
    )

    def test_inside_script_setup(self):
        offset = self.SFC.index("const message")

        assert is_in_script_setup_block(self.SFC, offset)

    def test_outside_script_setup(self):
        assert not is_in_script_setup_block(self.SFC, self.SFC.index("{{ message }}"))
        assert not is_in_script_setup_block(self.SFC, len(self.SFC) - 1)

    def test_plain_script_block(self):
        text = "<script>\nexport default {}\n</script>"

        assert not is_in_script_setup_block(text, text.index("export"))

    def test_unclosed_block(self):
        text = "<script setup>\nconst a = 1"

        assert not is_in_script_setup_block(text, text.index("const"))

    def test_format_hover(self):
        lookup = CategoryLookup(name="stores", description="Store initialization", order_rank=3)

        assert format_hover(lookup) == (
            "**Vue Code Order Category:** `stores`\n\n"
            "Store initialization\n\n"
            "*Order position: 4*"
        )

    def test_format_hover_minimal(self):
        lookup = CategoryLookup(name="custom", description="Custom", order_rank=None)

        assert format_hover(lookup, show_description=False) == (
            "**Vue Code Order Category:** `custom`"
        )
