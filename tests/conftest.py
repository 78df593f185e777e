"""
Pytest configuration and shared fixtures
"""

import json
import sys
from pathlib import Path

import pytest

# Add src (package) and tests (builders) to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent))

from builders import call, const, expr, ident, import_, line_comment, program  # noqa: E402


@pytest.fixture
def ordered_program() -> dict:
    """Script setup block in the default order"""
    return program(
        import_("vue", "ref", "computed"),
        const("route", call("useRoute")),
        const("authStore", call("useAuthStore")),
        const("message", call("ref", "Hello")),
        const("title", call("computed", ident("message"))),
        expr(call("onMounted")),
    )


@pytest.fixture
def misordered_program() -> dict:
    """Store initialized before the router"""
    return program(
        const("authStore", call("useAuthStore")),
        const("route", call("useRoute")),
    )


@pytest.fixture
def suppressed_program() -> dict:
    """Misordered statement behind a disable directive"""
    return program(
        const("authStore", call("useAuthStore")),
        line_comment(" eslint-disable-next-line vue-code-order/vue-script-setup-order"),
        const("route", call("useRoute")),
    )


@pytest.fixture
def write_dump(tmp_path: Path):
    """Write an ESTree dump and return its path"""

    def _write(name: str, ast: dict, filename: str | None = "Component.vue", **extra) -> Path:
        data = {"ast": ast, **extra}
        if filename is not None:
            data["filename"] = filename
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
