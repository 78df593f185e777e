"""
Unit tests for the command line interface
"""

import json
from pathlib import Path

import pytest
import yaml
from builders import call, const, program
from click.testing import CliRunner
from vue_code_order import __version__
from vue_code_order.cli import cli
from vue_code_order.commands.check import CheckCommand
from vue_code_order.core.config import LintConfig


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch, mocker):
    """Keep the user's global configuration out of the tests"""
    home = tmp_path / "home"
    home.mkdir()
    mocker.patch.object(Path, "home", return_value=home)
    for key in [
        "VUE_CODE_ORDER_PRESET",
        "VUE_CODE_ORDER_STRATEGY",
        "VUE_CODE_ORDER_ALLOW_CYCLIC",
        "VUE_CODE_ORDER_SKIP",
    ]:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def runner():
    return CliRunner()


class TestCheckCommand:
    """Test the check command"""

    def test_clean_file(self, runner, write_dump, ordered_program):
        path = write_dump("ok.json", ordered_program)

        result = runner.invoke(cli, ["check", str(path)])

        assert result.exit_code == 0
        assert "ok.json: No problems" in result.output
        assert "1 files checked, no problems" in result.output

    def test_violations(self, runner, write_dump, misordered_program):
        path = write_dump("bad.json", misordered_program)

        result = runner.invoke(cli, ["check", str(path)])

        assert result.exit_code == 1
        assert "bad.json: 1 problems" in result.output
        assert "2:0" in result.output
        assert '"Framework initialization functions" should come before' in result.output
        assert "incorrectOrder" in result.output

    def test_suppressed_file(self, runner, write_dump, suppressed_program):
        path = write_dump("suppressed.json", suppressed_program)

        result = runner.invoke(cli, ["check", str(path)])

        assert result.exit_code == 0

    def test_skip_option(self, runner, write_dump, misordered_program):
        path = write_dump("bad.json", misordered_program)

        result = runner.invoke(cli, ["check", str(path), "--skip", "stores"])

        assert result.exit_code == 0

    def test_preset_option(self, runner, write_dump, misordered_program):
        """Test a preset without framework-init before stores"""
        path = write_dump("bad.json", misordered_program)
        config_path = path.parent / "order.yaml"
        config_path.write_text(yaml.safe_dump({"order": ["stores", "framework-init"]}))

        custom = runner.invoke(cli, ["--config", str(config_path), "check", str(path)])
        preset = runner.invoke(
            cli, ["--config", str(config_path), "check", str(path), "--preset", "strict"]
        )

        assert custom.exit_code == 0
        assert preset.exit_code == 1

    def test_directory(self, runner, write_dump, ordered_program, misordered_program):
        """Test directories are searched, recursively on request"""
        top = write_dump("dumps/ok.json", ordered_program)
        write_dump("dumps/nested/bad.json", misordered_program)

        flat = runner.invoke(cli, ["check", str(top.parent)])
        recursive = runner.invoke(cli, ["check", str(top.parent), "--recursive"])

        assert flat.exit_code == 0
        assert recursive.exit_code == 1
        assert "bad.json" in recursive.output

    def test_invalid_file(self, runner, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        result = runner.invoke(cli, ["check", str(path)])

        assert result.exit_code == 1
        assert "Cannot read ESTree JSON" in result.output

    def test_unsupported_file(self, runner, tmp_path):
        """Test a named file that is not a JSON dump fails the run"""
        path = tmp_path / "App.vue"
        path.write_text("<script setup>\n</script>\n")

        result = runner.invoke(cli, ["check", str(path)])

        assert result.exit_code == 1
        assert "App.vue: File type not supported by this processor" in result.output
        assert "(1 errors)" in result.output

    def test_quiet(self, runner, write_dump, ordered_program):
        path = write_dump("ok.json", ordered_program)

        result = runner.invoke(cli, ["--quiet", "check", str(path)])

        assert result.exit_code == 0
        assert "ok.json" not in result.output

    def test_invalid_configuration(self, runner, write_dump, ordered_program, tmp_path):
        path = write_dump("ok.json", ordered_program)
        config_path = tmp_path / "bad.yaml"
        config_path.write_text(yaml.safe_dump({"groups": {"x": {"patterns": ["[oops"]}}}))

        result = runner.invoke(cli, ["--config", str(config_path), "check", str(path)])

        assert result.exit_code == 1
        assert "Configuration error: Invalid pattern in group x" in result.output

    def test_requires_paths(self, runner):
        result = runner.invoke(cli, ["check"])

        assert result.exit_code == 2

    def test_collect_files(self, tmp_path):
        """Test directory expansion of the command handler"""
        (tmp_path / "sub").mkdir()
        (tmp_path / "a.json").write_text("{}")
        (tmp_path / "sub" / "b.json").write_text("{}")
        (tmp_path / "c.txt").write_text("")

        command = CheckCommand(LintConfig())

        assert command.collect_files([tmp_path]) == [tmp_path / "a.json"]
        assert command.collect_files([tmp_path], recursive=True) == [
            tmp_path / "a.json",
            tmp_path / "sub" / "b.json",
        ]


class TestOtherCommands:
    """Test lookup, categories and init"""

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_lookup(self, runner):
        result = runner.invoke(cli, ["lookup", "useUserStore"])

        assert result.exit_code == 0
        assert "`stores`" in result.output
        assert "Store initialization" in result.output
        assert "Order position: 4" in result.output

    def test_lookup_with_line(self, runner):
        result = runner.invoke(
            cli,
            ["lookup", "events", "--line", "const { data: events } = await useFetch('/api')"],
        )

        assert "`server-requests`" in result.output

    def test_lookup_without_description(self, runner):
        result = runner.invoke(cli, ["lookup", "useUserStore", "--no-description"])

        assert "Store initialization" not in result.output

    def test_commands_accept_list_groups(self, runner, write_dump, tmp_path):
        """Test groups written as bare pattern lists work for every command"""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("groups:\n  stores: ['^useCart$']\n")

        looked_up = runner.invoke(cli, ["-c", str(config_file), "lookup", "useCart"])
        listed = runner.invoke(cli, ["-c", str(config_file), "categories"])

        assert looked_up.exit_code == 0, looked_up.output
        assert "`stores`" in looked_up.output
        assert listed.exit_code == 0, listed.output

        path = write_dump(
            "cart.json",
            program(const("cart", call("useCart")), const("route", call("useRoute"))),
        )
        checked = runner.invoke(cli, ["-c", str(config_file), "check", str(path)])

        assert checked.exit_code == 1
        assert "incorrectOrder" in checked.output

    def test_lookup_blank(self, runner):
        result = runner.invoke(cli, ["lookup", " "])

        assert result.exit_code == 1

    def test_categories(self, runner):
        result = runner.invoke(cli, ["categories"])

        assert result.exit_code == 0
        assert "imports" in result.output
        assert "stores" in result.output

    def test_init(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(cli, ["init", "--preset", "strict"])

            assert result.exit_code == 0
            config_path = Path(".vue-code-order.yaml")
            assert config_path.exists()
            assert LintConfig.from_file(config_path).order[0] == "framework-init"

    def test_init_keeps_existing_file(self, runner):
        with runner.isolated_filesystem():
            Path(".vue-code-order.yaml").write_text(json.dumps({"strategy": "watermark"}))

            result = runner.invoke(cli, ["init"], input="n\n")

            assert result.exit_code == 1
            assert "watermark" in Path(".vue-code-order.yaml").read_text()
