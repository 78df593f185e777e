"""
Command module for checking script setup statement order
"""

import logging
from pathlib import Path

from rich.console import Console
from rich.text import Text

from ..core.base_processor import ProcessingStatus, ProcessResult
from ..core.config import LintConfig
from ..core.linter import ScriptSetupLinter

logger = logging.getLogger(__name__)


class CheckCommand:
    """Command handler for linting ESTree dumps of script setup blocks"""

    def __init__(self, config: LintConfig, console: Console | None = None):
        """Initialize check command with configuration"""
        self.config = config
        self.linter = ScriptSetupLinter(config)
        self.console = console or Console(soft_wrap=True, highlight=False)

    def execute(self, paths: list[Path], recursive: bool = False) -> list[ProcessResult]:
        """
        Lint every ESTree JSON file found under the given paths

        Args:
            paths: Files or directories to check
            recursive: Descend into subdirectories

        Returns:
            One ProcessResult per file
        """
        files = self.collect_files(paths, recursive)
        logger.info(f"Checking {len(files)} files")

        results = self.linter.process_batch(files)
        for result in results:
            self._print_result(result)

        self._print_summary(results)
        return results

    def collect_files(self, paths: list[Path], recursive: bool = False) -> list[Path]:
        """Expand directories into the JSON files they contain"""
        files = []
        pattern = "**/*.json" if recursive else "*.json"
        for path in paths:
            if path.is_dir():
                files.extend(sorted(path.glob(pattern)))
            else:
                files.append(path)
        return files

    # ========================================================================
    # OUTPUT
    # ========================================================================

    def _print_result(self, result: ProcessResult) -> None:
        if result.status == ProcessingStatus.SUCCESS and self.config.quiet:
            return
        if result.status == ProcessingStatus.SKIPPED and not self.config.verbose:
            return

        style = {
            ProcessingStatus.SUCCESS: "green",
            ProcessingStatus.VIOLATIONS: "red",
            ProcessingStatus.ERROR: "bold red",
            ProcessingStatus.SKIPPED: "dim",
        }[result.status]
        self.console.print(Text(str(result), style=style))

        for diagnostic in result.diagnostics:
            line = Text("  ")
            line.append(f"{diagnostic.line or 0}:{diagnostic.column or 0}", style="dim")
            line.append("  error  ", style="red")
            line.append(diagnostic.message)
            line.append(f"  {diagnostic.message_id}", style="dim")
            self.console.print(line)

    def _print_summary(self, results: list[ProcessResult]) -> None:
        """Print summary of the run"""
        if self.config.quiet:
            return

        problems = sum(len(r.diagnostics) for r in results)
        errors = sum(1 for r in results if r.status == ProcessingStatus.ERROR)
        checked = sum(1 for r in results if r.status != ProcessingStatus.SKIPPED)

        self.console.print(Text("=" * 60))
        if problems == 0 and errors == 0:
            self.console.print(Text(f"✓ {checked} files checked, no problems", style="green"))
        else:
            self.console.print(
                Text(
                    f"✗ {problems} problems in {checked} files ({errors} errors)",
                    style="red",
                )
            )
