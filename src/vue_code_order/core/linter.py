"""
Script setup order linter.

Runs the whole pipeline on one block: statement descriptors, categories,
binding dependencies, then the configured order strategy. Every structure is
rebuilt per block; only the read-only configuration is shared.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .base_processor import BaseProcessor, ProcessingStatus, ProcessResult
from .categorizer import Categorizer
from .config import LintConfig
from .dependency_analyzer import BindingInfo, DependencyAnalyzer
from .estree import Node, ensure_node
from .order_checker import CheckContext, Diagnostic, get_strategy
from .statements import StatementDescriptor, statements_from_program

logger = logging.getLogger(__name__)


@dataclass
class BlockAnalysis:
    """Intermediate and final results for one linted block"""

    statements: list[StatementDescriptor]
    categories: list[str] = field(default_factory=list)
    bindings: list[BindingInfo] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)


class ScriptSetupLinter(BaseProcessor):
    """Lint the top-level statement order of script setup blocks.

    Files are ESTree dumps in JSON: either a bare ``Program`` node or an
    object ``{"filename": ..., "source": ..., "ast": Program}``.
    """

    def __init__(self, config: LintConfig | None = None):
        super().__init__(config or LintConfig())
        self.rules = self.config.build_rules()
        self.strategy = get_strategy(self.config.strategy)

    # ============================================================
    # BLOCK ANALYSIS
    # ============================================================

    def analyze_block(self, statements: list[StatementDescriptor]) -> BlockAnalysis:
        """Categorize, analyze dependencies and check the order of one block."""
        categorizer = Categorizer(self.rules, default_category=self.config.default_category)
        categories = categorizer.categorize_all(statements)
        bindings = DependencyAnalyzer(
            categorizer, self.config.reactive_constructors
        ).analyze(statements, categories)

        context = CheckContext(
            categories=categories,
            order=self.config.order,
            rules=self.rules,
            bindings=bindings,
            allow_cyclic_dependencies=self.config.allow_cyclic_dependencies,
            skip_categories=frozenset(self.config.skip_dependency_check),
            rule_name=self.config.rule_name,
            plugin_name=self.config.plugin_name,
        )
        diagnostics = self.strategy.check(statements, context)

        return BlockAnalysis(
            statements=statements,
            categories=categories,
            bindings=bindings,
            diagnostics=diagnostics,
        )

    def lint_statements(self, statements: list[StatementDescriptor]) -> list[Diagnostic]:
        return self.analyze_block(statements).diagnostics

    def lint_program(self, program: Node | dict[str, Any]) -> list[Diagnostic]:
        """Lint the body of an ESTree Program node."""
        return self.lint_statements(statements_from_program(program))

    def should_lint(self, filename: str | None = None, source: str | None = None) -> bool:
        """Apply the file extension and script setup filters.

        Unknown filenames and missing sources never filter a block out.
        """
        if filename and self.config.file_extensions:
            if not any(filename.endswith(ext) for ext in self.config.file_extensions):
                return False
        if self.config.only_script_setup and source is not None:
            if "<script setup" not in source:
                return False
        return True

    # ============================================================
    # FILE PROCESSING
    # ============================================================

    def can_process(self, file_path: Path) -> bool:
        return file_path.suffix == ".json"

    def process_file(self, file_path: Path, **kwargs) -> ProcessResult:
        """
        Lint one ESTree JSON dump

        Args:
            file_path: Path to the JSON file

        Returns:
            ProcessResult with the diagnostics found
        """
        try:
            data = json.loads(self.read_file(file_path))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            return ProcessResult(
                file_path=file_path,
                status=ProcessingStatus.ERROR,
                error_message=f"Cannot read ESTree JSON: {e}",
            )

        if not isinstance(data, dict):
            return ProcessResult(
                file_path=file_path,
                status=ProcessingStatus.ERROR,
                error_message="ESTree JSON must be an object",
            )

        program = data.get("ast", data)
        if not self.should_lint(data.get("filename"), data.get("source")):
            self.logger.debug(f"Skipping {file_path}: filtered by filename or source")
            return ProcessResult(file_path=file_path, status=ProcessingStatus.SKIPPED)

        try:
            diagnostics = self.lint_program(ensure_node(program))
        except ValueError as e:
            return ProcessResult(
                file_path=file_path,
                status=ProcessingStatus.ERROR,
                error_message=str(e),
            )

        status = ProcessingStatus.VIOLATIONS if diagnostics else ProcessingStatus.SUCCESS
        self.logger.debug(f"{file_path}: {len(diagnostics)} diagnostics")
        return ProcessResult(file_path=file_path, status=status, diagnostics=diagnostics)
