"""
Core modules for script setup ordering
"""

from .categorizer import Categorizer
from .classification_rule_category import (
    DEFAULT_CATEGORY,
    DEFAULT_ORDER,
    CategoryRule,
    get_default_category_rules,
    merge_category_rules,
)
from .config import LintConfig
from .cycle_detector import CycleDetector, depends_on, has_direct_cycle, has_transitive_cycle
from .dependency_analyzer import BindingInfo, DependencyAnalyzer
from .hover import CategoryLookup, lookup_category
from .linter import ScriptSetupLinter
from .order_checker import (
    Diagnostic,
    DiagnosticKind,
    HighWatermarkStrategy,
    PairwisePredecessorStrategy,
)
from .pattern_matcher import PatternMatcher
from .statements import StatementDescriptor, StatementKind

__all__ = [
    # Classes
    "BindingInfo",
    "Categorizer",
    "CategoryLookup",
    "CategoryRule",
    "CycleDetector",
    "DependencyAnalyzer",
    "Diagnostic",
    "DiagnosticKind",
    "HighWatermarkStrategy",
    "LintConfig",
    "PairwisePredecessorStrategy",
    "PatternMatcher",
    "ScriptSetupLinter",
    "StatementDescriptor",
    "StatementKind",
    # Functions
    "depends_on",
    "get_default_category_rules",
    "has_direct_cycle",
    "has_transitive_cycle",
    "lookup_category",
    "merge_category_rules",
    # Constants
    "DEFAULT_CATEGORY",
    "DEFAULT_ORDER",
]
