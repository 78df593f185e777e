"""
Configuration system for vue-code-order
"""

import json
import logging
import os
import re
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from .classification_rule_category import (
    DEFAULT_CATEGORY,
    DEFAULT_ORDER,
    ORDER_PRESETS,
    CategoryRule,
    get_default_category_rules,
    get_order_preset,
    merge_category_rules,
)
from .dependency_analyzer import DEFAULT_REACTIVE_CONSTRUCTORS
from .order_checker import STRATEGIES
from .suppression import PLUGIN_NAME, RULE_NAME

logger = logging.getLogger(__name__)

GLOBAL_CONFIG_DIR = ".vue-code-order"
PROJECT_CONFIG_NAME = ".vue-code-order.yaml"

# ESLint rule option names -> config attributes
ESLINT_OPTION_KEYS = {
    "order": "order",
    "groups": "groups",
    "allowCyclicDependencies": "allow_cyclic_dependencies",
    "skipDependencyCheck": "skip_dependency_check",
}

TRUE_VALUES = ["true", "1", "yes"]


@dataclass
class LintConfig:
    """Main configuration class for vue-code-order"""

    # Ordering
    order: list[str] = field(default_factory=lambda: list(DEFAULT_ORDER))
    groups: dict[str, dict[str, Any]] = field(default_factory=dict)
    default_category: str = DEFAULT_CATEGORY
    strategy: str = "pairwise"  # pairwise or watermark

    # Dependency handling
    allow_cyclic_dependencies: bool = False
    skip_dependency_check: list[str] = field(default_factory=list)
    reactive_constructors: list[str] = field(
        default_factory=lambda: sorted(DEFAULT_REACTIVE_CONSTRUCTORS)
    )

    # Suppression directives
    rule_name: str = RULE_NAME
    plugin_name: str = PLUGIN_NAME

    # File selection
    file_extensions: list[str] = field(default_factory=lambda: [".vue"])
    only_script_setup: bool = False

    # Output
    verbose: bool = False
    quiet: bool = False

    @classmethod
    def from_file(cls, filepath: Path) -> "LintConfig":
        """Load configuration from YAML or JSON file"""
        if not filepath.exists():
            logger.warning(f"Config file not found: {filepath}")
            return cls()

        try:
            with open(filepath, "r", encoding="utf-8") as f:
                if filepath.suffix in [".yaml", ".yml"]:
                    data = yaml.safe_load(f) or {}
                elif filepath.suffix == ".json":
                    data = json.load(f)
                else:
                    logger.error(f"Unsupported config file format: {filepath.suffix}")
                    return cls()

            if not isinstance(data, dict):
                logger.error(f"Config file {filepath} does not contain a mapping")
                return cls()

            return cls._from_dict(data)
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            logger.error(f"Error loading config file: {e}")
            return cls()

    @classmethod
    def from_options(cls, options: dict[str, Any] | None) -> "LintConfig":
        """Create a config from an ESLint-style rule option object.

        Both the ESLint option names (``allowCyclicDependencies``) and the
        snake_case attribute names are accepted.
        """
        data = {}
        for key, value in (options or {}).items():
            data[ESLINT_OPTION_KEYS.get(key, key)] = value
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "LintConfig":
        """Create LintConfig instance from dictionary"""
        config = cls()

        if "preset" in data:
            config.apply_preset(data["preset"])

        known = {f.name for f in fields(cls)}
        for key, value in data.items():
            key = ESLINT_OPTION_KEYS.get(key, key)
            if key == "preset":
                continue
            if key not in known:
                logger.warning(f"Ignoring unknown config key: {key}")
                continue
            if key in ("order", "skip_dependency_check", "reactive_constructors", "file_extensions"):
                value = list(value or [])
            elif key == "groups":
                if value and not isinstance(value, dict):
                    logger.warning("Ignoring groups: expected a mapping of group names")
                    continue
                value = dict(value or {})
            setattr(config, key, value)

        return config

    @classmethod
    def load_hierarchy(cls, project_dir: Path | None = None) -> "LintConfig":
        """Load configuration from hierarchy: global -> project -> env vars"""
        config = cls()

        # 1. Load global config
        global_config = Path.home() / GLOBAL_CONFIG_DIR / "config.yaml"
        if global_config.exists():
            config = cls.from_file(global_config)
            logger.debug(f"Loaded global config from {global_config}")

        # 2. Load project config
        if project_dir:
            project_config = project_dir / PROJECT_CONFIG_NAME
            if project_config.exists():
                config.merge(cls.from_file(project_config))
                logger.debug(f"Loaded project config from {project_config}")

        # 3. Apply environment variables
        config.apply_env_vars()

        return config

    def merge(self, other: "LintConfig") -> None:
        """Merge another config into this one (other takes precedence)"""
        defaults = self.__class__()
        for f in fields(self):
            value = getattr(other, f.name)
            if f.name == "groups":
                self.groups = {**self.groups, **other.groups}
            elif value != getattr(defaults, f.name):
                setattr(self, f.name, value)

    def apply_env_vars(self) -> None:
        """Apply environment variables to configuration"""
        # VUE_CODE_ORDER_PRESET
        if preset := os.environ.get("VUE_CODE_ORDER_PRESET"):
            self.apply_preset(preset)

        # VUE_CODE_ORDER_STRATEGY
        if strategy := os.environ.get("VUE_CODE_ORDER_STRATEGY"):
            self.strategy = strategy

        # VUE_CODE_ORDER_ALLOW_CYCLIC
        if os.environ.get("VUE_CODE_ORDER_ALLOW_CYCLIC", "").lower() in TRUE_VALUES:
            self.allow_cyclic_dependencies = True

        # VUE_CODE_ORDER_SKIP
        if skip := os.environ.get("VUE_CODE_ORDER_SKIP"):
            self.skip_dependency_check = [name.strip() for name in skip.split(",") if name.strip()]

    def apply_preset(self, name: str) -> None:
        """Replace the order with a named preset"""
        try:
            self.order = get_order_preset(name)
        except KeyError:
            logger.error(f"Unknown order preset: {name}")

    def build_rules(self) -> dict[str, CategoryRule]:
        """Default rule table with the configured groups merged in"""
        return merge_category_rules(get_default_category_rules(), self.groups)

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors"""
        errors = []

        if self.strategy not in STRATEGIES:
            errors.append(f"Invalid order strategy: {self.strategy}")

        seen = set()
        for category in self.order:
            if category in seen:
                errors.append(f"Duplicate category in order: {category}")
            seen.add(category)

        for name, group in self.groups.items():
            if isinstance(group, (list, str)):
                group = {"patterns": group}
            elif not isinstance(group, dict):
                errors.append(f"Group {name} must be a mapping or a list of patterns")
                continue
            patterns = group.get("patterns") or []
            if isinstance(patterns, str):
                patterns = [patterns]
            if not isinstance(patterns, list):
                errors.append(f"Patterns of group {name} must be a list")
                continue
            for pattern in patterns:
                try:
                    re.compile(pattern)
                except (re.error, TypeError) as e:
                    errors.append(f"Invalid pattern in group {name}: {pattern!r} ({e})")

        if not self.rule_name:
            errors.append("rule_name must not be empty")
        if not self.plugin_name:
            errors.append("plugin_name must not be empty")

        return errors

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary"""
        return asdict(self)

    def save(self, filepath: Path) -> None:
        """Save configuration to file"""
        data = self.to_dict()

        with open(filepath, "w", encoding="utf-8") as f:
            if filepath.suffix in [".yaml", ".yml"]:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
            elif filepath.suffix == ".json":
                json.dump(data, f, indent=2)
            else:
                raise ValueError(f"Unsupported config file format: {filepath.suffix}")


def available_presets() -> list[str]:
    return list(ORDER_PRESETS)
