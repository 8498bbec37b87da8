"""
Configuration Management
Centralized configuration loading and validation for all planner components.
Supports YAML, JSON, and environment variable overrides.
"""

import os
import yaml
import json
import logging
import copy
from typing import Dict, List, Optional, Any
from pathlib import Path
from dataclasses import dataclass, field, fields, asdict


@dataclass
class SystemConfig:
    """Complete system configuration."""

    # Core modules
    planning: Dict[str, Any] = field(default_factory=dict)
    scene: Dict[str, Any] = field(default_factory=dict)
    evaluation: Dict[str, Any] = field(default_factory=dict)
    visualization: Dict[str, Any] = field(default_factory=dict)
    # System settings
    logging: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return getattr(self, key, default)


class ConfigManager:
    """
    Configuration management system.
    Handles loading, environment overrides, caching and saving of configurations.
    """

    def __init__(self, config_dir: str = "config"):
        self.config_dir = Path(config_dir)
        self.logger = logging.getLogger(__name__)

        # Configuration cache
        self._config_cache: Dict[str, SystemConfig] = {}

        # Default configuration paths
        self.default_configs = {
            "main": self.config_dir / "main_config.yaml",
        }

        # Environment variable prefix; nested keys are separated by a double underscore,
        # e.g. PATH_PLANNER_PLANNING__OPTIONS__GOAL_BIAS=0.2
        self.env_prefix = "PATH_PLANNER_"
        self.env_separator = "__"

        self.logger.debug(f"Config Manager initialized: {config_dir}")

    def load_config(self, config_name: str = "main") -> SystemConfig:
        """
        Load configuration from file with environment overrides.

        Args:
            config_name: Configuration name to load

        Returns:
            Loaded system configuration
        """
        if config_name in self._config_cache:
            return self._config_cache[config_name]

        config_path = self.default_configs.get(
            config_name, self.config_dir / f"{config_name}_config.yaml"
        )

        if not config_path.exists():
            self.logger.warning(f"Config file not found: {config_path}")
            config_data = {}
        else:
            config_data = self._load_config_file(config_path)

        system_config = self.build_config(config_data)

        self._config_cache[config_name] = system_config

        self.logger.info(f"Configuration loaded: {config_name}")
        return system_config

    def build_config(self, config_data: Dict[str, Any]) -> SystemConfig:
        """Apply environment overrides and drop unknown sections."""
        config_data = self._apply_env_overrides(config_data or {})

        known = {f.name for f in fields(SystemConfig)}
        unknown = sorted(set(config_data) - known)
        if unknown:
            self.logger.warning(f"Ignoring unknown config sections: {unknown}")

        return SystemConfig(**{k: v for k, v in config_data.items() if k in known})

    def _load_config_file(self, config_path: Path) -> Dict[str, Any]:
        """Load configuration from YAML or JSON file."""
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                if config_path.suffix.lower() in [".yaml", ".yml"]:
                    return yaml.safe_load(f) or {}
                elif config_path.suffix.lower() == ".json":
                    return json.load(f)
                else:
                    raise ValueError(f"Unsupported config format: {config_path.suffix}")

        except (OSError, ValueError, yaml.YAMLError) as e:
            self.logger.error(f"Failed to load config {config_path}: {e}")
            return {}

    def _apply_env_overrides(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides."""
        overrides: Dict[str, Any] = {}

        for key, value in os.environ.items():
            if key.startswith(self.env_prefix):
                config_key = key[len(self.env_prefix):].lower()
                config_path = config_key.split(self.env_separator)

                self._set_nested_value(overrides, config_path, self._parse_env_value(value))

        if overrides:
            config_data = self._merge_configs(config_data, overrides)
            self.logger.info(f"Applied {len(overrides)} environment overrides")

        return config_data

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value to appropriate type."""
        # Try boolean
        if value.lower() in ["true", "false"]:
            return value.lower() == "true"

        # Try integer
        try:
            return int(value)
        except ValueError:
            pass

        # Try float
        try:
            return float(value)
        except ValueError:
            pass

        # Try JSON for complex types
        try:
            return json.loads(value)
        except (json.JSONDecodeError, ValueError):
            pass

        return value

    def _set_nested_value(self, config: Dict[str, Any], path: List[str], value: Any):
        """Set value in nested dictionary."""
        current = config
        for key in path[:-1]:
            if key not in current:
                current[key] = {}
            current = current[key]

        current[path[-1]] = value

    def _merge_configs(
        self, base_config: Dict[str, Any], override_config: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Recursively merge configuration dictionaries."""
        result = copy.deepcopy(base_config)

        for key, value in override_config.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value

        return result

    def save_config(self, config: SystemConfig, output_path: str):
        """Save configuration to file."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        config_dict = asdict(config)

        # Save based on extension
        with open(output_path, "w", encoding="utf-8") as f:
            if output_path.suffix.lower() in [".yaml", ".yml"]:
                yaml.safe_dump(config_dict, f, default_flow_style=False, indent=2)
            else:
                json.dump(config_dict, f, indent=2)

        self.logger.info(f"Configuration saved to {output_path}")


# Convenience functions
def load_config(config_path: Optional[str] = None) -> SystemConfig:
    """Load system configuration."""
    if config_path:
        custom_path = Path(config_path)
        manager = ConfigManager(str(custom_path.parent))

        if custom_path.exists():
            return manager.build_config(manager._load_config_file(custom_path))

        manager.logger.warning(f"Config file not found: {custom_path}")
        return manager.build_config({})

    return ConfigManager().load_config("main")


def validate_config(config: SystemConfig) -> Dict[str, List[str]]:
    """
    Validate system configuration.

    Returns:
        Dictionary of validation errors by component
    """
    errors = {}

    # Validate planning configuration
    planning_errors = []
    options = config.planning.get("options", {})

    if "iterations" in options and (not isinstance(options["iterations"], int) or options["iterations"] < 0):
        planning_errors.append("iterations must be a non-negative integer")
    if options.get("step", 1.0) <= 0:
        planning_errors.append("step must be positive")
    if options.get("radius", 0.0) < 0:
        planning_errors.append("radius must be non-negative")
    if not 0.0 <= options.get("goal_bias", 0.0) <= 1.0:
        planning_errors.append("goal_bias must be within [0, 1]")
    if config.planning.get("inflation_radius", 0.0) < 0:
        planning_errors.append("inflation_radius must be non-negative")

    if planning_errors:
        errors["planning"] = planning_errors

    # Validate scene configuration
    scene_errors = []
    for key in ("rows", "cols"):
        if key in config.scene and (not isinstance(config.scene[key], int) or config.scene[key] < 1):
            scene_errors.append(f"{key} must be a positive integer")
    for key in ("wall_density", "weight_probability"):
        if not 0.0 <= config.scene.get(key, 0.0) <= 1.0:
            scene_errors.append(f"{key} must be within [0, 1]")

    if scene_errors:
        errors["scene"] = scene_errors

    return errors
