# MIT License
#
# Copyright (c) 2025 Democratize Technology
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""Configuration manager for server matchers.

This module provides the ConfigManager class that handles:
- Environment variable loading with type conversion
- Configuration file loading (JSON/YAML)
- Validation of the merged result
- Thread-safe configuration access and runtime updates

The composition root builds a ConfigManager (or calls ``load_config``) and
hands the result to the matcher registry.
"""

from collections.abc import Mapping
import json
import logging
import os
from pathlib import Path
import threading
from typing import Any

from pydantic import ValidationError as PydanticValidationError
import yaml

from ..exceptions import ConfigValidationError
from .defaults import CONFIG_FILE_ENV_VAR, DEFAULT_CONFIG, ENV_VAR_MAPPING, ENV_VAR_TYPES
from .schema import BenchmarkConfig, ConfigSchema, DeadlineConfig, LintConfig

logger = logging.getLogger(__name__)


class ConfigManager:
    """Thread-safe configuration manager with environment variable support.

    Features:
    - Environment variable loading with SMX_ prefix
    - Type conversion and validation
    - Configuration file support (JSON/YAML)
    - Runtime configuration updates
    """

    def __init__(
        self,
        config_file: str | Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._config_lock = threading.RLock()
        self._environ = os.environ if environ is None else environ
        self._config_file = Path(config_file) if config_file else None
        self._config: ConfigSchema = DEFAULT_CONFIG.model_copy(deep=True)
        self._loaded_from_env = False
        self._loaded_from_file = False

        self._load_configuration()

    def _load_configuration(self) -> None:
        """Load configuration from files and environment variables."""
        with self._config_lock:
            config_data = DEFAULT_CONFIG.model_dump()

            self._load_from_file(config_data)
            self._load_from_environment(config_data)

            self._config = self._build(config_data, "Invalid configuration")
            logger.info("Configuration loaded successfully")

    def _resolve_config_file(self) -> Path | None:
        if self._config_file is not None:
            return self._config_file
        env_path = self._environ.get(CONFIG_FILE_ENV_VAR)
        return Path(env_path) if env_path else None

    def _load_from_file(self, config_data: dict[str, Any]) -> None:
        """Merge a JSON/YAML configuration file into ``config_data``."""
        config_path = self._resolve_config_file()
        if config_path is None:
            return

        try:
            with config_path.open() as f:
                if config_path.suffix in [".yaml", ".yml"]:
                    file_config = yaml.safe_load(f)
                else:
                    file_config = json.load(f)
        except (FileNotFoundError, json.JSONDecodeError, yaml.YAMLError, OSError) as e:
            logger.warning("Failed to load config from %s: %s", config_path, e)
            return

        if file_config:
            self._merge_config(config_data, file_config)
            self._loaded_from_file = True
            logger.info("Loaded configuration from %s", config_path)

    def _load_from_environment(self, config_data: dict[str, Any]) -> None:
        """Load configuration from environment variables with SMX_ prefix."""
        env_vars_found = []

        for env_var, config_path in ENV_VAR_MAPPING.items():
            env_value = self._environ.get(env_var)
            if env_value is None:
                continue
            try:
                var_type = ENV_VAR_TYPES.get(env_var, str)
                if var_type is bool:
                    converted_value = env_value.lower() in ("true", "1", "yes", "on")
                else:
                    converted_value = var_type(env_value)

                self._set_nested_value(config_data, config_path, converted_value)
                env_vars_found.append(env_var)

            except (ValueError, TypeError) as e:
                logger.warning("Invalid value for %s='%s': %s", env_var, env_value, e)

        if env_vars_found:
            self._loaded_from_env = True
            logger.info(
                "Loaded %d configuration values from environment variables",
                len(env_vars_found),
            )

    def _build(self, config_data: dict[str, Any], failure: str) -> ConfigSchema:
        try:
            return ConfigSchema(**config_data)
        except PydanticValidationError as e:
            logger.exception("Configuration validation failed")
            errors = [
                {"loc": ".".join(str(part) for part in err["loc"]), "msg": err["msg"]}
                for err in e.errors()
            ]
            raise ConfigValidationError(f"{failure}: {e}", errors) from e

    def _set_nested_value(self, data: dict[str, Any], path: str, value: Any) -> None:
        """Set a nested dictionary value using dot notation path."""
        keys = path.split(".")
        current = data

        for key in keys[:-1]:
            if key not in current:
                current[key] = {}
            current = current[key]

        current[keys[-1]] = value

    def _merge_config(self, base_config: dict[str, Any], new_config: dict[str, Any]) -> None:
        """Recursively merge configuration dictionaries."""
        for key, value in new_config.items():
            if (
                key in base_config
                and isinstance(base_config[key], dict)
                and isinstance(value, dict)
            ):
                self._merge_config(base_config[key], value)
            else:
                base_config[key] = value

    @property
    def config(self) -> ConfigSchema:
        """Get current configuration (thread-safe copy)."""
        with self._config_lock:
            result: ConfigSchema = self._config.model_copy(deep=True)
            return result

    @property
    def benchmark(self) -> BenchmarkConfig:
        return self._config.benchmark

    @property
    def deadline(self) -> DeadlineConfig:
        return self._config.deadline

    @property
    def lint(self) -> LintConfig:
        return self._config.lint

    @property
    def loaded_from_env(self) -> bool:
        return self._loaded_from_env

    @property
    def loaded_from_file(self) -> bool:
        return self._loaded_from_file

    def update_config(self, **kwargs: Any) -> None:
        """Update configuration at runtime (thread-safe).

        Args:
            **kwargs: Configuration values to update, ``section__field`` style

        Example:
            manager.update_config(benchmark__clock_target_seconds=0.5)
        """
        with self._config_lock:
            config_data = self._config.model_dump()

            for key, value in kwargs.items():
                config_path = key.replace("__", ".")
                self._set_nested_value(config_data, config_path, value)

            self._config = self._build(config_data, "Invalid configuration update")
            logger.info("Configuration updated: %s", list(kwargs.keys()))

    def reload_configuration(self) -> None:
        """Reload configuration from environment and files."""
        logger.info("Reloading configuration...")
        self._loaded_from_env = False
        self._loaded_from_file = False
        self._load_configuration()

    def export_config(self, format: str = "json") -> str:
        """Export current configuration to JSON or YAML format."""
        config_dict = self._config.model_dump()

        if format.lower() == "yaml":
            return str(yaml.safe_dump(config_dict, default_flow_style=False, indent=2))
        return json.dumps(config_dict, indent=2)

    def get_env_var_help(self) -> dict[str, str]:
        """Get help text for all supported environment variables."""
        help_text = {}

        for env_var, config_path in ENV_VAR_MAPPING.items():
            var_type = ENV_VAR_TYPES.get(env_var, str)
            help_text[env_var] = f"Type: {var_type.__name__}, Path: {config_path}"

        help_text[CONFIG_FILE_ENV_VAR] = "Type: str, Path to a JSON or YAML configuration file"
        return help_text


def load_config(
    config_file: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ConfigSchema:
    """Build a fresh configuration from defaults, file and environment."""
    return ConfigManager(config_file=config_file, environ=environ).config
