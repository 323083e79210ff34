"""
Configuration management for enum code generation.

Handles loading and merging configuration from JSON files and explicit
overrides into one immutable EnumerConfig passed through the pipeline.
"""

import json
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

GO_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

BOOL_FIELDS = ("format_output", "line_comment", "bitmask", "json", "yaml", "sql")
STRING_FIELDS = ("directory", "trim_prefix")


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass(frozen=True)
class EnumerConfig:
    """Immutable settings for one generation run."""

    # Target types, in the order given; duplicates are kept
    type_names: Tuple[str, ...] = field(default_factory=tuple)

    # Output settings
    output: Optional[str] = None
    directory: str = "."
    format_output: bool = True

    # Display string settings
    trim_prefix: str = ""
    line_comment: bool = False

    # Optional method groups
    bitmask: bool = False
    json: bool = False
    yaml: bool = False
    sql: bool = False

    @property
    def sorted_type_names(self) -> List[str]:
        """Type names in emission order."""
        return sorted(self.type_names)

    def default_output_name(self) -> str:
        """File name used when no explicit output is configured."""
        if self.output:
            return self.output
        if len(self.type_names) == 1:
            return f"{self.type_names[0].lower()}_enumer.go"
        if self.bitmask:
            return "flags_gen.go"
        return "enums_gen.go"

    def command_line(self) -> str:
        """Reconstruct the invoking command for the generated file header."""
        parts = ["enumer", f"-type={','.join(self.sorted_type_names)}"]
        if self.trim_prefix:
            parts.append(f"-trimprefix={self.trim_prefix}")
        if self.line_comment:
            parts.append("-linecomment")
        if self.json:
            parts.append("-json")
        if self.yaml:
            parts.append("-yaml")
        if self.sql:
            parts.append("-sql")
        if self.output:
            parts.append(f"-output={self.output}")
        if self.bitmask:
            parts.append("-bitmask")
        return " ".join(parts)


def split_type_names(value: Union[str, List[str], Tuple[str, ...]]) -> Tuple[str, ...]:
    """Split a comma separated type list, trimming whitespace around names."""
    if isinstance(value, str):
        value = value.split(",")
    elif not isinstance(value, (list, tuple)) or not all(isinstance(name, str) for name in value):
        raise ConfigError(
            f"type_names must be a string or a list of strings, got {value!r}"
        )
    return tuple(name.strip() for name in value if name.strip())


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._defaults: Dict[str, Any] = {
            "type_names": (),
            "output": None,
            "directory": ".",
            "format_output": True,
            "trim_prefix": "",
            "line_comment": False,
            "bitmask": False,
            "json": False,
            "yaml": False,
            "sql": False,
        }

    def get_config(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> EnumerConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Explicit overrides, applied last
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        base_config = dict(self._defaults)

        if config_file:
            base_config.update(self._load_config_file(config_file))

        if custom_config:
            base_config.update(
                {key: value for key, value in custom_config.items() if value is not None}
            )

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {str(e)}")
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {str(e)}")

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> EnumerConfig:
        """Convert dictionary to EnumerConfig instance."""
        known_fields = {f.name for f in fields(EnumerConfig)}
        unknown = sorted(set(config_dict) - known_fields)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        for key in BOOL_FIELDS:
            if key in config_dict and not isinstance(config_dict[key], bool):
                raise ConfigError(f"{key} must be true or false, got {config_dict[key]!r}")
        for key in STRING_FIELDS:
            if key in config_dict and not isinstance(config_dict[key], str):
                raise ConfigError(f"{key} must be a string, got {config_dict[key]!r}")
        output = config_dict.get("output")
        if output is not None and not isinstance(output, str):
            raise ConfigError(f"output must be a string, got {output!r}")

        config_args = dict(config_dict)
        config_args["type_names"] = split_type_names(config_args["type_names"])
        return EnumerConfig(**config_args)

    def save_config(self, config: EnumerConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)
        config_dict = {f.name: getattr(config, f.name) for f in fields(config)}
        config_dict["type_names"] = list(config.type_names)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {str(e)}")

    def validate_config(self, config: EnumerConfig) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if not config.type_names:
            warnings.append("No type names configured")

        for name in config.type_names:
            if not GO_IDENTIFIER.match(name):
                warnings.append(f"Invalid Go type name: {name}")

        if config.trim_prefix and not GO_IDENTIFIER.match(config.trim_prefix):
            warnings.append(f"Trim prefix {config.trim_prefix!r} can never match a Go name")

        if config.output and not config.output.endswith(".go"):
            warnings.append(f"Output file {config.output} does not end in .go")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> EnumerConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Explicit overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    manager = get_config_manager()
    return manager.get_config(custom_config, config_file)
