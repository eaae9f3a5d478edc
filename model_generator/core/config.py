"""
Configuration management for model generation.

Handles loading and merging configuration from JSON files,
providing per-language defaults and validation of generator settings.
"""

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""
    pass


@dataclass
class CompilerConfig:
    """Configuration shared by the compiler and the language generators."""

    # Output settings
    package_name: str = ""

    # Compilation settings
    with_inheritance: bool = True
    meta_prefix: str = "@"
    provided_types_file: Optional[str] = None

    # Code style settings
    indent_size: int = 4
    add_comments: bool = True

    # Custom settings (language-specific)
    custom: Dict[str, Any] = field(default_factory=dict)


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported languages."""
        self._configs["kotlin"] = {
            "package_name": "com.example.model",
            "indent_size": 4,
            "custom": {
                "jackson_annotations": True,
            },
        }

        self._configs["python"] = {
            "package_name": "",
            "indent_size": 4,
            "custom": {
                "kw_only": True,
                "frozen": False,
            },
        }

    def get_config(self, language: Optional[str] = None,
                   custom_config: Optional[Dict[str, Any]] = None,
                   config_file: Optional[Union[str, Path]] = None) -> CompilerConfig:
        """
        Get complete configuration for a language.

        Args:
            language: Target language name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the language
        """
        # Start with defaults
        base_config = json.loads(json.dumps(self._configs.get(language or "", {})))

        if config_file:
            self._merge(base_config, self._load_config_file(config_file))

        if custom_config:
            self._merge(base_config, custom_config)

        return self._dict_to_config(base_config)

    @staticmethod
    def _merge(target: Dict[str, Any], overrides: Dict[str, Any]):
        custom = overrides.get("custom")
        target.update({k: v for k, v in overrides.items() if k != "custom"})
        if isinstance(custom, dict):
            target.setdefault("custom", {}).update(custom)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == '.json':
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {str(e)}")
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {str(e)}")

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> CompilerConfig:
        """Convert dictionary to CompilerConfig instance."""
        known_fields = {f.name for f in fields(CompilerConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        # Unknown keys end up in the custom dict
        if custom_args:
            existing_custom = dict(config_args.get('custom', {}))
            existing_custom.update(custom_args)
            config_args['custom'] = existing_custom

        return CompilerConfig(**config_args)

    def list_languages(self) -> List[str]:
        """Get list of languages with built-in defaults."""
        return list(self._configs.keys())

    def validate_config(self, config: CompilerConfig, language: str) -> List[str]:
        """
        Validate configuration for a language.

        Returns:
            List of validation warnings
        """
        warnings = []

        if config.indent_size < 1:
            warnings.append(f"Invalid indent_size: {config.indent_size}")

        if config.provided_types_file and not Path(config.provided_types_file).exists():
            warnings.append(f"Provided types file not found: {config.provided_types_file}")

        if language == "kotlin":
            for part in filter(None, config.package_name.split(".")):
                if not part.isidentifier():
                    warnings.append(f"Invalid Kotlin package name: {config.package_name}")
                    break

        elif language == "python":
            if config.package_name and not all(
                part.isidentifier() for part in config.package_name.split(".")
            ):
                warnings.append(f"Invalid Python module path: {config.package_name}")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(language: Optional[str] = None,
                custom_config: Optional[Dict[str, Any]] = None,
                config_file: Optional[Union[str, Path]] = None) -> CompilerConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target language name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the language
    """
    manager = get_config_manager()
    return manager.get_config(language, custom_config, config_file)
