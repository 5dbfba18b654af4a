"""YAML configuration loader with inheritance support.

Supports:
- Loading YAML config files
- Config inheritance via 'extends' key
- Deep merging of nested config
- Environment variable overrides
"""

import os
from pathlib import Path
from typing import Any

import yaml

from ..llm.client import normalize_host
from ..llm.model import SamplingOptions
from . import Llmi18nConfig, LoggingConfig, OllamaConfig, TranslationConfig

# Environment variable -> (section, key)
ENV_OVERRIDES = {
    "OLLAMA_HOST": ("ollama", "host"),
    "LLMI18N_MODEL": ("translation", "model"),
    "LLMI18N_TARGET_LANGUAGE": ("translation", "target_language"),
    "LLMI18N_LOG_LEVEL": ("logging", "level"),
}


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries.

    Values from override take precedence. Nested dicts are merged recursively.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml_with_inheritance(path: Path) -> dict[str, Any]:
    """Load YAML file with inheritance support.

    If the file contains an 'extends' key, the base config is loaded first
    and merged with the current config.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")

    # Handle inheritance
    if "extends" in config:
        base_name = config.pop("extends")
        base_path = path.parent / base_name
        base_config = load_yaml_with_inheritance(base_path)
        config = deep_merge(base_config, config)

    return config


def dict_to_config(data: dict[str, Any]) -> Llmi18nConfig:
    """Convert raw dict to typed Llmi18nConfig dataclass.

    Raises:
        ValueError: If translation options name an unknown sampling option
    """
    root = data.get("llmi18n", {}) or {}

    # Helper to safely get dict values (handles None from YAML)
    def safe_get(key: str) -> dict[str, Any]:
        value = root.get(key, {})
        return value if value is not None else {}

    translation = safe_get("translation")
    if "options" in translation:
        # Unknown option keys fail at load time
        SamplingOptions.from_dict(translation["options"] or {})

    ollama = dict(safe_get("ollama"))
    if isinstance(ollama.get("host"), str):
        ollama["host"] = normalize_host(ollama["host"])

    return Llmi18nConfig(
        ollama=OllamaConfig(**ollama),
        translation=_parse_translation_config(translation),
        logging=LoggingConfig(**safe_get("logging")),
    )


def _parse_translation_config(data: dict[str, Any]) -> TranslationConfig:
    """Parse translation config; options replace the defaults as a whole."""
    defaults = TranslationConfig()
    options = data.get("options")
    return TranslationConfig(
        model=data.get("model", defaults.model),
        target_language=data.get("target_language", defaults.target_language),
        options=dict(options) if options is not None else defaults.options,
    )


def apply_env_overrides(
    data: dict[str, Any], environ: dict[str, str] | None = None
) -> dict[str, Any]:
    """Overlay environment variables onto a raw config dict."""
    environ = dict(os.environ) if environ is None else environ
    overrides: dict[str, Any] = {}
    for var, (section, key) in ENV_OVERRIDES.items():
        value = environ.get(var, "").strip()
        if not value:
            continue
        if var == "OLLAMA_HOST":
            value = normalize_host(value)
        overrides.setdefault(section, {})[key] = value
    if not overrides:
        return data
    return deep_merge(data, {"llmi18n": overrides})


class YAMLConfigLoader:
    """YAML configuration loader implementation."""

    def load(self, path: Path) -> Llmi18nConfig:
        """Load configuration from file path.

        Args:
            path: Path to YAML config file

        Returns:
            Parsed Llmi18nConfig
        """
        raw_config = load_yaml_with_inheritance(path)
        return dict_to_config(apply_env_overrides(raw_config))


# Convenience function
def load_config(path: str | Path | None = None) -> Llmi18nConfig:
    """Load llmi18n configuration.

    Args:
        path: Path to config file. Without one, built-in defaults are used.

    Returns:
        Parsed Llmi18nConfig with environment overrides applied

    Examples:
        >>> config = load_config()
        >>> config = load_config(path="config/default.yaml")
    """
    if path is not None:
        return YAMLConfigLoader().load(Path(path))
    return dict_to_config(apply_env_overrides({}))


__all__ = [
    "ENV_OVERRIDES",
    "YAMLConfigLoader",
    "apply_env_overrides",
    "deep_merge",
    "dict_to_config",
    "load_config",
    "load_yaml_with_inheritance",
]
