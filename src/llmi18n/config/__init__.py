"""Configuration module for llmi18n.

This module provides the typed configuration and its YAML loader.
"""

from dataclasses import dataclass, field
from typing import Any

from ..llm.client import DEFAULT_BASE_URL, GENERATE_PATH


@dataclass
class OllamaConfig:
    """Inference server configuration."""

    host: str = DEFAULT_BASE_URL
    generate_path: str = GENERATE_PATH
    timeout_seconds: float | None = 300.0


@dataclass
class TranslationConfig:
    """Translation request configuration."""

    model: str = "mistral"
    target_language: str = "de"
    options: dict[str, Any] = field(
        default_factory=lambda: {
            "temperature": 0.3,
            "seed": 42,
        }
    )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"


@dataclass
class Llmi18nConfig:
    """Main llmi18n configuration."""

    ollama: OllamaConfig = field(default_factory=OllamaConfig)
    translation: TranslationConfig = field(default_factory=TranslationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


__all__ = [
    "Llmi18nConfig",
    "LoggingConfig",
    "OllamaConfig",
    "TranslationConfig",
]
