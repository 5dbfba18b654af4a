"""llmi18n - translate i18n strings with a local LLM.

llmi18n sends text to a locally running Ollama server and asks the model
to translate the quoted strings in it:
- Streaming client for the Ollama generate API
- Translation prompt and orchestration
- YAML configuration with environment overrides

Usage:
    llmi18n i18n/en.yaml --lang de
    python -m llmi18n i18n/en.yaml --config config/default.yaml
"""

__version__ = "0.1.0"

from .config import Llmi18nConfig
from .config.loader import load_config
from .translate import Translator, translate_quoted_strings

__all__ = [
    "Llmi18nConfig",
    "Translator",
    "__version__",
    "load_config",
    "translate_quoted_strings",
]
