"""Translation module for llmi18n.

Builds translation prompts and runs them through the Ollama client.
"""

from .prompt import build_request, translation_instruction
from .translator import Translator, translate_quoted_strings

__all__ = [
    "Translator",
    "build_request",
    "translate_quoted_strings",
    "translation_instruction",
]
