"""Translation of quoted strings through a local Ollama model.

The input is usually a whole i18n file; the model is asked to translate
the quoted strings and keep everything else as it is.
"""

import logging
import time
from typing import TYPE_CHECKING

from ..llm.client import OllamaClient, OllamaClientConfig
from ..llm.model import GenerationChunk, GenerationClient, SamplingOptions
from .prompt import (
    DEFAULT_MODEL,
    DEFAULT_OPTIONS,
    DEFAULT_TARGET_LANGUAGE,
    build_request,
    translation_instruction,
)

if TYPE_CHECKING:
    from ..config import Llmi18nConfig

logger = logging.getLogger(__name__)


class Translator:
    """Translates the quoted strings in a text blob."""

    def __init__(
        self,
        client: GenerationClient | None = None,
        *,
        model: str = DEFAULT_MODEL,
        target_language: str = DEFAULT_TARGET_LANGUAGE,
        options: SamplingOptions = DEFAULT_OPTIONS,
    ) -> None:
        """Initialize translator.

        Args:
            client: Client to run requests with. Defaults to a local Ollama.
            model: Ollama model name
            target_language: Language to translate into (e.g. "de")
            options: Sampling options sent with every request
        """
        self._client = client if client is not None else OllamaClient()
        self._model = model
        self._target_language = target_language
        self._options = options

    @classmethod
    def from_config(cls, config: "Llmi18nConfig") -> "Translator":
        """Create a translator and its Ollama client from configuration."""
        client = OllamaClient(
            OllamaClientConfig(
                base_url=config.ollama.host,
                generate_path=config.ollama.generate_path,
                timeout_seconds=config.ollama.timeout_seconds,
            )
        )
        return cls(
            client,
            model=config.translation.model,
            target_language=config.translation.target_language,
            options=SamplingOptions.from_dict(config.translation.options),
        )

    @property
    def target_language(self) -> str:
        return self._target_language

    def translate(self, text: str) -> str:
        """Translate the quoted strings in ``text``.

        Returns:
            The model's response text

        Raises:
            OllamaError: If the request fails
        """
        request = build_request(
            text,
            translation_instruction(self._target_language),
            model=self._model,
            options=self._options,
            stream=False,
        )

        result = ""

        # Overwrites rather than concatenates: with stream=False the one
        # and only chunk carries the whole text.
        def handle(chunk: GenerationChunk) -> None:
            nonlocal result
            result = chunk.response_text

            if chunk.done:
                logger.info(f"Total duration: {chunk.total_duration}")
                logger.info(f"Load duration: {chunk.load_duration}")

        start_time = time.time()
        self._client.generate(request, handle)
        latency_ms = int((time.time() - start_time) * 1000)

        logger.debug(
            f"Translated {len(text)} chars to {self._target_language} in {latency_ms}ms"
        )
        return result


def translate_quoted_strings(
    text: str,
    *,
    target_language: str = DEFAULT_TARGET_LANGUAGE,
    client: GenerationClient | None = None,
) -> str:
    """Translate the quoted strings in ``text`` with the default settings."""
    return Translator(client, target_language=target_language).translate(text)


__all__ = ["Translator", "translate_quoted_strings"]
