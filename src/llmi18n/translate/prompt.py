"""Prompt construction for translation requests."""

from ..llm.model import GenerationRequest, SamplingOptions

DEFAULT_MODEL = "mistral"  # llama2, codellama, mistral
DEFAULT_TARGET_LANGUAGE = "de"
DEFAULT_OPTIONS = SamplingOptions(temperature=0.3, seed=42)

TRANSLATION_INSTRUCTION = """

Translate the quoted strings above to {language}. Preserve the format as is. \
No introduction or conclusion is needed.

"""


def translation_instruction(target_language: str = DEFAULT_TARGET_LANGUAGE) -> str:
    """Instruction appended after the text to translate."""
    return TRANSLATION_INSTRUCTION.format(language=target_language)


def build_request(
    text: str,
    instruction: str,
    *,
    model: str = DEFAULT_MODEL,
    options: SamplingOptions = DEFAULT_OPTIONS,
    stream: bool = False,
) -> GenerationRequest:
    """Build a generate request with ``instruction`` appended to ``text``.

    The two are concatenated as-is; any quoting is up to the caller.

    Args:
        text: Input text
        instruction: Instruction that follows the input
        model: Ollama model name
        options: Sampling options
        stream: Ask the server to stream the response

    Returns:
        GenerationRequest ready to send
    """
    return GenerationRequest(
        model=model,
        prompt=text + instruction,
        stream=stream,
        options=options,
    )


__all__ = [
    "DEFAULT_MODEL",
    "DEFAULT_OPTIONS",
    "DEFAULT_TARGET_LANGUAGE",
    "TRANSLATION_INSTRUCTION",
    "build_request",
    "translation_instruction",
]
