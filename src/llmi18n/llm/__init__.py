"""Ollama generate API client for llmi18n.

Provides the streaming client, its request/response types and errors.
"""

from .client import OllamaClient, OllamaClientConfig
from .errors import (
    OllamaAPIError,
    OllamaConnectivityError,
    OllamaDecodeError,
    OllamaEncodeError,
    OllamaError,
    OllamaStreamEndedError,
    OllamaStreamError,
    OllamaTimeoutError,
)
from .mock import MockGenerationClient
from .model import (
    ChunkHandler,
    GenerationChunk,
    GenerationClient,
    GenerationRequest,
    MirostatMode,
    SamplingOptions,
)

__all__ = [
    "ChunkHandler",
    "GenerationChunk",
    "GenerationClient",
    "GenerationRequest",
    "MirostatMode",
    "MockGenerationClient",
    "OllamaAPIError",
    "OllamaClient",
    "OllamaClientConfig",
    "OllamaConnectivityError",
    "OllamaDecodeError",
    "OllamaEncodeError",
    "OllamaError",
    "OllamaStreamEndedError",
    "OllamaStreamError",
    "OllamaTimeoutError",
    "SamplingOptions",
]
