"""Streaming HTTP client for the Ollama generate endpoint.

The server answers ``POST /api/generate`` with newline-delimited JSON
records. The client decodes them one at a time and stops at the first
record marked ``done``.
"""

import json
import logging
import os
from collections.abc import Iterator
from contextlib import closing
from dataclasses import dataclass

import httpx

from .errors import (
    OllamaAPIError,
    OllamaConnectivityError,
    OllamaDecodeError,
    OllamaEncodeError,
    OllamaStreamEndedError,
    OllamaStreamError,
    OllamaTimeoutError,
)
from .model import ChunkHandler, GenerationChunk, GenerationRequest

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:11434"
GENERATE_PATH = "/api/generate"


def normalize_host(host: str) -> str:
    """Turn an ``OLLAMA_HOST`` style value into a base URL."""
    host = host.strip().rstrip("/")
    if "://" not in host:
        host = f"http://{host}"
    return host


@dataclass
class OllamaClientConfig:
    """Configuration for the Ollama client.

    ``timeout_seconds`` bounds every network wait; ``None`` blocks until the
    server answers.
    """

    base_url: str = DEFAULT_BASE_URL
    generate_path: str = GENERATE_PATH
    timeout_seconds: float | None = 300.0

    @classmethod
    def from_env(cls) -> "OllamaClientConfig":
        """Create config from environment variables.

        Returns:
            OllamaClientConfig with ``base_url`` taken from OLLAMA_HOST
            when it is set.
        """
        host = os.environ.get("OLLAMA_HOST", "").strip()
        if not host:
            return cls()
        return cls(base_url=normalize_host(host))


class OllamaClient:
    """Client for a single Ollama server."""

    def __init__(
        self,
        config: OllamaClientConfig | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize Ollama client.

        Args:
            config: Server location and timeout. Defaults to a local server.
            http_client: Client to send requests with. It is left open and
                its own timeout applies instead of ``timeout_seconds``;
                without one, a client is opened and closed for every call.
        """
        self._config = config or OllamaClientConfig()
        self._http = http_client

    @property
    def config(self) -> OllamaClientConfig:
        return self._config

    @property
    def generate_url(self) -> str:
        return self._config.base_url.rstrip("/") + self._config.generate_path

    def stream(self, request: GenerationRequest) -> Iterator[GenerationChunk]:
        """Send a request and iterate over the decoded response records.

        The request is encoded before this returns; everything else happens
        while iterating. Iteration ends right after the ``done`` record, and
        the connection is closed when iteration ends or the iterator is
        closed.

        Raises:
            OllamaEncodeError: If the request cannot be serialized.
        """
        body = self._encode(request)
        logger.debug(
            f"POST {self.generate_url} model={request.model} "
            f"stream={request.stream} prompt_chars={len(request.prompt)}"
        )
        return self._iter_chunks(body)

    def generate(self, request: GenerationRequest, handler: ChunkHandler) -> None:
        """Send a request and pass every record to ``handler`` in order.

        Returns once a record marked ``done`` has been handled. An exception
        raised by ``handler`` stops the stream and propagates unchanged.

        Raises:
            OllamaError: On any encode, transport, status or decode failure.
        """
        with closing(self.stream(request)) as chunks:
            for chunk in chunks:
                handler(chunk)

    @property
    def is_available(self) -> bool:
        """Check if the Ollama server answers at its base URL.

        The check waits at most 5 seconds, also on an injected client.
        """
        try:
            if self._http is not None:
                response = self._http.get(self._config.base_url, timeout=5.0)
            else:
                response = httpx.get(self._config.base_url, timeout=5.0)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.debug(f"Ollama not reachable at {self._config.base_url}: {e}")
            return False
        return response.status_code == httpx.codes.OK

    def _encode(self, request: GenerationRequest) -> bytes:
        try:
            payload = json.dumps(request.to_dict(), ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise OllamaEncodeError(f"Cannot encode request: {e}") from e
        return payload.encode("utf-8")

    def _iter_chunks(self, body: bytes) -> Iterator[GenerationChunk]:
        if self._http is not None:
            yield from self._post(self._http, body)
            return

        with httpx.Client(timeout=httpx.Timeout(self._config.timeout_seconds)) as http:
            yield from self._post(http, body)

    def _post(self, http: httpx.Client, body: bytes) -> Iterator[GenerationChunk]:
        url = self.generate_url
        try:
            with http.stream(
                "POST",
                url,
                content=body,
                headers={"Content-Type": "application/json"},
            ) as response:
                if response.status_code != httpx.codes.OK:
                    # Error bodies are not chunked
                    response.read()
                    logger.error(f"Ollama returned status {response.status_code}")
                    raise OllamaAPIError(response.status_code, response.text)

                yield from _decode_lines(response.iter_lines())

        # Catch timeout BEFORE transport error (timeout is a subclass)
        except httpx.TimeoutException as e:
            logger.error(f"Ollama request timed out: {e}")
            raise OllamaTimeoutError(
                f"Request to {url} timed out after {self._config.timeout_seconds} seconds."
            ) from e
        except httpx.TransportError as e:
            logger.error(f"Ollama connection failed: {e}")
            raise OllamaConnectivityError(f"Failed to connect to Ollama at {url}: {e}") from e
        except httpx.InvalidURL as e:
            logger.error(f"Invalid Ollama URL {url}: {e}")
            raise OllamaConnectivityError(f"Invalid Ollama URL {url}: {e}") from e
        except httpx.DecodingError as e:
            raise OllamaDecodeError(f"Cannot decode response body: {e}") from e


def _decode_lines(lines: Iterator[str]) -> Iterator[GenerationChunk]:
    """Decode one record per line until a record reports ``done``."""
    for line in lines:
        if not line.strip():
            continue

        try:
            data = json.loads(line)
        except json.JSONDecodeError as e:
            raise OllamaDecodeError(f"Invalid JSON in response stream: {e}") from e

        if isinstance(data, dict) and "error" in data:
            raise OllamaStreamError(f"Ollama reported an error: {data['error']}")

        try:
            chunk = GenerationChunk.from_dict(data)
        except ValueError as e:
            raise OllamaDecodeError(f"Invalid record in response stream: {e}") from e

        yield chunk

        if chunk.done:
            return

    raise OllamaStreamEndedError("Response stream ended before a done record")


__all__ = [
    "DEFAULT_BASE_URL",
    "GENERATE_PATH",
    "OllamaClient",
    "OllamaClientConfig",
    "normalize_host",
]
