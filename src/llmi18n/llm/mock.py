"""Mock generation client for testing.

Provides a controllable stand-in for OllamaClient that never touches the
network.
"""

from .model import ChunkHandler, GenerationChunk, GenerationRequest


class MockGenerationClient:
    """Mock client that replays preset chunks.

    Allows setting predetermined responses for predictable testing.
    """

    def __init__(self) -> None:
        """Initialize mock client."""
        self._chunks: list[GenerationChunk] = []
        self._error: Exception | None = None
        self._requests: list[GenerationRequest] = []
        self.set_response("This is a mock response.")

    def set_response(self, text: str, model: str = "mock-model") -> None:
        """Reply with a single final chunk carrying ``text``.

        Args:
            text: Text to return
            model: Model name reported in the chunk
        """
        self.set_chunks(
            [GenerationChunk(model=model, created_at="", response_text=text, done=True)]
        )

    def set_chunks(self, chunks: list[GenerationChunk]) -> None:
        """Reply with exactly these chunks, in order."""
        self._chunks = list(chunks)
        self._error = None

    def set_error(self, error: Exception) -> None:
        """Raise ``error`` on the next call instead of replying.

        Args:
            error: Exception to raise
        """
        self._error = error

    def generate(self, request: GenerationRequest, handler: ChunkHandler) -> None:
        """Replay preset chunks to ``handler``, stopping after a done chunk."""
        self._requests.append(request)

        if self._error is not None:
            raise self._error

        for chunk in self._chunks:
            handler(chunk)
            if chunk.done:
                break

    @property
    def call_count(self) -> int:
        """Get number of generate calls."""
        return len(self._requests)

    @property
    def last_request(self) -> GenerationRequest | None:
        """Get the most recent request, if any."""
        return self._requests[-1] if self._requests else None


__all__ = ["MockGenerationClient"]
