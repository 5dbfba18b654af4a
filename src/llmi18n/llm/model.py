"""Request and response data classes for the Ollama generate API.

See https://github.com/ollama/ollama/blob/main/docs/api.md for the full
list of fields the server understands.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import timedelta
from enum import IntEnum
from typing import Any, Protocol


class MirostatMode(IntEnum):
    """Mirostat sampling mode (0 = disabled, 1 = Mirostat, 2 = Mirostat 2.0)."""

    OFF = 0
    V1 = 1
    V2 = 2


# Python field name -> wire key
_OPTION_KEYS = {
    "mirostat_mode": "mirostat",
    "mirostat_eta": "mirostat_eta",
    "mirostat_tau": "mirostat_tau",
    "temperature": "temperature",
    "seed": "seed",
    "stop_sequences": "stop",
    "top_k": "top_k",
    "top_p": "top_p",
}


@dataclass(frozen=True)
class SamplingOptions:
    """Sampling configuration passed through to the model.

    Unset fields are omitted from the request so the server applies its
    own defaults.

    Attributes:
        mirostat_mode: Enable Mirostat sampling for controlling perplexity
            (default: OFF)
        mirostat_eta: How quickly the algorithm responds to feedback from
            the generated text (default: 0.1)
        mirostat_tau: Balance between coherence and diversity of the output
            (default: 5.0)
        temperature: Higher values make the model answer more creatively
            (default: 0.8)
        seed: Random number seed; a fixed seed makes output reproducible
            for the same prompt (default: 0)
        stop_sequences: Sequences that stop generation when produced
        top_k: Higher values give more diverse answers (default: 40)
        top_p: Works together with top_k; higher values give more diverse
            text (default: 0.9)
    """

    mirostat_mode: MirostatMode | None = None
    mirostat_eta: float | None = None
    mirostat_tau: float | None = None
    temperature: float | None = None
    seed: int | None = None
    stop_sequences: tuple[str, ...] = ()
    top_k: int | None = None
    top_p: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Build the wire ``options`` object, leaving out unset fields."""
        out: dict[str, Any] = {}
        for name, key in _OPTION_KEYS.items():
            value = getattr(self, name)
            if value is None or value == ():
                continue
            if name == "mirostat_mode":
                value = int(value)
            elif name == "stop_sequences":
                value = list(value)
            out[key] = value
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SamplingOptions":
        """Build options from wire keys or field names.

        Raises:
            ValueError: If a key is not a known option
        """
        wire_to_field = {key: name for name, key in _OPTION_KEYS.items()}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = wire_to_field.get(key, key)
            if name not in _OPTION_KEYS:
                raise ValueError(f"Unknown sampling option: {key}")
            if value is None:
                continue
            if name == "mirostat_mode":
                value = MirostatMode(value)
            elif name == "stop_sequences":
                value = (value,) if isinstance(value, str) else tuple(value)
            kwargs[name] = value
        return cls(**kwargs)


@dataclass(frozen=True)
class GenerationRequest:
    """Body of a single ``/api/generate`` call."""

    model: str
    prompt: str
    stream: bool = False
    options: SamplingOptions = field(default_factory=SamplingOptions)

    def to_dict(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "prompt": self.prompt,
            "stream": self.stream,
            "options": self.options.to_dict(),
        }


def _nanoseconds(value: Any) -> timedelta | None:
    if value is None:
        return None
    return timedelta(microseconds=int(value) / 1000)


@dataclass(frozen=True)
class GenerationChunk:
    """One decoded record from the response stream.

    Attributes:
        model: Model that produced the record
        created_at: Server timestamp, kept as sent
        response_text: Text fragment (the full text when not streaming)
        done: True on the final record
        total_duration: Time spent generating the response (final record only)
        load_duration: Time spent loading the model (final record only)
    """

    model: str
    created_at: str
    response_text: str
    done: bool
    total_duration: timedelta | None = None
    load_duration: timedelta | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "GenerationChunk":
        """Decode one wire record.

        Raises:
            ValueError: If the record is not a JSON object or a field has
                the wrong type
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

        done = data.get("done", False)
        if not isinstance(done, bool):
            raise ValueError(f"Field 'done' must be a boolean, got {done!r}")

        try:
            total = _nanoseconds(data.get("total_duration"))
            load = _nanoseconds(data.get("load_duration"))
        except (TypeError, ValueError) as e:
            raise ValueError(f"Malformed duration: {e}") from e

        return cls(
            model=_string_field(data, "model"),
            created_at=_string_field(data, "created_at"),
            response_text=_string_field(data, "response"),
            done=done,
            total_duration=total,
            load_duration=load,
        )


def _string_field(data: dict[str, Any], key: str) -> str:
    value = data.get(key, "")
    if not isinstance(value, str):
        raise ValueError(f"Field '{key}' must be a string, got {value!r}")
    return value


ChunkHandler = Callable[[GenerationChunk], None]


class GenerationClient(Protocol):
    """Interface for anything that can run a generate call.

    Implementations deliver every record to the handler in arrival order.
    """

    def generate(self, request: GenerationRequest, handler: ChunkHandler) -> None:
        """Run one request and call ``handler`` once per record.

        Args:
            request: Request to send
            handler: Called synchronously with each record; an exception it
                raises stops the call and propagates unchanged
        """
        ...


__all__ = [
    "ChunkHandler",
    "GenerationChunk",
    "GenerationClient",
    "GenerationRequest",
    "MirostatMode",
    "SamplingOptions",
]
