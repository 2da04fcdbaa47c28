"""
Structured decoders used by ``map_object``.

A decoder turns JSON bytes into an instance of a requested type. Decoders
are passed per call; the default is :class:`PydanticDecoder`.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Protocol, TypeVar, runtime_checkable

from pydantic import TypeAdapter

T = TypeVar("T")


@runtime_checkable
class StructuredDecoder(Protocol):
    """Protocol for structured decoders.

    Implementations raise any exception on failure; ``map_object`` wraps it
    in an ``ObjectMappingError``.
    """

    def decode(self, type_: type[T], data: bytes) -> T:
        """Decode JSON bytes into ``type_``."""
        ...


class PydanticDecoder:
    """Decoder backed by ``pydantic.TypeAdapter``.

    Handles pydantic models, dataclasses, TypedDicts and plain annotations
    such as ``list[int]``.

    Example:
        >>> class User(BaseModel):
        ...     name: str
        >>> PydanticDecoder().decode(User, b'{"name": "Ada"}')
        User(name='Ada')
    """

    def __init__(self, *, strict: bool | None = None) -> None:
        """Initialize the decoder.

        Args:
            strict: Passed to ``validate_json``; ``None`` uses the model's own setting
        """
        self._strict = strict
        self._adapters: dict[Any, TypeAdapter[Any]] = {}

    def _adapter(self, type_: Any) -> TypeAdapter[Any]:
        try:
            return self._adapters[type_]
        except KeyError:
            adapter: TypeAdapter[Any] = TypeAdapter(type_)
            self._adapters[type_] = adapter
            return adapter
        except TypeError:
            # Unhashable annotation
            return TypeAdapter(type_)

    def decode(self, type_: type[T], data: bytes) -> T:
        return self._adapter(type_).validate_json(data, strict=self._strict)


class JsonDecoder:
    """Decoder that parses with ``json`` and calls the type directly.

    JSON objects are passed as keyword arguments, anything else as a single
    positional argument.
    """

    def decode(self, type_: type[T], data: bytes) -> T:
        obj = json.loads(data)
        if isinstance(obj, Mapping):
            return type_(**obj)
        return type_(obj)  # type: ignore[call-arg]


_DEFAULT_DECODER = PydanticDecoder()


def default_decoder() -> StructuredDecoder:
    """Get the shared decoder used when none is passed."""
    return _DEFAULT_DECODER
