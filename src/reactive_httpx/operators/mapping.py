"""
Payload mapping operators.

Each operator converts the response payload and emits the converted value,
or errors with the typed mapping error for that conversion.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from reactive_httpx.operators.base import response_operator
from reactive_httpx.response import Response

if TYPE_CHECKING:
    from collections.abc import Callable

    from PIL.Image import Image
    from reactivex import Observable

    from reactive_httpx.response import StructuredDecoder

T = TypeVar("T")


def map_image() -> Callable[[Observable[Any]], Observable[Image]]:
    """Decode the payload into a Pillow image (requires the ``vision`` extra)."""
    return response_operator(Response.map_image)


def map_json(
    fails_on_empty_data: bool = True,
) -> Callable[[Observable[Any]], Observable[Any]]:
    """Parse the payload as JSON.

    Args:
        fails_on_empty_data: When False, an empty payload emits ``None``
    """
    return response_operator(
        lambda r: r.map_json(fails_on_empty_data=fails_on_empty_data),
        name="map_json",
    )


def map_string(
    key_path: str | None = None,
) -> Callable[[Observable[Any]], Observable[str]]:
    """Decode the payload as text, or take the string at ``key_path``."""
    return response_operator(
        lambda r: r.map_string(key_path=key_path),
        name="map_string",
    )


def map_object(
    type_: type[T],
    key_path: str | None = None,
    decoder: StructuredDecoder | None = None,
    fails_on_empty_data: bool = True,
) -> Callable[[Observable[Any]], Observable[T]]:
    """Decode the payload, or the value at ``key_path``, into ``type_``.

    Args:
        type_: Target type (pydantic model, dataclass, annotation, ...)
        key_path: Optional key path into the JSON payload
        decoder: Structured decoder (default: ``PydanticDecoder``)
        fails_on_empty_data: When False, empty payloads decode from ``{}``

    Example:
        >>> source.pipe(map_object(User, key_path="data.user"))
    """
    return response_operator(
        lambda r: r.map_object(
            type_,
            key_path=key_path,
            decoder=decoder,
            fails_on_empty_data=fails_on_empty_data,
        ),
        name="map_object",
    )
