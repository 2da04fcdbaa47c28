"""错误体系：响应流操作符可能发出的全部错误类型。

Error hierarchy for reactive-httpx.

Every operator emits either its converted value or exactly one of these.
"""

from reactive_httpx.errors.base import (
    ErrorContext,
    ImageMappingError,
    JsonMappingError,
    ObjectMappingError,
    ReactiveHttpxError,
    StatusCodeError,
    StringMappingError,
    StringMappingReason,
    TransportError,
)

__all__ = [
    "ErrorContext",
    "ImageMappingError",
    "JsonMappingError",
    "ObjectMappingError",
    "ReactiveHttpxError",
    "StatusCodeError",
    "StringMappingError",
    "StringMappingReason",
    "TransportError",
]
