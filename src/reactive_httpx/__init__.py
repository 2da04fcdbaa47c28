"""httpx 响应的响应式操作符：状态码过滤与负载解码。

reactive-httpx: Reactive operators for httpx responses.

Adapts observables of HTTP responses into typed pipelines with status code
filtering and payload decoding (image, JSON, string, structured object).

Example:
    >>> from reactive_httpx import filter_successful_status_codes, map_json
    >>> from_httpx_response(response).pipe(
    ...     filter_successful_status_codes(),
    ...     map_json(),
    ... ).subscribe(print)
"""
from __future__ import annotations

from reactive_httpx._features import HAS_VISION, require_extra
from reactive_httpx.config import Settings, get_settings, reset_settings
from reactive_httpx.errors import (
    ErrorContext,
    ImageMappingError,
    JsonMappingError,
    ObjectMappingError,
    ReactiveHttpxError,
    StatusCodeError,
    StringMappingError,
    TransportError,
)
from reactive_httpx.operators import (
    filter_status_code,
    filter_status_code_range,
    filter_status_codes,
    filter_successful_status_and_redirect_codes,
    filter_successful_status_codes,
    map_image,
    map_json,
    map_object,
    map_string,
    response_operator,
    unwrap_throwable,
)
from reactive_httpx.response import (
    JsonDecoder,
    PydanticDecoder,
    Response,
    StructuredDecoder,
)
from reactive_httpx.transport import (
    first_value,
    from_awaitable,
    from_callable,
    from_httpx_response,
)

__version__ = "0.1.0"

__all__ = [
    # Feature flags
    "HAS_VISION",
    "require_extra",
    # Config
    "Settings",
    "get_settings",
    "reset_settings",
    # Errors
    "ErrorContext",
    "ImageMappingError",
    "JsonMappingError",
    "ObjectMappingError",
    "ReactiveHttpxError",
    "StatusCodeError",
    "StringMappingError",
    "TransportError",
    # Operators
    "filter_status_code",
    "filter_status_code_range",
    "filter_status_codes",
    "filter_successful_status_and_redirect_codes",
    "filter_successful_status_codes",
    "map_image",
    "map_json",
    "map_object",
    "map_string",
    "response_operator",
    "unwrap_throwable",
    # Response
    "JsonDecoder",
    "PydanticDecoder",
    "Response",
    "StructuredDecoder",
    # Transport
    "first_value",
    "from_awaitable",
    "from_callable",
    "from_httpx_response",
    # Version
    "__version__",
]
