"""
Response layer - the response value and its synchronous conversions.

- Response: Immutable status code + payload, with filters and mappers
- Decoders: Pluggable structured decoders for ``map_object``
- Key paths: Lookup of nested values in parsed JSON
"""

from reactive_httpx.response.decoders import (
    JsonDecoder,
    PydanticDecoder,
    StructuredDecoder,
    default_decoder,
)
from reactive_httpx.response.key_path import MISSING, value_at_key_path
from reactive_httpx.response.model import (
    SUCCESS_AND_REDIRECT_CODES,
    SUCCESS_CODES,
    Response,
)

__all__ = [
    "JsonDecoder",
    "MISSING",
    "PydanticDecoder",
    "Response",
    "SUCCESS_AND_REDIRECT_CODES",
    "SUCCESS_CODES",
    "StructuredDecoder",
    "default_decoder",
    "value_at_key_path",
]
