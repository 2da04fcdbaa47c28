"""
Operator layer - pipeable operators over observables of responses.

- Filters: Reject responses by status code
- Mappers: Decode payloads (image, JSON, string, structured object)
- Base: The synchronous-to-observable adapter every operator is built on
"""

from reactive_httpx.operators.base import (
    as_response,
    response_operator,
    unwrap_throwable,
)
from reactive_httpx.operators.filters import (
    filter_status_code,
    filter_status_code_range,
    filter_status_codes,
    filter_successful_status_and_redirect_codes,
    filter_successful_status_codes,
)
from reactive_httpx.operators.mapping import (
    map_image,
    map_json,
    map_object,
    map_string,
)

__all__ = [
    "as_response",
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
]
