"""
Status code filter operators.

Each operator passes the response through unchanged when its status code is
accepted and errors with ``StatusCodeError`` otherwise.

Example:
    >>> source.pipe(filter_successful_status_codes(), map_json())
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from reactive_httpx.operators.base import response_operator
from reactive_httpx.response import Response

if TYPE_CHECKING:
    from collections.abc import Callable

    from reactivex import Observable

    ResponseFilter = Callable[[Observable[Any]], Observable[Response]]


def filter_status_code_range(low: int, high: int) -> ResponseFilter:
    """Accept status codes in the closed range ``[low, high]``."""
    return response_operator(
        lambda r: r.filter_status_code_range(low, high),
        name="filter_status_code_range",
    )


def filter_status_codes(status_codes: range) -> ResponseFilter:
    """Accept status codes in a half-open ``range``."""
    return response_operator(
        lambda r: r.filter_status_codes(status_codes),
        name="filter_status_codes",
    )


def filter_status_code(status_code: int) -> ResponseFilter:
    """Accept exactly ``status_code``."""
    return response_operator(
        lambda r: r.filter_status_code(status_code),
        name="filter_status_code",
    )


def filter_successful_status_codes() -> ResponseFilter:
    """Accept status codes 200 to 299."""
    return response_operator(Response.filter_successful_status_codes)


def filter_successful_status_and_redirect_codes() -> ResponseFilter:
    """Accept status codes 200 to 399."""
    return response_operator(Response.filter_successful_status_and_redirect_codes)
