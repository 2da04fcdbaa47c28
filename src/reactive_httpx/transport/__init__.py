"""
Transport layer - httpx calls as single-value observables.
"""

from reactive_httpx.transport.bridge import (
    first_value,
    from_awaitable,
    from_callable,
    from_httpx_response,
)

__all__ = [
    "first_value",
    "from_awaitable",
    "from_callable",
    "from_httpx_response",
]
