"""
Base building blocks for response operators.

Every operator in this package is a synchronous ``Response`` conversion lifted
onto an observable with :func:`response_operator`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

import httpx
import reactivex
from reactivex import operators as ops

from reactive_httpx.errors import ReactiveHttpxError, TransportError
from reactive_httpx.response import Response
from reactive_httpx.telemetry import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from reactivex import Observable

T = TypeVar("T")

logger = get_logger("reactive_httpx.operators")


def as_response(value: Response | httpx.Response) -> Response:
    """Coerce an upstream value into a :class:`Response`.

    Raises:
        TypeError: If the value is neither a Response nor an ``httpx.Response``.
    """
    if isinstance(value, Response):
        return value
    if isinstance(value, httpx.Response):
        return Response.from_httpx(value)
    raise TypeError(f"Expected a Response, got {type(value).__name__}")


def unwrap_throwable(
    throwable: Callable[[], T],
    *,
    response: Response | None = None,
) -> Observable[T]:
    """Run a fallible computation once and wrap its outcome as an observable.

    Args:
        throwable: Zero-argument callable to run immediately
        response: Response attached to the fallback error, if any

    Returns:
        An observable emitting the result then completing, or erroring with
        the raised ``ReactiveHttpxError``. Any other exception is wrapped in
        a ``TransportError``.
    """
    try:
        return reactivex.just(throwable())
    except ReactiveHttpxError as e:
        return reactivex.throw(e)
    except Exception as e:
        logger.debug(
            "Wrapping unexpected exception as TransportError",
            exc_type=type(e).__name__,
        )
        return reactivex.throw(TransportError(e, response=response))


def response_operator(
    fn: Callable[[Response], T],
    name: str | None = None,
) -> Callable[[Observable[Any]], Observable[T]]:
    """Lift a synchronous ``Response`` conversion into a pipeable operator.

    ``fn`` runs once per upstream response, on the thread that delivers it.
    Upstream errors are forwarded without calling ``fn``, and disposing the
    subscription before a response arrives means ``fn`` never runs.

    Args:
        fn: Conversion that returns a value or raises a typed error
        name: Operator name for logging

    Returns:
        Operator for use with ``Observable.pipe``
    """
    op_name = name or getattr(fn, "__name__", "response_operator")

    def apply(value: Response | httpx.Response) -> Observable[T]:
        def run() -> T:
            response = as_response(value)
            logger.debug(
                "Applying response operator",
                operator=op_name,
                status_code=response.status_code,
            )
            return fn(response)

        return unwrap_throwable(
            run, response=value if isinstance(value, Response) else None
        )

    return ops.flat_map_latest(apply)
