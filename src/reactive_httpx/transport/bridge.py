"""HTTP 桥接层：把 httpx 的调用结果转换为单值可观察序列。

Bridges from httpx calls into single-value observables.

Requests are built and sent by the caller's own ``httpx`` client; these
helpers only wrap the call so that its response, or its failure, becomes the
one terminal event of an observable.

Example:
    >>> async with httpx.AsyncClient() as client:
    ...     user = await first_value(
    ...         from_awaitable(lambda: client.get("https://example.com/user")).pipe(
    ...             filter_successful_status_codes(),
    ...             map_object(User),
    ...         )
    ...     )
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, TypeVar

import httpx
import reactivex
from reactivex import Observable
from reactivex.disposable import Disposable
from reactivex.internal.exceptions import SequenceContainsNoElementsError
from reactivex.scheduler import CurrentThreadScheduler

from reactive_httpx.errors import ReactiveHttpxError, TransportError
from reactive_httpx.operators.base import as_response
from reactive_httpx.telemetry import get_logger

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from reactivex import abc

    from reactive_httpx.response import Response

T = TypeVar("T")

logger = get_logger("reactive_httpx.transport")


def _request_url(error: httpx.HTTPError) -> str | None:
    try:
        return str(error.request.url)
    except RuntimeError:
        return None


def _as_failure(error: Exception) -> ReactiveHttpxError:
    """Map an exception raised while producing a response to a library error."""
    if isinstance(error, ReactiveHttpxError):
        return error
    if isinstance(error, httpx.HTTPError):
        url = _request_url(error)
        logger.debug("HTTP call failed", exc_type=type(error).__name__, url=url)
        return TransportError(error, url=url)
    logger.debug("Response factory failed", exc_type=type(error).__name__)
    return TransportError(error)


def from_httpx_response(response: httpx.Response) -> Observable[Response]:
    """Wrap an already-read ``httpx.Response`` as a single-value observable."""
    return reactivex.just(as_response(response))


def from_awaitable(
    factory: Callable[[], Awaitable[httpx.Response]],
    loop: asyncio.AbstractEventLoop | None = None,
) -> Observable[Response]:
    """Create a cold observable around an async httpx call.

    Each subscription calls ``factory`` in a new task on ``loop`` (default:
    the running loop, so subscribe from inside it). Disposing the
    subscription cancels the task.

    Args:
        factory: Zero-argument callable returning an awaitable ``httpx.Response``
        loop: Event loop to run the call on

    Returns:
        Observable emitting one Response, or one ``TransportError``
    """

    def subscribe(
        observer: abc.ObserverBase[Response],
        scheduler: abc.SchedulerBase | None = None,
    ) -> abc.DisposableBase:
        async def run() -> None:
            try:
                response = as_response(await factory())
            except Exception as e:
                observer.on_error(_as_failure(e))
                return
            observer.on_next(response)
            observer.on_completed()

        event_loop = loop or asyncio.get_running_loop()
        task = event_loop.create_task(run())
        return Disposable(task.cancel)

    return Observable(subscribe)


def from_callable(
    factory: Callable[[], httpx.Response],
    scheduler: abc.SchedulerBase | None = None,
) -> Observable[Response]:
    """Create a cold observable around a blocking httpx call.

    Args:
        factory: Zero-argument callable returning an ``httpx.Response``,
            e.g. ``lambda: client.get(url)`` for an ``httpx.Client``
        scheduler: Scheduler that runs the call (default: the subscribe
            scheduler, else the current thread)

    Returns:
        Observable emitting one Response, or one ``TransportError``
    """

    def subscribe(
        observer: abc.ObserverBase[Response],
        scheduler_: abc.SchedulerBase | None = None,
    ) -> abc.DisposableBase:
        _scheduler = scheduler or scheduler_ or CurrentThreadScheduler.singleton()

        def action(_: abc.SchedulerBase, __: Any = None) -> None:
            try:
                response = as_response(factory())
            except Exception as e:
                observer.on_error(_as_failure(e))
                return
            observer.on_next(response)
            observer.on_completed()

        return _scheduler.schedule(action)

    return Observable(subscribe)


async def first_value(source: Observable[T]) -> T:
    """Await the first value of an observable.

    The subscription is disposed once the value arrives, or when the
    awaiting task is cancelled. Events may arrive on any thread.

    Raises:
        ReactiveHttpxError: The observable's terminal error, unchanged.
        SequenceContainsNoElementsError: If it completes without a value.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[T] = loop.create_future()

    def set_result(value: T) -> None:
        if not future.done():
            future.set_result(value)

    def set_exception(error: BaseException) -> None:
        if not future.done():
            future.set_exception(error)

    disposable = source.subscribe(
        on_next=lambda v: loop.call_soon_threadsafe(set_result, v),
        on_error=lambda e: loop.call_soon_threadsafe(set_exception, e),
        on_completed=lambda: loop.call_soon_threadsafe(
            set_exception, SequenceContainsNoElementsError()
        ),
    )
    try:
        return await future
    finally:
        disposable.dispose()
