"""
Integration tests for httpx bridges.

Runs the operators end to end against httpx clients backed by mocked
transports.
"""

import asyncio

import httpx
import pytest
import reactivex
from pydantic import BaseModel
from reactivex.internal.exceptions import SequenceContainsNoElementsError
from reactivex.testing import TestScheduler

from reactive_httpx import (
    JsonMappingError,
    StatusCodeError,
    TransportError,
    filter_successful_status_and_redirect_codes,
    filter_successful_status_codes,
    first_value,
    from_awaitable,
    from_callable,
    from_httpx_response,
    map_json,
    map_object,
    map_string,
    response_operator,
)
from tests.conftest import Spy, collect


class User(BaseModel):
    id: int
    name: str
    email: str


class TestFromCallable:
    """Tests for blocking httpx calls."""

    def test_success_chain(self, sync_client: httpx.Client) -> None:
        """Test filter then decode of a successful response."""
        events = collect(
            from_callable(lambda: sync_client.get("/users/1")).pipe(
                filter_successful_status_codes(),
                map_object(User),
            )
        )
        assert events.value == User(id=1, name="Ada", email="ada@example.com")
        assert events.completions == 1

    def test_not_found(self, sync_client: httpx.Client) -> None:
        """Test a 404 keeps the original httpx response."""
        events = collect(
            from_callable(lambda: sync_client.get("/users/99")).pipe(
                filter_successful_status_codes(),
                map_json(),
            )
        )
        error = events.error
        assert isinstance(error, StatusCodeError)
        assert error.status_code == 404
        assert error.response.response is not None
        assert error.response.request.url.path == "/users/99"
        assert error.response.map_json() == {"error": "not found"}

    def test_empty_body(self, sync_client: httpx.Client) -> None:
        """Test a 204 with and without empty-data tolerance."""
        call = lambda: sync_client.get("/empty")  # noqa: E731

        events = collect(from_callable(call).pipe(map_json()))
        assert isinstance(events.error, JsonMappingError)
        assert events.error.empty is True

        events = collect(from_callable(call).pipe(map_json(fails_on_empty_data=False)))
        assert events.values == [None]

    def test_malformed_body(self, sync_client: httpx.Client) -> None:
        events = collect(from_callable(lambda: sync_client.get("/broken")).pipe(map_json()))
        assert isinstance(events.error, JsonMappingError)
        assert events.error.empty is False

    def test_redirect(self, sync_client: httpx.Client) -> None:
        """Test redirects pass only the redirect-tolerant filter."""
        call = lambda: sync_client.get("/redirect")  # noqa: E731

        events = collect(from_callable(call).pipe(filter_successful_status_codes()))
        assert events.error.status_code == 302

        events = collect(
            from_callable(call).pipe(filter_successful_status_and_redirect_codes())
        )
        assert events.value.status_code == 302

    def test_key_paths(self, sync_client: httpx.Client) -> None:
        """Test key path decoding on a list endpoint."""
        call = lambda: sync_client.get("/users")  # noqa: E731

        events = collect(from_callable(call).pipe(map_object(list[User], key_path="data")))
        assert [u.name for u in events.value] == ["Ada", "Grace"]

        events = collect(from_callable(call).pipe(map_string(key_path="data.1.email")))
        assert events.value == "grace@example.com"

        events = collect(from_callable(call).pipe(map_object(int, key_path="total")))
        assert events.value == 2

    def test_connection_failure(self, sync_client: httpx.Client, spy: Spy) -> None:
        """Test transport failures skip every conversion."""
        events = collect(
            from_callable(lambda: sync_client.get("/unreachable")).pipe(
                filter_successful_status_codes(),
                response_operator(spy),
            )
        )
        error = events.error
        assert isinstance(error, TransportError)
        assert isinstance(error.cause, httpx.ConnectError)
        assert error.url == "https://api.example.com/unreachable"
        assert events.terminal_count == 1
        assert spy.calls == []

    def test_cold(self, sync_client: httpx.Client) -> None:
        """Test each subscription makes its own call."""
        calls = []

        def call() -> httpx.Response:
            calls.append(1)
            return sync_client.get("/users/2")

        source = from_callable(call)
        assert calls == []
        collect(source)
        collect(source)
        assert len(calls) == 2

    def test_scheduler(self, sync_client: httpx.Client) -> None:
        """Test the call runs on the given scheduler."""
        scheduler = TestScheduler()
        events = collect(
            from_callable(lambda: sync_client.get("/users/1"), scheduler=scheduler).pipe(
                map_string(key_path="name")
            )
        )
        assert events.values == []

        scheduler.advance_by(1)

        assert events.value == "Ada"


class TestFromHttpxResponse:
    """Tests for wrapping an already-read response."""

    def test_wraps_response(self) -> None:
        raw = httpx.Response(
            200,
            json={"a": 1},
            request=httpx.Request("GET", "https://api.example.com/a"),
        )
        events = collect(from_httpx_response(raw).pipe(map_json()))
        assert events.value == {"a": 1}


class TestFromAwaitable:
    """Tests for async httpx calls."""

    @pytest.mark.asyncio
    async def test_success(self, async_client: httpx.AsyncClient) -> None:
        """Test awaiting a decoded object."""
        user = await first_value(
            from_awaitable(lambda: async_client.get("/users/2")).pipe(
                filter_successful_status_codes(),
                map_object(User),
            )
        )
        assert user.name == "Grace"

    @pytest.mark.asyncio
    async def test_status_error_raised(self, async_client: httpx.AsyncClient) -> None:
        """Test the terminal error is raised unchanged."""
        with pytest.raises(StatusCodeError) as exc_info:
            await first_value(
                from_awaitable(lambda: async_client.get("/users/42")).pipe(
                    filter_successful_status_codes()
                )
            )
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_connection_failure(self, async_client: httpx.AsyncClient) -> None:
        with pytest.raises(TransportError) as exc_info:
            await first_value(
                from_awaitable(lambda: async_client.get("/unreachable")).pipe(map_json())
            )
        assert isinstance(exc_info.value.cause, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_dispose_cancels_call(self) -> None:
        """Test disposing the subscription cancels the pending call."""
        started = asyncio.Event()
        cancelled = asyncio.Event()

        async def slow_call() -> httpx.Response:
            started.set()
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.set()
                raise
            return httpx.Response(200)

        spy = Spy()
        events = collect(from_awaitable(slow_call).pipe(response_operator(spy)))
        await started.wait()

        events.subscription.dispose()
        await asyncio.wait_for(cancelled.wait(), timeout=1)

        assert events.terminal_count == 0
        assert spy.calls == []

    @pytest.mark.asyncio
    async def test_cold(self, async_client: httpx.AsyncClient) -> None:
        calls = []

        def call():
            calls.append(1)
            return async_client.get("/users/1")

        source = from_awaitable(call).pipe(map_string(key_path="name"))
        assert calls == []
        assert await first_value(source) == "Ada"
        assert await first_value(source) == "Ada"
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_with_httpx_mock(self, httpx_mock) -> None:
        """Test against a client intercepted by pytest-httpx."""
        httpx_mock.add_response(
            url="https://api.example.com/users/7",
            json={"id": 7, "name": "Kay", "email": "kay@example.com"},
        )

        async with httpx.AsyncClient() as client:
            user = await first_value(
                from_awaitable(
                    lambda: client.get("https://api.example.com/users/7")
                ).pipe(filter_successful_status_codes(), map_object(User))
            )

        assert user == User(id=7, name="Kay", email="kay@example.com")

    @pytest.mark.asyncio
    async def test_timeout_with_httpx_mock(self, httpx_mock) -> None:
        httpx_mock.add_exception(httpx.ReadTimeout("Read timed out"))

        async with httpx.AsyncClient() as client:
            with pytest.raises(TransportError) as exc_info:
                await first_value(
                    from_awaitable(lambda: client.get("https://api.example.com/slow"))
                )

        assert isinstance(exc_info.value.cause, httpx.ReadTimeout)


class TestFirstValue:
    """Tests for first_value."""

    @pytest.mark.asyncio
    async def test_value(self) -> None:
        assert await first_value(reactivex.just(5)) == 5

    @pytest.mark.asyncio
    async def test_empty(self) -> None:
        with pytest.raises(SequenceContainsNoElementsError):
            await first_value(reactivex.empty())

    @pytest.mark.asyncio
    async def test_error(self) -> None:
        error = TransportError(OSError("reset"))
        with pytest.raises(TransportError) as exc_info:
            await first_value(reactivex.throw(error))
        assert exc_info.value is error
