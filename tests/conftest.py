"""Root pytest fixtures for reactive-httpx tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import pytest

from reactive_httpx.config import reset_settings
from reactive_httpx.response import Response

if TYPE_CHECKING:
    from collections.abc import Callable

    from reactivex import Observable
    from reactivex.abc import DisposableBase


@dataclass
class Events:
    """Everything an observable emitted to one subscriber."""

    values: list[Any] = field(default_factory=list)
    errors: list[Exception] = field(default_factory=list)
    completions: int = 0
    subscription: DisposableBase | None = None

    def on_completed(self) -> None:
        self.completions += 1

    @property
    def terminal_count(self) -> int:
        return len(self.errors) + self.completions

    @property
    def error(self) -> Exception:
        assert len(self.errors) == 1, f"expected one error, got {self.errors}"
        return self.errors[0]

    @property
    def value(self) -> Any:
        assert len(self.values) == 1, f"expected one value, got {self.values}"
        return self.values[0]


def collect(source: Observable[Any]) -> Events:
    """Subscribe to an observable and record its events."""
    events = Events()
    events.subscription = source.subscribe(
        on_next=events.values.append,
        on_error=events.errors.append,
        on_completed=events.on_completed,
    )
    return events


def make_response(status_code: int = 200, data: bytes | str = b"") -> Response:
    """Build a Response with a bytes or text payload."""
    if isinstance(data, str):
        data = data.encode()
    return Response(status_code=status_code, data=data)


class Spy:
    """Callable recording every response it is applied to."""

    def __init__(self, fn: Callable[[Response], Any] | None = None) -> None:
        self.calls: list[Response] = []
        self._fn = fn or (lambda r: r)

    def __call__(self, response: Response) -> Any:
        self.calls.append(response)
        return self._fn(response)


@pytest.fixture(autouse=True)
def _fresh_settings() -> Any:
    """Drop cached settings so environment changes in one test don't leak."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def spy() -> Spy:
    return Spy()
