#!/usr/bin/env python3
"""
Basic operator example.

This example fetches a JSON document with httpx and decodes it through
reactive-httpx operators, first with a blocking client and then with an
async one.

Usage:
    python examples/basic_usage.py
"""

import asyncio

import httpx
from pydantic import BaseModel

from reactive_httpx import (
    ReactiveHttpxError,
    StatusCodeError,
    filter_successful_status_codes,
    first_value,
    from_awaitable,
    from_callable,
    map_object,
    map_string,
)

URL = "https://jsonplaceholder.typicode.com/todos/1"


class Todo(BaseModel):
    id: int
    title: str
    completed: bool


def run_sync() -> None:
    """Subscribe with callbacks using a blocking client."""
    with httpx.Client() as client:
        from_callable(lambda: client.get(URL)).pipe(
            filter_successful_status_codes(),
            map_string(key_path="title"),
        ).subscribe(
            on_next=lambda title: print(f"Title: {title}"),
            on_error=lambda e: print(f"Failed: {e}"),
        )


async def run_async() -> None:
    """Await the decoded value using an async client."""
    async with httpx.AsyncClient() as client:
        try:
            todo = await first_value(
                from_awaitable(lambda: client.get(URL)).pipe(
                    filter_successful_status_codes(),
                    map_object(Todo),
                )
            )
            print(f"Todo: {todo}")
        except StatusCodeError as e:
            print(f"Unexpected status {e.status_code}")
        except ReactiveHttpxError as e:
            print(f"Failed: {e}")


if __name__ == "__main__":
    run_sync()
    asyncio.run(run_async())
