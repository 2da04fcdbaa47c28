"""
Integration test helper utilities.

Shared fixtures for tests that run operators against real httpx clients
with mocked transports.
"""

from __future__ import annotations

import json

import httpx
import pytest
import pytest_asyncio

API_URL = "https://api.example.com"

USERS = {
    1: {"id": 1, "name": "Ada", "email": "ada@example.com"},
    2: {"id": 2, "name": "Grace", "email": "grace@example.com"},
}


def users_handler(request: httpx.Request) -> httpx.Response:
    """Serve a tiny users API.

    - ``GET /users/<id>``: the user, or 404
    - ``GET /users``: ``{"data": [...], "total": n}``
    - ``GET /empty``: 204 with no body
    - ``GET /broken``: 200 with malformed JSON
    - ``GET /redirect``: 302
    - anything else: connection refused
    """
    path = request.url.path
    if path == "/users":
        body = {"data": list(USERS.values()), "total": len(USERS)}
        return httpx.Response(200, json=body)
    if path.startswith("/users/"):
        user = USERS.get(int(path.rsplit("/", 1)[1]))
        if user is None:
            return httpx.Response(404, json={"error": "not found"})
        return httpx.Response(200, content=json.dumps(user).encode())
    if path == "/empty":
        return httpx.Response(204)
    if path == "/broken":
        return httpx.Response(200, content=b'{"id": ')
    if path == "/redirect":
        return httpx.Response(302, headers={"Location": "/users/1"})
    raise httpx.ConnectError("Connection refused", request=request)


@pytest.fixture
def sync_client():
    with httpx.Client(
        base_url=API_URL, transport=httpx.MockTransport(users_handler)
    ) as client:
        yield client


@pytest_asyncio.fixture
async def async_client():
    async with httpx.AsyncClient(
        base_url=API_URL, transport=httpx.MockTransport(users_handler)
    ) as client:
        yield client
