"""
Request-scoped logging context.

Holds the values every log line of a request should carry (request id and
account) plus the method/path of the in-flight request. Values live in a
`ContextVar`, so concurrent requests and asyncio tasks never share them.

Usage:
    context.set_request_id(str(uuid4()))
    context.set_request_username("alice")
    try:
        await app(scope, receive, send)
    finally:
        context.clear()
"""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass
from uuid import UUID

REQUEST_ID = "requestId"
REQUEST_USERNAME = "requestUsername"


@dataclass(frozen=True)
class RequestInfo:
    method: str
    url: str


# The map is replaced on every write, never mutated, so a task that copied the
# context keeps its own snapshot.
_values: ContextVar[dict[str, str] | None] = ContextVar("log_context", default=None)
_current_request: ContextVar[RequestInfo | None] = ContextVar("current_request", default=None)


def put(key: str | None, value: str | None) -> None:
    if key is None or value is None:
        return None
    values = dict(_values.get() or {})
    values[key] = value
    _values.set(values)


def get(key: str | None) -> str | None:
    if key is None:
        return None
    return (_values.get() or {}).get(key)


def remove(key: str | None) -> None:
    if key is None:
        return None
    values = dict(_values.get() or {})
    values.pop(key, None)
    _values.set(values)


def clear() -> None:
    _values.set(None)
    _current_request.set(None)


def set_request_id(request_id: str | None) -> None:
    put(REQUEST_ID, request_id)


def get_request_id() -> str | None:
    return get(REQUEST_ID)


def get_request_uuid() -> UUID | None:
    """
    Request id as a UUID, or None when unset/blank.

    Raises ValueError when the stored id is not a UUID.
    """
    request_id = get(REQUEST_ID)
    if request_id is None or not request_id.strip():
        return None
    return UUID(request_id)


def set_request_username(username: str | None) -> None:
    put(REQUEST_USERNAME, username)


def get_request_username() -> str | None:
    return get(REQUEST_USERNAME)


def set_current_request(request: RequestInfo | None) -> None:
    _current_request.set(request)


def get_current_request() -> RequestInfo | None:
    return _current_request.get()
