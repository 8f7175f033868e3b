"""Tests for endpoint entry/exit logging."""

import logging
from unittest.mock import MagicMock

import pytest

from fastapi import APIRouter, FastAPI, HTTPException
from fastapi.testclient import TestClient

from core import context
from core.log_manager import LogManager
from core.log_route import (
    NOT_APPLICABLE,
    LoggingAspect,
    LoggingRoute,
    build_log_message,
    extract_method_info,
    extract_path,
    to_result_json,
)
from core.middleware import RequestContextMiddleware


class Unserializable:
    __slots__ = ()

    def __iter__(self):
        raise TypeError("not iterable")


async def list_things() -> str:
    return "result"


def add(a: int, b: int = 2) -> int:
    return a + b


class TestLoggingAspect:
    async def test_calls_entry_and_exit(self):
        manager = MagicMock(spec=LogManager)
        aspect = LoggingAspect(manager)

        result = await aspect.log_controller(list_things, (), {})

        assert result == "result"
        manager.log_controller_entry.assert_called_once_with(
            NOT_APPLICABLE, NOT_APPLICABLE, "test_log_route.list_things", ""
        )
        manager.log_controller_exit.assert_called_once_with(
            NOT_APPLICABLE, NOT_APPLICABLE, "test_log_route.list_things", '"result"'
        )

    async def test_sync_function_and_current_request(self):
        manager = MagicMock(spec=LogManager)
        context.set_current_request(context.RequestInfo(method="POST", url="http://testserver/sum?x=1"))

        result = await LoggingAspect(manager).log_controller(add, (), {"a": 1})

        assert result == 3
        manager.log_controller_entry.assert_called_once_with(
            "POST", "/sum", "test_log_route.add", ", Params: {a: 1, b: 2}"
        )
        manager.log_controller_exit.assert_called_once_with("POST", "/sum", "test_log_route.add", "3")

    async def test_exception_propagates_without_exit(self):
        manager = MagicMock(spec=LogManager)

        async def broken():
            raise HTTPException(status_code=404, detail="missing")

        with pytest.raises(HTTPException) as exc_info:
            await LoggingAspect(manager).log_controller(broken, (), {})

        assert exc_info.value.status_code == 404

        manager.log_controller_entry.assert_called_once()
        manager.log_controller_exit.assert_not_called()


class TestHelpers:
    def test_extract_path(self):
        assert extract_path("http://localhost:8080/api/items?page=2") == "/api/items"

    def test_extract_path_unparseable_returns_input(self):
        assert extract_path("http://[::1/broken") == "http://[::1/broken"

    def test_extract_method_info(self):
        assert extract_method_info(add) == "test_log_route.add"

    def test_build_log_message_without_params(self):
        assert build_log_message(list_things, (), {}) == ""

    def test_result_json_falls_back_to_class_name(self):
        assert to_result_json(Unserializable()) == "test_log_route.Unserializable"

    def test_result_json_keeps_unicode(self):
        assert to_result_json({"name": "홍길동"}) == '{"name": "홍길동"}'


def _build_app() -> FastAPI:
    router = APIRouter(route_class=LoggingRoute)

    @router.get("/items/{item_id}")
    async def read_item(item_id: int, q: str | None = None) -> dict:
        return {"id": item_id, "q": q}

    @router.get("/sync")
    def read_sync() -> dict:
        return {"sync": True}

    app = FastAPI()
    app.add_middleware(RequestContextMiddleware)
    # Re-registration through include_router must not wrap twice.
    app.include_router(router)
    return app


def _entries(caplog):
    return [r.getMessage() for r in caplog.records if r.name == "core.log_manager"]


def test_route_logs_entry_and_exit(caplog):
    caplog.set_level(logging.INFO, logger="core.log_manager")
    client = TestClient(_build_app())

    response = client.get("/items/3", params={"q": "x"})

    assert response.status_code == 200
    assert response.json() == {"id": 3, "q": "x"}
    entry, exit_ = _entries(caplog)
    assert entry.startswith("GET /items/3 - Request ID: ")
    assert "Username: SYSTEM, Method: test_log_route._build_app.<locals>.read_item" in entry
    assert entry.endswith(", Params: {item_id: 3, q: x}")
    assert exit_.endswith('Return: {"id": 3, "q": "x"}')


def test_route_runs_sync_endpoints(caplog):
    caplog.set_level(logging.INFO, logger="core.log_manager")
    client = TestClient(_build_app())

    response = client.get("/sync")

    assert response.json() == {"sync": True}
    assert len(_entries(caplog)) == 2


def test_route_validation_still_applies():
    client = TestClient(_build_app())

    response = client.get("/items/not-a-number")

    assert response.status_code == 422
