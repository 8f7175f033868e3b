"""
Entry/exit logging for every endpoint of a router.

Use `APIRouter(route_class=LoggingRoute)`; each endpoint registered on that
router is wrapped by `LoggingAspect.log_controller`, which logs the HTTP
method, path, method info and parameters on entry, and the JSON-encoded
result on exit.
"""

from __future__ import annotations

import functools
import inspect
import json
import logging
from collections.abc import Callable
from typing import Any
from urllib.parse import urlsplit

from fastapi.encoders import jsonable_encoder
from fastapi.routing import APIRoute
from starlette.concurrency import run_in_threadpool

from . import context
from .log_manager import LogManager, log_manager

NOT_APPLICABLE = "N/A"

logger = logging.getLogger(__name__)


def extract_path(full_url: str) -> str:
    try:
        return urlsplit(full_url).path
    except ValueError:
        logger.warning("Failed to extract path from URL: %s", full_url, exc_info=True)
        return full_url


def extract_method_info(func: Callable[..., Any]) -> str:
    module = getattr(func, "__module__", None) or ""
    simple_module = module.rsplit(".", 1)[-1]
    name = getattr(func, "__qualname__", None) or getattr(func, "__name__", repr(func))
    return f"{simple_module}.{name}" if simple_module else name


def build_log_message(func: Callable[..., Any], args: tuple[Any, ...], kwargs: dict[str, Any]) -> str:
    """
    ", Params: {name1: value1, ...}" or "" for functions without parameters.
    """
    try:
        bound = inspect.signature(func).bind_partial(*args, **kwargs)
    except (TypeError, ValueError):
        return ""
    bound.apply_defaults()
    if not bound.arguments:
        return ""
    params = ", ".join(f"{name}: {value}" for name, value in bound.arguments.items())
    return f", Params: {{{params}}}"


def _qualified_class_name(value: Any) -> str:
    cls = type(value)
    return f"{cls.__module__}.{cls.__qualname__}"


def to_result_json(result: Any) -> str:
    try:
        return json.dumps(jsonable_encoder(result), ensure_ascii=False)
    except Exception:
        return _qualified_class_name(result)


class LoggingAspect:
    def __init__(self, log_manager: LogManager) -> None:
        self.log_manager = log_manager

    async def log_controller(
        self,
        func: Callable[..., Any],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Any:
        request = context.get_current_request()
        http_method = NOT_APPLICABLE if request is None else request.method
        request_uri = NOT_APPLICABLE if request is None else extract_path(request.url)
        method_info = extract_method_info(func)
        log_message = build_log_message(func, args, kwargs)

        self.log_manager.log_controller_entry(http_method, request_uri, method_info, log_message)

        if inspect.iscoroutinefunction(func):
            result = await func(*args, **kwargs)
        else:
            result = await run_in_threadpool(func, *args, **kwargs)

        self.log_manager.log_controller_exit(http_method, request_uri, method_info, to_result_json(result))
        return result


logging_aspect = LoggingAspect(log_manager)


def wrap_endpoint(endpoint: Callable[..., Any], aspect: LoggingAspect | None = None) -> Callable[..., Any]:
    if getattr(endpoint, "__logged_endpoint__", False):
        # include_router() re-registers already wrapped endpoints.
        return endpoint

    @functools.wraps(endpoint)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        return await (aspect or logging_aspect).log_controller(endpoint, args, kwargs)

    # FastAPI resolves string annotations against the callable's __globals__,
    # which would be this module's; hand it the already resolved signature.
    wrapper.__signature__ = inspect.signature(endpoint, eval_str=True)  # type: ignore[attr-defined]
    wrapper.__logged_endpoint__ = True  # type: ignore[attr-defined]
    return wrapper


class LoggingRoute(APIRoute):
    def __init__(self, path: str, endpoint: Callable[..., Any], **kwargs: Any) -> None:
        super().__init__(path, wrap_endpoint(endpoint), **kwargs)
