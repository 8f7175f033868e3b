"""
Central place for request/endpoint log lines.

- endpoint entry/exit lines (HTTP method, path, method info, params/result)
- error lines carrying the request id and account from the request context
"""

from __future__ import annotations

import logging

from . import context

logger = logging.getLogger(__name__)


class LogManager:
    def log_controller_entry(
        self,
        http_method: str,
        request_uri: str,
        method_info: str,
        log_message: str,
    ) -> None:
        logger.info("%s %s", self._form_log_message(http_method, request_uri, method_info), log_message)

    def log_controller_exit(
        self,
        http_method: str,
        request_uri: str,
        method_info: str,
        result_json: str,
    ) -> None:
        logger.info(
            "%s, Return: %s",
            self._form_log_message(http_method, request_uri, method_info),
            result_json,
        )

    def log_exception(self, exc: BaseException) -> None:
        logger.error(
            "Request ID: %s, Username: %s",
            context.get_request_id(),
            context.get_request_username(),
            exc_info=exc,
        )

    def _form_log_message(self, http_method: str, request_uri: str, method_info: str) -> str:
        return f"{http_method} {request_uri} - {self._form_core_log_message(method_info)}"

    def _form_core_log_message(self, method_info: str) -> str:
        return (
            f"Request ID: {context.get_request_id()}, "
            f"Username: {context.get_request_username()}, "
            f"Method: {method_info}"
        )


log_manager = LogManager()
