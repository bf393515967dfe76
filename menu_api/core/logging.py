from __future__ import annotations

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

import structlog

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)

BODY_METHODS = frozenset({"POST", "PUT"})


def _add_context_fields(_: logging.Logger, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    event_dict["request_id"] = request_id_ctx.get()
    return event_dict


def _rename_event_to_message(_: logging.Logger, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def _serialize_json(_: logging.Logger, __: str, event_dict: dict[str, Any]) -> str:
    return json.dumps(event_dict, ensure_ascii=False, default=str)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
            structlog.processors.add_log_level,
            _add_context_fields,
            _rename_event_to_message,
            structlog.processors.format_exc_info,
            _serialize_json,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _decode_body(body: bytes | None) -> Any:
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError:
        return body.decode("utf-8", errors="replace")


class RequestLogger:
    """
    Observer that traces every inbound request.

    It only reads what it is given and never raises, so handlers behave the
    same whether it is enabled, disabled, or pointed at another logger.
    """

    def __init__(
        self,
        logger: Any | None = None,
        *,
        enabled: bool = True,
        include_body: bool = True,
    ) -> None:
        self._logger = logger if logger is not None else structlog.get_logger("menu_api.requests")
        self.enabled = enabled
        self.include_body = include_body

    def log_request(self, method: str, path: str, body: bytes | None = None) -> None:
        if not self.enabled:
            return
        try:
            fields: dict[str, Any] = {
                "method": method,
                "path": path,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
            if self.include_body and method in BODY_METHODS:
                fields["body"] = _decode_body(body)
            self._logger.info("request_received", **fields)
        except Exception as exc:  # noqa: BLE001 - logging must never fail a request
            structlog.get_logger(__name__).warning("request_logging_failed", error=str(exc))
