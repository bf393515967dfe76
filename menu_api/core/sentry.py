from __future__ import annotations

from typing import Any

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from menu_api.core.config import settings
from menu_api.core.logging import request_id_ctx


def before_send(event: dict[str, Any], hint: dict[str, Any]) -> dict[str, Any] | None:
    """Tag Sentry events with the request id of the failing request."""
    request_id = request_id_ctx.get()
    if request_id is None and "request" in hint:
        request = hint["request"]
        if hasattr(request, "headers"):
            request_id = request.headers.get("x-request-id")
    if request_id:
        event.setdefault("tags", {})["request_id"] = request_id

    # Request bodies carry client-supplied menu data; keep them out of Sentry
    request_data = event.get("request")
    if isinstance(request_data, dict) and "data" in request_data:
        request_data["data"] = "[Filtered]"

    return event


def init_sentry() -> bool:
    """Initialize Sentry error tracking when a DSN is configured."""
    if not settings.sentry_dsn:
        return False

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.sentry_environment or settings.environment,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            LoggingIntegration(
                level=None,
                event_level=None,  # Don't create events from logs
            ),
        ],
        traces_sample_rate=0.1,
        before_send=before_send,
        send_default_pii=False,
        attach_stacktrace=True,
        max_breadcrumbs=50,
    )

    sentry_sdk.set_tag("service", settings.app_name)
    sentry_sdk.set_tag("environment", settings.environment)
    return True
