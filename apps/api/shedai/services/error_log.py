from __future__ import annotations

import logging
from typing import Any

import sentry_sdk

from shedai.services.privacy import sanitize_for_log

logger = logging.getLogger(__name__)


async def log_system_error(
    *,
    route: str,
    message: str,
    err: BaseException | None = None,
    meta: dict[str, Any] | None = None,
) -> None:
    # Best-effort logging; never raise.
    try:
        record = {
            "route": sanitize_for_log(route),
            "meta": sanitize_for_log(meta or {}),
        }
        logger.error(
            "%s %s",
            sanitize_for_log(message),
            record,
            exc_info=err,
        )
        if err is not None and sentry_sdk.is_initialized():
            with sentry_sdk.new_scope() as scope:
                scope.set_context("shedai", record)
                sentry_sdk.capture_exception(err)
    except Exception:
        return
