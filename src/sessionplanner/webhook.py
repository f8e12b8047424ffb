"""Outbound automation webhook shared by calendar sync and notifications."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .errors import ExternalServiceError

log = logging.getLogger(__name__)


def post_event(
    url: str,
    event_type: str,
    payload: dict[str, Any],
    *,
    timeout: float | None = None,
) -> None:
    """POST ``{"type": event_type, **payload}`` to ``url``.

    Raises ExternalServiceError on transport errors and non-2xx responses.
    """
    body = {"type": event_type, **payload}
    try:
        with httpx.Client(timeout=timeout) as client:
            response = client.post(url, json=body)
    except httpx.HTTPError as e:
        raise ExternalServiceError(f"Webhook {event_type} failed: {e}") from e

    if not response.is_success:
        raise ExternalServiceError(
            f"Webhook {event_type} failed: HTTP {response.status_code}"
        )
    log.info("Webhook %s sent to %s", event_type, url)
