"""Meeting-link provider."""

from __future__ import annotations

import logging
import secrets
import string

log = logging.getLogger(__name__)

_ALPHABET = string.ascii_lowercase + string.digits


class MeetingLinkProvider:
    """Hands out Google Meet style links without contacting Google."""

    def create_link(self) -> str:
        token = "".join(secrets.choice(_ALPHABET) for _ in range(6))
        link = f"https://meet.google.com/{token}-prod"
        log.debug("Created meeting link %s", link)
        return link
