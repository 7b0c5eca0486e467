"""Best-effort calls to the notification functions.

The API never fails an operation because an e-mail could not be sent: every
method returns True on success and False (after logging) otherwise.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

APPROVAL = "send-camp-approval-email"
REJECTION = "send-camp-rejection-email"
REVIEW_VERIFICATION = "send-review-verification"
SUBMISSION_NOTIFICATION = "send-camp-submission-notification"

FUNCTIONS_SECRET_HEADER = "X-Functions-Secret"


class Notifier:
    """Posts JSON payloads to `{functions_url}/{function}`."""

    def __init__(
        self,
        functions_url: str,
        secret: str = "",
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.functions_url = functions_url.rstrip("/")
        self.headers = {FUNCTIONS_SECRET_HEADER: secret} if secret else {}
        self._client = client
        self.timeout = timeout

    async def _invoke(self, function: str, payload: dict[str, Any]) -> bool:
        url = f"{self.functions_url}/{function}"
        try:
            if self._client is not None:
                response = await self._client.post(url, json=payload, headers=self.headers)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(url, json=payload, headers=self.headers)
        except httpx.HTTPError as e:
            logger.warning(f"Notification {function} failed: {type(e).__name__}: {e}")
            return False

        if response.status_code >= 400:
            logger.warning(f"Notification {function} returned {response.status_code}: {response.text[:200]}")
            return False

        logger.debug(f"Notification {function} delivered")
        return True

    async def camp_approved(self, camp_name: str, camp_email: str, owner_name: str) -> bool:
        return await self._invoke(APPROVAL, {"campName": camp_name, "campEmail": camp_email, "ownerName": owner_name})

    async def camp_rejected(self, camp_name: str, camp_email: str, owner_name: str, reason: str) -> bool:
        return await self._invoke(
            REJECTION,
            {"campName": camp_name, "campEmail": camp_email, "ownerName": owner_name, "rejectionReason": reason},
        )

    async def review_created(self, review_id: str) -> bool:
        return await self._invoke(REVIEW_VERIFICATION, {"reviewId": review_id})

    async def submission_received(self, summary: dict[str, Any]) -> bool:
        return await self._invoke(SUBMISSION_NOTIFICATION, summary)
