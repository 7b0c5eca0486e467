"""Transactional e-mail delivery through the Resend HTTP API."""

from __future__ import annotations

import logging

import httpx

from ..errors import NotificationError

logger = logging.getLogger(__name__)

DEFAULT_RESEND_URL = "https://api.resend.com/emails"


class ResendClient:
    """Thin async client for `POST /emails`.

    Pass `client` to reuse a connection pool (or an httpx.MockTransport in tests).
    """

    def __init__(
        self,
        api_key: str | None,
        api_url: str = DEFAULT_RESEND_URL,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self._client = client
        self.timeout = timeout

    async def send(self, to: list[str], subject: str, html: str, from_addr: str) -> str:
        """Send one message and return the provider's e-mail id."""
        if not self.api_key:
            raise NotificationError("RESEND_API_KEY is not configured")

        payload = {"from": from_addr, "to": to, "subject": subject, "html": html}
        headers = {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}

        try:
            if self._client is not None:
                response = await self._client.post(self.api_url, json=payload, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(self.api_url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise NotificationError(f"Failed to send email: {type(e).__name__}: {e}") from e

        if response.status_code >= 400:
            raise NotificationError(f"Failed to send email: {response.text}")

        try:
            body = response.json()
        except ValueError as e:
            raise NotificationError(f"Failed to send email: unreadable provider response: {response.text[:200]}") from e
        if not isinstance(body, dict):
            raise NotificationError(f"Failed to send email: unexpected provider response: {response.text[:200]}")

        email_id = str(body.get("id", ""))
        logger.info(f"Sent '{subject}' to {len(to)} recipient(s) (id={email_id})")
        return email_id
