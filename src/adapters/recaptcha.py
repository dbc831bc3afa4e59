"""
reCAPTCHA verification adapter.

Posts the visitor token to Google's siteverify endpoint with httpx.
Score-based (v3) responses below the minimum score are rejected.
"""

from __future__ import annotations

import logging

import httpx

logger = logging.getLogger(__name__)

SITEVERIFY_URL = "https://www.google.com/recaptcha/api/siteverify"
MIN_SCORE = 0.5


class RecaptchaVerifier:
    """Implements CaptchaVerifierPort."""

    def __init__(
        self,
        secret: str,
        client: httpx.AsyncClient | None = None,
        url: str = SITEVERIFY_URL,
        min_score: float = MIN_SCORE,
        timeout: float = 10.0,
    ) -> None:
        self.secret = secret
        self.client = client
        self.url = url
        self.min_score = min_score
        self.timeout = timeout

    async def _post(self, data: dict[str, str]) -> httpx.Response:
        if self.client is not None:
            return await self.client.post(self.url, data=data)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(self.url, data=data)

    async def verify(self, token: str, remote_ip: str | None = None) -> bool:
        data = {"secret": self.secret, "response": token}
        if remote_ip:
            data["remoteip"] = remote_ip

        try:
            response = await self._post(data)
        except httpx.HTTPError as e:
            logger.warning("reCAPTCHA verification request failed: %s", e)
            return False

        if response.status_code != 200:
            logger.warning("reCAPTCHA verification failed to reach Google (status %s)", response.status_code)
            return False

        try:
            body = response.json()
        except ValueError:
            logger.warning("reCAPTCHA verification returned a non-JSON body")
            return False

        if not body.get("success"):
            return False

        score = body.get("score")
        if isinstance(score, (int, float)) and score < self.min_score:
            return False

        return True
