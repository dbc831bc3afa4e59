"""
Revalidation adapters.

StubRevalidationAdapter records paths for dev and tests.
WebhookRevalidationAdapter asks the frontend to regenerate a path.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import httpx

from src.components.revalidation.models import RevalidationError

logger = logging.getLogger(__name__)


@dataclass
class StubRevalidationAdapter:
    """Records revalidated paths. Paths in `failing_paths` raise."""

    revalidated_paths: list[str] = field(default_factory=list)
    failing_paths: set[str] = field(default_factory=set)

    async def revalidate_path(self, path: str) -> None:
        if path in self.failing_paths:
            raise RevalidationError(path, "stub failure")
        self.revalidated_paths.append(path)

    def clear(self) -> None:
        self.revalidated_paths.clear()


class WebhookRevalidationAdapter:
    """
    POSTs `{"path": ...}` to the frontend revalidation hook with a shared
    secret in the `x-revalidate-secret` header.
    """

    SECRET_HEADER = "x-revalidate-secret"

    def __init__(
        self,
        url: str,
        secret: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.url = url
        self.secret = secret
        self.client = client
        self.timeout = timeout

    async def _post(self, path: str) -> httpx.Response:
        headers = {self.SECRET_HEADER: self.secret}
        if self.client is not None:
            return await self.client.post(self.url, json={"path": path}, headers=headers)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(self.url, json={"path": path}, headers=headers)

    async def revalidate_path(self, path: str) -> None:
        try:
            response = await self._post(path)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise RevalidationError(path, str(e)) from e
        logger.debug("Revalidated %s", path)
