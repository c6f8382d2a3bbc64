"""Shared httpx plumbing for the CloudHub adapters."""

import logging
from typing import Any

import httpx

from cloudhub_provider.core.ports import ApiError

logger = logging.getLogger(__name__)


class CloudHubHttpClient:
    """Thin wrapper over httpx.AsyncClient.

    Responses are always read inside a streaming context so the body is
    closed on success and failure alike. Non-2xx answers and transport
    failures both surface as ApiError.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: Control plane base URL (e.g., https://anypoint.mulesoft.com).
            timeout: Timeout for each request in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> "CloudHubHttpClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def close(self) -> None:
        """Close the httpx client and clean up resources."""
        await self.client.aclose()

    async def _send(
        self,
        method: str,
        path: str,
        headers: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send a request and return the fully read response.

        Raises:
            ApiError: On transport failure or non-success status.
        """
        try:
            async with self.client.stream(
                method, path, headers=headers, **kwargs
            ) as response:
                await response.aread()
        except httpx.RequestError as e:
            logger.error(f"{method} {path} failed: {e!r}")
            raise ApiError(str(e) or e.__class__.__name__) from e

        if not response.is_success:
            logger.debug(
                f"{method} {path} returned {response.status_code}",
                extra={"status_code": response.status_code},
            )
            raise ApiError(
                f"{method} {path} returned {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        return response
