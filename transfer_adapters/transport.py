"""
HTTP Transport - Thin aiohttp wrapper shared by all providers.

Any non-2xx status is a failure; the body text is kept verbatim so callers
can parse provider-specific error messages. No retries, no timeout tuning:
failures propagate immediately.
"""

import asyncio
import logging
from typing import Any, Optional

import aiohttp

from transfer_adapters.exceptions import TransportError


logger = logging.getLogger(__name__)


class HttpTransport:
    """Performs one HTTP call and yields parsed JSON or a TransportError."""

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        user_agent: str = "OnchainWatch/1.0",
    ) -> None:
        self._session = session
        self._owns_session = session is None
        self._user_agent = user_agent

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers=self._get_default_headers(),
            )
            self._owns_session = True
        return self._session

    def _get_default_headers(self) -> dict[str, str]:
        """Get default HTTP headers."""
        return {
            "Accept": "application/json",
            "User-Agent": self._user_agent,
        }

    async def request_json(
        self,
        url: str,
        method: str = "GET",
        params: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
        json_body: Optional[Any] = None,
        adapter_name: Optional[str] = None,
    ) -> Any:
        """
        Perform the call and return the decoded JSON body.

        Raises:
            TransportError: non-success status (with status and body text)
                or a network-level failure (status_code is None)
        """
        session = await self._get_session()

        try:
            async with session.request(
                method,
                url,
                params=params,
                headers=headers,
                json=json_body,
            ) as response:
                if response.status < 200 or response.status >= 300:
                    body = await response.text()
                    raise TransportError(
                        message=f"HTTP {response.status}: {body}",
                        adapter_name=adapter_name,
                        status_code=response.status,
                        response_body=body,
                        request_url=url,
                    )

                # Providers do not always send application/json
                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise TransportError(
                        message=f"Invalid JSON in response: {e}",
                        adapter_name=adapter_name,
                        status_code=response.status,
                        request_url=url,
                        original_error=e,
                    ) from e

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.debug(f"[{adapter_name or 'transport'}] {method} {url} failed: {e!r}")
            raise TransportError(
                message=f"Connection error: {e}",
                adapter_name=adapter_name,
                request_url=url,
                original_error=e,
            ) from e

    async def close(self) -> None:
        """Close resources."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "HttpTransport":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()
