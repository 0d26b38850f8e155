"""Satori messaging service."""

import logging

import aiohttp

from loopbot.config import SatoriConfig
from loopbot.infrastructure.satori.exceptions import SatoriApiError

logger = logging.getLogger(__name__)


class SatoriMessagingService:
    """Satori implementation of MessagingService.

    Sends messages through the ``message.create`` HTTP API.
    """

    def __init__(
        self,
        config: SatoriConfig,
        session: aiohttp.ClientSession | None = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        """Initialize the service.

        Args:
            config: Satori connection configuration.
            session: HTTP session. Created lazily if omitted.
            timeout_seconds: Total timeout per request.
        """
        self._config = config
        self._session = session
        self._owns_session = session is None
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
            self._owns_session = True
        return self._session

    def _headers(self, platform: str, self_id: str) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            # v1.1 以前と以降の両方のヘッダを送る
            "Satori-Platform": platform,
            "Satori-User-ID": self_id,
            "X-Platform": platform,
            "X-Self-ID": self_id,
        }
        if self._config.token:
            headers["Authorization"] = f"Bearer {self._config.token}"
        return headers

    async def send_message(
        self,
        platform: str,
        self_id: str,
        channel_id: str,
        content: str,
    ) -> None:
        """Send a message to a channel.

        Args:
            platform: Platform name.
            self_id: The bot's account ID on that platform.
            channel_id: Target channel ID.
            content: Message content.

        Raises:
            SatoriApiError: If the API returned a non-2xx status.
            aiohttp.ClientError: If the request itself failed.
        """
        url = f"{self._config.api_url.rstrip('/')}/v1/message.create"
        session = self._get_session()
        async with session.post(
            url,
            headers=self._headers(platform, self_id),
            json={"channel_id": channel_id, "content": content},
        ) as resp:
            if resp.status < 200 or resp.status >= 300:
                body = await resp.text()
                raise SatoriApiError("message.create", resp.status, body)
        logger.debug("Sent message to %s (%s)", channel_id, platform)

    async def close(self) -> None:
        """Close the HTTP session if this service created it."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None
