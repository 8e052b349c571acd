"""Slack notifier."""

import asyncio
from typing import Optional

import aiohttp
from loguru import logger

from budget_notifier.errors import DeliveryError
from .base import BaseNotifier

class SlackNotifier(BaseNotifier):
    """Sends notifications to Slack via Incoming Webhook."""

    def __init__(self, webhook_url: str, timeout: float = 10.0):
        if not webhook_url:
            raise ValueError("Slack webhook URL is not configured")
        self.webhook_url = webhook_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def send(self, text: str) -> None:
        session = await self._get_session()
        try:
            async with session.post(self.webhook_url, json={"text": text}) as response:
                if response.status >= 300:
                    body = await response.text()
                    raise DeliveryError(f"Slack webhook returned HTTP {response.status}: {body}")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise DeliveryError(f"Slack webhook request failed: {e}") from e

        logger.debug("Posted message to Slack webhook")
