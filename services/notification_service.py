"""
Notification service - picks the delivery channel for a run and delegates to it.
"""
import aiohttp
from typing import Dict, Optional

from core.exceptions import DeliveryException
from core.logger import get_logger
from services.notification.base import NotificationChannel
from services.notification.console import ConsoleNotifier
from services.notification.mailgun import MailgunNotifier

logger = get_logger(__name__)


class NotificationService:
    """
    Unified notification service.
    Local runs print the payload; deployed runs e-mail it through Mailgun.
    """

    def __init__(self, local: bool, channels: Optional[Dict[str, NotificationChannel]] = None):
        self.local = local
        self.channels = channels or {
            "console": ConsoleNotifier(),
            "mailgun": MailgunNotifier(),
        }

    @property
    def channel(self) -> NotificationChannel:
        name = "console" if self.local else "mailgun"
        if name not in self.channels:
            raise DeliveryException(f"No '{name}' channel registered", {"available": ", ".join(self.channels)})
        return self.channels[name]

    async def send(self, session: aiohttp.ClientSession, payload: str) -> bool:
        """
        Delivers the payload through the active channel.

        Raises:
            DeliveryException: If the channel is disabled or delivery failed
        """
        channel = self.channel
        if not channel.is_enabled():
            raise DeliveryException(f"Channel '{channel.channel_name}' is not configured")

        logger.info(f"[NOTIFIER] Delivering payload via {channel.channel_name}")
        return await channel.send(session, payload)
