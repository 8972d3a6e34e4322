"""
Notification System - Strategy Pattern Implementation

Each delivery channel implements NotificationChannel; NotificationService
picks one per run without knowing how it delivers.
"""
from abc import ABC, abstractmethod

import aiohttp


class NotificationChannel(ABC):
    """
    Abstract base class for notification channels (Strategy Pattern).

    Usage:
        class SlackChannel(NotificationChannel):
            async def send(self, session, payload):
                # Slack-specific implementation
                pass
    """

    @property
    @abstractmethod
    def channel_name(self) -> str:
        """Returns the name of this notification channel (e.g., 'mailgun', 'console')."""
        pass

    @abstractmethod
    async def send(self, session: aiohttp.ClientSession, payload: str) -> bool:
        """
        Deliver an already serialized payload.

        Args:
            session: aiohttp client session
            payload: Opaque payload text

        Returns:
            True once delivered

        Raises:
            DeliveryException: If the channel rejected or failed to send the payload
        """
        pass

    @abstractmethod
    def is_enabled(self) -> bool:
        """
        Check if this channel has the configuration it needs.

        Returns:
            True if channel can send messages, False otherwise
        """
        pass
