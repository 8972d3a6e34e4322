"""
Console notification channel for local runs.
"""
import sys
from typing import Optional, TextIO

import aiohttp

from services.notification.base import NotificationChannel


class ConsoleNotifier(NotificationChannel):
    """Prints the payload instead of sending it."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    @property
    def channel_name(self) -> str:
        return "console"

    def is_enabled(self) -> bool:
        return True

    async def send(self, session: aiohttp.ClientSession, payload: str) -> bool:
        print(payload, file=self.stream or sys.stdout)
        return True
