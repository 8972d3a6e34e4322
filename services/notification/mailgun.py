"""
Mailgun e-mail notification channel.
"""
import asyncio
from typing import Optional

import aiohttp

from core import constants
from core.config import settings
from core.exceptions import DeliveryException, MailgunAPIException
from core.logger import get_logger
from services.notification.base import NotificationChannel
from services.notification.formatters import create_email_form, messages_endpoint

logger = get_logger(__name__)


class MailgunNotifier(NotificationChannel):
    """Sends the payload as the text body of a Mailgun message."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        domain: Optional[str] = None,
        recipient: Optional[str] = None,
        recipient_name: Optional[str] = None,
        subject: Optional[str] = None,
        api_base: Optional[str] = None,
    ):
        self.api_key = api_key or settings.MAILGUN_API_KEY
        self.domain = domain or settings.mailgun_domain
        self.recipient = recipient or settings.EMAIL_ADDRESS
        self.recipient_name = recipient_name if recipient_name is not None else settings.EMAIL_NAME
        self.subject = subject or settings.EMAIL_SUBJECT
        self.api_base = api_base or settings.MAILGUN_API_BASE

    @property
    def channel_name(self) -> str:
        return "mailgun"

    def is_enabled(self) -> bool:
        return bool(self.api_key and self.domain and self.recipient)

    @property
    def url(self) -> str:
        return messages_endpoint(self.api_base, self.domain)

    async def send(self, session: aiohttp.ClientSession, payload: str) -> bool:
        if not self.is_enabled():
            raise DeliveryException(
                "Mailgun is not configured",
                {"api_key": bool(self.api_key), "domain": bool(self.domain), "recipient": bool(self.recipient)},
            )

        form = create_email_form(self.domain, self.recipient_name, self.recipient, self.subject, payload)

        try:
            async with session.post(
                self.url,
                data=form,
                auth=aiohttp.BasicAuth(constants.MAILGUN_AUTH_USER, self.api_key),
                timeout=aiohttp.ClientTimeout(total=constants.MAILGUN_TIMEOUT),
            ) as resp:
                if resp.status // 100 != 2:
                    body = await resp.text()
                    raise MailgunAPIException(body or f"Mailgun returned {resp.status}", {"status": resp.status})
                logger.info(f"[NOTIFIER] Mailgun accepted message ({len(payload)} chars)")
                return True
        except asyncio.TimeoutError as e:
            raise DeliveryException("Timeout sending to Mailgun", {"url": self.url}) from e
        except aiohttp.ClientError as e:
            raise DeliveryException("HTTP error sending to Mailgun", {"url": self.url, "error": str(e)}) from e
