"""
Message formatting utilities for e-mail delivery.
"""
from typing import Dict

from core import constants


def format_sender(domain: str) -> str:
    """Mailgun sandbox sender, e.g. 'mailgun me <postmaster@sandboxabc.mailgun.org>'."""
    return f"{constants.MAILGUN_SENDER_NAME} <postmaster@{domain}>"


def format_recipient(name: str, address: str) -> str:
    if not name:
        return address
    return f"{name} <{address}>"


def messages_endpoint(api_base: str, domain: str) -> str:
    return f"{api_base.rstrip('/')}/{domain}/messages"


def create_email_form(
    domain: str,
    recipient_name: str,
    recipient_address: str,
    subject: str,
    text: str,
) -> Dict[str, str]:
    """
    Builds the form fields of a Mailgun send request.
    The payload goes into the plain-text body unchanged.
    """
    return {
        "from": format_sender(domain),
        "to": format_recipient(recipient_name, recipient_address),
        "subject": subject,
        "text": text,
    }
