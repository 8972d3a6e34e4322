"""
Notification channels.
"""

from services.notification import formatters

__all__ = ["formatters"]
