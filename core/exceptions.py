"""
Custom exception hierarchy for imdb-digest-bot.
A run fails at exactly two points: fetching the listing and delivering the payload.
"""


class DigestException(Exception):
    """Base exception for all bot-related errors."""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self):
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


# =============================================================================
# Source Exceptions (fatal to the run)
# =============================================================================


class SourceUnavailableException(DigestException):
    """The listing page could not be turned into a document tree."""

    pass


class NetworkException(SourceUnavailableException):
    """Exception for network/HTTP errors."""

    pass


class ParsingException(SourceUnavailableException):
    """Exception for HTML parsing errors."""

    pass


# =============================================================================
# Field Exceptions (always recovered inside the extractor)
# =============================================================================


class FieldException(DigestException):
    """Base exception for a single field that could not be extracted."""

    pass


class FieldMissingException(FieldException):
    """Locator matched nothing, or the matched element lacks the attribute."""

    pass


class FieldMalformedException(FieldException):
    """Matched text failed a post-process step (e.g. numeric parse)."""

    pass


# =============================================================================
# Delivery Exceptions (terminal error of the run)
# =============================================================================


class DeliveryException(DigestException):
    """Base exception for payload delivery errors."""

    pass


class MailgunAPIException(DeliveryException):
    """Exception for Mailgun API errors."""

    pass


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationException(DigestException):
    """Exception for configuration errors."""

    pass


class MissingConfigException(ConfigurationException):
    """Exception when required configuration is missing."""

    pass
