from pydantic_settings import BaseSettings
from typing import Dict, List, Optional, Union
from pydantic import Field, field_validator
import json
from core import constants


class Settings(BaseSettings):
    # --- Listing Source ---
    LISTING_URL_TEMPLATE: str = Field(
        constants.DEFAULT_LISTING_URL_TEMPLATE,
        description="Listing URL with {start} and {end} date placeholders",
    )
    LOOKBACK_DAYS: int = Field(
        constants.DEFAULT_LOOKBACK_DAYS, description="Days before today in the release window"
    )
    SHAPE: str = Field(constants.DEFAULT_SHAPE, description="Record shape key (rating/rich)")
    LISTING_TIMEZONE: str = Field(
        constants.DEFAULT_LISTING_TIMEZONE, description="Timezone that decides what \"today\" is"
    )

    # Default per-bucket cap (first N listings in page order)
    MAX_NUM_FILMS: int = Field(constants.DEFAULT_MAX_NUM_FILMS, description="Max films per bucket")

    # Bucket Limits: Bucket Label -> Max Records
    # Can be JSON string or dict
    BUCKET_LIMITS: Union[Dict[str, int], str] = Field(default_factory=dict)

    # --- Fetch ---
    USER_AGENT: str = Field(
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    )
    ACCEPT_LANGUAGE: str = Field(constants.DEFAULT_ACCEPT_LANGUAGE)
    FETCH_TIMEOUT: int = Field(constants.DEFAULT_FETCH_TIMEOUT, description="Fetch timeout in seconds")

    # --- Mailgun ---
    MAILGUN_API_KEY: Optional[str] = Field(None, description="Mailgun API Key")
    MAILGUN_SANDBOX_ID: Optional[str] = Field(
        None, description="Mailgun sandbox ID", validation_alias="SANDBOX_ID"
    )
    # Overrides the sandbox domain when set
    MAILGUN_DOMAIN: Optional[str] = None
    MAILGUN_API_BASE: str = Field(constants.DEFAULT_MAILGUN_API_BASE)
    EMAIL_ADDRESS: Optional[str] = Field(None, description="Recipient e-mail address")
    EMAIL_NAME: str = Field(constants.DEFAULT_EMAIL_NAME, description="Recipient display name")
    EMAIL_SUBJECT: str = Field(constants.DEFAULT_EMAIL_SUBJECT)

    # --- Runtime ---
    # Set by AWS Lambda; absent means a local run that prints the payload
    LAMBDA_TASK_ROOT: Optional[str] = None

    # --- Logging ---
    LOG_LEVEL: str = Field(constants.DEFAULT_LOG_LEVEL, description="Logging level")
    LOG_FILE: str = Field(constants.DEFAULT_LOG_FILE, description="Log file path")
    LOG_FORMAT: str = Field(constants.DEFAULT_LOG_FORMAT, description="Log format (text/json)")
    LOG_MAX_BYTES: int = Field(constants.DEFAULT_LOG_MAX_BYTES, description="Max log file size")
    LOG_BACKUP_COUNT: int = Field(constants.DEFAULT_LOG_BACKUP_COUNT, description="Log backup count")
    LOG_TIMEZONE: str = Field(constants.DEFAULT_LOG_TIMEZONE, description="Timezone for log timestamps")

    @field_validator("MAX_NUM_FILMS", mode="before")
    @classmethod
    def parse_max_num_films(cls, v):
        # Only a positive number overrides the default cap
        try:
            parsed = int(str(v).strip())
        except (TypeError, ValueError):
            return constants.DEFAULT_MAX_NUM_FILMS
        if parsed <= 0:
            return constants.DEFAULT_MAX_NUM_FILMS
        return parsed

    @field_validator("BUCKET_LIMITS", mode="before")
    @classmethod
    def parse_bucket_limits(cls, v):
        if isinstance(v, str):
            v = v.strip()
            # Handle accidental copy-paste of "KEY=VALUE"
            if v.startswith("BUCKET_LIMITS="):
                v = v.split("=", 1)[1]
            # Handle surrounding quotes
            v = v.strip("'").strip('"')

            if not v or v.strip() == "":
                return {}
            try:
                parsed = json.loads(v)
                return {k: int(val) for k, val in parsed.items()}
            except (json.JSONDecodeError, ValueError, AttributeError) as e:
                raise ValueError(f"BUCKET_LIMITS must be a JSON object of integers: {e}")
        return v

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"

    @property
    def is_local(self) -> bool:
        """True when not running inside AWS Lambda."""
        return not self.LAMBDA_TASK_ROOT

    @property
    def mailgun_domain(self) -> Optional[str]:
        if self.MAILGUN_DOMAIN:
            return self.MAILGUN_DOMAIN
        if self.MAILGUN_SANDBOX_ID:
            return f"sandbox{self.MAILGUN_SANDBOX_ID}.mailgun.org"
        return None

    def validate_all(self, local: Optional[bool] = None) -> List[str]:
        """
        Validate all configuration settings.
        Returns a list of warning/error messages.
        """
        if local is None:
            local = self.is_local

        errors = []

        if "{start}" not in self.LISTING_URL_TEMPLATE or "{end}" not in self.LISTING_URL_TEMPLATE:
            errors.append("⚠️ LISTING_URL_TEMPLATE has no {start}/{end} placeholders - release window ignored")

        if self.LOOKBACK_DAYS < 0:
            errors.append("❌ LOOKBACK_DAYS must not be negative")

        # Delivery settings only matter when the payload is e-mailed
        if not local:
            if not self.MAILGUN_API_KEY:
                errors.append("❌ MAILGUN_API_KEY is missing")
            if not self.mailgun_domain:
                errors.append("❌ SANDBOX_ID (or MAILGUN_DOMAIN) is missing")
            if not self.EMAIL_ADDRESS:
                errors.append("❌ EMAIL_ADDRESS is missing")

        if not self.MAILGUN_API_BASE.startswith("https://"):
            errors.append("❌ MAILGUN_API_BASE must start with https://")

        return errors


settings = Settings()
