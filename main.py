import asyncio
import sys

# 1. Setup Logging First (to capture config errors)
from core.logger import setup_logging, get_logger

setup_logging()
logger = get_logger(__name__)

# 2. Load Config
try:
    from core.config import settings
except Exception as e:
    logger.critical(f"Failed to load configuration: {e}", exc_info=True)
    sys.exit(1)

from core.exceptions import (
    ConfigurationException,
    DeliveryException,
    SourceUnavailableException,
)
from services.scraper_service import ListingService


def validate_startup(local: bool) -> bool:
    """Validate configuration before the run"""
    logger.info("=" * 60)
    logger.info("IMDb Digest Bot - Starting Up")
    logger.info("=" * 60)

    logger.info(f"Shape: {settings.SHAPE}")
    logger.info(f"Max films: {settings.MAX_NUM_FILMS}")
    logger.info(f"Delivery: {'console' if local else 'mailgun'}")

    validation_errors = settings.validate_all(local=local)
    for msg in validation_errors:
        if "❌" in msg:
            logger.critical(msg)
        else:
            logger.warning(msg)

    if any("❌" in msg for msg in validation_errors):
        logger.critical("Configuration validation failed")
        return False

    logger.info("[OK] Startup validation passed")
    return True


def run(shape: str = None, limit: int = None, local: bool = None) -> int:
    """Runs one digest and returns the process exit code."""
    if local is None:
        local = settings.is_local

    if not validate_startup(local):
        return 1

    try:
        service = ListingService(shape_key=shape, limit=limit, local=local)
        asyncio.run(service.run())
    except ConfigurationException as e:
        logger.critical(f"Configuration error: {e}")
        return 1
    except SourceUnavailableException as e:
        logger.critical(f"Listing unavailable: {e}", exc_info=True)
        return 1
    except DeliveryException as e:
        logger.critical(f"Delivery failed: {e}", exc_info=True)
        return 1

    logger.info("Run completed successfully")
    return 0


def main():
    import argparse

    parser = argparse.ArgumentParser(description="IMDb Digest Bot")
    parser.add_argument(
        "--shape",
        type=str,
        help="Record shape to extract (rating or rich). Defaults to SHAPE",
    )
    parser.add_argument(
        "--limit",
        type=int,
        help="Max records per bucket for every bucket; 0 means no limit",
    )
    delivery = parser.add_mutually_exclusive_group()
    delivery.add_argument(
        "--print",
        dest="local",
        action="store_true",
        default=None,
        help="Print the payload instead of e-mailing it",
    )
    delivery.add_argument(
        "--send",
        dest="local",
        action="store_false",
        default=None,
        help="E-mail the payload through Mailgun even when run locally",
    )
    args = parser.parse_args()

    sys.exit(run(shape=args.shape, limit=args.limit, local=args.local))


if __name__ == "__main__":
    main()
