from datetime import date
from typing import Optional

from bs4 import BeautifulSoup

from core.config import Settings, settings
from core.exceptions import MissingConfigException
from core.interfaces import IMarkupSource, INotifier
from core.logger import get_logger
from core.performance import PerformanceMonitor
from core.utils import get_today, release_window
from models.record import Payload
from models.target import ListingTarget
from parsers.record_assembler import RecordAssembler
from parsers.shape_factory import get_shape_factory
from parsers.shapes import RecordShape
from services.notification_service import NotificationService
from services.payload_serializer import PayloadSerializer
from services.scraper.fetcher import ListingFetcher
from services.scraper.parser import ListingParser, MarkupSource

logger = get_logger(__name__)


def build_listing_url(template: str, today: date, lookback_days: int) -> str:
    start, end = release_window(today, lookback_days)
    return template.format(start=start, end=end)


class ListingService:
    """
    One digest run: fetch the listing, extract records, serialize, deliver.

    Failures surface at two points only: SourceUnavailableException from the
    fetch and DeliveryException from the notifier.
    """

    def __init__(
        self,
        config: Settings = settings,
        shape_key: Optional[str] = None,
        limit: Optional[int] = None,
        local: Optional[bool] = None,
        source: Optional[IMarkupSource] = None,
        notifier: Optional[INotifier] = None,
        today: Optional[date] = None,
    ):
        if not config.LISTING_URL_TEMPLATE.strip():
            raise MissingConfigException("LISTING_URL_TEMPLATE is empty")

        self.config = config
        self.shape: RecordShape = get_shape_factory().get_shape(shape_key or config.SHAPE)
        self.limit = limit
        self.local = config.is_local if local is None else local
        self.today = today

        self.fetcher = ListingFetcher(timeout=config.FETCH_TIMEOUT)
        self.parser = ListingParser()
        self.source = source or MarkupSource(self.fetcher, self.parser)
        self.notifier = notifier or NotificationService(local=self.local)
        self.assembler = RecordAssembler()
        self.serializer = PayloadSerializer(self.shape.fields)

    def build_target(self) -> ListingTarget:
        today = self.today or get_today(self.config.LISTING_TIMEZONE)
        url = build_listing_url(self.config.LISTING_URL_TEMPLATE, today, self.config.LOOKBACK_DAYS)

        if self.limit is not None:
            bucket_limits, default_limit = {}, self.limit
        else:
            bucket_limits, default_limit = dict(self.config.BUCKET_LIMITS), self.config.MAX_NUM_FILMS

        return ListingTarget(
            key=f"imdb_{self.shape.key}",
            url=url,
            shape=self.shape.key,
            container_selector=self.shape.container_selector,
            group_selector=self.shape.group_selector,
            bucket_labels=list(self.shape.bucket_labels),
            bucket_limits=bucket_limits,
            default_limit=default_limit,
            link_key=self.shape.link_key,
        )

    def build_payload(self, soup: BeautifulSoup, target: ListingTarget) -> Payload:
        """Extracts every bucket of target from an already parsed document."""
        groups = self.parser.partition_containers(
            soup, target.container_selector, target.group_selector, target.bucket_labels
        )
        buckets = self.assembler.assemble_buckets(
            groups, self.shape.fields, target.bucket_limits, target.default_limit
        )
        meta = {target.link_key: target.url} if target.link_key else {}
        return Payload(buckets=buckets, meta=meta)

    async def run(self) -> str:
        """
        Executes one run and returns the serialized payload.
        The payload is returned only after it was delivered.
        """
        target = self.build_target()
        monitor = PerformanceMonitor()
        logger.info(
            "[SCRAPER] Run started",
            context={"shape": target.shape, "local": self.local, "url": target.url},
        )

        session = await self.fetcher.create_session()
        async with session:
            with monitor.measure("fetch", {"url": target.url}):
                soup = await self.source.fetch_document(session, target.url)

            with monitor.measure("extract"):
                payload = self.build_payload(soup, target)

            with monitor.measure("serialize"):
                body = self.serializer.serialize(payload)

            with monitor.measure("deliver"):
                await self.notifier.send(session, body)

        logger.info(f"[SCRAPER] Complete. {payload.record_count} records delivered.")
        monitor.log_summary()
        return body
