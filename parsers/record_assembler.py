from itertools import islice
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from bs4 import Tag

from core.logger import get_logger
from models.field_spec import FieldSpec
from models.record import Record, RecordBucket
from parsers.field_extractor import FieldExtractor

logger = get_logger(__name__)


class RecordAssembler:
    """
    Turns item containers into records, one record per container.

    The assembler knows nothing about any particular record shape: the
    FieldSpecs passed in decide which fields a record gets.
    """

    def __init__(self, extractor: Optional[FieldExtractor] = None):
        self.extractor = extractor or FieldExtractor()

    def assemble(
        self,
        containers: Iterable[Tag],
        field_specs: Sequence[FieldSpec],
        limit: int,
    ) -> List[Record]:
        """
        Builds records from containers in document order.

        Args:
            containers: Item containers, in document order
            field_specs: One spec per record field
            limit: Maximum containers to process; <= 0 means no limit

        Returns:
            One record per processed container
        """
        if limit > 0:
            containers = islice(containers, limit)

        records = []
        for container in containers:
            record: Record = {}
            for spec in field_specs:
                record[spec.name] = self.extractor.extract(container, spec)
            records.append(record)

        return records

    def assemble_buckets(
        self,
        groups: Mapping[Optional[str], Sequence[Tag]],
        field_specs: Sequence[FieldSpec],
        limits: Optional[Dict[str, int]] = None,
        default_limit: int = 0,
    ) -> List[RecordBucket]:
        """
        Assembles each labelled group into its own bucket.

        Each group is bounded independently by limits[label], falling back
        to default_limit. Bucket order follows the order of groups.
        """
        limits = limits or {}
        buckets = []

        for label, containers in groups.items():
            limit = limits.get(label, default_limit) if label is not None else default_limit
            records = self.assemble(containers, field_specs, limit)
            logger.info(
                f"[ASSEMBLER] Bucket '{label or '-'}': {len(records)} records "
                f"from {len(containers)} containers (limit {limit})"
            )
            buckets.append(RecordBucket(label=label, records=records))

        return buckets
