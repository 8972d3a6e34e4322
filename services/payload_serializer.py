"""
Payload serialization.

Field values are already normalized by the extractor; the only change made
here is the empty-collection fix-up, so "no results" is sent as [] and not
null.
"""
import json
from typing import Any, Dict, List, Optional, Sequence

from core.logger import get_logger
from models.field_spec import FieldKind, FieldSpec
from models.record import Payload, Record, RecordBucket

logger = get_logger(__name__)


def normalize_empty_collections(
    payload: Payload, field_specs: Optional[Sequence[FieldSpec]] = None
) -> Payload:
    """
    Returns a copy of payload where no collection is left as None.

    Buckets without records get an empty list; list-kind fields whose value
    is None become empty lists.
    """
    list_fields = {s.name for s in field_specs or () if s.kind == FieldKind.LIST}
    buckets = []

    for bucket in payload.buckets:
        if bucket.records is None:
            logger.debug(f"[SERIALIZER] Bucket '{bucket.label or '-'}' had no records, emitting []")
        records: List[Record] = []
        for record in bucket.records or []:
            fixed = dict(record)
            for name in list_fields:
                if name in fixed and fixed[name] is None:
                    fixed[name] = []
            records.append(fixed)
        buckets.append(RecordBucket(label=bucket.label, records=records))

    return Payload(buckets=buckets, meta=dict(payload.meta))


class PayloadSerializer:
    """Serializes payloads to compact JSON."""

    def __init__(self, field_specs: Optional[Sequence[FieldSpec]] = None):
        self.field_specs = tuple(field_specs or ())

    def to_structure(self, payload: Payload) -> Any:
        """
        Builds the JSON structure for payload.

        A single unlabeled bucket with no meta becomes a bare list;
        anything else becomes an object keyed by bucket label, followed by
        the meta keys.
        """
        payload = normalize_empty_collections(payload, self.field_specs)

        if len(payload.buckets) == 1 and payload.buckets[0].label is None and not payload.meta:
            return payload.buckets[0].records

        structure: Dict[str, Any] = {}
        for bucket in payload.buckets:
            if bucket.label is None:
                raise ValueError("Unlabeled bucket cannot be combined with other buckets or meta")
            structure[bucket.label] = bucket.records
        for key, value in payload.meta.items():
            structure[key] = value
        return structure

    def serialize(self, payload: Payload) -> str:
        body = json.dumps(self.to_structure(payload), ensure_ascii=False, separators=(",", ":"))
        logger.info(f"[SERIALIZER] {payload.record_count} records -> {len(body)} chars")
        return body
