from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

# One extracted entity: field name -> str, number or list of str
Record = Dict[str, Any]


class RecordBucket(BaseModel):
    label: Optional[str] = None  # None for a flat, unlabeled result
    records: Optional[List[Record]] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records or [])


class Payload(BaseModel):
    buckets: List[RecordBucket] = Field(default_factory=list)
    meta: Dict[str, str] = Field(default_factory=dict)  # Extra top-level keys (e.g. imdbLink)

    @property
    def record_count(self) -> int:
        return sum(len(b) for b in self.buckets)
