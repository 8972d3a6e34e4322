from pydantic import BaseModel, Field
from typing import Dict, List, Optional

from core import constants


class ListingTarget(BaseModel):
    key: str = Field(..., description="Identifier of the listing being scraped")
    url: str = Field(..., description="Fully built listing URL")
    shape: str = Field(..., description="Record shape key")
    container_selector: str = Field(..., description="CSS selector for one item container")
    group_selector: Optional[str] = Field(
        None, description="CSS selector for top-level groups; None means one group"
    )
    bucket_labels: List[Optional[str]] = Field(
        default_factory=lambda: [None], description="Bucket label per group, in page order"
    )
    bucket_limits: Dict[str, int] = Field(default_factory=dict)
    default_limit: int = Field(constants.DEFAULT_MAX_NUM_FILMS, description="Cap for buckets without an explicit limit")
    link_key: Optional[str] = Field(
        constants.DEFAULT_LINK_KEY, description="Payload key reporting the fetched URL; None to omit"
    )

    def limit_for(self, label: Optional[str]) -> int:
        if label is not None and label in self.bucket_limits:
            return self.bucket_limits[label]
        return self.default_limit
