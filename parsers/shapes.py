"""
Record shapes: the FieldSpec set and default selectors for each kind of digest.
"""
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from core import constants
from models.field_spec import ExtractMode, FieldKind, FieldSpec


class RecordShape(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    fields: Tuple[FieldSpec, ...]
    container_selector: str
    group_selector: Optional[str] = None
    bucket_labels: List[Optional[str]] = Field(default_factory=lambda: [None])
    # Payload key reporting the fetched URL; a flat shape serializes to a bare list and has none
    link_key: Optional[str] = None

    @model_validator(mode="after")
    def check_bucket_labels(self):
        if not self.bucket_labels:
            raise ValueError(f"shape '{self.key}': needs at least one bucket label")
        if len(set(self.bucket_labels)) != len(self.bucket_labels):
            raise ValueError(f"shape '{self.key}': bucket labels must be unique")
        if None in self.bucket_labels and (len(self.bucket_labels) > 1 or self.link_key):
            raise ValueError(f"shape '{self.key}': an unlabeled bucket must be the only output")
        return self

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]


# Advanced search results: one .lister-item per film
RATING_SHAPE = RecordShape(
    key="rating",
    container_selector=".lister-item",
    bucket_labels=[constants.DEFAULT_RATING_BUCKET],
    link_key=constants.DEFAULT_LINK_KEY,
    fields=(
        FieldSpec(
            name="id",
            locator=".ribbonize",
            mode=ExtractMode.ATTRIBUTE,
            attribute="data-tconst",
        ),
        FieldSpec(
            name="imdbRating",
            locator=".ratings-imdb-rating",
            mode=ExtractMode.ATTRIBUTE,
            attribute="data-value",
            kind=FieldKind.FLOAT,
        ),
    ),
)

# Release calendar: first .list.detail holds new releases, the second films already playing
RICH_SHAPE = RecordShape(
    key="rich",
    container_selector=".list_item",
    group_selector=".list.detail",
    bucket_labels=[constants.NEW_RELEASES_BUCKET, constants.OLD_RELEASES_BUCKET],
    link_key=constants.DEFAULT_LINK_KEY,
    fields=(
        FieldSpec(name="id", locator="h4 a", mode=ExtractMode.PATH_SEGMENT, segment=1),
        FieldSpec(name="title", locator="h4 a", mode=ExtractMode.TITLE_YEAR, part="title"),
        FieldSpec(name="year", locator="h4 a", mode=ExtractMode.TITLE_YEAR, part="year"),
        FieldSpec(name="metascore", locator=".metascore", kind=FieldKind.INT),
        FieldSpec(name="plot", locator=".outline", strip="\n", collapse_whitespace=True),
        FieldSpec(name="director", locator=".director a"),
        FieldSpec(name="cast", locator=".cast a", mode=ExtractMode.LIST, kind=FieldKind.LIST),
    ),
)
