"""
Field extraction from one item container.

Every lookup degrades to the FieldSpec's default: a missing element, a
missing attribute or text that fails numeric parsing never raises out of
extract(), so one broken field never costs the whole record.
"""
import urllib.parse
from typing import Any, List, Tuple

from bs4 import Tag

from core.exceptions import FieldMalformedException, FieldMissingException
from core.logger import get_logger
from core.utils import collapse_whitespace, parse_number
from models.field_spec import ExtractMode, FieldKind, FieldSpec

logger = get_logger(__name__)

TITLE_YEAR_DELIMITER = " ("


def split_title_year(text: str) -> Tuple[str, str]:
    """
    Split "<title> (<year>)" on the first " (".

    The title is trimmed and a single trailing ")" is removed from the year.
    Without the delimiter the whole text is the title and the year is empty.

    Example:
        >>> split_title_year("Dune (2021)")
        ('Dune', '2021')
        >>> split_title_year("Untitled")
        ('Untitled', '')
    """
    title, sep, year = text.partition(TITLE_YEAR_DELIMITER)
    if not sep:
        return text.strip(), ""
    year = year.strip()
    if year.endswith(")"):
        year = year[:-1]
    return title.strip(), year


def path_segment(url: str, index: int) -> str:
    """Return the index-th non-empty segment of the URL's path, or ""."""
    path = urllib.parse.urlparse(url).path
    segments = [s for s in path.split("/") if s]
    if -len(segments) <= index < len(segments):
        return segments[index]
    return ""


class FieldExtractor:
    """
    Applies FieldSpecs to item containers.

    Containers only need the bs4 Tag capability set: select_one, select,
    get and get_text. Containers are never modified.
    """

    def extract(self, container: Tag, spec: FieldSpec) -> Any:
        try:
            return self._extract(container, spec)
        except FieldMissingException as e:
            logger.debug(f"[EXTRACT] '{spec.name}' missing: {e}")
        except FieldMalformedException as e:
            logger.debug(f"[EXTRACT] '{spec.name}' malformed: {e}")
        return spec.default_value()

    def _extract(self, container: Tag, spec: FieldSpec) -> Any:
        if spec.mode == ExtractMode.LIST:
            return self._extract_list(container, spec)

        element = self._locate(container, spec)

        if spec.mode == ExtractMode.ATTRIBUTE:
            raw = self._read_attribute(element, spec.attribute, spec)
            return self._convert(self._post_process(raw, spec), spec)

        if spec.mode == ExtractMode.PATH_SEGMENT:
            href = self._read_attribute(element, spec.link_attribute, spec)
            segment = path_segment(href.strip(), spec.segment)
            if not segment:
                raise FieldMissingException(
                    "link has no such path segment", {"href": href, "segment": spec.segment}
                )
            return segment

        text = self._post_process(element.get_text(), spec)

        if spec.mode == ExtractMode.TITLE_YEAR:
            title, year = split_title_year(text)
            return title if spec.part == "title" else year

        return self._convert(text, spec)

    def _locate(self, container: Tag, spec: FieldSpec) -> Tag:
        if not spec.locator:
            return container
        element = container.select_one(spec.locator)
        if element is None:
            raise FieldMissingException("locator matched nothing", {"locator": spec.locator})
        return element

    def _read_attribute(self, element: Tag, attribute: str, spec: FieldSpec) -> str:
        value = element.get(attribute)
        if value is None:
            raise FieldMissingException(
                "attribute not present", {"locator": spec.locator, "attribute": attribute}
            )
        # Multi-valued attributes (class, rel) come back as lists
        if isinstance(value, list):
            value = " ".join(value)
        return value

    def _extract_list(self, container: Tag, spec: FieldSpec) -> List[str]:
        matches = container.select(spec.locator) if spec.locator else [container]
        return [self._post_process(m.get_text(), spec) for m in matches]

    def _post_process(self, text: str, spec: FieldSpec) -> str:
        if spec.strip:
            text = text.replace(spec.strip, "", 1)
        if spec.collapse_whitespace:
            text = collapse_whitespace(text)
        if spec.trim:
            text = text.strip()
        return text

    def _convert(self, text: str, spec: FieldSpec) -> Any:
        if spec.kind == FieldKind.STR:
            return text
        try:
            return parse_number(text, as_int=spec.kind == FieldKind.INT)
        except ValueError as e:
            raise FieldMalformedException(f"not a number: {text!r}", {"error": str(e)}) from e

