"""Turn raw query-string parameters into an AttractionFilter, and a filter into a store query.

Parsing is table driven: each accepted parameter is one FieldSpec. Adding a
filter field means adding a row to FIELD_SPECS and a clause to build_query.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional

from catalog.config import settings
from catalog.domain.errors import FieldError, ValidationError
from catalog.domain.value_objects.attraction_filter import (
    ACCESSIBILITY_FEATURES,
    AccessibilityFlag,
    AttractionFilter,
    AttractionQuery,
    OrderKey,
    SortMode,
)


class ParseError(ValueError):
    """Raised by a field parser; the message becomes the FieldError reason."""


def _integer(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ParseError("Must be an integer")


def positive_int(raw: str) -> int:
    value = _integer(raw)
    if value < 1:
        raise ParseError("Must be a positive integer")
    return value


def bounded_int(low: int, high: int) -> Callable[[str], int]:
    def parse(raw: str) -> int:
        value = _integer(raw)
        if not low <= value <= high:
            raise ParseError(f"Must be between {low} and {high}")
        return value
    return parse


def bounded_text(max_length: int) -> Callable[[str], str]:
    def parse(raw: str) -> str:
        if len(raw) > max_length:
            raise ParseError(f"Must be at most {max_length} characters")
        return raw
    return parse


def enum_member(enum_cls) -> Callable[[str], Any]:
    allowed = ", ".join(member.value for member in enum_cls)

    def parse(raw: str):
        try:
            return enum_cls(raw)
        except ValueError:
            raise ParseError(f"Must be one of: {allowed}")
    return parse


@dataclass(frozen=True)
class FieldSpec:
    """One optional query parameter: where it lands and how it is parsed."""
    param: str
    attr: str
    parser: Callable[[str], Any]


FIELD_SPECS = (
    FieldSpec("page", "page", positive_int),
    FieldSpec("limit", "limit", bounded_int(1, settings.MAX_PAGE_SIZE)),
    FieldSpec("search", "search_text", bounded_text(settings.SEARCH_MAX_LENGTH)),
    FieldSpec("category", "category_id", positive_int),
    FieldSpec("metro", "metro_station_id", positive_int),
    FieldSpec("district", "district", bounded_text(settings.SEARCH_MAX_LENGTH)),
    FieldSpec("accessibility", "accessibility_flag", enum_member(AccessibilityFlag)),
    FieldSpec("sort", "sort_mode", enum_member(SortMode)),
)

SORT_ORDERINGS = {
    SortMode.NAME: (OrderKey("name"), OrderKey("id")),
    SortMode.NEWEST: (OrderKey("created_at", descending=True), OrderKey("id", descending=True)),
    SortMode.OLDEST: (OrderKey("created_at"), OrderKey("id")),
    SortMode.CATEGORY: (OrderKey("category_id"), OrderKey("name"), OrderKey("id")),
}


def normalize(raw_params: Mapping[str, Optional[str]]) -> AttractionFilter:
    """Parse raw query parameters into an AttractionFilter.

    Missing keys and blank values mean "no constraint". Every malformed value
    is reported in a single ValidationError.

    Args:
        raw_params: Query-string mapping of parameter name to raw value

    Returns:
        AttractionFilter with defaults for every absent field

    Raises:
        ValidationError: If any present value fails to parse
    """
    values: Dict[str, Any] = {"limit": settings.DEFAULT_PAGE_SIZE}
    errors: List[FieldError] = []
    for spec in FIELD_SPECS:
        raw = raw_params.get(spec.param)
        if raw is None:
            continue
        raw = str(raw).strip()
        if not raw:
            continue
        try:
            values[spec.attr] = spec.parser(raw)
        except ParseError as e:
            errors.append(FieldError(field=spec.param, reason=str(e), value=raw))
    if errors:
        raise ValidationError(errors)
    return AttractionFilter(**values)


def build_query(attraction_filter: AttractionFilter, include_unpublished: bool = False) -> AttractionQuery:
    """Compile a filter into the conjunctive store query for one page."""
    features = ()
    if attraction_filter.accessibility_flag is not None:
        features = (ACCESSIBILITY_FEATURES[attraction_filter.accessibility_flag],)
    return AttractionQuery(
        published_only=not include_unpublished,
        category_id=attraction_filter.category_id,
        metro_station_id=attraction_filter.metro_station_id,
        district=attraction_filter.district,
        search_text=attraction_filter.search_text,
        required_features=features,
        ordering=SORT_ORDERINGS[attraction_filter.sort_mode],
        offset=(attraction_filter.page - 1) * attraction_filter.limit,
        limit=attraction_filter.limit,
    )
