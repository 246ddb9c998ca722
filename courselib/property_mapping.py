"""
Property mapping: translate the client facing sort keys to backing entity properties

The registration table is built once at import time and is read-only afterwards,
each (shape, entity) pair maps a case-insensitive client key to one or more
backing properties. A backing property with `revert` set inverts the requested
direction, e.g. sorting authors by age ascending means sorting by date of birth descending.

The orderBy syntax is a csv of "<key>[ asc|desc]" tokens, the first token is the
primary sort key, subsequent tokens break ties.
"""
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple
from .data_shaping import split_csv
from .errors import ValidationError
from .shapes import AUTHOR, AUTHOR_FULL, COURSE, Shape

ASCENDING = "asc"
DESCENDING = "desc"


class BackingProperty(NamedTuple):
    name: str
    revert: bool = False


class SortClause(NamedTuple):
    """
    One ORDER BY term, `descending` is the effective direction (revert already applied)
    """

    property: str
    descending: bool = False
    revert: bool = False


def _freeze(mapping: Dict[str, Sequence[BackingProperty]]) -> Mapping[str, Tuple[BackingProperty, ...]]:
    return MappingProxyType({key.lower(): tuple(value) for key, value in mapping.items()})


_AUTHOR_MAPPING = {
    "id": [BackingProperty("id")],
    "name": [BackingProperty("first_name"), BackingProperty("last_name")],
    "age": [BackingProperty("date_of_birth", revert=True)],
    "mainCategory": [BackingProperty("main_category")],
}

_AUTHOR_FULL_MAPPING = {
    "id": [BackingProperty("id")],
    "firstName": [BackingProperty("first_name")],
    "lastName": [BackingProperty("last_name")],
    "dateOfBirth": [BackingProperty("date_of_birth")],
    "mainCategory": [BackingProperty("main_category")],
}

_COURSE_MAPPING = {
    "id": [BackingProperty("id")],
    "title": [BackingProperty("title")],
    "description": [BackingProperty("description")],
    "authorId": [BackingProperty("author_id")],
}

DEFAULT_MAPPINGS = MappingProxyType(
    {
        (AUTHOR.name, "Author"): _freeze(_AUTHOR_MAPPING),
        (AUTHOR_FULL.name, "Author"): _freeze(_AUTHOR_FULL_MAPPING),
        (COURSE.name, "Course"): _freeze(_COURSE_MAPPING),
    }
)


def parse_order_by(order_by: Optional[str]) -> Optional[List[Tuple[str, bool]]]:
    """
    :param order_by: orderBy csv
    :return: list of (key, descending) tuples or None if a token is malformed
    """
    result = []
    for token in split_csv(order_by):
        parts = token.split()
        if not parts or len(parts) > 2:
            return None
        direction = parts[1].lower() if len(parts) == 2 else ASCENDING
        if direction not in (ASCENDING, DESCENDING):
            return None
        result.append((parts[0], direction == DESCENDING))
    return result


class PropertyMappingService:
    """
    Resolve orderBy expressions against the registered property mappings
    """

    def __init__(self, mappings: Mapping = DEFAULT_MAPPINGS) -> None:
        self._mappings = mappings

    def _get_property_mapping(self, shape: Shape, model: Any) -> Mapping[str, Tuple[BackingProperty, ...]]:
        key = (shape.name, getattr(model, "__name__", model))
        try:
            return self._mappings[key]
        except KeyError:
            raise LookupError(f"No property mapping registered for {key[0]} -> {key[1]}")

    def valid_mapping_exists_for(self, shape: Shape, model: Any, order_by: Optional[str]) -> bool:
        """
        :param shape: client facing shape
        :param model: backing entity class
        :param order_by: orderBy csv, None or blank is valid
        :return: whether every sort key is registered for the shape/model pair
        """
        mapping = self._get_property_mapping(shape, model)
        parsed = parse_order_by(order_by)
        if parsed is None:
            return False
        return all(key.lower() in mapping for key, _ in parsed)

    def get_mapping(self, shape: Shape, model: Any, order_by: Optional[str]) -> List[SortClause]:
        """
        :param shape: client facing shape
        :param model: backing entity class
        :param order_by: orderBy csv
        :return: the sort clauses in request order
        """
        mapping = self._get_property_mapping(shape, model)
        parsed = parse_order_by(order_by)
        if parsed is None:
            raise ValidationError(f"Invalid orderBy '{order_by}'")

        result = []
        for key, descending in parsed:
            backing_properties = mapping.get(key.lower())
            if backing_properties is None:
                raise ValidationError(f"Unknown sort key '{key}'")
            for backing_property in backing_properties:
                result.append(SortClause(backing_property.name, descending != backing_property.revert, backing_property.revert))
        return result


property_mapping_service = PropertyMappingService()
