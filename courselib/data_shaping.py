#
# Data shaping: project entities to a client selected subset of their shape fields
#
# `fields` is a csv string, e.g. "id, name,MAINCATEGORY":
# - names are matched case-insensitively against the shape field names
# - surrounding whitespace is ignored
# - the result follows the requested order, or the declared order when no fields are requested
#
from typing import Any, Iterable, List, Optional, Union
from .errors import ValidationError
from .shapes import Field, Shape


def split_csv(csv: Optional[str]) -> List[str]:
    """
    :param csv: comma separated values
    :return: stripped tokens, an empty list for None or blank input
    """
    if csv is None or not csv.strip():
        return []
    return [token.strip() for token in csv.split(",")]


def has_properties(shape: Shape, fields: Optional[str]) -> bool:
    """
    Property checker: verify that all requested field names exist on the shape

    :param shape: target shape
    :param fields: csv field names
    :return: False on the first unknown field name
    """
    for token in split_csv(fields):
        if shape.find(token) is None:
            return False
    return True


def _resolve_fields(shape: Shape, tokens: List[str]) -> List[Field]:
    """
    :return: the fields for the requested names, without duplicates: a name requested twice keeps its first position
    """
    fields = []
    for token in tokens:
        field = shape.find(token)
        if field is None:
            raise ValidationError(f"Property '{token}' wasn't found on {shape.name}")
        if field.name not in (selected.name for selected in fields):
            fields.append(field)
    return fields


def _shape_one(shape: Shape, entity: Any, fields: List[Field]) -> dict:
    if not fields:
        return shape.values(entity)
    return {field.name: field.accessor(entity) for field in fields}


def shape_data(shape: Shape, data: Union[Any, Iterable[Any]], fields: Optional[str] = None, many: bool = False) -> Union[dict, List[dict]]:
    """
    Shape a single entity, or every entity of a sequence when `many` is set.
    The field names are checked before shaping, also when the sequence is empty

    :param shape: shape the entities are projected to
    :param data: entity or iterable of entities
    :param fields: csv field names, None or blank selects all fields
    :param many: whether `data` is a sequence
    :return: (list of) dicts mapping field name to value
    """
    selected = _resolve_fields(shape, split_csv(fields))
    if many:
        return [_shape_one(shape, entity, selected) for entity in data]
    return _shape_one(shape, data, selected)

