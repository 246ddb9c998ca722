# Apply the resolved sort clauses (see property_mapping.py) to a query or a list
#
# Response formatting follows filter -> sort -> paginate
#
from typing import Any, Sequence
import courselib
from .property_mapping import SortClause


def _sort_list(items: Sequence[Any], clauses: Sequence[SortClause]) -> list:
    """
    stable multi-key sort: sort by the least significant key first
    None values come last when sorting ascending
    """
    result = list(items)
    for clause in reversed(clauses):
        result.sort(
            key=lambda obj: (getattr(obj, clause.property, None) is None, getattr(obj, clause.property, None)),
            reverse=clause.descending,
        )
    return result


def apply_sort(object_query: Any, model: Any, clauses: Sequence[SortClause]) -> Any:
    """
    :param object_query: sqla query object or a list of instances
    :param model: sqla model class, used to look up the backing columns
    :param clauses: sort clauses, primary key first
    :return: sorted query or list
    """
    if not clauses:
        return object_query

    if isinstance(object_query, (list, tuple)):
        return _sort_list(object_query, clauses)

    for clause in clauses:
        column = getattr(model, clause.property, None)
        if column is None or not hasattr(column, "desc"):
            # the property mapping table references an attribute the model doesn't have
            raise LookupError(f"{model} has no sortable attribute {clause.property}")
        courselib.log.debug(f"Sorting {model.__name__} by {clause.property} {'desc' if clause.descending else 'asc'}")
        object_query = object_query.order_by(column.desc() if clause.descending else column.asc())

    return object_query
