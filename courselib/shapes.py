"""
Resource shapes: the client facing representations of the database entities

A shape is an ordered registry of named fields, every field knows how to read
its value from an entity. Data shaping and the property checker resolve the
client supplied field names against these registries instead of inspecting the
entity objects at runtime.
"""
import datetime
from typing import Any, Callable, Iterator, NamedTuple, Optional, Sequence

# field kinds, used for documentation and serialization
STRING = "string"
IDENTIFIER = "identifier"
DATE = "date"
NUMERIC = "numeric"


class Field(NamedTuple):
    name: str
    kind: str
    accessor: Callable[[Any], Any]


class Shape:
    """
    Ordered, read-only set of named fields

    Field names are matched case-insensitively, the declared spelling
    is used in the shaped output
    """

    def __init__(self, name: str, fields: Sequence[Field]) -> None:
        self.name = name
        self._fields = tuple(fields)
        self._lookup = {}
        for field in self._fields:
            key = field.name.lower()
            if key in self._lookup:
                raise ValueError(f"Duplicate field {field.name} in shape {name}")
            self._lookup[key] = field

    def __iter__(self) -> Iterator[Field]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"<Shape {self.name}: {', '.join(self.names)}>"

    @property
    def names(self) -> list:
        return [field.name for field in self._fields]

    def find(self, name: str) -> Optional[Field]:
        """
        :param name: field name, any case, surrounding whitespace is ignored
        :return: the declared field or None
        """
        if name is None:
            return None
        return self._lookup.get(name.strip().lower())

    def values(self, entity: Any) -> dict:
        """
        :return: all field values of `entity` in declaration order
        """
        return {field.name: field.accessor(entity) for field in self._fields}


def current_age(date_of_birth: datetime.date, today: Optional[datetime.date] = None) -> int:
    """
    :param date_of_birth:
    :param today: reference date, defaults to the current date
    :return: age in whole years
    """
    if today is None:
        today = datetime.date.today()
    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age


AUTHOR = Shape(
    "Author",
    [
        Field("id", IDENTIFIER, lambda author: author.id),
        Field("name", STRING, lambda author: f"{author.first_name} {author.last_name}"),
        Field("age", NUMERIC, lambda author: current_age(author.date_of_birth)),
        Field("mainCategory", STRING, lambda author: author.main_category),
    ],
)

AUTHOR_FULL = Shape(
    "AuthorFull",
    [
        Field("id", IDENTIFIER, lambda author: author.id),
        Field("firstName", STRING, lambda author: author.first_name),
        Field("lastName", STRING, lambda author: author.last_name),
        Field("dateOfBirth", DATE, lambda author: author.date_of_birth),
        Field("mainCategory", STRING, lambda author: author.main_category),
    ],
)

COURSE = Shape(
    "Course",
    [
        Field("id", IDENTIFIER, lambda course: course.id),
        Field("title", STRING, lambda course: course.title),
        Field("description", STRING, lambda course: course.description),
        Field("authorId", IDENTIFIER, lambda course: course.author_id),
    ],
)
