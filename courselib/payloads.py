# Request payload parsing and validation
#
# Payloads use the client facing (camelCase) attribute names, e.g.
#   {"firstName": "Eli", "lastName": "Ivory Bones Sweet", "dateOfBirth": "1957-12-16", "mainCategory": "Singing"}
#
# Invalid payloads raise UnprocessableEntityError with the messages per attribute,
# payloads that aren't json objects raise ValidationError.
# Course PATCH requests take a json patch document (a list of operations).
# Attributes that are not declared are ignored.
#
import datetime
import uuid
from typing import Any, Dict, List, Optional
import jsonpatch
import jsonpointer
from .errors import UnprocessableEntityError, ValidationError
from .models import Author, Course

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1500
AUTHOR_NAME_MAX_LENGTH = 50
TITLE_EQUALS_DESCRIPTION = "The provided description should be different from the title."


class _Errors(dict):
    def add(self, name: str, message: str) -> None:
        self.setdefault(name, []).append(message)

    def raise_if_any(self) -> None:
        if self:
            raise UnprocessableEntityError(dict(self))


def _require_object(data: Any, name: str = "payload") -> dict:
    if not isinstance(data, dict):
        raise ValidationError(f"Invalid {name}: expected a json object")
    return data


def _string(data: dict, name: str, errors: _Errors, required: bool, max_length: int) -> Optional[str]:
    value = data.get(name)
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            errors.add(name, f"The {name} field is required.")
        return None
    if not isinstance(value, str):
        errors.add(name, f"The {name} field should be a string.")
        return None
    if len(value) > max_length:
        errors.add(name, f"The {name} shouldn't have more than {max_length} characters.")
    return value


def parse_date(value: Any) -> datetime.date:
    """
    :param value: iso formatted date or datetime string, e.g. "1650-07-23" or "1650-07-23T00:00:00+00:00"
    :return: date
    """
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Invalid date {value!r}")
    try:
        return datetime.date.fromisoformat(value)
    except ValueError:
        return datetime.datetime.fromisoformat(value).date()


def _course_attributes(data: Any, description_required: bool, errors: _Errors, prefix: str = "") -> Dict[str, Optional[str]]:
    data = _require_object(data, "course")
    local = _Errors()
    title = _string(data, "title", local, True, TITLE_MAX_LENGTH)
    description = _string(data, "description", local, description_required, DESCRIPTION_MAX_LENGTH)
    if title is not None and title == description:
        local.add("course", TITLE_EQUALS_DESCRIPTION)
    for name, messages in local.items():
        for message in messages:
            errors.add(prefix + name, message)
    return {"title": title, "description": description}


def parse_course_creation(data: Any) -> Course:
    """
    :param data: course creation payload
    :return: new (transient) Course instance
    """
    errors = _Errors()
    attributes = _course_attributes(data, False, errors)
    errors.raise_if_any()
    return Course(**attributes)


def parse_course_update(data: Any) -> Dict[str, Optional[str]]:
    """
    :param data: course update payload, title and description are required
    :return: validated course attributes
    """
    errors = _Errors()
    attributes = _course_attributes(data, True, errors)
    errors.raise_if_any()
    return attributes


def course_update_payload(course: Optional[Course]) -> Dict[str, Optional[str]]:
    """
    :return: update payload of an existing course, PATCH applies its operations to it
    """
    if course is None:
        return {"title": None, "description": None}
    return {"title": course.title, "description": course.description}


def apply_course_patch(course: Optional[Course], patch: Any) -> Dict[str, Optional[str]]:
    """
    Partial update: apply a json patch document (RFC 6902) to the update payload
    of the current course and validate the result, e.g.
        [{"op": "replace", "path": "/title", "value": "Commandeering"}]

    :param course: course to patch, None when the course will be created
    :param patch: json list of patch operations
    :return: validated course attributes
    """
    if not isinstance(patch, list) or not all(isinstance(operation, dict) for operation in patch):
        raise ValidationError("Invalid patch document: expected a json list of operations")
    try:
        payload = jsonpatch.apply_patch(course_update_payload(course), patch)
    except (jsonpatch.JsonPatchException, jsonpointer.JsonPointerException) as exc:
        raise ValidationError(f"Invalid patch document: {exc}")
    return parse_course_update(payload)



def apply_course_update(course: Course, attributes: Dict[str, Optional[str]]) -> Course:
    for name, value in attributes.items():
        setattr(course, name, value)
    return course


def parse_author_creation(data: Any) -> Author:
    """
    :param data: author creation payload, may contain a "courses" list of course creation payloads
    :return: new (transient) Author instance
    """
    data = _require_object(data, "author")
    errors = _Errors()
    first_name = _string(data, "firstName", errors, True, AUTHOR_NAME_MAX_LENGTH)
    last_name = _string(data, "lastName", errors, True, AUTHOR_NAME_MAX_LENGTH)
    main_category = _string(data, "mainCategory", errors, True, AUTHOR_NAME_MAX_LENGTH)

    date_of_birth = None
    if data.get("dateOfBirth") is None:
        errors.add("dateOfBirth", "The dateOfBirth field is required.")
    else:
        try:
            date_of_birth = parse_date(data["dateOfBirth"])
        except ValueError:
            errors.add("dateOfBirth", f"Invalid date '{data['dateOfBirth']}'.")

    courses_data = data.get("courses") or []
    course_attributes: List[dict] = []
    if not isinstance(courses_data, list):
        errors.add("courses", "The courses field should be a list.")
    else:
        for i, course_data in enumerate(courses_data):
            if not isinstance(course_data, dict):
                errors.add(f"courses[{i}]", "Invalid course: expected a json object")
                continue
            course_attributes.append(_course_attributes(course_data, False, errors, prefix=f"courses[{i}]."))

    errors.raise_if_any()
    author = Author(first_name=first_name, last_name=last_name, date_of_birth=date_of_birth, main_category=main_category)
    author.courses = [Course(**attributes) for attributes in course_attributes]
    return author


def parse_author_collection(data: Any) -> List[Author]:
    """
    :param data: json list of author creation payloads
    """
    if not isinstance(data, list):
        raise ValidationError("Invalid payload: expected a json list")
    authors = []
    errors = _Errors()
    for i, item in enumerate(data):
        try:
            authors.append(parse_author_creation(item))
        except UnprocessableEntityError as exc:
            for name, messages in exc.fields.items():
                for message in messages:
                    errors.add(f"[{i}].{name}", message)
    errors.raise_if_any()
    return authors


def parse_id(value: Any, name: str = "id") -> str:
    """
    :param value: id from the url path
    :return: canonical (lowercase) uuid string
    """
    try:
        return str(uuid.UUID(str(value).strip()))
    except ValueError:
        raise ValidationError(f"Invalid {name} '{value}'")


def parse_id_list(csv: Optional[str]) -> List[str]:
    """
    :param csv: comma separated ids
    :return: list of canonical ids
    """
    tokens = [token.strip() for token in (csv or "").split(",") if token.strip()]
    if not tokens:
        raise ValidationError("No ids")
    return [parse_id(token) for token in tokens]
