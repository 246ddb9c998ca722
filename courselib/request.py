"""
Request class: parse the query string arguments used by the collection endpoints

- fields: csv of the fields to return
- orderBy: csv of sort keys, each optionally followed by "asc" or "desc"
- pageNumber, pageSize: 1-based paging
- mainCategory, searchQuery: author filters
"""
from typing import Optional
from flask import Request
from .config import get_int_config
from .errors import ValidationError


class CourseLibraryRequest(Request):
    """
    Flask request with accessors for the course library query arguments
    """

    def _get_int_arg(self, name: str, default: int) -> int:
        value = self.args.get(name)
        if value is None or value == "":
            return default
        try:
            return int(value)
        except ValueError:
            raise ValidationError(f"Invalid {name} '{value}'")

    @property
    def fields(self) -> Optional[str]:
        return self.args.get("fields")

    @property
    def order_by(self) -> Optional[str]:
        return self.args.get("orderBy")

    @property
    def page_number(self) -> int:
        return self._get_int_arg("pageNumber", get_int_config("DEFAULT_PAGE_NUMBER"))

    @property
    def page_size(self) -> int:
        """
        requested page size, without clamping to MAX_PAGE_SIZE (cfr. paging.clamp_page_size)
        """
        return self._get_int_arg("pageSize", get_int_config("DEFAULT_PAGE_SIZE"))

    @property
    def main_category(self) -> Optional[str]:
        return self.args.get("mainCategory")

    @property
    def search_query(self) -> Optional[str]:
        return self.args.get("searchQuery")

    def get_json_payload(self):
        """
        :return: the parsed json body
        """
        result = self.get_json(force=True, silent=True)
        if result is None:
            raise ValidationError("Invalid JSON Payload")
        return result
