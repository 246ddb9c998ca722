# Paginated results
#
# page numbers are 1-based, a page number beyond the last page results in an
# empty page with correct metadata
#
import math
from typing import Any, Iterator, Sequence, Tuple
from .errors import ValidationError
from .config import get_int_config

MAX_OFFSET = 2**63 - 1


class PagedList:
    """
    One page of items plus the paging metadata, immutable after construction
    """

    __slots__ = ("_items", "_total_count", "_page_size", "_current_page")

    def __init__(self, items: Sequence[Any], total_count: int, page_number: int, page_size: int) -> None:
        object.__setattr__(self, "_items", tuple(items))
        object.__setattr__(self, "_total_count", total_count)
        object.__setattr__(self, "_page_size", page_size)
        object.__setattr__(self, "_current_page", page_number)

    def __setattr__(self, name, value):
        raise AttributeError(f"{self.__class__.__name__} is read-only")

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index):
        return self._items[index]

    def __repr__(self) -> str:
        return f"<PagedList page {self.current_page}/{self.total_pages} ({len(self)} of {self.total_count} items)>"

    @property
    def items(self) -> Tuple[Any, ...]:
        return self._items

    @property
    def total_count(self) -> int:
        return self._total_count

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def total_pages(self) -> int:
        return int(math.ceil(self._total_count / float(self._page_size)))

    @property
    def has_previous(self) -> bool:
        return self._current_page > 1

    @property
    def has_next(self) -> bool:
        return self._current_page < self.total_pages

    def metadata(self) -> dict:
        """
        :return: the paging metadata, serialized in the X-Pagination response header
        """
        return {
            "totalCount": self.total_count,
            "pageSize": self.page_size,
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
            "hasNext": self.has_next,
            "hasPrevious": self.has_previous,
        }

    @classmethod
    def create(cls, source: Any, page_number: int, page_size: int) -> "PagedList":
        """
        Count, skip and take: this is where the query is executed

        :param source: filtered and sorted sqla query or list
        :param page_number: 1-based page number
        :param page_size: number of items per page
        :return: PagedList
        """
        validate_page_args(page_number, page_size)
        offset = (page_number - 1) * page_size
        if isinstance(source, (list, tuple)):
            count = len(source)
            items = source[offset : offset + page_size]
        else:
            count = source.count()
            items = source.offset(offset).limit(page_size).all()
        return cls(items, count, page_number, page_size)


def validate_page_args(page_number: int, page_size: int) -> None:
    """
    pageNumber and pageSize must be positive: they are rejected instead of clamped.
    The number of skipped items must fit in a 64 bit database integer
    """
    if not isinstance(page_number, int) or page_number <= 0:
        raise ValidationError(f"Invalid pageNumber {page_number}")
    if not isinstance(page_size, int) or page_size <= 0:
        raise ValidationError(f"Invalid pageSize {page_size}")
    if (page_number - 1) * page_size > MAX_OFFSET:
        raise ValidationError(f"pageNumber {page_number} is out of range")


def clamp_page_size(page_size: int) -> int:
    """
    :return: page_size, limited to the MAX_PAGE_SIZE setting
    """
    return min(page_size, get_int_config("MAX_PAGE_SIZE"))
