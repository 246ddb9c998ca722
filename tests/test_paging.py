import pytest
from courselib.errors import ValidationError
from courselib.models import Author
from courselib.paging import PagedList, clamp_page_size, validate_page_args

ITEMS = list(range(25))


def test_first_page():
    page = PagedList.create(ITEMS, 1, 10)
    assert list(page) == list(range(10))
    assert page.total_count == 25
    assert page.total_pages == 3
    assert page.has_next
    assert not page.has_previous


def test_last_page():
    page = PagedList.create(ITEMS, 3, 10)
    assert list(page) == [20, 21, 22, 23, 24]
    assert len(page) == 5
    assert not page.has_next
    assert page.has_previous


def test_page_beyond_last_page():
    page = PagedList.create(ITEMS, 5, 10)
    assert len(page) == 0
    assert page.total_count == 25
    assert page.current_page == 5
    assert not page.has_next
    assert page.has_previous


def test_empty_source():
    page = PagedList.create([], 1, 10)
    assert page.total_pages == 0
    assert not page.has_next
    assert not page.has_previous


def test_metadata():
    page = PagedList.create(ITEMS, 2, 10)
    assert page.metadata() == {
        "totalCount": 25,
        "pageSize": 10,
        "currentPage": 2,
        "totalPages": 3,
        "hasNext": True,
        "hasPrevious": True,
    }


def test_read_only():
    page = PagedList.create(ITEMS, 1, 10)
    with pytest.raises(AttributeError):
        page.current_page = 2
    assert page[0] == 0
    assert page.items == tuple(range(10))


@pytest.mark.parametrize("page_number, page_size", [(0, 10), (-1, 10), (1, 0), (1, -5)])
def test_invalid_page_args(page_number, page_size):
    with pytest.raises(ValidationError):
        validate_page_args(page_number, page_size)
    with pytest.raises(ValidationError):
        PagedList.create(ITEMS, page_number, page_size)


def test_page_number_out_of_range():
    with pytest.raises(ValidationError):
        validate_page_args(99999999999999999999, 10)
    with pytest.raises(ValidationError):
        PagedList.create(ITEMS, 2**62, 10)
    validate_page_args(2**63 // 10, 10)


def test_clamp_page_size():
    assert clamp_page_size(5) == 5
    assert clamp_page_size(20) == 20
    assert clamp_page_size(100) == 20


def test_query_source(db_session, many_authors):
    query = db_session.query(Author).order_by(Author.id)
    page = PagedList.create(query, 3, 10)
    assert len(page) == 5
    assert page.total_count == many_authors
    assert all(isinstance(author, Author) for author in page)
