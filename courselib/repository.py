"""
Course library repository: the database access used by the api endpoints

Filtering, sorting and paging of the author collection happen in the database,
in that order. Writes are flushed by `save`, the commit happens at the request
boundary (cfr. http_method_decorator).
"""
from typing import Iterable, List, NamedTuple, Optional, Sequence
import sqlalchemy
from sqlalchemy import or_
import courselib
from .courselib_init import DB
from .errors import GenericError
from .models import Author, Course
from .paging import PagedList
from .property_mapping import SortClause
from .sorting import apply_sort


class AuthorFilter(NamedTuple):
    main_category: Optional[str] = None
    search_query: Optional[str] = None


class CourseLibraryRepository:
    """
    :param db: flask_sqlalchemy database, the session of this db is used
    """

    def __init__(self, db=DB) -> None:
        self.db = db

    @property
    def session(self):
        return self.db.session

    # Courses

    def get_courses(self, author_id: str, sort: Sequence[SortClause] = ()) -> List[Course]:
        query = self.session.query(Course).filter(Course.author_id == author_id)
        return apply_sort(query, Course, sort).all()

    def get_course(self, author_id: str, course_id: str) -> Optional[Course]:
        return self.session.query(Course).filter(Course.author_id == author_id, Course.id == course_id).one_or_none()

    def add_course(self, author_id: str, course: Course) -> None:
        if author_id is None:
            raise ValueError("author_id is required")
        course.author_id = author_id
        self.session.add(course)

    def course_exists(self, course_id: str) -> bool:
        """
        :return: whether a course with this id exists, for any author
        """
        return self.session.get(Course, course_id) is not None

    def update_course(self, course: Course) -> None:
        """
        Attach the course to the session (e.g. when it was loaded by another session),
        the changes are flushed by `save`
        """
        self.session.add(course)

    def delete_course(self, course: Course) -> None:
        self.session.delete(course)

    # Authors

    def filter_authors(self, author_filter: AuthorFilter = AuthorFilter()):
        """
        :return: sqla query of the authors matching the filter
        """
        query = self.session.query(Author)
        main_category = (author_filter.main_category or "").strip()
        if main_category:
            query = query.filter(Author.main_category == main_category)
        search_query = (author_filter.search_query or "").strip()
        if search_query:
            # "%" and "_" in the query are matched literally
            query = query.filter(
                or_(
                    Author.main_category.contains(search_query, autoescape=True),
                    Author.first_name.contains(search_query, autoescape=True),
                    Author.last_name.contains(search_query, autoescape=True),
                )
            )
        return query

    def get_authors(self, author_filter: AuthorFilter, sort: Sequence[SortClause], page_number: int, page_size: int) -> PagedList:
        """
        :param author_filter: main category/search query filter
        :param sort: resolved sort clauses
        :param page_number: 1-based page number
        :param page_size: page size
        :return: PagedList of Author instances
        """
        query = apply_sort(self.filter_authors(author_filter), Author, sort)
        # break ties on the primary key so pages don't overlap
        query = query.order_by(Author.id)
        return PagedList.create(query, page_number, page_size)

    def get_authors_by_ids(self, author_ids: Iterable[str]) -> List[Author]:
        author_ids = list(author_ids)
        if not author_ids:
            return []
        authors = self.session.query(Author).filter(Author.id.in_(author_ids)).all()
        by_id = {author.id: author for author in authors}
        # return the authors in the order of the requested ids
        return [by_id[author_id] for author_id in author_ids if author_id in by_id]

    def get_author(self, author_id: str) -> Optional[Author]:
        return self.session.get(Author, author_id)

    def author_exists(self, author_id: str) -> bool:
        return self.session.query(Author.id).filter(Author.id == author_id).first() is not None

    def add_author(self, author: Author) -> None:
        self.session.add(author)

    def delete_author(self, author: Author) -> None:
        self.session.delete(author)

    def save(self) -> None:
        """
        flush the pending changes so constraint violations surface in the handler
        """
        try:
            self.session.flush()
        except sqlalchemy.exc.SQLAlchemyError as exc:
            courselib.log.warning(str(exc))
            raise GenericError(str(exc))
