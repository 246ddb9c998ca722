import datetime
from courselib.models import Author, Course
from courselib.repository import AuthorFilter, CourseLibraryRepository
from conftest import BERRY_COURSE_ID, NANCY_ID, UNKNOWN_ID


def test_update_detached_course(db_session):
    repository = CourseLibraryRepository()
    course = db_session.get(Course, BERRY_COURSE_ID)
    db_session.expunge(course)
    course.title = "Commandeering"
    repository.update_course(course)
    repository.save()
    db_session.commit()
    db_session.expire_all()
    assert db_session.get(Course, BERRY_COURSE_ID).title == "Commandeering"


def test_course_exists(db_session):
    repository = CourseLibraryRepository()
    assert repository.course_exists(BERRY_COURSE_ID)
    assert not repository.course_exists(UNKNOWN_ID)
    # the course of another author still exists
    assert repository.get_course(NANCY_ID, BERRY_COURSE_ID) is None


def test_search_query_is_matched_literally(db_session):
    repository = CourseLibraryRepository()
    db_session.add(Author(first_name="Per_cy", last_name="Rum", date_of_birth=datetime.date(1700, 1, 1), main_category="Rum"))
    db_session.commit()
    assert repository.filter_authors(AuthorFilter(search_query="%")).all() == []
    assert [author.first_name for author in repository.filter_authors(AuthorFilter(search_query="r_c"))] == ["Per_cy"]
    assert repository.filter_authors(AuthorFilter(search_query="r%c")).all() == []
