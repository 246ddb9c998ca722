"""Shared fixtures: an in-memory course library seeded with the demo authors"""
import datetime
import pytest
from courselib import DB, create_app
from courselib.models import Author, Course

BERRY_ID = "d28888e9-2ba9-473a-a40f-e38cb54f9b35"
NANCY_ID = "da2fd609-d754-4feb-8acd-c4f9ff13ba96"
ELI_ID = "2902b665-1190-4c70-9915-b9c2d7680450"
ARNOLD_ID = "102b566b-ba1f-404c-b2df-e2cde39ade09"
SEABURY_ID = "5b3621c0-7b12-4e80-9c8b-3398cba7ee05"
RUTHERFORD_ID = "2aadd2df-7caf-45ab-9355-7f6332985a87"
BERRY_COURSE_ID = "5b1c2b4d-48c7-402a-80c3-cc796ad49c6b"
UNKNOWN_ID = "00000000-0000-4000-8000-000000000000"

BASE_URL = "http://localhost/api"


@pytest.fixture
def app():
    app = create_app({"TESTING": True, "SQLALCHEMY_DATABASE_URI": "sqlite://"}, seed=True)
    yield app
    with app.app_context():
        DB.session.remove()
        DB.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db_session(app):
    with app.app_context():
        yield DB.session


@pytest.fixture
def many_authors(db_session):
    """
    19 authors on top of the 6 demo authors
    """
    for i in range(19):
        db_session.add(
            Author(
                first_name=f"Zed{i:02d}",
                last_name="Extra",
                date_of_birth=datetime.date(1800 + i, 1, 1),
                main_category="Extras",
            )
        )
    db_session.commit()
    return 25


def make_author(first_name="Jane", last_name="Doe", date_of_birth=datetime.date(1700, 1, 1), main_category="Maps", **kwargs):
    """transient author, used by the unit tests"""
    return Author(first_name=first_name, last_name=last_name, date_of_birth=date_of_birth, main_category=main_category, **kwargs)


def make_course(title="Reading maps", description="Where the treasure is", **kwargs):
    return Course(title=title, description=description, **kwargs)
