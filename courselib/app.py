"""
Application factory

    app = create_app({"SQLALCHEMY_DATABASE_URI": "sqlite:///courselib.sqlite"}, seed=True)
"""
import datetime
from flask import Flask
import courselib
from .api import CourseLibraryApi
from .courselib_init import DB
from .models import Author, Course

DEFAULT_DATABASE_URI = "sqlite://"

# demo data: (id, first name, last name, date of birth, main category, courses)
SEED_AUTHORS = [
    (
        "d28888e9-2ba9-473a-a40f-e38cb54f9b35",
        "Berry",
        "Griffin Beak Eldritch",
        datetime.date(1650, 7, 23),
        "Ships",
        [
            ("5b1c2b4d-48c7-402a-80c3-cc796ad49c6b", "Commandeering a Ship Without Getting Caught", "Commandeering a ship in rough waters isn't easy."),
            ("d8663e5e-7494-4f81-8739-6e0de1bea7ee", "Overthrowing Mutiny", "In this course, the author provides tips to avoid, or, if needed, overthrow pirate mutiny."),
        ],
    ),
    (
        "da2fd609-d754-4feb-8acd-c4f9ff13ba96",
        "Nancy",
        "Swashbuckler Rye",
        datetime.date(1668, 5, 21),
        "Rum",
        [("d173e20d-159e-4127-9ce9-b0ac2564ad97", "Avoiding Brawls While Drinking as Much Rum as You Desire", "Every good pirate loves rum, but it also has a tendency to get you into trouble.")],
    ),
    (
        "2902b665-1190-4c70-9915-b9c2d7680450",
        "Eli",
        "Ivory Bones",
        datetime.date(1701, 12, 16),
        "Singing",
        [("40ff5488-fdab-45b5-bc3a-14302d59869a", "Singalong Pirate Hits", "In this course you'll learn how to sing all-time favourite pirate songs.")],
    ),
    ("102b566b-ba1f-404c-b2df-e2cde39ade09", "Arnold", "Oxford Spence", datetime.date(1702, 3, 6), "Singing", []),
    ("5b3621c0-7b12-4e80-9c8b-3398cba7ee05", "Seabury", "Toxic Reyes", datetime.date(1690, 11, 23), "Maps", []),
    ("2aadd2df-7caf-45ab-9355-7f6332985a87", "Rutherford", "Fearless Venn", datetime.date(1723, 4, 5), "General debauchery", []),
]


def seed_database(db=DB) -> None:
    """
    Add the demo authors and courses, existing authors are skipped
    """
    for author_id, first_name, last_name, date_of_birth, main_category, courses in SEED_AUTHORS:
        if db.session.get(Author, author_id) is not None:
            continue
        author = Author(id=author_id, first_name=first_name, last_name=last_name, date_of_birth=date_of_birth, main_category=main_category)
        for course_id, title, description in courses:
            author.courses.append(Course(id=course_id, title=title, description=description))
        db.session.add(author)
    db.session.commit()
    courselib.log.info("Seeded the database")


def create_app(config: dict = None, seed: bool = False) -> Flask:
    """
    :param config: configuration values, added to app.config
    :param seed: add the demo data
    :return: Flask application serving the course library api
    """
    app = Flask("courselib")
    app.config.update(SQLALCHEMY_DATABASE_URI=DEFAULT_DATABASE_URI)
    if config:
        app.config.update(config)

    DB.init_app(app)
    with app.app_context():
        api = CourseLibraryApi(app, app_db=DB)
        api.expose_resources()
        DB.create_all()
        if seed:
            seed_database(DB)

    return app
