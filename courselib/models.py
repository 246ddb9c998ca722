"""
SQLAlchemy models of the course library

ids are uuid4 strings, generated when the instance is created without an id
"""
import uuid
from .courselib_init import DB


def new_id() -> str:
    return str(uuid.uuid4())


class Author(DB.Model):
    """
    description: Author of courses
    """

    __tablename__ = "Authors"
    id = DB.Column(DB.String(36), primary_key=True, default=new_id)
    first_name = DB.Column(DB.String(50), nullable=False)
    last_name = DB.Column(DB.String(50), nullable=False)
    date_of_birth = DB.Column(DB.Date, nullable=False)
    main_category = DB.Column(DB.String(50), nullable=False)
    courses = DB.relationship("Course", back_populates="author", cascade="all, delete-orphan")

    def __init__(self, **kwargs):
        kwargs.setdefault("id", new_id())
        super().__init__(**kwargs)

    def __repr__(self):
        return f"<Author {self.id} {self.first_name} {self.last_name}>"


class Course(DB.Model):
    """
    description: Course, owned by an author
    """

    __tablename__ = "Courses"
    id = DB.Column(DB.String(36), primary_key=True, default=new_id)
    title = DB.Column(DB.String(100), nullable=False)
    description = DB.Column(DB.String(1500))
    author_id = DB.Column(DB.String(36), DB.ForeignKey("Authors.id"), nullable=False)
    author = DB.relationship("Author", back_populates="courses")

    def __init__(self, **kwargs):
        kwargs.setdefault("id", new_id())
        super().__init__(**kwargs)

    def __repr__(self):
        return f"<Course {self.id} {self.title}>"
