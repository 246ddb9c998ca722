__version__ = "1.0.0"
__description__ = "courselib : REST api for authors and their courses (Flask-Restful, SqlAlchemy, Swagger)"
