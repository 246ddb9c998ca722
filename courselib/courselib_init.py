import logging
import os
import sys
from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_swagger_ui import get_swaggerui_blueprint
from .request import CourseLibraryRequest
import courselib
import flask.app


class CourseLibrary:
    """This class configures the Flask application to serve the course library
    :param app: a Flask application.
    :param prefix: URL prefix of the api. Default is '/api'
    :param LOGLEVEL: loglevel configuration variable, values from logging module (0: trace, .. 50: critical)
    """

    # Configuration settings are stored as class variables,
    # app.config and keyword arguments to init_app override them
    API_PREFIX = "/api"
    DEFAULT_PAGE_NUMBER = 1
    DEFAULT_PAGE_SIZE = 10
    MAX_PAGE_SIZE = 20
    DEFAULT_AUTHOR_ORDER = "name"
    DEFAULT_COURSE_ORDER = "title"
    MEDIA_TYPE_VENDOR = "vnd.marvin"
    SWAGGER_URL = "/api/docs"
    LOGLEVEL = logging.WARNING

    def __init__(self, app: flask.app.Flask = None, *args, **kwargs) -> None:
        """
        Constructor
        """
        self.app = app
        if app is not None:
            self.init_app(app, *args, **kwargs)

    def init_app(self, app: flask.app.Flask, app_db: SQLAlchemy = None, swaggerui_blueprint: bool = True, **kwargs) -> None:
        """
        Application initialization: request class, database session handling and swagger ui
        """
        if not isinstance(app, Flask):  # pragma: no cover
            raise TypeError("'app' should be Flask.")

        if app_db is None:
            app_db = app.extensions.get("sqlalchemy", DB)
        self.db = app_db

        app.request_class = CourseLibraryRequest
        app.url_map.strict_slashes = False

        if app.config.get("DEBUG", False):
            log.setLevel(logging.DEBUG)

        for conf_name, conf_val in kwargs.items():
            app.config.setdefault(conf_name, conf_val)

        if swaggerui_blueprint:
            prefix = app.config.get("API_PREFIX", self.API_PREFIX)
            swagger_url = app.config.get("SWAGGER_URL", self.SWAGGER_URL)
            blueprint = get_swaggerui_blueprint(
                swagger_url, f"{prefix}/swagger.json", config={"docExpansion": "none", "defaultModelsExpandDepth": -1}
            )
            app.register_blueprint(blueprint, url_prefix=swagger_url)

        # pylint: disable=unused-argument,unused-variable
        @app.teardown_appcontext
        def shutdown_session(exception=None):
            """cfr. https://flask.palletsprojects.com/en/latest/patterns/sqlalchemy/"""
            self.db.session.remove()

    @staticmethod
    def init_logging(loglevel: int = logging.WARNING) -> logging.Logger:
        """
        Specify the log format used in the webserver logs
        The webserver will catch stderr so we redirect eveything to sys.stderr
        """
        log = logging.getLogger(courselib.__name__)
        if log.level == logging.NOTSET:
            handler = logging.StreamHandler(sys.stderr)
            formatter = logging.Formatter("[%(asctime)s] %(levelname)s: %(message)s")
            handler.setFormatter(formatter)
            log.setLevel(loglevel)
            log.addHandler(handler)
        return log


#
# DB and logging initialization
#
DB = SQLAlchemy()

try:
    DEBUG = os.getenv("DEBUG", logging.WARNING)
    LOGLEVEL = int(DEBUG)
except ValueError:  # pragma: no cover
    print(f'Invalid LogLevel in DEBUG Environment Variable! "{DEBUG}"')
    LOGLEVEL = logging.INFO

log = CourseLibrary.init_logging(LOGLEVEL)
