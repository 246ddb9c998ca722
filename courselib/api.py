# flask_restful_swagger_2 API subclass
import json
import logging
from functools import wraps
from typing import Callable
import werkzeug
from flask.app import Flask
from flask_restful import abort
from flask_restful.utils import cors
from flask_restful_swagger_2 import Api as FRSApiBase, extract_swagger_path, validate_path_item_object
from flask_restful_swagger_2 import ValidationError as FRSValidationError
import courselib
from .config import get_config
from .errors import ApiError, GenericError
from .json_encoder import CourseLibraryJSONProvider
from .resources import (
    Resource,
    AuthorsResource,
    AuthorResource,
    CoursesResource,
    CourseResource,
    AuthorCollectionsResource,
    AuthorCollectionResource,
)
from .swagger_doc import swagger_path_item

HTTP_METHODS = ["get", "post", "put", "patch", "delete", "options"]


class CourseLibraryApi(FRSApiBase):
    """
    Subclass of the flask_restful_swagger_2 API class where we add the expose_resources method
    this method creates the API endpoints for the authors and courses and adds
    them to the swagger, which is served on {prefix}/swagger.json
    """

    def __init__(
        self,
        app: Flask,
        prefix: str = None,
        title: str = "CourseLibrary API",
        version: str = "1.0",
        swaggerui_blueprint: bool = True,
        description: str = "Authors and their courses",
        **kwargs,
    ) -> None:
        app_db = kwargs.pop("app_db", None)
        if prefix is None:
            prefix = app.config.get("API_PREFIX", courselib.CourseLibrary.API_PREFIX)
        app.config["API_PREFIX"] = prefix
        app.config.setdefault("ERROR_404_HELP", False)
        courselib.CourseLibrary(app, app_db=app_db, swaggerui_blueprint=swaggerui_blueprint, **kwargs)
        app.json = CourseLibraryJSONProvider(app)
        super().__init__(
            app,
            api_spec_url="/swagger",
            description=description,
            prefix=prefix,
            base_path=prefix,
        )
        self._swagger_object["info"].update(title=title, version=version)
        self._swagger_object["produces"] = ["application/json"]
        self._swagger_object["consumes"] = ["application/json"]

    def expose_resources(self) -> None:
        """
        Create the api endpoints
        """
        self.add_resource(AuthorsResource, "/authors", endpoint="get_authors", tag="Authors")
        self.add_resource(AuthorResource, "/authors/<string:author_id>", endpoint="get_author", tag="Authors")
        self.add_resource(CoursesResource, "/authors/<string:author_id>/courses", endpoint="get_courses_for_author", tag="Courses")
        self.add_resource(
            CourseResource, "/authors/<string:author_id>/courses/<string:course_id>", endpoint="get_course_for_author", tag="Courses"
        )
        self.add_resource(AuthorCollectionsResource, "/authorcollections", endpoint="create_author_collection", tag="AuthorCollections")
        self.add_resource(
            AuthorCollectionResource, "/authorcollections/(<string:ids>)", endpoint="get_author_collection", tag="AuthorCollections"
        )

    def add_resource(self, resource, *urls, **kwargs):
        """
        Decorate the resource http methods and add the resource operations to the swagger.
        The swagger path items are built from the method docstrings (cfr. swagger_doc.swagger_path_item)
        :param resource: Resource subclass
        :param urls: flask rule(s)
        :param tag: swagger tag
        """
        tag = kwargs.pop("tag", resource.__name__)
        resource = api_decorator(resource)
        tag_names = [tag_object["name"] for tag_object in self._swagger_object["tags"]]
        for url in urls:
            if not url.startswith("/"):  # pragma: no cover
                raise GenericError(f"paths must start with a /: {url}")
            if not issubclass(resource, Resource):
                # e.g. the swagger.json endpoint
                continue
            path_item = swagger_path_item(resource, url, tag)
            try:
                validate_path_item_object(path_item)
            except FRSValidationError as exc:
                courselib.log.critical(f"Validation failed for {path_item}")
                raise GenericError(f"Invalid swagger for {url}: {exc}")
            self._swagger_object["paths"][extract_swagger_path(url)] = path_item
            if tag not in tag_names:
                tag_names.append(tag)
                self._swagger_object["tags"].append({"name": tag})
            # Check whether we manage to convert to json
            try:
                json.dumps(self._swagger_object)
            except (TypeError, ValueError):  # pragma: no cover
                courselib.log.critical("Json encoding failed")

        courselib.log.info(f"Exposing {resource.__name__} on {urls}")
        # pylint: disable=bad-super-call
        super(FRSApiBase, self).add_resource(resource, *urls, **kwargs)


def api_decorator(cls):
    """Decorator for the API views:
        - add cors
        - add generic exception handling

    The methods are decorated on a subclass so the resource classes can be
    exposed by several apps, each with its own configuration

    :param cls: The class that will be decorated (e.g. AuthorsResource)
    :return: decorated subclass
    """
    cls = type(cls.__name__, (cls,), {"__doc__": cls.__doc__})
    cors_domain = get_config("CORS_DOMAIN")
    for method_name in HTTP_METHODS:
        method = getattr(cls, method_name, None)
        if not method:
            continue

        decorated_method = method
        if cors_domain is not None:
            decorated_method = cors.crossdomain(origin=cors_domain)(decorated_method)
        decorated_method = http_method_decorator(decorated_method)
        setattr(cls, method_name, decorated_method)

    return cls


def http_method_decorator(fun: Callable) -> Callable:
    """Decorator for the supported HTTP methods (get, post, put, patch, delete)
    - commit the database
    - convert all exceptions to a JSON serializable error

    This method will be called for all requests
    :param fun:
    :return: wrapped fun
    """

    @wraps(fun)
    def method_wrapper(*args, **kwargs):
        """Wrap the method and perform error handling
        :param *args:
        :param **kwargs:
        :return: result of the wrapped method
        """
        api_exception = None
        status_code = 500
        message = ""
        try:
            result = fun(*args, **kwargs)
            courselib.DB.session.commit()
            return result

        except ApiError as exc:
            # also catches courselib.errors.NotFoundError
            api_exception = exc

        except werkzeug.exceptions.HTTPException as exc:
            status_code = exc.code
            message = exc.description
            courselib.log.error(message)

        except Exception as exc:
            courselib.log.exception(exc)
            if courselib.log.getEffectiveLevel() > logging.DEBUG:
                message = "Logging Disabled"
            else:
                message = str(exc)

        courselib.DB.session.rollback()
        if api_exception is not None:
            status_code = api_exception.status_code
            errors = api_exception.to_dict()
        else:
            errors = dict(title=message, detail=message, code=str(status_code))
        abort(status_code, errors=[errors])

    return method_wrapper
