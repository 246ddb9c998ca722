# flake8: noqa: F401
#
# The import order matters: courselib_init creates the DB and log objects used by the other modules
#
from .courselib_init import DB, log, CourseLibrary
from .request import CourseLibraryRequest
from .errors import (
    ApiError,
    ValidationError,
    GenericError,
    NotFoundError,
    UnprocessableEntityError,
    UnsupportedMediaTypeError,
    NotAcceptableError,
    ConflictError,
)
from .json_encoder import CourseLibraryJSONProvider
from .models import Author, Course
from .shapes import AUTHOR, AUTHOR_FULL, COURSE
from .data_shaping import shape_data, has_properties
from .property_mapping import PropertyMappingService, property_mapping_service
from .paging import PagedList
from .links import LinkBuilder
from .repository import CourseLibraryRepository
from .api import CourseLibraryApi
from .app import create_app, seed_database
from .__about__ import __version__, __description__

__all__ = (
    "__version__",
    "__description__",
    #
    "CourseLibraryApi",
    "CourseLibrary",
    "create_app",
    "seed_database",
    # db:
    "DB",
    "Author",
    "Course",
    "CourseLibraryRepository",
    # shaping, sorting, paging:
    "AUTHOR",
    "AUTHOR_FULL",
    "COURSE",
    "shape_data",
    "has_properties",
    "PropertyMappingService",
    "property_mapping_service",
    "PagedList",
    "LinkBuilder",
    # Errors:
    "ApiError",
    "ValidationError",
    "GenericError",
    "NotFoundError",
    "UnprocessableEntityError",
    "UnsupportedMediaTypeError",
    "NotAcceptableError",
    "ConflictError",
    # request
    "CourseLibraryRequest",
    "CourseLibraryJSONProvider",
)
