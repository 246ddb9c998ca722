#  This file contains the flask-restful "Resource" objects of the course library:
#  - AuthorsResource, AuthorResource for the authors collection and instances
#  - CoursesResource, CourseResource for the courses of an author
#  - AuthorCollectionsResource, AuthorCollectionResource to create and fetch several authors at once
#
# The http methods are wrapped by api.http_method_decorator which commits the
# session and converts exceptions to json error responses
#
# pylint: disable=redefined-builtin,invalid-name,line-too-long
#
import json
from http import HTTPStatus
from typing import List
from flask import jsonify, make_response, request
from flask_restful import Resource as FRSResource
import courselib
from .config import get_config
from .data_shaping import has_properties, shape_data
from .errors import ConflictError, NotFoundError, ValidationError
from .links import Link, LinkBuilder
from .media_types import author_creation_media_types, check_content_type, negotiate_author_representation
from .models import Author, Course
from .paging import clamp_page_size, validate_page_args
from .payloads import (
    apply_course_patch,
    apply_course_update,
    parse_author_collection,
    parse_author_creation,
    parse_course_creation,
    parse_course_update,
    parse_id,
    parse_id_list,
)
from .property_mapping import property_mapping_service
from .repository import AuthorFilter, CourseLibraryRepository
from .shapes import AUTHOR, AUTHOR_FULL, COURSE


def links_to_dicts(links: List[Link]) -> List[dict]:
    return [link.to_dict() for link in links]


class Resource(FRSResource):
    """
    Superclass for the exposed endpoints

    `query_parameters` lists the query string arguments per http method,
    they're added to the swagger
    """

    query_parameters = {}

    def __init__(self, repository: CourseLibraryRepository = None) -> None:
        self.repository = repository if repository is not None else CourseLibraryRepository()

    @staticmethod
    def link_builder() -> LinkBuilder:
        """
        :return: LinkBuilder for the api root of the current request
        """
        return LinkBuilder(request.host_url.rstrip("/") + get_config("API_PREFIX"))

    @staticmethod
    def check_fields(shape, fields):
        if not has_properties(shape, fields):
            raise ValidationError(f"Invalid fields '{fields}' for {shape.name}")

    @staticmethod
    def check_order_by(shape, model, order_by):
        if not property_mapping_service.valid_mapping_exists_for(shape, model, order_by):
            raise ValidationError(f"Invalid orderBy '{order_by}' for {shape.name}")

    def get_existing_author_id(self, author_id):
        """
        :return: the canonical author id, NotFoundError if the author doesn't exist
        """
        author_id = parse_id(author_id, "authorId")
        if not self.repository.author_exists(author_id):
            raise NotFoundError(f"Author {author_id}")
        return author_id

    def course_created(self, author_id, course):
        """
        :return: 201 response with the shaped course and its Location
        """
        response = make_response(jsonify(shape_data(COURSE, course)), HTTPStatus.CREATED)
        response.headers["Location"] = self.link_builder().url_for("get_course_for_author", author_id=author_id, course_id=course.id)
        return response


class AuthorsResource(Resource):
    """
    description: The authors collection
    """

    query_parameters = {"get": ["mainCategory", "searchQuery", "fields", "pageNumber", "pageSize", "orderBy"]}

    def get(self):
        """
        Retrieve authors
        description : Retrieve a page of authors, filtered, sorted and shaped
        responses :
            200 :
                description : Request fulfilled, document follows
            400 :
                description : Invalid fields, orderBy or paging arguments
        ---
        The paging metadata is returned in the X-Pagination header, the body contains
        the shaped authors ("value") and the collection links
        """
        fields = request.fields
        order_by = request.order_by or get_config("DEFAULT_AUTHOR_ORDER")
        self.check_order_by(AUTHOR, Author, order_by)
        self.check_fields(AUTHOR, fields)

        page_number = request.page_number
        page_size = request.page_size
        page_size = clamp_page_size(page_size)
        validate_page_args(page_number, page_size)

        author_filter = AuthorFilter(request.main_category, request.search_query)
        sort = property_mapping_service.get_mapping(AUTHOR, Author, order_by)
        authors = self.repository.get_authors(author_filter, sort, page_number, page_size)

        builder = self.link_builder()
        filter_params = {"mainCategory": author_filter.main_category, "searchQuery": author_filter.search_query}
        links = builder.links_for_collection(filter_params, page_number, page_size, order_by, fields, authors.has_next, authors.has_previous)

        value = []
        for author, shaped_author in zip(authors, shape_data(AUTHOR, authors, fields, many=True)):
            shaped_author["links"] = links_to_dicts(builder.links_for_item(author.id))
            value.append(shaped_author)

        response = make_response(jsonify({"value": value, "links": links_to_dicts(links)}))
        response.headers["X-Pagination"] = json.dumps(authors.metadata())
        return response

    def post(self):
        """
        Create author
        description : Create an author, optionally with courses
        responses :
            201 :
                description : Created
            400 :
                description : Invalid payload
            415 :
                description : Unsupported Media Type
            422 :
                description : Validation failed
        ---
        Accepted content types: application/json and application/<vendor>.authorforcreation+json
        """
        check_content_type(request.mimetype, author_creation_media_types(get_config("MEDIA_TYPE_VENDOR")))
        author = parse_author_creation(request.get_json_payload())
        self.repository.add_author(author)
        self.repository.save()
        courselib.log.info(f"Created author {author.id}")

        builder = self.link_builder()
        result = shape_data(AUTHOR, author)
        result["links"] = links_to_dicts(builder.links_for_item(author.id))

        response = make_response(jsonify(result), HTTPStatus.CREATED)
        response.headers["Location"] = builder.url_for("get_author", author_id=author.id)
        return response

    def options(self):
        """
        Allowed methods on the authors collection
        """
        response = make_response("", HTTPStatus.OK)
        response.headers["Allow"] = "GET,OPTIONS,POST"
        return response


class AuthorResource(Resource):
    """
    description: Author instances
    """

    query_parameters = {"get": ["fields"]}

    def get(self, author_id):
        """
        Retrieve author
        description : Retrieve an author, the Accept header selects the representation
        responses :
            200 :
                description : Request fulfilled, document follows
            400 :
                description : Invalid fields or media type
            404 :
                description : Not Found
            406 :
                description : Not Acceptable
        ---
        application/<vendor>.author.full+json returns the full author,
        a media type ending in "hateoas" adds the links
        """
        representation = negotiate_author_representation(request.headers.get("Accept"), get_config("MEDIA_TYPE_VENDOR"))
        shape = AUTHOR_FULL if representation.full else AUTHOR
        fields = request.fields
        self.check_fields(shape, fields)

        author = self.repository.get_author(parse_id(author_id, "authorId"))
        if author is None:
            raise NotFoundError(f"Author {author_id}")

        result = shape_data(shape, author, fields)
        if representation.include_links:
            result["links"] = links_to_dicts(self.link_builder().links_for_item(author.id, fields))

        response = make_response(jsonify(result))
        response.headers["Content-Type"] = representation.media_type
        return response

    def delete(self, author_id):
        """
        Delete author
        description : Delete an author and its courses
        responses :
            204 :
                description : Request fulfilled, nothing follows
            404 :
                description : Not Found
        """
        author = self.repository.get_author(parse_id(author_id, "authorId"))
        if author is None:
            raise NotFoundError(f"Author {author_id}")
        self.repository.delete_author(author)
        self.repository.save()
        courselib.log.info(f"Deleted author {author.id}")
        return make_response("", HTTPStatus.NO_CONTENT)


class CoursesResource(Resource):
    """
    description: Courses of an author
    """

    query_parameters = {"get": ["fields", "orderBy"]}

    def get(self, author_id):
        """
        Retrieve courses
        description : Retrieve the courses of an author
        responses :
            200 :
                description : Request fulfilled, document follows
            400 :
                description : Invalid fields or orderBy
            404 :
                description : Not Found
        """
        author_id = self.get_existing_author_id(author_id)
        fields = request.fields
        order_by = request.order_by or get_config("DEFAULT_COURSE_ORDER")
        self.check_order_by(COURSE, Course, order_by)
        self.check_fields(COURSE, fields)

        sort = property_mapping_service.get_mapping(COURSE, Course, order_by)
        courses = self.repository.get_courses(author_id, sort)
        return make_response(jsonify(shape_data(COURSE, courses, fields, many=True)))

    def post(self, author_id):
        """
        Create course
        description : Create a course for an author
        responses :
            201 :
                description : Created
            404 :
                description : Not Found
            422 :
                description : Validation failed
        """
        author_id = self.get_existing_author_id(author_id)
        course = parse_course_creation(request.get_json_payload())
        self.repository.add_course(author_id, course)
        self.repository.save()
        return self.course_created(author_id, course)


class CourseResource(Resource):
    """
    description: Course instances
    """

    query_parameters = {"get": ["fields"]}

    def _get_course(self, author_id, course_id):
        author_id = self.get_existing_author_id(author_id)
        course_id = parse_id(course_id, "courseId")
        return author_id, course_id, self.repository.get_course(author_id, course_id)

    def get(self, author_id, course_id):
        """
        Retrieve course
        description : Retrieve a course of an author
        responses :
            200 :
                description : Request fulfilled, document follows
            404 :
                description : Not Found
        """
        fields = request.fields
        self.check_fields(COURSE, fields)
        _, course_id, course = self._get_course(author_id, course_id)
        if course is None:
            raise NotFoundError(f"Course {course_id}")
        return make_response(jsonify(shape_data(COURSE, course, fields)))

    def put(self, author_id, course_id):
        """
        Update course
        description : Replace a course, the course is created if it doesn't exist
        responses :
            201 :
                description : Created
            204 :
                description : Request fulfilled, nothing follows
            404 :
                description : Not Found
            409 :
                description : The course belongs to another author
            422 :
                description : Validation failed
        """
        author_id, course_id, course = self._get_course(author_id, course_id)
        attributes = parse_course_update(request.get_json_payload())
        return self._upsert(author_id, course_id, course, attributes)

    def patch(self, author_id, course_id):
        """
        Partially update course
        description : Apply a json patch document to a course, the course is created if it doesn't exist
        responses :
            201 :
                description : Created
            204 :
                description : Request fulfilled, nothing follows
            400 :
                description : Invalid patch document
            404 :
                description : Not Found
            409 :
                description : The course belongs to another author
            422 :
                description : Validation failed
        ---
        The payload is a json patch document, its operations are applied to the
        current course and the result must be a valid course update
        """
        author_id, course_id, course = self._get_course(author_id, course_id)
        attributes = apply_course_patch(course, request.get_json_payload())
        return self._upsert(author_id, course_id, course, attributes)

    def _upsert(self, author_id, course_id, course, attributes):
        if course is None:
            if self.repository.course_exists(course_id):
                raise ConflictError(f"Course {course_id} belongs to another author")
            course = Course(id=course_id, **attributes)
            self.repository.add_course(author_id, course)
            self.repository.save()
            return self.course_created(author_id, course)

        apply_course_update(course, attributes)
        self.repository.update_course(course)
        self.repository.save()
        return make_response("", HTTPStatus.NO_CONTENT)

    def delete(self, author_id, course_id):
        """
        Delete course
        description : Delete a course of an author
        responses :
            204 :
                description : Request fulfilled, nothing follows
            404 :
                description : Not Found
        """
        _, course_id, course = self._get_course(author_id, course_id)
        if course is None:
            raise NotFoundError(f"Course {course_id}")
        self.repository.delete_course(course)
        self.repository.save()
        return make_response("", HTTPStatus.NO_CONTENT)


class AuthorCollectionsResource(Resource):
    """
    description: Create several authors at once
    """

    def post(self):
        """
        Create authors
        description : Create a collection of authors
        responses :
            201 :
                description : Created
            400 :
                description : Invalid payload
            422 :
                description : Validation failed
        """
        authors = parse_author_collection(request.get_json_payload())
        for author in authors:
            self.repository.add_author(author)
        self.repository.save()

        ids = ",".join(author.id for author in authors)
        response = make_response(jsonify(shape_data(AUTHOR, authors, many=True)), HTTPStatus.CREATED)
        response.headers["Location"] = self.link_builder().url_for("get_author_collection", ids=ids)
        return response


class AuthorCollectionResource(Resource):
    """
    description: Fetch several authors at once
    """

    def get(self, ids):
        """
        Retrieve authors by id
        description : Retrieve the authors with the given (comma separated) ids
        responses :
            200 :
                description : Request fulfilled, document follows
            400 :
                description : Invalid ids
            404 :
                description : Not Found
        """
        author_ids = parse_id_list(ids)
        authors = self.repository.get_authors_by_ids(author_ids)
        if len(authors) != len(author_ids):
            raise NotFoundError(f"Authors {ids}")
        return make_response(jsonify(shape_data(AUTHOR, authors, many=True)))
