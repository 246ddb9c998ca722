# Exception Handlers
#
# The application loglevel determines the level of detail shown to the user.
# If set to debug, too much sensitive info might be shown !
#
# The exceptions will be caught in http_method_decorator and formatted, for example:
# {
#     "errors": [
#         {
#             "title": "Validation Error: invalid orderBy 'zzz'",
#             "detail": "Validation Error: invalid orderBy 'zzz'",
#             "code": "400"
#         }
#     ]
# }
#
import traceback
from http import HTTPStatus
from flask import has_request_context, request
from werkzeug.exceptions import NotFound
from sqlalchemy.exc import DontWrapMixin
import courselib
from .config import is_debug

HIDDEN_LOG = "(debug logging disabled)"


class ApiError(Exception, DontWrapMixin):
    """
    Base class for the errors that are returned to the client
    """

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR.value
    message = ""

    def to_dict(self) -> dict:
        return dict(title=self.message, detail=self.message, code=str(self.status_code))


class NotFoundError(ApiError, NotFound):
    """
    This exception is raised when an item was not found
    """

    status_code = HTTPStatus.NOT_FOUND.value
    message = "NotFoundError "

    def __init__(self, message="", status_code=HTTPStatus.NOT_FOUND.value):
        """
        :param message: Message to be returned in the (json) body
        :param status_code: HTTP Status code
        """
        ApiError.__init__(self)
        self.status_code = status_code
        courselib.log.info("Not found: %s", message)
        if is_debug():
            self.message += message
        else:
            self.message += HIDDEN_LOG


class GenericError(ApiError):
    """
    This exception is raised when an error has been detected
    """

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR.value
    message = "Generic Error: "

    def __init__(self, message, status_code=HTTPStatus.INTERNAL_SERVER_ERROR.value):
        Exception.__init__(self)
        self.status_code = status_code
        courselib.log.error("Generic Error: %s", message)
        if is_debug():
            if has_request_context():
                courselib.log.info(f"Error in {request.url}")
            courselib.log.debug(traceback.format_exc(120))
            self.message += str(message)
        else:
            self.message += HIDDEN_LOG


class ValidationError(ApiError):
    """
    This exception is raised when invalid input has been detected (client side input)
    Always send back the message to the client in the response
    """

    status_code = HTTPStatus.BAD_REQUEST.value
    message = "Validation Error: "

    def __init__(self, message="", status_code=HTTPStatus.BAD_REQUEST.value):
        Exception.__init__(self)
        self.status_code = status_code
        courselib.log.warning("ValidationError: %s", message)
        self.message += message


class UnprocessableEntityError(ValidationError):
    """
    A syntactically valid payload failed the validation rules,
    `fields` maps the offending attribute names to their error messages
    """

    status_code = HTTPStatus.UNPROCESSABLE_ENTITY.value
    message = "Validation Error: "

    def __init__(self, fields: dict):
        self.fields = fields
        summary = "; ".join(f"{name}: {', '.join(msgs)}" for name, msgs in fields.items())
        super().__init__(summary, HTTPStatus.UNPROCESSABLE_ENTITY.value)

    def to_dict(self) -> dict:
        result = super().to_dict()
        result["fields"] = self.fields
        return result


class UnsupportedMediaTypeError(ValidationError):
    """
    The request body media type is not accepted by the endpoint
    """

    def __init__(self, media_type=""):
        super().__init__(f"Unsupported media type '{media_type}'", HTTPStatus.UNSUPPORTED_MEDIA_TYPE.value)


class NotAcceptableError(ValidationError):
    """
    None of the media types in the Accept header can be produced
    """

    def __init__(self, media_type=""):
        super().__init__(f"Not acceptable '{media_type}'", HTTPStatus.NOT_ACCEPTABLE.value)


class ConflictError(ValidationError):
    """
    The request conflicts with an existing resource, e.g. a course id used by another author
    """

    def __init__(self, message=""):
        super().__init__(message, HTTPStatus.CONFLICT.value)
