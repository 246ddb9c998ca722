"""
Content negotiation for the author resources

The vendor specific media types select the author representation:
    application/<vendor>.author.full+json               full author
    application/<vendor>.author.friendly+json           friendly author (default)
and a subtype ending in "hateoas" adds the hypermedia links, e.g.
    application/<vendor>.author.full.hateoas+json
    application/<vendor>.hateoas+json
"""
from typing import List, NamedTuple, Optional
from werkzeug.datastructures import MIMEAccept
from werkzeug.http import parse_accept_header
from .errors import NotAcceptableError, UnsupportedMediaTypeError, ValidationError

JSON = "application/json"
HATEOAS_SUFFIX = "hateoas"


class AuthorRepresentation(NamedTuple):
    media_type: str
    include_links: bool = False
    full: bool = False


def author_media_types(vendor: str) -> List[str]:
    """
    :return: the media types produced by GET /authors/{authorId}
    """
    return [
        JSON,
        f"application/{vendor}.hateoas+json",
        f"application/{vendor}.author.full+json",
        f"application/{vendor}.author.full.hateoas+json",
        f"application/{vendor}.author.friendly+json",
        f"application/{vendor}.author.friendly.hateoas+json",
    ]


def author_creation_media_types(vendor: str) -> List[str]:
    """
    :return: the content types accepted by POST /authors
    """
    return [JSON, f"application/{vendor}.authorforcreation+json"]


def subtype_without_suffix(media_type: str) -> str:
    """
    "application/vnd.marvin.author.full+json" => "vnd.marvin.author.full"
    """
    _, _, subtype = media_type.partition("/")
    return subtype.split("+", 1)[0]


def parse_author_media_type(media_type: str, vendor: str) -> AuthorRepresentation:
    """
    :param media_type: a supported author media type
    :param vendor: vendor prefix, e.g. "vnd.marvin"
    """
    subtype = subtype_without_suffix(media_type).lower()
    include_links = subtype.endswith(HATEOAS_SUFFIX)
    primary = subtype[: -len(HATEOAS_SUFFIX)].rstrip(".") if include_links else subtype
    return AuthorRepresentation(media_type, include_links, primary == f"{vendor}.author.full".lower())


def parse_accept(header_value: Optional[str]) -> MIMEAccept:
    """
    :param header_value: Accept header value
    :return: parsed header, malformed media ranges are rejected
    """
    accept = parse_accept_header(header_value or "", MIMEAccept)
    for value, _ in accept:
        type_, _, subtype = value.partition("/")
        if not type_ or not subtype:
            raise ValidationError(f"Invalid media type '{value}'")
    return accept


def negotiate_author_representation(header_value: Optional[str], vendor: str) -> AuthorRepresentation:
    """
    :param header_value: Accept header value, a missing header means application/json
    :param vendor: vendor prefix
    :return: the selected representation
    """
    accept = parse_accept(header_value)
    if not accept:
        return AuthorRepresentation(JSON)
    best = accept.best_match(author_media_types(vendor), default=None)
    if best is None:
        raise NotAcceptableError(header_value)
    return parse_author_media_type(best, vendor)


def check_content_type(mimetype: Optional[str], accepted: List[str]) -> None:
    """
    :param mimetype: request mimetype (without parameters)
    :param accepted: accepted media types
    """
    if (mimetype or "").lower() not in [media_type.lower() for media_type in accepted]:
        raise UnsupportedMediaTypeError(mimetype or "")
