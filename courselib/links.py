"""
Hypermedia links for the author resources

Link construction is a pure function of its inputs: the builder receives the
base url and the route templates, nothing is read from the request.
Query parameters are serialized in a fixed order and empty values are left out,
so identical inputs always result in identical hrefs.
"""
from typing import Dict, List, NamedTuple, Optional
from urllib.parse import quote, urlencode

GET = "GET"
POST = "POST"
DELETE = "DELETE"

# route templates, relative to the api base url
AUTHOR_ROUTES = {
    "get_authors": "/authors",
    "get_author": "/authors/{author_id}",
    "delete_author": "/authors/{author_id}",
    "create_course_for_author": "/authors/{author_id}/courses",
    "get_courses_for_author": "/authors/{author_id}/courses",
    "get_course_for_author": "/authors/{author_id}/courses/{course_id}",
    "get_author_collection": "/authorcollections/({ids})",
}

# order in which the collection query parameters are serialized
COLLECTION_PARAMS = ("fields", "orderBy", "pageNumber", "pageSize", "mainCategory", "searchQuery")


class Link(NamedTuple):
    href: str
    rel: str
    method: str

    def to_dict(self) -> dict:
        return {"href": self.href, "rel": self.rel, "method": self.method}


def _query_string(params: Dict[str, Optional[object]], order=None) -> str:
    keys = order if order is not None else sorted(params)
    pairs = [(key, params[key]) for key in keys if params.get(key) not in (None, "")]
    if not pairs:
        return ""
    return "?" + urlencode(pairs)


class LinkBuilder:
    """
    :param base_url: absolute api url, e.g. "http://localhost:5000/api"
    :param routes: route name -> path template lookup table
    """

    def __init__(self, base_url: str, routes: Dict[str, str] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.routes = AUTHOR_ROUTES if routes is None else routes

    def url_for(self, route: str, query: Dict[str, Optional[object]] = None, order=None, **path_args) -> str:
        """
        :param route: route name
        :param query: query string parameters
        :param order: query parameter serialization order (sorted by default)
        :param path_args: route template arguments
        """
        path = self.routes[route].format(**{k: quote(str(v), safe=",") for k, v in path_args.items()})
        return self.base_url + path + _query_string(query or {}, order)

    def links_for_item(self, id, fields: Optional[str] = None) -> List[Link]:
        """
        :param id: author id
        :param fields: fields csv, passed on in the self link
        :return: self, delete, create-child and list-children links
        """
        return [
            Link(self.url_for("get_author", {"fields": fields}, author_id=id), "self", GET),
            Link(self.url_for("delete_author", author_id=id), "delete_author", DELETE),
            Link(self.url_for("create_course_for_author", author_id=id), "create_course_for_author", POST),
            Link(self.url_for("get_courses_for_author", author_id=id), "courses", GET),
        ]

    def collection_url(self, filter_params: Dict[str, Optional[str]], page_number: int, page_size: int, order_by: Optional[str], fields: Optional[str]) -> str:
        query = dict(filter_params or {})
        query.update(fields=fields, orderBy=order_by, pageNumber=page_number, pageSize=page_size)
        order = list(COLLECTION_PARAMS) + sorted(k for k in query if k not in COLLECTION_PARAMS)
        return self.url_for("get_authors", query, order=order)

    def links_for_collection(
        self,
        filter_params: Dict[str, Optional[str]],
        page_number: int,
        page_size: int,
        order_by: Optional[str],
        fields: Optional[str],
        has_next: bool,
        has_previous: bool,
    ) -> List[Link]:
        """
        :param filter_params: filter query parameters, e.g. {"mainCategory": "Rum"}
        :return: self link, nextPage link if has_next, previousPage link if has_previous
        """
        links = [Link(self.collection_url(filter_params, page_number, page_size, order_by, fields), "self", GET)]
        if has_next:
            links.append(Link(self.collection_url(filter_params, page_number + 1, page_size, order_by, fields), "nextPage", GET))
        if has_previous:
            links.append(Link(self.collection_url(filter_params, page_number - 1, page_size, order_by, fields), "previousPage", GET))
        return links
