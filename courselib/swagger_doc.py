#
# Functions for api documentation: the swagger operations are generated from the
# resource method docstrings. The first docstring line is the summary, the yaml
# up to the "---" delimiter is added to the operation, e.g.
#
#    Retrieve authors
#    description : Retrieve a page of authors
#    responses :
#        200 :
#            description : Request fulfilled, document follows
#    ---
#    regular documentation
#
import inspect
import re
import yaml
from flask_restful_swagger_2 import parse_method_doc
import courselib
from .errors import GenericError

DOC_DELIMITER = "---"
HTTP_METHODS = ["get", "post", "put", "patch", "delete"]

# flask rule variables, e.g. <author_id> or <string:author_id>
RULE_VARIABLE = re.compile(r"<(?:[^<>:]+:)?([^<>]+)>")

# query string arguments: name -> (swagger type, description)
QUERY_PARAMETERS = {
    "fields": ("string", "Fields to return (csv)"),
    "orderBy": ("string", "Sort keys (csv), each optionally followed by asc or desc"),
    "pageNumber": ("integer", "Page number, starting at 1"),
    "pageSize": ("integer", "Page size"),
    "mainCategory": ("string", "Main category filter"),
    "searchQuery": ("string", "Search query"),
}


def parse_object_doc(obj) -> dict:
    """
    Parse the yaml description from the documented resources and methods,
    the first docstring line is skipped: it holds the summary
    """
    api_doc = {}
    obj_doc = inspect.getdoc(obj) or ""
    raw_doc = obj_doc.split(DOC_DELIMITER)[0].partition("\n")[2]

    try:
        yaml_doc = yaml.safe_load(raw_doc)
    except yaml.YAMLError as exc:
        courselib.log.error(f"Failed to parse documentation {raw_doc} ({exc})")
        yaml_doc = {"description": raw_doc}

    if isinstance(yaml_doc, dict):
        api_doc.update(yaml_doc)

    return api_doc


def swagger_parameters(resource, method: str, url: str) -> list:
    parameters = []
    for name in RULE_VARIABLE.findall(url):
        parameters.append({"name": name, "in": "path", "type": "string", "required": True})
    for name in getattr(resource, "query_parameters", {}).get(method, []):
        swagger_type, description = QUERY_PARAMETERS[name]
        parameters.append({"name": name, "in": "query", "type": swagger_type, "required": False, "description": description})
    if method in ("post", "put", "patch"):
        parameters.append({"name": "payload", "in": "body", "required": True, "schema": {"type": "object"}})
    return parameters


def swagger_path_item(resource, url: str, tag: str) -> dict:
    """
    :param resource: Resource subclass
    :param url: flask rule
    :param tag: swagger tag of the operations
    :return: swagger path item with an operation for every documented http method
    """
    path_item = {}
    for method in HTTP_METHODS:
        func = getattr(resource, method, None)
        if func is None:
            continue
        operation = parse_object_doc(func)
        if not operation:
            continue
        if "responses" not in operation:
            raise GenericError(f"No responses documented for {resource.__name__}.{method}")
        operation["responses"] = {str(code): response for code, response in operation["responses"].items()}
        # parse_method_doc may add to the operation it's given
        summary = parse_method_doc(func, {})
        if summary:
            operation["summary"] = summary.split("<br/>")[0]
        operation["tags"] = [tag]
        operation["operationId"] = f"{resource.__name__}_{method}"
        operation["parameters"] = swagger_parameters(resource, method, url)
        path_item[method] = operation

    return path_item
