import datetime
import json
from courselib import DB, create_app
from courselib.models import Author, Course
from conftest import BASE_URL, BERRY_ID, ELI_ID, ARNOLD_ID, NANCY_ID, UNKNOWN_ID

AUTHOR_PAYLOAD = {"firstName": "Jack", "lastName": "Sparrow", "dateOfBirth": "1690-05-01", "mainCategory": "Rum"}


def pagination(response):
    return json.loads(response.headers["X-Pagination"])


def test_get_authors(client):
    response = client.get("/api/authors")
    assert response.status_code == 200
    body = response.get_json()
    names = [author["name"] for author in body["value"]]
    assert names == [
        "Arnold Oxford Spence",
        "Berry Griffin Beak Eldritch",
        "Eli Ivory Bones",
        "Nancy Swashbuckler Rye",
        "Rutherford Fearless Venn",
        "Seabury Toxic Reyes",
    ]
    assert list(body["value"][0]) == ["id", "name", "age", "mainCategory", "links"]
    assert body["links"] == [{"href": f"{BASE_URL}/authors?orderBy=name&pageNumber=1&pageSize=10", "rel": "self", "method": "GET"}]
    assert pagination(response) == {
        "totalCount": 6,
        "pageSize": 10,
        "currentPage": 1,
        "totalPages": 1,
        "hasNext": False,
        "hasPrevious": False,
    }


def test_get_authors_item_links(client):
    body = client.get("/api/authors?fields=id").get_json()
    author = body["value"][0]
    assert author["id"] == ARNOLD_ID
    assert [link["rel"] for link in author["links"]] == ["self", "delete_author", "create_course_for_author", "courses"]
    assert author["links"][0]["href"] == f"{BASE_URL}/authors/{ARNOLD_ID}"


def test_get_authors_fields(client):
    body = client.get("/api/authors", query_string={"fields": "mainCategory, ID"}).get_json()
    assert list(body["value"][0]) == ["mainCategory", "id", "links"]
    assert body["links"][0]["href"] == f"{BASE_URL}/authors?fields=mainCategory%2C+ID&orderBy=name&pageNumber=1&pageSize=10"


def test_get_authors_order_by_age(client):
    body = client.get("/api/authors?orderBy=age&fields=id").get_json()
    assert [author["id"] for author in body["value"]][:3] == [
        "2aadd2df-7caf-45ab-9355-7f6332985a87",
        ARNOLD_ID,
        ELI_ID,
    ]
    assert body["value"][-1]["id"] == BERRY_ID


def test_get_authors_filter_and_search(client):
    body = client.get("/api/authors", query_string={"mainCategory": " Singing ", "fields": "id"}).get_json()
    assert [author["id"] for author in body["value"]] == [ARNOLD_ID, ELI_ID]
    body = client.get("/api/authors?searchQuery=rum&fields=id").get_json()
    assert [author["id"] for author in body["value"]] == [NANCY_ID]
    response = client.get("/api/authors?mainCategory=Singing&searchQuery=eli")
    assert [author["name"] for author in response.get_json()["value"]] == ["Eli Ivory Bones"]
    assert pagination(response)["totalCount"] == 1


def test_get_authors_paging(client, many_authors):
    response = client.get("/api/authors?pageNumber=3&pageSize=10")
    assert response.status_code == 200
    body = response.get_json()
    assert len(body["value"]) == 5
    meta = pagination(response)
    assert meta["totalCount"] == many_authors
    assert meta["totalPages"] == 3
    assert not meta["hasNext"]
    assert meta["hasPrevious"]
    assert [link["rel"] for link in body["links"]] == ["self", "previousPage"]
    assert body["links"][1]["href"] == f"{BASE_URL}/authors?orderBy=name&pageNumber=2&pageSize=10"


def test_get_authors_first_page_links(client, many_authors):
    body = client.get("/api/authors?pageSize=10&mainCategory=Extras").get_json()
    assert len(body["value"]) == 10
    assert [link["rel"] for link in body["links"]] == ["self", "nextPage"]
    assert body["links"][1]["href"] == f"{BASE_URL}/authors?orderBy=name&pageNumber=2&pageSize=10&mainCategory=Extras"


def test_get_authors_page_size_is_clamped(client, many_authors):
    response = client.get("/api/authors?pageSize=100")
    assert len(response.get_json()["value"]) == 20
    assert pagination(response)["pageSize"] == 20


def test_get_authors_page_beyond_last(client):
    response = client.get("/api/authors?pageNumber=5")
    assert response.status_code == 200
    assert response.get_json()["value"] == []
    assert pagination(response)["currentPage"] == 5


def test_get_authors_invalid_arguments(client):
    invalid = [{"orderBy": "zzz"}, {"orderBy": "name sideways"}, {"fields": "zzz"}, {"pageNumber": "0"}, {"pageSize": "-1"}, {"pageSize": "abc"}]
    for query in invalid:
        response = client.get("/api/authors", query_string=query)
        assert response.status_code == 400, query
        assert response.get_json()["errors"][0]["code"] == "400"


def test_get_authors_page_number_out_of_range(client):
    response = client.get("/api/authors?pageNumber=99999999999999999999")
    assert response.status_code == 400
    assert response.get_json()["errors"][0]["code"] == "400"


def test_get_authors_search_wildcards_are_literal(client, db_session):
    assert client.get("/api/authors?searchQuery=%25").get_json()["value"] == []
    assert client.get("/api/authors", query_string={"searchQuery": "_"}).get_json()["value"] == []
    db_session.add(Author(first_name="Percy", last_name="100%_Rum", date_of_birth=datetime.date(1700, 1, 1), main_category="Rum"))
    db_session.commit()
    body = client.get("/api/authors", query_string={"searchQuery": "0%_r", "fields": "name"}).get_json()
    assert body["value"] == [{"name": "Percy 100%_Rum"}]


def test_head_authors(client):
    response = client.head("/api/authors")
    assert response.status_code == 200
    assert response.data == b""
    assert "X-Pagination" in response.headers


def test_options_authors(client):
    response = client.options("/api/authors")
    assert response.status_code == 200
    assert response.headers["Allow"] == "GET,OPTIONS,POST"


def test_cors_domain(client):
    assert "Access-Control-Allow-Origin" not in client.get("/api/authors").headers
    cors_app = create_app({"TESTING": True, "SQLALCHEMY_DATABASE_URI": "sqlite://", "CORS_DOMAIN": "*"}, seed=True)
    response = cors_app.test_client().get("/api/authors")
    assert response.status_code == 200
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert "GET" in response.headers["Access-Control-Allow-Methods"]
    assert "X-Pagination" in response.headers
    with cors_app.app_context():
        DB.session.remove()
        DB.drop_all()


def test_create_author(client, db_session):
    payload = dict(AUTHOR_PAYLOAD, courses=[{"title": "Escaping", "description": "From anywhere"}])
    response = client.post("/api/authors", json=payload)
    assert response.status_code == 201
    body = response.get_json()
    assert body["name"] == "Jack Sparrow"
    assert body["mainCategory"] == "Rum"
    assert len(body["links"]) == 4
    assert response.headers["Location"] == f"{BASE_URL}/authors/{body['id']}"
    author = db_session.get(Author, body["id"])
    assert [course.title for course in author.courses] == ["Escaping"]


def test_create_author_vendor_media_type(client):
    response = client.post(
        "/api/authors", data=json.dumps(AUTHOR_PAYLOAD), content_type="application/vnd.marvin.authorforcreation+json"
    )
    assert response.status_code == 201


def test_create_author_unsupported_media_type(client):
    response = client.post("/api/authors", data=json.dumps(AUTHOR_PAYLOAD), content_type="text/plain")
    assert response.status_code == 415


def test_create_author_invalid_payload(client):
    response = client.post("/api/authors", json={"firstName": "Jack"})
    assert response.status_code == 422
    error = response.get_json()["errors"][0]
    assert error["code"] == "422"
    assert set(error["fields"]) == {"lastName", "dateOfBirth", "mainCategory"}


def test_create_author_invalid_json(client):
    response = client.post("/api/authors", data="{not json", content_type="application/json")
    assert response.status_code == 400


def test_get_author(client):
    response = client.get(f"/api/authors/{BERRY_ID}")
    assert response.status_code == 200
    assert response.mimetype == "application/json"
    body = response.get_json()
    assert list(body) == ["id", "name", "age", "mainCategory"]
    assert body["name"] == "Berry Griffin Beak Eldritch"


def test_get_author_uppercase_id(client):
    response = client.get(f"/api/authors/{BERRY_ID.upper()}?fields=id")
    assert response.get_json() == {"id": BERRY_ID}


def test_get_author_full(client):
    response = client.get(f"/api/authors/{BERRY_ID}", headers={"Accept": "application/vnd.marvin.author.full+json"})
    assert response.status_code == 200
    assert response.mimetype == "application/vnd.marvin.author.full+json"
    assert response.get_json() == {
        "id": BERRY_ID,
        "firstName": "Berry",
        "lastName": "Griffin Beak Eldritch",
        "dateOfBirth": "1650-07-23",
        "mainCategory": "Ships",
    }


def test_get_author_hateoas(client):
    response = client.get(f"/api/authors/{BERRY_ID}?fields=id,name", headers={"Accept": "application/vnd.marvin.hateoas+json"})
    body = response.get_json()
    assert list(body) == ["id", "name", "links"]
    assert body["links"][0] == {"href": f"{BASE_URL}/authors/{BERRY_ID}?fields=id%2Cname", "rel": "self", "method": "GET"}


def test_get_author_full_fields(client):
    headers = {"Accept": "application/vnd.marvin.author.full+json"}
    response = client.get(f"/api/authors/{BERRY_ID}?fields=name", headers=headers)
    assert response.status_code == 400
    response = client.get(f"/api/authors/{BERRY_ID}?fields=firstName", headers=headers)
    assert response.get_json() == {"firstName": "Berry"}


def test_get_author_errors(client):
    assert client.get(f"/api/authors/{UNKNOWN_ID}").status_code == 404
    assert client.get("/api/authors/not-a-uuid").status_code == 400
    assert client.get(f"/api/authors/{BERRY_ID}?fields=zzz").status_code == 400
    assert client.get(f"/api/authors/{BERRY_ID}", headers={"Accept": "text/html"}).status_code == 406
    assert client.get(f"/api/authors/{BERRY_ID}", headers={"Accept": "nonsense"}).status_code == 400


def test_not_found_body(client):
    response = client.get(f"/api/authors/{UNKNOWN_ID}")
    assert response.get_json()["errors"][0]["code"] == "404"


def test_delete_author(client, db_session):
    response = client.delete(f"/api/authors/{BERRY_ID}")
    assert response.status_code == 204
    assert client.get(f"/api/authors/{BERRY_ID}").status_code == 404
    assert db_session.query(Course).filter(Course.author_id == BERRY_ID).count() == 0
    assert client.delete(f"/api/authors/{BERRY_ID}").status_code == 404


def test_swagger(client):
    response = client.get("/api/swagger.json")
    assert response.status_code == 200
    swagger = response.get_json()
    assert swagger["swagger"] == "2.0"
    assert swagger["basePath"] == "/api"
    assert set(swagger["paths"]["/authors/{author_id}/courses/{course_id}"]) == {"get", "put", "patch", "delete"}
    assert "get" in swagger["paths"]["/authorcollections/({ids})"]
    parameters = swagger["paths"]["/authors"]["get"]["parameters"]
    assert [parameter["name"] for parameter in parameters] == ["mainCategory", "searchQuery", "fields", "pageNumber", "pageSize", "orderBy"]
    assert swagger["paths"]["/authors"]["get"]["summary"] == "Retrieve authors"
    assert {tag["name"] for tag in swagger["tags"]} == {"Authors", "Courses", "AuthorCollections"}
    assert "/swagger.json" not in swagger["paths"]


def test_swagger_ui(client):
    assert client.get("/api/docs/").status_code == 200
