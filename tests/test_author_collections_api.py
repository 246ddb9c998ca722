from conftest import BASE_URL, BERRY_ID, NANCY_ID, UNKNOWN_ID

AUTHORS = [
    {"firstName": "Jack", "lastName": "Sparrow", "dateOfBirth": "1690-05-01", "mainCategory": "Rum"},
    {"firstName": "Anne", "lastName": "Bonny", "dateOfBirth": "1697-03-08", "mainCategory": "Ships"},
]


def test_create_author_collection(client):
    response = client.post("/api/authorcollections", json=AUTHORS)
    assert response.status_code == 201
    created = response.get_json()
    assert [author["name"] for author in created] == ["Jack Sparrow", "Anne Bonny"]
    ids = ",".join(author["id"] for author in created)
    location = response.headers["Location"]
    assert location == f"{BASE_URL}/authorcollections/({ids})"

    response = client.get(location.replace("http://localhost", ""))
    assert response.status_code == 200
    assert response.get_json() == created


def test_create_author_collection_errors(client):
    response = client.post("/api/authorcollections", json=[AUTHORS[0], {"firstName": "Anne"}])
    assert response.status_code == 422
    assert "[1].lastName" in response.get_json()["errors"][0]["fields"]
    assert client.post("/api/authorcollections", json=AUTHORS[0]).status_code == 400
    # nothing was created
    assert client.get("/api/authors", query_string={"searchQuery": "Sparrow"}).get_json()["value"] == []


def test_get_author_collection(client):
    response = client.get(f"/api/authorcollections/({NANCY_ID},{BERRY_ID})")
    assert response.status_code == 200
    assert [author["id"] for author in response.get_json()] == [NANCY_ID, BERRY_ID]


def test_get_author_collection_errors(client):
    assert client.get(f"/api/authorcollections/({NANCY_ID},{UNKNOWN_ID})").status_code == 404
    assert client.get(f"/api/authorcollections/({NANCY_ID},zzz)").status_code == 400
