import pytest

EXPECTED = {"customMessage": {"msg": "Hello"}}


def test_hello_returns_message(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "application/json" in response.headers["content-type"]
    assert response.json() == EXPECTED


def test_hello_body_is_stable_across_calls(client):
    bodies = {client.get("/").content for _ in range(5)}

    assert bodies == {b'{"customMessage":{"msg":"Hello"}}'}


def test_hello_ignores_body_and_query(client):
    response = client.request("GET", "/?name=someone", json={"msg": "ignored"})

    assert response.status_code == 200
    assert response.json() == EXPECTED


@pytest.mark.parametrize("path", ["/hello", "/api", "/index.html", "/hello/world"])
def test_unknown_path_is_not_found(client, path):
    response = client.get(path)

    assert response.status_code == 404
    assert response.json() == {"error": "error"}


@pytest.mark.parametrize("method", ["POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"])
def test_other_methods_on_root_are_not_found(client, method):
    response = client.request(method, "/")

    assert response.status_code == 404
    if method != "HEAD":
        assert response.json() == {"error": "error"}
