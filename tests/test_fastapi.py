from datetime import datetime, timezone

import fastapi
import pytest
from fastapi.testclient import TestClient
from time_machine import travel

from freshen import InvalidDirective
from freshen.fastapi import cache_control, expires, fresh

NOW = datetime(2015, 8, 25, 12, 0, 0, tzinfo=timezone.utc)
LAST_MODIFIED = datetime(2015, 8, 24, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def client() -> TestClient:
    app = fastapi.FastAPI()

    @app.get("/public")
    def public_data(_: None = cache_control("public", {"max_age": 300, "s_maxage": 3600})):
        return {"data": "public"}

    @app.get("/news")
    def news(_: None = expires(600, "public")):
        return {"news": "articles"}

    @app.get("/articles/{slug}")
    def show(
        slug: str,
        request: fastapi.Request,
        response: fastapi.Response,
        _: None = cache_control("private", {"max_age": 60}),
    ):
        not_modified = fresh(request, response, etag=f"{slug}-1", last_modified=LAST_MODIFIED)
        if not_modified is not None:
            return not_modified
        return {"slug": slug}

    return TestClient(app)


def test_cache_control_dependency(client: TestClient):
    response = client.get("/public")

    assert response.status_code == 200
    assert response.headers["Cache-Control"] == "public, max-age=300, s-maxage=3600"


@travel(NOW, tick=False)
def test_expires_dependency(client: TestClient):
    response = client.get("/news")

    assert response.status_code == 200
    assert response.headers["Expires"] == "Tue, 25 Aug 2015 12:10:00 GMT"
    assert response.headers["Cache-Control"] == "public, max-age=600"


def test_full_response_carries_validators(client: TestClient):
    response = client.get("/articles/hello")

    assert response.status_code == 200
    assert response.json() == {"slug": "hello"}
    assert response.headers["ETag"] == '"hello-1"'
    assert response.headers["Last-Modified"] == "Mon, 24 Aug 2015 12:00:00 GMT"
    assert response.headers["Cache-Control"] == "private, max-age=60"


def test_matching_etag_returns_304(client: TestClient):
    response = client.get("/articles/hello", headers={"If-None-Match": '"hello-1"'})

    assert response.status_code == 304
    assert response.content == b""
    assert response.headers["ETag"] == '"hello-1"'
    assert response.headers["Cache-Control"] == "private, max-age=60"


def test_not_modified_since_returns_304(client: TestClient):
    response = client.get("/articles/hello", headers={"If-Modified-Since": "Tue, 25 Aug 2015 12:00:00 GMT"})

    assert response.status_code == 304


def test_both_conditions_must_hold(client: TestClient):
    response = client.get(
        "/articles/hello",
        headers={"If-None-Match": '"hello-1"', "If-Modified-Since": "Sun, 23 Aug 2015 12:00:00 GMT"},
    )

    assert response.status_code == 200


def test_invalid_directive_fails_at_declaration():
    with pytest.raises(InvalidDirective, match="Unrecognized Cache-Control directive 'immutable'."):
        cache_control("public", "immutable")
