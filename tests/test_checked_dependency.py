import asyncio

from starlette.requests import Request

from reqcheck.api.deps import build_check_request
from tests.helpers import make_schema


def test_get_item_coerces_params_and_queries(items_client):
    """Path params and queries come back typed; GET skips the payload"""
    r = items_client.get("/items/12?Verbose=true&limit=5")
    assert r.status_code == 200
    assert r.json() == {
        "params": {"item_id": 12},
        "queries": {"verbose": True, "limit": 5},
        "payload": {},
    }


def test_get_item_nullable_queries_absent(items_client):
    r = items_client.get("/items/3")
    assert r.status_code == 200
    assert r.json()["queries"] == {"verbose": None, "limit": None}


def test_get_item_bad_param(items_client):
    r = items_client.get("/items/abc")
    assert r.status_code == 400
    assert r.json()["detail"] == {
        "message": "cannot convert abc to int",
        "code": "type",
        "field": "item_id",
    }


def test_put_item_payload(items_client):
    r = items_client.put(
        "/items/3",
        json={"name": "Widget", "price": 9.999, "tags": {"color": "red"}},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["payload"]["name"] == "Widget"
    assert body["payload"]["price"] == 10.0
    assert body["payload"]["tags"] == '{"color":"red"}'


def test_put_item_missing_required_payload_key(items_client):
    r = items_client.put("/items/3", json={"price": 1})
    assert r.status_code == 400
    detail = r.json()["detail"]
    assert detail["code"] == "required"
    assert detail["field"] == "name"


def test_put_item_wrong_content_type(items_client):
    r = items_client.put("/items/3", content=b"name=Widget", headers={"Content-Type": "text/plain"})
    assert r.status_code == 400
    assert r.json()["detail"]["code"] == "unsupported_content_type"


def test_put_item_malformed_json(items_client):
    r = items_client.put("/items/3", content=b"{nope", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json()["detail"]["code"] == "payload_decode"


def test_patch_is_mutating_when_configured(items_client):
    r = items_client.patch("/items/3", json={"name": "Widget"})
    assert r.status_code == 400
    assert r.json()["detail"]["field"] == "price"


def test_content_type_header_name_case_does_not_matter(items_client):
    r = items_client.put(
        "/items/3",
        content=b'{"name": "Widget", "price": 2}',
        headers={"CONTENT-TYPE": "Application/JSON"},
    )
    assert r.status_code == 200
    assert r.json()["payload"]["price"] == 2.0


def test_repeated_headers_are_folded():
    scope = {
        "type": "http",
        "method": "GET",
        "scheme": "http",
        "server": ("testserver", 80),
        "path": "/items",
        "root_path": "",
        "query_string": b"a=1",
        "headers": [(b"x-tag", b"red"), (b"x-tag", b"blue"), (b"content-type", b"text/plain")],
    }
    req = asyncio.run(build_check_request(Request(scope), make_schema()))

    assert req.header("x-tag") == "red, blue"
    assert req.header("Content-Type") == "text/plain"
    assert req.url == "http://testserver/items?a=1"
    assert req.read_body is None
