"""HTTP routes — end-to-end behavior through FastAPI with fake backends.

Tests:
    - /users scenarios: found row (exact JSON), absent row (null, 200), bad id (400), DB down (500)
    - /storage scenarios: content wrapper, missing object (500), empty bucket (400, no backend call)
    - Identical requests give byte-identical responses
    - Unhandled exceptions still come back as a Failure envelope
    - /health and /
"""

import httpx

from core.errors import ValidationError
from main import app
from users.router import get_user_service
from users.service import UserLookupService


async def test_get_user_found(client):
    resp = await client.get("/users", params={"user_id": "10000"})

    assert resp.status_code == 200
    assert resp.content == (
        b'{"user_id":10000,"email_address":"marc@example.com",'
        b'"created_at":0,"deleted":1,"settings":""}'
    )


async def test_get_user_absent_is_null(client):
    resp = await client.get("/users", params={"user_id": "424242"})

    assert resp.status_code == 200
    assert resp.content == b"null"


async def test_get_user_bad_id_is_400(client, fake_pool):
    resp = await client.get("/users", params={"user_id": "ten"})

    assert resp.status_code == 400
    assert resp.json() == "user_id must be an integer."
    assert fake_pool.calls == []


async def test_get_user_missing_param_is_400(client):
    resp = await client.get("/users")
    assert resp.status_code == 400
    assert resp.json() == "user_id is required."


async def test_get_user_backend_down_is_500(client, pool_factory):
    failing = UserLookupService(pool_factory(error=ConnectionResetError("reset by peer")))
    app.dependency_overrides[get_user_service] = lambda: failing

    resp = await client.get("/users", params={"user_id": "10000"})

    assert resp.status_code == 500
    assert resp.json() == "user lookup failed: query failed"


async def test_get_object_content(client, blob_store):
    blob_store["objects"][("b1", "hello.txt")] = b"hello"

    resp = await client.get("/storage", params={"bucket": "b1", "object": "hello.txt"})

    assert resp.status_code == 200
    assert resp.json() == {"content": "hello"}


async def test_get_object_missing_is_500(client):
    resp = await client.get("/storage", params={"bucket": "b1", "object": "missing.txt"})

    assert resp.status_code == 500
    assert "not found" in resp.json()


async def test_get_object_empty_bucket_is_400_without_backend_call(client, blob_store):
    resp = await client.get("/storage", params={"bucket": "", "object": "x"})

    assert resp.status_code == 400
    assert resp.json() == "bucket is required."
    assert blob_store["requests"] == []


async def test_repeated_queries_are_byte_identical(client, blob_store):
    blob_store["objects"][("b1", "a")] = b"\xffdata"

    for params, path in (({"user_id": "10000"}, "/users"), ({"bucket": "b1", "object": "a"}, "/storage")):
        first = await client.get(path, params=params)
        second = await client.get(path, params=params)
        assert (first.status_code, first.content) == (second.status_code, second.content)


async def test_unhandled_error_renders_failure_envelope():
    class Exploding:
        async def fetch_user(self, user_id):
            raise RuntimeError("secret internals")

    app.dependency_overrides[get_user_service] = lambda: Exploding()
    try:
        async with httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://test",
        ) as c:
            resp = await c.get("/users", params={"user_id": "1"})
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert resp.json() == "internal error"


async def test_health_and_root(client):
    assert (await client.get("/health")).json() == {"status": "ok"}
    assert (await client.get("/")).status_code == 200


async def test_escaped_gateway_error_keeps_its_status(client):
    class Strict:
        async def fetch_user(self, user_id):
            raise ValidationError("user_id is reserved.", field="user_id")

    app.dependency_overrides[get_user_service] = lambda: Strict()

    resp = await client.get("/users", params={"user_id": "0"})

    assert resp.status_code == 400
    assert resp.json() == "user_id is reserved."
