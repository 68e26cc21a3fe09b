import base64
import threading
import time

import pytest

from identity_hash import verify
from web_app.app import app
from web_app.blueprints import api

ASP_IDENTITY_PASSWORD_V3 = (
    "AQAAAAEAACcQAAAAEHheUovUgwiWJ7YO0aLoq2/TvJYEdPiBlNJplaMUaQKQPSu7SHMgf0zsEnhCVijJ0w=="
)


@pytest.fixture
def client():
    app.config.update(TESTING=True)
    with app.test_client() as client:
        yield client


@pytest.mark.parametrize("version,marker", [("v2", 0x00), ("v3", 0x01)])
def test_hash_endpoint(client, version, marker):
    response = client.post("/api/hash", json={"password": "pw", "format": version})

    assert response.status_code == 200
    body = response.get_json()
    assert body["format"] == version
    assert body["encoding"] == "base64"
    assert base64.b64decode(body["hash"])[0] == marker
    assert verify("pw", body["hash"])


def test_hash_endpoint_hex(client):
    response = client.post("/api/hash", json={"password": "pw", "encoding": "hex"})

    body = response.get_json()
    assert body["encoding"] == "hex"
    assert body["hash"].startswith("01")
    assert verify("pw", body["hash"], "hex")


def test_hash_endpoint_rejects_bad_input(client):
    assert client.post("/api/hash", data="nope").status_code == 400
    assert client.post("/api/hash", json={}).status_code == 400
    assert client.post("/api/hash", json={"password": "pw", "format": "v4"}).status_code == 400
    assert client.post("/api/hash", json={"password": "pw", "encoding": "rot13"}).status_code == 400


def test_verify_endpoint(client):
    ok = client.post(
        "/api/verify",
        json={"password": "!passwordSecure123ASPV3", "hash": ASP_IDENTITY_PASSWORD_V3},
    )
    wrong = client.post(
        "/api/verify",
        json={"password": "!passwordSecure123ASPV4", "hash": ASP_IDENTITY_PASSWORD_V3},
    )

    assert ok.status_code == 200
    assert ok.get_json() == {"verified": True}
    assert wrong.get_json() == {"verified": False}


def test_verify_endpoint_reports_unreadable_hash(client):
    blob = base64.b64encode(b"\x02" + bytes(30)).decode()
    response = client.post("/api/verify", json={"password": "pw", "hash": blob})

    assert response.status_code == 400
    assert "marker" in response.get_json()["error"]


def test_verify_endpoint_requires_fields(client):
    assert client.post("/api/verify", json={"password": "pw"}).status_code == 400


def test_inspect_endpoint(client):
    response = client.post("/api/inspect", json={"hash": ASP_IDENTITY_PASSWORD_V3})

    assert response.status_code == 200
    assert response.get_json() == {
        "format": "v3",
        "prf": "HMAC_SHA256",
        "iterations": 10000,
        "salt_length": 16,
        "key_length": 32,
        "prf_id": 1,
    }


def test_inspect_endpoint_truncated(client):
    response = client.post("/api/inspect", json={"hash": "AQAA"})
    assert response.status_code == 400


def test_unencodable_password_is_a_bad_request(client):
    # Raw JSON so the lone surrogate arrives as an escape sequence.
    body = '{"password": "\\ud800", "hash": "%s"}' % ASP_IDENTITY_PASSWORD_V3
    verify_response = client.post("/api/verify", data=body, content_type="application/json")
    hash_response = client.post(
        "/api/hash", data='{"password": "\\ud800"}', content_type="application/json"
    )

    assert verify_response.status_code == 400
    assert "UTF-8" in verify_response.get_json()["error"]
    assert hash_response.status_code == 400


def test_pool_is_created_once_under_concurrent_requests(monkeypatch):
    created = []

    class SlowPool:
        def __init__(self):
            time.sleep(0.05)
            created.append(self)

    monkeypatch.setattr(api, "_pool", None)
    monkeypatch.setattr(api, "HashWorkerPool", SlowPool)

    results = []
    threads = [threading.Thread(target=lambda: results.append(api._get_pool())) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(created) == 1
    assert all(pool is created[0] for pool in results)
