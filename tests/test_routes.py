import pytest
from fastapi.testclient import TestClient

from pulse_bridge import main
from pulse_bridge.config import Settings
from pulse_bridge.exceptions import CredentialError
from pulse_bridge.models.push import PushReceipt

from .conftest import FakeFacility


@pytest.fixture
def client(offline_settings):
    app = main.create_app(offline_settings, facility=FakeFacility(resource_id="content://media/123"))
    with TestClient(app) as c:
        yield c


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["ok"] is True


def test_scan_file_success(client, media_file):
    r = client.post("/channels/media_scanner/scanFile", json={"path": str(media_file)})
    assert r.status_code == 200
    assert r.json() == {"success": True}


def test_scan_file_without_path(client):
    r = client.post("/channels/media_scanner/scanFile", json={})
    assert r.json()["error"]["code"] == "INVALID_ARGUMENT"


def test_scan_file_missing_file(client, tmp_path):
    r = client.post("/channels/media_scanner/scanFile", json={"path": str(tmp_path / "nope.jpg")})
    assert r.json()["error"]["code"] == "FILE_NOT_FOUND"


def test_unknown_command(client):
    r = client.post("/channels/media_scanner/unknownCommand", json={})
    assert r.status_code == 200
    assert r.json()["error"]["code"] == "UNIMPLEMENTED"


def test_non_object_body_is_invalid_argument(client):
    r = client.post("/channels/media_scanner/scanFile", json=["/tmp/a.jpg"])
    assert r.json()["error"]["code"] == "INVALID_ARGUMENT"


def test_push_disabled_returns_503(client):
    r = client.post(
        "/push/send",
        json={"target": {"token": "device-1"}, "payload": {"title": "t", "body": "b"}},
    )
    assert r.status_code == 503


def test_push_send_uses_injected_client(offline_settings):
    class FakePush:
        closed = False

        def send(self, target, payload):
            return PushReceipt(ok=True, message_id=f"msg-{target.topic}")

        def close(self):
            self.closed = True

    push = FakePush()
    app = main.create_app(offline_settings, facility=FakeFacility(), push_client=push)
    with TestClient(app) as c:
        r = c.post(
            "/push/send",
            json={"target": {"topic": "news"}, "payload": {"title": "t", "body": "b"}},
        )
        assert r.status_code == 200
        assert r.json()["message_id"] == "msg-news"
    assert push.closed


def test_shutdown_detaches_channel(offline_settings):
    app = main.create_app(offline_settings, facility=FakeFacility())
    with TestClient(app):
        dispatcher = app.state.media_scanner
        assert dispatcher.attached
    assert not dispatcher.attached


def test_startup_fails_fast_without_credential(tmp_path):
    s = Settings(
        PUSH_ENABLED=True,
        FIREBASE_SERVICE_ACCOUNT_PATH=str(tmp_path / "missing.json"),
        _env_file=None,
    )
    app = main.create_app(s, facility=FakeFacility())
    with pytest.raises(CredentialError):
        with TestClient(app):
            pass


def test_run_exits_when_credential_missing(tmp_path, monkeypatch):
    monkeypatch.setattr(main.default_settings, "PUSH_ENABLED", True)
    monkeypatch.setattr(main.default_settings, "FIREBASE_SERVICE_ACCOUNT_PATH", str(tmp_path / "missing.json"))
    served = []
    monkeypatch.setattr(main.uvicorn, "run", lambda *a, **k: served.append(a))

    with pytest.raises(SystemExit) as exc:
        main.run()
    assert exc.value.code == 1
    assert served == []
