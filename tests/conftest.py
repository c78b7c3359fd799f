import threading

import pytest

from pulse_bridge.config import Settings


class FakeFacility:
    """
    Stand-in for the OS indexing facility. Calls back once per path with
    `resource_id`, either inline or from a worker thread.
    """

    def __init__(self, resource_id="content://media/123", threaded=False, fault=None):
        self.resource_id = resource_id
        self.threaded = threaded
        self.fault = fault
        self.calls = []
        self._lock = threading.Lock()

    def scan(self, paths, callback):
        with self._lock:
            self.calls.append(list(paths))
        if self.fault is not None:
            raise self.fault

        def _run():
            for p in paths:
                callback(p, self.resource_id)

        if self.threaded:
            threading.Thread(target=_run, daemon=True).start()
        else:
            _run()


class ProbeSpy:
    def __init__(self, result=True):
        self.result = result
        self.paths = []

    def __call__(self, path):
        self.paths.append(path)
        return self.result


@pytest.fixture
def facility():
    return FakeFacility()


@pytest.fixture
def media_file(tmp_path):
    p = tmp_path / "real.jpg"
    p.write_bytes(b"\xff\xd8\xff\xe0fakejpeg")
    return p


@pytest.fixture
def offline_settings(tmp_path):
    return Settings(
        PUSH_ENABLED=False,
        FIREBASE_SERVICE_ACCOUNT_PATH=str(tmp_path / "service-account-key.json"),
        _env_file=None,
    )
