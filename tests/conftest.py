import json
import sys
from pathlib import Path

import pytest
import requests


def pytest_configure():
    # Ensure the repo root is on the import path for tests without requiring installation.
    repo_root = Path(__file__).resolve().parents[1]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


def _response(status: int = 200, *, json_body=None, text: str = "", url: str = "https://example.test/") -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp.reason = "OK" if status < 400 else "Error"
    resp.url = url
    resp.encoding = "utf-8"
    body = json.dumps(json_body) if json_body is not None else text
    resp._content = body.encode("utf-8")
    return resp


class FakeSession:
    """Stands in for requests.Session: replays canned responses, records calls."""

    def __init__(self, responses):
        self._responses = list(responses)
        self.calls = []
        self.closed = False

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def close(self):
        self.closed = True


@pytest.fixture
def response():
    return _response


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "LOG_LEVEL",
        "OVH_EXCLUDE_DATACENTER",
        "OVH_EXCLUDE_COUNTRY",
        "ONLINE_PRIVATE_TOKEN",
        "ONLINE_DATACENTERS",
        "SCALEWAY_SECRET_KEY",
        "SCALEWAY_BAREMETAL_ZONES",
        "SIMPLE_URL",
        "SIMPLE_GET_PARAM_NAME_PROVIDER",
        "SIMPLE_GET_PARAM_NAME_SERVERS",
        "IFTTT_WEBHOOK_EVENT",
        "IFTTT_WEBHOOK_KEY",
        "EMAIL_FROM",
        "EMAIL_TO",
        "EMAIL_SUBJECT_PREFIX",
        "EMAIL_SMTP_HOST",
        "EMAIL_SMTP_PORT",
        "EMAIL_USE_TLS",
        "EMAIL_USERNAME",
        "EMAIL_PASSWORD",
        "SENDMAIL_COMMAND",
    ):
        monkeypatch.delenv(name, raising=False)
