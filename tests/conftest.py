from __future__ import annotations

import json
from pathlib import Path

import pytest
import requests


class FakeResponse:
    def __init__(self, status_code: int, text: str = ""):
        self.status_code = status_code
        self.text = text


class FakeSession:
    """Stands in for requests.Session; replays `responses` in order, the last one forever."""

    def __init__(self, responses=None):
        self.responses = list(responses or [FakeResponse(200, "OK")])
        self.calls: list[dict] = []

    def post(self, url, data=None, headers=None, timeout=None):
        self.calls.append({"url": url, "body": json.loads(data), "headers": headers, "timeout": timeout})
        item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(item, Exception):
            raise item
        return item

    @property
    def payloads(self) -> list[dict]:
        return [c["body"] for c in self.calls]


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def record_sleep(sleeps):
    return sleeps.append


@pytest.fixture
def clean_env(monkeypatch):
    monkeypatch.delenv("INIT_CWD", raising=False)
    monkeypatch.delenv("INDEXNOW_KEY", raising=False)


@pytest.fixture
def project(tmp_path: Path, monkeypatch, clean_env) -> Path:
    """Fresh project dir (with a pyproject.toml marker) that is also the working directory."""
    (tmp_path / "pyproject.toml").write_text("[project]\nname = \"site\"\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def statuses(*codes: int) -> FakeSession:
    return FakeSession([FakeResponse(c, f"status {c}") for c in codes])


def network_error(msg: str = "boom") -> Exception:
    return requests.ConnectionError(msg)
