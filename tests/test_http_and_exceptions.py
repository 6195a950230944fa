from __future__ import annotations

import json
from typing import ClassVar

import httpx
import pytest

from baseline_check import http
from baseline_check.constants import BCD_DATA_URL
from baseline_check.exceptions import (
    ConfigurationError,
    ContentError,
    DatasetError,
    HttpStatusError,
    NetworkError,
    RequestTimeoutError,
    ScoreRangeError,
)

_URL = "https://unpkg.com/@mdn/browser-compat-data/data.json"


class _FakeClient:
    plans: ClassVar[list[object]] = []
    seen_urls: ClassVar[list[str]] = []

    def __init__(self, **_: object) -> None:
        pass

    def __enter__(self) -> _FakeClient:
        return self

    def __exit__(
        self,
        _exc_type: type[BaseException] | None,
        _exc: BaseException | None,
        _tb: object | None,
    ) -> None:
        return None

    def get(self, url: str) -> httpx.Response:
        _FakeClient.seen_urls.append(url)
        plan = _FakeClient.plans.pop(0)
        if isinstance(plan, Exception):
            raise plan
        if isinstance(plan, tuple):
            status_code, text = plan
            return httpx.Response(
                status_code,
                text=text,
                request=httpx.Request("GET", url),
            )
        raise AssertionError


def _reset_plans(*plans: object) -> None:
    _FakeClient.plans = list(plans)
    _FakeClient.seen_urls = []


def test_exception_messages() -> None:
    assert "Unable to connect" in str(NetworkError(_URL))
    assert "Boom" in str(NetworkError(_URL, cause="Boom"))
    assert "timed out" in str(RequestTimeoutError(_URL))
    assert "HTTP 503" in str(HttpStatusError(503, _URL))
    assert "invalid JSON" in str(ContentError(_URL))
    assert "threshold" in str(ConfigurationError("threshold", "bad"))
    assert "within [0, 100]" in str(ScoreRangeError("performance", 120))
    assert "(gone)" in str(DatasetError("x.json", cause="gone"))


def test_fetch_text_success(monkeypatch: pytest.MonkeyPatch) -> None:
    _reset_plans((200, '{"ok": true}'))
    monkeypatch.setattr(http.httpx, "Client", _FakeClient)

    assert http.fetch_text(_URL) == '{"ok": true}'
    assert _FakeClient.seen_urls == [_URL]


def test_fetch_text_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    _reset_plans(httpx.TimeoutException("slow"))
    monkeypatch.setattr(http.httpx, "Client", _FakeClient)

    with pytest.raises(RequestTimeoutError):
        http.fetch_text(_URL)


def test_fetch_text_connect_retry_then_success(monkeypatch: pytest.MonkeyPatch) -> None:
    connect_exc = httpx.ConnectError("conn", request=httpx.Request("GET", _URL))
    _reset_plans(connect_exc, (200, "{}"))
    monkeypatch.setattr(http.httpx, "Client", _FakeClient)

    assert http.fetch_text(_URL) == "{}"
    assert len(_FakeClient.seen_urls) == 2


def test_fetch_text_connect_retry_then_fail(monkeypatch: pytest.MonkeyPatch) -> None:
    connect_exc = httpx.ConnectError("conn", request=httpx.Request("GET", _URL))
    _reset_plans(connect_exc, connect_exc)
    monkeypatch.setattr(http.httpx, "Client", _FakeClient)

    with pytest.raises(NetworkError):
        http.fetch_text(_URL)


def test_fetch_text_request_error(monkeypatch: pytest.MonkeyPatch) -> None:
    _reset_plans(httpx.RequestError("bad", request=httpx.Request("GET", _URL)))
    monkeypatch.setattr(http.httpx, "Client", _FakeClient)

    with pytest.raises(NetworkError):
        http.fetch_text(_URL)


def test_fetch_text_non_200(monkeypatch: pytest.MonkeyPatch) -> None:
    _reset_plans((404, "missing"))
    monkeypatch.setattr(http.httpx, "Client", _FakeClient)

    with pytest.raises(HttpStatusError) as excinfo:
        http.fetch_text(_URL)
    assert excinfo.value.status_code == 404


def test_fetch_text_empty_content(monkeypatch: pytest.MonkeyPatch) -> None:
    _reset_plans((200, "   "))
    monkeypatch.setattr(http.httpx, "Client", _FakeClient)

    with pytest.raises(ContentError):
        http.fetch_text(_URL)


def test_fetch_json_rejects_invalid_payload(monkeypatch: pytest.MonkeyPatch) -> None:
    _reset_plans((200, "<html>not json</html>"))
    monkeypatch.setattr(http.httpx, "Client", _FakeClient)

    with pytest.raises(ContentError):
        http.fetch_json(_URL)


def test_fetch_dataset_flattens_snapshot(monkeypatch: pytest.MonkeyPatch) -> None:
    snapshot = {
        "__meta": {"version": "5.0.0"},
        "api": {"fetch": {"__compat": {"support": {"chrome": {"version_added": "42"}}}}},
    }
    _reset_plans((200, json.dumps(snapshot)))
    monkeypatch.setattr(http.httpx, "Client", _FakeClient)

    dataset = http.fetch_dataset()

    assert dataset == {"api.fetch": {"chrome": {"version_added": "42"}}}
    assert _FakeClient.seen_urls == [BCD_DATA_URL]


def test_fetch_dataset_rejects_non_object(monkeypatch: pytest.MonkeyPatch) -> None:
    _reset_plans((200, "[1, 2, 3]"))
    monkeypatch.setattr(http.httpx, "Client", _FakeClient)

    with pytest.raises(ContentError):
        http.fetch_dataset(_URL)


def test_shared_client_is_reused(monkeypatch: pytest.MonkeyPatch) -> None:
    created: list[_FakeClient] = []

    class _CountingClient(_FakeClient):
        def __init__(self, **kwargs: object) -> None:
            super().__init__(**kwargs)
            created.append(self)

    _reset_plans((200, "{}"), (200, "{}"))
    monkeypatch.setattr(http.httpx, "Client", _CountingClient)

    with http.use_shared_client():
        http.fetch_text(_URL)
        http.fetch_text(_URL)

    assert len(created) == 1
