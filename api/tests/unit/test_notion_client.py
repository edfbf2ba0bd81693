from __future__ import annotations

import pytest
import requests

from nps_sync.infrastructure.external.notion.notion_client import (
    NotionClient,
    NotionCredentials,
    build_notion_client,
)
from nps_sync.shared.exceptions.sync import NotionApiError, SyncConfigError


class _DummyResponse:
    def __init__(self, status_code: int, body=None, text: str = "") -> None:
        self.status_code = status_code
        self._body = body
        self.text = text

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body


class _DummySession:
    def __init__(self, response=None, error: Exception | None = None) -> None:
        self.calls: list[dict] = []
        self._response = response
        self._error = error
        self.closed = False

    def request(self, **kwargs):
        self.calls.append(kwargs)
        if self._error:
            raise self._error
        return self._response

    def close(self) -> None:
        self.closed = True


def _client(session: _DummySession) -> NotionClient:
    return NotionClient(
        NotionCredentials(token="secret-token", database_id="db-1"),
        session=session,
        base_url="https://api.notion.test/v1/",
    )


def test_create_page_posts_payload_with_auth_headers() -> None:
    session = _DummySession(_DummyResponse(200, {"object": "page", "id": "p-1"}))
    payload = {"parent": {"database_id": "db-1"}, "properties": {}}

    page = _client(session).create_page(payload)

    assert page["id"] == "p-1"
    assert len(session.calls) == 1
    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "https://api.notion.test/v1/pages"
    assert call["json"] == payload
    assert call["headers"]["Authorization"] == "Bearer secret-token"
    assert call["headers"]["Notion-Version"] == "2022-06-28"


def test_error_response_raises_without_retry() -> None:
    body = {"object": "error", "code": "validation_error", "message": "Casa is not a property"}
    session = _DummySession(_DummyResponse(400, body))

    with pytest.raises(NotionApiError) as exc_info:
        _client(session).create_page({})

    assert exc_info.value.http_status == 400
    assert "Casa is not a property" in exc_info.value.message
    assert exc_info.value.details["code"] == "validation_error"
    assert len(session.calls) == 1


def test_server_error_is_not_retried() -> None:
    session = _DummySession(_DummyResponse(503, None, text="Service Unavailable"))

    with pytest.raises(NotionApiError):
        _client(session).create_page({})

    assert len(session.calls) == 1


def test_transport_error_is_wrapped() -> None:
    session = _DummySession(error=requests.ConnectionError("dns"))

    with pytest.raises(NotionApiError) as exc_info:
        _client(session).create_page({})

    assert exc_info.value.http_status is None


def test_close_closes_session() -> None:
    session = _DummySession()
    _client(session).close()
    assert session.closed


@pytest.mark.parametrize("token, database_id", [("", "db"), ("tok", "")])
def test_build_notion_client_requires_configuration(token, database_id) -> None:
    with pytest.raises(SyncConfigError):
        build_notion_client(token=token, database_id=database_id)
