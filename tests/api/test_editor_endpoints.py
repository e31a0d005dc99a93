from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from legalai.api.deps.dependencies import get_editor_session_service
from legalai.api.main import create_app
from legalai.core.exceptions import VersionNotFoundError
from legalai.models.editor import EditorConfig, EditorPermissions, EditorUser


@pytest.fixture
def client():
    app = create_app()
    return TestClient(app)


@pytest.fixture
def mock_editor_service(client):
    service = AsyncMock()
    client.app.dependency_overrides[get_editor_session_service] = lambda: service
    return service


def test_create_session(client, mock_editor_service):
    version_id = uuid4()
    mock_editor_service.create_session.return_value = EditorConfig(
        document_key="abc",
        document_url="https://bucket.s3.amazonaws.com/presigned",
        document_type="word",
        server_url="http://editor:8080",
        user=EditorUser(id="user-1", name="Jane"),
        permissions=EditorPermissions(edit=True),
        callback_url="http://api:8000/api/v1/editor/callback",
        token="signed",
    )

    response = client.post(
        "/api/v1/editor/session",
        json={"versionId": str(version_id)},
        headers={"X-User-Id": "user-1", "X-User-Name": "Jane"},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["documentKey"] == "abc"
    assert data["documentType"] == "word"
    assert data["callbackUrl"] == "http://api:8000/api/v1/editor/callback"
    assert data["permissions"]["edit"] is True
    mock_editor_service.create_session.assert_awaited_once_with(version_id, "user-1", "Jane")


def test_create_session_defaults_user_name(client, mock_editor_service):
    mock_editor_service.create_session.side_effect = VersionNotFoundError("x")

    client.post(
        "/api/v1/editor/session",
        json={"versionId": str(uuid4())},
        headers={"X-User-Id": "user-1"},
    )

    assert mock_editor_service.create_session.await_args.args[2] == "User"


def test_create_session_requires_version(client, mock_editor_service):
    response = client.post("/api/v1/editor/session", json={}, headers={"X-User-Id": "user-1"})

    assert response.status_code == 400
    assert response.json()["detail"] == "versionId is required"


def test_create_session_requires_user(client, mock_editor_service):
    response = client.post("/api/v1/editor/session", json={"versionId": str(uuid4())})

    assert response.status_code == 401


def test_create_session_unknown_version(client, mock_editor_service):
    version_id = uuid4()
    mock_editor_service.create_session.side_effect = VersionNotFoundError(version_id)

    response = client.post(
        "/api/v1/editor/session",
        json={"versionId": str(version_id)},
        headers={"X-User-Id": "user-1"},
    )

    assert response.status_code == 404


def test_callback_acknowledges(client, mock_editor_service):
    mock_editor_service.handle_callback.return_value = {"error": 0}

    response = client.post(
        "/api/v1/editor/callback",
        json={"status": 2, "key": "abc", "url": "http://editor/file.docx", "users": ["u1"]},
    )

    assert response.status_code == 200
    assert response.json() == {"error": 0}
    payload = mock_editor_service.handle_callback.await_args.args[0]
    assert payload.status == 2


def test_callback_failure_returns_error_flag(client, mock_editor_service):
    mock_editor_service.handle_callback.side_effect = RuntimeError("boom")

    response = client.post("/api/v1/editor/callback", json={"status": 2, "key": "abc"})

    assert response.status_code == 500
    assert response.json() == {"error": 1}
