from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from legalai.api.deps.dependencies import get_redline_service
from legalai.api.main import create_app
from legalai.boundary.db.models import (
    DecisionAction,
    RunStatus,
    Severity,
    VerificationStatus,
)
from legalai.core.exceptions import FindingNotFoundError, RunNotFoundError, ValidationError

USER_HEADERS = {"X-User-Id": "user-1"}


@pytest.fixture
def client():
    app = create_app()
    return TestClient(app)


@pytest.fixture
def mock_redline_service(client):
    service = AsyncMock()
    client.app.dependency_overrides[get_redline_service] = lambda: service
    return service


def _run(**overrides):
    fields = dict(
        id=uuid4(),
        document_id=uuid4(),
        version_id=uuid4(),
        profile_id="default",
        status=RunStatus.QUEUED,
        started_at=None,
        finished_at=None,
        primary_model="gpt-4",
        verifier_model="gpt-4o",
        error_message=None,
        overall_risk_score=None,
        run_metadata={},
        created_at=datetime.now(timezone.utc),
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


def _finding(**overrides):
    fields = dict(
        id=uuid4(),
        run_id=uuid4(),
        severity=Severity.HIGH,
        score=85,
        category="Liability Cap",
        location_page=2,
        location_start_offset=None,
        location_end_offset=None,
        evidence_snippet="shall not be liable",
        evidence_policy_ref="No specific policy",
        evidence_rationale="Cap below standard.",
        suggestion_proposed_rewrite=None,
        verification_status=VerificationStatus.VERIFIED_RISKY,
        verifier_notes="Confirmed",
        created_at=datetime.now(timezone.utc),
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


def _decision(**overrides):
    fields = dict(
        id=uuid4(),
        finding_id=uuid4(),
        user_id="user-1",
        action=DecisionAction.ACCEPT,
        final_text=None,
        comment=None,
        timestamp=datetime.now(timezone.utc),
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


def test_start_run_returns_queued_run(client, mock_redline_service):
    run = _run()
    mock_redline_service.start_run.return_value = run

    response = client.post(
        "/api/v1/redline/run",
        json={
            "documentId": str(run.document_id),
            "versionId": str(run.version_id),
            "profileId": "nda",
        },
        headers=USER_HEADERS,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["data"]["id"] == str(run.id)
    assert body["data"]["status"] == "queued"
    mock_redline_service.start_run.assert_awaited_once_with(
        document_id=run.document_id,
        version_id=run.version_id,
        profile_id="nda",
        primary_model=None,
        verifier_model=None,
    )


def test_start_run_requires_user_header(client, mock_redline_service):
    response = client.post(
        "/api/v1/redline/run",
        json={"documentId": str(uuid4()), "versionId": str(uuid4())},
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Unauthorized"
    mock_redline_service.start_run.assert_not_awaited()


def test_start_run_rejects_missing_ids(client, mock_redline_service):
    mock_redline_service.start_run.side_effect = ValidationError(
        "documentId and versionId are required"
    )

    response = client.post("/api/v1/redline/run", json={}, headers=USER_HEADERS)

    assert response.status_code == 400
    assert response.json()["detail"] == "documentId and versionId are required"


def test_get_run_returns_completed_run(client, mock_redline_service):
    run = _run(
        status=RunStatus.COMPLETED,
        overall_risk_score=70,
        run_metadata={"findings_detected": 2, "findings_saved": 2},
        finished_at=datetime.now(timezone.utc),
    )
    mock_redline_service.get_run_by_id.return_value = run

    response = client.get(f"/api/v1/redline/runs/{run.id}", headers=USER_HEADERS)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "completed"
    assert data["overall_risk_score"] == 70
    assert data["metadata"] == {"findings_detected": 2, "findings_saved": 2}


def test_get_run_not_found(client, mock_redline_service):
    run_id = uuid4()
    mock_redline_service.get_run_by_id.side_effect = RunNotFoundError(run_id)

    response = client.get(f"/api/v1/redline/runs/{run_id}", headers=USER_HEADERS)

    assert response.status_code == 404
    assert response.json()["detail"] == f"Run not found: {run_id}"


def test_get_run_findings(client, mock_redline_service):
    run_id = uuid4()
    mock_redline_service.get_run_findings.return_value = [
        _finding(run_id=run_id),
        _finding(run_id=run_id, severity=Severity.LOW, score=30),
    ]

    response = client.get(f"/api/v1/redline/runs/{run_id}/findings", headers=USER_HEADERS)

    assert response.status_code == 200
    data = response.json()["data"]
    assert [f["severity"] for f in data] == ["High", "Low"]
    assert data[0]["verification_status"] == "verified_risky"


def test_record_decision_uses_acting_user(client, mock_redline_service):
    finding_id = uuid4()
    mock_redline_service.record_user_decision.return_value = _decision(
        finding_id=finding_id, action=DecisionAction.EDITED, final_text="Mutual cap."
    )

    response = client.post(
        f"/api/v1/redline/findings/{finding_id}/decision",
        json={"action": "edited", "finalText": "Mutual cap."},
        headers=USER_HEADERS,
    )

    assert response.status_code == 201
    assert response.json()["data"]["action"] == "edited"
    mock_redline_service.record_user_decision.assert_awaited_once_with(
        finding_id=finding_id,
        user_id="user-1",
        action=DecisionAction.EDITED,
        final_text="Mutual cap.",
        comment=None,
    )


def test_record_decision_rejects_unknown_action(client, mock_redline_service):
    response = client.post(
        f"/api/v1/redline/findings/{uuid4()}/decision",
        json={"action": "maybe"},
        headers=USER_HEADERS,
    )

    assert response.status_code == 422
    mock_redline_service.record_user_decision.assert_not_awaited()


def test_record_decision_unknown_finding(client, mock_redline_service):
    finding_id = uuid4()
    mock_redline_service.record_user_decision.side_effect = FindingNotFoundError(finding_id)

    response = client.post(
        f"/api/v1/redline/findings/{finding_id}/decision",
        json={"action": "accept"},
        headers=USER_HEADERS,
    )

    assert response.status_code == 404


def test_get_finding_decisions(client, mock_redline_service):
    finding_id = uuid4()
    mock_redline_service.get_finding_decisions.return_value = [
        _decision(finding_id=finding_id),
        _decision(finding_id=finding_id, action=DecisionAction.REJECT),
    ]

    response = client.get(
        f"/api/v1/redline/findings/{finding_id}/decisions", headers=USER_HEADERS
    )

    assert response.status_code == 200
    assert [d["action"] for d in response.json()["data"]] == ["accept", "reject"]


def test_unexpected_error_is_hidden(client, mock_redline_service):
    mock_redline_service.get_run_by_id.side_effect = RuntimeError("db exploded")

    response = client.get(f"/api/v1/redline/runs/{uuid4()}", headers=USER_HEADERS)

    assert response.status_code == 500
    assert response.json()["detail"] == "Internal server error"
