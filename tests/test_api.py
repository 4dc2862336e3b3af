"""
End-to-end tests through the FastAPI app with CRM and email replaced by fakes.
"""
import os
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.api.v1.dependencies import get_brevo_client, get_email_service
from app.core.repositories.base import SqlAlchemyRepository
from app.infrastructure.config.config import APP_CONFIG, DB_CONFIG
from app.infrastructure.database.models import BlockyfyFormSubmission, NextsenseFormSubmission
from app.main import app
from tests.fakes import FakeCrmClient, FakeEmailService


@pytest.fixture
def fakes():
    crm_client = FakeCrmClient()
    email_service = FakeEmailService()
    app.dependency_overrides[get_brevo_client] = lambda: crm_client
    app.dependency_overrides[get_email_service] = lambda: email_service
    yield crm_client, email_service
    app.dependency_overrides.clear()


@pytest.fixture
def client(fakes):
    with TestClient(app) as test_client:
        yield test_client


def _unique_email() -> str:
    return f"user-{uuid4().hex[:8]}@example.com"


def _find(model, email: str) -> list:
    # the sync sqlite driver reads the same file the app writes through aiosqlite
    engine = create_engine(DB_CONFIG.DATABASE_URL)
    try:
        with Session(engine) as session:
            return list(session.scalars(select(model).where(model.email == email)))
    finally:
        engine.dispose()


def _uploads() -> set[str]:
    if not os.path.isdir(APP_CONFIG.UPLOADS_DIR):
        return set()
    return set(os.listdir(APP_CONFIG.UPLOADS_DIR))


def _blockyfy_fields(email: str, **overrides) -> dict:
    fields = {
        "name": "John Doe",
        "email": email,
        "phone_number": "+1555",
        "budget": "$10k-$50k",
        "newsletterSubscribed": "true",
        "source": "Google",
    }
    fields.update(overrides)
    return {key: value for key, value in fields.items() if value is not None}


def _nextsense_json(email: str, **overrides) -> dict:
    payload = {
        "firstName": "Jane",
        "lastName": "Roe",
        "email": email,
        "interests": ["Web Development", "Mobile Apps"],
        "budget": "$10,000 - $50,000",
        "message": "Hello there",
        "newsletterSubscribed": False,
        "privacyPolicyAccepted": True,
    }
    payload.update(overrides)
    return payload


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_blockyfy_submit_persists_and_processes(client, fakes):
    crm_client, email_service = fakes
    email = _unique_email()

    response = client.post("/blockyfy-form/submit", data=_blockyfy_fields(email))

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Form submitted successfully"

    records = _find(BlockyfyFormSubmission, email)
    assert len(records) == 1
    record = records[0]
    assert record.id == UUID(body["submissionId"])
    assert record.newsletter_subscribed is True
    assert record.attachments == []
    # background work has finished once the test client returns
    assert record.synced_to_brevo is True
    assert record.brevo_contact_id == "brevo-1"

    assert crm_client.contacts[0].email == email
    assert email_service.thank_you[0].first_name == "John"
    assert email_service.admin[0].submission_id == record.id


def test_blockyfy_submit_with_attachments(client):
    email = _unique_email()
    files = [
        ("attachments", ("brief.pdf", b"%PDF-1", "application/pdf")),
        ("attachments", ("logo.png", b"\x89PNG", "image/png")),
    ]

    response = client.post("/blockyfy-form/submit", data=_blockyfy_fields(email), files=files)

    assert response.status_code == 201
    record = _find(BlockyfyFormSubmission, email)[0]
    assert len(record.attachments) == 2
    assert all(os.path.exists(path) for path in record.attachments)


def test_too_many_attachments_rejected_before_anything_is_written(client, fakes):
    crm_client, _ = fakes
    email = _unique_email()
    uploads_before = _uploads()
    files = [("attachments", (f"file{i}.txt", b"data", "text/plain")) for i in range(6)]

    response = client.post("/blockyfy-form/submit", data=_blockyfy_fields(email), files=files)

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["message"] == "Validation failed"
    assert detail["errors"][0]["field"] == "attachments"
    assert _find(BlockyfyFormSubmission, email) == []
    assert _uploads() == uploads_before
    assert crm_client.contacts == []


def test_invalid_fields_are_enumerated(client):
    response = client.post(
        "/blockyfy-form/submit",
        data=_blockyfy_fields("not-an-email", phone_number=None),
    )

    assert response.status_code == 400
    errors = response.json()["detail"]["errors"]
    assert {error["field"] for error in errors} == {"email", "phone_number"}
    assert all(error["message"] for error in errors)
    assert _find(BlockyfyFormSubmission, "not-an-email") == []


def test_unknown_field_is_rejected(client):
    email = _unique_email()

    response = client.post("/blockyfy-form/submit", data=_blockyfy_fields(email, company="ACME"))

    assert response.status_code == 400
    assert response.json()["detail"]["errors"][0]["field"] == "company"
    assert _find(BlockyfyFormSubmission, email) == []


def test_nextsense_json_submission(client, fakes):
    crm_client, email_service = fakes
    email = _unique_email()

    response = client.post("/nextsense-form/submit-json", json=_nextsense_json(email))

    assert response.status_code == 201
    record = _find(NextsenseFormSubmission, email)[0]
    assert record.id == UUID(response.json()["submissionId"])
    assert record.interests == ["Web Development", "Mobile Apps"]
    assert record.privacy_policy_accepted is True
    assert record.synced_to_brevo is True
    assert crm_client.contacts[0].attributes["FIRSTNAME"] == "Jane"
    assert email_service.thank_you[0].interests == ["Web Development", "Mobile Apps"]


def test_nextsense_json_ignores_attachments_key(client):
    email = _unique_email()

    response = client.post(
        "/nextsense-form/submit-json",
        json=_nextsense_json(email, attachments=["brief.pdf"]),
    )

    assert response.status_code == 201
    record = _find(NextsenseFormSubmission, email)[0]
    assert record.attachments == []


def test_nextsense_json_validation_error_shape(client):
    payload = _nextsense_json("broken")
    del payload["firstName"]

    response = client.post("/nextsense-form/submit-json", json=payload)

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["message"] == "Validation failed"
    assert {error["field"] for error in detail["errors"]} == {"firstName", "email"}
    assert _find(NextsenseFormSubmission, "broken") == []


def test_nextsense_multipart_splits_comma_separated_interests(client):
    email = _unique_email()
    data = {
        "firstName": "Jane",
        "lastName": "Roe",
        "email": email,
        "interests": "Web Development, Mobile Apps",
        "budget": "$10,000 - $50,000",
        "privacyPolicyAccepted": "true",
    }

    response = client.post(
        "/nextsense-form/submit",
        data=data,
        files=[("attachments", ("brief.txt", b"brief", "text/plain"))],
    )

    assert response.status_code == 201
    record = _find(NextsenseFormSubmission, email)[0]
    assert record.interests == ["Web Development", "Mobile Apps"]
    assert record.newsletter_subscribed is False
    assert record.message is None
    assert len(record.attachments) == 1


def test_persistence_failure_returns_500(client, monkeypatch):

    async def failing_add_item(self, item):
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(SqlAlchemyRepository, "add_item", failing_add_item)

    response = client.post("/blockyfy-form/submit", data=_blockyfy_fields(_unique_email()))

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to submit form"
