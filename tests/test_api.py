# tests/test_api.py
"""
End-to-end tests for the HTTP endpoints: SMS dispatch, OTP issuance,
password reset, SMS log listing and admin notification emails.
"""

from datetime import datetime, timedelta, timezone

import pytest

from roktodao.application.services.admin_auth_service import AdminAuthService
from roktodao.core.security import verify_password
from roktodao.domain.models.admin_user import AdminRole
from roktodao.domain.models.donor import Donor
from roktodao.domain.models.notification_attempt import DeliveryOutcome, NotificationAttempt
from roktodao.domain.models.one_time_code import OneTimeCode
from roktodao.domain.models.site_settings import SiteSettings
from roktodao.infrastructure.repositories.admin_user_repository import SQLAlchemyAdminUserRepository
from tests.conftest import REGISTERED_PHONE


def store_code(db, code="482913", expires_in=timedelta(minutes=10)):
    now = datetime.now(timezone.utc)
    db.merge(OneTimeCode(subject_key=REGISTERED_PHONE, code=code, created_at=now, expires_at=now + expires_in))
    db.commit()


def sms_logs(db):
    db.expire_all()
    return db.query(NotificationAttempt).all()


def admin_headers(db, role=AdminRole.ADMIN):
    auth = AdminAuthService(SQLAlchemyAdminUserRepository(db), token_lifetime=timedelta(minutes=30))
    user = auth.ensure_account(f"{role.value}@roktodao.org", "s3cret-pass", role=role)
    token, _ = auth.issue_token(user)
    return {"Authorization": f"Bearer {token}"}


# --- /api/send-sms ---

def test_send_sms_success(client, db, primary, fallback):
    response = client.post("/api/send-sms", json={"destination": "01811111111", "body": "Thank you for donating!"})

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "SMS sent successfully."}
    assert fallback.calls == []
    assert sms_logs(db)[0].provider_used == "gateway"


def test_send_sms_accepts_web_client_field_names(client, primary):
    response = client.post("/api/send-sms", json={"number": "01811111111", "message": "hello"})

    assert response.status_code == 200
    assert primary.calls == [("01811111111", "hello")]


def test_send_sms_missing_fields(client, db, primary):
    response = client.post("/api/send-sms", json={"destination": "01811111111"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Missing number or message."}
    assert primary.calls == []
    assert sms_logs(db) == []


def test_send_sms_total_failure_hides_provider_details(client, db, primary, fallback, mailer):
    primary.succeed = False
    fallback.succeed = False

    response = client.post("/api/send-sms", json={"destination": "01811111111", "body": "hello"})

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert "gateway" not in body["error"] and "bulksmsbd" not in body["error"]
    assert sms_logs(db)[0].outcome == DeliveryOutcome.FAILURE
    assert len(mailer.sent) == 1


def test_malformed_json_gets_error_envelope(client):
    response = client.post("/api/send-sms", content="not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 400
    assert response.json()["success"] is False


# --- /api/generate-otp ---

def test_generate_otp_falls_back_when_primary_unconfigured(client, db, donor, primary, fallback):
    primary.is_configured = False

    response = client.post("/api/generate-otp", json={"identifier": REGISTERED_PHONE})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert "code" not in body

    db.expire_all()
    otp = db.get(OneTimeCode, REGISTERED_PHONE)
    assert otp.code not in response.text
    assert primary.calls == []
    assert fallback.calls == [(REGISTERED_PHONE, f"Your RoktoDao OTP is: {otp.code}")]

    logs = sms_logs(db)
    assert len(logs) == 1
    assert logs[0].provider_used == "bulksmsbd"
    assert logs[0].outcome == DeliveryOutcome.SUCCESS


def test_generate_otp_unknown_number(client, db):
    response = client.post("/api/generate-otp", json={"phoneNumber": "01999999999"})

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "No account is associated with this phone number."}
    assert db.query(OneTimeCode).count() == 0


def test_generate_otp_requires_phone(client):
    response = client.post("/api/generate-otp", json={})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_generate_otp_delivery_failure(client, db, donor, primary, fallback):
    primary.succeed = False
    fallback.succeed = False

    response = client.post("/api/generate-otp", json={"identifier": REGISTERED_PHONE})

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to send OTP SMS."}
    db.expire_all()
    assert db.get(OneTimeCode, REGISTERED_PHONE) is not None


# --- /api/reset-password ---

def test_reset_password_with_valid_code(client, db, donor):
    store_code(db)

    response = client.post(
        "/api/reset-password",
        json={"phoneNumber": REGISTERED_PHONE, "otp": "482913", "newPassword": "new-secret-1"},
    )

    assert response.status_code == 200
    assert response.json()["success"] is True
    db.expire_all()
    updated = db.get(Donor, donor.uid)
    assert verify_password("new-secret-1", updated.password_hash)

    replay = client.post(
        "/api/reset-password",
        json={"identifier": REGISTERED_PHONE, "code": "482913", "newSecret": "another-secret"},
    )
    assert replay.status_code == 404


def test_reset_password_keeps_surrounding_spaces_in_new_password(client, db, donor):
    store_code(db)

    response = client.post(
        "/api/reset-password",
        json={"phoneNumber": f" {REGISTERED_PHONE} ", "otp": " 482913 ", "newPassword": "  secret pw  "},
    )

    assert response.status_code == 200
    db.expire_all()
    updated = db.get(Donor, donor.uid)
    assert verify_password("  secret pw  ", updated.password_hash)
    assert not verify_password("secret pw", updated.password_hash)


def test_reset_password_wrong_code_keeps_code(client, db, donor):
    store_code(db)

    response = client.post(
        "/api/reset-password",
        json={"identifier": REGISTERED_PHONE, "code": "000000", "newSecret": "new-secret-1"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid OTP. Please check the code and try again."
    db.expire_all()
    assert db.get(OneTimeCode, REGISTERED_PHONE) is not None


def test_reset_password_expired_code(client, db, donor):
    store_code(db, expires_in=timedelta(minutes=-1))

    response = client.post(
        "/api/reset-password",
        json={"identifier": REGISTERED_PHONE, "code": "482913", "newSecret": "new-secret-1"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "OTP has expired. Please request a new one."
    db.expire_all()
    assert db.get(OneTimeCode, REGISTERED_PHONE) is None


@pytest.mark.parametrize(
    "payload",
    [
        {"identifier": REGISTERED_PHONE, "code": "482913"},
        {"identifier": REGISTERED_PHONE, "newSecret": "new-secret-1"},
        {"code": "482913", "newSecret": "new-secret-1"},
    ],
)
def test_reset_password_missing_fields(client, db, donor, payload):
    store_code(db)

    response = client.post("/api/reset-password", json=payload)

    assert response.status_code == 400
    db.expire_all()
    assert db.get(OneTimeCode, REGISTERED_PHONE) is not None


# --- /api/sms-logs ---

def test_sms_logs_requires_auth(client):
    assert client.get("/api/sms-logs").status_code == 401


def test_sms_logs_requires_admin_role(client, db):
    response = client.get("/api/sms-logs", headers=admin_headers(db, role=AdminRole.MODERATOR))

    assert response.status_code == 403


def test_sms_logs_lists_newest_first(client, db):
    headers = admin_headers(db)
    client.post("/api/send-sms", json={"destination": "01811111111", "body": "first"})
    client.post("/api/send-sms", json={"destination": "01822222222", "body": "second"})

    response = client.get("/api/sms-logs", params={"page_size": 1}, headers=headers)

    assert response.status_code == 200
    page = response.json()
    assert page["total"] == 2
    assert page["total_pages"] == 2
    assert page["items"][0]["body"] == "second"
    assert page["items"][0]["outcome"] == "success"
    assert page["items"][0]["provider_used"] == "gateway"


# --- /api/send-email ---

def configure_site(db, **overrides):
    values = {"admin_email": "admin@roktodao.org", "notify_new_donor": True, "notify_new_request": True}
    values.update(overrides)
    db.add(SiteSettings(**values))
    db.commit()


def test_new_donor_email(client, db, mailer):
    configure_site(db)

    response = client.post(
        "/api/send-email",
        json={"type": "new_donor", "data": {"fullName": "Karim <script>", "bloodGroup": "A+", "phoneNumber": "01811111111"}},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True}
    sent = mailer.sent[0]
    assert sent["to"] == "admin@roktodao.org"
    assert sent["subject"] == "🎉 New Donor Registered on RoktoDao!"
    assert "Karim &lt;script&gt;" in sent["html"]


def test_disabled_notification_is_skipped(client, db, mailer):
    configure_site(db, notify_new_request=False)

    response = client.post("/api/send-email", json={"type": "new_request", "data": {"patientName": "Salma"}})

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Notification for new request is disabled."}
    assert mailer.sent == []


def test_contact_form_email_is_always_sent(client, db, mailer):
    configure_site(db, notify_new_donor=False, notify_new_request=False)

    response = client.post(
        "/api/send-email",
        json={"type": "contact_form", "data": {"name": "Nadia", "email": "nadia@example.org", "message": "Hi"}},
    )

    assert response.status_code == 200
    assert "nadia@example.org" in mailer.sent[0]["html"]


def test_unknown_email_type(client, db):
    configure_site(db)

    response = client.post("/api/send-email", json={"type": "birthday", "data": {}})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid notification type."


def test_email_without_settings(client, mailer):
    response = client.post("/api/send-email", json={"type": "new_donor", "data": {}})

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Email settings not configured."}
    assert mailer.sent == []


def test_email_transport_failure(client, db, mailer):
    configure_site(db)
    mailer.error = ConnectionRefusedError("smtp down")

    response = client.post("/api/send-email", json={"type": "new_donor", "data": {}})

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to send email."}


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
