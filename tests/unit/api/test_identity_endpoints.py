"""
Tests for hirer and talent account endpoints.

Tests:
- Registration and re-registration
- OTP verification and resend
- Login
- Password reset
- Profile read and update with media
- The talent directory for hirers
"""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import select

from core.exceptions import MailDispatchError
from core.utils.datetime import now
from database.models.principals import Principal, Talent


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def registration(email, role="Casting Director", name="Ana", password="Secret123!"):
    return {
        "name": name,
        "email": email,
        "phone": "9876543210",
        "gender": "Female",
        "role": role,
        "password": password,
    }


class TestRegister:
    """Test POST /api/{kind}/register."""

    @pytest.mark.asyncio
    async def test_register_sends_otp(self, client, mailer):
        response = await client.post("/api/hirers/register", json=registration("ana@example.com"))

        assert response.status_code == 201
        data = response.json()
        assert data["user_id"]
        assert data["token"].count(".") == 2
        assert mailer.outbox[-1]["to"] == "ana@example.com"
        assert mailer.outbox[-1]["subject"] == "Verify Your Showbiz App Account"
        otp = mailer.otps["ana@example.com"]
        assert len(otp) == 6 and otp.isdigit()
        assert otp in mailer.outbox[-1]["body"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["name", "email", "phone", "gender", "role", "password"])
    async def test_missing_field_is_bad_request(self, client, missing):
        body = registration("ana@example.com")
        del body[missing]

        response = await client.post("/api/hirers/register", json=body)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_role_must_match_kind(self, client):
        response = await client.post(
            "/api/talents/register", json=registration("ana@example.com", role="Casting Director")
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_invalid_gender_is_bad_request(self, client):
        body = registration("ana@example.com")
        body["gender"] = "Unknown"

        response = await client.post("/api/hirers/register", json=body)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_reregister_unverified_reuses_id(self, client, db_session):
        first = await client.post("/api/hirers/register", json=registration("ana@example.com"))
        second = await client.post(
            "/api/hirers/register", json=registration("ana@example.com", name="Ana Maria")
        )

        assert second.status_code == 201
        assert second.json()["user_id"] == first.json()["user_id"]
        result = await db_session.execute(select(Principal).where(Principal.email == "ana@example.com"))
        rows = result.scalars().all()
        assert len(rows) == 1
        assert rows[0].name == "Ana Maria"

    @pytest.mark.asyncio
    async def test_reregister_verified_conflicts(self, client, create_principal):
        await create_principal("hirers", "ana@example.com")

        response = await client.post("/api/hirers/register", json=registration("ana@example.com"))

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_mail_failure_is_internal_error(self, client, mailer):
        mailer.dispatch = AsyncMock(side_effect=MailDispatchError())

        response = await client.post("/api/hirers/register", json=registration("ana@example.com"))

        assert response.status_code == 500
        error = response.json()["error"]
        assert error["code"] == "MAIL_DISPATCH_FAILED"
        assert error["message"] == "Failed to send email"

    @pytest.mark.asyncio
    async def test_same_email_allowed_across_kinds(self, client, create_principal):
        hirer_id, _ = await create_principal("hirers", "ana@example.com")

        response = await client.post(
            "/api/talents/register", json=registration("ana@example.com", role="Model")
        )

        assert response.status_code == 201
        assert response.json()["user_id"] != hirer_id


class TestVerifyOtp:
    """Test POST /api/{kind}/verify-otp and resend-otp."""

    @pytest.mark.asyncio
    async def test_verify_marks_verified(self, client, mailer):
        token = (await client.post("/api/talents/register", json=registration("bo@example.com", role="Actor"))).json()["token"]

        response = await client.post(
            "/api/talents/verify-otp", json={"otp": mailer.otps["bo@example.com"]}, headers=auth(token)
        )

        assert response.status_code == 200
        data = response.json()
        assert data["email"] == "bo@example.com"
        assert data["kind"] == "Talent"
        assert data["token"]

    @pytest.mark.asyncio
    async def test_otp_is_single_use(self, client, mailer):
        token = (await client.post("/api/hirers/register", json=registration("ana@example.com"))).json()["token"]
        otp = mailer.otps["ana@example.com"]

        first = await client.post("/api/hirers/verify-otp", json={"otp": otp}, headers=auth(token))
        second = await client.post("/api/hirers/verify-otp", json={"otp": otp}, headers=auth(token))

        assert first.status_code == 200
        assert second.status_code == 401

    @pytest.mark.asyncio
    async def test_wrong_otp_unauthorized(self, client, mailer):
        token = (await client.post("/api/hirers/register", json=registration("ana@example.com"))).json()["token"]
        wrong = "000000" if mailer.otps["ana@example.com"] != "000000" else "111111"

        response = await client.post("/api/hirers/verify-otp", json={"otp": wrong}, headers=auth(token))

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_numeric_otp_accepted(self, client, mailer):
        token = (await client.post("/api/hirers/register", json=registration("ana@example.com"))).json()["token"]

        response = await client.post(
            "/api/hirers/verify-otp",
            json={"otp": int(mailer.otps["ana@example.com"])},
            headers=auth(token),
        )

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_expired_otp_unauthorized(self, client, mailer, db_session):
        data = (await client.post("/api/hirers/register", json=registration("ana@example.com"))).json()
        principal = await db_session.get(Principal, data["user_id"])
        principal.otp_expires_at = now() - timedelta(minutes=1)
        await db_session.commit()

        response = await client.post(
            "/api/hirers/verify-otp",
            json={"otp": mailer.otps["ana@example.com"]},
            headers=auth(data["token"]),
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_resend_replaces_otp(self, client, mailer):
        token = (await client.post("/api/hirers/register", json=registration("ana@example.com"))).json()["token"]
        sent_before = len(mailer.outbox)

        response = await client.post("/api/hirers/resend-otp", headers=auth(token))

        assert response.status_code == 200
        assert response.json() == {"message": "New OTP sent to email"}
        assert len(mailer.outbox) == sent_before + 1
        verify = await client.post(
            "/api/hirers/verify-otp", json={"otp": mailer.otps["ana@example.com"]}, headers=auth(token)
        )
        assert verify.status_code == 200

    @pytest.mark.asyncio
    async def test_resend_when_verified_is_bad_request(self, client, hirer):
        _, token = hirer

        response = await client.post("/api/hirers/resend-otp", headers=auth(token))

        assert response.status_code == 400


class TestLogin:
    """Test POST /api/{kind}/login."""

    @pytest.mark.asyncio
    async def test_login_returns_token_and_stores_device(self, client, create_principal, db_session):
        user_id, _ = await create_principal("hirers", "ana@example.com")

        response = await client.post(
            "/api/hirers/login",
            json={"email": "Ana@Example.com", "password": "Secret123!", "deviceToken": "device-1"},
        )

        assert response.status_code == 200
        assert response.json()["id"] == user_id
        assert response.json()["token"]
        principal = await db_session.get(Principal, user_id)
        assert principal.device_token == "device-1"

    @pytest.mark.asyncio
    async def test_wrong_password_unauthorized(self, client, create_principal):
        await create_principal("hirers", "ana@example.com")

        response = await client.post(
            "/api/hirers/login", json={"email": "ana@example.com", "password": "nope"}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_unknown_email_unauthorized(self, client):
        response = await client.post(
            "/api/hirers/login", json={"email": "ghost@example.com", "password": "Secret123!"}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_unverified_forbidden(self, client, create_principal):
        await create_principal("hirers", "ana@example.com", verify=False)

        response = await client.post(
            "/api/hirers/login", json={"email": "ana@example.com", "password": "Secret123!"}
        )

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "Please verify your OTP before logging in"

    @pytest.mark.asyncio
    async def test_login_is_scoped_to_kind(self, client, create_principal):
        await create_principal("hirers", "ana@example.com")

        response = await client.post(
            "/api/talents/login", json={"email": "ana@example.com", "password": "Secret123!"}
        )

        assert response.status_code == 401


class TestPasswordReset:
    """Test forgot-password and reset-password."""

    @pytest.mark.asyncio
    async def test_reset_flow(self, client, create_principal, mailer):
        await create_principal("talents", "bo@example.com")

        forgot = await client.post("/api/talents/forgot-password", json={"email": "bo@example.com"})
        assert forgot.status_code == 200
        assert forgot.json() == {"message": "Reset code sent to email"}
        assert mailer.outbox[-1]["subject"] == "Password Reset"
        token = mailer.reset_tokens["bo@example.com"]

        reset = await client.post(f"/api/talents/reset-password/{token}", json={"newPassword": "NewSecret1!"})
        assert reset.status_code == 200
        assert reset.json() == {"message": "Password reset successfully"}

        old = await client.post("/api/talents/login", json={"email": "bo@example.com", "password": "Secret123!"})
        new = await client.post("/api/talents/login", json={"email": "bo@example.com", "password": "NewSecret1!"})
        assert old.status_code == 401
        assert new.status_code == 200

    @pytest.mark.asyncio
    async def test_reset_token_is_single_use(self, client, create_principal, mailer):
        await create_principal("talents", "bo@example.com")
        await client.post("/api/talents/forgot-password", json={"email": "bo@example.com"})
        token = mailer.reset_tokens["bo@example.com"]

        await client.post(f"/api/talents/reset-password/{token}", json={"newPassword": "NewSecret1!"})
        again = await client.post(f"/api/talents/reset-password/{token}", json={"newPassword": "Other1!"})

        assert again.status_code == 400

    @pytest.mark.asyncio
    async def test_reset_token_stored_hashed(self, client, create_principal, mailer, db_session):
        user_id, _ = await create_principal("talents", "bo@example.com")
        await client.post("/api/talents/forgot-password", json={"email": "bo@example.com"})
        token = mailer.reset_tokens["bo@example.com"]

        principal = await db_session.get(Principal, user_id)
        assert principal.reset_token_hash
        assert principal.reset_token_hash != token

    @pytest.mark.asyncio
    async def test_invalid_token_bad_request(self, client):
        response = await client.post("/api/hirers/reset-password/not-a-token", json={"newPassword": "x1"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_token_from_other_kind_rejected(self, client, create_principal, mailer):
        await create_principal("talents", "bo@example.com")
        await client.post("/api/talents/forgot-password", json={"email": "bo@example.com"})
        token = mailer.reset_tokens["bo@example.com"]

        response = await client.post(f"/api/hirers/reset-password/{token}", json={"newPassword": "x1"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_email_not_found(self, client):
        response = await client.post("/api/hirers/forgot-password", json={"email": "ghost@example.com"})

        assert response.status_code == 404


class TestProfile:
    """Test get-profile and update-profile."""

    @pytest.mark.asyncio
    async def test_profile_strips_credentials(self, client, hirer):
        _, token = hirer

        response = await client.get("/api/hirers/get-profile", headers=auth(token))

        assert response.status_code == 200
        profile = response.json()["profile"]
        assert profile["email"] == "hirer.a@example.com"
        for field in ("password_hash", "otp", "reset_token_hash", "profile_pic_key"):
            assert field not in profile

    @pytest.mark.asyncio
    async def test_missing_token_message(self, client):
        response = await client.get("/api/hirers/get-profile")

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Unauthorized: No token provided"

    @pytest.mark.asyncio
    async def test_wrong_kind_forbidden(self, client, talent):
        _, token = talent

        response = await client.get("/api/hirers/get-profile", headers=auth(token))

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_partial_update_ignores_empty_values(self, client, hirer):
        _, token = hirer

        response = await client.put(
            "/api/hirers/update-profile",
            data={"city": "Mumbai", "country": "", "age": "34"},
            headers=auth(token),
        )

        assert response.status_code == 200
        profile = response.json()["profile"]
        assert profile["city"] == "Mumbai"
        assert profile["country"] is None
        assert profile["age"] == 34
        assert profile["name"] == "Hirer A"

    @pytest.mark.asyncio
    async def test_nothing_to_update_bad_request(self, client, hirer):
        _, token = hirer

        response = await client.put(
            "/api/hirers/update-profile", data={"name": ""}, headers=auth(token)
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_email_taken_by_same_kind_conflicts(self, client, hirer, create_principal):
        _, token = hirer
        await create_principal("hirers", "taken@example.com")

        response = await client.put(
            "/api/hirers/update-profile", data={"email": "taken@example.com"}, headers=auth(token)
        )

        assert response.status_code == 409

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email", ["notanemail", "ana@", "@example.com"])
    async def test_invalid_email_bad_request(self, client, hirer, db_session, email):
        hirer_id, token = hirer

        response = await client.put(
            "/api/hirers/update-profile", data={"email": email}, headers=auth(token)
        )

        assert response.status_code == 400
        stored = await db_session.get(Principal, hirer_id)
        assert stored.email == "hirer.a@example.com"

    @pytest.mark.asyncio
    async def test_email_normalized_and_login_still_works(self, client, hirer):
        _, token = hirer

        response = await client.put(
            "/api/hirers/update-profile", data={"email": " New.Mail@Example.com "}, headers=auth(token)
        )
        login = await client.post(
            "/api/hirers/login", json={"email": "new.mail@example.com", "password": "Secret123!"}
        )

        assert response.json()["profile"]["email"] == "new.mail@example.com"
        assert login.status_code == 200

    @pytest.mark.asyncio
    async def test_email_used_by_other_kind_allowed(self, client, hirer, talent):
        _, token = hirer

        response = await client.put(
            "/api/hirers/update-profile", data={"email": "talent.b@example.com"}, headers=auth(token)
        )

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_invalid_body_type_bad_request(self, client, talent):
        _, token = talent

        response = await client.put(
            "/api/talents/update-profile", data={"bodyType": "Huge"}, headers=auth(token)
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_talent_media_replaced(self, client, talent, storage):
        talent_id, token = talent

        first = await client.put(
            "/api/talents/update-profile",
            files={"front": ("front.jpg", b"first-image", "image/jpeg")},
            headers=auth(token),
        )
        assert first.status_code == 200
        first_url = first.json()["profile"]["images"]["front"]
        assert first_url.startswith("https://test-bucket.s3.us-east-1.amazonaws.com/talent_profiles/")
        first_key = next(key for op, key in storage.calls if op == "upload")

        second = await client.put(
            "/api/talents/update-profile",
            files={"front": ("front.png", b"second-image", "image/png")},
            headers=auth(token),
        )

        assert second.status_code == 200
        assert second.json()["profile"]["images"]["front"] != first_url
        # Old object deleted before the new upload
        assert storage.calls[1] == ("delete", first_key)
        assert storage.calls[2][0] == "upload"
        assert first_key not in storage.objects
        assert f"talent_profiles/{talent_id}/front-" in storage.calls[2][1]

    @pytest.mark.asyncio
    async def test_hirer_profile_pic_upload(self, client, hirer, storage):
        _, token = hirer

        response = await client.put(
            "/api/hirers/update-profile",
            files={"profilePic": ("me.jpg", b"me", "image/jpeg")},
            headers=auth(token),
        )

        assert response.status_code == 200
        assert response.json()["profile"]["profile_pic"].endswith(".jpg")
        assert len(storage.objects) == 1


async def complete_talent_profile(client, token):
    return await client.put(
        "/api/talents/update-profile",
        data={
            "age": "27",
            "height": "170cm",
            "weight": "60kg",
            "bodyType": "Athletic",
            "skinTone": "Wheatish",
            "language": "Hindi, English",
            "skills": ["Dance", "Action"],
            "makeoverNeeded": "false",
            "willingToWorkAsExtra": "true",
            "aboutYourself": "Trained dancer",
        },
        files={
            "front": ("front.jpg", b"f", "image/jpeg"),
            "left": ("left.jpg", b"l", "image/jpeg"),
            "right": ("right.jpg", b"r", "image/jpeg"),
            "video": ("reel.mp4", b"v", "video/mp4"),
        },
        headers=auth(token),
    )


class TestAllTalents:
    """Test GET /api/talents/all-talents."""

    @pytest.mark.asyncio
    async def test_only_complete_profiles_listed(self, client, hirer, talent, other_talent):
        _, hirer_token = hirer
        talent_id, talent_token = talent
        response = await complete_talent_profile(client, talent_token)
        assert response.status_code == 200

        listed = await client.get("/api/talents/all-talents", headers=auth(hirer_token))

        assert listed.status_code == 200
        talents = listed.json()["talents"]
        assert [t["id"] for t in talents] == [talent_id]
        assert talents[0]["skills"] == ["Dance", "Action"]
        assert talents[0]["willing_to_work_as_extra"] is True

    @pytest.mark.asyncio
    async def test_contact_hidden_until_accepted(self, client, hirer, talent):
        _, hirer_token = hirer
        talent_id, talent_token = talent
        await complete_talent_profile(client, talent_token)

        before = (await client.get("/api/talents/all-talents", headers=auth(hirer_token))).json()["talents"][0]
        assert before["email"] == ""
        assert before["phone"] == ""

        sent = await client.post("/api/hiring/send", json={"talentId": talent_id}, headers=auth(hirer_token))
        await client.put(
            "/api/hiring/status",
            json={"requestId": sent.json()["request"]["id"], "status": "Accepted"},
            headers=auth(talent_token),
        )

        after = (await client.get("/api/talents/all-talents", headers=auth(hirer_token))).json()["talents"][0]
        assert after["email"] == "talent.b@example.com"
        assert after["phone"] == "9876543210"

    @pytest.mark.asyncio
    async def test_empty_directory(self, client, hirer):
        _, hirer_token = hirer

        response = await client.get("/api/talents/all-talents", headers=auth(hirer_token))

        assert response.status_code == 200
        assert response.json()["talents"] == []

    @pytest.mark.asyncio
    async def test_talent_forbidden(self, client, talent):
        _, token = talent

        response = await client.get("/api/talents/all-talents", headers=auth(token))

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_skills_validated(self, client, talent, db_session):
        talent_id, token = talent

        bad = await client.put(
            "/api/talents/update-profile", data={"skills": "Juggling"}, headers=auth(token)
        )
        good = await client.put(
            "/api/talents/update-profile", data={"skills": "Dance,Comedy"}, headers=auth(token)
        )

        assert bad.status_code == 400
        assert good.status_code == 200
        stored = await db_session.get(Talent, talent_id)
        assert stored.skills == ["Dance", "Comedy"]
