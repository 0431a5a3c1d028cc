"""
Integration tests for the password reset endpoints

Covers:
- Requesting a reset (known and unknown emails answer alike)
- Verifying a reset link without consuming it
- Completing a reset and single use of the token
- Supersession by a newer request
- The single-endpoint action dispatch

Every request ends with a rollback of the shared session, which expires
loaded instances: ids are captured up front and users refreshed before
their attributes are read again.
"""
from datetime import timedelta

import bcrypt
import pytest
from httpx import AsyncClient
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from studio_auth.domain.base import utcnow
from studio_auth.domain.entities import PasswordResetToken
from tests.fixtures.api_helpers import create_test_user, link_params

GENERIC_MESSAGE = "Password reset instructions have been sent to your email"


async def request_reset(client: AsyncClient, email: str):
    return await client.post("/auth/password-reset/request", json={"email": email})


async def stored_token(db_session: AsyncSession, user_id: str):
    result = await db_session.exec(
        select(PasswordResetToken).where(PasswordResetToken.user_id == user_id)
    )
    return result.one_or_none()


@pytest.mark.asyncio
async def test_full_reset_flow(client: AsyncClient, db_session: AsyncSession, mailer):
    """Request, verify, complete, then the token is gone"""
    user = await create_test_user(db_session, email="aiko@example.com")
    user_id = user.id

    response = await request_reset(client, "aiko@example.com")
    assert response.status_code == 200
    assert response.json() == {"message": GENERIC_MESSAGE}

    assert len(mailer.sent) == 1
    assert mailer.sent[0]["to_email"] == "aiko@example.com"
    assert mailer.sent[0]["full_name"] == "Aiko Tanaka"
    link_user_id, token = link_params(mailer.sent[0]["reset_link"])
    assert link_user_id == user_id
    assert len(token) == 64

    response = await client.post(
        "/auth/password-reset/verify", json={"userId": user_id, "token": token}
    )
    assert response.status_code == 200
    assert response.json() == {"valid": True}

    response = await client.post(
        "/auth/password-reset/complete",
        json={"userId": user_id, "token": token, "newPassword": "NewSecret99"},
    )
    assert response.status_code == 200
    assert response.json() == {"message": "Password has been updated successfully"}

    await db_session.refresh(user)
    assert bcrypt.checkpw(b"NewSecret99", user.password_hash.encode())
    assert await stored_token(db_session, user_id) is None

    response = await client.post(
        "/auth/password-reset/verify", json={"userId": user_id, "token": token}
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_unknown_email_answers_like_known_email(
    client: AsyncClient, db_session: AsyncSession, mailer
):
    await create_test_user(db_session, email="aiko@example.com")

    known = await request_reset(client, "aiko@example.com")
    unknown = await request_reset(client, "nobody@example.com")

    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json()
    assert len(mailer.sent) == 1


@pytest.mark.asyncio
async def test_request_stores_hashed_token_valid_for_24_hours(
    client: AsyncClient, db_session: AsyncSession, mailer
):
    user = await create_test_user(db_session, email="aiko@example.com")
    user_id = user.id
    before = utcnow()

    await request_reset(client, "aiko@example.com")

    _, token = link_params(mailer.sent[0]["reset_link"])
    row = await stored_token(db_session, user_id)
    assert row is not None
    assert row.token_hash != token
    assert len(row.token_hash) == 64
    assert before + timedelta(hours=24) <= row.expires_at <= utcnow() + timedelta(hours=24)


@pytest.mark.asyncio
async def test_email_lookup_is_case_insensitive(
    client: AsyncClient, db_session: AsyncSession, mailer
):
    await create_test_user(db_session, email="aiko@example.com")

    await request_reset(client, "AIKO@Example.com")

    assert len(mailer.sent) == 1
    assert mailer.sent[0]["to_email"] == "aiko@example.com"


@pytest.mark.asyncio
async def test_newer_request_supersedes_older_token(
    client: AsyncClient, db_session: AsyncSession, mailer
):
    user = await create_test_user(db_session, email="aiko@example.com")
    user_id = user.id

    await request_reset(client, "aiko@example.com")
    await request_reset(client, "aiko@example.com")
    _, first = link_params(mailer.sent[0]["reset_link"])
    _, second = link_params(mailer.sent[1]["reset_link"])
    assert first != second

    response = await client.post(
        "/auth/password-reset/verify", json={"userId": user_id, "token": first}
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_TOKEN"

    response = await client.post(
        "/auth/password-reset/verify", json={"userId": user_id, "token": second}
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_expired_token_rejected(client: AsyncClient, db_session: AsyncSession, mailer):
    user = await create_test_user(db_session, email="aiko@example.com")
    user_id = user.id
    await request_reset(client, "aiko@example.com")
    _, token = link_params(mailer.sent[0]["reset_link"])

    row = await stored_token(db_session, user_id)
    row.expires_at = utcnow() - timedelta(seconds=1)
    db_session.add(row)
    await db_session.commit()

    response = await client.post(
        "/auth/password-reset/complete",
        json={"userId": user_id, "token": token, "newPassword": "NewSecret99"},
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_TOKEN"

    await db_session.refresh(user)
    assert bcrypt.checkpw(b"OldPass123!", user.password_hash.encode())


@pytest.mark.asyncio
async def test_weak_password_keeps_token(
    client: AsyncClient, db_session: AsyncSession, mailer
):
    user = await create_test_user(db_session, email="aiko@example.com")
    user_id = user.id
    await request_reset(client, "aiko@example.com")
    _, token = link_params(mailer.sent[0]["reset_link"])

    response = await client.post(
        "/auth/password-reset/complete",
        json={"userId": user_id, "token": token, "newPassword": "short"},
    )
    assert response.status_code == 400
    assert response.json()["error"] == {
        "code": "WEAK_PASSWORD",
        "message": "Password must be at least 8 characters long",
    }
    assert await stored_token(db_session, user_id) is not None


@pytest.mark.asyncio
async def test_token_of_another_user_rejected(
    client: AsyncClient, db_session: AsyncSession, mailer
):
    await create_test_user(db_session, email="aiko@example.com")
    ben = await create_test_user(db_session, email="ben@example.com", full_name="Ben")
    ben_id = ben.id
    await request_reset(client, "aiko@example.com")
    _, token = link_params(mailer.sent[0]["reset_link"])

    response = await client.post(
        "/auth/password-reset/complete",
        json={"userId": ben_id, "token": token, "newPassword": "NewSecret99"},
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "path,payload",
    [
        ("/auth/password-reset/request", {}),
        ("/auth/password-reset/request", {"email": ""}),
        ("/auth/password-reset/verify", {"token": "abc"}),
        ("/auth/password-reset/verify", {"userId": "user-1"}),
        ("/auth/password-reset/complete", {"userId": "user-1", "token": "abc"}),
    ],
)
async def test_missing_parameters(client: AsyncClient, path, payload):
    response = await client.post(path, json=payload)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_PARAMETERS"


@pytest.mark.asyncio
async def test_malformed_body_is_invalid_parameters(client: AsyncClient):
    response = await client.post(
        "/auth/password-reset/request",
        content="not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_PARAMETERS"


@pytest.mark.asyncio
async def test_single_endpoint_actions(client: AsyncClient, db_session: AsyncSession, mailer):
    user = await create_test_user(db_session, email="aiko@example.com")
    user_id = user.id

    response = await client.post(
        "/auth/password-reset", json={"action": "request", "email": "aiko@example.com"}
    )
    assert response.status_code == 200
    assert response.json() == {"message": GENERIC_MESSAGE}
    _, token = link_params(mailer.sent[0]["reset_link"])

    response = await client.post(
        "/auth/password-reset",
        json={"action": "verify", "userId": user_id, "token": token},
    )
    assert response.status_code == 200
    assert response.json() == {"valid": True}

    response = await client.post(
        "/auth/password-reset",
        json={"action": "reset", "userId": user_id, "token": token, "newPassword": "NewSecret99"},
    )
    assert response.status_code == 200
    assert response.json() == {"message": "Password has been updated successfully"}

    await db_session.refresh(user)
    assert bcrypt.checkpw(b"NewSecret99", user.password_hash.encode())


@pytest.mark.asyncio
@pytest.mark.parametrize("action", ["delete", "", None])
async def test_single_endpoint_rejects_unknown_action(client: AsyncClient, action):
    response = await client.post("/auth/password-reset", json={"action": action})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_ACTION"


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
