"""
Reset token lifecycle across all three use cases, against in-memory stores.

NoToken -> Issued -> {Consumed, Expired, Superseded}
"""
from datetime import datetime, timedelta
from urllib.parse import parse_qs, urlparse

import pytest

from studio_auth.app.use_cases.password_reset import (
    CompletePasswordResetUseCase,
    RequestPasswordResetUseCase,
    VerifyResetTokenUseCase,
)
from studio_auth.domain.entities import User
from tests.fixtures.in_memory import (
    InMemoryTokenRepository,
    InMemoryUnitOfWork,
    InMemoryUserRepository,
    PlainPasswordHasher,
    RecordingMailer,
)

ISSUED_AT = datetime(2026, 3, 1, 12, 0, 0)


class Clock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def stores():
    users = InMemoryUserRepository(
        [User(id="U", email="a@x.com", full_name="A", password_hash="hashed:original")]
    )
    return users, InMemoryTokenRepository()


@pytest.fixture
def clock():
    return Clock(ISSUED_AT)


@pytest.fixture
def mailer():
    return RecordingMailer()


def last_token(mailer: RecordingMailer) -> str:
    return parse_qs(urlparse(mailer.sent[-1]["reset_link"]).query)["token"][0]


async def request_reset(stores, mailer, clock, email="a@x.com"):
    use_case = RequestPasswordResetUseCase(InMemoryUnitOfWork(*stores), mailer, clock=clock)
    return await use_case.execute(email)


async def verify(stores, clock, user_id, token):
    use_case = VerifyResetTokenUseCase(InMemoryUnitOfWork(*stores), clock=clock)
    return await use_case.execute(user_id, token)


async def complete(stores, clock, user_id, token, password):
    use_case = CompletePasswordResetUseCase(
        InMemoryUnitOfWork(*stores), PlainPasswordHasher(), clock=clock
    )
    return await use_case.execute(user_id, token, password)


@pytest.mark.asyncio
async def test_example_scenario(stores, mailer, clock):
    users, tokens = stores

    requested = await request_reset(stores, mailer, clock)
    assert requested.is_ok()
    assert tokens.rows["U"].expires_at == ISSUED_AT + timedelta(hours=24)
    token = last_token(mailer)

    assert (await verify(stores, clock, "U", token)).value.valid is True

    weak = await complete(stores, clock, "U", token, "short")
    assert weak.error.code == "WEAK_PASSWORD"

    done = await complete(stores, clock, "U", token, "longenough1")
    assert done.is_ok()
    assert users.rows["U"].password_hash == "hashed:longenough1"

    after = await verify(stores, clock, "U", token)
    assert after.is_err()
    assert after.error.code == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_unknown_email_matches_known_email(stores, mailer, clock):
    known = await request_reset(stores, mailer, clock, "a@x.com")
    unknown = await request_reset(stores, mailer, clock, "nobody@x.com")

    assert known.value.model_dump() == unknown.value.model_dump()
    assert len(mailer.sent) == 1


@pytest.mark.asyncio
async def test_email_lookup_is_case_insensitive(stores, mailer, clock):
    await request_reset(stores, mailer, clock, "A@X.COM")

    assert len(mailer.sent) == 1
    assert mailer.sent[0]["to_email"] == "a@x.com"


@pytest.mark.asyncio
async def test_second_request_supersedes_first(stores, mailer, clock):
    await request_reset(stores, mailer, clock)
    first_token = last_token(mailer)

    await request_reset(stores, mailer, clock)
    second_token = last_token(mailer)

    assert first_token != second_token
    assert (await verify(stores, clock, "U", first_token)).error.code == "INVALID_TOKEN"
    assert (await verify(stores, clock, "U", second_token)).is_ok()

    stale = await complete(stores, clock, "U", first_token, "longenough1")
    assert stale.error.code == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_token_expires_after_24_hours(stores, mailer, clock):
    await request_reset(stores, mailer, clock)
    token = last_token(mailer)

    clock.now = ISSUED_AT + timedelta(hours=24) - timedelta(seconds=1)
    assert (await verify(stores, clock, "U", token)).is_ok()

    clock.now = ISSUED_AT + timedelta(hours=24)
    assert (await verify(stores, clock, "U", token)).error.code == "INVALID_TOKEN"

    expired = await complete(stores, clock, "U", token, "longenough1")
    assert expired.error.code == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_token_bound_to_its_user(stores, mailer, clock):
    users, _ = stores
    users.rows["V"] = User(id="V", email="v@x.com", password_hash="hashed:v")

    await request_reset(stores, mailer, clock)
    token = last_token(mailer)

    result = await verify(stores, clock, "V", token)
    assert result.error.code == "INVALID_TOKEN"
