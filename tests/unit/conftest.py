import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock()
    uow.users.get_by_id = AsyncMock()
    uow.users.update = AsyncMock()
    uow.users.update_password = AsyncMock(return_value=True)

    uow.password_reset_tokens = MagicMock()
    uow.password_reset_tokens.put = AsyncMock()
    uow.password_reset_tokens.get = AsyncMock()
    uow.password_reset_tokens.delete = AsyncMock()
    uow.password_reset_tokens.delete_if_match = AsyncMock(return_value=True)
    return uow


@pytest.fixture
def mock_mailer():
    mailer = MagicMock()
    mailer.send_password_reset = AsyncMock()
    return mailer


@pytest.fixture
def mock_hasher():
    hasher = MagicMock()
    hasher.hash = MagicMock(side_effect=lambda password: f"hashed:{password}")
    return hasher
