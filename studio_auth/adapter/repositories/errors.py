import functools

from sqlalchemy.exc import SQLAlchemyError

from studio_auth.app.services.errors import StoreError


def translate_store_errors(func):
    """Re-raise SQLAlchemy failures of a repository coroutine as StoreError"""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except SQLAlchemyError as exc:
            raise StoreError(f"{func.__qualname__} failed") from exc

    return wrapper
