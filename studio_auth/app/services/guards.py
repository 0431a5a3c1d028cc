"""
Bounded collaborator calls.

Every store and mail call is wrapped in a timeout. Idempotent reads get a
single retry; writes and mail dispatch are never retried.
"""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt

from .errors import MailDeliveryError, StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def call_store(awaitable: Awaitable[T], timeout: float) -> T:
    """Await a store call, turning a timeout into StoreError"""
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError as exc:
        raise StoreError(f"Store call timed out after {timeout}s") from exc


async def read_store(call: Callable[[], Awaitable[T]], timeout: float) -> T:
    """Idempotent store read: one retry on StoreError, then re-raise"""
    result = None
    async for attempt in AsyncRetrying(
        stop=stop_after_attempt(2),
        retry=retry_if_exception_type(StoreError),
        reraise=True,
    ):
        with attempt:
            if attempt.retry_state.attempt_number > 1:
                logger.warning("Retrying store read after failure")
            result = await call_store(call(), timeout)
    return result


async def call_mailer(awaitable: Awaitable[None], timeout: float) -> None:
    """Await a mail dispatch once, turning a timeout into MailDeliveryError"""
    try:
        await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError as exc:
        raise MailDeliveryError(f"Mail dispatch timed out after {timeout}s") from exc
