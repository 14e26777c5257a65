# app/utils/retry.py
import logging

from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
import redis

from app.domain.errors import SessionConflictError
from app.utils.settings import SESSION_UPSERT_ATTEMPTS
from app.utils.logging import get_logger

logger = get_logger(__name__)


def redis_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(redis.RedisError),
    )

#konflikt na unikalnym indeksie aktywnej sesji -> powtorz cala jednostke pracy
def conflict_retry(attempts: int = SESSION_UPSERT_ATTEMPTS):
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=0.05, min=0.05, max=0.5),
        retry=retry_if_exception_type(SessionConflictError),
        before_sleep=before_sleep_log(logger, logging.WARNING),
    )
