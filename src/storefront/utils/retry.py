"""Bounded retry for transient storage conflicts.

Only serialization failures, deadlocks and optimistic version clashes are
retried. Domain errors always propagate on the first attempt.
"""

import time
from functools import wraps

import structlog
from protean.exceptions import ExpectedVersionError
from sqlalchemy.exc import DBAPIError

logger = structlog.get_logger(__name__)

# PostgreSQL serialization_failure and deadlock_detected
RETRYABLE_PGCODES = {"40001", "40P01"}

_RETRYABLE_MESSAGES = ("deadlock detected", "could not serialize access")


def _pgcode_from(exc: Exception):
    orig = getattr(exc, "orig", None) or getattr(exc, "__cause__", None)
    return getattr(exc, "pgcode", None) or getattr(orig, "pgcode", None)


def is_retryable(exc: Exception) -> bool:
    if isinstance(exc, ExpectedVersionError):
        return True
    if not isinstance(exc, DBAPIError):
        return False
    code = _pgcode_from(exc)
    if code in RETRYABLE_PGCODES:
        return True
    message = str(exc).lower()
    return any(fragment in message for fragment in _RETRYABLE_MESSAGES)


def retry_on_conflict(max_attempts: int = 3, backoff: float = 0.05):
    """Retry the wrapped call while it fails with a retryable storage conflict.

    Apply only to calls that are safe to repeat from scratch, i.e. whole
    units of work that re-read everything they check.
    """

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            attempt = 0
            while True:
                attempt += 1
                try:
                    return fn(*args, **kwargs)
                except Exception as exc:
                    if attempt >= max_attempts or not is_retryable(exc):
                        raise
                    logger.warning(
                        "Retrying after storage conflict",
                        operation=fn.__name__,
                        attempt=attempt,
                        error=str(exc),
                    )
                    time.sleep(backoff * attempt)

        return wrapper

    return decorator
