"""Bounded retry for storage work."""

import logging
import time
from typing import Callable, TypeVar

from sqlalchemy.exc import DataError, SQLAlchemyError

from brokerage.core.exceptions import StorageUnavailableError, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_with_retries(
    description: str,
    work: Callable[[int], T],
    attempts: int,
    backoff_seconds: float,
) -> T:
    """
    Call work(attempt) until it succeeds or attempts run out.

    Only storage errors are retried; anything else propagates unchanged.
    DataError (a value the column cannot hold) is not transient and is
    reported as a ValidationError at once.
    Backoff doubles after each failed attempt.
    """
    max_attempts = max(1, attempts)
    backoff = max(0.0, backoff_seconds)
    last_error: SQLAlchemyError

    for attempt in range(1, max_attempts + 1):
        try:
            return work(attempt)
        except DataError as exc:
            logger.error("%s rejected by storage: %s", description, exc)
            raise ValidationError(f"{description} failed: value out of range for storage") from exc
        except SQLAlchemyError as exc:
            last_error = exc
            logger.warning(
                "%s failed (attempt %s/%s): %s",
                description,
                attempt,
                max_attempts,
                exc,
            )

        if attempt < max_attempts and backoff:
            time.sleep(backoff * (2 ** (attempt - 1)))

    logger.error("%s failed after %s attempts", description, max_attempts)
    raise StorageUnavailableError(
        f"{description} failed: storage unavailable after {max_attempts} attempts"
    ) from last_error
