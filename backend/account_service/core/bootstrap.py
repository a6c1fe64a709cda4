import logging
import time
from typing import Callable

from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
)

from .db import Database
from .exceptions import UpstreamUnavailable

logger = logging.getLogger(__name__)


def _unhealthy(outcome) -> bool:
    ok, _ = outcome
    return not ok


def wait_for_database(
    database: Database,
    attempts: int = 10,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """
    Block until the store answers ``SELECT 1``.

    Waits ``base_delay * 2 ** (n - 1)`` seconds (capped at ``max_delay``)
    after the n-th failed check. Returns the attempt number that succeeded.
    Raises ``UpstreamUnavailable`` once ``attempts`` checks have failed;
    callers treat that as fatal.
    """
    calls = 0

    def check():
        nonlocal calls
        calls += 1
        return database.healthcheck()

    retrying = Retrying(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=base_delay, max=max_delay),
        retry=retry_if_result(_unhealthy),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        retry_error_callback=lambda state: state.outcome.result(),
        sleep=sleep,
    )
    ok, error = retrying(check)

    if not ok:
        logger.error("Giving up on database after %d attempts: %s", calls, error)
        raise UpstreamUnavailable(f"Database unreachable after {attempts} attempts")
    if calls > 1:
        logger.info("Database reachable after %d attempts.", calls)
    return calls
