import pytest

from account_service.core.bootstrap import wait_for_database
from account_service.core.exceptions import UpstreamUnavailable


class FlakyDatabase:
    """Fails the first ``failures`` health checks."""

    def __init__(self, failures):
        self.failures = failures
        self.calls = 0

    def healthcheck(self):
        self.calls += 1
        if self.calls <= self.failures:
            return False, "connection refused"
        return True, None


def test_backoff_doubles_and_caps():
    sleeps = []
    db = FlakyDatabase(failures=7)
    assert wait_for_database(db, attempts=8, base_delay=1.0, max_delay=30.0, sleep=sleeps.append) == 8
    assert sleeps == [1.0, 2.0, 4.0, 8.0, 16.0, 30.0, 30.0]


def test_wait_returns_immediately_when_reachable():
    sleeps = []
    db = FlakyDatabase(failures=0)
    assert wait_for_database(db, attempts=10, sleep=sleeps.append) == 1
    assert sleeps == []


def test_wait_retries_with_backoff():
    sleeps = []
    db = FlakyDatabase(failures=3)
    attempt = wait_for_database(db, attempts=10, base_delay=0.5, max_delay=30.0, sleep=sleeps.append)
    assert attempt == 4
    assert sleeps == [0.5, 1.0, 2.0]


def test_wait_gives_up_after_attempt_cap():
    sleeps = []
    db = FlakyDatabase(failures=100)
    with pytest.raises(UpstreamUnavailable):
        wait_for_database(db, attempts=10, base_delay=1.0, max_delay=8.0, sleep=sleeps.append)
    assert db.calls == 10
    # no sleep after the final failure
    assert sleeps == [1.0, 2.0, 4.0, 8.0, 8.0, 8.0, 8.0, 8.0, 8.0]


def test_real_database_is_reachable(database):
    assert wait_for_database(database, attempts=1) == 1
