"""
Tests for RetryPolicy - backoff growth and settings mapping.

Run with: pytest tests/test_retry_policy.py -v
"""

import pytest
from pydantic import ValidationError
from tenacity import RetryCallState

from database.seeds.startup import RetryPolicy
from shared.config import Settings


def test_backoff_grows_exponentially_up_to_ceiling():
    """1s doubling with a 30s ceiling: 1, 2, 4, 8, 16, 30, 30."""
    policy = RetryPolicy(max_attempts=8, initial_backoff=1, backoff_multiplier=2, max_backoff=30)

    assert [policy.backoff_for(k) for k in range(1, 8)] == [1, 2, 4, 8, 16, 30, 30]


def test_schedule_has_one_wait_between_each_pair_of_attempts():
    policy = RetryPolicy(max_attempts=5, initial_backoff=1, backoff_multiplier=2, max_backoff=30)

    assert policy.schedule() == [1, 2, 4, 8]


def test_single_attempt_policy_never_waits():
    assert RetryPolicy(max_attempts=1).schedule() == []


def test_multiplier_of_one_gives_constant_backoff():
    policy = RetryPolicy(max_attempts=4, initial_backoff=3, backoff_multiplier=1, max_backoff=30)

    assert policy.schedule() == [3, 3, 3]


def test_huge_exponent_is_capped_instead_of_overflowing():
    policy = RetryPolicy(max_attempts=2000, initial_backoff=1, backoff_multiplier=10, max_backoff=60)

    assert policy.backoff_for(1500) == 60


def test_attempt_numbers_start_at_one():
    with pytest.raises(ValueError):
        RetryPolicy().backoff_for(0)


@pytest.mark.parametrize("attempt", [1, 2, 3, 4, 5, 6, 7])
def test_tenacity_wait_strategy_matches_closed_form(attempt):
    """The wait used by the retry loop is exactly backoff_for(attempt)."""
    policy = RetryPolicy(max_attempts=8, initial_backoff=1, backoff_multiplier=2, max_backoff=30)
    state = RetryCallState(retry_object=None, fn=None, args=(), kwargs={})
    state.attempt_number = attempt

    assert policy.wait_strategy()(state) == policy.backoff_for(attempt)


def test_defaults_are_bounded():
    policy = RetryPolicy()

    assert policy.max_attempts == 10
    assert policy.initial_backoff == 2.0
    assert policy.backoff_multiplier == 2.0
    assert policy.max_backoff == 30.0
    assert max(policy.schedule()) <= policy.max_backoff


@pytest.mark.parametrize(
    "overrides",
    [
        {"max_attempts": 0},
        {"initial_backoff": -1},
        {"backoff_multiplier": 0.5},
        {"max_backoff": -5},
        {"connect_timeout": 0},
    ],
)
def test_invalid_policy_is_rejected(overrides):
    with pytest.raises(ValidationError):
        RetryPolicy(**overrides)


def test_policy_is_immutable():
    policy = RetryPolicy()

    with pytest.raises(ValidationError):
        policy.max_attempts = 3


def test_from_settings_maps_seed_settings():
    settings = Settings(
        SEED_MAX_ATTEMPTS=6,
        SEED_INITIAL_BACKOFF_SECONDS=0.5,
        SEED_BACKOFF_MULTIPLIER=3,
        SEED_MAX_BACKOFF_SECONDS=20,
        SEED_CONNECT_TIMEOUT_SECONDS=4,
    )

    policy = RetryPolicy.from_settings(settings)

    assert policy == RetryPolicy(
        max_attempts=6,
        initial_backoff=0.5,
        backoff_multiplier=3,
        max_backoff=20,
        connect_timeout=4,
    )


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("SEED_MAX_ATTEMPTS", "3")
    monkeypatch.setenv("SEED_MAX_BACKOFF_SECONDS", "12.5")

    policy = RetryPolicy.from_settings(Settings())

    assert policy.max_attempts == 3
    assert policy.max_backoff == 12.5
