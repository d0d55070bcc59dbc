"""Unit tests for epoch millisecond helpers."""

from datetime import datetime, timedelta, timezone

from rsvp_token.time import now_ms, to_epoch_ms


def test_to_epoch_ms_aware():
    dt = datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert to_epoch_ms(dt) == 1_704_067_200_000


def test_to_epoch_ms_naive_is_utc():
    assert to_epoch_ms(datetime(2024, 1, 1)) == 1_704_067_200_000


def test_to_epoch_ms_other_timezone():
    dt = datetime(2024, 1, 1, 1, tzinfo=timezone(timedelta(hours=1)))
    assert to_epoch_ms(dt) == 1_704_067_200_000


def test_now_ms_is_current():
    before = to_epoch_ms(datetime.now(tz=timezone.utc))
    value = now_ms()
    after = to_epoch_ms(datetime.now(tz=timezone.utc))
    assert before <= value <= after
