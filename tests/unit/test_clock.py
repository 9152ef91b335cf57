from datetime import UTC, datetime, timedelta, timezone

from freezegun import freeze_time
from polly_signers.clock import (
    Clock,
    FixedClock,
    SystemClock,
    date_stamp,
    format_amz_date,
)


def test_formats() -> None:
    instant = datetime(2024, 1, 1, 0, 0, 0, tzinfo=UTC)
    assert format_amz_date(instant) == "20240101T000000Z"
    assert date_stamp(format_amz_date(instant)) == "20240101"


def test_naive_datetime_is_utc() -> None:
    assert format_amz_date(datetime(2015, 8, 30, 12, 36, 0)) == "20150830T123600Z"


def test_aware_datetime_is_converted_to_utc() -> None:
    pacific = timezone(timedelta(hours=-8))
    instant = datetime(2023, 12, 31, 17, 30, 15, 999999, tzinfo=pacific)
    assert format_amz_date(instant) == "20240101T013015Z"
    assert date_stamp(format_amz_date(instant)) == "20240101"


def test_date_stamp_does_not_validate() -> None:
    assert date_stamp("20240101T000000Z") == "20240101"
    assert date_stamp("bogus") == "bogus"


def test_fixed_clock() -> None:
    clock = FixedClock(datetime(2024, 1, 1, 0, 0, 0, 500, tzinfo=UTC))
    assert isinstance(clock, Clock)
    assert clock.now() == datetime(2024, 1, 1, tzinfo=UTC)
    assert clock.now() is clock.now()


@freeze_time("2024-03-04 05:06:07")
def test_system_clock() -> None:
    clock = SystemClock()
    assert isinstance(clock, Clock)
    assert format_amz_date(clock.now()) == "20240304T050607Z"
