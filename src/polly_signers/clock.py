# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from datetime import UTC, datetime
from typing import Protocol, runtime_checkable

SIGV4_TIMESTAMP_FORMAT: str = "%Y%m%dT%H%M%SZ"


@runtime_checkable
class Clock(Protocol):
    """Source of the current instant used when signing a request."""

    def now(self) -> datetime:
        """Return the current time as a timezone-aware UTC datetime."""
        ...


class SystemClock:
    """Wall clock time."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedClock:
    """A clock that always reports the same instant."""

    def __init__(self, instant: datetime) -> None:
        self._instant = _to_utc(instant)

    def now(self) -> datetime:
        return self._instant


def format_amz_date(instant: datetime) -> str:
    """Format an instant as a SigV4 timestamp, e.g. ``20240101T000000Z``."""
    return _to_utc(instant).strftime(SIGV4_TIMESTAMP_FORMAT)


def date_stamp(amz_date: str) -> str:
    """The ``YYYYMMDD`` date a SigV4 timestamp falls on.

    The timestamp is not validated; whatever precedes the ``T`` is used as is.
    """
    return amz_date[0:8]


def _to_utc(instant: datetime) -> datetime:
    # Naive values are taken to already be in UTC.
    if instant.tzinfo is None:
        return instant.replace(tzinfo=UTC, microsecond=0)
    return instant.astimezone(UTC).replace(microsecond=0)
