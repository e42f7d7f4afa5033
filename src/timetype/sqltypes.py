"""SQLAlchemy column types backed by the driver scan/value pair.

``ClockType`` stores clocks as ``HH:MM:SS.ffffff`` text and
``DurationType`` stores durations as a nanosecond ``BIGINT``. Both work
with SQLAlchemy Core and the ORM; ``None`` maps to SQL ``NULL``.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import BigInteger, String
from sqlalchemy.engine import Dialect
from sqlalchemy.types import TypeDecorator

from timetype.clock import Clock
from timetype.duration import Duration

CLOCK_COLUMN_LENGTH = len("00:00:00.000000")


class ClockType(TypeDecorator[Clock]):
    """Clock column stored as fixed-width text."""

    impl = String(CLOCK_COLUMN_LENGTH)
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Dialect) -> str | None:
        if value is None:
            return None
        return Clock.scan(value).value()

    def process_result_value(self, value: Any, dialect: Dialect) -> Clock | None:
        if value is None:
            return None
        return Clock.scan(value)

    @property
    def python_type(self) -> type[Clock]:
        return Clock


class DurationType(TypeDecorator[Duration]):
    """Duration column stored as nanoseconds."""

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Dialect) -> int | None:
        if value is None:
            return None
        if isinstance(value, str):
            return Duration.parse(value).value()
        return Duration.scan(value).value()

    def process_result_value(self, value: Any, dialect: Dialect) -> Duration | None:
        if value is None:
            return None
        return Duration.scan(value)

    @property
    def python_type(self) -> type[Duration]:
        return Duration
