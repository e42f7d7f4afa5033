"""Clock: a time of day with a zone and no calendar date.

A :class:`Clock` wraps an aware ``datetime`` whose date is pinned to
:data:`EPOCH`, so only the wall-clock fields and the zone take part in
comparison and rendering.

Boundaries:

- text: :meth:`Clock.parse` (ordered layout trial)
- JSON: :meth:`Clock.from_json` / :meth:`Clock.to_json`
- storage driver: :meth:`Clock.scan` / :meth:`Clock.value`
- display: ``str()`` gives ``"HH:MM:SS Zone"``, ``repr()`` a constructor call
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from datetime import date, datetime, time, timezone, tzinfo
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from timetype.errors import ExternalError, InvalidClockError
from timetype.layouts import (
    CLOCK_DISPLAY_LAYOUT,
    CLOCK_LAYOUTS,
    CLOCK_STORAGE_LAYOUT,
    JSON_LAYOUTS,
    SCAN_LAYOUTS,
    parse_layouts,
)

logger = logging.getLogger(__name__)

UTC = timezone.utc

# Earliest date ``datetime`` can hold; stands in for "no date".
EPOCH = date(1, 1, 1)


def zone_name(tz: tzinfo) -> str:
    """Return the symbolic name of *tz* (``"UTC"``, ``"Europe/Berlin"``)."""
    key = getattr(tz, "key", None)  # zoneinfo.ZoneInfo
    if key:
        return str(key)
    return tz.tzname(None) or str(tz)


class Clock:
    """Immutable time of day in a zone."""

    __slots__ = ("_moment",)

    _moment: datetime

    def __init__(self, moment: datetime | None = None) -> None:
        if moment is None:
            moment = datetime.combine(EPOCH, time(), tzinfo=UTC)
        elif moment.tzinfo is None:
            moment = moment.replace(tzinfo=UTC)
        object.__setattr__(
            self,
            "_moment",
            moment.replace(year=EPOCH.year, month=EPOCH.month, day=EPOCH.day),
        )

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # --- Constructors ---

    @classmethod
    def from_datetime(cls, value: datetime) -> Clock:
        """Adopt the wall-clock fields and zone of *value*; naive means UTC."""
        return cls(value)

    @classmethod
    def from_time(cls, value: time) -> Clock:
        """Adopt a ``datetime.time``; naive means UTC."""
        return cls(datetime.combine(EPOCH, value))

    @classmethod
    def parse(
        cls,
        text: Any,
        layouts: Sequence[str] = CLOCK_LAYOUTS,
        tz: tzinfo = UTC,
    ) -> Clock:
        """Parse *text* with the first matching layout and attach *tz*.

        Raises:
            InvalidClockError: *text* is empty or not a string.
            UnknownFormatError: no layout matched.
        """
        if not isinstance(text, str) or not text:
            raise InvalidClockError()
        parsed = parse_layouts(text, layouts)
        return cls(parsed.replace(tzinfo=tz))

    @classmethod
    def from_json(cls, data: bytes | str) -> Clock:
        """Decode a JSON string token such as ``"19:24:00.000000"``.

        JSON carries no zone; the result is in UTC.

        Raises:
            ExternalError: *data* is not valid JSON.
            InvalidClockError: *data* is JSON but not a string.
            UnknownFormatError: the string matches no layout.
        """
        try:
            decoded = json.loads(data)
        except ValueError as exc:
            # Also undecodable bytes and integers past the digit limit.
            raise ExternalError(exc) from exc
        if not isinstance(decoded, str):
            raise InvalidClockError()
        return cls.parse(decoded, JSON_LAYOUTS)

    @classmethod
    def scan(cls, value: Any) -> Clock:
        """Convert a value read from a database driver.

        ``None`` yields the zero clock; ``datetime``/``time`` values are
        copied with their zone; text and bytes are parsed; anything else
        raises :class:`InvalidClockError`.
        """
        if value is None:
            return cls()
        if isinstance(value, Clock):
            return value
        if isinstance(value, datetime):
            return cls.from_datetime(value)
        if isinstance(value, time):
            return cls.from_time(value)
        if isinstance(value, (bytes, bytearray, memoryview)):
            try:
                value = bytes(value).decode("utf-8")
            except UnicodeDecodeError as exc:
                raise ExternalError(exc) from exc
        if isinstance(value, str):
            return cls.parse(value, SCAN_LAYOUTS)

        logger.debug("Rejected clock scan", extra={"shape": type(value).__name__})
        raise InvalidClockError()

    # --- Fields ---

    @property
    def hour(self) -> int:
        return self._moment.hour

    @property
    def minute(self) -> int:
        return self._moment.minute

    @property
    def second(self) -> int:
        return self._moment.second

    @property
    def microsecond(self) -> int:
        return self._moment.microsecond

    @property
    def nanosecond(self) -> int:
        return self._moment.microsecond * 1000

    @property
    def tzinfo(self) -> tzinfo:
        tz = self._moment.tzinfo
        assert tz is not None
        return tz

    @property
    def zone_name(self) -> str:
        return zone_name(self.tzinfo)

    def to_datetime(self) -> datetime:
        """Return the wrapped moment (dated :data:`EPOCH`)."""
        return self._moment

    def to_time(self) -> time:
        """Return an aware ``datetime.time`` with the same fields."""
        return self._moment.timetz()

    # --- Encoders ---

    def to_json(self) -> bytes:
        """Encode as a JSON string ``"HH:MM:SS.ffffff"``; the zone is dropped."""
        return f'"{self.value()}"'.encode()

    def value(self) -> str:
        """Render for a database driver as ``HH:MM:SS.ffffff``."""
        return self._moment.strftime(CLOCK_STORAGE_LAYOUT)

    def __str__(self) -> str:
        return f"{self._moment.strftime(CLOCK_DISPLAY_LAYOUT)} {self.zone_name}"

    def __repr__(self) -> str:
        return f"timetype.new_clock({self.hour}, {self.minute}, {self.second}, {self.zone_name})"

    # --- Comparison ---

    def _key(self) -> tuple[int, int, int, int, str]:
        m = self._moment
        return (m.hour, m.minute, m.second, m.microsecond, self.zone_name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Clock):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __lt__(self, other: Clock) -> bool:
        if not isinstance(other, Clock):
            return NotImplemented
        return self._moment < other._moment

    def __le__(self, other: Clock) -> bool:
        if not isinstance(other, Clock):
            return NotImplemented
        return self._moment <= other._moment

    def __gt__(self, other: Clock) -> bool:
        if not isinstance(other, Clock):
            return NotImplemented
        return self._moment > other._moment

    def __ge__(self, other: Clock) -> bool:
        if not isinstance(other, Clock):
            return NotImplemented
        return self._moment >= other._moment

    def __reduce__(self) -> tuple[type[Clock], tuple[datetime]]:
        return type(self), (self._moment,)

    # --- pydantic ---

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls.scan,
            serialization=core_schema.plain_serializer_function_ser_schema(
                cls.value, when_used="json"
            ),
        )


def new_clock(
    hour: int,
    minute: int,
    second: int,
    nanosecond: int = 0,
    tz: tzinfo = UTC,
) -> Clock:
    """Build a clock from its fields; sub-microsecond digits are dropped.

    Raises ``ValueError`` when a field is out of range.
    """
    return Clock(
        datetime.combine(EPOCH, time(hour, minute, second, nanosecond // 1000), tzinfo=tz)
    )


def new_utc_clock(hour: int, minute: int, second: int, nanosecond: int = 0) -> Clock:
    """Build a clock in UTC."""
    return new_clock(hour, minute, second, nanosecond, UTC)
