"""Duration: a signed count of nanoseconds.

:class:`Duration` is an ``int`` subclass, so arithmetic and comparison are
those of ``int``; results of arithmetic are plain ``int`` and can be
wrapped again with ``Duration(...)``.
"""

from __future__ import annotations

import json
import logging
import math
from datetime import timedelta
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from timetype.errors import ExternalError, InvalidDurationError
from timetype.literal import (
    MAX_NANOSECONDS,
    MICROSECOND,
    MIN_NANOSECONDS,
    SECOND,
    DurationLiteralError,
    format_duration,
    parse_duration,
)

logger = logging.getLogger(__name__)


class Duration(int):
    """Elapsed time in nanoseconds, limited to the signed 64-bit range."""

    __slots__ = ()

    def __new__(cls, nanoseconds: int = 0) -> Duration:
        value = int(nanoseconds)
        if not MIN_NANOSECONDS <= value <= MAX_NANOSECONDS:
            raise OverflowError(f"duration out of range: {value}ns")
        return super().__new__(cls, value)

    # --- Constructors ---

    @classmethod
    def from_timedelta(cls, value: timedelta) -> Duration:
        return cls(value // timedelta(microseconds=1) * MICROSECOND)

    @classmethod
    def _from_number(cls, value: int | float) -> Duration:
        # Fractional nanoseconds are truncated toward zero.
        if isinstance(value, float) and not math.isfinite(value):
            raise InvalidDurationError()
        try:
            return cls(int(value))
        except OverflowError:
            raise InvalidDurationError() from None

    @classmethod
    def parse(cls, text: str) -> Duration:
        """Parse a duration literal such as ``"1h5m3s"``.

        Raises:
            ExternalError: wrapping the literal parser's
                :class:`~timetype.literal.DurationLiteralError`.
        """
        try:
            return cls(parse_duration(text))
        except DurationLiteralError as exc:
            raise ExternalError(exc) from exc

    @classmethod
    def from_json(cls, data: bytes | str) -> Duration:
        """Decode a JSON string literal (``"1h5m3s"``) or number of nanoseconds.

        Raises:
            ExternalError: *data* is not valid JSON, or the string is not a
                valid duration literal.
            InvalidDurationError: *data* is some other JSON value.
        """
        try:
            decoded = json.loads(data)
        except ValueError as exc:
            # Also undecodable bytes and integers past the digit limit.
            raise ExternalError(exc) from exc

        if isinstance(decoded, str):
            return cls.parse(decoded)
        if isinstance(decoded, (int, float)) and not isinstance(decoded, bool):
            return cls._from_number(decoded)
        raise InvalidDurationError()

    @classmethod
    def scan(cls, value: Any) -> Duration:
        """Convert a value read from a database driver.

        Accepts ``None`` (zero), ``Duration``, ``timedelta``, integer and
        float nanosecond counts, and JSON text or bytes as understood by
        :meth:`from_json`. Anything else raises :class:`InvalidDurationError`.
        """
        if value is None:
            return cls()
        if isinstance(value, Duration):
            return value
        if isinstance(value, timedelta):
            return cls.from_timedelta(value)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return cls._from_number(value)
        if isinstance(value, (bytes, bytearray, memoryview)):
            return cls.from_json(bytes(value))
        if isinstance(value, str):
            return cls.from_json(value)

        logger.debug("Rejected duration scan", extra={"shape": type(value).__name__})
        raise InvalidDurationError()

    # --- Conversions ---

    def to_timedelta(self) -> timedelta:
        """Return a ``timedelta``; sub-microsecond digits are truncated."""
        micros = abs(int(self)) // MICROSECOND
        return timedelta(microseconds=-micros if self < 0 else micros)

    def seconds(self) -> float:
        whole, frac = divmod(abs(int(self)), SECOND)
        total = whole + frac / SECOND
        return -total if self < 0 else total

    # --- Encoders ---

    def to_json(self) -> bytes:
        """Encode as a quoted duration literal, e.g. ``b'"1h5m3s"'``."""
        return f'"{format_duration(self)}"'.encode()

    def value(self) -> int:
        """Render for a database driver as a plain nanosecond ``int``."""
        return int(self)

    def __str__(self) -> str:
        return format_duration(self)

    def __repr__(self) -> str:
        return f"timetype.Duration({int(self)})"

    def __format__(self, format_spec: str) -> str:
        if not format_spec:
            return str(self)
        return int(self).__format__(format_spec)

    # --- pydantic ---

    @classmethod
    def _validate(cls, value: Any) -> Duration:
        if isinstance(value, str):
            return cls.parse(value)
        return cls.scan(value)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                format_duration, when_used="json"
            ),
        )
