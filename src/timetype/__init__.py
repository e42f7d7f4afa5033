"""timetype — time-of-day and duration values for JSON and SQL boundaries."""

from timetype.clock import EPOCH, UTC, Clock, new_clock, new_utc_clock
from timetype.duration import Duration
from timetype.errors import (
    ERR_INVALID_CLOCK,
    ERR_INVALID_DURATION,
    ExternalError,
    InvalidClockError,
    InvalidDurationError,
    InvalidValueError,
    TimetypeError,
    UnknownFormatError,
)
from timetype.layouts import CLOCK_LAYOUT, CLOCK_LAYOUTS, CLOCK_MICRO_LAYOUT
from timetype.literal import (
    HOUR,
    MICROSECOND,
    MILLISECOND,
    MINUTE,
    NANOSECOND,
    SECOND,
    DurationLiteralError,
)

__version__ = "0.1.0"

__all__ = [
    "CLOCK_LAYOUT",
    "CLOCK_LAYOUTS",
    "CLOCK_MICRO_LAYOUT",
    "EPOCH",
    "ERR_INVALID_CLOCK",
    "ERR_INVALID_DURATION",
    "HOUR",
    "MICROSECOND",
    "MILLISECOND",
    "MINUTE",
    "NANOSECOND",
    "SECOND",
    "UTC",
    "Clock",
    "Duration",
    "DurationLiteralError",
    "ExternalError",
    "InvalidClockError",
    "InvalidDurationError",
    "InvalidValueError",
    "TimetypeError",
    "UnknownFormatError",
    "__version__",
    "new_clock",
    "new_utc_clock",
]
