"""Error taxonomy shared by the clock and duration codecs.

Three kinds, from least to most specific about the cause:

- Sentinel (:class:`InvalidClockError`, :class:`InvalidDurationError`):
  the input has the wrong *shape* for the operation. Every instance of a
  sentinel class compares equal to the module-level constant
  (:data:`ERR_INVALID_CLOCK`, :data:`ERR_INVALID_DURATION`).
- :class:`UnknownFormatError`: the input is text, but no layout parsed it.
- :class:`ExternalError`: a collaborator (JSON decoder, duration-literal
  parser) rejected the input; its message is forwarded untouched.

All kinds derive from :class:`ValueError` so they surface as validation
errors wherever Python expects conversion failures.
"""

from __future__ import annotations

from collections.abc import Sequence

ERROR_PREFIX = "timetype: "


class TimetypeError(ValueError):
    """Base class for every error raised by ``timetype``."""


class InvalidValueError(TimetypeError):
    """Sentinel kind: the input has the wrong shape for the operation.

    Instances carry no per-failure state, so equality is by kind and message.
    """

    message = ERROR_PREFIX + "invalid value"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InvalidValueError):
            return NotImplemented
        return type(self) is type(other) and self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class InvalidClockError(InvalidValueError):
    """The value cannot represent a clock at all."""

    message = ERROR_PREFIX + "invalid clock"


class InvalidDurationError(InvalidValueError):
    """The value cannot represent a duration at all."""

    message = ERROR_PREFIX + "invalid duration"


ERR_INVALID_CLOCK = InvalidClockError()
ERR_INVALID_DURATION = InvalidDurationError()


class UnknownFormatError(TimetypeError):
    """No layout in an ordered trial could parse *value*.

    Attributes:
        value: The offending input text.
        layouts: Layouts tried, in trial order.
        errors: One parser error per layout, same order as *layouts*.
    """

    def __init__(
        self,
        value: str,
        layouts: Sequence[str],
        errors: Sequence[Exception] = (),
    ) -> None:
        self.value = value
        self.layouts = tuple(layouts)
        self.errors = tuple(errors)
        quoted = ", ".join(f'"{layout}"' for layout in self.layouts)
        super().__init__(f'{ERROR_PREFIX}failed to parse "{value}" in layouts: [{quoted}]')

    def __reduce__(self) -> tuple[type[UnknownFormatError], tuple[object, ...]]:
        return type(self), (self.value, self.layouts, self.errors)


class ExternalError(TimetypeError):
    """A collaborator's error, forwarded with its message unchanged."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(str(cause))

    def __reduce__(self) -> tuple[type[ExternalError], tuple[BaseException]]:
        return type(self), (self.cause,)
