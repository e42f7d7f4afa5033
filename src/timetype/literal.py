"""Duration literals: ``"1h5m3s"``, ``"-1.5h"``, ``"300ms"``.

This is how durations are spelled in the JSON this library exchanges.
Messages of :class:`DurationLiteralError` use the ``time:`` prefix that
peer services emit for the same failures, so they can be matched across
services.
"""

from __future__ import annotations

NANOSECOND = 1
MICROSECOND = 1000 * NANOSECOND
MILLISECOND = 1000 * MICROSECOND
SECOND = 1000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE

MAX_NANOSECONDS = (1 << 63) - 1
MIN_NANOSECONDS = -(1 << 63)

UNITS: dict[str, int] = {
    "ns": NANOSECOND,
    "us": MICROSECOND,
    "µs": MICROSECOND,  # U+00B5 micro sign
    "μs": MICROSECOND,  # U+03BC Greek letter mu
    "ms": MILLISECOND,
    "s": SECOND,
    "m": MINUTE,
    "h": HOUR,
}

_DIGITS = "0123456789"

# Longer whole parts overflow int64; later fraction digits are below 1ns.
_MAX_WHOLE_DIGITS = 19
_MAX_FRACTION_DIGITS = 18


class DurationLiteralError(ValueError):
    """The text is not a valid duration literal."""


def _invalid(orig: str) -> DurationLiteralError:
    return DurationLiteralError(f'time: invalid duration "{orig}"')


def _leading_digits(s: str) -> tuple[str, str]:
    i = 0
    while i < len(s) and s[i] in _DIGITS:
        i += 1
    return s[:i], s[i:]


def parse_duration(text: str) -> int:
    """Parse a duration literal into a signed count of nanoseconds.

    A literal is an optional sign followed by one or more decimal numbers,
    each with an optional fraction and a mandatory unit suffix. ``"0"`` is
    the only unitless literal.

    Examples:
        >>> parse_duration("1h5m3s")
        3903000000000
        >>> parse_duration("-1.5ms")
        -1500000
    """
    orig = text
    s = text
    neg = False
    if s and s[0] in "+-":
        neg = s[0] == "-"
        s = s[1:]
    if s == "0":
        return 0
    if not s:
        raise _invalid(orig)

    total = 0
    while s:
        if s[0] != "." and s[0] not in _DIGITS:
            raise _invalid(orig)

        whole, s = _leading_digits(s)
        significant = whole.lstrip("0")
        if len(significant) > _MAX_WHOLE_DIGITS:
            raise _invalid(orig)
        fraction = ""
        has_fraction = False
        if s.startswith("."):
            fraction, s = _leading_digits(s[1:])
            has_fraction = bool(fraction)
        if not whole and not has_fraction:
            raise _invalid(orig)

        i = 0
        while i < len(s) and s[i] != "." and s[i] not in _DIGITS:
            i += 1
        if i == 0:
            raise DurationLiteralError(f'time: missing unit in duration "{orig}"')
        unit_name, s = s[:i], s[i:]
        unit = UNITS.get(unit_name)
        if unit is None:
            raise DurationLiteralError(f'time: unknown unit "{unit_name}" in duration "{orig}"')

        value = int(significant or "0") * unit
        if fraction:
            fraction = fraction[:_MAX_FRACTION_DIGITS]
            value += int(fraction) * unit // 10 ** len(fraction)
        total += value
        if total > -MIN_NANOSECONDS:
            raise _invalid(orig)

    if neg:
        return -total
    if total > MAX_NANOSECONDS:
        raise _invalid(orig)
    return total


def _fraction(value: int, precision: int) -> str:
    digits = f"{value:0{precision}d}".rstrip("0")
    return f".{digits}" if digits else ""


def format_duration(nanoseconds: int) -> str:
    """Render *nanoseconds* as a canonical duration literal.

    Durations under one second use the largest sub-second unit that keeps
    the integer part non-zero; longer ones use ``h``/``m``/``s`` with a
    trimmed fractional second. Zero renders as ``"0s"``.

    Examples:
        >>> format_duration(3903000000000)
        '1h5m3s'
        >>> format_duration(1500)
        '1.5µs'
    """
    sign = "-" if nanoseconds < 0 else ""
    u = abs(nanoseconds)

    if u == 0:
        return "0s"
    if u < MICROSECOND:
        return f"{sign}{u}ns"
    if u < MILLISECOND:
        whole, frac = divmod(u, MICROSECOND)
        return f"{sign}{whole}{_fraction(frac, 3)}µs"
    if u < SECOND:
        whole, frac = divmod(u, MILLISECOND)
        return f"{sign}{whole}{_fraction(frac, 6)}ms"

    seconds, frac = divmod(u, SECOND)
    text = f"{seconds % 60}{_fraction(frac, 9)}s"
    minutes = seconds // 60
    if minutes:
        text = f"{minutes % 60}m{text}"
        hours = minutes // 60
        if hours:
            text = f"{hours}h{text}"
    return sign + text
