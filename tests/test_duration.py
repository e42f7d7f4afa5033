"""Tests for Duration and its JSON and driver boundaries."""

from datetime import timedelta
from decimal import Decimal
from typing import Any

import pytest
from pydantic import BaseModel, ValidationError

from timetype.duration import Duration
from timetype.errors import ERR_INVALID_DURATION, ExternalError, InvalidDurationError
from timetype.literal import HOUR, MICROSECOND, MILLISECOND, MINUTE, NANOSECOND, SECOND

ONE_H_FIVE_M_THREE_S = Duration(HOUR + 5 * MINUTE + 3 * SECOND)


class TestDuration:
    def test_is_int(self) -> None:
        d = Duration(SECOND)
        assert isinstance(d, int)
        assert d + Duration(SECOND) == 2 * SECOND

    def test_default_is_zero(self) -> None:
        assert Duration() == 0

    def test_out_of_range(self) -> None:
        with pytest.raises(OverflowError):
            Duration(1 << 63)

    def test_str_is_literal(self) -> None:
        assert str(ONE_H_FIVE_M_THREE_S) == "1h5m3s"
        assert f"{Duration(1500)}" == "1.5µs"

    def test_format_spec_uses_int(self) -> None:
        assert f"{Duration(SECOND):,}" == "1,000,000,000"

    def test_repr(self) -> None:
        assert repr(Duration(42)) == "timetype.Duration(42)"

    def test_timedelta_conversions(self) -> None:
        assert Duration.from_timedelta(timedelta(hours=32)) == 32 * HOUR
        assert Duration(1500).to_timedelta() == timedelta(microseconds=1)
        assert Duration(-1500).to_timedelta() == timedelta(microseconds=-1)

    def test_seconds(self) -> None:
        assert Duration(1500 * MILLISECOND).seconds() == 1.5
        assert Duration(-SECOND).seconds() == -1.0


class TestParse:
    def test_literal(self) -> None:
        assert Duration.parse("1h5m3s") == ONE_H_FIVE_M_THREE_S

    def test_invalid_literal_is_external(self) -> None:
        with pytest.raises(ExternalError) as excinfo:
            Duration.parse("soon")
        assert str(excinfo.value) == 'time: invalid duration "soon"'

    def test_oversized_whole_part_is_external(self) -> None:
        with pytest.raises(ExternalError, match="invalid duration"):
            Duration.parse("1" * 5000 + "s")

    def test_long_fraction_is_truncated(self) -> None:
        assert Duration.parse("1." + "1" * 5000 + "s") == 1_111_111_111


class TestJson:
    def test_unmarshal_literal(self) -> None:
        assert Duration.from_json(b'"1h5m3s"') == ONE_H_FIVE_M_THREE_S

    def test_unmarshal_number(self) -> None:
        assert Duration.from_json(b"3903000000000") == ONE_H_FIVE_M_THREE_S

    def test_unmarshal_fraction_truncates(self) -> None:
        assert Duration.from_json("1.9") == 1
        assert Duration.from_json("-1.9") == -1

    @pytest.mark.parametrize("data", [b"true", b"false", b"null", b"{}", b"[]"])
    def test_wrong_shape_is_invalid_duration(self, data: bytes) -> None:
        with pytest.raises(InvalidDurationError) as excinfo:
            Duration.from_json(data)
        assert str(excinfo.value) == "timetype: invalid duration"
        assert excinfo.value == ERR_INVALID_DURATION

    def test_unquoted_literal_is_external(self) -> None:
        with pytest.raises(ExternalError):
            Duration.from_json(b"1h5m3s")

    def test_quoted_number_is_external(self) -> None:
        with pytest.raises(ExternalError) as excinfo:
            Duration.from_json(b'"123"')
        assert str(excinfo.value) == 'time: missing unit in duration "123"'

    def test_undecodable_bytes_are_external(self) -> None:
        with pytest.raises(ExternalError) as excinfo:
            Duration.from_json(b'"\xff"')
        assert isinstance(excinfo.value.cause, UnicodeDecodeError)

    def test_number_past_digit_limit_is_external(self) -> None:
        with pytest.raises(ExternalError):
            Duration.from_json(b"1" * 5000)

    def test_huge_number_is_invalid_duration(self) -> None:
        with pytest.raises(InvalidDurationError):
            Duration.from_json(b"1e30")

    def test_marshal(self) -> None:
        assert ONE_H_FIVE_M_THREE_S.to_json() == b'"1h5m3s"'

    def test_marshal_output_decodes(self) -> None:
        d = Duration(2 * HOUR + 7 * NANOSECOND)
        assert Duration.from_json(d.to_json()) == d


class TestScan:
    @pytest.mark.parametrize(
        "arg,expected",
        [
            (None, Duration(0)),
            (Duration(5 * MINUTE), Duration(5 * MINUTE)),
            (float(10 * SECOND + MICROSECOND), Duration(10 * SECOND + MICROSECOND)),
            (32 * HOUR, Duration(32 * HOUR)),
            (timedelta(hours=32), Duration(32 * HOUR)),
            ('"5h3m2s"', Duration(5 * HOUR + 3 * MINUTE + 2 * SECOND)),
            (b'"2h3m"', Duration(2 * HOUR + 3 * MINUTE)),
            ("3903000000000", ONE_H_FIVE_M_THREE_S),
        ],
    )
    def test_accepted(self, arg: Any, expected: Duration) -> None:
        result = Duration.scan(arg)
        assert result == expected
        assert type(result) is Duration

    @pytest.mark.parametrize("arg", [True, Decimal("1"), object(), [1]])
    def test_rejected_shape(self, arg: Any) -> None:
        with pytest.raises(InvalidDurationError) as excinfo:
            Duration.scan(arg)
        assert str(excinfo.value) == "timetype: invalid duration"

    @pytest.mark.parametrize("arg", [b'"\xff"', "1" * 5000, b"1" * 5000])
    def test_corrupt_driver_text_is_external(self, arg: Any) -> None:
        with pytest.raises(ExternalError):
            Duration.scan(arg)

    @pytest.mark.parametrize("arg", [float("nan"), float("inf"), 2.0**64])
    def test_non_representable_float(self, arg: float) -> None:
        with pytest.raises(InvalidDurationError):
            Duration.scan(arg)


class TestValue:
    @pytest.mark.parametrize(
        "arg",
        [
            Duration(2 * HOUR + 3 * MINUTE),
            Duration(5 * HOUR + 3 * MINUTE + 2 * SECOND),
            Duration(SECOND),
            Duration(MILLISECOND),
            Duration(NANOSECOND),
        ],
    )
    def test_renders_nanoseconds(self, arg: Duration) -> None:
        value = arg.value()
        assert value == int(arg)
        assert type(value) is int


class Job(BaseModel):
    timeout: Duration


class TestPydantic:
    @pytest.mark.parametrize("raw", ["1h5m3s", 3903000000000, timedelta(seconds=3903)])
    def test_validates(self, raw: Any) -> None:
        assert Job(timeout=raw).timeout == ONE_H_FIVE_M_THREE_S

    def test_dumps_json(self) -> None:
        assert Job(timeout=ONE_H_FIVE_M_THREE_S).model_dump_json() == '{"timeout":"1h5m3s"}'

    def test_json_roundtrip(self) -> None:
        assert Job.model_validate_json('{"timeout":"1h5m3s"}').timeout == ONE_H_FIVE_M_THREE_S

    @pytest.mark.parametrize("raw", [True, "123", [1]])
    def test_rejects(self, raw: Any) -> None:
        with pytest.raises(ValidationError):
            Job(timeout=raw)
