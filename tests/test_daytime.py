import pytest

from trackermount.daytime import SECONDS_PER_DAY, DayTime, parse_meade_seconds


def test_hms_round_trip():
    assert DayTime.from_hms(14, 45, 6).get_time() == (14, 45, 6)


def test_negative_hours_sign_applies_to_whole():
    dt = DayTime.from_hms(-3, 15, 20)
    assert dt.total_seconds == -DayTime.from_hms(3, 15, 20).total_seconds
    assert dt.get_time() == (-3, 15, 20)


def test_zero_hours_keep_minutes():
    dt = DayTime.from_hms(0, 30, 0)
    assert dt.minutes == 30
    assert dt.hours == 0


def test_from_hours_matches_hms():
    assert DayTime.from_hours(1.5) == DayTime.from_hms(1, 30, 0)
    assert DayTime.from_hours(-2.25) == DayTime.from_hms(-2, 15, 0)


def test_total_hours_round_trip():
    assert DayTime.from_hours(7.125).total_hours == pytest.approx(7.125)
    assert DayTime.from_hms(2, 30, 0).total_minutes == pytest.approx(150.0)


def test_parse_ra_string():
    assert DayTime.parse_meade("23:44:22").get_time() == (23, 44, 22)


def test_parse_signed_dec_string():
    assert DayTime.parse_meade("-45*32:11").get_time() == (-45, 32, 11)
    assert parse_meade_seconds("+45*32:11") == -parse_meade_seconds("-45*32:11")


def test_parse_three_digit_degrees():
    assert DayTime.parse_meade("123:45:06") == DayTime.from_hms(123, 45, 6)


def test_parse_without_seconds():
    assert DayTime.parse_meade("12:34") == DayTime.from_hms(12, 34, 0)


@pytest.mark.parametrize("text", ["", "ab:cd:ef", "-x5:00:00", "4"])
def test_parse_rejects_garbage(text):
    with pytest.raises(ValueError):
        parse_meade_seconds(text)


def test_add_hours_wraps_days():
    dt = DayTime()
    dt.add_hours(25)
    assert dt == DayTime.from_hms(1, 0, 0)


def test_add_seconds_wraps_backwards():
    dt = DayTime()
    dt.add_seconds(-1)
    assert dt.get_time() == (23, 59, 59)


@pytest.mark.parametrize("delta", [-100000, -1, 0, 59, 86400, 200000])
def test_normalized_range_invariant(delta):
    dt = DayTime.from_hms(12, 0, 0)
    dt.add_seconds(delta)
    assert 0 <= dt.total_seconds < SECONDS_PER_DAY
    assert (dt.total_seconds - (12 * 3600 + delta)) % SECONDS_PER_DAY == 0


def test_add_and_subtract_time_cancel():
    dt = DayTime.from_hms(10, 20, 30)
    other = DayTime.from_hms(20, 50, 45)
    dt.add_time(other)
    dt.subtract_time(other)
    assert dt == DayTime.from_hms(10, 20, 30)


def test_add_minutes_crosses_hour():
    dt = DayTime.from_hms(5, 59, 0)
    dt.add_minutes(1)
    assert dt == DayTime.from_hms(6, 0, 0)


def test_set_normalizes():
    dt = DayTime()
    dt.set(26, 0, 0)
    assert dt == DayTime.from_hms(2, 0, 0)
    dt.set_time(DayTime.from_hms(-1, 0, 0))
    assert dt == DayTime.from_hms(23, 0, 0)


def test_format_fields():
    assert DayTime.from_hms(5, 7, 9).format("{d}:{m}:{s}") == "+05:07:09"


def test_format_three_digit_degrees_and_override():
    dt = DayTime.from_hms(123, 4, 5)
    assert dt.format("{d}") == "+123"
    other = DayTime.from_hms(-8, 4, 5)
    assert dt.format("{d}/{m}/{s}", other.total_seconds) == other.format("{d}/{m}/{s}")
    assert other.format("{d}").startswith("-")


def test_format_ignores_stray_brace_and_unknown_macro():
    result = DayTime.from_hms(1, 2, 3).format("a}b{x}{m}")
    assert "}" not in result
    assert result == "ab" + DayTime.from_hms(1, 2, 3).format("{m}")


def test_to_string():
    assert DayTime.from_hms(14, 45, 6).to_string().startswith("14:45:06 (")
    assert str(DayTime.from_hms(-2, 30, 0)).startswith("-02:30:00 (")