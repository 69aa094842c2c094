"""
Unit tests for timestamp layouts and the canonical export encoding
"""

from datetime import datetime, timedelta, timezone

from syslog_bridge.message.timestamps import (
    BSDFormat,
    RFC3339Format,
    format_instant,
    match_timestamp,
)

UTC = timezone.utc


class TestMatchTimestamp:
    """Test timestamp recognition"""

    def test_rfc3339_with_fraction(self):
        dt, fmt, end = match_timestamp("2016-03-08T14:59:36.293816+00:00 host")
        assert dt == datetime(2016, 3, 8, 14, 59, 36, 293816, tzinfo=UTC)
        assert fmt == RFC3339Format(fraction_digits=6, offset_style="colon")
        assert end == len("2016-03-08T14:59:36.293816+00:00")

    def test_rfc3339_zulu(self):
        dt, fmt, _ = match_timestamp("2017-04-12T13:31:11Z")
        assert dt == datetime(2017, 4, 12, 13, 31, 11, tzinfo=UTC)
        assert fmt == RFC3339Format(fraction_digits=0, offset_style="Z")

    def test_rfc3339_compact_offset(self):
        dt, fmt, _ = match_timestamp("2017-04-12T13:31:11.5-0700")
        assert dt.utcoffset() == timedelta(hours=-7)
        assert dt.microsecond == 500000
        assert fmt == RFC3339Format(fraction_digits=1, offset_style="compact")

    def test_bsd_with_year(self):
        dt, fmt, _ = match_timestamp("Aug 24 2003 05:34:00")
        assert dt == datetime(2003, 8, 24, 5, 34, 0, tzinfo=UTC)
        assert fmt == BSDFormat(day_padding=" ", with_year=True)

    def test_bsd_year_inferred(self):
        now = datetime(2024, 6, 1, tzinfo=UTC)
        dt, fmt, _ = match_timestamp("Feb  5 17:32:18", now=now)
        assert dt == datetime(2024, 2, 5, 17, 32, 18, tzinfo=UTC)
        assert fmt == BSDFormat(day_padding=" ")

    def test_bsd_future_date_goes_to_previous_year(self):
        now = datetime(2024, 1, 1, tzinfo=UTC)
        dt, _, _ = match_timestamp("Dec 31 23:59:59", now=now)
        assert dt.year == 2023

    def test_bsd_zero_padded_day(self):
        _, fmt, _ = match_timestamp("Feb 05 17:32:18")
        assert fmt.day_padding == "0"

    def test_position(self):
        line = "<4>Oct 11 22:14:15 host"
        _, _, end = match_timestamp(line, 3)
        assert line[end:] == " host"

    def test_unrecognized(self):
        assert match_timestamp("yesterday at noon") is None
        assert match_timestamp("2016-13-45T99:00:00Z") is None


class TestRender:
    """Test re-rendering in the original layout"""

    def test_rfc3339_extra_fraction_digits_pad(self):
        dt = datetime(2016, 3, 8, 14, 59, 36, 293816, tzinfo=UTC)
        assert RFC3339Format(fraction_digits=9).render(dt) == "2016-03-08T14:59:36.293816000+00:00"

    def test_rfc3339_zulu_with_offset(self):
        dt = datetime(2016, 3, 8, 14, 59, 36, tzinfo=timezone(timedelta(hours=2)))
        fmt = RFC3339Format(fraction_digits=0, offset_style="Z")
        assert fmt.render(dt) == "2016-03-08T14:59:36+02:00"
        assert fmt.render(dt.astimezone(UTC)) == "2016-03-08T12:59:36Z"

    def test_naive_treated_as_utc(self):
        dt = datetime(2016, 3, 8, 14, 59, 36)
        assert RFC3339Format(fraction_digits=0, offset_style="compact").render(dt) == "2016-03-08T14:59:36+0000"

    def test_bsd(self):
        dt = datetime(2024, 2, 5, 17, 32, 18, tzinfo=UTC)
        assert BSDFormat().render(dt) == "Feb  5 17:32:18"
        assert BSDFormat(day_padding="0").render(dt) == "Feb 05 17:32:18"
        assert BSDFormat(with_year=True).render(dt) == "Feb  5 2024 17:32:18"


class TestFormatInstant:
    """Test the canonical instant encoding"""

    def test_utc_uses_z(self):
        dt = datetime(2016, 3, 8, 14, 59, 36, 293816, tzinfo=UTC)
        assert format_instant(dt) == "2016-03-08T14:59:36.293816Z"

    def test_fraction_zeros_trimmed(self):
        dt = datetime(2016, 3, 8, 14, 59, 36, 500000, tzinfo=UTC)
        assert format_instant(dt) == "2016-03-08T14:59:36.5Z"

    def test_offset_kept(self):
        dt = datetime(2016, 3, 8, 14, 59, 36, tzinfo=timezone(timedelta(hours=-5)))
        assert format_instant(dt) == "2016-03-08T14:59:36-05:00"

    def test_zero_time(self):
        assert format_instant(datetime(1, 1, 1, tzinfo=UTC)) == "0001-01-01T00:00:00Z"
