from datetime import datetime, timezone
import locale

import pytest

from rss_maker.dates import format_timestamp, load_timezone, parse_feed_date
from rss_maker.exceptions import TimezoneError


class TestFormatTimestamp:
    def test_new_year_in_yekaterinburg(self) -> None:
        tz = load_timezone("Asia/Yekaterinburg")
        assert format_timestamp(1609459200, tz) == "Fri, Jan 1 2021 05:00:00 +0500"

    def test_day_is_not_zero_padded(self) -> None:
        tz = load_timezone("UTC")
        assert format_timestamp(1612137600 + 3 * 86400 + 3661, tz) == "Thu, Feb 4 2021 01:01:01 +0000"

    def test_none_gives_empty_string(self) -> None:
        assert format_timestamp(None, load_timezone("UTC")) == ""

    def test_out_of_range_gives_empty_string(self) -> None:
        assert format_timestamp(10 ** 20, load_timezone("UTC")) == ""

    def test_every_month_and_weekday_uses_english_names(self) -> None:
        tz = load_timezone("UTC")
        months = [format_timestamp(int(datetime(2021, m, 1, tzinfo=timezone.utc).timestamp()), tz) for m in range(1, 13)]
        assert [m.split()[1] for m in months] == [
            "Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
        ]
        days = [format_timestamp(1609459200 + d * 86400, tz) for d in range(7)]
        assert [d[:3] for d in days] == ["Fri", "Sat", "Sun", "Mon", "Tue", "Wed", "Thu"]

    def test_output_ignores_process_locale(self) -> None:
        saved = locale.setlocale(locale.LC_TIME)
        for name in ("de_DE.UTF-8", "de_DE.utf8", "fr_FR.UTF-8", "ru_RU.UTF-8"):
            try:
                locale.setlocale(locale.LC_TIME, name)
                break
            except locale.Error:
                continue
        else:
            pytest.skip("no non-English locale installed")
        try:
            result = format_timestamp(1612137600, load_timezone("UTC"))
        finally:
            locale.setlocale(locale.LC_TIME, saved)
        assert result == "Mon, Feb 1 2021 00:00:00 +0000"


class TestLoadTimezone:
    def test_unknown_zone(self) -> None:
        with pytest.raises(TimezoneError):
            load_timezone("Nowhere/Atlantis")

    def test_invalid_key(self) -> None:
        with pytest.raises(TimezoneError):
            load_timezone("../etc/passwd")


class TestParseFeedDate:
    def test_round_trip_to_the_same_instant(self) -> None:
        formatted = format_timestamp(1609459200, load_timezone("Asia/Yekaterinburg"))
        assert parse_feed_date(formatted) == datetime(2021, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.parametrize("ts", [0, 1609459200, 1700000000, 1720000000])
    def test_round_trip_timestamps(self, ts) -> None:
        formatted = format_timestamp(ts, load_timezone("Asia/Yekaterinburg"))
        assert parse_feed_date(formatted).timestamp() == ts

    def test_standard_rfc822(self) -> None:
        assert parse_feed_date("Fri, 01 Jan 2021 00:00:00 +0000") == datetime(2021, 1, 1, tzinfo=timezone.utc)

    def test_unreadable_values(self) -> None:
        assert parse_feed_date("") is None
        assert parse_feed_date("not a date") is None
