"""Tests for payment date recovery."""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from paysplit.parsing.dates import (
    extract_timestamp,
    from_epoch_ms,
    month_number,
    to_epoch_ms,
)


def utc_ms(*args) -> int:
    """Epoch milliseconds for a UTC calendar time."""
    return to_epoch_ms(datetime(*args, tzinfo=timezone.utc))


class TestExplicitDates:
    """Full dates resolve to midnight."""

    def test_day_month_name_year(self, received_at_ms):
        text = "Rs 500 debited on 25 Dec 2023"
        assert extract_timestamp(text, received_at_ms) == utc_ms(2023, 12, 25)

    def test_dashed_day_month_name_year(self, received_at_ms):
        text = "Rs 500 debited on 25-dec-2023"
        assert extract_timestamp(text, received_at_ms) == utc_ms(2023, 12, 25)

    def test_numeric_date(self, received_at_ms):
        text = "Rs 500 debited on 05/11/2023"
        assert extract_timestamp(text, received_at_ms) == utc_ms(2023, 11, 5)

    def test_day_month_uses_receipt_year(self, received_at_ms):
        text = "Paid Rs 300 on 7 Jan"
        assert extract_timestamp(text, received_at_ms) == utc_ms(2024, 1, 7)

    def test_unknown_month_is_january(self, received_at_ms):
        text = "Rs 500 debited on 3 Foo 2023"
        assert extract_timestamp(text, received_at_ms) == utc_ms(2023, 1, 3)

    def test_time_zone_midnight(self, received_at_ms):
        tz = ZoneInfo("Asia/Kolkata")
        text = "Rs 500 debited on 25 Dec 2023"
        expected = to_epoch_ms(datetime(2023, 12, 25, tzinfo=tz))
        assert extract_timestamp(text, received_at_ms, tz) == expected


class TestTimeOfDay:
    """A bare time keeps the receipt date."""

    def test_pm_time(self, received_at_ms):
        text = "Paid Rs 250 at 2:30 PM"
        assert extract_timestamp(text, received_at_ms) == utc_ms(
            2024, 3, 10, 14, 30, 30, 250000
        )

    def test_midnight_am(self, received_at_ms):
        text = "Debited at 12:05 AM; Rs.99"
        assert extract_timestamp(text, received_at_ms) == utc_ms(
            2024, 3, 10, 0, 5, 30, 250000
        )

    def test_noon_pm(self, received_at_ms):
        text = "Debited at 12:40 PM; Rs.99"
        assert extract_timestamp(text, received_at_ms) == utc_ms(
            2024, 3, 10, 12, 40, 30, 250000
        )

    def test_24_hour_clock(self, received_at_ms):
        text = "Debited at 18:20; Rs.99"
        assert extract_timestamp(text, received_at_ms) == utc_ms(
            2024, 3, 10, 18, 20, 30, 250000
        )


class TestFallback:
    """Anything unparseable returns the receipt time unchanged."""

    def test_no_date(self, received_at_ms):
        assert extract_timestamp("Rs 100 debited", received_at_ms) == received_at_ms

    @pytest.mark.parametrize(
        "text",
        [
            "Rs 500 debited on 32/13/2024",
            "Rs 500 debited on 30 Feb 2023",
            "Debited at 25:10; Rs.99",
        ],
    )
    def test_out_of_range_values(self, text, received_at_ms):
        assert extract_timestamp(text, received_at_ms) == received_at_ms

    def test_amount_followed_by_word_hides_later_time(self, received_at_ms):
        """A number followed by three letters is taken as a day-month pair first."""
        text = "Rs 250 paid at 2:30 PM"
        # "50 pai" matches the day-month pattern, day 50 is invalid
        assert extract_timestamp(text, received_at_ms) == received_at_ms

    def test_amount_followed_by_word_can_look_like_a_date(self, received_at_ms):
        """Documented quirk: "15 for" reads as 15 January."""
        text = "Rs 15 for lunch"
        assert extract_timestamp(text, received_at_ms) == utc_ms(2024, 1, 15)


class TestReceiptTimeOutOfRange:
    """Receipt times with no calendar date are passed through."""

    FAR_FUTURE_MS = 2**62

    def test_without_date_in_text(self):
        assert extract_timestamp("Rs 10 debited", self.FAR_FUTURE_MS) == self.FAR_FUTURE_MS

    def test_with_date_in_text(self):
        text = "Paid Rs 300 on 7 Jan at 7:30 PM"
        assert extract_timestamp(text, self.FAR_FUTURE_MS) == self.FAR_FUTURE_MS

    def test_far_past(self):
        assert extract_timestamp("Paid Rs 300 at 7:30 PM", -(2**62)) == -(2**62)


class TestHelpers:
    """Conversion helpers."""

    def test_month_number_case_insensitive(self):
        assert month_number("DEC") == 12
        assert month_number("Sep") == 9

    def test_epoch_round_trip_keeps_milliseconds(self, received_at_ms):
        assert to_epoch_ms(from_epoch_ms(received_at_ms, timezone.utc)) == received_at_ms
