from datetime import date, datetime, timedelta

import pytest

from lendtrack.utils.penalty import (
    InvalidInputError,
    LendingState,
    Severity,
    StatusLabel,
    calculate_penalty,
    format_amount,
    format_date,
    get_book_status,
    get_days_display,
    loan_progress,
    parse_date,
)

DEADLINE = date(2024, 1, 10)


def _after(days):
    return DEADLINE + timedelta(days=days)


class TestCalculatePenalty:
    @pytest.mark.parametrize("days", [-30, -1, 0])
    def test_zero_on_or_before_deadline(self, days):
        assert calculate_penalty(DEADLINE, _after(days)) == 0

    @pytest.mark.parametrize("days, expected", [
        (1, 5),
        (5, 25),
        (6, 35),
        (10, 75),
    ])
    def test_tiered_rates(self, days, expected):
        assert calculate_penalty(DEADLINE, _after(days)) == expected

    def test_monotonic_in_days_overdue(self):
        values = [calculate_penalty(DEADLINE, _after(d)) for d in range(-5, 40)]
        assert values == sorted(values)

    def test_returned_book_accrues_nothing(self):
        assert calculate_penalty(DEADLINE, _after(20), status="returned") == 0
        assert calculate_penalty(DEADLINE, _after(20), status=LendingState.RETURNED) == 0

    def test_accepts_iso_strings(self):
        assert calculate_penalty("2024-01-10", "2024-01-16") == 35

    def test_time_of_day_is_ignored(self):
        # gün sonu ile gün başı aynı gün sayılır
        assert calculate_penalty("2024-01-10", datetime(2024, 1, 11, 0, 1)) == 5
        assert calculate_penalty("2024-01-10", datetime(2024, 1, 11, 23, 59)) == 5
        assert calculate_penalty("2024-01-10T18:00:00", "2024-01-10T23:00:00") == 0

    def test_malformed_date_raises(self):
        with pytest.raises(InvalidInputError):
            calculate_penalty("not-a-date", DEADLINE)
        with pytest.raises(InvalidInputError):
            calculate_penalty(DEADLINE, "2024-13-01")

    def test_unknown_status_raises(self):
        with pytest.raises(InvalidInputError):
            calculate_penalty(DEADLINE, _after(3), status="lost")

    def test_invalid_input_is_a_value_error(self):
        with pytest.raises(ValueError):
            calculate_penalty(None, DEADLINE)


class TestGetBookStatus:
    @pytest.mark.parametrize("deadline", ["2000-01-01", "2024-01-10", "2999-12-31"])
    def test_returned_regardless_of_date(self, deadline):
        status = get_book_status(deadline, "returned", DEADLINE)
        assert status.label is StatusLabel.RETURNED
        assert status.severity is Severity.SUCCESS

    @pytest.mark.parametrize("days_until_due, label, severity", [
        (-1, StatusLabel.OVERDUE, Severity.DESTRUCTIVE),
        (0, StatusLabel.DUE_SOON, Severity.WARNING),
        (3, StatusLabel.DUE_SOON, Severity.WARNING),
        (4, StatusLabel.BORROWED, Severity.DEFAULT),
    ])
    def test_boundaries(self, days_until_due, label, severity):
        as_of = DEADLINE - timedelta(days=days_until_due)
        assert get_book_status(DEADLINE, "borrowed", as_of) == (label, severity)

    def test_status_is_case_insensitive(self):
        assert get_book_status(DEADLINE, "RETURNED", DEADLINE).label is StatusLabel.RETURNED

    def test_label_values(self):
        assert StatusLabel.DUE_SOON.value == "Due Soon"
        assert Severity.DESTRUCTIVE.value == "destructive"


class TestGetDaysDisplay:
    def test_returned(self):
        assert get_days_display(DEADLINE, "returned", _after(10)) == "Returned"

    @pytest.mark.parametrize("days_left, text", [
        (0, "0 days left"),
        (1, "1 day left"),
        (2, "2 days left"),
    ])
    def test_days_left(self, days_left, text):
        assert get_days_display(DEADLINE, "borrowed", _after(-days_left)) == text

    @pytest.mark.parametrize("days_overdue, text", [
        (1, "Overdue by 1 day"),
        (6, "Overdue by 6 days"),
    ])
    def test_overdue(self, days_overdue, text):
        assert get_days_display(DEADLINE, "borrowed", _after(days_overdue)) == text


class TestScenarios:
    def test_six_days_overdue(self):
        as_of = date(2024, 1, 16)
        assert calculate_penalty("2024-01-10", as_of) == 35
        assert get_book_status("2024-01-10", "borrowed", as_of).label is StatusLabel.OVERDUE
        assert get_days_display("2024-01-10", "borrowed", as_of) == "Overdue by 6 days"

    def test_due_today(self):
        as_of = date(2024, 1, 10)
        assert calculate_penalty("2024-01-10", as_of) == 0
        assert get_book_status("2024-01-10", "borrowed", as_of).label is StatusLabel.DUE_SOON


class TestFormatting:
    @pytest.mark.parametrize("value, text", [
        ("2024-01-10", "10 Jan 2024"),
        (date(2023, 12, 5), "5 Dec 2023"),
        (datetime(2024, 6, 30, 22, 15), "30 Jun 2024"),
    ])
    def test_format_date(self, value, text):
        assert format_date(value) == text

    def test_format_date_rejects_garbage(self):
        with pytest.raises(InvalidInputError):
            format_date("10/01/2024")

    def test_format_amount(self):
        assert format_amount(35) == "₹35"

    def test_parse_date_strips_time(self):
        assert parse_date("2024-01-10T10:30:00+05:30") == DEADLINE
        assert parse_date(" 2024-01-10 ") == DEADLINE


class TestLoanProgress:
    def test_half_way(self):
        assert loan_progress("2024-01-01", "2024-01-11", "borrowed", "2024-01-06") == 50

    def test_clamped(self):
        assert loan_progress("2024-01-01", "2024-01-11", "borrowed", "2023-12-25") == 0
        assert loan_progress("2024-01-01", "2024-01-11", "borrowed", "2024-02-01") == 100

    def test_returned_is_complete(self):
        assert loan_progress("2024-01-01", "2024-01-11", "returned", "2024-01-02") == 100

    def test_half_rounds_up(self):
        # 1 / 8 gün = 12.5%
        assert loan_progress("2024-01-01", "2024-01-09", "borrowed", "2024-01-02") == 13
        # 3 / 8 gün = 37.5%
        assert loan_progress("2024-01-01", "2024-01-09", "borrowed", "2024-01-04") == 38

    def test_same_day_loan(self):
        assert loan_progress("2024-01-10", "2024-01-10", "borrowed", "2024-01-09") == 0
        assert loan_progress("2024-01-10", "2024-01-10", "borrowed", "2024-01-10") == 100
