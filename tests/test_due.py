"""Tests for due-date normalization and tag helpers."""

import re
from datetime import datetime

import pytest

from pompom.core.due import normalize_due_local, parse_due_or_null, to_iso_from_any
from pompom.core.tags import extract_tags_from_text, parse_tags_from_string


@pytest.fixture
def now():
    # Tuesday
    return datetime(2025, 8, 19, 12, 0)


class TestNormalizeDueLocal:
    def test_today_defaults_to_five_pm(self, now):
        result = normalize_due_local("today", now)
        assert re.search(r"T\d{2}:\d{2}$", result)
        assert result == "2025-08-19T17:00"

    def test_tomorrow_with_time(self, now):
        assert normalize_due_local("tomorrow 9am", now) == "2025-08-20T09:00"

    def test_in_days_with_time(self, now):
        assert normalize_due_local("in 2 days 4pm", now) == "2025-08-21T16:00"

    def test_in_days_default_time(self, now):
        assert normalize_due_local("in 2 days", now) == "2025-08-21T17:00"

    def test_in_one_day(self, now):
        assert normalize_due_local("in 1 day", now) == "2025-08-20T17:00"

    def test_in_hours_keeps_clock_time(self):
        now = datetime(2025, 8, 19, 12, 7, 45)
        assert normalize_due_local("in 3 hours", now) == "2025-08-19T15:07"

    def test_in_hours_crosses_midnight(self):
        now = datetime(2025, 8, 19, 22, 30)
        assert normalize_due_local("in 2 hours", now) == "2025-08-20T00:30"

    def test_weekday_with_time(self, now):
        assert normalize_due_local("fri 3:30pm", now) == "2025-08-22T15:30"

    def test_same_weekday_is_next_week(self, now):
        assert normalize_due_local("tue", now) == "2025-08-26T17:00"

    def test_generic_date(self, now):
        assert normalize_due_local("2025-09-01", now) == "2025-09-01T17:00"

    def test_generic_date_with_time(self, now):
        assert normalize_due_local("2025-09-01 10:30", now) == "2025-09-01T10:30"

    def test_unrecognized_falls_back_to_tomorrow(self, now):
        assert normalize_due_local("someday", now) == "2025-08-20T17:00"

    def test_empty_falls_back_to_tomorrow(self, now):
        assert normalize_due_local("", now) == "2025-08-20T17:00"

    def test_in_hours_with_explicit_time(self, now):
        assert normalize_due_local("in 20 hours 9am", now) == "2025-08-20T09:00"

    def test_time_only_is_not_a_date(self, now):
        assert normalize_due_local("3pm", now) == "2025-08-20T17:00"

    def test_bare_number_is_not_a_date(self, now):
        assert normalize_due_local("10", now) == "2025-08-20T17:00"

    def test_month_and_day_without_year(self, now):
        assert normalize_due_local("Sep 5", now) == "2025-09-05T17:00"

    @pytest.mark.parametrize(
        "text",
        ["in 99999999 days", "in 99999999999999999999 days", "in 999999999999 hours"],
    )
    def test_huge_relative_offset_falls_back(self, now, text):
        assert normalize_due_local(text, now) == "2025-08-20T17:00"

    def test_end_of_calendar(self):
        last_day = datetime(9999, 12, 31, 12, 0)
        assert normalize_due_local("tomorrow", last_day) == "9999-12-31T17:00"
        assert normalize_due_local("in 5 days", last_day) == "9999-12-31T17:00"

    def test_uses_wall_clock_by_default(self):
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T17:00", normalize_due_local("today"))


class TestParseDueOrNull:
    def test_no_signal(self, now):
        assert parse_due_or_null("someday", now) is None
        assert parse_due_or_null("", now) is None
        assert parse_due_or_null(None, now) is None

    def test_tomorrow(self, now):
        assert parse_due_or_null("meet tomorrow", now) == "2025-08-20T17:00"

    def test_weekday(self, now):
        assert parse_due_or_null("next wed 2pm", now) == "2025-08-20T14:00"

    def test_relative(self, now):
        assert parse_due_or_null("call back in 4 hours", now) == "2025-08-19T16:00"

    def test_date_without_signal_is_ignored(self, now):
        assert parse_due_or_null("2025-09-01", now) is None

    def test_without_now(self):
        assert parse_due_or_null("meet tomorrow") is not None

    def test_huge_relative_offset(self, now):
        assert parse_due_or_null("ship in 99999999 days", now) == "2025-08-20T17:00"

    def test_in_needs_word_boundary(self, now):
        assert parse_due_or_null("respond within 2 days", now) is None


class TestToIsoFromAny:
    def test_local_stamp(self):
        assert re.search(r"T\d{2}:\d{2}:00\.000Z$", to_iso_from_any("2025-08-14T15:30"))

    def test_space_separated(self):
        assert re.search(r"T\d{2}:\d{2}:00\.000Z$", to_iso_from_any("2025-08-14 15:30"))

    def test_utc_input(self):
        assert to_iso_from_any("2025-08-14T15:30:00Z") == "2025-08-14T15:30:00.000Z"

    def test_offset_input(self):
        assert to_iso_from_any("2025-08-14T15:30:00+02:00") == "2025-08-14T13:30:00.000Z"

    def test_blank(self):
        assert to_iso_from_any("") == ""
        assert to_iso_from_any(None) == ""

    def test_unparseable(self):
        assert to_iso_from_any("not a date") == ""


class TestTags:
    def test_extract_tags_from_text(self):
        clean, tags = extract_tags_from_text("Finish #Report for #Team alpha")
        assert sorted(tags) == ["report", "team"]
        assert "finish" in clean.lower()
        assert "#" not in clean
        assert clean == "Finish for alpha"

    def test_extract_tags_dedupes(self):
        _, tags = extract_tags_from_text("#bug fix #BUG #ui-polish #v2_beta")
        assert tags == ["bug", "ui-polish", "v2_beta"]

    def test_extract_tags_none(self):
        assert extract_tags_from_text(None) == ("", [])

    def test_parse_tags_from_string(self):
        assert parse_tags_from_string("#bug urgent, backlog  ") == ["bug", "urgent", "backlog"]

    def test_parse_tags_keeps_first_seen_order(self):
        assert parse_tags_from_string("Later,#now, later ,NOW") == ["later", "now"]

    def test_parse_tags_empty(self):
        assert parse_tags_from_string("") == []
        assert parse_tags_from_string(" , ,") == []
        assert parse_tags_from_string(None) == []
