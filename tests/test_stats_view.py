from datetime import date

import pytest

from focushub.app_data import Stats, month_key
from focushub.stats_view import (
    format_clock_duration,
    format_lifetime,
    today_summary,
    total_study_seconds,
)


def test_total_of_empty_stats_is_zero():
    assert total_study_seconds(Stats()) == 0


def test_total_grows_by_added_day():
    stats = Stats(daily_study_seconds={date(2024, 3, 1): 125})
    before = total_study_seconds(stats)
    stats.daily_study_seconds[date(2024, 3, 2)] = 4000
    assert total_study_seconds(stats) == before + 4000
    assert before == 125


def test_format_lifetime_zero():
    assert format_lifetime(0) == "0d 0h 0m 0s"


@pytest.mark.parametrize("d,h,m,s", [(0, 0, 0, 59), (0, 1, 2, 3), (3, 23, 59, 59), (12, 0, 30, 0)])
def test_format_lifetime_components(d, h, m, s):
    seconds = d * 86400 + h * 3600 + m * 60 + s
    assert format_lifetime(seconds) == f"{d}d {h}h {m}m {s}s"


@pytest.mark.parametrize("h,m,s", [(0, 0, 0), (0, 5, 9), (2, 30, 15), (27, 1, 1)])
def test_format_clock_duration(h, m, s):
    assert format_clock_duration(h * 3600 + m * 60 + s) == f"{h:02}:{m:02}:{s:02}"


def test_today_summary_reads_today_and_month():
    today = date(2024, 5, 17)
    stats = Stats(
        daily_study_seconds={today: 3725, date(2024, 5, 16): 100},
        daily_streaks={today: 3, date(2024, 5, 1): 9},
        monthly_streaks={month_key(today): 12, "2024-4": 7},
    )
    summary = today_summary(stats, today)
    assert summary.sessions == 3
    assert summary.study_seconds == 3725
    assert summary.month_sessions == 12
    assert summary.time_studied == format_clock_duration(3725)


def test_today_summary_defaults_to_zero():
    summary = today_summary(Stats(daily_streaks={date(2020, 1, 1): 4}), date(2024, 5, 17))
    assert (summary.sessions, summary.study_seconds, summary.month_sessions) == (0, 0, 0)