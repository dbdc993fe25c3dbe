"""Summaries of study statistics for display."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from focushub.app_data import Stats, month_key


def total_study_seconds(stats: Stats) -> int:
    """Lifetime study time in seconds."""
    return sum(stats.daily_study_seconds.values())


def format_lifetime(seconds: int) -> str:
    """Render seconds as ``Nd Nh Nm Ns``."""
    days, rest = divmod(seconds, 24 * 3600)
    hours, rest = divmod(rest, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{days}d {hours}h {minutes}m {secs}s"


def format_clock_duration(seconds: int) -> str:
    """Render seconds as ``HH:MM:SS``."""
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02}:{minutes:02}:{secs:02}"


@dataclass(frozen=True)
class TodaySummary:
    sessions: int
    study_seconds: int
    month_sessions: int

    @property
    def time_studied(self) -> str:
        return format_clock_duration(self.study_seconds)


def today_summary(stats: Stats, today: date | None = None) -> TodaySummary:
    """Sessions and study time for ``today`` and sessions for its month."""
    today = date.today() if today is None else today
    return TodaySummary(
        sessions=stats.daily_streaks.get(today, 0),
        study_seconds=stats.daily_study_seconds.get(today, 0),
        month_sessions=stats.monthly_streaks.get(month_key(today), 0),
    )