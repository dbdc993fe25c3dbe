"""Presentation and settings logic for the main timer panel."""

from __future__ import annotations

from focushub.timer import StudyTimer, TimerMode

WORK_MINUTES_MAX = 120
BREAK_MINUTES_MAX = 60
SECONDS_MAX = 59
LOOPS_MIN = 1
LOOPS_MAX = 20


def mode_label(timer: StudyTimer) -> str:
    """Label such as ``Study Time (1/4)``."""
    text = "Study Time" if timer.timer_mode is TimerMode.WORK else "Break Time"
    return f"{text} ({timer.current_loop}/{timer.total_loops})"


def format_remaining(seconds: float) -> str:
    """Whole seconds as ``MM:SS``."""
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes:02}:{secs:02}"


def progress(timer: StudyTimer) -> float | None:
    """Fraction of the current session elapsed, or None for a zero-length session."""
    total = timer.work_duration if timer.timer_mode is TimerMode.WORK else timer.break_duration
    if int(total) <= 0:
        return None
    return 1.0 - timer.time_remaining / total


def split_duration(seconds: float) -> tuple[int, int]:
    """Whole minutes and remaining seconds of a duration."""
    return divmod(int(seconds), 60)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, int(value)))


def apply_settings(
    timer: StudyTimer,
    work_mins: int,
    work_secs: int,
    break_mins: int,
    break_secs: int,
    total_loops: int,
) -> bool:
    """Apply edited settings, clamped to their ranges.

    The timer is reset only when something actually changed; returns whether it did.
    """
    work = _clamp(work_mins, 0, WORK_MINUTES_MAX) * 60 + _clamp(work_secs, 0, SECONDS_MAX)
    rest = _clamp(break_mins, 0, BREAK_MINUTES_MAX) * 60 + _clamp(break_secs, 0, SECONDS_MAX)
    loops = _clamp(total_loops, LOOPS_MIN, LOOPS_MAX)
    current = (int(timer.work_duration), int(timer.break_duration), timer.total_loops)
    if (work, rest, loops) == current:
        return False
    timer.set_durations(work, rest, loops)
    return True