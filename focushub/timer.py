"""Pomodoro study timer with work/break sessions and statistics."""

from __future__ import annotations

import math
import time
from array import array
from datetime import date
from enum import Enum
from typing import Callable

from focushub.app_data import Stats, month_key

BEEP_FREQUENCY = 440.0
BEEP_DURATION = 0.4
BEEP_AMPLITUDE = 0.20
SAMPLE_RATE = 48000

_playing: list = []


class TimerMode(Enum):
    WORK = "work"
    BREAK = "break"


class TimerState(Enum):
    PAUSED = "paused"
    RUNNING = "running"


class StudyTimer:
    """Alternates work and break sessions for a number of loops.

    Durations are in seconds; ``now`` values come from a monotonic clock.
    """

    def __init__(
        self,
        stats: Stats,
        work_duration: float,
        break_duration: float,
        total_loops: int,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.work_duration = work_duration
        self.break_duration = break_duration
        self.total_loops = total_loops
        self.stats = stats
        self.timer_mode = TimerMode.WORK
        self.timer_state = TimerState.PAUSED
        self.time_remaining = float(work_duration)
        self.current_loop = 1
        self._today = today
        self._last_tick: float | None = None
        self._pending_study_time = 0.0

    def set_durations(self, work_duration: float, break_duration: float, total_loops: int) -> None:
        self.work_duration = work_duration
        self.break_duration = break_duration
        self.total_loops = total_loops
        self.reset()

    def _add_study_seconds(self, seconds: int) -> None:
        today = self._today()
        study = self.stats.daily_study_seconds
        study[today] = study.get(today, 0) + seconds

    def tick(self, now: float | None = None) -> bool:
        """Advance the timer; return True when a session has just switched."""
        if self.timer_state is not TimerState.RUNNING:
            return False
        now = time.monotonic() if now is None else now
        elapsed = 0.0 if self._last_tick is None else max(0.0, now - self._last_tick)
        self._last_tick = now

        if self.timer_mode is TimerMode.WORK:
            self._pending_study_time += elapsed
            if self._pending_study_time >= 1.0:
                whole = int(self._pending_study_time)
                self._add_study_seconds(whole)
                self._pending_study_time -= whole

        if self.time_remaining > elapsed:
            self.time_remaining -= elapsed
            return False

        if self.timer_mode is TimerMode.WORK:
            self._add_study_seconds(int(self.time_remaining))
        self.time_remaining = 0.0
        self._switch_session(now)
        return True

    def toggle_state(self, now: float | None = None) -> None:
        if self.timer_state is TimerState.PAUSED:
            self._last_tick = time.monotonic() if now is None else now
            self.timer_state = TimerState.RUNNING
        else:
            self._last_tick = None
            self.timer_state = TimerState.PAUSED

    def reset(self) -> None:
        self.timer_state = TimerState.PAUSED
        self.timer_mode = TimerMode.WORK
        self.time_remaining = float(self.work_duration)
        self.current_loop = 1
        self._last_tick = None

    def _switch_session(self, now: float) -> None:
        if self.timer_mode is TimerMode.WORK:
            self.timer_mode = TimerMode.BREAK
            self.time_remaining = float(self.break_duration)
        else:
            self._log_streak()
            if self.current_loop >= self.total_loops:
                self.reset()
                return
            self.current_loop += 1
            self.timer_mode = TimerMode.WORK
            self.time_remaining = float(self.work_duration)
        self._last_tick = now

    def _log_streak(self) -> None:
        today = self._today()
        streaks = self.stats.daily_streaks
        streaks[today] = streaks.get(today, 0) + 1
        key = month_key(today)
        self.stats.monthly_streaks[key] = self.stats.monthly_streaks.get(key, 0) + 1

    def session_switch_messages(self) -> tuple[str, str]:
        """Notification title and message for the current mode."""
        if self.timer_mode is TimerMode.WORK:
            return "Work Complete!", "Time for a short break."
        return "Break Over!", "Time to get back to work."


def sine_wave(
    frequency: float = BEEP_FREQUENCY,
    duration: float = BEEP_DURATION,
    amplitude: float = BEEP_AMPLITUDE,
    sample_rate: int = SAMPLE_RATE,
) -> array:
    """Signed 16-bit mono samples of a sine tone."""
    if sample_rate <= 0:
        raise ValueError("sample rate must be positive")
    if duration < 0:
        raise ValueError("duration must not be negative")
    count = int(round(duration * sample_rate))
    scale = amplitude * 32767
    step = 2 * math.pi * frequency / sample_rate
    return array("h", (int(round(scale * math.sin(step * i))) for i in range(count)))


def play_beep() -> None:
    """Play a short tone; silently does nothing when no audio device is usable."""
    import pygame

    try:
        if not pygame.mixer.get_init():
            pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
        init = pygame.mixer.get_init()
        if not init:
            return
        rate, size, channels = init
        if abs(size) != 16:
            return
        samples = sine_wave(BEEP_FREQUENCY, BEEP_DURATION, BEEP_AMPLITUDE, rate)
        if channels > 1:
            samples = array("h", (s for s in samples for _ in range(channels)))
        sound = pygame.mixer.Sound(buffer=samples.tobytes())
        sound.play()
        _playing[:] = [sound]
    except pygame.error:
        return