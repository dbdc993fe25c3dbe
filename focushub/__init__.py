"""Pomodoro study timer with per-day to-do lists, a calendar, study stats, rewards and a GIF background."""

__version__ = "0.1.0"