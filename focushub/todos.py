"""Editing of per-day to-do lists and the rewards list."""

from __future__ import annotations

from datetime import date as _date

from focushub.app_data import Reward, TodoItem


def add_todo(todos_by_date: dict[_date, list[TodoItem]], date: _date, text: str) -> TodoItem | None:
    """Append a task for ``date``; blank text adds nothing and returns None."""
    text = text.strip()
    if not text:
        return None
    item = TodoItem(text=text, completed=False)
    todos_by_date.setdefault(date, []).append(item)
    return item


def remove_todo(todos_by_date: dict[_date, list[TodoItem]], date: _date, index: int) -> TodoItem:
    """Remove and return the task at ``index`` for ``date``."""
    items = todos_by_date.get(date)
    if items is None or not 0 <= index < len(items):
        raise IndexError(f"no task {index} on {date.isoformat()}")
    return items.pop(index)


def past_dates(todos_by_date: dict[_date, list[TodoItem]], selected: _date) -> list[_date]:
    """Dates before ``selected`` that have tasks, most recent first."""
    return sorted((day for day, items in todos_by_date.items() if items and day < selected),
                  reverse=True)


def format_day_heading(date: _date) -> str:
    """Heading such as ``Tuesday, March 5, 2024``."""
    return f"{date:%A, %B} {date.day}, {date.year}"


def format_history_heading(date: _date) -> str:
    """Heading such as ``Tuesday, March 5``."""
    return f"{date:%A, %B} {date.day}"


def add_reward(rewards: list[Reward], text: str) -> Reward | None:
    """Append a reward; blank text adds nothing and returns None."""
    text = text.strip()
    if not text:
        return None
    reward = Reward(name=text, completed=False)
    rewards.append(reward)
    return reward


def sort_rewards(rewards: list[Reward]) -> None:
    """Move completed rewards after open ones, keeping relative order."""
    rewards.sort(key=lambda reward: reward.completed)


def remove_reward(rewards: list[Reward], index: int) -> Reward:
    """Remove and return the reward at ``index``."""
    if not 0 <= index < len(rewards):
        raise IndexError(f"no reward {index}")
    return rewards.pop(index)