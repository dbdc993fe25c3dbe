"""Persistent application data: to-do lists, study statistics and rewards."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any

DATA_FILE = "focushub_data.json"


class DataError(ValueError):
    """Raised when stored application data cannot be understood."""


def month_key(day: date) -> str:
    """Key used for monthly statistics, e.g. ``2024-3``."""
    return f"{day.year}-{day.month}"


def _parse_date(text: Any) -> date:
    if not isinstance(text, str):
        raise DataError(f"expected a date string, got {text!r}")
    try:
        return date.fromisoformat(text)
    except ValueError as exc:
        raise DataError(f"invalid date {text!r}") from exc


def _count(value: Any, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise DataError(f"{what} must be a non-negative integer, got {value!r}")
    return value


def _flag(value: Any, what: str) -> bool:
    if not isinstance(value, bool):
        raise DataError(f"{what} must be a boolean, got {value!r}")
    return value


def _text(value: Any, what: str) -> str:
    if not isinstance(value, str):
        raise DataError(f"{what} must be a string, got {value!r}")
    return value


def _mapping(value: Any, what: str) -> dict:
    if not isinstance(value, dict):
        raise DataError(f"{what} must be an object")
    return value


def _required(obj: dict, key: str, where: str) -> Any:
    try:
        return obj[key]
    except KeyError:
        raise DataError(f"missing field {key!r} in {where}") from None


@dataclass
class TodoItem:
    text: str
    completed: bool = False

    def to_dict(self) -> dict:
        return {"text": self.text, "completed": self.completed}

    @classmethod
    def from_dict(cls, obj: Any) -> TodoItem:
        obj = _mapping(obj, "to-do item")
        return cls(
            text=_text(_required(obj, "text", "to-do item"), "text"),
            completed=_flag(_required(obj, "completed", "to-do item"), "completed"),
        )


@dataclass
class Reward:
    name: str
    completed: bool = False

    def to_dict(self) -> dict:
        return {"name": self.name, "completed": self.completed}

    @classmethod
    def from_dict(cls, obj: Any) -> Reward:
        obj = _mapping(obj, "reward")
        return cls(
            name=_text(_required(obj, "name", "reward"), "name"),
            completed=_flag(_required(obj, "completed", "reward"), "completed"),
        )


@dataclass
class Stats:
    daily_study_seconds: dict[date, int] = field(default_factory=dict)
    daily_streaks: dict[date, int] = field(default_factory=dict)
    monthly_streaks: dict[str, int] = field(default_factory=dict)

    def copy(self) -> Stats:
        return Stats(
            dict(self.daily_study_seconds),
            dict(self.daily_streaks),
            dict(self.monthly_streaks),
        )

    def to_dict(self) -> dict:
        return {
            "daily_study_seconds": {
                day.isoformat(): n for day, n in sorted(self.daily_study_seconds.items())
            },
            "daily_streaks": {
                day.isoformat(): n for day, n in sorted(self.daily_streaks.items())
            },
            "monthly_streaks": dict(sorted(self.monthly_streaks.items())),
        }

    @classmethod
    def from_dict(cls, obj: Any) -> Stats:
        obj = _mapping(obj, "stats")
        study = _mapping(obj.get("daily_study_seconds", {}), "daily_study_seconds")
        streaks = _mapping(obj.get("daily_streaks", {}), "daily_streaks")
        monthly = _mapping(obj.get("monthly_streaks", {}), "monthly_streaks")
        return cls(
            daily_study_seconds={
                _parse_date(k): _count(v, "study seconds") for k, v in study.items()
            },
            daily_streaks={_parse_date(k): _count(v, "daily streak") for k, v in streaks.items()},
            monthly_streaks={k: _count(v, "monthly streak") for k, v in monthly.items()},
        )


@dataclass
class AppData:
    todos_by_date: dict[date, list[TodoItem]] = field(default_factory=dict)
    stats: Stats = field(default_factory=Stats)
    rewards: list[Reward] = field(default_factory=list)
    gif_path: str | None = None

    def to_dict(self) -> dict:
        return {
            "todos_by_date": {
                day.isoformat(): [item.to_dict() for item in items]
                for day, items in sorted(self.todos_by_date.items())
            },
            "stats": self.stats.to_dict(),
            "rewards": [reward.to_dict() for reward in self.rewards],
            "gif_path": self.gif_path,
        }

    @classmethod
    def from_dict(cls, obj: Any) -> AppData:
        obj = _mapping(obj, "application data")
        todos = _mapping(_required(obj, "todos_by_date", "application data"), "todos_by_date")
        rewards = _required(obj, "rewards", "application data")
        if not isinstance(rewards, list):
            raise DataError("rewards must be a list")
        todos_by_date = {}
        for key, items in todos.items():
            if not isinstance(items, list):
                raise DataError("to-do entries must be lists")
            todos_by_date[_parse_date(key)] = [TodoItem.from_dict(item) for item in items]
        gif_path = obj.get("gif_path")
        if gif_path is not None:
            gif_path = _text(gif_path, "gif_path")
        return cls(
            todos_by_date=todos_by_date,
            stats=Stats.from_dict(_required(obj, "stats", "application data")),
            rewards=[Reward.from_dict(item) for item in rewards],
            gif_path=gif_path,
        )


def data_path() -> Path:
    """Location of the data file: next to the running program."""
    program = sys.argv[0] if sys.argv else ""
    if not program:
        return Path(DATA_FILE)
    return Path(program).resolve().parent / DATA_FILE


def to_json(data: AppData) -> str:
    """Serialise application data as pretty-printed JSON."""
    return json.dumps(data.to_dict(), indent=2, ensure_ascii=False)


def from_json(text: str) -> AppData:
    """Parse application data from JSON text."""
    try:
        obj = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DataError(f"invalid JSON: {exc}") from exc
    return AppData.from_dict(obj)


def save(data: AppData, path: str | Path | None = None) -> None:
    """Write application data to ``path`` (default: :func:`data_path`)."""
    target = Path(path) if path is not None else data_path()
    target.write_text(to_json(data), encoding="utf-8")


def load(path: str | Path | None = None) -> AppData:
    """Read application data from ``path`` (default: :func:`data_path`)."""
    source = Path(path) if path is not None else data_path()
    return from_json(source.read_text(encoding="utf-8"))