from datetime import date

import pytest

from focushub.app_data import Reward, TodoItem
from focushub.todos import (
    add_reward,
    add_todo,
    format_day_heading,
    format_history_heading,
    past_dates,
    remove_reward,
    remove_todo,
    sort_rewards,
)

DAY = date(2024, 3, 5)


def test_add_todo_strips_and_stores():
    todos = {}
    item = add_todo(todos, DAY, "  read chapter  ")
    assert item == TodoItem("read chapter", False)
    assert todos == {DAY: [item]}


def test_add_todo_appends_in_order():
    todos = {}
    add_todo(todos, DAY, "a")
    add_todo(todos, DAY, "b")
    assert [t.text for t in todos[DAY]] == ["a", "b"]


@pytest.mark.parametrize("text", ["", "   ", "\t\n"])
def test_add_blank_todo_is_ignored(text):
    todos = {}
    assert add_todo(todos, DAY, text) is None
    assert todos == {}


def test_remove_todo():
    todos = {DAY: [TodoItem("a"), TodoItem("b"), TodoItem("c")]}
    removed = remove_todo(todos, DAY, 1)
    assert removed.text == "b"
    assert [t.text for t in todos[DAY]] == ["a", "c"]


def test_remove_todo_errors():
    todos = {DAY: [TodoItem("a")]}
    with pytest.raises(IndexError):
        remove_todo(todos, DAY, 1)
    with pytest.raises(IndexError):
        remove_todo(todos, date(2024, 3, 6), 0)


def test_past_dates_filters_and_orders():
    older = date(2024, 1, 2)
    old = date(2024, 3, 1)
    empty = date(2024, 2, 1)
    future = date(2024, 4, 1)
    todos = {
        old: [TodoItem("x")],
        older: [TodoItem("y")],
        empty: [],
        DAY: [TodoItem("today")],
        future: [TodoItem("later")],
    }
    assert past_dates(todos, DAY) == [old, older]


def test_day_heading():
    assert format_day_heading(DAY) == "Tuesday, March 5, 2024"


def test_history_heading():
    assert format_history_heading(DAY) == "Tuesday, March 5"
    assert format_day_heading(DAY).startswith(format_history_heading(DAY))


def test_add_reward():
    rewards = []
    reward = add_reward(rewards, "  ice cream ")
    assert reward == Reward("ice cream", False)
    assert rewards == [reward]
    assert add_reward(rewards, "   ") is None
    assert len(rewards) == 1


def test_sort_rewards_is_stable():
    rewards = [Reward("a", True), Reward("b", False), Reward("c", True), Reward("d", False)]
    sort_rewards(rewards)
    assert [r.name for r in rewards] == ["b", "d", "a", "c"]


def test_remove_reward():
    rewards = [Reward("a"), Reward("b")]
    assert remove_reward(rewards, 0).name == "a"
    assert [r.name for r in rewards] == ["b"]
    with pytest.raises(IndexError):
        remove_reward(rewards, 5)