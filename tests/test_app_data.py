import json
from datetime import date

import pytest

from focushub.app_data import (
    DATA_FILE,
    AppData,
    DataError,
    Reward,
    Stats,
    TodoItem,
    data_path,
    from_json,
    load,
    month_key,
    save,
    to_json,
)


def _sample() -> AppData:
    return AppData(
        todos_by_date={
            date(2024, 3, 5): [TodoItem("read chapter", False), TodoItem("exercise", True)],
            date(2024, 3, 4): [],
        },
        stats=Stats(
            daily_study_seconds={date(2024, 3, 5): 1500},
            daily_streaks={date(2024, 3, 5): 2},
            monthly_streaks={"2024-3": 7},
        ),
        rewards=[Reward("cake", False), Reward("movie", True)],
        gif_path="/tmp/background.gif",
    )


def test_json_round_trip():
    data = _sample()
    assert from_json(to_json(data)) == data


def test_json_uses_iso_dates_and_pretty_format():
    text = to_json(_sample())
    assert text.startswith('{\n  "todos_by_date"')
    obj = json.loads(text)
    assert obj["todos_by_date"]["2024-03-05"][0] == {"text": "read chapter", "completed": False}
    assert obj["stats"]["daily_study_seconds"] == {"2024-03-05": 1500}
    assert obj["gif_path"] == "/tmp/background.gif"


def test_stats_fields_default_when_missing():
    data = from_json('{"todos_by_date": {}, "stats": {}, "rewards": []}')
    assert data.stats == Stats()
    assert data.gif_path is None


def test_missing_required_field_raises():
    with pytest.raises(DataError):
        from_json('{"todos_by_date": {}, "rewards": []}')


def test_bad_date_key_raises():
    with pytest.raises(DataError):
        from_json('{"todos_by_date": {"yesterday": []}, "stats": {}, "rewards": []}')


def test_negative_count_raises():
    text = '{"todos_by_date": {}, "stats": {"daily_streaks": {"2024-01-01": -1}}, "rewards": []}'
    with pytest.raises(DataError):
        from_json(text)


def test_invalid_json_raises_value_error():
    with pytest.raises(ValueError):
        from_json("{not json")


def test_save_and_load(tmp_path):
    target = tmp_path / "data.json"
    data = _sample()
    save(data, target)
    assert load(target) == data


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load(tmp_path / "absent.json")


def test_month_key_is_not_zero_padded():
    assert month_key(date(2024, 3, 5)) == "2024-3"
    assert month_key(date(2023, 12, 31)) == "2023-12"


def test_data_path_file_name():
    assert data_path().name == DATA_FILE


def test_stats_copy_is_independent():
    stats = Stats(daily_study_seconds={date(2024, 1, 1): 5})
    clone = stats.copy()
    clone.daily_study_seconds[date(2024, 1, 1)] = 9
    assert stats.daily_study_seconds[date(2024, 1, 1)] == 5