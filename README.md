# focushub

A desktop study companion built around the Pomodoro technique. It runs a
work/break timer over a set number of loops, records how long you study
each day, counts completed sessions per day and per month, keeps a to-do
list for each calendar day and a list of rewards to work towards. An
animated GIF plays in the background of the window.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Running

```
focushub
```

This opens a resizable window (drawn with pygame). Its initial size is
the size of the saved background GIF, or 500×450 if there is none. On
start it loads the saved background GIF, falling back to
`assets/background.gif` in the current directory; `assets/icon.png` is
used as the window icon when present.

The main panel shows the clock, the current session ("Study Time" or
"Break Time" with the loop number), the remaining time as `MM:SS` and a
progress bar. The timer starts with 25 minutes of study and 5 minutes of
break, repeated for 4 loops. A short 440 Hz tone plays when a session
ends and a notification appears.

### Keys

| Key | Action |
| --- | --- |
| F1 | Show or hide the to-do list |
| F2 | Show or hide the calendar |
| F3 | Show or hide the stats |
| F4 | Show or hide the rewards |
| Space | Start or pause the timer |
| R | Reset the timer |
| Q or Escape | Quit |
| `[` / `]` | Clock GMT offset down / up (−12 to +14) |
| `-` / `=` | Frame rate limit down / up by 5 (5 to 500) |

While the to-do list or the rewards window is open, typed text goes to
its input line: Enter adds the entry (blank entries are ignored),
Backspace deletes a character and Escape closes both windows.
Ctrl+1…9 ticks or unticks an entry by its number and Alt+1…9 removes it.

While the calendar is open (and no input line is active), Left/Right
move a month back or forward, Home jumps to today, and Up/Down move the
selected day. The selected day is the day the to-do list edits. Days with
tasks are marked with `.`, today with `*`, the selected day with
brackets.

To change the background, drop a GIF file onto the window. If it cannot
be loaded, the previous background stays and a notification says so.

Pressing any key dismisses the current notification.

### What the window does not do

The window has no menus, no file dialog and no editor for the timer
settings: study time, break time and number of loops stay at their
defaults in the window. They can be changed from code with
`focushub.timer_panel.apply_settings` or `StudyTimer.set_durations`.

## Data

Everything is saved as JSON to `focushub_data.json` when the window
closes; statistics are also saved after the last loop of a run finishes.
The file lives in the directory of the running program, as returned by
`focushub.app_data.data_path()`. If the file is missing or cannot be
read, the application starts with empty data. If saving on exit fails,
`focushub` reports it on standard error and exits with status 1.

## Using it as a library

The modules work without the window:

- `focushub.app_data`: the `AppData`, `Stats`, `TodoItem` and `Reward`
  dataclasses, `to_json` / `from_json`, `save` / `load` (raising
  `DataError` for malformed data) and `month_key`.
- `focushub.timer`: `StudyTimer` with `TimerMode` and `TimerState`,
  `sine_wave` and `play_beep`.
- `focushub.gif_handler`: `load_gif`, `get_gif_dimensions`, `fit_size`
  and `GifHandler`, which steps through frames by their delays.
- `focushub.calendar_view`: `month_title`, `previous_month`,
  `next_month`, `days_in_month` and `month_grid` (Monday-first rows).
- `focushub.stats_view`: `total_study_seconds`, `format_lifetime`,
  `format_clock_duration` and `today_summary`.
- `focushub.todos`: `add_todo`, `remove_todo`, `past_dates`,
  `format_day_heading`, `format_history_heading`, `add_reward`,
  `sort_rewards` and `remove_reward`.
- `focushub.timer_panel`: `mode_label`, `format_remaining`, `progress`,
  `split_duration` and `apply_settings`.
- `focushub.app`: `FocusHubApp`, `format_clock`, `local_gmt_offset`,
  `initial_window_size` and `main`.

```python
from focushub.app_data import AppData, save, data_path
from focushub.timer import StudyTimer

data = AppData()
timer = StudyTimer(data.stats, 25 * 60, 5 * 60, 4)
timer.toggle_state(0.0)        # start at time 0.0 (seconds)
switched = timer.tick(1500.0)  # 25 minutes later the work session ends
print(switched, timer.session_switch_messages())
save(data, data_path())
```

`StudyTimer.tick` and `toggle_state` take the current monotonic time in
seconds, so the timer can be driven from any clock; without an argument
they use `time.monotonic()`.