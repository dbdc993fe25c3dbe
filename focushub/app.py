"""The Focus Hub application: state, per-frame update and the window loop."""

from __future__ import annotations

import argparse
import sys
import time
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Callable

from focushub import app_data
from focushub.app_data import AppData
from focushub.calendar_view import (
    WEEKDAY_NAMES,
    month_grid,
    month_title,
    next_month,
    previous_month,
)
from focushub.gif_handler import GifHandler, fit_size, get_gif_dimensions
from focushub.stats_view import format_lifetime, today_summary, total_study_seconds
from focushub.timer import StudyTimer, TimerState, play_beep
from focushub.timer_panel import format_remaining, mode_label, progress
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

DEFAULT_GIF = "assets/background.gif"
ICON_FILE = "assets/icon.png"
DEFAULT_WINDOW_SIZE = (500.0, 450.0)
WORK_SECONDS = 25 * 60
BREAK_SECONDS = 5 * 60
TOTAL_LOOPS = 4
GMT_OFFSET_RANGE = (-12, 14)
FPS_RANGE = (5, 500)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_clock(offset_hours: int, now: datetime | None = None) -> str:
    """Wall-clock time ``HH:MM:SS`` at a whole-hour offset from UTC.

    A naive ``now`` is taken to be UTC.
    """
    now = _utc_now() if now is None else now
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    zone = timezone(timedelta(hours=offset_hours))
    return now.astimezone(zone).strftime("%H:%M:%S")


def local_gmt_offset() -> int:
    """Local UTC offset in whole hours, truncated toward zero."""
    offset = datetime.now().astimezone().utcoffset() or timedelta(0)
    return int(offset.total_seconds() / 3600)


def initial_window_size(data: AppData) -> tuple[float, float]:
    """Window size: the saved GIF's dimensions, or a default."""
    if data.gif_path:
        try:
            width, height = get_gif_dimensions(data.gif_path)
        except (OSError, ValueError):
            return DEFAULT_WINDOW_SIZE
        return float(width), float(height)
    return DEFAULT_WINDOW_SIZE


@dataclass
class _Panels:
    show_todos: bool = False
    show_calendar: bool = False
    show_stats: bool = False
    show_rewards: bool = False
    show_notification: bool = False
    notification_title: str = ""
    notification_message: str = ""

    def notify(self, title: str, message: str) -> None:
        self.notification_title = title
        self.notification_message = message
        self.show_notification = True


class FocusHubApp:
    """Application state driven once per frame by :meth:`update`."""

    def __init__(
        self,
        data: AppData | None = None,
        *,
        data_file: str | Path | None = None,
        beep: Callable[[], None] = play_beep,
        today: Callable[[], date] = date.today,
        clock: Callable[[], float] = time.monotonic,
        utc_now: Callable[[], datetime] = _utc_now,
        default_gif: str | Path = DEFAULT_GIF,
    ) -> None:
        self.app_data = data if data is not None else AppData()
        self.data_file = data_file
        self._beep = beep
        self._today = today
        self._clock = clock
        self._utc_now = utc_now

        self.timer = StudyTimer(
            self.app_data.stats.copy(), WORK_SECONDS, BREAK_SECONDS, TOTAL_LOOPS, today=today
        )
        self.gif_handler = GifHandler(last_frame_time=clock())
        gif_path = self.app_data.gif_path
        if gif_path is None or not self.gif_handler.load_from_path(gif_path):
            self.gif_handler.load_from_path(default_gif)

        self.panels = _Panels()
        self.new_todo_input = ""
        self.new_reward_input = ""
        current = today()
        self.selected_date = current
        self.calendar_date = current
        self.selected_gmt_offset = local_gmt_offset()
        self.repaint_fps = 30
        self.current_time = ""
        self.should_quit = False

    def _save(self) -> None:
        app_data.save(self.app_data, self.data_file)

    def update(self) -> bool:
        """Run one frame of logic; return False once the app should close."""
        if self.should_quit:
            return False
        self.current_time = format_clock(self.selected_gmt_offset, self._utc_now())
        now = self._clock()
        if self.timer.tick(now):
            self.handle_session_switch()
        self.gif_handler.tick(now)
        return True

    def open_gif(self, path: str | Path) -> bool:
        """Switch the background to the GIF at ``path``."""
        if self.gif_handler.load_from_path(path):
            self.app_data.gif_path = str(path)
            return True
        self.panels.notify("GIF Load Error", "Could not load the selected GIF.")
        return False

    def handle_session_switch(self) -> None:
        """Beep, post a notification and save stats once all loops are done."""
        self._beep()
        title, message = self.timer.session_switch_messages()
        self.panels.notify(title, message)
        if self.timer.timer_state is TimerState.PAUSED:
            self.app_data.stats = self.timer.stats.copy()
            try:
                self._save()
            except OSError as exc:
                print(f"Failed to quick-save stats: {exc}", file=sys.stderr)

    def on_exit(self) -> bool:
        """Store stats and background, then save; return whether saving worked."""
        self.app_data.stats = self.timer.stats.copy()
        self.app_data.gif_path = self.gif_handler.get_path_string()
        try:
            self._save()
        except OSError as exc:
            message = f"Could not save app data: {exc}"
            self.panels.notify("Save Error", message)
            print(message, file=sys.stderr)
            return False
        return True

    # Input actions used by the window loop.

    @property
    def _typing(self) -> bool:
        return self.panels.show_todos or self.panels.show_rewards

    def _submit_input(self) -> None:
        if self.panels.show_todos:
            if add_todo(self.app_data.todos_by_date, self.selected_date, self.new_todo_input):
                self.new_todo_input = ""
        elif self.panels.show_rewards:
            if add_reward(self.app_data.rewards, self.new_reward_input):
                self.new_reward_input = ""

    def _edit_input(self, text: str | None) -> None:
        """Append ``text`` to the active input; None deletes the last character."""
        if self.panels.show_todos:
            self.new_todo_input = (
                self.new_todo_input[:-1] if text is None else self.new_todo_input + text
            )
        elif self.panels.show_rewards:
            self.new_reward_input = (
                self.new_reward_input[:-1] if text is None else self.new_reward_input + text
            )

    def _toggle_item(self, index: int) -> None:
        if self.panels.show_todos:
            items = self.app_data.todos_by_date.get(self.selected_date, [])
        else:
            items = self.app_data.rewards
        if 0 <= index < len(items):
            items[index].completed = not items[index].completed

    def _remove_item(self, index: int) -> None:
        try:
            if self.panels.show_todos:
                remove_todo(self.app_data.todos_by_date, self.selected_date, index)
            elif self.panels.show_rewards:
                remove_reward(self.app_data.rewards, index)
        except IndexError:
            pass

    def _shift_offset(self, step: int) -> None:
        low, high = GMT_OFFSET_RANGE
        self.selected_gmt_offset = max(low, min(high, self.selected_gmt_offset + step))

    def _shift_fps(self, step: int) -> None:
        low, high = FPS_RANGE
        self.repaint_fps = max(low, min(high, self.repaint_fps + step))

    def _go_today(self) -> None:
        current = self._today()
        self.calendar_date = current
        self.selected_date = current


# Text shown in the side windows.

def _todo_lines(app: FocusHubApp) -> list[str]:
    lines = ["To-Do List", format_day_heading(app.selected_date), f"> {app.new_todo_input}_"]
    items = app.app_data.todos_by_date.get(app.selected_date, [])
    if not items:
        lines.append("No tasks for this day.")
    for number, item in enumerate(items, start=1):
        lines.append(f"{number}. [{'x' if item.completed else ' '}] {item.text}")
    lines.append("")
    lines.append("Task History")
    history = past_dates(app.app_data.todos_by_date, app.selected_date)
    if not history:
        lines.append("No tasks from previous days.")
    for day in history:
        lines.append(format_history_heading(day))
        lines.extend(
            f"  [{'x' if item.completed else ' '}] {item.text}"
            for item in app.app_data.todos_by_date[day]
        )
    return lines


def _calendar_lines(app: FocusHubApp) -> list[str]:
    today = app._today()
    lines = [month_title(app.calendar_date), " ".join(f"{name:>4}" for name in WEEKDAY_NAMES)]
    for row in month_grid(app.calendar_date):
        cells = []
        for day in row:
            if day is None:
                cells.append("    ")
                continue
            mark = "*" if day == today else " "
            if app.app_data.todos_by_date.get(day):
                mark = "."
            text = f"[{day.day}]" if day == app.selected_date else f"{day.day}{mark}"
            cells.append(f"{text:>4}")
        lines.append(" ".join(cells))
    return lines


def _stats_lines(app: FocusHubApp) -> list[str]:
    stats = app.timer.stats
    summary = today_summary(stats, app._today())
    return [
        "Lifetime Summary",
        f"Total Study Time: {format_lifetime(total_study_seconds(stats))}",
        "Today's Progress",
        f"- Sessions Completed: {summary.sessions}",
        f"- Time Studied: {summary.time_studied}",
        "This Month's Progress",
        f"- Sessions Completed: {summary.month_sessions}",
    ]


def _reward_lines(app: FocusHubApp) -> list[str]:
    sort_rewards(app.app_data.rewards)
    lines = ["Rewards", f"> {app.new_reward_input}_", "Your Rewards"]
    for number, reward in enumerate(app.app_data.rewards, start=1):
        lines.append(f"{number}. [{'x' if reward.completed else ' '}] {reward.name}")
    return lines


def _handle_event(app: FocusHubApp, event, pygame) -> None:
    if event.type == pygame.QUIT:
        app.should_quit = True
    elif event.type == pygame.DROPFILE:
        app.open_gif(event.file)
    elif event.type == pygame.TEXTINPUT and app._typing:
        app._edit_input(event.text)
    elif event.type == pygame.KEYDOWN:
        _handle_key(app, event, pygame)


def _handle_key(app: FocusHubApp, event, pygame) -> None:
    panels = app.panels
    panels.show_notification = False
    toggles = {
        pygame.K_F1: "show_todos",
        pygame.K_F2: "show_calendar",
        pygame.K_F3: "show_stats",
        pygame.K_F4: "show_rewards",
    }
    key = event.key
    if key in toggles:
        name = toggles[key]
        setattr(panels, name, not getattr(panels, name))
        return
    if pygame.K_1 <= key <= pygame.K_9 and event.mod & (pygame.KMOD_CTRL | pygame.KMOD_ALT):
        if event.mod & pygame.KMOD_CTRL:
            app._toggle_item(key - pygame.K_1)
        else:
            app._remove_item(key - pygame.K_1)
        return
    if app._typing:
        if key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            app._submit_input()
        elif key == pygame.K_BACKSPACE:
            app._edit_input(None)
        elif key == pygame.K_ESCAPE:
            panels.show_todos = panels.show_rewards = False
        return
    if key == pygame.K_SPACE:
        app.timer.toggle_state(app._clock())
    elif key == pygame.K_r:
        app.timer.reset()
    elif key in (pygame.K_q, pygame.K_ESCAPE):
        app.should_quit = True
    elif key == pygame.K_LEFTBRACKET:
        app._shift_offset(-1)
    elif key == pygame.K_RIGHTBRACKET:
        app._shift_offset(1)
    elif key == pygame.K_MINUS:
        app._shift_fps(-5)
    elif key == pygame.K_EQUALS:
        app._shift_fps(5)
    elif panels.show_calendar:
        if key == pygame.K_LEFT:
            app.calendar_date = previous_month(app.calendar_date)
        elif key == pygame.K_RIGHT:
            app.calendar_date = next_month(app.calendar_date)
        elif key == pygame.K_HOME:
            app._go_today()
        elif key in (pygame.K_UP, pygame.K_DOWN):
            step = -1 if key == pygame.K_UP else 1
            app.selected_date += timedelta(days=step)
            app.calendar_date = app.selected_date


class _Renderer:
    def __init__(self, pygame) -> None:
        self.pg = pygame
        self.small = pygame.font.SysFont(None, 22)
        self.medium = pygame.font.SysFont(None, 32)
        self.large = pygame.font.SysFont(None, 80)
        self._frames: dict[int, object] = {}
        self._load_id = -1

    def _frame_surface(self, handler: GifHandler):
        if handler.gif_load_id != self._load_id:
            self._frames = {}
            self._load_id = handler.gif_load_id
        if handler.current_frame not in self._frames:
            image = handler.current_frame_image()
            if image is None:
                return None
            self._frames[handler.current_frame] = self.pg.image.frombuffer(
                image.tobytes(), image.size, "RGBA"
            )
        return self._frames[handler.current_frame]

    def _text(self, screen, font, text: str, center_x: float, y: float) -> float:
        surface = font.render(text, True, (235, 235, 235))
        screen.blit(surface, surface.get_rect(midtop=(center_x, y)))
        return y + surface.get_height() + 4

    def _window(self, screen, lines: list[str], x: float, y: float) -> float:
        rendered = [self.small.render(line, True, (235, 235, 235)) for line in lines]
        width = max((s.get_width() for s in rendered), default=0) + 16
        height = sum(s.get_height() + 2 for s in rendered) + 12
        box = self.pg.Surface((width, height), self.pg.SRCALPHA)
        box.fill((30, 30, 30, 220))
        screen.blit(box, (x, y))
        line_y = y + 6
        for surface in rendered:
            screen.blit(surface, (x + 8, line_y))
            line_y += surface.get_height() + 2
        return y + height + 8

    def draw(self, screen, app: FocusHubApp) -> None:
        pg = self.pg
        screen.fill((0, 0, 0))
        width, height = screen.get_size()

        frame = self._frame_surface(app.gif_handler)
        if frame is not None:
            fitted = fit_size(frame.get_size(), (width, height))
            if fitted is not None:
                size = (max(1, int(fitted[0])), max(1, int(fitted[1])))
                scaled = pg.transform.smoothscale(frame, size)
                screen.blit(scaled, scaled.get_rect(center=(width / 2, height / 2)))

        panel = pg.Surface((width, height), pg.SRCALPHA)
        pg.draw.rect(panel, (20, 20, 20, 180), panel.get_rect(), border_radius=10)
        screen.blit(panel, (0, 0))

        cx = width / 2
        y = self._text(screen, self.medium, app.current_time, cx, 10)
        y = self._text(screen, self.medium, "Pomodoro Timer", cx, y + 10)
        y = self._text(screen, self.small, mode_label(app.timer), cx, y)
        y = self._text(screen, self.large, format_remaining(app.timer.time_remaining), cx, y)
        fraction = progress(app.timer)
        if fraction is not None:
            bar = pg.Rect(0, 0, int(width * 0.6), 16)
            bar.midtop = (cx, y)
            pg.draw.rect(screen, (80, 80, 80), bar, border_radius=4)
            filled = bar.copy()
            filled.width = int(bar.width * max(0.0, min(1.0, fraction)))
            pg.draw.rect(screen, (90, 160, 230), filled, border_radius=4)
            y = self._text(screen, self.small, f"{fraction:.0%}", cx, bar.bottom + 4)
        action = "Pause" if app.timer.timer_state is TimerState.RUNNING else "Start"
        self._text(screen, self.small, f"[Space] {action}   [R] Reset", cx, y + 6)
        self._text(
            screen,
            self.small,
            "F1 To-Do  F2 Calendar  F3 Stats  F4 Rewards  [ ] GMT  - = FPS",
            cx,
            height - 24,
        )

        y = 10
        for shown, builder in (
            (app.panels.show_todos, _todo_lines),
            (app.panels.show_calendar, _calendar_lines),
            (app.panels.show_stats, _stats_lines),
            (app.panels.show_rewards, _reward_lines),
        ):
            if shown:
                y = self._window(screen, builder(app), 10, y)
        if app.panels.show_notification:
            lines = [app.panels.notification_title, app.panels.notification_message]
            self._window(screen, lines, 10, height - 90)


def main(argv: list[str] | None = None) -> int:
    """Open the Focus Hub window and run until it is closed."""
    parser = argparse.ArgumentParser(
        prog="focushub",
        description="Pomodoro timer with to-do lists, study stats and rewards.",
    )
    parser.parse_args(argv)

    try:
        data = app_data.load()
    except (OSError, ValueError):
        data = AppData()
    width, height = initial_window_size(data)

    import pygame

    pygame.init()
    try:
        screen = pygame.display.set_mode((int(width), int(height)), pygame.RESIZABLE)
        pygame.display.set_caption("Focus Hub")
        if Path(ICON_FILE).is_file():
            try:
                pygame.display.set_icon(pygame.image.load(ICON_FILE))
            except pygame.error:
                pass
        app = FocusHubApp(data)
        renderer = _Renderer(pygame)
        frame_clock = pygame.time.Clock()
        while True:
            for event in pygame.event.get():
                _handle_event(app, event, pygame)
            if not app.update():
                break
            renderer.draw(pygame.display.get_surface() or screen, app)
            pygame.display.flip()
            frame_clock.tick(app.repaint_fps)
        saved = app.on_exit()
    finally:
        pygame.quit()
    return 0 if saved else 1


if __name__ == "__main__":
    raise SystemExit(main())