# src/puptrack/cli/commands.py

from __future__ import annotations

import calendar
import logging
import re
from collections.abc import Callable
from datetime import date, datetime, time
from pathlib import Path

from ..core.calendar_grid import (
    DEFAULT_ENTRY_TIME,
    combine_day_and_time,
    is_same_month,
    month_title,
    weeks_for_month,
)
from ..core.errors import NotFoundError, StorageIOError
from ..core.onboarding import complete_onboarding, set_dog_name
from ..core.state import AppState
from ..export.csv_export import export_logs_csv
from ..logs import log_api
from ..photos import photo_api
from ..photos.photo_models import PhotoSlot
from ..tasks import task_api

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^\d{1,2}:\d{2}$")
_MONTH_RE = re.compile(r"^\d{4}-\d{2}$")


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /log, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- parsing helpers ----


def _today(state: AppState) -> date:
    return datetime.now().astimezone(state.tz).date()


def _parse_day(raw: str) -> date | None:
    if not _DATE_RE.match(raw):
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        return None


def _parse_time(raw: str) -> time | None:
    if not _TIME_RE.match(raw):
        return None
    hh, mm = raw.split(":")
    try:
        return time(int(hh), int(mm))
    except ValueError:
        return None


def _parse_month(state: AppState, args: list[str]) -> date | None:
    if not args:
        return _today(state).replace(day=1)
    raw = args[0]
    if not _MONTH_RE.match(raw):
        return None
    try:
        return date.fromisoformat(raw + "-01")
    except ValueError:
        return None


def _fmt_time(state: AppState, ts: datetime) -> str:
    return ts.astimezone(state.tz).strftime("%H:%M")


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    backend_path = getattr(state.backend, "path", None)
    saved = "OK" if state.last_save_ok else "FAILED (changes kept in memory)"
    return (
        "Status:\n"
        f"  Dog: {state.dog_name or '(unnamed)'}\n"
        f"  Onboarded: {'yes' if state.has_onboarded else 'no'}\n"
        f"  Tasks: {len(state.tasks)}  Logs: {len(state.logs)}\n"
        f"  Snapshot: {backend_path or '(in-memory)'}\n"
        f"  Last save: {saved}"
    )


def cmd_name(state: AppState, args: list[str]) -> str:
    name = " ".join(args).strip()
    if not name:
        return f"Dog name: {state.dog_name or '(unnamed)'}. Usage: /name <name>"
    set_dog_name(state, name)
    return f"Dog name set to {state.dog_name}."


def cmd_onboard(state: AppState, args: list[str]) -> str:
    if not state.dog_name:
        return "Set a dog name first: /name <name>"
    complete_onboarding(state)
    return f"Welcome, {state.dog_name}! Onboarding complete."


def cmd_tasks(state: AppState, args: list[str]) -> str:
    tasks = task_api.list_tasks(state)
    if not tasks:
        return "No tasks."
    lines = ["Tasks:"]
    for i, t in enumerate(tasks, start=1):
        mark = "x" if t.is_selected else " "
        lines.append(f"  {i}. [{mark}] {t.name} ({t.display_color})")
    return "\n".join(lines)


def cmd_toggle(state: AppState, args: list[str]) -> str:
    if len(args) != 1 or not args[0].isdigit():
        return "Usage: /toggle <n> (number from /tasks)"
    tasks = task_api.list_tasks(state)
    n = int(args[0])
    if not 1 <= n <= len(tasks):
        return f"No task #{n}."
    try:
        t = task_api.toggle_task(state, tasks[n - 1].id)
    except NotFoundError:
        return f"No task #{n}."
    return f"{t.name}: {'selected' if t.is_selected else 'not selected'}."


def cmd_add(state: AppState, args: list[str]) -> str:
    task = task_api.add_custom_task(state, " ".join(args))
    if task is None:
        return "Usage: /add <task name> (max 25 characters)"
    return f"Added task {task.name} ({task.color})."


def cmd_log(state: AppState, args: list[str]) -> str:
    """
    /log <task>                     -> now
    /log <task> YYYY-MM-DD          -> that day at 12:00
    /log <task> YYYY-MM-DD HH:MM    -> that day at that time
    """
    words = list(args)
    at_time: time | None = None
    day: date | None = None

    if len(words) >= 2 and _parse_time(words[-1]) is not None:
        at_time = _parse_time(words.pop())
    if words and _parse_day(words[-1]) is not None:
        day = _parse_day(words.pop())
    if at_time is not None and day is None:
        return "A time needs a date: /log <task> YYYY-MM-DD HH:MM"

    name = " ".join(words).strip()
    if not name:
        return "Usage: /log <task> [YYYY-MM-DD [HH:MM]]"

    at = None
    if day is not None:
        at = combine_day_and_time(day, at_time or DEFAULT_ENTRY_TIME, state.tz)

    entry = log_api.log_task(state, name, at)
    stamp = entry.timestamp.astimezone(state.tz).strftime("%Y-%m-%d %H:%M")
    return f"Logged {entry.task_name} at {stamp}."


def cmd_logs(state: AppState, args: list[str]) -> str:
    day = _parse_day(args[0]) if args else _today(state)
    if day is None:
        return "Usage: /logs [YYYY-MM-DD]"
    entries = log_api.logs_for_day(state, day)
    if not entries:
        return f"No logs on {day.isoformat()}."
    lines = [f"Logs on {day.isoformat()}:"]
    for i, e in enumerate(entries, start=1):
        lines.append(f"  {i}. {_fmt_time(state, e.timestamp)} {e.task_name}")
    return "\n".join(lines)


def cmd_rm(state: AppState, args: list[str]) -> str:
    usage = "Usage: /rm YYYY-MM-DD <n> [n ...] (numbers from /logs)"
    if len(args) < 2:
        return usage
    day = _parse_day(args[0])
    if day is None or not all(a.isdigit() and int(a) >= 1 for a in args[1:]):
        return usage
    removed = log_api.remove_logs_for_day(state, day, [int(a) - 1 for a in args[1:]])
    if not removed:
        return "Nothing removed."
    return f"Removed {len(removed)} log(s): " + ", ".join(e.task_name for e in removed)


def cmd_summary(state: AppState, args: list[str]) -> str:
    month = _parse_month(state, args)
    if month is None:
        return "Usage: /summary [YYYY-MM]"
    summary = log_api.summary_for_month(state, month)
    title = f"{month_title(month)} Monthly Summary"
    if not summary:
        return f"{title}\n  No activities recorded this month."
    lines = [title]
    for name, count in summary.items():
        lines.append(f"  {name}: {count} time{'' if count == 1 else 's'}")
    return "\n".join(lines)


def cmd_calendar(state: AppState, args: list[str]) -> str:
    month = _parse_month(state, args)
    if month is None:
        return "Usage: /calendar [YYYY-MM]"
    first_weekday = getattr(state.settings, "first_weekday", calendar.firstweekday())

    by_day: dict[date, list[str]] = {}
    for e in log_api.logs_for_month(state, month):
        names = by_day.setdefault(state.logs.local_date(e.timestamp), [])
        if e.task_name not in names:
            names.append(e.task_name)

    header = " ".join(
        f"{calendar.day_abbr[(first_weekday + i) % 7][:2]:>4}" for i in range(7)
    )
    lines = [month_title(month), header]
    for week in weeks_for_month(month, first_weekday):
        cells = []
        for d in week:
            if not is_same_month(d, month):
                cells.append(f"{'.':>4}")
                continue
            cells.append(f"{d.day:>3}{'*' if d in by_day else ' '}")
        lines.append(" ".join(cells))

    # one colored dot per distinct task on a day
    for d in sorted(by_day):
        dots = ", ".join(
            f"{name} ({state.read(lambda n=name: state.tasks.color_for(n))})" for name in sorted(by_day[d])
        )
        lines.append(f"  {d.day:>2}: {dots}")
    return "\n".join(lines)


def cmd_photo(state: AppState, args: list[str]) -> str:
    """
    /photo                      -> photo for the current time of day
    /photo <slot>               -> photo info for a slot
    /photo set <slot> <file>    -> store an image file for a slot
    """
    if args and args[0].lower() == "set":
        if len(args) < 3:
            return "Usage: /photo set <morning|afternoon|night> <image file>"
        slot = PhotoSlot.parse(args[1])
        if slot is None:
            return "Unknown slot. Use morning, afternoon or night."
        src = Path(" ".join(args[2:])).expanduser()
        try:
            data = src.read_bytes()
        except OSError as e:
            return f"Cannot read {src}: {e}"
        try:
            rel = photo_api.set_photo(state, slot, data)
        except StorageIOError as e:
            return f"Photo not saved: {e}"
        return f"{slot.display_name} photo saved ({rel})."

    if args:
        slot = PhotoSlot.parse(args[0])
        if slot is None:
            return "Unknown slot. Use morning, afternoon or night."
        data = photo_api.get_photo(state, slot)
    else:
        slot, data = photo_api.current_photo(state)

    if data is None:
        return f"No {slot.display_name} Photo"
    rel = state.photos.paths().get(slot)
    return f"{slot.display_name} photo: {rel} ({len(data)} bytes)"


def cmd_export(state: AppState, args: list[str]) -> str:
    logs = state.read(state.logs.all)
    try:
        path = export_logs_csv(
            logs,
            export_dir=getattr(state.settings, "export_dir", None),
            quote=bool(getattr(state.settings, "csv_quote", False)),
        )
    except StorageIOError as e:
        return f"Export failed: {e}"
    return f"Exported {len(logs)} log(s) to {path}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show dog, counts and snapshot status.")
registry.register("name", cmd_name, help_text="Set the dog's name: /name <name>.")
registry.register("onboard", cmd_onboard, help_text="Finish onboarding.")
registry.register("tasks", cmd_tasks, help_text="List care tasks.")
registry.register("toggle", cmd_toggle, help_text="Select/unselect a task: /toggle <n>.")
registry.register("add", cmd_add, help_text="Add a custom task: /add <name>.")
registry.register(
    "log", cmd_log, help_text="Log a task: /log <task> [YYYY-MM-DD [HH:MM]]."
)
registry.register("logs", cmd_logs, help_text="Logs for a day: /logs [YYYY-MM-DD].")
registry.register("rm", cmd_rm, help_text="Delete logs of a day: /rm YYYY-MM-DD <n> [n ...].")
registry.register("summary", cmd_summary, help_text="Task counts for a month: /summary [YYYY-MM].")
registry.register("calendar", cmd_calendar, help_text="Month grid: /calendar [YYYY-MM].", aliases=["cal"])
registry.register(
    "photo", cmd_photo, help_text="Show or set photos: /photo [slot] | /photo set <slot> <file>."
)
registry.register("export", cmd_export, help_text="Export all logs to CSV.")
