"""Actions the store understands. Each carries a `tag` so logs and hosts can name it without isinstance checks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar
from tt.core.models import HistoryEntry, Timer, TimerStatus


@dataclass(frozen=True)
class Action:
    tag: ClassVar[str] = "UNKNOWN"


@dataclass(frozen=True)
class AddTimer(Action):
    tag: ClassVar[str] = "ADD_TIMER"
    timer: Timer


@dataclass(frozen=True)
class UpdateTimer(Action):
    tag: ClassVar[str] = "UPDATE_TIMER"
    id: str
    changes: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ResetCategory(Action):
    tag: ClassVar[str] = "RESET_TIMERS"
    category: str


@dataclass(frozen=True)
class StartCategory(Action):
    tag: ClassVar[str] = "START_CATEGORY"
    category: str


@dataclass(frozen=True)
class PauseCategory(Action):
    tag: ClassVar[str] = "PAUSE_CATEGORY"
    category: str


@dataclass(frozen=True)
class ReplaceTimers(Action):
    tag: ClassVar[str] = "SET_TIMERS"
    timers: tuple[Timer, ...]


@dataclass(frozen=True)
class AddHistory(Action):
    tag: ClassVar[str] = "ADD_HISTORY"
    entry: HistoryEntry


@dataclass(frozen=True)
class ReplaceHistory(Action):
    tag: ClassVar[str] = "SET_HISTORY"
    history: tuple[HistoryEntry, ...]


#region === Single-timer helpers ===

# These turn a user gesture on one timer into an UpdateTimer. A completed timer can only leave Completed
# through a reset, so start/pause hand back an empty (no-op) update for it.

def start(timer: Timer) -> UpdateTimer:
    if timer.status == TimerStatus.COMPLETED or timer.remaining <= 0:
        return UpdateTimer(timer.id)
    return UpdateTimer(timer.id, {"status": TimerStatus.RUNNING})

def pause(timer: Timer) -> UpdateTimer:
    if timer.status == TimerStatus.COMPLETED:
        return UpdateTimer(timer.id)
    return UpdateTimer(timer.id, {"status": TimerStatus.PAUSED})

def reset(timer: Timer) -> UpdateTimer:
    return UpdateTimer(timer.id, {"remaining": timer.duration, "status": TimerStatus.PAUSED})

#endregion === Single-timer helpers ===
