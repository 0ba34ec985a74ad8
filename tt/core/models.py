"""Timer, history and application state records. Everything here is immutable, so a state value can be
handed to the ticker or a view without anyone being able to change it underneath the store."""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from uuid import uuid4
from tt.util import now_local, parse_iso


class TimerStatus(str, Enum):
    PAUSED = "Paused"
    RUNNING = "Running"
    COMPLETED = "Completed"


@dataclass(frozen=True)
class Timer:
    id: str
    name: str
    category: str
    duration: int
    remaining: int
    status: TimerStatus = TimerStatus.PAUSED

    # Fraction of the countdown still left, 1.0 for a fresh timer and 0.0 once completed.
    @property
    def progress(self):
        if not self.duration:
            return 0.0
        return self.remaining / self.duration

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "duration": self.duration,
            "remaining": self.remaining,
            "status": self.status.value,
        }

    # Builds a Timer from its persisted dict form. Raises KeyError/ValueError/TypeError on bad input so the
    # caller can decide how to fall back. A record has to satisfy the countdown invariants too: positive duration,
    # 0 <= remaining <= duration, Completed only at 0, and nothing Running at 0 (the ticker would never finish it).
    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise TypeError(f"Timer record must be a dict, got {type(data).__name__}")
        duration = data["duration"]
        remaining = data["remaining"]
        for key, value in (("duration", duration), ("remaining", remaining)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"Timer field '{key}' must be an int, got {value!r}")
        status = TimerStatus(data["status"])

        if duration <= 0:
            raise ValueError(f"Timer duration must be positive, got {duration}")
        if not 0 <= remaining <= duration:
            raise ValueError(f"Timer remaining must be within 0..{duration}, got {remaining}")
        if status == TimerStatus.COMPLETED and remaining != 0:
            raise ValueError(f"Completed timer must have 0 remaining, got {remaining}")
        if status == TimerStatus.RUNNING and remaining == 0:
            raise ValueError("Running timer has nothing left to count down")

        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            category=str(data["category"]),
            duration=duration,
            remaining=remaining,
            status=status,
        )


# Field names an UpdateTimer is allowed to merge. `id` is the lookup key, never a merge target.
TIMER_FIELDS = frozenset(f.name for f in fields(Timer)) - {"id"}


@dataclass(frozen=True)
class HistoryEntry:
    name: str
    time: datetime

    def to_dict(self):
        return {"name": self.name, "time": self.time.isoformat()}

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise TypeError(f"History record must be a dict, got {type(data).__name__}")
        return cls(name=str(data["name"]), time=parse_iso(data["time"]))


@dataclass(frozen=True)
class AppState:
    timers: tuple[Timer, ...] = ()
    history: tuple[HistoryEntry, ...] = ()

    # Derived view: timers bucketed by category, buckets in order of first appearance.
    def grouped(self) -> dict[str, tuple[Timer, ...]]:
        groups: dict[str, list[Timer]] = {}
        for timer in self.timers:
            groups.setdefault(timer.category, []).append(timer)
        return {category: tuple(members) for category, members in groups.items()}

    def find(self, timer_id) -> Timer | None:
        for timer in self.timers:
            if timer.id == timer_id:
                return timer
        return None


# Builds a brand-new paused timer from raw user input. Duration goes through int() so "90" works but "abc",
# 0 and negatives are rejected here, before anything reaches the reducer.
def new_timer(name, duration, category, timer_id=None):
    try:
        seconds = int(duration)
    except (TypeError, ValueError):
        raise ValueError(f"Timer duration must be a whole number of seconds, got {duration!r}") from None
    if seconds <= 0:
        raise ValueError(f"Timer duration must be positive, got {seconds}")
    return Timer(
        id=timer_id or uuid4().hex,
        name=name,
        category=category,
        duration=seconds,
        remaining=seconds,
        status=TimerStatus.PAUSED,
    )

# Snapshot of a completion, copying the timer's name so later changes to the timer never touch history.
def history_entry_for(timer, when=None):
    return HistoryEntry(name=timer.name, time=when or now_local())
