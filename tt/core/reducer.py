from dataclasses import replace
from tt.common.logger import log
from tt.core.actions import (
    AddHistory, AddTimer, PauseCategory, ReplaceHistory, ReplaceTimers, ResetCategory, StartCategory, UpdateTimer,
)
from tt.core.models import TIMER_FIELDS, AppState, TimerStatus


#region === Handlers ===

# Every handler takes the previous state and returns a new one. Sequences are rebuilt as fresh tuples, the old
# state is never touched.

def _add_timer(state, action):
    return replace(state, timers=state.timers + (action.timer,))

def _update_timer(state, action):
    changes = {key: value for key, value in action.changes.items() if key in TIMER_FIELDS}
    ignored = set(action.changes) - set(changes)
    if ignored:
        log.debug(f"UPDATE_TIMER for '{action.id}' ignored unknown fields: {', '.join(sorted(ignored))}")
    if "status" in changes:
        try:
            changes["status"] = TimerStatus(changes["status"])
        except ValueError:
            log.debug(f"UPDATE_TIMER for '{action.id}' ignored unknown status {changes['status']!r}")
            del changes["status"]
    if not changes or state.find(action.id) is None:
        return state
    return replace(state, timers=tuple(
        replace(timer, **changes) if timer.id == action.id else timer
        for timer in state.timers
    ))

def _reset_category(state, action):
    return replace(state, timers=tuple(
        replace(timer, remaining=timer.duration, status=TimerStatus.PAUSED) if timer.category == action.category else timer
        for timer in state.timers
    ))

# Bulk start only picks up paused timers that still have time left; completed ones need a reset first.
def _start_category(state, action):
    return replace(state, timers=tuple(
        replace(timer, status=TimerStatus.RUNNING)
        if timer.category == action.category and timer.status == TimerStatus.PAUSED and timer.remaining > 0
        else timer
        for timer in state.timers
    ))

def _pause_category(state, action):
    return replace(state, timers=tuple(
        replace(timer, status=TimerStatus.PAUSED)
        if timer.category == action.category and timer.status == TimerStatus.RUNNING
        else timer
        for timer in state.timers
    ))

def _replace_timers(state, action):
    return replace(state, timers=tuple(action.timers))

def _add_history(state, action):
    return replace(state, history=state.history + (action.entry,))

def _replace_history(state, action):
    return replace(state, history=tuple(action.history))

_HANDLERS = {
    AddTimer: _add_timer,
    UpdateTimer: _update_timer,
    ResetCategory: _reset_category,
    StartCategory: _start_category,
    PauseCategory: _pause_category,
    ReplaceTimers: _replace_timers,
    AddHistory: _add_history,
    ReplaceHistory: _replace_history,
}

#endregion === Handlers ===

# The state transition table. Unknown actions hand the state back unchanged.
def apply(state: AppState, action) -> AppState:
    handler = _HANDLERS.get(type(action))
    if handler is None:
        log.debug(f"Ignoring unknown action {action!r}")
        return state
    return handler(state, action)
