from PySide6.QtCore import QObject, Signal
from tt.common.logger import log
from tt.core import actions
from tt.core.actions import AddTimer, PauseCategory, ResetCategory, StartCategory, UpdateTimer
from tt.core.models import AppState, new_timer
from tt.core.reducer import apply


# Owns the one application state value. Nothing outside this class replaces it, everything goes through
# dispatch() and the reducer, and observers get the new snapshot through state_changed.
class TimerStore(QObject):

    state_changed = Signal(object)

    def __init__(self, state: AppState | None = None, parent=None):
        super().__init__(parent)
        self._state = state or AppState()

    #region === Query surface ===

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def timers(self):
        return self._state.timers

    @property
    def history(self):
        return self._state.history

    def grouped(self):
        return self._state.grouped()

    def find(self, timer_id):
        return self._state.find(timer_id)

    #endregion === Query surface ===

    # Runs every action through the reducer in order, then notifies observers once if anything changed.
    def dispatch(self, *batch):
        previous = self._state
        state = previous
        for action in batch:
            state = apply(state, action)
        if state == previous:
            return previous
        # Plain countdown batches arrive every second, so only batches with something else in them are logged.
        if not all(isinstance(action, UpdateTimer) for action in batch):
            log.debug(f"Applied {', '.join(getattr(action, 'tag', type(action).__name__) for action in batch)}")
        self._state = state
        self.state_changed.emit(state)
        return state

    #region === Gestures ===

    def add_timer(self, name, duration, category):
        timer = new_timer(name, duration, category)
        self.dispatch(AddTimer(timer))
        log.info(f"Added timer '{name}' ({timer.duration}s) to category '{category}'")
        return timer

    def start(self, timer_id):
        timer = self.find(timer_id)
        if timer is not None:
            self.dispatch(actions.start(timer))

    def pause(self, timer_id):
        timer = self.find(timer_id)
        if timer is not None:
            self.dispatch(actions.pause(timer))

    def reset(self, timer_id):
        timer = self.find(timer_id)
        if timer is not None:
            self.dispatch(actions.reset(timer))

    def start_category(self, category):
        self.dispatch(StartCategory(category))

    def pause_category(self, category):
        self.dispatch(PauseCategory(category))

    def reset_category(self, category):
        self.dispatch(ResetCategory(category))

    #endregion === Gestures ===
