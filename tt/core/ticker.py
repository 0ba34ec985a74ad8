from PySide6.QtCore import QObject, QTimer, Signal
from tt.common.logger import log
from tt.core.actions import AddHistory, UpdateTimer
from tt.core.models import TimerStatus, history_entry_for
from tt.util import now_local

DEFAULT_INTERVAL_MS = 1000


# Works out one tick's worth of changes from a single snapshot. Every timer is judged against the same state, so
# the order of timers never matters. Returns the actions to dispatch and the timers that just completed.
def plan_tick(state, when=None):
    batch = []
    completed = []
    when = when or now_local()
    for timer in state.timers:
        if timer.status != TimerStatus.RUNNING or timer.remaining <= 0:
            continue
        remaining = timer.remaining - 1
        if remaining == 0:
            batch.append(AddHistory(history_entry_for(timer, when)))
            batch.append(UpdateTimer(timer.id, {"remaining": 0, "status": TimerStatus.COMPLETED}))
            completed.append(timer)
        else:
            batch.append(UpdateTimer(timer.id, {"remaining": remaining}))
    return batch, completed


# Drives every running timer off one repeating QTimer. Use it as a context manager (or arm()/disarm()) so the
# interval is always stopped when the host goes away, even if that happens halfway through a tick.
class Ticker(QObject):

    completed = Signal(str)

    def __init__(self, store, interval_ms=DEFAULT_INTERVAL_MS, parent=None):
        super().__init__(parent)
        self.store = store
        self.interval_ms = interval_ms
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self.tick)

    @property
    def armed(self):
        return self._timer.isActive()

    def arm(self):
        if not self._timer.isActive():
            self._timer.start()
            log.debug(f"Ticker armed at {self.interval_ms}ms")

    def disarm(self):
        if self._timer.isActive():
            self._timer.stop()
            log.debug("Ticker disarmed")

    def __enter__(self):
        self.arm()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.disarm()
        return False

    def tick(self, when=None):
        batch, completed = plan_tick(self.store.state, when)
        if batch:
            self.store.dispatch(*batch)
        for timer in completed:
            log.info(f"Timer '{timer.name}' ({timer.id}) completed")
            self.completed.emit(timer.name)
