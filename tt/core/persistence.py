import json
from PySide6.QtCore import QObject, QTimer
from tt.common.logger import log
from tt.core.actions import ReplaceHistory, ReplaceTimers
from tt.core.models import HistoryEntry, Timer

TIMERS_KEY = "timers"
HISTORY_KEY = "history"

#region === Encoding ===

def dump_timers(timers):
    return json.dumps([timer.to_dict() for timer in timers], indent=2)

def load_timers(text):
    data = json.loads(text)
    if not isinstance(data, list):
        raise TypeError(f"Expected a list of timers, got {type(data).__name__}")
    return tuple(Timer.from_dict(item) for item in data)

def dump_history(history):
    return json.dumps([entry.to_dict() for entry in history], indent=2)

def load_history(text):
    data = json.loads(text)
    if not isinstance(data, list):
        raise TypeError(f"Expected a list of history entries, got {type(data).__name__}")
    return tuple(HistoryEntry.from_dict(item) for item in data)

#endregion === Encoding ===


# Mirrors the store into a key-value adapter. Writes are fire-and-forget: a change marks the sequence dirty and
# queues one flush for the next event loop turn, so a burst of actions ends up as a single write of the latest
# value. Nothing waits on a write and a failed write is only logged.
class PersistenceBridge(QObject):

    def __init__(self, store, adapter, parent=None):
        super().__init__(parent)
        self.store = store
        self.adapter = adapter
        self._written_timers = None
        self._written_history = None
        self._flush_queued = False
        self._attached = False

    # Reads both keys once and pushes whatever parses into the store. Each key falls back to empty on its own.
    def restore(self):
        batch = []
        timers = self._read(TIMERS_KEY, load_timers)
        if timers is not None:
            batch.append(ReplaceTimers(timers))
        history = self._read(HISTORY_KEY, load_history)
        if history is not None:
            batch.append(ReplaceHistory(history))
        if batch:
            self.store.dispatch(*batch)

        # What we just loaded is already on disk, no need to write it straight back.
        self._written_timers = self.store.timers
        self._written_history = self.store.history
        log.info(f"Restored {len(self.store.timers)} timers and {len(self.store.history)} history entries")

    def _read(self, key, loader):
        try:
            text = self.adapter.get(key)
        except (OSError, UnicodeDecodeError):
            log.warning(f"Could not read '{key}' from the store, starting empty", exc_info=True)
            return None
        if text is None:
            log.info(f"No saved '{key}' found, starting empty")
            return None
        try:
            return loader(text)
        except (json.JSONDecodeError, KeyError, TypeError, ValueError, RecursionError):
            log.warning(f"Saved '{key}' is malformed, starting empty", exc_info=True)
            return None

    def attach(self):
        if not self._attached:
            self.store.state_changed.connect(self._on_state_changed)
            self._attached = True

    def detach(self):
        if self._attached:
            self.store.state_changed.disconnect(self._on_state_changed)
            self._attached = False

    def _on_state_changed(self, _state):
        if self._flush_queued:
            return
        self._flush_queued = True
        QTimer.singleShot(0, self.flush)

    @property
    def pending(self):
        return self.store.timers != self._written_timers or self.store.history != self._written_history

    # Writes whichever sequences changed since the last write. Safe to call directly, e.g. on teardown.
    def flush(self):
        self._flush_queued = False
        timers = self.store.timers
        history = self.store.history
        if timers != self._written_timers:
            if self._write(TIMERS_KEY, dump_timers(timers)):
                self._written_timers = timers
        if history != self._written_history:
            if self._write(HISTORY_KEY, dump_history(history)):
                self._written_history = history

    def _write(self, key, text):
        try:
            self.adapter.set(key, text)
            return True
        except OSError:
            log.warning(f"Failed to save '{key}'", exc_info=True)
            return False
