import signal
import sys
from PySide6.QtCore import QCoreApplication, QTimer
from tt.common.logger import apply_log_settings, log
from tt.common.setup import PATHS
from tt.core.config import load_settings
from tt.core.persistence import PersistenceBridge
from tt.core.storage import JsonFileStore
from tt.core.store import TimerStore
from tt.core.ticker import Ticker

# Headless host: restores the saved timers, keeps them ticking inside a Qt event loop, and saves on every change
# until the loop quits.
def main():
    settings = load_settings()
    apply_log_settings(log, settings["log_level"], settings["console_log"])

    app = QCoreApplication(sys.argv)
    store = TimerStore()
    bridge = PersistenceBridge(store, JsonFileStore(PATHS.store))
    bridge.restore()
    bridge.attach()

    ticker = Ticker(store, interval_ms=settings["tick_interval_ms"])
    ticker.completed.connect(lambda name: log.info(f"Timer \"{name}\" Completed!"))

    # Ctrl+C only reaches Python between Qt events, so keep a cheap timer around to hand control back regularly.
    signal.signal(signal.SIGINT, lambda *_: app.quit())
    wakeup = QTimer()
    wakeup.timeout.connect(lambda: None)
    wakeup.start(250)

    with ticker:
        try:
            exit_code = app.exec()
        finally:
            bridge.flush()
            bridge.detach()
    log.info(f"Event loop exited with code {exit_code}")
    return exit_code

# Entry point for `python -m tt`
def run() -> None:
    try:
        sys.exit(main())
    except SystemExit:
        raise
    except Exception:
        # Full stack trace, always
        log.exception("Uncaught exception in entrypoint, exiting")
        sys.exit(1)

if __name__ == "__main__":
    run()
