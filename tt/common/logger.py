import logging
from logging.handlers import RotatingFileHandler
from tt.common.setup import PATHS
from datetime import datetime

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(filename)s:%(lineno)d] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

MAX_BYTES = 5 * 1024 * 1024
DEBUG_MAX_BYTES = 1024 * 1024

def get_logger(
        name = "timertrack",
        level = logging.INFO,
        historical_debugs: int = 10
) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.propagate = False
    logger.setLevel(logging.DEBUG if historical_debugs > 0 else level)

    fmt = logging.Formatter(LOG_FORMAT,LOG_DATE_FORMAT)

    # Setup persistent handler
    persistent_handler_name = f"{name}:persistent"
    if not any(h.get_name() == persistent_handler_name for h in logger.handlers):
        persistent_handler = RotatingFileHandler(
            filename=PATHS.logs / f"{name}.log",
            maxBytes=MAX_BYTES,
            backupCount=5,
            encoding="utf-8",
            delay=True,
        )
        persistent_handler.setLevel(level)
        persistent_handler.setFormatter(fmt)
        persistent_handler.set_name(persistent_handler_name)
        logger.addHandler(persistent_handler)

    # Setup latest-only handler (always overwritten each run)
    latest_handler_name = f"{name}:latest"
    if not any(h.get_name() == latest_handler_name for h in logger.handlers):
        latest_handler = logging.FileHandler(
            filename=PATHS.logs / "latest.log",
            mode="w",
            encoding="utf-8",
            delay=True
        )
        latest_handler.setLevel(level)
        latest_handler.setFormatter(fmt)
        latest_handler.set_name(latest_handler_name)
        logger.addHandler(latest_handler)

    # Setup historical debug handler, one size-capped file per run
    historical_debug_handler_name = f"{name}:historical_debug"
    if historical_debugs > 0 and not any(h.get_name() == historical_debug_handler_name for h in logger.handlers):
        historical_debug_path = PATHS.logs / "debug"
        historical_debug_path.mkdir(parents=True,exist_ok=True)
        this_historical_debug_log_path = historical_debug_path / f"{name}_{datetime.now():%Y-%m-%d_%H-%M-%S}.log"

        historical_debug_handler = RotatingFileHandler(
            filename=this_historical_debug_log_path,
            maxBytes=DEBUG_MAX_BYTES,
            backupCount=1,
            encoding="utf-8",
            delay=False
        )
        historical_debug_handler.setLevel(logging.DEBUG)
        historical_debug_handler.setFormatter(fmt)
        historical_debug_handler.set_name(historical_debug_handler_name)
        logger.addHandler(historical_debug_handler)

        # Prune oldest runs
        runs = sorted(historical_debug_path.glob(f"{name}_*.log*"),key=lambda p: p.stat().st_mtime,reverse=True)
        for run in runs[historical_debugs:]:
            try: run.unlink()
            except OSError: pass

    return logger

# Re-applies level/console choices from settings onto the already-built shared logger.
def apply_log_settings(logger: logging.Logger, level_name: str, console: bool):
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        logger.warning(f"Unknown log level '{level_name}', keeping INFO")
        level = logging.INFO
    for handler in logger.handlers:
        if handler.get_name().endswith((":persistent", ":latest", ":console")):
            handler.setLevel(level)

    console_handler_name = f"{logger.name}:console"
    if console and not any(h.get_name() == console_handler_name for h in logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT,LOG_DATE_FORMAT))
        console_handler.set_name(console_handler_name)
        logger.addHandler(console_handler)
    if level < logger.level:
        logger.setLevel(level)

log = get_logger(level=logging.INFO,historical_debugs=10)
log.info("=== INITIALIZED NEW SESSION ===")
