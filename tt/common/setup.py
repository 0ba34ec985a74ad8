import os
import sys
from pathlib import Path
from dataclasses import dataclass

# Lil helper function to create missing directories.
def ensure_directory(path: Path):
    path.mkdir(parents=True,exist_ok=True)
    return path

# Figures out where user data lives. TIMERTRACK_HOME always wins, then the platform default.
def resolve_data_root() -> Path:
    override = os.getenv("TIMERTRACK_HOME")
    if override:
        return Path(override).expanduser()

    if sys.platform.startswith("win"):
        appdata = os.getenv("APPDATA")
        if not appdata:
            raise RuntimeError("Missing APPDATA environment variable, cannot determine data directories.")
        return Path(appdata) / "TimerTrack"

    xdg = os.getenv("XDG_DATA_HOME")
    base = Path(xdg) if xdg else Path.home() / ".local" / "share"
    return base / "TimerTrack"

# Dataclass for accessing paths across program.
@dataclass(frozen=False)
class ProjectPaths:

    data: Path
    logs: Path
    store: Path
    settings: Path

    @staticmethod
    def build(root: Path | None = None):
        data = ensure_directory(root or resolve_data_root())

        # Folders within the data folder
        logs = ensure_directory(data / "logs")
        store = ensure_directory(data / "store")

        return ProjectPaths(
            data = data,
            logs = logs,
            store = store,
            settings = data / "settings.json",
        )
PATHS = ProjectPaths.build()
