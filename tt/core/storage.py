"""Key-value stores the persistence bridge writes to. Both expose the same two calls, get(key) and set(key, text),
and know nothing about timers."""

from pathlib import Path
from tt.common.logger import log


# One file per key under a directory, e.g. <store>/timers.json.
class JsonFileStore:

    def __init__(self, directory: Path):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key):
        return self.directory / f"{key}.json"

    # Returns the stored text, or None when nothing has been written under this key yet.
    def get(self, key):
        path = self._path(key)
        if not path.exists():
            return None
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def set(self, key, value):
        path = self._path(key)
        with open(path, "w", encoding="utf-8") as f:
            f.write(value)
        log.debug(f"Wrote {len(value)} chars to '{path}'")


class MemoryStore:

    def __init__(self, initial=None):
        self.data = dict(initial or {})

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value
