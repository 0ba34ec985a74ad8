from datetime import datetime, timezone


# Simply returns the current local time as an aware datetime.
def now_local():
    return datetime.now().astimezone()

# Simply returns the current local time as an ISO8601 string with timezone offset.
def now_iso():
    return now_local().isoformat()

# Parses an ISO8601 string into an aware datetime. Accepts a trailing "Z" (as written by JS toISOString()),
# and treats naive strings as UTC.
def parse_iso(text):
    if not isinstance(text, str):
        raise TypeError(f"Expected an ISO8601 string, got {type(text).__name__}")
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed

# Formats whole seconds as M:SS, or H:MM:SS once it passes an hour.
def format_time(seconds):
    seconds = max(0, int(seconds))
    hours, rem = divmod(seconds, 3600)
    minutes, secs = divmod(rem, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"

# One line of the completion history, e.g. "Tea - 2026-10-19 14:03:11", shown in local time.
def format_history_line(entry):
    return f"{entry.name} - {entry.time.astimezone():%Y-%m-%d %H:%M:%S}"
