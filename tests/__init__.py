import os
import tempfile

# Keep logs/settings/store of the test run out of the real user data directory.
os.environ.setdefault("TIMERTRACK_HOME", tempfile.mkdtemp(prefix="timertrack-tests-"))
