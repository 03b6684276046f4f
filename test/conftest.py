import io
import os
import tempfile

import pytest

# Keep log output out of the working tree when settings fall back to env defaults
temp_dir = tempfile.gettempdir()
test_logs_dir = os.path.join(temp_dir, "test_logs")
os.makedirs(test_logs_dir, exist_ok=True)

os.environ.setdefault("ACCESS_LOG_DIR", test_logs_dir)
os.environ.setdefault("ACCESS_LOG_FILE", "test_honeyaml.log")

from src.access_log.levels import Threshold  # noqa: E402
from src.access_log.pipeline import build_pipeline  # noqa: E402


@pytest.fixture
def console():
    return io.StringIO()


@pytest.fixture
def pipeline(tmp_path, console):
    pipe = build_pipeline(str(tmp_path / "logs"), "honeyaml.log", Threshold.WARN, stream=console)
    yield pipe
    pipe.close()
