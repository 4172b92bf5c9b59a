import os
from datetime import datetime

import pytest

from cadence.domain.scheduling.models import SchedulerSettings


@pytest.fixture
def now():
    """A fixed afternoon, well past the 4am rollover."""
    return datetime(2024, 3, 10, 15, 30)


@pytest.fixture
def settings():
    """Default settings with two intraday learning steps: 1m then 10m."""
    return SchedulerSettings(learning_steps=(1.0, 10.0))


@pytest.fixture(autouse=True)
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir and clears CADENCE_* env vars."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config files
    monkeypatch.setenv("HOME", str(home))
    for key in [k for k in os.environ if k.startswith("CADENCE_")]:
        monkeypatch.delenv(key)
    return home
