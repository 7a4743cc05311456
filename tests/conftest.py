from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Run against this repo's src/ tree rather than an installed `ghreminder`.
_REPO_ROOT = Path(__file__).resolve().parent.parent
_SRC = _REPO_ROOT / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from ghreminder.core.models import Label  # noqa: E402


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 6, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def threshold_labels() -> list[Label]:
    return [Label(name="deadline < 5", days=5), Label(name="deadline < 30", days=30)]
