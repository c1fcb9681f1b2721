from __future__ import annotations

from datetime import datetime

import pytest


@pytest.fixture
def fixed_now() -> datetime:
    # Monday, a regular working day
    return datetime(2025, 1, 6, 9, 0)
