from __future__ import annotations

from typing import Any

import pytest


@pytest.fixture
def record() -> dict[str, Any]:
    """A fresh plain record per test; models alias it, so tests may mutate it."""
    return {"name": "Alice", "age": 30}
