import random
import sys
from pathlib import Path

# Ensure package import for tests
ROOT = Path(__file__).resolve().parents[1]
for path in (ROOT, ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

import pytest


@pytest.fixture
def rng() -> random.Random:
    """A fixed-seed generator so every test run draws the same numbers."""

    return random.Random(12345)
