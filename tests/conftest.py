import sys
from pathlib import Path

import pytest

# Ensure the 'src' directory is on sys.path for imports in tests
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from merkle_core.hasher import Sha256Hasher, SimpleHasher  # noqa: E402


@pytest.fixture(params=[Sha256Hasher, SimpleHasher], ids=["sha256", "simple"])
def hasher(request):
    return request.param()


@pytest.fixture
def simple():
    return SimpleHasher()
