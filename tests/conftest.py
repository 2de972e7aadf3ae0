from collections.abc import Generator
import logging
import random

import pytest

from blob_fixtures import random_blobs


@pytest.fixture(autouse=True)
def restore_root_log_level() -> Generator[None, None, None]:
    """Undo log level changes made by CLI runs with -D."""
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


@pytest.fixture
def rng() -> random.Random:
    """Deterministic random source for property style tests."""
    return random.Random(0x7E78)


@pytest.fixture
def blobs(rng: random.Random) -> list[bytes]:
    return random_blobs(rng)
