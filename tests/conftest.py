import itertools
from pathlib import Path
from typing import Callable

import pytest

from services.defaults import DefaultLayoutProvider
from settings import Settings
from storage.page_store import PageStore

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def settings() -> Settings:
    """Settings with defaults only. Nothing is written to data_dir."""
    return Settings(data_dir=FIXTURES_DIR)


@pytest.fixture
def tmp_settings(tmp_path: Path) -> Settings:
    """Settings pointing at a fresh temp directory for tests that write files.

    Directory layout mirrors a real deployment:
        data/pages.json   TinyDB page store
        data/theme.yaml   base theme (absent unless a test writes one)
        data/output/      rendered HTML
    """
    return Settings(data_dir=tmp_path)


@pytest.fixture
def store() -> PageStore:
    """In-memory page store."""
    s = PageStore()
    yield s
    s.close()


@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Deterministic component ids: c-001, c-002, ..."""
    counter = itertools.count(1)
    return lambda: f"c-{next(counter):03d}"


@pytest.fixture
def provider(id_factory) -> DefaultLayoutProvider:
    return DefaultLayoutProvider(id_factory=id_factory)
