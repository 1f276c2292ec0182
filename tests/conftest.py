from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.module_cache import ModuleCacheBuilder


@pytest.fixture
def module_cache(tmp_path: Path) -> ModuleCacheBuilder:
    """Provide a module cache rooted at the pytest tmp_path."""
    return ModuleCacheBuilder(tmp_path)
