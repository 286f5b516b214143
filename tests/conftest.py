"""Pytest configuration and global fixtures for LangVec tests."""

from pathlib import Path

import pytest

# Import shared fixtures
from tests.fixtures.common import (  # noqa: F401
    populated_products,
    products,
    sample_corpus,
    sample_products,
    store,
)

# ==================== Pytest Configuration ====================

def pytest_configure(config):
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests")

def pytest_collection_modifyitems(config, items):
    for item in items:
        rel_path = Path(item.fspath).relative_to(Path(__file__).parent)
        if "unit" in rel_path.parts:
            item.add_marker(pytest.mark.unit)
        elif "smoke" in rel_path.parts:
            item.add_marker(pytest.mark.smoke)
