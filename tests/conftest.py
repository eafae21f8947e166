"""Shared pytest configuration for the QuadTreeLib test suite."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from quadtreelib.testing import build_count_tree, build_sample_tree


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: large trees; skipped by run_tests.py unless --all")


@pytest.fixture
def sample_tree():
    return build_sample_tree()


@pytest.fixture
def count_tree():
    return build_count_tree()
