"""Root pytest configuration: puts the repository root on sys.path and shares fixture paths."""

import os

import pytest

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "tests", "fixtures")


@pytest.fixture(scope="session")
def fixtures_dir():
    return FIXTURES_DIR


@pytest.fixture(scope="session")
def sample_package(fixtures_dir):
    return os.path.join(fixtures_dir, "sample_package")
