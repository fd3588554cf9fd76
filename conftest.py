import pytest

from library import Library

@pytest.fixture
def lib():
    # Fresh in-memory store for each test
    lib = Library()
    yield lib
    lib.clear()
