# tests/conftest.py
import pytest

from warbler.Parser import Environment, Position


@pytest.fixture
def make_env():
    def _make(line=1, col=1):
        return Environment(Position(line, col))

    return _make
