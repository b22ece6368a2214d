import pytest

from tests.fakes import FakeDispatcher


@pytest.fixture
def fake_dispatcher():
    return FakeDispatcher()
