import os
import random
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from digger import create_app  # noqa: E402


class ScriptedRandom:
    """Random source returning queued values, then deferring to ``fallback``.

    Every ``randrange`` call is recorded in ``calls`` as ``(start, stop)``.
    Scripted values must fall inside the requested range.
    """

    def __init__(self, values=(), fallback=None):
        self.values = list(values)
        self.fallback = fallback
        self.calls = []

    def randrange(self, start, stop):
        self.calls.append((start, stop))
        if self.values:
            value = self.values.pop(0)
            assert start <= value < stop, f"scripted {value} outside [{start}, {stop})"
            return value
        if self.fallback is not None:
            return self.fallback.randrange(start, stop)
        raise AssertionError(f"scripted random exhausted at call {len(self.calls)} ({start}, {stop})")


@pytest.fixture
def scripted():
    def factory(values=(), seed=None):
        fallback = random.Random(seed) if seed is not None else None
        return ScriptedRandom(values, fallback=fallback)

    return factory


@pytest.fixture(scope="session")
def test_app():
    app = create_app({"TESTING": True, "DIGGER_DISABLE_CACHE": True})
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


def pytest_configure(config):  # register custom marker
    config.addinivalue_line("markers", "structure: structural invariants over generated dungeons")
