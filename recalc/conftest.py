import pytest

from recalc.config import Settings
from recalc.context import Context, update_context
from recalc.main import Session
from recalc.parser import parse


@pytest.fixture
def ctx():
    return Context()


@pytest.fixture
def bind(ctx):
    """Apply `name = expr` lines to the ctx fixture, the way a session would."""
    def _bind(*lines):
        for line in lines:
            update_context(parse(line), ctx)
        return ctx
    return _bind


@pytest.fixture
def session(tmp_path):
    return Session(Settings(history_file=str(tmp_path / "history")))


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()
    if report.when == "call":
        print(f"TEST: {item.name} - {'PASSED' if report.passed else 'FAILED'}")
