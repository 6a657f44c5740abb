"""Shared pytest fixtures."""

from collections.abc import Generator

import pytest

from lifetrace import ManualScheduler, TraceSession, reset_config, reset_default_session
from tests.components import Child, LegacyChild
from tests.host import Host


@pytest.fixture(autouse=True)
def reset_globals() -> Generator[None, None, None]:
    """Reset the default session and config between tests for isolation."""
    yield
    reset_default_session()
    reset_config()


@pytest.fixture
def scheduler() -> ManualScheduler:
    """Tick queue the session's log flushes on."""
    return ManualScheduler()


@pytest.fixture
def session(scheduler: ManualScheduler) -> Generator[TraceSession, None, None]:
    """An isolated trace session driven by the manual scheduler."""
    session = TraceSession(scheduler=scheduler, name="test")
    yield session
    session.close()


@pytest.fixture
def host() -> Generator[Host, None, None]:
    """Host runtime that unmounts whatever is left after the test."""
    host = Host()
    yield host
    host.unmount_all()


@pytest.fixture
def traced_child(session: TraceSession) -> type:
    """Child instrumented in the test session."""
    return session.wrap(Child)


@pytest.fixture
def traced_legacy_child(session: TraceSession) -> type:
    """LegacyChild instrumented in the test session."""
    return session.wrap(LegacyChild)
