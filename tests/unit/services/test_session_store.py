import logging
from unittest.mock import MagicMock

import pytest

from app.services.ChatService.chat_service_interface import ChatServiceInterface
from app.services.SessionService.session_store import SessionStore


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def _idle_chat() -> MagicMock:
    chat = MagicMock(spec=ChatServiceInterface)
    chat.busy = False
    return chat


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def session_store(clock: FakeClock) -> SessionStore:
    return SessionStore(
        chat_factory=_idle_chat,
        logger=logging.getLogger("SessionStoreTest"),
        idle_seconds=60,
        clock=clock,
    )


def test_create_returns_unique_ids(session_store: SessionStore) -> None:
    first = session_store.create()
    second = session_store.create()

    assert first != second
    assert len(session_store) == 2


def test_each_session_gets_its_own_chat(session_store: SessionStore) -> None:
    first = session_store.create()
    second = session_store.create()

    assert session_store.get(first) is not session_store.get(second)
    assert session_store.get(first) is session_store.get(first)


def test_get_unknown_session_raises(session_store: SessionStore) -> None:
    with pytest.raises(KeyError):
        session_store.get("missing")


def test_close_forgets_session(session_store: SessionStore) -> None:
    session_id = session_store.create()

    session_store.close(session_id)

    assert len(session_store) == 0
    with pytest.raises(KeyError):
        session_store.get(session_id)


def test_close_unknown_session_raises(session_store: SessionStore) -> None:
    with pytest.raises(KeyError):
        session_store.close("missing")


def test_idle_session_is_evicted_on_create(
    session_store: SessionStore, clock: FakeClock
) -> None:
    stale = session_store.create()
    clock.now += 61

    fresh = session_store.create()

    assert len(session_store) == 1
    assert session_store.get(fresh) is not None
    with pytest.raises(KeyError):
        session_store.get(stale)


def test_recently_used_session_is_kept(
    session_store: SessionStore, clock: FakeClock
) -> None:
    active = session_store.create()
    clock.now += 50
    session_store.get(active)
    clock.now += 50

    session_store.create()

    assert len(session_store) == 2
    assert session_store.get(active) is not None


def test_busy_session_is_never_evicted(
    session_store: SessionStore, clock: FakeClock
) -> None:
    session_id = session_store.create()
    session_store.get(session_id).busy = True
    clock.now += 3600

    assert session_store.evict_idle() == 0
    assert len(session_store) == 1


def test_many_abandoned_sessions_do_not_accumulate(
    session_store: SessionStore, clock: FakeClock
) -> None:
    for _ in range(1000):
        session_store.create()
        clock.now += 1

    assert len(session_store) == 62
