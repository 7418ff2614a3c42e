"""Tests for the session memory store."""

import asyncio

import pytest
from pydantic import ValidationError

from rag_agent.schemas import Message
from rag_agent.services import SessionStore


def _user(content: str) -> Message:
    return Message(role="user", content=content)


def _assistant(content: str) -> Message:
    return Message(role="assistant", content=content)


def test_unseen_session_is_empty() -> None:
    """Test reading a session that was never written."""
    store = SessionStore()
    assert store.get("missing") == ()
    assert store.recent_window("missing", 2) == []
    assert len(store) == 0


def test_append_creates_session_and_preserves_order() -> None:
    """Test lazy session creation and insertion order."""
    store = SessionStore()
    store.append("s1", _user("one"))
    store.append("s1", _assistant("two"))
    store.append("s1", _user("three"))

    assert [m.content for m in store.get("s1")] == ["one", "two", "three"]
    assert store.session_ids() == ["s1"]


def test_recent_window_returns_last_n_oldest_first() -> None:
    """Test the history window regardless of total session length."""
    store = SessionStore()
    for i in range(7):
        store.append("s1", _user(f"m{i}"))

    window = store.recent_window("s1", 2)
    assert [m.content for m in window] == ["m5", "m6"]


def test_recent_window_shorter_history() -> None:
    """Test a window larger than the history returns everything."""
    store = SessionStore()
    store.append("s1", _user("only"))

    assert [m.content for m in store.recent_window("s1", 5)] == ["only"]
    assert store.recent_window("s1", 0) == []


def test_get_returns_snapshot() -> None:
    """Test that callers cannot mutate stored history through get()."""
    store = SessionStore()
    store.append("s1", _user("a"))
    snapshot = store.get("s1")
    store.append("s1", _user("b"))

    assert len(snapshot) == 1
    assert len(store.get("s1")) == 2


def test_sessions_are_isolated() -> None:
    """Test that one session never sees another's messages."""
    store = SessionStore()
    store.append("a", _user("for a"))
    store.append("b", _user("for b"))

    assert [m.content for m in store.get("a")] == ["for a"]
    assert [m.content for m in store.get("b")] == ["for b"]


def test_messages_are_immutable() -> None:
    """Test that a recorded message cannot be edited."""
    message = _user("fixed")
    with pytest.raises(ValidationError):
        message.content = "changed"  # type: ignore[misc]


@pytest.mark.asyncio
async def test_session_lock_is_per_key() -> None:
    """Test that each session id gets its own lock."""
    store = SessionStore()
    assert store.session_lock("a") is store.session_lock("a")
    assert store.session_lock("a") is not store.session_lock("b")

    async with store.session_lock("a"):
        # Another session's lock is free while "a" is held.
        assert not store.session_lock("b").locked()
        await asyncio.wait_for(store.session_lock("b").acquire(), timeout=1)
        store.session_lock("b").release()
