"""Cancellation token behavior as seen by stream sessions and their hosts."""
from __future__ import annotations

import asyncio
import threading

import pytest

from promptlab_providers.base.cancellation import (
    DEFAULT_CANCEL_REASON,
    CancellationToken,
    CancelledError,
)


def test_first_reason_wins_and_cascades():
    stop_all = CancellationToken()
    chat, title = stop_all.child(), stop_all.child()

    stop_all.cancel(reason="stop")
    stop_all.cancel(reason="ignored")

    for token in (stop_all, chat, title):
        assert token.cancelled and token.reason == "stop"  # nosec B101


def test_child_cancel_stays_local():
    parent = CancellationToken()
    parent.child().cancel("child only")
    assert parent.cancelled is False  # nosec B101


def test_child_linked_after_parent_cancel_starts_cancelled():
    parent = CancellationToken()
    parent.cancel("done")
    late = CancellationToken(parent=parent)
    assert late.cancelled and late.reason == "done"  # nosec B101


def test_raise_if_cancelled_carries_reason():
    token = CancellationToken()
    token.raise_if_cancelled()
    token.cancel("terminate")
    with pytest.raises(CancelledError, match="terminate") as info:
        token.raise_if_cancelled()
    assert info.value.reason == "terminate"  # nosec B101


def test_default_reason():
    token = CancellationToken()
    token.cancel()
    assert token.reason is None  # nosec B101
    with pytest.raises(CancelledError) as info:
        token.raise_if_cancelled()
    assert info.value.reason == DEFAULT_CANCEL_REASON == "operation cancelled"  # nosec B101


def test_not_an_asyncio_cancellation():
    assert issubclass(CancelledError, RuntimeError)  # nosec B101
    assert not issubclass(CancelledError, asyncio.CancelledError)  # nosec B101


def test_cancel_from_ui_thread_wakes_waiter():
    token = CancellationToken()
    assert token.wait(timeout=0.01) is False  # nosec B101

    worker = threading.Thread(target=token.cancel, args=("ui thread",))
    worker.start()
    assert token.wait(timeout=5) is True  # nosec B101
    worker.join()
    assert token.reason == "ui thread"  # nosec B101
