"""Tests for the ecrpullsecretoperator.handlers package."""

from __future__ import annotations

from unittest.mock import MagicMock

import kopf
import pytest

from ecrpullsecretoperator import state
from ecrpullsecretoperator.handlers import handle_namespace_event
from ecrpullsecretoperator.watcher import NamespaceWatcher

BODY = {"apiVersion": "v1", "kind": "Namespace", "metadata": {"name": "apps"}}


@pytest.fixture
def watcher(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    watcher = MagicMock(spec=NamespaceWatcher)
    monkeypatch.setattr(state, "watcher", watcher)
    return watcher


@pytest.mark.parametrize("event_type", [None, "ADDED"])
def test_added_namespace(watcher: MagicMock, event_type: str | None) -> None:
    logger = MagicMock()
    handle_namespace_event(
        event={"type": event_type, "object": BODY},
        body=BODY,
        logger=logger,
    )
    watcher.on_add.assert_called_once_with(BODY, logger=logger)
    watcher.on_update.assert_not_called()


def test_modified_namespace(watcher: MagicMock) -> None:
    logger = MagicMock()
    handle_namespace_event(
        event={"type": "MODIFIED", "object": BODY}, body=BODY, logger=logger
    )
    watcher.on_update.assert_called_once_with(BODY, logger=logger)
    watcher.on_add.assert_not_called()


def test_deleted_namespace(watcher: MagicMock) -> None:
    handle_namespace_event(
        event={"type": "DELETED", "object": BODY},
        body=BODY,
        logger=MagicMock(),
    )
    watcher.on_add.assert_not_called()
    watcher.on_update.assert_not_called()


def test_not_started(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(state, "watcher", None)
    with pytest.raises(kopf.PermanentError):
        handle_namespace_event(
            event={"type": "ADDED", "object": BODY},
            body=BODY,
            logger=MagicMock(),
        )


def test_no_finalizers() -> None:
    """Namespaces must be deletable without the operator, so no handler may
    make Kopf add its finalizer to them.
    """
    registry = kopf.get_default_registry()

    spawning = registry._spawning.get_all_handlers()
    changing = registry._changing.get_all_handlers()

    assert [handler.id for handler in spawning] == []
    assert [
        handler.id for handler in changing if handler.requires_finalizer
    ] == []
