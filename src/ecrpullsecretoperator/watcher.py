"""Dispatch of namespace events to the reconciler."""

__all__ = ("NamespaceWatcher",)

from collections.abc import Mapping
from typing import Any

import structlog

from ecrpullsecretoperator.exceptions import ReconcileError
from ecrpullsecretoperator.models import Namespace
from ecrpullsecretoperator.reconciler import Reconciler


class NamespaceWatcher:
    """Reconciles namespaces as their add and update events arrive.

    Deletions have no handler of their own: a namespace being deleted shows
    up as an update with ``deletionTimestamp`` set, which the reconciler
    skips.

    Parameters
    ----------
    reconciler : `ecrpullsecretoperator.reconciler.Reconciler`
        The reconciler invoked for every event.
    logger : optional
        Logger to use when a call does not provide one. If not provided, a
        structlog logger is used.
    """

    def __init__(
        self, reconciler: Reconciler, logger: Any | None = None
    ) -> None:
        self._reconciler = reconciler
        self._logger = logger or structlog.getLogger(__name__)

    def on_add(
        self, body: Mapping[str, Any], logger: Any | None = None
    ) -> None:
        """Handle a namespace that was added or listed."""
        self._dispatch(body, logger)

    def on_update(
        self, body: Mapping[str, Any], logger: Any | None = None
    ) -> None:
        """Handle a namespace that changed, or was resynced."""
        self._dispatch(body, logger)

    def _dispatch(self, body: Mapping[str, Any], logger: Any | None) -> None:
        if logger is None:
            logger = self._logger
        namespace = Namespace.from_body(body)
        try:
            self._reconciler.reconcile(namespace, logger=logger)
        except ReconcileError as e:
            logger.error(str(e))
