"""Kopf handler that feeds namespace watch events to the NamespaceWatcher.

The periodic resync of every namespace is not a handler here: it is
started by `ecrpullsecretoperator.startup.start_operator`.
"""

__all__ = ("handle_namespace_event",)

from typing import Any

import kopf

from .. import state


@kopf.on.event("", "v1", "namespaces")  # type: ignore[arg-type]
def handle_namespace_event(
    *,
    event: dict[str, Any],
    body: dict[str, Any],
    logger: Any,
    **kwargs: Any,
) -> None:
    """Handle a watch event for a Namespace.

    Parameters
    ----------
    event : `dict`
        The raw watch event. Its type is `None` for namespaces found by the
        initial listing, then ``ADDED``, ``MODIFIED`` or ``DELETED``.
    body : `dict`
        The body of the Namespace.
    logger : `Any`
        The kopf logger.
    kwargs : `Any`
        Additional keyword arguments provided by kopf.
    """
    if state.watcher is None:
        raise kopf.PermanentError("The operator has not been started")

    event_type = event["type"]
    if event_type in (None, "ADDED"):
        state.watcher.on_add(body, logger=logger)
    elif event_type == "MODIFIED":
        state.watcher.on_update(body, logger=logger)
