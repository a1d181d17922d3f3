"""Periodic resync of every namespace, which is what refreshes the ECR
tokens before they expire.

The resync is one operator-wide task, not a per-object Kopf timer, so no
Kopf finalizer is ever added to a Namespace.
"""

__all__ = ("resync_namespaces", "run_resync_loop")

import asyncio
import concurrent.futures
import functools
from typing import Any

import structlog
from kubernetes.client.exceptions import ApiException
from urllib3.exceptions import HTTPError

from ecrpullsecretoperator.k8s import list_namespaces
from ecrpullsecretoperator.watcher import NamespaceWatcher


def resync_namespaces(
    *,
    watcher: NamespaceWatcher,
    k8s_client: Any,
    logger: Any | None = None,
    request_timeout: float | None = None,
) -> int:
    """Deliver an update for every namespace in the cluster.

    Returns
    -------
    count : `int`
        The number of namespaces handed to the watcher. Zero if the
        namespaces could not be listed.
    """
    if logger is None:
        logger = structlog.getLogger(__name__)

    try:
        bodies = list_namespaces(
            k8s_client=k8s_client, request_timeout=request_timeout
        )
    except (ApiException, HTTPError) as e:
        logger.error(f"Could not list namespaces for resync: {e}")
        return 0

    for body in bodies:
        watcher.on_update(body, logger=logger)
    logger.info(f"Resynced {len(bodies)} namespaces")
    return len(bodies)


async def run_resync_loop(
    *,
    watcher: NamespaceWatcher,
    k8s_client: Any,
    interval: float,
    executor: concurrent.futures.Executor | None = None,
    logger: Any | None = None,
    request_timeout: float | None = None,
) -> None:
    """Resync all namespaces every ``interval`` seconds until cancelled.

    Parameters
    ----------
    watcher : `ecrpullsecretoperator.watcher.NamespaceWatcher`
        Receives an update for each namespace.
    k8s_client
        A Kubernetes client (see
        `ecrpullsecretoperator.k8s.create_k8sclient`).
    interval : `float`
        Seconds to wait before each resync.
    executor : `concurrent.futures.Executor`, optional
        Executor running the resync. Pass Kopf's handler executor so the
        resync shares its thread with the event handlers.
    logger : optional
        Logger to use. If not provided, a structlog logger is used.
    request_timeout : `float`, optional
        Deadline for each Kubernetes API call, in seconds.
    """
    if logger is None:
        logger = structlog.getLogger(__name__)

    loop = asyncio.get_running_loop()
    resync = functools.partial(
        resync_namespaces,
        watcher=watcher,
        k8s_client=k8s_client,
        logger=logger,
        request_timeout=request_timeout,
    )
    while True:
        await asyncio.sleep(interval)
        try:
            await loop.run_in_executor(executor, resync)
        except Exception:
            logger.exception("Namespace resync failed")
