"""Code intended to run on start-up and shutdown of the operator, around the
handlers.
"""

__all__ = ("create_watcher", "login", "start_operator", "stop_operator")

import asyncio
import contextlib
from typing import Any

import kopf
import kubernetes
import structlog
from botocore.exceptions import BotoCoreError

from ecrpullsecretoperator import __version__, state
from ecrpullsecretoperator.ecr import CredentialFetcher, create_session
from ecrpullsecretoperator.k8s import create_connection_info, create_k8sclient
from ecrpullsecretoperator.reconciler import Reconciler
from ecrpullsecretoperator.resync import run_resync_loop
from ecrpullsecretoperator.watcher import NamespaceWatcher


@kopf.on.startup()
async def start_operator(
    settings: kopf.OperatorSettings, logger: Any, **kwargs: Any
) -> None:
    """Configure Kopf, build the clients shared by all handlers and start
    the periodic resync of all namespaces.

    Any failure to build the clients stops the operator rather than leaving
    it to fail on every event.
    """
    # One executor thread: events for all namespaces run one after another.
    settings.execution.max_workers = 1
    settings.posting.enabled = False

    logger.info(f"Starting ecr-pull-secret-operator {__version__}")

    try:
        k8s_client = create_k8sclient(
            kubeconfig=state.kubeconfig, master_url=state.kube_master_url
        )
        state.watcher = create_watcher(k8s_client=k8s_client, logger=logger)
    except (
        kubernetes.config.ConfigException,
        BotoCoreError,
        ValueError,
    ) as e:
        raise kopf.PermanentError(f"Could not start the operator: {e}") from e

    state.resync_task = asyncio.create_task(
        run_resync_loop(
            watcher=state.watcher,
            k8s_client=k8s_client,
            interval=state.refresh_interval,
            executor=settings.execution.executor,
            logger=logger,
            request_timeout=state.request_timeout,
        )
    )
    logger.info(
        f"Watching namespaces for region {state.region}, refreshing every "
        f"{state.refresh_interval} seconds"
    )


@kopf.on.cleanup()
async def stop_operator(logger: Any, **kwargs: Any) -> None:
    """Stop the periodic resync."""
    task = state.resync_task
    if task is None:
        return
    task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await task
    state.resync_task = None
    logger.info("Stopped namespace resync")


@kopf.on.login()
def login(logger: Any, **kwargs: Any) -> kopf.ConnectionInfo:
    """Authenticate Kopf's own API connection with the same configuration
    as the operator's Kubernetes client.
    """
    try:
        k8s_client = create_k8sclient(
            kubeconfig=state.kubeconfig, master_url=state.kube_master_url
        )
    except kubernetes.config.ConfigException as e:
        raise kopf.LoginError(f"Cannot load Kubernetes config: {e}") from e
    logger.debug("Kopf is authenticated with the operator's client config")
    return create_connection_info(k8s_client)


def create_watcher(
    *, k8s_client: Any, logger: Any | None = None
) -> NamespaceWatcher:
    """Create a NamespaceWatcher from the configuration in
    `ecrpullsecretoperator.state`.

    Parameters
    ----------
    k8s_client
        A Kubernetes client (see
        `ecrpullsecretoperator.k8s.create_k8sclient`).
    logger : optional
        Logger to use. If not provided, a structlog logger is used.

    Raises
    ------
    ValueError
        Raised if no AWS region is configured.
    botocore.exceptions.BotoCoreError
        Raised if the boto3 session cannot be created.
    """
    if logger is None:
        logger = structlog.getLogger(__name__)

    if not state.region:
        raise ValueError("ECRPS_AWS_REGION is not set")

    session = create_session(
        aws_access_key_id=state.aws_access_key_id,
        aws_secret_access_key=state.aws_secret_access_key,
    )
    fetcher = CredentialFetcher(
        session, timeout=state.request_timeout, logger=logger
    )
    reconciler = Reconciler(
        k8s_client=k8s_client,
        credential_fetcher=fetcher,
        region=state.region,
        logger=logger,
        request_timeout=state.request_timeout,
    )
    return NamespaceWatcher(reconciler, logger=logger)
