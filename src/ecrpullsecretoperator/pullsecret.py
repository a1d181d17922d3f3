"""Create-or-update of the registry pull secret in a namespace."""

__all__ = ("SyncOutcome", "sync_secret")

from enum import Enum
from typing import Any

import structlog
from kubernetes.client.exceptions import ApiException

from ecrpullsecretoperator.k8s import get_secret


class SyncOutcome(Enum):
    """The mutation performed by `sync_secret`."""

    CREATED = "created"
    UPDATED = "updated"


def sync_secret(
    *,
    namespace: str,
    name: str,
    secret_type: str,
    data: dict[str, str],
    k8s_client: Any,
    logger: Any | None = None,
    request_timeout: float | None = None,
) -> SyncOutcome:
    """Create a Secret, or overwrite the data and type of an existing one.

    Parameters
    ----------
    namespace : `str`
        The namespace of the Secret.
    name : `str`
        The name of the Secret.
    secret_type : `str`
        The Secret's ``type``, such as ``kubernetes.io/dockerconfigjson``.
    data : `dict`
        The Secret's ``data``, with base64-encoded values.
    k8s_client
        A Kubernetes client (see
        `ecrpullsecretoperator.k8s.create_k8sclient`).
    logger : optional
        Logger to use. If not provided, a structlog logger is used.
    request_timeout : `float`, optional
        Deadline for each API call, in seconds.

    Returns
    -------
    outcome : `SyncOutcome`
        ``CREATED`` if the Secret did not exist, otherwise ``UPDATED``.

    Raises
    ------
    kubernetes.client.exceptions.ApiException
        Raised if the Secret cannot be read for any reason other than not
        existing, or if the write fails.
    """
    if logger is None:
        logger = structlog.getLogger(__name__)

    core_api = k8s_client.CoreV1Api()

    try:
        secret = get_secret(
            namespace=namespace,
            name=name,
            k8s_client=k8s_client,
            request_timeout=request_timeout,
        )
    except ApiException as e:
        if e.status != 404:
            logger.exception(f"Error retrieving secret {name} in {namespace}")
            raise
        secret = None

    if secret is not None:
        logger.info(f"Found existing secret in ns: {namespace}, updating...")
        secret.data = data
        secret.type = secret_type
        core_api.replace_namespaced_secret(
            name=name,
            namespace=namespace,
            body=secret,
            _request_timeout=request_timeout,
        )
        return SyncOutcome.UPDATED

    logger.info(f"Secret does not exist in ns: {namespace}, creating...")
    body = k8s_client.V1Secret(
        metadata=k8s_client.V1ObjectMeta(name=name, namespace=namespace),
        type=secret_type,
        data=data,
    )
    core_api.create_namespaced_secret(
        namespace=namespace, body=body, _request_timeout=request_timeout
    )
    return SyncOutcome.CREATED
