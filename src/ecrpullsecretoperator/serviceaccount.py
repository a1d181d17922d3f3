"""Management of the image pull secret references of a namespace's default
ServiceAccount.
"""

__all__ = ("SERVICE_ACCOUNT_NAME", "ensure_image_pull_secret")

from typing import Any

import structlog
from kubernetes.client.exceptions import ApiException

from ecrpullsecretoperator.k8s import get_service_account

SERVICE_ACCOUNT_NAME = "default"
"""The ServiceAccount Kubernetes assigns to pods that do not name one."""


def ensure_image_pull_secret(
    *,
    namespace: str,
    secret_name: str,
    k8s_client: Any,
    logger: Any | None = None,
    request_timeout: float | None = None,
    service_account: str = SERVICE_ACCOUNT_NAME,
) -> bool:
    """Make sure a ServiceAccount references a Secret in its
    ``imagePullSecrets``.

    The reference is appended after any existing ones. The ServiceAccount is
    only written if the reference is missing, so the list never holds two
    references with the same name.

    Parameters
    ----------
    namespace : `str`
        The namespace of the ServiceAccount.
    secret_name : `str`
        The name of the pull secret to reference.
    k8s_client
        A Kubernetes client (see
        `ecrpullsecretoperator.k8s.create_k8sclient`).
    logger : optional
        Logger to use. If not provided, a structlog logger is used.
    request_timeout : `float`, optional
        Deadline for each API call, in seconds.
    service_account : `str`
        Name of the ServiceAccount. Defaults to ``default``.

    Returns
    -------
    changed : `bool`
        `True` if the ServiceAccount was updated.

    Raises
    ------
    kubernetes.client.exceptions.ApiException
        Raised if the ServiceAccount cannot be read or written.
    """
    if logger is None:
        logger = structlog.getLogger(__name__)

    try:
        account = get_service_account(
            namespace=namespace,
            name=service_account,
            k8s_client=k8s_client,
            request_timeout=request_timeout,
        )
    except ApiException:
        logger.exception(
            f"Could not get ServiceAccount {service_account} in {namespace}"
        )
        raise

    references = list(account.image_pull_secrets or [])
    if any(reference.name == secret_name for reference in references):
        logger.info(
            f"ServiceAccount {service_account} in {namespace} already "
            f"references {secret_name}"
        )
        return False

    references.append(k8s_client.V1LocalObjectReference(name=secret_name))
    account.image_pull_secrets = references

    try:
        k8s_client.CoreV1Api().replace_namespaced_service_account(
            name=service_account,
            namespace=namespace,
            body=account,
            _request_timeout=request_timeout,
        )
    except ApiException:
        logger.exception(
            f"Could not update ServiceAccount {service_account} in "
            f"{namespace}"
        )
        raise

    logger.info(
        f"Added {secret_name} to ServiceAccount {service_account} in "
        f"{namespace}"
    )
    return True
