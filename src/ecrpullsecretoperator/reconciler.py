"""Convergence of a single namespace to the desired pull secret state."""

__all__ = ("Reconciler",)

from typing import Any

import structlog
from kubernetes.client.exceptions import ApiException
from urllib3.exceptions import HTTPError

from ecrpullsecretoperator.dockerconfig import (
    SECRET_NAME,
    SECRET_TYPE,
    create_secret_data,
)
from ecrpullsecretoperator.ecr import CredentialFetcher
from ecrpullsecretoperator.exceptions import (
    CredentialFetchError,
    ReconcileError,
)
from ecrpullsecretoperator.models import Namespace
from ecrpullsecretoperator.pullsecret import sync_secret
from ecrpullsecretoperator.serviceaccount import ensure_image_pull_secret

_KUBERNETES_ERRORS = (ApiException, HTTPError)


class Reconciler:
    """Keeps the ECR pull secret of a namespace current and referenced by
    the namespace's default ServiceAccount.

    The reconciler holds no state between calls; everything lives in the
    cluster, so any call can be repeated safely.

    Parameters
    ----------
    k8s_client
        A Kubernetes client (see
        `ecrpullsecretoperator.k8s.create_k8sclient`).
    credential_fetcher : `ecrpullsecretoperator.ecr.CredentialFetcher`
        Source of ECR credentials.
    region : `str`
        The AWS region of the registry.
    logger : optional
        Logger to use when a call does not provide one. If not provided, a
        structlog logger is used.
    request_timeout : `float`, optional
        Deadline for each Kubernetes API call, in seconds.
    """

    def __init__(
        self,
        *,
        k8s_client: Any,
        credential_fetcher: CredentialFetcher,
        region: str,
        logger: Any | None = None,
        request_timeout: float | None = None,
    ) -> None:
        self._k8s_client = k8s_client
        self._credential_fetcher = credential_fetcher
        self._region = region
        self._logger = logger or structlog.getLogger(__name__)
        self._request_timeout = request_timeout

    def reconcile(
        self, namespace: Namespace, logger: Any | None = None
    ) -> None:
        """Reconcile one namespace.

        Terminating namespaces are skipped. If no credential can be fetched
        nothing is changed. A failure to write the Secret is logged and the
        ServiceAccount is still checked, since a Secret from an earlier run
        may still be valid.

        Raises
        ------
        ecrpullsecretoperator.exceptions.ReconcileError
            Raised if the default ServiceAccount could not be read or updated.
        """
        if logger is None:
            logger = self._logger

        if namespace.is_terminating:
            logger.info(f"Namespace {namespace.name} is terminating, skipping")
            return

        try:
            credential = self._credential_fetcher.fetch(self._region)
        except CredentialFetchError as e:
            logger.error(
                f"Could not fetch ECR token ({e.kind.value}) for namespace "
                f"{namespace.name}: {e}"
            )
            return

        try:
            outcome = sync_secret(
                namespace=namespace.name,
                name=SECRET_NAME,
                secret_type=SECRET_TYPE,
                data=create_secret_data(credential),
                k8s_client=self._k8s_client,
                logger=logger,
                request_timeout=self._request_timeout,
            )
        except _KUBERNETES_ERRORS as e:
            logger.error(
                f"Error syncing secret {SECRET_NAME} in ns "
                f"{namespace.name}: {e}"
            )
        else:
            logger.info(
                f"Secret {SECRET_NAME} {outcome.value} in ns {namespace.name}"
            )

        try:
            ensure_image_pull_secret(
                namespace=namespace.name,
                secret_name=SECRET_NAME,
                k8s_client=self._k8s_client,
                logger=logger,
                request_timeout=self._request_timeout,
            )
        except _KUBERNETES_ERRORS as e:
            raise ReconcileError(namespace.name, str(e)) from e
