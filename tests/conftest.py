"""Shared test fixtures: an in-memory stand-in for the kubernetes client
module, and ECR fetchers that need no AWS account.
"""

from __future__ import annotations

import copy
from typing import Any

import kubernetes
import pytest
from kubernetes.client.exceptions import ApiException

from ecrpullsecretoperator.exceptions import (
    CredentialErrorKind,
    CredentialFetchError,
)
from ecrpullsecretoperator.models import Credential

ENDPOINT = "https://123.dkr.ecr.us-east-1.amazonaws.com"
TOKEN = "QUJD"


class FakeCoreV1Api:
    """Stores Secrets and ServiceAccounts in dictionaries keyed by
    ``(namespace, name)``, behaving like the CoreV1Api methods the operator
    calls.
    """

    def __init__(self) -> None:
        self.secrets: dict[tuple[str, str], Any] = {}
        self.service_accounts: dict[tuple[str, str], Any] = {}
        self.calls: list[tuple[str, str, str]] = []
        self.request_timeouts: list[float | None] = []
        self.namespaces: list[Any] = []
        self.api_client = kubernetes.client.ApiClient()
        self.failures: dict[str, Exception] = {}
        self._version = 0

    def add_service_account(
        self, namespace: str, name: str = "default", pull_secrets: Any = None
    ) -> None:
        references = None
        if pull_secrets is not None:
            references = [
                kubernetes.client.V1LocalObjectReference(name=secret)
                for secret in pull_secrets
            ]
        self.service_accounts[(namespace, name)] = (
            kubernetes.client.V1ServiceAccount(
                metadata=kubernetes.client.V1ObjectMeta(
                    name=name, namespace=namespace, resource_version="1"
                ),
                image_pull_secrets=references,
            )
        )

    def pull_secret_names(
        self, namespace: str, name: str = "default"
    ) -> list[str]:
        account = self.service_accounts[(namespace, name)]
        return [ref.name for ref in account.image_pull_secrets or []]

    def mutations(self) -> list[tuple[str, str, str]]:
        return [
            call
            for call in self.calls
            if not call[0].startswith(("read", "list"))
        ]

    def add_namespace(
        self, name: str, deletion_timestamp: Any = None
    ) -> None:
        self.namespaces.append(
            kubernetes.client.V1Namespace(
                metadata=kubernetes.client.V1ObjectMeta(
                    name=name, deletion_timestamp=deletion_timestamp
                )
            )
        )

    def _record(
        self, method: str, namespace: str, name: str, kwargs: dict[str, Any]
    ) -> None:
        self.calls.append((method, namespace, name))
        self.request_timeouts.append(kwargs.get("_request_timeout"))
        if method in self.failures:
            raise self.failures[method]

    def _next_version(self) -> str:
        self._version += 1
        return str(self._version)

    def list_namespace(self, **kwargs: Any) -> Any:
        self._record("list_namespace", "", "", kwargs)
        return kubernetes.client.V1NamespaceList(
            items=copy.deepcopy(self.namespaces)
        )

    def read_namespaced_secret(
        self, name: str, namespace: str, **kwargs: Any
    ) -> Any:
        self._record("read_namespaced_secret", namespace, name, kwargs)
        if (namespace, name) not in self.secrets:
            raise ApiException(status=404, reason="Not Found")
        return copy.deepcopy(self.secrets[(namespace, name)])

    def create_namespaced_secret(
        self, namespace: str, body: Any, **kwargs: Any
    ) -> Any:
        name = body.metadata.name
        self._record("create_namespaced_secret", namespace, name, kwargs)
        if (namespace, name) in self.secrets:
            raise ApiException(status=409, reason="Conflict")
        stored = copy.deepcopy(body)
        stored.metadata.resource_version = self._next_version()
        self.secrets[(namespace, name)] = stored
        return copy.deepcopy(stored)

    def replace_namespaced_secret(
        self, name: str, namespace: str, body: Any, **kwargs: Any
    ) -> Any:
        self._record("replace_namespaced_secret", namespace, name, kwargs)
        if (namespace, name) not in self.secrets:
            raise ApiException(status=404, reason="Not Found")
        stored = copy.deepcopy(body)
        stored.metadata.resource_version = self._next_version()
        self.secrets[(namespace, name)] = stored
        return copy.deepcopy(stored)

    def read_namespaced_service_account(
        self, name: str, namespace: str, **kwargs: Any
    ) -> Any:
        self._record(
            "read_namespaced_service_account", namespace, name, kwargs
        )
        if (namespace, name) not in self.service_accounts:
            raise ApiException(status=404, reason="Not Found")
        return copy.deepcopy(self.service_accounts[(namespace, name)])

    def replace_namespaced_service_account(
        self, name: str, namespace: str, body: Any, **kwargs: Any
    ) -> Any:
        self._record(
            "replace_namespaced_service_account", namespace, name, kwargs
        )
        if (namespace, name) not in self.service_accounts:
            raise ApiException(status=404, reason="Not Found")
        self.service_accounts[(namespace, name)] = copy.deepcopy(body)
        return copy.deepcopy(body)


class FakeK8sClient:
    """Mimics the `kubernetes.client` module returned by
    `ecrpullsecretoperator.k8s.create_k8sclient`.
    """

    V1LocalObjectReference = kubernetes.client.V1LocalObjectReference
    V1ObjectMeta = kubernetes.client.V1ObjectMeta
    V1Secret = kubernetes.client.V1Secret
    V1ServiceAccount = kubernetes.client.V1ServiceAccount

    def __init__(self) -> None:
        self.core_api = FakeCoreV1Api()

    def CoreV1Api(self) -> FakeCoreV1Api:  # noqa: N802
        return self.core_api


class FakeCredentialFetcher:
    """Returns a fixed credential, or raises a fixed error."""

    def __init__(
        self,
        credential: Credential | None = None,
        error: CredentialFetchError | None = None,
    ) -> None:
        self.credential = credential or Credential(ENDPOINT, TOKEN)
        self.error = error
        self.regions: list[str] = []

    def fetch(self, region: str) -> Credential:
        self.regions.append(region)
        if self.error is not None:
            raise self.error
        return self.credential


@pytest.fixture
def k8s_client() -> FakeK8sClient:
    return FakeK8sClient()


@pytest.fixture
def core_api(k8s_client: FakeK8sClient) -> FakeCoreV1Api:
    return k8s_client.core_api


@pytest.fixture
def fetcher() -> FakeCredentialFetcher:
    return FakeCredentialFetcher()


@pytest.fixture
def failing_fetcher() -> FakeCredentialFetcher:
    return FakeCredentialFetcher(
        error=CredentialFetchError(
            CredentialErrorKind.SERVER_ERROR, "ECR is unavailable"
        )
    )
