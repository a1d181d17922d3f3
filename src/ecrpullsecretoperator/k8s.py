"""Helpers for interacting with Kubernetes APIs."""

__all__ = (
    "create_connection_info",
    "create_k8sclient",
    "get_secret",
    "get_service_account",
    "list_namespaces",
)

from typing import Any

import kopf
import kubernetes


def create_k8sclient(
    *,
    kubeconfig: str | None = None,
    master_url: str | None = None,
) -> kubernetes.client:
    """Get a Kubernetes client configured with available cluster
    authentication.

    If ``kubeconfig`` is given, that file is used. Otherwise in-cluster
    authentication is used when available, and this function falls-back to
    the default kubectl config file, which is appropriate for development.

    Parameters
    ----------
    kubeconfig : `str`, optional
        Path to a kubeconfig file.
    master_url : `str`, optional
        URL of the Kubernetes API server, overriding the one found in the
        configuration.

    Raises
    ------
    kubernetes.config.ConfigException
        Raised if no usable configuration is found.
    """
    if kubeconfig:
        kubernetes.config.load_kube_config(config_file=kubeconfig)
    else:
        try:
            kubernetes.config.load_incluster_config()
        except kubernetes.config.ConfigException:
            kubernetes.config.load_kube_config()

    if master_url:
        configuration = kubernetes.client.Configuration.get_default_copy()
        configuration.host = master_url
        kubernetes.client.Configuration.set_default(configuration)
    return kubernetes.client


def create_connection_info(k8s_client: Any) -> kopf.ConnectionInfo:
    """Describe the default configuration of a Kubernetes client (see
    `create_k8sclient`) as Kopf connection credentials, so that Kopf watches
    the same cluster the operator writes to.
    """
    config = k8s_client.Configuration.get_default_copy()

    header = config.get_api_key_with_prefix(
        "BearerToken"
    ) or config.get_api_key_with_prefix("authorization")
    parts = header.split(" ", 1) if header else []
    if len(parts) == 2:
        scheme, token = parts
    elif len(parts) == 1:
        scheme, token = None, parts[0]
    else:
        scheme, token = None, None

    return kopf.ConnectionInfo(
        server=config.host,
        ca_path=config.ssl_ca_cert,
        insecure=not config.verify_ssl,
        username=config.username or None,
        password=config.password or None,
        scheme=scheme,
        token=token,
        certificate_path=config.cert_file,
        private_key_path=config.key_file,
    )


def get_secret(
    *,
    namespace: str,
    name: str,
    k8s_client: Any,
    request_timeout: float | None = None,
) -> Any:
    """Get a Secret resource.

    Parameters
    ----------
    namespace : `str`
        The Kubernetes namespace of the Secret.
    name : `str`
        The name of the Secret.
    k8s_client
        A Kubernetes client (see `create_k8sclient`).
    request_timeout : `float`, optional
        Deadline for the API call, in seconds.

    Returns
    -------
    secret : `kubernetes.client.V1Secret`
        The Kubernetes Secret resource.
    """
    api = k8s_client.CoreV1Api()
    return api.read_namespaced_secret(
        name=name, namespace=namespace, _request_timeout=request_timeout
    )


def get_service_account(
    *,
    namespace: str,
    name: str,
    k8s_client: Any,
    request_timeout: float | None = None,
) -> Any:
    """Get a ServiceAccount resource.

    Parameters
    ----------
    namespace : `str`
        The Kubernetes namespace of the ServiceAccount.
    name : `str`
        The name of the ServiceAccount.
    k8s_client
        A Kubernetes client (see `create_k8sclient`).
    request_timeout : `float`, optional
        Deadline for the API call, in seconds.

    Returns
    -------
    service_account : `kubernetes.client.V1ServiceAccount`
        The Kubernetes ServiceAccount resource.
    """
    api = k8s_client.CoreV1Api()
    return api.read_namespaced_service_account(
        name=name, namespace=namespace, _request_timeout=request_timeout
    )


def list_namespaces(
    *,
    k8s_client: Any,
    request_timeout: float | None = None,
) -> list[dict[str, Any]]:
    """List every Namespace in the cluster.

    Returns
    -------
    namespaces : `list` of `dict`
        The Namespace manifests, in the same form as the ``body`` Kopf passes
        to handlers.
    """
    api = k8s_client.CoreV1Api()
    result = api.list_namespace(_request_timeout=request_timeout)
    return [
        api.api_client.sanitize_for_serialization(namespace)
        for namespace in result.items
    ]
