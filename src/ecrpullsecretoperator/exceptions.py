"""Exceptions raised by the ecr-pull-secret-operator."""

__all__ = ("CredentialErrorKind", "CredentialFetchError", "ReconcileError")

from enum import Enum


class CredentialErrorKind(Enum):
    """Classification of a failure to get an ECR authorization token."""

    SERVER_ERROR = "server-error"
    """The registry authority reported an internal error or is unavailable."""

    INVALID_PARAMETER = "invalid-parameter"
    """The request was rejected as malformed."""

    TRANSPORT = "transport"
    """The request never got a response (network, timeout, credentials)."""

    UNCLASSIFIED = "unclassified"
    """Any other error, including a response without authorization data."""


class CredentialFetchError(Exception):
    """Raised when an ECR authorization token cannot be obtained.

    Parameters
    ----------
    kind : `CredentialErrorKind`
        The category of the failure.
    message : `str`
        Human-readable detail.
    """

    def __init__(self, kind: CredentialErrorKind, message: str) -> None:
        super().__init__(f"{kind.value}: {message}")
        self.kind = kind


class ReconcileError(Exception):
    """Raised when a namespace's default ServiceAccount could not be made to
    reference the pull secret.
    """

    def __init__(self, namespace: str, message: str) -> None:
        super().__init__(
            f"Could not reconcile namespace {namespace}: {message}"
        )
        self.namespace = namespace
