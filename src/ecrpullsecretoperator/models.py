"""Data types shared across the operator."""

from __future__ import annotations

__all__ = ("Credential", "Namespace")

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Credential:
    """A registry login obtained from ECR."""

    endpoint: str
    """The registry URL, e.g. ``https://123.dkr.ecr.us-east-1.amazonaws.com``.
    """

    auth_token: str
    """The base64-encoded ``user:password`` token for the registry."""


@dataclass(frozen=True)
class Namespace:
    """The parts of a Namespace resource the reconciler looks at."""

    name: str

    deletion_timestamp: str | None = None
    """Set by Kubernetes once the namespace is being torn down."""

    @property
    def is_terminating(self) -> bool:
        return self.deletion_timestamp is not None

    @classmethod
    def from_body(cls, body: Mapping[str, Any]) -> Namespace:
        """Create a Namespace from a resource manifest, such as the ``body``
        passed to Kopf handlers.
        """
        meta = body["metadata"]
        return cls(
            name=meta["name"],
            deletion_timestamp=meta.get("deletionTimestamp"),
        )
