"""Encoding of registry credentials into the ``.dockerconfigjson`` format
used by ``kubernetes.io/dockerconfigjson`` Secrets.
"""

__all__ = (
    "SECRET_DATA_KEY",
    "SECRET_NAME",
    "SECRET_TYPE",
    "create_secret_data",
    "decode_docker_config",
    "encode_docker_config",
)

import base64
import json

from ecrpullsecretoperator.models import Credential

SECRET_NAME = "ecrsecret"
"""Name of the pull secret in every namespace."""

SECRET_TYPE = "kubernetes.io/dockerconfigjson"
"""Type of the pull secret."""

SECRET_DATA_KEY = ".dockerconfigjson"
"""Key in the Secret's ``data`` holding the credential file."""


def encode_docker_config(endpoint: str, auth_token: str) -> bytes:
    """Encode a registry login as a docker config file.

    The output is compact JSON of the form
    ``{"auths":{"<endpoint>":{"auth":"<auth_token>","email":"none"}}}``.

    Parameters
    ----------
    endpoint : `str`
        The registry URL.
    auth_token : `str`
        The base64-encoded ``user:password`` token.

    Returns
    -------
    payload : `bytes`
        The UTF-8 encoded docker config file.
    """
    document = {"auths": {endpoint: {"auth": auth_token, "email": "none"}}}
    return json.dumps(document, separators=(",", ":")).encode("utf-8")


def decode_docker_config(payload: bytes | str) -> Credential:
    """Recover the registry login from a docker config file produced by
    `encode_docker_config`.

    Raises
    ------
    ValueError
        Raised if the payload does not hold exactly one registry login.
    """
    auths = json.loads(payload)["auths"]
    if len(auths) != 1:
        raise ValueError(
            f"Expected one registry in docker config, found {len(auths)}"
        )
    endpoint, entry = next(iter(auths.items()))
    return Credential(endpoint=endpoint, auth_token=entry["auth"])


def create_secret_data(credential: Credential) -> dict[str, str]:
    """Create the ``data`` field of the pull secret for a credential."""
    payload = encode_docker_config(credential.endpoint, credential.auth_token)
    return {SECRET_DATA_KEY: base64.b64encode(payload).decode("utf-8")}
