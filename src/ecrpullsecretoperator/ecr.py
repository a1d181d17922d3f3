"""Retrieval of registry credentials from Amazon ECR."""

__all__ = ("CredentialFetcher", "create_session")

from typing import Any

import boto3
import structlog
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ecrpullsecretoperator.exceptions import (
    CredentialErrorKind,
    CredentialFetchError,
)
from ecrpullsecretoperator.models import Credential

_ERROR_KINDS = {
    "ServerException": CredentialErrorKind.SERVER_ERROR,
    "InvalidParameterException": CredentialErrorKind.INVALID_PARAMETER,
}


def create_session(
    *,
    aws_access_key_id: str | None = None,
    aws_secret_access_key: str | None = None,
) -> boto3.session.Session:
    """Create a boto3 session.

    Explicit keys are used if both are given. Otherwise the session resolves
    credentials through the default boto3 credential chain (environment,
    shared config, instance or pod identity).
    """
    if aws_access_key_id and aws_secret_access_key:
        return boto3.session.Session(
            aws_access_key_id=aws_access_key_id,
            aws_secret_access_key=aws_secret_access_key,
        )
    return boto3.session.Session()


class CredentialFetcher:
    """Fetches ECR authorization tokens.

    Parameters
    ----------
    session : `boto3.session.Session`
        The session used to create ECR clients.
    timeout : `float`
        Connect and read timeout, in seconds, for the ECR API call.
    logger : optional
        Logger to use. If not provided, a structlog logger is used.
    """

    def __init__(
        self,
        session: Any,
        *,
        timeout: float = 5.0,
        logger: Any | None = None,
    ) -> None:
        self._session = session
        self._config = Config(
            connect_timeout=timeout,
            read_timeout=timeout,
            retries={"max_attempts": 2, "mode": "standard"},
        )
        self._logger = logger or structlog.getLogger(__name__)

    def fetch(self, region: str) -> Credential:
        """Get a registry credential for the ECR registry of a region.

        Parameters
        ----------
        region : `str`
            The AWS region, such as ``us-east-1``.

        Returns
        -------
        credential : `ecrpullsecretoperator.models.Credential`
            The proxy endpoint and authorization token of the first entry of
            the authorization data.

        Raises
        ------
        ecrpullsecretoperator.exceptions.CredentialFetchError
            Raised if ECR does not return a token. The ``kind`` attribute
            classifies the failure.
        ValueError
            Raised if ``region`` is empty.
        """
        if not region:
            raise ValueError("An AWS region is required to fetch ECR tokens")

        self._logger.info(f"Fetching ECR token for region: {region}")
        ecr_client = self._session.client(
            "ecr", region_name=region, config=self._config
        )
        try:
            result = ecr_client.get_authorization_token()
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            kind = _ERROR_KINDS.get(code, CredentialErrorKind.UNCLASSIFIED)
            raise CredentialFetchError(kind, str(e)) from e
        except BotoCoreError as e:
            raise CredentialFetchError(
                CredentialErrorKind.TRANSPORT, str(e)
            ) from e

        authorization_data = result.get("authorizationData") or []
        if not authorization_data:
            raise CredentialFetchError(
                CredentialErrorKind.UNCLASSIFIED,
                f"ECR returned no authorization data for region {region}",
            )
        entry = authorization_data[0]
        return Credential(
            endpoint=entry["proxyEndpoint"],
            auth_token=entry["authorizationToken"],
        )
