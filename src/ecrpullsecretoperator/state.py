"""Operator configuration as module-level attributes.

Values are read once from the environment when the module is imported and
are not changed afterwards.
"""

import os

region = os.environ.get("ECRPS_AWS_REGION", os.environ.get("AWS_REGION", ""))
"""The AWS region of the ECR registry."""

aws_access_key_id = os.environ.get("ECRPS_AWS_ACCESS_KEY_ID") or None
"""Explicit AWS access key ID. If not set, the default boto3 credential chain
is used.
"""

aws_secret_access_key = os.environ.get("ECRPS_AWS_SECRET_ACCESS_KEY") or None
"""Explicit AWS secret access key, paired with ``aws_access_key_id``."""

kubeconfig = os.environ.get("ECRPS_KUBECONFIG") or None
"""Path to a kubeconfig file for running outside of the cluster."""

kube_master_url = os.environ.get("ECRPS_KUBE_MASTER_URL") or None
"""Override for the Kubernetes API server URL."""

refresh_interval = float(os.environ.get("ECRPS_REFRESH_INTERVAL", "60"))
"""Seconds between resyncs of every namespace (the credential refresh
period).
"""

request_timeout = float(os.environ.get("ECRPS_REQUEST_TIMEOUT", "5"))
"""Deadline, in seconds, for each call to the ECR and Kubernetes APIs."""


watcher = None
"""The `ecrpullsecretoperator.watcher.NamespaceWatcher` built at operator
start-up and shared by every handler.
"""

resync_task = None
"""The `asyncio.Task` running `ecrpullsecretoperator.resync.run_resync_loop`
between operator start-up and cleanup.
"""
