"""Kopf handlers for the ecr-pull-secret-operator."""

__all__ = (
    "handle_namespace_event",
    "login",
    "start_operator",
    "stop_operator",
)

from ecrpullsecretoperator.handlers.namespacewatcher import (
    handle_namespace_event,
)
from ecrpullsecretoperator.startup import login, start_operator, stop_operator
