"""Kubernetes operator that distributes Amazon ECR pull secrets to every
namespace.
"""

__all__ = ("__version__",)

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ecr-pull-secret-operator")
except PackageNotFoundError:
    # Not installed, such as when run from a source checkout
    __version__ = "0.0.0"
