"""Kubernetes interaction module."""

from .client import K8sClient, MissingToolError, require_executable
from .session import LoginSession
from .query import PodHostNetworkQuery, PodQueryError
from .backend import ClusterBackend, KubectlBackend

__all__ = [
    "K8sClient",
    "MissingToolError",
    "require_executable",
    "LoginSession",
    "PodHostNetworkQuery",
    "PodQueryError",
    "ClusterBackend",
    "KubectlBackend",
]
