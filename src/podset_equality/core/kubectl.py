"""Shell out to kubectl CLI."""

from __future__ import annotations

import logging

from podset_equality.config import WORKLOAD_RESOURCE
from podset_equality.core.runner import run

logger = logging.getLogger(__name__)


def _kube_flags(**kube_opts: str | None) -> list[str]:
    """Build common kubectl flags from options."""
    flags: list[str] = []
    if kube_opts.get("kubeconfig"):
        flags += ["--kubeconfig", kube_opts["kubeconfig"]]
    if kube_opts.get("kube_context"):
        flags += ["--context", kube_opts["kube_context"]]
    return flags


def get_workloads(
    namespace: str, names: list[str] | None = None, **kube_opts: str | None
) -> str:
    """kubectl get workloads.kueue.x-k8s.io [names] -n <ns> -o yaml -> raw YAML.

    Without names, every Workload in the namespace is returned. With exactly
    one name kubectl prints the bare Workload; otherwise the output is a
    single ``kind: List`` document.
    """
    cmd = ["kubectl", "get", WORKLOAD_RESOURCE]
    cmd += list(names or [])
    cmd += ["-n", namespace, "-o", "yaml", "--ignore-not-found"]
    cmd += _kube_flags(**kube_opts)
    logger.debug("Fetching %d workload(s) from namespace %s", len(names or []), namespace)
    return run(cmd)
