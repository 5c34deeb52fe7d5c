"""Multi-doc YAML parsing into Workloads, keying, and pairing."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Literal

import yaml

from podset_equality.config import DEFAULT_NAMESPACE, KUEUE_API_GROUP, WORKLOAD_KIND
from podset_equality.equality.podset import compare_pod_set_slices
from podset_equality.model.podset import ManifestError, PodSet, parse_pod_sets

logger = logging.getLogger(__name__)

PairStatus = Literal["added", "removed", "changed", "equivalent"]


@dataclass
class Workload:
    api_version: str
    namespace: str
    name: str
    pod_sets: list[PodSet] = field(default_factory=list)
    body: dict = field(default_factory=dict)

    @property
    def key(self) -> str:
        return f"{self.namespace}/{self.name}"


@dataclass
class WorkloadPair:
    old: Workload | None
    new: Workload | None
    status: PairStatus

    @property
    def key(self) -> str:
        workload = self.new or self.old
        assert workload is not None
        return workload.key


def parse_multi_doc(yaml_text: str, default_namespace: str = DEFAULT_NAMESPACE) -> list[Workload]:
    """Split multi-doc YAML (---) into Workload objects.

    Skips empty docs, docs that fail to parse, and anything that is not a
    kueue.x-k8s.io Workload. ``kind: List`` documents (kubectl output) are
    expanded. Raises ManifestError when a Workload's podSets are malformed.
    """
    workloads: list[Workload] = []

    for raw_doc in _split_raw_docs(yaml_text):
        stripped = raw_doc.strip()
        if not stripped:
            continue

        try:
            body = yaml.safe_load(stripped)
        except yaml.YAMLError as e:
            logger.debug("Skipping unparseable document: %s", e)
            continue

        for item in _expand_list(body):
            workload = _to_workload(item, default_namespace)
            if workload is not None:
                workloads.append(workload)

    return workloads


def _expand_list(body: object) -> list[object]:
    if isinstance(body, dict) and body.get("kind") == "List":
        return list(body.get("items") or [])
    return [body]


def _to_workload(body: object, default_namespace: str) -> Workload | None:
    if not isinstance(body, dict):
        return None

    api_version = body.get("apiVersion", "")
    if body.get("kind") != WORKLOAD_KIND or not str(api_version).startswith(f"{KUEUE_API_GROUP}/"):
        logger.debug("Skipping %s/%s: not a Workload", api_version, body.get("kind"))
        return None

    metadata = body.get("metadata") or {}
    spec = body.get("spec") or {}
    name = metadata.get("name", "")
    try:
        pod_sets = parse_pod_sets(spec.get("podSets"))
    except ManifestError as e:
        raise ManifestError(f"Workload {name!r}: {e}") from e

    return Workload(
        api_version=api_version,
        namespace=metadata.get("namespace") or default_namespace,
        name=name,
        pod_sets=pod_sets,
        body=body,
    )


def _split_raw_docs(yaml_text: str) -> list[str]:
    """Split multi-doc YAML by --- delimiters, returning raw text per doc."""
    docs: list[str] = []
    current_lines: list[str] = []

    for line in yaml_text.splitlines(keepends=True):
        if line.rstrip() == "---":
            if current_lines:
                docs.append("".join(current_lines))
                current_lines = []
        else:
            current_lines.append(line)

    if current_lines:
        docs.append("".join(current_lines))

    return docs


def pair_workloads(
    old: list[Workload], new: list[Workload], ignore_tolerations: bool = False
) -> list[WorkloadPair]:
    """Match workloads by namespace/name and decide quota equivalence.

    old=None -> ADDED, new=None -> REMOVED, both -> EQUIVALENT/CHANGED.
    """
    old_map = {w.key: w for w in old}
    new_map = {w.key: w for w in new}

    all_keys = list(dict.fromkeys(list(old_map.keys()) + list(new_map.keys())))

    pairs: list[WorkloadPair] = []
    for key in all_keys:
        old_wl = old_map.get(key)
        new_wl = new_map.get(key)

        if old_wl is None:
            status: PairStatus = "added"
        elif new_wl is None:
            status = "removed"
        elif compare_pod_set_slices(old_wl.pod_sets, new_wl.pod_sets, ignore_tolerations):
            status = "equivalent"
        else:
            status = "changed"

        logger.debug("Workload %s: %s", key, status)
        pairs.append(WorkloadPair(old=old_wl, new=new_wl, status=status))

    return pairs
