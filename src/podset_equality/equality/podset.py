"""Quota equivalence of Kueue pod sets.

Two pod set lists are quota-equivalent when an admission decision made for
one holds for the other: same counts, same container cardinality, same
resource requests and limits, and (unless ignored) the same tolerations.
Names, images, env, probes, node selectors and metadata are not compared.
"""

from __future__ import annotations

from collections.abc import Sequence

from podset_equality.config import MIN_COUNT_ABSENT
from podset_equality.equality.semantic import semantic_deep_equal
from podset_equality.model.podset import Container, PodSet, PodSpec


def compare_pod_set_slices(
    a: Sequence[PodSet] | None,
    b: Sequence[PodSet] | None,
    ignore_tolerations: bool = False,
) -> bool:
    """Compare two pod set lists position by position.

    Pod set names are never compared; index i of a is matched with index i of b.
    """
    a = a or []
    b = b or []
    if len(a) != len(b):
        return False
    return all(
        compare_pod_sets(ps_a, ps_b, ignore_tolerations)
        for ps_a, ps_b in zip(a, b)
    )


def compare_pod_sets(a: PodSet, b: PodSet, ignore_tolerations: bool = False) -> bool:
    """Compare counts and the quota-relevant part of the pod templates."""
    if a.count != b.count:
        return False
    if _min_count(a) != _min_count(b):
        return False
    return _compare_pod_template(a.template.spec, b.template.spec, ignore_tolerations)


def _min_count(ps: PodSet) -> int:
    return MIN_COUNT_ABSENT if ps.min_count is None else ps.min_count


def _compare_pod_template(a: PodSpec, b: PodSpec, ignore_tolerations: bool) -> bool:
    if not ignore_tolerations and not semantic_deep_equal(a.tolerations, b.tolerations):
        return False
    if not _compare_container_resources(a.init_containers, b.init_containers):
        return False
    return _compare_container_resources(a.containers, b.containers)


def _compare_container_resources(
    a: Sequence[Container] | None, b: Sequence[Container] | None
) -> bool:
    """Same length, and each container pair has equal requests and limits.

    Everything else on the container (image, command, env, probes) is ignored.
    """
    a = a or []
    b = b or []
    if len(a) != len(b):
        return False
    for container_a, container_b in zip(a, b):
        if not semantic_deep_equal(container_a.resources, container_b.resources):
            return False
    return True
