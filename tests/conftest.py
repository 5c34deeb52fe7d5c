"""
Pytest configuration and shared fixtures.
"""

from __future__ import annotations

import pytest

from podset_equality.model.podset import (
    Container,
    PodSet,
    PodSpec,
    PodTemplateSpec,
    ResourceRequirements,
    Toleration,
)
from podset_equality.model.quantity import Quantity


class PodSetBuilder:
    """Chained builder for PodSets with a single main container."""

    def __init__(self, name: str, count: int) -> None:
        self._pod_set = PodSet(
            name=name,
            count=count,
            template=PodTemplateSpec(
                spec=PodSpec(containers=[Container(name="c", image="pause")]),
            ),
        )

    @property
    def _spec(self) -> PodSpec:
        return self._pod_set.template.spec

    def min_count(self, value: int | None) -> PodSetBuilder:
        self._pod_set.min_count = value
        return self

    def request(self, resource: str, amount: str) -> PodSetBuilder:
        self._spec.containers[0].resources.requests[resource] = Quantity.parse(amount)
        return self

    def limit(self, resource: str, amount: str) -> PodSetBuilder:
        self._spec.containers[0].resources.limits[resource] = Quantity.parse(amount)
        return self

    def image(self, image: str) -> PodSetBuilder:
        self._spec.containers[0].image = image
        return self

    def env(self, name: str, value: str) -> PodSetBuilder:
        self._spec.containers[0].env.append({"name": name, "value": value})
        return self

    def node_selector(self, selector: dict[str, str]) -> PodSetBuilder:
        self._spec.node_selector = dict(selector)
        return self

    def toleration(self, toleration: Toleration) -> PodSetBuilder:
        self._spec.tolerations.append(toleration)
        return self

    def init_containers(self, *containers: Container) -> PodSetBuilder:
        self._spec.init_containers = list(containers)
        return self

    def containers(self, *containers: Container) -> PodSetBuilder:
        self._spec.containers = list(containers)
        return self

    def obj(self) -> PodSet:
        return self._pod_set


def make_pod_set(name: str = "ps", count: int = 10) -> PodSetBuilder:
    return PodSetBuilder(name, count)


def container(name: str = "c", image: str = "img", **requests: str) -> Container:
    """Container with the given requests, e.g. container(cpu="1")."""
    return Container(
        name=name,
        image=image,
        resources=ResourceRequirements(
            requests={k: Quantity.parse(v) for k, v in requests.items()},
        ),
    )


def spot_toleration(value: str = "spot") -> Toleration:
    return Toleration(key="instance", operator="Equal", value=value, effect="NoSchedule")


@pytest.fixture
def workload_yaml() -> str:
    """Two Workloads plus a non-Workload document."""
    return """\
apiVersion: kueue.x-k8s.io/v1beta1
kind: Workload
metadata:
  name: job-a
  namespace: team-a
spec:
  queueName: main
  podSets:
  - name: main
    count: 10
    minCount: 5
    template:
      spec:
        nodeSelector:
          pool: gpu
        tolerations:
        - key: instance
          operator: Equal
          value: spot
          effect: NoSchedule
        containers:
        - name: worker
          image: trainer:v1
          resources:
            requests:
              cpu: "1"
              memory: 1Gi
            limits:
              cpu: 2
---
apiVersion: v1
kind: ConfigMap
metadata:
  name: settings
data:
  key: value
---
apiVersion: kueue.x-k8s.io/v1beta1
kind: Workload
metadata:
  name: job-b
spec:
  podSets:
  - name: driver
    template:
      spec:
        containers:
        - name: driver
          image: spark:3
          resources:
            requests:
              cpu: 500m
"""
