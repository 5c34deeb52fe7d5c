"""Read-only records for Kueue pod sets and the pod template fields they carry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from podset_equality.config import DEFAULT_POD_SET_COUNT
from podset_equality.model.quantity import Quantity, parse_resource_list


class ManifestError(ValueError):
    """Raised when a manifest document does not have the expected shape."""


@dataclass
class ResourceRequirements:
    requests: dict[str, Quantity] = field(default_factory=dict)
    limits: dict[str, Quantity] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.requests = dict(self.requests or {})
        self.limits = dict(self.limits or {})

    @classmethod
    def from_dict(cls, data: dict | None) -> ResourceRequirements:
        data = _mapping(data, "resources")
        return cls(
            requests=parse_resource_list(data.get("requests")),
            limits=parse_resource_list(data.get("limits")),
        )


@dataclass
class Container:
    name: str = ""
    image: str = ""
    command: list[str] = field(default_factory=list)
    args: list[str] = field(default_factory=list)
    env: list[dict[str, Any]] = field(default_factory=list)
    resources: ResourceRequirements = field(default_factory=ResourceRequirements)

    def __post_init__(self) -> None:
        if self.resources is None:
            self.resources = ResourceRequirements()

    @classmethod
    def from_dict(cls, data: dict | None) -> Container:
        data = _mapping(data, "container")
        return cls(
            name=data.get("name", ""),
            image=data.get("image", ""),
            command=list(data.get("command") or []),
            args=list(data.get("args") or []),
            env=list(data.get("env") or []),
            resources=ResourceRequirements.from_dict(data.get("resources")),
        )


@dataclass
class Toleration:
    key: str = ""
    operator: str = ""
    value: str = ""
    effect: str = ""
    toleration_seconds: int | None = None

    @classmethod
    def from_dict(cls, data: dict | None) -> Toleration:
        data = _mapping(data, "toleration")
        return cls(
            key=data.get("key") or "",
            operator=data.get("operator") or "",
            value=data.get("value") or "",
            effect=data.get("effect") or "",
            toleration_seconds=data.get("tolerationSeconds"),
        )


@dataclass
class PodSpec:
    tolerations: list[Toleration] = field(default_factory=list)
    init_containers: list[Container] = field(default_factory=list)
    containers: list[Container] = field(default_factory=list)
    node_selector: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.tolerations = list(self.tolerations or [])
        self.init_containers = list(self.init_containers or [])
        self.containers = list(self.containers or [])
        self.node_selector = dict(self.node_selector or {})

    @classmethod
    def from_dict(cls, data: dict | None) -> PodSpec:
        data = _mapping(data, "spec")
        return cls(
            tolerations=[Toleration.from_dict(t) for t in _sequence(data.get("tolerations"), "tolerations")],
            init_containers=[
                Container.from_dict(c) for c in _sequence(data.get("initContainers"), "initContainers")
            ],
            containers=[Container.from_dict(c) for c in _sequence(data.get("containers"), "containers")],
            node_selector=dict(_mapping(data.get("nodeSelector"), "nodeSelector")),
        )


@dataclass
class PodTemplateSpec:
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    spec: PodSpec = field(default_factory=PodSpec)

    @classmethod
    def from_dict(cls, data: dict | None) -> PodTemplateSpec:
        data = _mapping(data, "template")
        metadata = _mapping(data.get("metadata"), "metadata")
        return cls(
            labels=dict(metadata.get("labels") or {}),
            annotations=dict(metadata.get("annotations") or {}),
            spec=PodSpec.from_dict(data.get("spec")),
        )


@dataclass
class PodSet:
    """One homogeneous group of pods in a Workload."""

    name: str = ""
    count: int = DEFAULT_POD_SET_COUNT
    min_count: int | None = None
    template: PodTemplateSpec = field(default_factory=PodTemplateSpec)

    @classmethod
    def from_dict(cls, data: dict | None) -> PodSet:
        data = _mapping(data, "podSet")
        return cls(
            name=data.get("name", ""),
            count=_integer(data.get("count", DEFAULT_POD_SET_COUNT), "count"),
            min_count=_optional_integer(data.get("minCount"), "minCount"),
            template=PodTemplateSpec.from_dict(data.get("template")),
        )


def parse_pod_sets(data: list | None) -> list[PodSet]:
    """Parse a Workload's spec.podSets list."""
    return [PodSet.from_dict(ps) for ps in _sequence(data, "podSets")]


def _mapping(value: object, what: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ManifestError(f"{what}: expected a mapping, got {type(value).__name__}")
    return value


def _sequence(value: object, what: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ManifestError(f"{what}: expected a list, got {type(value).__name__}")
    return value


def _integer(value: object, what: str) -> int:
    # bool is an int subclass but never a valid count
    if isinstance(value, bool) or not isinstance(value, int):
        raise ManifestError(f"{what}: expected an integer, got {value!r}")
    return value


def _optional_integer(value: object, what: str) -> int | None:
    if value is None:
        return None
    return _integer(value, what)
