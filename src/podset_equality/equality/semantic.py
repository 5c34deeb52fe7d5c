"""Structural value equality for pod spec fragments."""

from __future__ import annotations

import dataclasses

from deepdiff import DeepDiff

from podset_equality.model.quantity import Quantity


def semantic_deep_equal(a: object, b: object) -> bool:
    """Check whether two values are equal field by field.

    Handles:
    - Quantities by exact value ("1" == "1000m", "1Gi" == "1024Mi")
    - Mappings regardless of key order
    - Sequences by position (order matters)
    - None vs empty list/dict
    """
    a, b = _empty_if_none(a, b)
    return not DeepDiff(_canonical(a), _canonical(b))


def _canonical(obj: object) -> object:
    """Reduce obj to plain dicts, lists, and Decimals."""
    if isinstance(obj, Quantity):
        return obj.value
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {
            f.name: _canonical(getattr(obj, f.name))
            for f in dataclasses.fields(obj)
        }
    if isinstance(obj, dict):
        return {k: _canonical(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_canonical(item) for item in obj]
    return obj


def _empty_if_none(a: object, b: object) -> tuple[object, object]:
    """Treat None as the empty collection of the other side's kind."""
    if a is None and isinstance(b, (list, tuple, dict)):
        return type(b)(), b
    if b is None and isinstance(a, (list, tuple, dict)):
        return a, type(a)()
    return a, b
