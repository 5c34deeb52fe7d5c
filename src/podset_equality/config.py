"""Defaults, API identifiers, and comparison constants."""

from __future__ import annotations

# Stand-in for an absent PodSet.minCount. Counts are non-negative, so this
# never collides with a real value.
MIN_COUNT_ABSENT = -1

# Kueue PodSet.count default when the field is omitted
DEFAULT_POD_SET_COUNT = 1

# Workload identification
KUEUE_API_GROUP = "kueue.x-k8s.io"
WORKLOAD_KIND = "Workload"
WORKLOAD_RESOURCE = f"workloads.{KUEUE_API_GROUP}"

DEFAULT_NAMESPACE = "default"

# Default subprocess timeout in seconds
DEFAULT_TIMEOUT = 60

# Suffix multipliers for resource quantities
BINARY_SUFFIXES: dict[str, int] = {
    "Ki": 2**10,
    "Mi": 2**20,
    "Gi": 2**30,
    "Ti": 2**40,
    "Pi": 2**50,
    "Ei": 2**60,
}

DECIMAL_SUFFIXES: dict[str, int] = {
    "n": -9,
    "u": -6,
    "m": -3,
    "": 0,
    "k": 3,
    "M": 6,
    "G": 9,
    "T": 12,
    "P": 15,
    "E": 18,
}
