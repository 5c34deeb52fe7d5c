"""JSON rendering of workload verdicts."""

from __future__ import annotations

import json

from podset_equality.output.terminal import summarize
from podset_equality.parser.manifest import WorkloadPair


def render_json(pairs: list[WorkloadPair]) -> str:
    payload = {
        "summary": summarize(pairs),
        "workloads": [{"key": pair.key, "status": pair.status} for pair in pairs],
    }
    return json.dumps(payload, indent=2)
