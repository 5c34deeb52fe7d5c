"""Terminal rendering of workload verdicts."""

from __future__ import annotations

import click

from podset_equality.parser.manifest import WorkloadPair

_STATUS_STYLE: dict[str, tuple[str, str]] = {
    "equivalent": ("=", "green"),
    "changed": ("~", "yellow"),
    "added": ("+", "cyan"),
    "removed": ("-", "red"),
}

_STATUS_LABEL: dict[str, str] = {
    "equivalent": "quota-equivalent",
    "changed": "quota changed, needs re-evaluation",
    "added": "added",
    "removed": "removed",
}


def render_terminal(pairs: list[WorkloadPair], no_color: bool = False) -> None:
    """Print one line per workload followed by a summary."""
    if not pairs:
        click.echo("No workloads found.")
        return

    for pair in pairs:
        marker, color = _STATUS_STYLE[pair.status]
        line = f"{marker} {pair.key}: {_STATUS_LABEL[pair.status]}"
        click.echo(line if no_color else click.style(line, fg=color))

    counts = summarize(pairs)
    click.echo("")
    click.echo(", ".join(f"{n} {status}" for status, n in counts.items() if n))


def summarize(pairs: list[WorkloadPair]) -> dict[str, int]:
    counts = {status: 0 for status in _STATUS_STYLE}
    for pair in pairs:
        counts[pair.status] += 1
    return counts
