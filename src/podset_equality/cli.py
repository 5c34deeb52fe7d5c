"""Click CLI entry point for podset-equality."""

from __future__ import annotations

import logging
import sys
from collections import defaultdict
from typing import IO, NoReturn

import click

from podset_equality.config import DEFAULT_NAMESPACE
from podset_equality.core.kubectl import get_workloads
from podset_equality.core.runner import RunError
from podset_equality.model.podset import ManifestError
from podset_equality.model.quantity import QuantityError
from podset_equality.output.json_out import render_json
from podset_equality.output.terminal import render_terminal
from podset_equality.parser.manifest import (
    Workload,
    WorkloadPair,
    pair_workloads,
    parse_multi_doc,
)

logger = logging.getLogger(__name__)

_output_option = click.option(
    "-o", "--output", "output_format",
    type=click.Choice(["terminal", "json"]),
    default="terminal",
    help="Output format",
)
_ignore_tolerations_option = click.option(
    "--ignore-tolerations", is_flag=True, help="Do not compare pod tolerations"
)
_no_color_option = click.option("--no-color", is_flag=True, help="Disable colored output")


@click.group()
@click.version_option(package_name="podset-equality")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose: bool) -> None:
    """podset-equality: Decide whether Kueue workload updates change quota."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@main.command()
@click.argument("old", type=click.File("r"))
@click.argument("new", type=click.File("r"))
@click.option("-n", "--namespace", default=DEFAULT_NAMESPACE, help="Namespace for workloads without one")
@_ignore_tolerations_option
@_output_option
@_no_color_option
def compare(
    old: IO[str],
    new: IO[str],
    namespace: str,
    ignore_tolerations: bool,
    output_format: str,
    no_color: bool,
) -> None:
    """Compare the Workloads in OLD and NEW manifest files ('-' for stdin)."""
    try:
        old_workloads = parse_multi_doc(old.read(), default_namespace=namespace)
        new_workloads = parse_multi_doc(new.read(), default_namespace=namespace)
    except (ManifestError, QuantityError) as e:
        _fail(e)

    pairs = pair_workloads(old_workloads, new_workloads, ignore_tolerations=ignore_tolerations)
    _report(pairs, output_format, no_color)


@main.command()
@click.argument("manifest", type=click.File("r"))
@click.option("-n", "--namespace", default=DEFAULT_NAMESPACE, help="Namespace for workloads without one")
@_ignore_tolerations_option
@_output_option
@_no_color_option
@click.option("--kubeconfig", default=None, help="Path to kubeconfig")
@click.option("--kube-context", default=None, help="Kubernetes context to use")
def live(
    manifest: IO[str],
    namespace: str,
    ignore_tolerations: bool,
    output_format: str,
    no_color: bool,
    kubeconfig: str | None,
    kube_context: str | None,
) -> None:
    """Compare the Workloads in MANIFEST against their live cluster versions."""
    kube_opts = {
        "kubeconfig": kubeconfig,
        "kube_context": kube_context,
    }

    try:
        desired = parse_multi_doc(manifest.read(), default_namespace=namespace)
        current = _fetch_live(desired, **kube_opts)
    except (ManifestError, QuantityError, RunError) as e:
        _fail(e)

    pairs = pair_workloads(current, desired, ignore_tolerations=ignore_tolerations)
    _report(pairs, output_format, no_color)


def _fetch_live(workloads: list[Workload], **kube_opts: str | None) -> list[Workload]:
    """Fetch the live version of each workload, one kubectl call per namespace."""
    by_namespace: dict[str, list[str]] = defaultdict(list)
    for wl in workloads:
        by_namespace[wl.namespace].append(wl.name)

    results: list[Workload] = []
    for ns, names in by_namespace.items():
        live_yaml = get_workloads(ns, names, **kube_opts)
        results.extend(parse_multi_doc(live_yaml, default_namespace=ns))
    logger.debug("Found %d of %d workloads in the cluster", len(results), len(workloads))
    return results


def _report(pairs: list[WorkloadPair], output_format: str, no_color: bool) -> None:
    if output_format == "json":
        click.echo(render_json(pairs))
    else:
        render_terminal(pairs, no_color=no_color)

    if any(pair.status != "equivalent" for pair in pairs):
        sys.exit(1)


def _fail(error: Exception) -> NoReturn:
    click.echo(f"Error: {error}", err=True)
    sys.exit(2)
