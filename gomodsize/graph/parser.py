"""Edge list parsing for `go mod graph` output."""

from __future__ import annotations

from typing import Dict, List, Protocol

from ..logging import get_logger
from ..models import Measurement, Node

logger = get_logger("graph.parser")


class SizeMeasurer(Protocol):
    """Anything that can report the direct footprint of a module."""

    def measure(self, name: str) -> Measurement:
        """Return the measured size, or an unavailable measurement."""


def parse_graph(text: str, measurer: SizeMeasurer) -> Dict[str, Node]:
    """Build the node table from newline-separated `parent child` pairs.

    Lines without a space separator are skipped. Each parent is measured the
    first time it is seen; identifiers that only appear as children get no
    node here.
    """
    nodes: Dict[str, Node] = {}
    skipped = 0
    for line in text.split("\n"):
        parent, sep, child = line.partition(" ")
        if not sep:
            if line.strip():
                skipped += 1
            continue
        child = child.rstrip("\r")
        node = nodes.get(parent)
        if node is not None:
            node.dependencies.append(child)
            continue
        nodes[parent] = Node(
            id=parent,
            dependencies=[child],
            direct_size=_measure(measurer, parent),
        )
    if skipped:
        logger.debug("Skipped %d malformed graph lines", skipped)
    logger.debug("Parsed %d modules from graph", len(nodes))
    return nodes


def materialize_leaves(nodes: Dict[str, Node], measurer: SizeMeasurer) -> int:
    """Give every child-only identifier its own measured, dependency-free node."""
    leaves: List[str] = []
    for node in list(nodes.values()):
        for child in node.dependencies:
            if child not in nodes:
                nodes[child] = Node(id=child, direct_size=_measure(measurer, child))
                leaves.append(child)
    logger.debug("Materialized %d leaf modules", len(leaves))
    return len(leaves)


def _measure(measurer: SizeMeasurer, name: str) -> int:
    measurement = measurer.measure(name)
    if not measurement.available:
        logger.debug("Size of %s unavailable: %s", name, measurement.error)
        return 0
    return measurement.size


__all__ = ["SizeMeasurer", "materialize_leaves", "parse_graph"]
