"""Cycle-tolerant accumulation of module total sizes."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import List, Mapping

from ..logging import get_logger
from ..models import Node

DEFAULT_MAX_ROUNDS = 10_000


class MaxDepthExceededError(RuntimeError):
    """Raised when resolution does not converge within the round limit."""


class StallPolicy(str, enum.Enum):
    """How unresolved nodes are forced through once progress stalls."""

    GREEDY = "greedy"
    FIRST = "first"


@dataclass(frozen=True)
class ResolutionStats:
    """Summary of a single resolve call."""

    rounds: int
    stalls: int
    resolved: int
    approximate: int


class SizeResolver:
    """Computes each node's total size in dependency order.

    Every round scans the unresolved nodes in ascending identifier order and
    resolves those whose known dependencies are all resolved. A round that
    resolves nothing is a stall, which only happens when a cycle is present.
    After a stall the remaining nodes are forced through with unresolved
    dependencies counted as 0 and flagged approximate; ``StallPolicy.GREEDY``
    forces all of them in the next round, ``StallPolicy.FIRST`` forces a single
    node and then returns to normal rounds.
    """

    def __init__(
        self,
        max_rounds: int = DEFAULT_MAX_ROUNDS,
        stall_policy: StallPolicy | str = StallPolicy.GREEDY,
    ) -> None:
        if max_rounds < 1:
            raise ValueError("max_rounds must be positive")
        self.max_rounds = max_rounds
        self.stall_policy = StallPolicy(stall_policy)
        self.logger = get_logger("graph.resolver")

    def resolve(self, nodes: Mapping[str, Node]) -> ResolutionStats:
        """Resolve every unresolved node in ``nodes`` in place."""
        pending: List[str] = sorted(name for name, node in nodes.items() if not node.resolved)
        rounds = 0
        stalls = 0
        stalled = False
        resolved_count = 0
        approximate_count = 0

        while pending:
            rounds += 1
            if rounds > self.max_rounds:
                raise MaxDepthExceededError(
                    f"max dependency depth reached after {self.max_rounds} rounds "
                    f"({len(pending)} modules unresolved)"
                )

            remaining: List[str] = []
            progressed = False
            for name in pending:
                node = nodes[name]
                ready = self._dependencies_resolved(node, nodes)
                force = stalled and (self.stall_policy is StallPolicy.GREEDY or not progressed)
                if not ready and not force:
                    remaining.append(name)
                    continue
                approximate = self._accumulate(node, nodes)
                progressed = True
                resolved_count += 1
                if approximate:
                    approximate_count += 1

            if not progressed:
                stalls += 1
                stalled = True
                self.logger.debug(
                    "Resolution stalled in round %d with %d modules unresolved",
                    rounds,
                    len(remaining),
                )
            elif self.stall_policy is StallPolicy.FIRST:
                stalled = False
            pending = remaining

        if stalls:
            self.logger.warning(
                "Dependency cycle detected; %d module totals are approximate",
                approximate_count,
            )
        self.logger.debug("Resolved %d modules in %d rounds", resolved_count, rounds)
        return ResolutionStats(
            rounds=rounds,
            stalls=stalls,
            resolved=resolved_count,
            approximate=approximate_count,
        )

    @staticmethod
    def _dependencies_resolved(node: Node, nodes: Mapping[str, Node]) -> bool:
        for name in node.dependencies:
            dependency = nodes.get(name)
            if dependency is not None and not dependency.resolved:
                return False
        return True

    @staticmethod
    def _accumulate(node: Node, nodes: Mapping[str, Node]) -> bool:
        total = node.direct_size
        approximate = False
        for name in node.dependencies:
            dependency = nodes.get(name)
            if dependency is None:
                continue
            if not dependency.resolved or dependency.approximate:
                approximate = True
            # Unresolved dependencies still hold total_size == 0.
            total += dependency.total_size
        node.resolve(total, approximate=approximate)
        return approximate


__all__ = [
    "DEFAULT_MAX_ROUNDS",
    "MaxDepthExceededError",
    "ResolutionStats",
    "SizeResolver",
    "StallPolicy",
]
