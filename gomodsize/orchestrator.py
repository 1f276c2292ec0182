"""Coordinates the graph → sizes → report pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

from .config import GoModSizeConfig
from .graph.parser import SizeMeasurer, materialize_leaves, parse_graph
from .graph.resolver import ResolutionStats, SizeResolver
from .graph.source import GoModGraphSource
from .logging import get_logger
from .models import Node, ReportRow
from .report import Reporter
from .sizing import ModuleSizeMeasurer


@dataclass
class RunOutcome:
    """Everything produced by one run, for rendering and inspection."""

    nodes: Dict[str, Node]
    rows: List[ReportRow]
    stats: ResolutionStats


class Orchestrator:
    """Wires the graph source, measurer, resolver and reporter together."""

    def __init__(
        self,
        config: GoModSizeConfig | None = None,
        graph_source: GoModGraphSource | None = None,
        measurer: SizeMeasurer | None = None,
        resolver: SizeResolver | None = None,
        reporter: Reporter | None = None,
    ) -> None:
        self.config = config or GoModSizeConfig(root=Path.cwd())
        self.graph_source = graph_source or GoModGraphSource(go_binary=self.config.go_binary)
        self.measurer = measurer or ModuleSizeMeasurer(module_root=self.config.module_root)
        self.resolver = resolver or SizeResolver(
            max_rounds=self.config.max_rounds,
            stall_policy=self.config.stall_policy,
        )
        self.reporter = reporter or Reporter(limit=self.config.top)
        self.logger = get_logger("orchestrator")

    def run(self, path: str | Path | None = None) -> RunOutcome:
        """Measure and rank every module in the graph of the module at ``path``."""
        directory = Path(path).expanduser().resolve() if path is not None else self.config.root
        self.logger.debug("Reading module graph for %s", directory)
        text = self.graph_source.read(directory)

        nodes = parse_graph(text, self.measurer)
        if self.config.measure_leaves:
            materialize_leaves(nodes, self.measurer)
        self.logger.debug("Measured %d modules", len(nodes))

        stats = self.resolver.resolve(nodes)
        rows = self.reporter.rows(nodes)
        return RunOutcome(nodes=nodes, rows=rows, stats=stats)

    def render(self, outcome: RunOutcome) -> str:
        return self.reporter.render(outcome.rows)


__all__ = ["Orchestrator", "RunOutcome"]
