"""Module graph loading and size accumulation."""

from __future__ import annotations

from .parser import SizeMeasurer, materialize_leaves, parse_graph
from .resolver import MaxDepthExceededError, ResolutionStats, SizeResolver, StallPolicy
from .source import GoModGraphSource, GraphSourceError

__all__ = [
    "GoModGraphSource",
    "GraphSourceError",
    "MaxDepthExceededError",
    "ResolutionStats",
    "SizeMeasurer",
    "SizeResolver",
    "StallPolicy",
    "materialize_leaves",
    "parse_graph",
]
