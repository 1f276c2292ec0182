"""Sorting and fixed-width rendering of resolved module sizes."""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional

from .models import Node, ReportRow

NAME_WIDTH = 80
SIZE_WIDTH = 10
_UNITS = "KMGTPE"


def format_size(size: int) -> str:
    """Render a byte count with the largest binary unit not exceeding it."""
    if size < 0:
        raise ValueError("size must be non-negative")
    if size < 1024:
        return f"{size}B"
    divisor = 1024
    exponent = 0
    scaled = size // 1024
    while scaled >= 1024 and exponent < len(_UNITS) - 1:
        divisor *= 1024
        exponent += 1
        scaled //= 1024
    return f"{size / divisor:.1f}{_UNITS[exponent]}"


class Reporter:
    """Orders resolved nodes by total size and renders them as a table."""

    def __init__(self, limit: Optional[int] = None) -> None:
        if limit is not None and limit < 0:
            raise ValueError("limit must be non-negative")
        self.limit = limit

    def rows(self, nodes: Mapping[str, Node]) -> List[ReportRow]:
        ordered = sorted(nodes.values(), key=lambda node: (-node.total_size, node.id))
        if self.limit is not None:
            ordered = ordered[: self.limit]
        return [
            ReportRow(
                id=node.id,
                direct_size=node.direct_size,
                total_size=node.total_size,
                approximate=node.approximate,
            )
            for node in ordered
        ]

    def render(self, rows: Iterable[ReportRow]) -> str:
        lines = [self.format_row(row) for row in rows]
        if not lines:
            return ""
        return "\n".join(lines) + "\n"

    @staticmethod
    def format_row(row: ReportRow) -> str:
        direct = format_size(row.direct_size)
        total = format_size(row.total_size)
        if row.approximate:
            total = "~" + total
        return f"{row.id:<{NAME_WIDTH}} {direct:>{SIZE_WIDTH}} {total:>{SIZE_WIDTH}}"


__all__ = ["NAME_WIDTH", "SIZE_WIDTH", "Reporter", "format_size"]
