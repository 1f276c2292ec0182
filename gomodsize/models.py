"""Core data models shared across gomodsize components."""

from dataclasses import dataclass, field
from typing import List, Optional


class NodeAlreadyResolvedError(RuntimeError):
    """Raised when a node's total size is assigned a second time."""


@dataclass
class Node:
    """A module in the dependency graph with its direct and accumulated sizes."""

    id: str
    dependencies: List[str] = field(default_factory=list)
    direct_size: int = 0
    total_size: int = 0
    resolved: bool = False
    approximate: bool = False

    def resolve(self, total_size: int, *, approximate: bool) -> None:
        """Record the node's total size; allowed exactly once."""
        if self.resolved:
            raise NodeAlreadyResolvedError(f"{self.id} is already resolved")
        self.total_size = total_size
        self.approximate = approximate
        self.resolved = True


@dataclass(frozen=True)
class Measurement:
    """Outcome of measuring a module's on-disk footprint."""

    size: int = 0
    error: Optional[str] = None

    @property
    def available(self) -> bool:
        return self.error is None

    @classmethod
    def unavailable(cls, error: str) -> "Measurement":
        return cls(size=0, error=error)


@dataclass(frozen=True)
class ReportRow:
    """One line of the size report."""

    id: str
    direct_size: int
    total_size: int
    approximate: bool
