"""Graph source backed by the `go mod graph` command."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Iterable, List

from ..logging import get_logger


class GraphSourceError(RuntimeError):
    """Raised when the module graph cannot be produced."""


class GoModGraphSource:
    """Runs `go mod graph` in a module directory and returns its raw output."""

    def __init__(
        self,
        runner: Callable[..., str] | None = None,
        *,
        go_binary: str = "go",
    ) -> None:
        self._runner = runner or self._default_runner
        self.go_binary = go_binary
        self.logger = get_logger("graph.source")

    def command(self) -> List[str]:
        return [self.go_binary, "mod", "graph"]

    def read(self, directory: str | Path | None = None) -> str:
        cwd = Path(directory) if directory is not None else Path.cwd()
        args = self.command()
        self.logger.debug("Running %s in %s", " ".join(args), cwd)
        try:
            output = self._runner(args, cwd=cwd, capture_output=True)
        except subprocess.CalledProcessError as exc:
            detail = (exc.stderr or "").strip()
            message = f"run go mod graph: exit status {exc.returncode}"
            if detail:
                message += f": {detail}"
            raise GraphSourceError(message) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise GraphSourceError(f"run go mod graph: {exc}") from exc
        self.logger.debug("go mod graph produced %d bytes", len(output))
        return output

    @staticmethod
    def _default_runner(
        args: Iterable[str],
        *,
        cwd: Path,
        capture_output: bool = False,
    ) -> str:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            check=True,
            text=True,
            capture_output=capture_output,
        )
        return completed.stdout if capture_output else ""


__all__ = ["GoModGraphSource", "GraphSourceError"]
