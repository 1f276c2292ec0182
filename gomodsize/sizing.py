"""On-disk footprint measurement for modules in the Go module cache."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from .models import Measurement


def default_module_root(environ: Mapping[str, str] | None = None) -> Optional[Path]:
    """Locate the module cache the way the go command does.

    Returns None when neither variable is set and the home directory is unknown.
    """
    env = os.environ if environ is None else environ
    modcache = env.get("GOMODCACHE")
    if modcache:
        return Path(modcache)
    gopath = env.get("GOPATH")
    if gopath:
        first = gopath.split(os.pathsep)[0]
        if first:
            return Path(first) / "pkg" / "mod"
    try:
        home = Path.home()
    except (RuntimeError, KeyError):
        return None
    return home / "go" / "pkg" / "mod"


def escape_module_path(name: str) -> str:
    """Apply the module cache case-encoding: `A` becomes `!a`."""
    return "".join(f"!{char.lower()}" if "A" <= char <= "Z" else char for char in name)


class ModuleSizeMeasurer:
    """Sums file sizes below a module's directory in the module cache."""

    def __init__(
        self,
        module_root: Optional[Path] = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.module_root = module_root if module_root is not None else default_module_root(environ)

    def path_for(self, name: str) -> Optional[Path]:
        if self.module_root is None:
            return None
        return self.module_root / escape_module_path(name)

    def measure(self, name: str) -> Measurement:
        path = self.path_for(name)
        if path is None:
            return Measurement.unavailable("module cache location unknown: set GOMODCACHE or GOPATH")
        try:
            return Measurement(size=directory_size(path))
        except OSError as exc:
            return Measurement.unavailable(f"{path}: {exc.strerror or exc}")


def directory_size(path: Path) -> int:
    """Return the total byte size of regular files below ``path``.

    Symlinks are counted by their own size and never followed. Raises
    ``OSError`` when ``path`` or anything below it cannot be read.
    """

    def _raise(exc: OSError) -> None:
        raise exc

    root_stat = os.lstat(path)
    if not os.path.isdir(path) or os.path.islink(path):
        return root_stat.st_size

    total = 0
    for dirpath, dirnames, filenames in os.walk(path, onerror=_raise):
        for dirname in dirnames:
            candidate = os.path.join(dirpath, dirname)
            if os.path.islink(candidate):
                total += os.lstat(candidate).st_size
        for filename in filenames:
            total += os.lstat(os.path.join(dirpath, filename)).st_size
    return total


__all__ = ["ModuleSizeMeasurer", "default_module_root", "directory_size", "escape_module_path"]
