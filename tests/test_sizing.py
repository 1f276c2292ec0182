"""Tests for module cache size measurement."""

from __future__ import annotations

import os
from pathlib import Path

from gomodsize.sizing import (
    ModuleSizeMeasurer,
    default_module_root,
    directory_size,
    escape_module_path,
)
from tests._fixtures.module_cache import ModuleCacheBuilder


def test_escape_module_path_encodes_upper_case() -> None:
    assert escape_module_path("github.com/BurntSushi/toml@v1.0.0") == (
        "github.com/!burnt!sushi/toml@v1.0.0"
    )
    assert escape_module_path("golang.org/x/text@v0.3.0") == "golang.org/x/text@v0.3.0"


def test_default_module_root_prefers_gomodcache(tmp_path: Path) -> None:
    env = {"GOMODCACHE": str(tmp_path / "cache"), "GOPATH": str(tmp_path / "gopath")}

    assert default_module_root(env) == tmp_path / "cache"


def test_default_module_root_uses_first_gopath_entry(tmp_path: Path) -> None:
    env = {"GOPATH": os.pathsep.join([str(tmp_path / "one"), str(tmp_path / "two")])}

    assert default_module_root(env) == tmp_path / "one" / "pkg" / "mod"


def test_default_module_root_falls_back_to_home() -> None:
    assert default_module_root({}) == Path.home() / "go" / "pkg" / "mod"


def test_measure_sums_files_recursively(module_cache: ModuleCacheBuilder) -> None:
    module_cache.add(
        "github.com/BurntSushi/toml@v1.0.0",
        {"decode.go": 100, "internal/tz.go": 50, "internal/deep/x.go": 7},
    )
    measurer = ModuleSizeMeasurer(module_root=module_cache.root)

    measurement = measurer.measure("github.com/BurntSushi/toml@v1.0.0")

    assert measurement.available
    assert measurement.size == 157


def test_measure_missing_module_is_unavailable(module_cache: ModuleCacheBuilder) -> None:
    measurer = ModuleSizeMeasurer(module_root=module_cache.root)

    measurement = measurer.measure("example.com/main")

    assert not measurement.available
    assert measurement.size == 0
    assert "example.com" in (measurement.error or "")


def test_measurer_reads_root_from_environment(module_cache: ModuleCacheBuilder) -> None:
    module_cache.add("rsc.io/quote@v1.5.2", {"quote.go": 12})
    measurer = ModuleSizeMeasurer(environ={"GOMODCACHE": str(module_cache.root)})

    assert measurer.module_root == module_cache.root
    assert measurer.measure("rsc.io/quote@v1.5.2").size == 12


def test_directory_size_does_not_follow_symlinks(tmp_path: Path) -> None:
    target = tmp_path / "target"
    target.mkdir()
    (target / "big.bin").write_bytes(b"x" * 4096)
    module = tmp_path / "module"
    module.mkdir()
    (module / "small.go").write_bytes(b"x" * 10)
    link = module / "linked"
    link.symlink_to(target, target_is_directory=True)

    assert directory_size(module) == 10 + os.lstat(link).st_size


def test_directory_size_of_plain_file(tmp_path: Path) -> None:
    path = tmp_path / "file.txt"
    path.write_bytes(b"abc")

    assert directory_size(path) == 3


def test_unknown_home_leaves_module_root_unset(monkeypatch) -> None:
    def _no_home(cls):  # type: ignore[no-untyped-def]
        raise RuntimeError("Could not determine home directory.")

    monkeypatch.setattr(Path, "home", classmethod(_no_home))

    assert default_module_root({}) is None
    measurer = ModuleSizeMeasurer(environ={})
    measurement = measurer.measure("rsc.io/quote@v1.5.2")
    assert measurer.module_root is None
    assert not measurement.available
    assert measurement.size == 0
