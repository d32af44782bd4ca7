"""Helpers shared by the commands."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

from .targets import Target

PathLike = Union[str, "os.PathLike[str]"]


def get_crate_path(path: Optional[PathLike]) -> Path:
    """Use ``path`` if given, otherwise search upwards for the crate."""
    if path is not None:
        return Path(path)
    return find_manifest_from_cwd()


def find_manifest_from_cwd() -> Path:
    """Find the nearest directory above the cwd that holds a Cargo.toml.

    Returns ``.`` when none is found, so that later steps report the error.
    """
    directory = Path.cwd()
    while True:
        if (directory / "Cargo.toml").is_file():
            return directory
        if directory.parent == directory:
            return Path(".")
        directory = directory.parent


def create_pkg_dir(out_dir: PathLike, target: Target) -> None:
    """Create the output directory with its .gitignore."""
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    contents = "" if target is Target.DENO else "*"
    (out / ".gitignore").write_text(contents)


def is_pkg_directory(path: PathLike) -> bool:
    """Whether ``path`` is an existing directory named ``pkg``."""
    p = Path(path)
    return p.is_dir() and p.name == "pkg"


def find_pkg_directory(path: PathLike) -> Optional[Path]:
    """Find ``path`` itself or a directory below it named ``pkg``."""
    root = Path(path)
    if is_pkg_directory(root):
        return root
    for current, dirnames, _ in os.walk(root):
        for name in dirnames:
            candidate = Path(current) / name
            if is_pkg_directory(candidate):
                return candidate
    return None


def elapsed(seconds: float) -> str:
    """Render a duration in seconds for display on a console."""
    total_nanos = int(round(seconds * 1_000_000_000))
    secs, nanos = divmod(total_nanos, 1_000_000_000)
    if secs >= 60:
        return f"{secs // 60}m {secs % 60:02}s"
    return f"{secs}.{nanos // 10_000_000:02}s"