"""Assemble the installer web page with the current version filled in."""

from __future__ import annotations

import argparse
import os
import shutil
from pathlib import Path
from typing import Optional, Sequence, Union

PathLike = Union[str, "os.PathLike[str]"]


def manifest_version(manifest_text: str) -> str:
    """Return the quoted value of the first ``version =`` line."""
    for line in manifest_text.splitlines():
        if line.startswith("version ="):
            start = line.find('"')
            end = line.rfind('"')
            if start == -1 or end <= start:
                raise ValueError(f"malformed version line: {line!r}")
            return line[start + 1 : end]
    raise ValueError("no version line found in manifest")


def fixup(text: str, version: str) -> str:
    """Replace every ``$VERSION`` placeholder with ``v<version>``."""
    return text.replace("$VERSION", f"v{version}")


def build_installer(root: PathLike) -> Path:
    """Write the installer files under ``root``/docs/installer and return that directory."""
    base = Path(root)
    source = base / "docs" / "_installer"
    dest = base / "docs" / "installer"
    dest.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source / "wasm-pack.js", dest / "wasm-pack.js")
    version = manifest_version((base / "Cargo.toml").read_text(encoding="utf-8"))
    for name in ("index.html", "init.sh"):
        text = (source / name).read_text(encoding="utf-8")
        (dest / name).write_text(fixup(text, version), encoding="utf-8")
    return dest


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Build the installer page from the project at the given root."""
    parser = argparse.ArgumentParser(description="Build the installer page.")
    parser.add_argument("root", nargs="?", default=".", help="project root")
    args = parser.parse_args(argv)
    build_installer(args.root)
    return 0