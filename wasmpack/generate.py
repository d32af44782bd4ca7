"""Creating a new project from a template with cargo-generate."""

from __future__ import annotations

import logging
import os
import sys
from typing import Union

from . import child, emoji, install
from .cache import get_wasm_pack_cache
from .install import Status
from .tool import Tool

log = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def generate_command(bin_path: PathLike, template: str, name: str) -> list[str]:
    """The argument list that generates project ``name`` from ``template``."""
    return [os.fspath(bin_path), "generate", "--git", template, "--name", name]


def generate(template: str, name: str, install_status: Status) -> None:
    """Run cargo-generate in the current directory."""
    download = install.get_tool_path(install_status, Tool.CARGO_GENERATE)
    bin_path = download.binary(str(Tool.CARGO_GENERATE))
    print(f"{emoji.SHEEP} Generating a new rustwasm project with name '{name}'...")
    try:
        child.run(generate_command(bin_path, template, name), "cargo-generate")
    except (child.CommandFailedError, OSError) as exc:
        raise RuntimeError(f"Running cargo-generate: {exc}") from exc


def generate_project(template: str, name: str, install_permitted: bool) -> None:
    """Find or install cargo-generate, then create project ``name``."""
    log.info("Generating a new rustwasm project...")
    status = install.download_prebuilt_or_cargo_install(
        Tool.CARGO_GENERATE, get_wasm_pack_cache(), "latest", install_permitted
    )
    generate(template, name, status)
    print(f"[INFO]: 🐑 Generated new project at /{name}", file=sys.stderr)