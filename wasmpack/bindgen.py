"""Running the wasm-bindgen CLI to generate JavaScript bindings."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import semver

from . import child, install
from .install import Status
from .targets import BuildProfile, Target
from .tool import Tool

log = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

_WEB_TARGET_VERSION = "0.2.39"
_DASH_DASH_TARGET_VERSION = "0.2.40"

_LEGACY_TARGET_ARGS = {
    Target.NODEJS: "--nodejs",
    Target.NO_MODULES: "--no-modules",
    Target.WEB: "--web",
    Target.BUNDLER: "--browser",
    Target.DENO: "--deno",
}


@dataclass(frozen=True)
class BindgenProfile:
    """The wasm-bindgen settings of the configured build profile."""

    debug_js_glue: bool = False
    demangle_name_section: bool = True
    dwarf_debug_info: bool = False


def wasm_path(target_directory: PathLike, crate_name: str, profile: BuildProfile) -> Path:
    """Path of the compiled ``.wasm`` file of the crate for the profile."""
    release_or_debug = "debug" if profile is BuildProfile.DEV else "release"
    base = Path(target_directory) / "wasm32-unknown-unknown" / release_or_debug
    return (base / crate_name).with_suffix(".wasm")


def _at_least(version: str, minimum: str) -> bool:
    return semver.Version.parse(version) >= semver.Version.parse(minimum)


def supports_web_target(version: str) -> bool:
    """Whether a wasm-bindgen of ``version`` knows the web target."""
    return _at_least(version, _WEB_TARGET_VERSION)


def supports_dash_dash_target(version: str) -> bool:
    """Whether a wasm-bindgen of ``version`` takes the ``--target`` flag."""
    return _at_least(version, _DASH_DASH_TARGET_VERSION)


def build_target_arg(target: Target, version: str) -> str:
    """The target argument to hand to a wasm-bindgen of ``version``."""
    if not supports_dash_dash_target(version):
        return build_target_arg_legacy(target, version)
    return str(target)


def build_target_arg_legacy(target: Target, version: str) -> str:
    """The target flag understood by wasm-bindgen before ``--target`` existed."""
    log.info(
        "Your version of wasm-bindgen is out of date. You should consider "
        "updating your Cargo.toml to a version >= %s.",
        _DASH_DASH_TARGET_VERSION,
    )
    if target is Target.WEB and not supports_web_target(version):
        raise ValueError(
            "Your current version of wasm-bindgen does not support the 'web' "
            "target. Please update your project to wasm-bindgen version >= "
            f"{_WEB_TARGET_VERSION}."
        )
    return _LEGACY_TARGET_ARGS[target]


def bindgen_command(
    bindgen_path: PathLike,
    version: str,
    wasm_file: PathLike,
    out_dir: PathLike,
    out_name: Optional[str],
    disable_dts: bool,
    target: Target,
    settings: Optional[BindgenProfile] = None,
) -> list[str]:
    """The argument list that runs wasm-bindgen of ``version``."""
    settings = settings if settings is not None else BindgenProfile()
    command = [
        os.fspath(bindgen_path),
        os.fspath(wasm_file),
        "--out-dir",
        os.fspath(out_dir),
        "--no-typescript" if disable_dts else "--typescript",
    ]
    target_arg = build_target_arg(target, version)
    if supports_dash_dash_target(version):
        command += ["--target", target_arg]
    else:
        command.append(target_arg)
    if out_name is not None:
        command += ["--out-name", out_name]
    if settings.debug_js_glue:
        command.append("--debug")
    if not settings.demangle_name_section:
        command.append("--no-demangle")
    if settings.dwarf_debug_info:
        command.append("--keep-debug")
    return command


def wasm_bindgen_build(
    install_status: Status,
    wasm_file: PathLike,
    out_dir: PathLike,
    out_name: Optional[str],
    disable_dts: bool,
    target: Target,
    settings: Optional[BindgenProfile] = None,
) -> None:
    """Generate bindings for ``wasm_file`` into ``out_dir``."""
    download = install.get_tool_path(install_status, Tool.WASM_BINDGEN)
    bindgen_path = download.binary(str(Tool.WASM_BINDGEN))
    version = install.get_cli_version(Tool.WASM_BINDGEN, bindgen_path)
    command = bindgen_command(
        bindgen_path, version, wasm_file, out_dir, out_name, disable_dts, target, settings
    )
    try:
        child.run(command, "wasm-bindgen")
    except (child.CommandFailedError, OSError) as exc:
        raise RuntimeError(f"Running the wasm-bindgen CLI: {exc}") from exc