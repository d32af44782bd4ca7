"""Finding, downloading and cargo-installing the tools a build needs."""

from __future__ import annotations

import json
import logging
import os
import platform
import shutil
import subprocess
import sys
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from . import child, emoji
from .cache import Cache, Download
from .tool import Tool

log = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

_CRATES_API = "https://crates.io/api/v1/crates/{}"
_EXE_SUFFIX = ".exe" if sys.platform.startswith("win") else ""


class InstallError(RuntimeError):
    """A tool could not be found, downloaded or installed."""


class Status:
    """Outcome of trying to find or install a tool."""


@dataclass(frozen=True)
class Found(Status):
    """The tool was found in ``download``."""

    download: Download


@dataclass(frozen=True)
class CannotInstall(Status):
    """The tool is missing and installing it is forbidden."""


@dataclass(frozen=True)
class PlatformNotSupported(Status):
    """No precompiled binaries exist for this platform."""


def _progress(message: str) -> None:
    print(f"[INFO]: {message}", file=sys.stderr)


def get_tool_path(status: Status, tool: Tool) -> Download:
    """Return the download of a found tool, or raise why there is none."""
    if isinstance(status, Found):
        return status.download
    if isinstance(status, CannotInstall):
        raise InstallError(f"Not able to find or install a local {tool}.")
    if isinstance(status, PlatformNotSupported):
        raise InstallError(f"{tool} does not currently support your platform.")
    raise TypeError(f"unknown install status: {status!r}")


def latest_crate_version(tool: Tool) -> str:
    """The newest published version of the tool's crate."""
    request = urllib.request.Request(
        _CRATES_API.format(tool), headers={"User-Agent": "wasmpack"}
    )
    with urllib.request.urlopen(request) as response:
        payload = json.loads(response.read().decode("utf-8"))
    return payload["crate"]["max_version"]


def download_prebuilt_or_cargo_install(
    tool: Tool, cache: Cache, version: str, install_permitted: bool
) -> Status:
    """Find or install ``tool`` at ``version``.

    A global install of the right version is preferred, then a prebuilt
    download, then ``cargo install``.
    """
    found = shutil.which(str(tool))
    if found is not None:
        path = Path(found)
        log.debug("found global %s binary at: %s", tool, path)
        if check_version(tool, path, version):
            return Found(Download.at(path.parent))

    _progress(f"{emoji.DOWN_ARROW}Installing {tool}...")

    try:
        return download_prebuilt(tool, cache, version, install_permitted)
    except Exception as exc:
        log.warning(
            "could not download pre-built `%s`: %s. Falling back to `cargo install`.",
            tool,
            exc,
        )
    return cargo_install(tool, cache, version, install_permitted)


def check_version(tool: Tool, path: PathLike, expected_version: str) -> bool:
    """Whether the tool at ``path`` reports the expected version."""
    if expected_version == "latest":
        expected_version = latest_crate_version(tool)
    actual = get_cli_version(tool, path)
    log.info(
        "Checking installed `%s` version == expected version: %s == %s",
        tool,
        actual,
        expected_version,
    )
    return actual == expected_version


def parse_cli_version(stdout: str) -> str:
    """Take the version, the second word, from ``--version`` output."""
    words = stdout.split()
    if len(words) < 2:
        raise InstallError(
            "Something went wrong! We couldn't determine your version of the "
            "wasm-bindgen CLI. We were supposed to set that up for you, so it's "
            "likely not your fault! You should file an issue."
        )
    return words[1]


def get_cli_version(tool: Tool, path: PathLike) -> str:
    """Run the tool with ``--version`` and return the version it reports."""
    stdout = child.run_capture_stdout([path, "--version"], tool)
    return parse_cli_version(stdout)


def download_prebuilt(
    tool: Tool, cache: Cache, version: str, install_permitted: bool
) -> Status:
    """Download a precompiled copy of the tool, if one is available."""
    try:
        url = prebuilt_url(tool, version)
    except InstallError as exc:
        raise InstallError(
            f"no prebuilt {tool} binaries are available for this platform: {exc}"
        ) from exc

    if tool is Tool.WASM_BINDGEN:
        binaries = ["wasm-bindgen", "wasm-bindgen-test-runner"]
    else:
        binaries = [str(tool)]
    download = cache.download(install_permitted, str(tool), binaries, url)
    if download is not None:
        return Found(download)
    if tool is Tool.WASM_OPT:
        return CannotInstall()
    raise InstallError(f"{tool} v{version} is not installed!")


def _arch(machine: str) -> Optional[str]:
    machine = machine.lower()
    if machine in {"x86_64", "amd64"}:
        return "x86_64"
    if machine in {"x86", "i386", "i486", "i586", "i686"}:
        return "x86"
    return None


def prebuilt_url(
    tool: Tool,
    version: str,
    system: Optional[str] = None,
    machine: Optional[str] = None,
) -> str:
    """URL of a precompiled release of ``tool`` for the given platform.

    The platform defaults to the host's.
    """
    system = (system if system is not None else platform.system()).lower()
    arch = _arch(machine if machine is not None else platform.machine())
    is_opt = tool is Tool.WASM_OPT

    if system == "linux" and arch == "x86_64":
        target = "x86-linux" if is_opt else "x86_64-unknown-linux-musl"
    elif system == "linux" and arch == "x86" and is_opt:
        target = "x86-linux"
    elif system == "darwin" and arch == "x86_64":
        target = "x86_64-apple-darwin"
    elif system == "windows" and arch == "x86_64":
        target = "x86-windows" if is_opt else "x86_64-pc-windows-msvc"
    elif system == "windows" and arch == "x86" and is_opt:
        target = "x86-windows"
    else:
        raise InstallError("Unrecognized target!")

    if tool is Tool.WASM_BINDGEN:
        return (
            "https://github.com/rustwasm/wasm-bindgen/releases/download/"
            f"{version}/wasm-bindgen-{version}-{target}.tar.gz"
        )
    if tool is Tool.CARGO_GENERATE:
        pinned = "0.5.1"
        return (
            "https://github.com/cargo-generate/cargo-generate/releases/download/"
            f"v{pinned}/cargo-generate-v{pinned}-{target}.tar.gz"
        )
    vers = "version_90"
    return (
        "https://github.com/WebAssembly/binaryen/releases/download/"
        f"{vers}/binaryen-{vers}-{target}.tar.gz"
    )


def cargo_install(
    tool: Tool, cache: Cache, version: str, install_permitted: bool
) -> Status:
    """Install the tool into the cache with ``cargo install``."""
    log.debug("Attempting to use a `cargo install`ed version of `%s=%s`", tool, version)

    dirname = f"{tool}-cargo-install-{version}"
    destination = cache.join(dirname)
    if destination.exists():
        log.debug(
            "`cargo install`ed `%s=%s` already exists at %s", tool, version, destination
        )
        return Found(Download.at(destination))

    if not install_permitted:
        return CannotInstall()

    # Install to a temporary location so an interrupted install leaves no stale files.
    tmp = cache.join(f".{dirname}")
    shutil.rmtree(tmp, ignore_errors=True)
    log.debug("cargo installing %s to tempdir: %s", tool, tmp)
    try:
        tmp.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise InstallError(
            f"failed to create temp dir for `cargo install {tool}`: {exc}"
        ) from exc

    crate_name = "wasm-bindgen-cli" if tool is Tool.WASM_BINDGEN else str(tool)
    command = ["cargo", "install", "--force", crate_name, "--root", str(tmp)]
    if version != "latest":
        command += ["--version", version]

    try:
        child.run(command, "cargo install")
    except (child.CommandFailedError, OSError) as exc:
        raise InstallError(f"Installing {tool} with cargo: {exc}") from exc

    if tool is Tool.WASM_BINDGEN:
        binaries = ["wasm-bindgen", "wasm-bindgen-test-runner"]
    elif tool is Tool.CARGO_GENERATE:
        binaries = ["cargo-generate"]
    else:
        raise InstallError("Cannot install wasm-opt with cargo.")

    # cargo puts binaries in $root/bin; the rest of the code expects them in $root.
    for binary in binaries:
        source = tmp / "bin" / f"{binary}{_EXE_SUFFIX}"
        target = tmp / source.name
        try:
            source.rename(target)
        except OSError as exc:
            raise InstallError(
                f"failed to move {source} to {target} for `cargo install`ed `{binary}`"
            ) from exc

    tmp.rename(destination)
    return Found(Download.at(destination))