"""The binary cache that holds downloaded and installed tools."""

from __future__ import annotations

import hashlib
import io
import os
import shutil
import sys
import tarfile
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Union

import platformdirs

PathLike = Union[str, "os.PathLike[str]"]

_EXE_SUFFIX = ".exe" if sys.platform.startswith("win") else ""


@dataclass(frozen=True)
class Download:
    """A directory holding the binaries of one downloaded tool."""

    root: Path

    @classmethod
    def at(cls, path: PathLike) -> "Download":
        """A download rooted at ``path``."""
        return cls(Path(path))

    def binary(self, name: str) -> Path:
        """Path of the binary ``name``; raise if it does not exist."""
        path = self.root / f"{name}{_EXE_SUFFIX}"
        if not path.exists():
            raise FileNotFoundError(f"{path} binary does not exist")
        return path


@dataclass(frozen=True)
class Cache:
    """A directory where tools are downloaded to and looked up in."""

    destination: Path

    @classmethod
    def at(cls, path: PathLike) -> "Cache":
        """A cache in the directory ``path``."""
        return cls(Path(path))

    @classmethod
    def new(cls, name: str) -> "Cache":
        """A cache named ``name`` in the user's cache directory."""
        return cls(Path(platformdirs.user_cache_dir()) / f".{name}")

    def join(self, name: PathLike) -> Path:
        """Path of ``name`` inside the cache."""
        return self.destination / name

    def _entry(self, name: str, url: str) -> str:
        digest = hashlib.sha256(url.encode("utf-8")).hexdigest()[:16]
        return f"{name}-{digest}"

    def download(
        self,
        install_permitted: bool,
        name: str,
        binaries: Iterable[str],
        url: str,
    ) -> Optional[Download]:
        """Fetch the tarball at ``url`` and keep ``binaries`` from it.

        A download already in the cache is reused. When nothing is cached and
        installing is not permitted, None is returned.
        """
        entry = self._entry(name, url)
        destination = self.join(entry)
        if destination.exists():
            return Download.at(destination)
        if not install_permitted:
            return None

        with urllib.request.urlopen(url) as response:
            data = response.read()

        tmp = self.join(f".{entry}")
        shutil.rmtree(tmp, ignore_errors=True)
        tmp.mkdir(parents=True)
        try:
            _extract_binaries(data, set(binaries), tmp)
            tmp.rename(destination)
        except BaseException:
            shutil.rmtree(tmp, ignore_errors=True)
            raise
        return Download.at(destination)


def _extract_binaries(data: bytes, wanted: set[str], dest: Path) -> None:
    found: set[str] = set()
    with tarfile.open(fileobj=io.BytesIO(data), mode="r:*") as archive:
        for member in archive:
            if not member.isfile():
                continue
            filename = Path(member.name).name
            stem = filename[: -len(_EXE_SUFFIX)] if _EXE_SUFFIX and filename.endswith(_EXE_SUFFIX) else filename
            if stem not in wanted:
                continue
            source = archive.extractfile(member)
            if source is None:
                continue
            target = dest / filename
            with source, open(target, "wb") as out:
                shutil.copyfileobj(source, out)
            target.chmod(0o755)
            found.add(stem)
    missing = sorted(wanted - found)
    if missing:
        raise RuntimeError(f"failed to find {', '.join(missing)} in downloaded archive")


def get_wasm_pack_cache() -> Cache:
    """The cache given by ``WASM_PACK_CACHE``, or the default user cache."""
    path = os.environ.get("WASM_PACK_CACHE")
    if path is not None:
        return Cache.at(path)
    return Cache.new("wasm-pack")