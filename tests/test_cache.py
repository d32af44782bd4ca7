import io
import sys
import tarfile

import pytest

from wasmpack.cache import Cache, Download, get_wasm_pack_cache

EXE = ".exe" if sys.platform.startswith("win") else ""


def _tarball(path, files):
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as archive:
        for name, content in files.items():
            info = tarfile.TarInfo(name)
            info.size = len(content)
            archive.addfile(info, io.BytesIO(content))
    path.write_bytes(buffer.getvalue())
    return path.as_uri()


def test_download_binary_existing(tmp_path):
    (tmp_path / f"wasm-opt{EXE}").write_text("x")
    assert Download.at(tmp_path).binary("wasm-opt") == tmp_path / f"wasm-opt{EXE}"


def test_download_binary_missing(tmp_path):
    with pytest.raises(FileNotFoundError, match="binary does not exist"):
        Download.at(tmp_path).binary("wasm-bindgen")


def test_cache_join(tmp_path):
    assert Cache.at(tmp_path).join("tool-dir") == tmp_path / "tool-dir"


def test_cache_new_is_hidden_dir_named():
    assert Cache.new("wasm-pack").destination.name == ".wasm-pack"


def test_download_extracts_binaries(tmp_path):
    url = _tarball(
        tmp_path / "tool.tar.gz",
        {
            f"tool-1.0/wasm-bindgen{EXE}": b"bindgen",
            f"tool-1.0/wasm-bindgen-test-runner{EXE}": b"runner",
            "tool-1.0/README": b"readme",
        },
    )
    cache = Cache.at(tmp_path / "cache")
    dl = cache.download(True, "wasm-bindgen", ["wasm-bindgen", "wasm-bindgen-test-runner"], url)
    assert dl.binary("wasm-bindgen").read_bytes() == b"bindgen"
    assert dl.binary("wasm-bindgen-test-runner").read_bytes() == b"runner"
    assert not (dl.root / "README").exists()


def test_download_reuses_cached_entry(tmp_path):
    archive = tmp_path / "tool.tar.gz"
    url = _tarball(archive, {f"wasm-opt{EXE}": b"opt"})
    cache = Cache.at(tmp_path / "cache")
    first = cache.download(True, "wasm-opt", ["wasm-opt"], url)
    archive.unlink()
    second = cache.download(False, "wasm-opt", ["wasm-opt"], url)
    assert second == first


def test_download_not_permitted_returns_none(tmp_path):
    url = _tarball(tmp_path / "tool.tar.gz", {f"wasm-opt{EXE}": b"opt"})
    cache = Cache.at(tmp_path / "cache")
    assert cache.download(False, "wasm-opt", ["wasm-opt"], url) is None


def test_download_missing_binary_raises(tmp_path):
    url = _tarball(tmp_path / "tool.tar.gz", {"other": b"x"})
    cache = Cache.at(tmp_path / "cache")
    with pytest.raises(RuntimeError, match="wasm-opt"):
        cache.download(True, "wasm-opt", ["wasm-opt"], url)
    assert cache.download(False, "wasm-opt", ["wasm-opt"], url) is None


def test_get_cache_from_env(tmp_path, monkeypatch):
    monkeypatch.setenv("WASM_PACK_CACHE", str(tmp_path))
    assert get_wasm_pack_cache().destination == tmp_path


def test_get_cache_default(monkeypatch):
    monkeypatch.delenv("WASM_PACK_CACHE", raising=False)
    assert get_wasm_pack_cache() == Cache.new("wasm-pack")