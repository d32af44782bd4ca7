import platform
import sys

import pytest

from wasmpack.cache import Cache, Download
from wasmpack.install import (
    CannotInstall,
    Found,
    InstallError,
    PlatformNotSupported,
    cargo_install,
    check_version,
    download_prebuilt,
    get_cli_version,
    get_tool_path,
    parse_cli_version,
    prebuilt_url,
)
from wasmpack.tool import Tool


def test_get_tool_path_found(tmp_path):
    dl = Download.at(tmp_path)
    assert get_tool_path(Found(dl), Tool.WASM_BINDGEN) == dl


def test_get_tool_path_cannot_install():
    with pytest.raises(InstallError, match="Not able to find or install a local wasm-bindgen."):
        get_tool_path(CannotInstall(), Tool.WASM_BINDGEN)


def test_get_tool_path_platform_not_supported():
    with pytest.raises(InstallError, match="wasm-opt does not currently support your platform."):
        get_tool_path(PlatformNotSupported(), Tool.WASM_OPT)


def test_parse_cli_version_takes_second_word():
    assert parse_cli_version("wasm-bindgen 0.2.74 (abcdef)\n") == "0.2.74"


@pytest.mark.parametrize("output", ["", "wasm-bindgen", "   \n"])
def test_parse_cli_version_errors(output):
    with pytest.raises(InstallError, match="couldn't determine your version"):
        parse_cli_version(output)


def test_get_cli_version_runs_binary():
    assert get_cli_version(Tool.WASM_BINDGEN, sys.executable) == platform.python_version()


def test_check_version_matches_and_mismatches():
    assert check_version(Tool.WASM_BINDGEN, sys.executable, platform.python_version())
    assert not check_version(Tool.WASM_BINDGEN, sys.executable, "0.0.0-none")


def test_prebuilt_url_wasm_bindgen_linux():
    url = prebuilt_url(Tool.WASM_BINDGEN, "0.2.74", "Linux", "x86_64")
    assert url.endswith("/0.2.74/wasm-bindgen-0.2.74-x86_64-unknown-linux-musl.tar.gz")


def test_prebuilt_url_wasm_opt_windows_amd64():
    url = prebuilt_url(Tool.WASM_OPT, "ignored", "Windows", "AMD64")
    assert url.endswith("/version_90/binaryen-version_90-x86-windows.tar.gz")


def test_prebuilt_url_cargo_generate_pins_version():
    url = prebuilt_url(Tool.CARGO_GENERATE, "latest", "Darwin", "x86_64")
    assert url.endswith("/v0.5.1/cargo-generate-v0.5.1-x86_64-apple-darwin.tar.gz")


def test_prebuilt_url_32bit_linux_only_wasm_opt():
    assert prebuilt_url(Tool.WASM_OPT, "x", "Linux", "i686").endswith("x86-linux.tar.gz")
    with pytest.raises(InstallError, match="Unrecognized target!"):
        prebuilt_url(Tool.WASM_BINDGEN, "0.2.74", "Linux", "i686")


def test_prebuilt_url_unknown_platform():
    with pytest.raises(InstallError, match="Unrecognized target!"):
        prebuilt_url(Tool.WASM_BINDGEN, "0.2.74", "Linux", "aarch64")


def test_download_prebuilt_unsupported_platform(tmp_path, monkeypatch):
    monkeypatch.setattr(platform, "system", lambda: "Plan9")
    with pytest.raises(InstallError, match="no prebuilt wasm-bindgen binaries"):
        download_prebuilt(Tool.WASM_BINDGEN, Cache.at(tmp_path), "0.2.74", True)


def test_cargo_install_uses_existing_destination(tmp_path):
    cache = Cache.at(tmp_path)
    existing = cache.join("wasm-bindgen-cargo-install-0.2.74")
    existing.mkdir()
    status = cargo_install(Tool.WASM_BINDGEN, cache, "0.2.74", False)
    assert status == Found(Download.at(existing))


def test_cargo_install_not_permitted(tmp_path):
    status = cargo_install(Tool.CARGO_GENERATE, Cache.at(tmp_path), "latest", False)
    assert status == CannotInstall()
    assert list(tmp_path.iterdir()) == []