# wasmpack

`wasmpack` is a set of building blocks for turning Rust crates compiled to
WebAssembly into npm packages. It parses the options of the build and test
commands, finds or installs the external tools involved (`wasm-bindgen`,
`wasm-opt`, `cargo-generate`), keeps a cache of downloaded tool binaries,
runs `wasm-bindgen` and `cargo-generate`, and prepares the output directory.

## Installation

```
pip install wasmpack
```

For running the test suite:

```
pip install "wasmpack[test]"
```

## Targets, profiles, modes and access levels

These are parsed from the same strings the command line accepts. Unknown
values raise `ValueError`.

```python
from wasmpack.targets import Target, BuildOptions, BuildProfile, build_steps
from wasmpack.mode import InstallMode
from wasmpack.access import Access

Target.parse("browser")          # Target.BUNDLER
str(Target.parse("no-modules"))  # "no-modules"

InstallMode.parse("no-install").install_permitted()  # False
str(Access.parse("private"))     # "--access=restricted"

BuildOptions(dev=True).profile()             # BuildProfile.DEV
BuildOptions().profile()                     # BuildProfile.RELEASE
BuildOptions(dev=True, release=True).profile()  # raises ValueError
BuildOptions(path="--no-default-features").normalized().extra_options
# ["--no-default-features"]

build_steps(InstallMode.FORCE)   # step names, without the check steps
```

## Crate and output helpers

```python
from wasmpack.utils import get_crate_path, create_pkg_dir, find_pkg_directory, elapsed
from wasmpack.targets import Target

crate = get_crate_path(None)     # searches upward for Cargo.toml, else "."
create_pkg_dir(crate / "pkg", Target.parse("web"))  # writes pkg/.gitignore
find_pkg_directory(crate)        # a directory named "pkg" at or below crate, or None
elapsed(75)                      # "1m 15s"
elapsed(1.5)                     # "1.50s"
```

## Running child processes

`wasmpack.child.run(command, name)` runs an argument list and raises
`CommandFailedError` when it exits unsuccessfully;
`run_capture_stdout` does the same and returns the decoded standard output.
`new_command(program)` returns the argument list that starts a program,
going through `cmd /c` on Windows.

## Tool cache and installation

`wasmpack.cache.Cache` is a directory of downloaded tools; `Cache.download`
fetches a release tarball and keeps the named binaries, reusing an earlier
download. `get_wasm_pack_cache()` uses the directory in the
`WASM_PACK_CACHE` environment variable, or a `.wasm-pack` directory in the
user's cache directory.

`wasmpack.install.download_prebuilt_or_cargo_install(tool, cache, version,
install_permitted)` prefers a tool of the right version on `PATH`, then a
prebuilt download, then `cargo install`, and returns a status: `Found`
(holding a `Download`), `CannotInstall` or `PlatformNotSupported`.
`get_tool_path(status, tool)` turns that into a `Download` or raises
`InstallError`. `prebuilt_url(tool, version, system, machine)` gives the
release URL for a platform, defaulting to the host's; a version of
`"latest"` is looked up on the crates registry.

## wasm-bindgen and cargo-generate

```python
from wasmpack.bindgen import bindgen_command, BindgenProfile
from wasmpack.targets import Target

bindgen_command("wasm-bindgen", "0.2.74", "app.wasm", "pkg", None, False, Target.WEB)
# ["wasm-bindgen", "app.wasm", "--out-dir", "pkg", "--typescript", "--target", "web"]
```

Versions older than 0.2.40 get the legacy target flags (`--browser`,
`--nodejs`, ...); the web target needs at least 0.2.39.
`wasm_bindgen_build` finds the binary from an install status, asks it for
its version and runs it. `wasmpack.generate.generate_project(template, name,
install_permitted)` installs `cargo-generate` if needed and creates a new
project in the current directory.

## Test command planning

`wasmpack.testcmd.TestOptions` holds the options of the test command.
`validate()` raises `TestOptionsError` when neither Node.js nor a browser is
chosen, or when `headless` is set without a browser. `split_path()` separates
a leading crate path from extra options, `process_steps(options)` lists the
step names in order, `build_extra_options` keeps what comes before `--`, and
`node_env` / `webdriver_env` give the environment variables for the test
runner.

## Installer page

The installer page is produced from the templates in `docs/_installer`,
with `$VERSION` replaced by `v` and the version found in `Cargo.toml`, and
written to `docs/installer`. Run this from the project root, or pass the
root as an argument:

```
wasmpack-installer
```

## What this package does not do

There is no `build`, `test`, `pack`, `publish`, `login` or `new` command
line. The step lists from `build_steps` and `process_steps` are names only;
nothing here compiles a crate with cargo, reads `Cargo.toml` or `Cargo.lock`
for crate data, runs `wasm-opt`, copies a README or licence, writes
`package.json`, downloads browser drivers, or talks to the npm registry.