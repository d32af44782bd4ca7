[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wasmpack"
version = "0.1.0"
description = "Building blocks for building, testing and packaging Rust WebAssembly crates for npm"
requires-python = ">=3.10"
keywords = ["webassembly", "wasm", "wasm-bindgen", "wasm-opt", "cargo-generate", "npm", "cargo", "build"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]
dependencies = [
    "semver",
    "platformdirs",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
wasmpack-installer = "wasmpack.installer_page:main"

[tool.hatch.build.targets.wheel]
packages = ["wasmpack"]

[tool.pytest.ini_options]
addopts = "-ra"
