"""The external command-line tools the build relies on."""

from __future__ import annotations

import enum


class Tool(enum.Enum):
    """A CLI tool, valued by its binary name."""

    CARGO_GENERATE = "cargo-generate"
    WASM_BINDGEN = "wasm-bindgen"
    WASM_OPT = "wasm-opt"

    def __str__(self) -> str:
        return self.value