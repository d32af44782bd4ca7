"""Building blocks for building, testing and packaging WebAssembly crates for npm."""

__version__ = "0.1.0"