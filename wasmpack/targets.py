"""Build targets, profiles and the options of the build command."""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .mode import InstallMode


class Target(enum.Enum):
    """The JavaScript environment the output is generated for."""

    BUNDLER = "bundler"
    WEB = "web"
    NODEJS = "nodejs"
    NO_MODULES = "no-modules"
    DENO = "deno"

    @classmethod
    def parse(cls, text: str) -> "Target":
        """Parse a ``--target`` value; ``browser`` means bundler."""
        if text == "browser":
            return cls.BUNDLER
        try:
            return cls(text)
        except ValueError:
            raise ValueError(f"Unknown target: {text}") from None

    def __str__(self) -> str:
        return self.value


class BuildProfile(enum.Enum):
    """Whether optimizations, debug info and assertions are enabled."""

    DEV = "dev"
    RELEASE = "release"
    PROFILING = "profiling"


@dataclass
class BuildOptions:
    """Options of the build command."""

    path: Optional[Path] = None
    scope: Optional[str] = None
    mode: InstallMode = InstallMode.NORMAL
    disable_dts: bool = False
    target: Target = Target.BUNDLER
    debug: bool = False
    dev: bool = False
    release: bool = False
    profiling: bool = False
    out_dir: str = "pkg"
    out_name: Optional[str] = None
    extra_options: list[str] = field(default_factory=list)

    def normalized(self) -> "BuildOptions":
        """Return options where a path that looks like a flag is moved to the extra options."""
        if self.path is not None and str(self.path).startswith("--"):
            return dataclasses.replace(
                self,
                path=None,
                extra_options=[str(self.path), *self.extra_options],
            )
        return dataclasses.replace(self, extra_options=list(self.extra_options))

    def profile(self) -> BuildProfile:
        """Pick the build profile from the profile flags."""
        dev = self.dev or self.debug
        flags = (dev, self.release, self.profiling)
        if flags in ((False, False, False), (False, True, False)):
            return BuildProfile.RELEASE
        if flags == (True, False, False):
            return BuildProfile.DEV
        if flags == (False, False, True):
            return BuildProfile.PROFILING
        raise ValueError("Can only supply one of the --dev, --release, or --profiling flags")


_CHECK_STEPS = (
    "step_check_rustc_version",
    "step_check_crate_config",
    "step_check_for_wasm_target",
)

_BUILD_STEPS = (
    "step_build_wasm",
    "step_create_dir",
    "step_copy_readme",
    "step_copy_license",
    "step_install_wasm_bindgen",
    "step_run_wasm_bindgen",
    "step_run_wasm_opt",
    "step_create_json",
)


def build_steps(mode: InstallMode) -> list[str]:
    """Names of the build steps, in order, for the given install mode."""
    checks = () if mode is InstallMode.FORCE else _CHECK_STEPS
    return [*checks, *_BUILD_STEPS]