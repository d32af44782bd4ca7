"""Options and step planning of the test command."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence, Union

from .mode import InstallMode

PathLike = Union[str, "os.PathLike[str]"]

RUNNER_VAR = "CARGO_TARGET_WASM32_UNKNOWN_UNKNOWN_RUNNER"


class TestOptionsError(ValueError):
    """The options of the test command do not make sense together."""

    __test__ = False


@dataclass
class TestOptions:
    """Options of the test command."""

    __test__ = False

    node: bool = False
    firefox: bool = False
    geckodriver: Optional[Path] = None
    chrome: bool = False
    chromedriver: Optional[Path] = None
    safari: bool = False
    safaridriver: Optional[Path] = None
    headless: bool = False
    mode: InstallMode = InstallMode.NORMAL
    release: bool = False
    path_and_extra_options: list[str] = field(default_factory=list)

    def split_path(self) -> tuple[Optional[Path], list[str]]:
        """Split off the crate path, if the first argument is not a flag."""
        args = list(self.path_and_extra_options)
        if args and not args[0].startswith("-"):
            return Path(args[0]), args[1:]
        return None, args

    def any_browser(self) -> bool:
        """Whether any browser was asked for."""
        return self.chrome or self.firefox or self.safari

    def validate(self) -> None:
        """Raise TestOptionsError if the options conflict."""
        browser = self.any_browser()
        if not self.node and not browser:
            raise TestOptionsError(
                "Must specify at least one of `--node`, `--chrome`, `--firefox`, or `--safari`"
            )
        if self.headless and not browser:
            raise TestOptionsError(
                "The `--headless` flag only applies to browser tests. Node does not "
                "provide a UI, so it doesn't make sense to talk about a headless "
                "version of Node tests."
            )


def process_steps(options: TestOptions) -> list[str]:
    """Names of the test steps, in order, for the given options."""
    if options.mode is InstallMode.NORMAL:
        steps = ["step_check_rustc_version", "step_check_for_wasm_target"]
    elif options.mode is InstallMode.FORCE:
        steps = ["step_check_for_wasm_target"]
    else:
        steps = []
    steps += ["step_build_tests", "step_install_wasm_bindgen"]
    if options.node:
        steps.append("step_test_node")
    if options.chrome:
        if options.chromedriver is None:
            steps.append("step_get_chromedriver")
        steps.append("step_test_chrome")
    if options.firefox:
        if options.geckodriver is None:
            steps.append("step_get_geckodriver")
        steps.append("step_test_firefox")
    if options.safari:
        if options.safaridriver is None:
            steps.append("step_get_safaridriver")
        steps.append("step_test_safari")
    return steps


def build_extra_options(extra_options: Sequence[str]) -> list[str]:
    """The extra options meant for building: everything before ``--``."""
    args = list(extra_options)
    if "--" in args:
        return args[: args.index("--")]
    return args


def webdriver_env(test_runner: PathLike, headless: bool) -> list[tuple[str, str]]:
    """Environment for running tests in a browser."""
    env = [
        (RUNNER_VAR, os.fspath(test_runner)),
        ("WASM_BINDGEN_TEST_ONLY_WEB", "1"),
    ]
    if not headless:
        env.append(("NO_HEADLESS", "1"))
    return env


def node_env(test_runner: PathLike) -> list[tuple[str, str]]:
    """Environment for running tests in Node.js."""
    return [
        (RUNNER_VAR, os.fspath(test_runner)),
        ("WASM_BINDGEN_TEST_ONLY_NODE", "1"),
    ]


def missing_test_dependency_message() -> str:
    """Message for a crate that lacks the wasm-bindgen-test dependency."""
    return (
        'Ensure that you have "wasm-bindgen-test" as a dependency in your Cargo.toml file:\n'
        "[dev-dependencies]\n"
        'wasm-bindgen-test = "0.2"'
    )