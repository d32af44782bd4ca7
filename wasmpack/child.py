"""Running child processes with their commands logged."""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from typing import Sequence, Union

log = logging.getLogger(__name__)

Arg = Union[str, "os.PathLike[str]"]


class CommandFailedError(RuntimeError):
    """A child process exited unsuccessfully."""

    def __init__(self, command_name: str, returncode: int, command: Sequence[str]):
        self.command_name = command_name
        self.returncode = returncode
        self.command = list(command)
        super().__init__(
            f"failed to execute `{command_name}`: exited with "
            f"{_describe_status(returncode)}\n  full command: {self.command!r}"
        )


def _describe_status(returncode: int) -> str:
    if returncode < 0:
        return f"signal: {-returncode}"
    return f"exit status: {returncode}"


def new_command(program: str) -> list[str]:
    """Return the argument list that starts ``program``.

    On Windows the program is launched through ``cmd /c`` so that batch
    wrappers such as ``npm`` resolve correctly.
    """
    if sys.platform.startswith("win"):
        return ["cmd", "/c", program]
    return [program]


def _normalize(command: Sequence[Arg]) -> list[str]:
    return [os.fspath(arg) for arg in command]


def run(command: Sequence[Arg], command_name: str) -> None:
    """Run ``command``; raise CommandFailedError if it does not succeed."""
    args = _normalize(command)
    log.info("Running %r", args)
    completed = subprocess.run(args)
    if completed.returncode != 0:
        raise CommandFailedError(str(command_name), completed.returncode, args)


def run_capture_stdout(command: Sequence[Arg], command_name: object) -> str:
    """Run ``command`` and return what it wrote to stdout."""
    args = _normalize(command)
    log.info("Running %r", args)
    completed = subprocess.run(args, stdout=subprocess.PIPE)
    if completed.returncode != 0:
        raise CommandFailedError(str(command_name), completed.returncode, args)
    return completed.stdout.decode("utf-8", errors="replace")