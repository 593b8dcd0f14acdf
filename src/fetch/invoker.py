"""Package-manager invocation as an injectable async capability."""

from __future__ import annotations

import asyncio
import logging
import shutil
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

from common.errors import PackageManagerNotFoundError
from common.logging_utils import Timer, extra_context, is_debug_enabled, safe_path
from constants import Constants

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvocationResult:
    """Captured outcome of one package-manager run."""

    stdout: str
    exit_code: int
    stderr: str = ""


class PackageManagerInvoker(Protocol):
    """Anything that can run the package manager with ``args`` in ``cwd``."""

    async def invoke(self, args: Sequence[str], cwd: str) -> InvocationResult:
        ...


async def is_package_manager_available(command: Optional[str] = None) -> str:
    """Return the absolute path of the package manager executable.

    Raises:
        PackageManagerNotFoundError: The command is not on PATH.
    """
    command = command or Constants.NPM_COMMAND
    path = await asyncio.to_thread(shutil.which, command)
    if not path:
        raise PackageManagerNotFoundError(
            f'"{command}" command line tool is not installed: make sure it is accessible on your PATH.'
        )
    return path


class SubprocessInvoker:
    """Runs the real package manager via ``asyncio.create_subprocess_exec``."""

    def __init__(self, command: Optional[str] = None):
        self.command = command or Constants.NPM_COMMAND

    async def invoke(self, args: Sequence[str], cwd: str) -> InvocationResult:
        executable = await asyncio.to_thread(shutil.which, self.command) or self.command
        cmd: List[str] = [executable] + list(args)
        with Timer() as t:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                cwd=cwd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            out, err = await proc.communicate()
        if is_debug_enabled(logger):
            logger.debug(
                "Package manager finished",
                extra=extra_context(
                    event="subprocess",
                    component="invoker",
                    action=" ".join(args[:1]),
                    outcome="success" if proc.returncode == 0 else "failure",
                    exit_code=proc.returncode,
                    duration_ms=t.duration_ms(),
                    target=safe_path(cwd),
                ),
            )
        return InvocationResult(
            stdout=out.decode("utf-8", errors="replace"),
            exit_code=proc.returncode if proc.returncode is not None else -1,
            stderr=err.decode("utf-8", errors="replace"),
        )
