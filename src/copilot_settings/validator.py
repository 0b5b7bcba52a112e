"""Validation of the external runtime binary.

Runs ``<path> --version``, collects stdout until the process exits and
classifies the reported version. Each call owns its own process and buffer,
so checks can run concurrently. An unfinished check kills the process group
and reaps the process before ``check()`` raises.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import shutil
import signal
from collections.abc import Awaitable, Callable
from typing import Protocol

from copilot_settings.config import (
    DEFAULT_BINARY_NAME,
    DEFAULT_BINARY_PATH,
    DEFAULT_CHECK_TIMEOUT,
    REQUIRED_MAJOR_VERSION,
    VERSION_FLAG,
)
from copilot_settings.errors import BinaryCheckError, CheckTimeoutError, ExecutionError, SpawnError
from copilot_settings.version import VersionResult, parse_version

logger = logging.getLogger(__name__)

_READ_SIZE = 4096
_REAP_TIMEOUT = 2.0


class StreamLike(Protocol):
    async def read(self, n: int = -1) -> bytes: ...


class ProcessLike(Protocol):
    """The slice of asyncio.subprocess.Process the validator relies on."""

    pid: int | None
    stdout: StreamLike | None
    returncode: int | None

    async def wait(self) -> int: ...

    def kill(self) -> None: ...


Spawner = Callable[[str, list[str]], Awaitable[ProcessLike]]


async def spawn_process(executable: str, args: list[str]) -> ProcessLike:
    """Start ``executable`` with stdout piped and no stdin.

    On POSIX the process leads its own session, so wrapper scripts and the
    children they fork can be killed as one group.
    """
    return await asyncio.create_subprocess_exec(
        executable,
        *args,
        start_new_session=os.name == "posix",
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.DEVNULL,
    )


def resolve_binary(path: str) -> str:
    """Map the ``"default"`` sentinel (or a blank path) to the runtime found on PATH."""
    path = path.strip()
    if not path or path == DEFAULT_BINARY_PATH:
        return shutil.which(DEFAULT_BINARY_NAME) or DEFAULT_BINARY_NAME
    return path


def format_result(result: VersionResult, required: int = REQUIRED_MAJOR_VERSION) -> str:
    if result.compatible:
        return f"Binary path is valid and the version {result.raw} is compatible."
    return (
        f"Binary path is valid, but the version {result.raw} is not compatible. "
        f"Please use v{required} or later."
    )


def format_error(exc: BinaryCheckError) -> str:
    return f"Error while testing the binary path: {exc}"


class BinaryValidator:
    """Checks that a binary runs and reports a recent enough version."""

    def __init__(
        self,
        timeout: float = DEFAULT_CHECK_TIMEOUT,
        required: int = REQUIRED_MAJOR_VERSION,
        spawn: Spawner = spawn_process,
    ) -> None:
        self.timeout = timeout
        self.required = required
        self._spawn = spawn

    async def check(self, path: str) -> VersionResult:
        """Run ``path --version`` and classify the output.

        Raises SpawnError, ExecutionError or CheckTimeoutError. Unparseable
        output is not an error: it comes back with ``compatible=False``.
        """
        executable = resolve_binary(path)
        logger.debug("checking %s %s", executable, VERSION_FLAG)
        try:
            proc = await self._spawn(executable, [VERSION_FLAG])
        except (OSError, ValueError) as exc:
            # ValueError: the path holds a NUL byte
            raise SpawnError(executable, exc) from exc

        finished = False
        try:
            output, exit_code = await asyncio.wait_for(self._collect(proc), self.timeout)
            finished = True
        except asyncio.TimeoutError:
            raise CheckTimeoutError(executable, self.timeout) from None
        except OSError as exc:
            raise SpawnError(executable, exc) from exc
        finally:
            if not finished:
                await self._reap(proc)

        if exit_code != 0:
            raise ExecutionError(executable, exit_code)
        result = parse_version(output, self.required)
        logger.debug("%s reported %r (compatible=%s)", executable, result.raw, result.compatible)
        return result

    async def describe(self, path: str) -> str:
        """Check ``path`` and turn every outcome into one user-facing message."""
        try:
            result = await self.check(path)
        except BinaryCheckError as exc:
            logger.info("binary check failed: %s", exc)
            return format_error(exc)
        return format_result(result, self.required)

    @staticmethod
    async def _collect(proc: ProcessLike) -> tuple[str, int]:
        """Read stdout to EOF, then wait for the exit code."""
        chunks: list[bytes] = []
        if proc.stdout is not None:
            while True:
                data = await proc.stdout.read(_READ_SIZE)
                if not data:
                    break
                chunks.append(data)
        exit_code = await proc.wait()
        return b"".join(chunks).decode("utf-8", errors="replace"), exit_code

    @staticmethod
    async def _reap(proc: ProcessLike) -> None:
        """Kill an unfinished check and wait, at most _REAP_TIMEOUT, for it to exit.

        A wrapper that forks without exec leaves grandchildren holding stdout,
        and wait() does not return until that pipe closes. Killing the whole
        process group closes it.
        """
        if proc.pid is not None and os.name == "posix":
            with contextlib.suppress(ProcessLookupError, PermissionError):
                os.killpg(proc.pid, signal.SIGKILL)
        elif proc.returncode is None:
            with contextlib.suppress(ProcessLookupError):
                proc.kill()
        try:
            await asyncio.wait_for(proc.wait(), _REAP_TIMEOUT)
        except asyncio.TimeoutError:
            logger.warning("process %s did not exit after kill", proc.pid)
