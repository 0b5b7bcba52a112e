"""Exception types raised by the settings store and the binary validator."""

from __future__ import annotations


class SettingsError(Exception):
    """Base class for every error raised by copilot_settings."""


class PersistenceError(SettingsError):
    """Reading or writing the persisted settings failed."""


class BinaryCheckError(SettingsError):
    """The external binary could not be validated."""


class SpawnError(BinaryCheckError):
    """The binary could not be launched (missing path, permissions, ...)."""

    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(f"could not run {path!r}: {cause}")
        self.path = path
        self.cause = cause


class ExecutionError(BinaryCheckError):
    """The binary ran but exited with a non-zero code."""

    def __init__(self, path: str, exit_code: int) -> None:
        super().__init__(f"{path!r} exited with code {exit_code}")
        self.path = path
        self.exit_code = exit_code


class CheckTimeoutError(BinaryCheckError):
    """The binary did not finish reporting its version in time."""

    def __init__(self, path: str, timeout: float) -> None:
        super().__init__(f"{path!r} did not report a version within {timeout:g}s")
        self.path = path
        self.timeout = timeout
