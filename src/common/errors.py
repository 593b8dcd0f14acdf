"""Error taxonomy for fetch/uninstall operations.

Internal steps raise the specific ``DepfetchError`` subclasses below. The
public operations convert whatever escapes into a single ``FetchError`` whose
``kind`` names the original failure and whose ``__cause__`` is preserved.
"""
from __future__ import annotations

from typing import Optional, Sequence


class DepfetchError(Exception):
    """Base class for all internal failures."""

    kind = "error"


class MissingArgumentError(DepfetchError):
    """A required target/name or destination was not supplied."""

    kind = "missing_argument"


class PackageManagerNotFoundError(DepfetchError):
    """The package manager executable is not on PATH."""

    kind = "package_manager_not_found"


class PackageNotFoundError(DepfetchError):
    """No dependency store in the resolution chain holds the package."""

    kind = "package_not_found"

    def __init__(self, name: str, searched: Sequence[str] = ()):
        self.name = name
        self.searched = tuple(searched)
        msg = f"Cannot find installed package {name}"
        if self.searched:
            msg += " (searched: " + ", ".join(self.searched) + ")"
        super().__init__(msg)


class InvalidSpecifierError(DepfetchError):
    """A package name could not be derived where one is required."""

    kind = "invalid_specifier"


class VersionMismatchError(DepfetchError):
    """The installed version does not satisfy the requested constraint."""

    kind = "version_mismatch"

    def __init__(self, name: str, version: str, constraint: str):
        self.name = name
        self.version = version
        self.constraint = constraint
        super().__init__(
            f"Installed package {name}@{version} does not satisfy {name}@{constraint}"
        )


class UnparseableOutputError(DepfetchError):
    """Install output did not reveal which package was installed."""

    kind = "unparseable_output"

    def __init__(self, output: str):
        self.output = output
        super().__init__(f"Could not determine package name from output:\n{output}")


class SubprocessFailureError(DepfetchError):
    """The package manager exited with a non-zero status."""

    kind = "subprocess_failure"

    def __init__(self, args: Sequence[str], exit_code: int, stdout: str = "", stderr: str = ""):
        self.command = list(args)
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        detail = (stderr or stdout or "").strip()
        msg = f"{' '.join(self.command)} failed with exit code {exit_code}"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class FetchError(Exception):
    """Uniform error surfaced by the public fetch/uninstall operations."""

    def __init__(self, message: str, kind: str = "unexpected", cause: Optional[BaseException] = None):
        super().__init__(message)
        self.kind = kind
        self.cause = cause

    @classmethod
    def wrap(cls, exc: BaseException) -> "FetchError":
        """Return ``exc`` as a FetchError, keeping an existing one untouched."""
        if isinstance(exc, FetchError):
            return exc
        if isinstance(exc, DepfetchError):
            kind = exc.kind
        elif isinstance(exc, OSError):
            kind = "io"
        else:
            kind = "unexpected"
        return cls(str(exc) or exc.__class__.__name__, kind=kind, cause=exc)
