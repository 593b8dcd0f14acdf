"""Install-output dialects.

Each dialect knows how one family of installer versions reports the package
it just added. Dialects are looked up by name, like the per-manager wrappers
in run mode, so a new output format only needs a new entry here.
"""

from __future__ import annotations

from typing import Dict, Optional

from common.errors import UnparseableOutputError
from constants import Constants


class OutputDialect:
    """Base class for install-output parsers."""

    name = ""

    def match(self, line: str) -> Optional[str]:
        """Return the installed specifier carried by ``line``, if any."""
        raise NotImplementedError

    def extract_installed_specifier(self, output: str) -> str:
        """Return the first installed specifier found in ``output``.

        Raises:
            UnparseableOutputError: No line carries an installed specifier.
        """
        for line in (output or "").splitlines():
            spec = self.match(line)
            if spec:
                return spec
        raise UnparseableOutputError(output or "")


class PlusMarkerDialect(OutputDialect):
    """npm <= 6 style: ``+ name@version`` for each added top-level package."""

    name = "plus"

    def __init__(self, marker: str = Constants.INSTALL_MARKER):
        self.marker = marker

    def match(self, line: str) -> Optional[str]:
        line = line.rstrip("\r")
        if line.startswith(self.marker):
            return line[len(self.marker):].strip() or None
        return None


_DIALECTS: Dict[str, type] = {
    PlusMarkerDialect.name: PlusMarkerDialect,
}

SUPPORTED_DIALECTS = sorted(_DIALECTS)


def get_dialect(name: Optional[str] = None) -> OutputDialect:
    """Return a dialect instance by name (default from Constants)."""
    key = (name or Constants.OUTPUT_DIALECT).lower()
    dialect_cls = _DIALECTS.get(key)
    if dialect_cls is None:
        raise ValueError(
            f"Unsupported output dialect '{name}'. Supported: {', '.join(SUPPORTED_DIALECTS)}"
        )
    return dialect_cls()


def extract_installed_specifier(output: str, dialect: Optional[OutputDialect] = None) -> str:
    """Extract ``name@version`` of the package the installer added."""
    return (dialect or get_dialect()).extract_installed_specifier(output)
