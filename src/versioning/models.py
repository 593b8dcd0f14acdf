"""Data models for package specifiers and installed packages."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class SpecType(Enum):
    """Kind of specifier, derived from its syntax."""
    TAG = "tag"
    VERSION = "version"
    RANGE = "range"
    GIT = "git"
    REMOTE = "remote"
    FILE = "file"
    DIRECTORY = "directory"
    ALIAS = "alias"


# Specifier kinds whose raw spec is a semver version or range.
REGISTRY_TYPES = (SpecType.VERSION, SpecType.RANGE)


@dataclass(frozen=True)
class ParsedSpecifier:
    """Normalized representation of a package specifier."""
    raw: str
    name: Optional[str]  # None when only the installer can tell (git, url, path)
    raw_spec: str
    spec_type: SpecType
    fetch_spec: Optional[str] = None
    explicit: bool = False  # False when raw_spec is the defaulted "*"

    @property
    def is_registry(self) -> bool:
        return self.spec_type in REGISTRY_TYPES


@dataclass(frozen=True)
class ResolvedPackage:
    """A package found in a dependency store."""
    installed_path: str  # directory holding package.json
    manifest: Dict[str, Any] = field(default_factory=dict)
    manifest_path: Optional[str] = None

    @property
    def name(self) -> Optional[str]:
        return self.manifest.get("name")

    @property
    def version(self) -> Optional[str]:
        return self.manifest.get("version")
