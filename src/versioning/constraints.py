"""npm-style semver checks built on semantic_version."""

import re
from typing import Optional, Union

import semantic_version

from common.errors import VersionMismatchError
from constants import Constants


def _normalize_spec(spec_str: str) -> str:
    """Normalize npm range syntax (hyphen, x-ranges) into SimpleSpec-compatible form."""
    s = spec_str.strip()

    # Hyphen ranges: "1.2.3 - 1.4.5" => ">=1.2.3,<=1.4.5"
    m = re.match(r'^\s*([0-9A-Za-z\.\-\+]+)\s+-\s+([0-9A-Za-z\.\-\+]+)\s*$', s)
    if m:
        return f">={m.group(1)},<={m.group(2)}"

    s2 = s.replace('*', 'x').lower()
    m = re.match(r'^\s*(\d+)\.(\d+)\.x\s*$', s2)
    if m:
        major, minor = int(m.group(1)), int(m.group(2))
        return f">={major}.{minor}.0,<{major}.{minor + 1}.0"

    m = re.match(r'^\s*(\d+)(?:\.x)?\s*$', s2)
    if m:
        major = int(m.group(1))
        return f">={major}.0.0,<{major + 1}.0.0"

    return spec_str


def parse_version(version: str) -> Optional[semantic_version.Version]:
    """Parse a concrete version, tolerating a leading ``v`` or ``=``."""
    if not version:
        return None
    text = version.strip().lstrip("=vV").strip()
    try:
        return semantic_version.Version(text)
    except ValueError:
        return None


def parse_range(constraint: str) -> Optional[Union[semantic_version.NpmSpec, semantic_version.SimpleSpec]]:
    """Parse an npm range, falling back to a normalized SimpleSpec."""
    text = (constraint or "").strip() or Constants.DEFAULT_RANGE
    try:
        return semantic_version.NpmSpec(text)
    except ValueError:
        pass
    try:
        return semantic_version.SimpleSpec(_normalize_spec(text))
    except ValueError:
        return None


def is_exact_version(spec: str) -> bool:
    return parse_version(spec) is not None


def is_valid_range(spec: str) -> bool:
    return parse_range(spec) is not None


def satisfies(version: str, constraint: Optional[str]) -> bool:
    """Return True when ``version`` satisfies the npm range ``constraint``.

    Unparsable versions and non-semver constraints (dist-tags, URLs, paths)
    never satisfy, mirroring ``semver.satisfies``.
    """
    ver = parse_version(version)
    if ver is None:
        return False
    spec = parse_range(constraint or Constants.DEFAULT_RANGE)
    if spec is None:
        return False
    if isinstance(spec, semantic_version.NpmSpec):
        return spec.match(ver)
    if ver.prerelease:
        return False
    return ver in spec


def ensure_satisfies(name: str, version: str, constraint: Optional[str]) -> None:
    """Raise VersionMismatchError unless ``version`` satisfies ``constraint``."""
    if not satisfies(version, constraint):
        raise VersionMismatchError(name, version, constraint or Constants.DEFAULT_RANGE)
