"""Specifier parsing for npm-installable targets.

Turns anything ``npm install`` accepts (registry names with optional range or
tag, scoped names, git URLs and hosted shortcuts, tarball URLs, local paths)
into a ParsedSpecifier. Only registry-style specifiers carry a name; for the
others the name is known once the installer has run.
"""

import os
import re
from typing import Optional, Tuple
from urllib.parse import urlparse

from common.errors import InvalidSpecifierError
from constants import Constants
from .constraints import is_exact_version, is_valid_range
from .models import ParsedSpecifier, SpecType

_NAME_RE = re.compile(r'^(?:@[A-Za-z0-9~\-][\w.\-~]*/)?[A-Za-z0-9~\-][\w.\-~]*$')
_TAG_RE = re.compile(r'^[A-Za-z][\w.\-]*$')
_HOSTED_PREFIXES = ("github:", "gitlab:", "bitbucket:", "gist:")
_GIT_HOSTS = ("github.com", "gitlab.com", "bitbucket.org", "gist.github.com")
_SHORTCUT_RE = re.compile(r'^[\w.\-]+/[\w.\-]+(?:#.*)?$')
_SCP_RE = re.compile(r'^git@[^:/\s]+:')
_WINDOWS_PATH_RE = re.compile(r'^[A-Za-z]:[\\/]')
_TARBALL_SUFFIXES = (".tgz", ".tar.gz", ".tar")


def is_valid_name(name: str) -> bool:
    """Return True for names npm would accept (legacy mixed-case included)."""
    if not name or len(name) > 214:
        return False
    return bool(_NAME_RE.match(name))


def _is_file_spec(spec: str) -> bool:
    if spec.startswith("file:"):
        return True
    if spec.startswith(("./", "../", "/", "~/", ".\\", "..\\")) or spec in (".", ".."):
        return True
    return bool(_WINDOWS_PATH_RE.match(spec))


def _is_git_spec(spec: str) -> bool:
    if spec.startswith(("git+", "git://")) or spec.startswith(_HOSTED_PREFIXES):
        return True
    if _SCP_RE.match(spec):
        return True
    if spec.startswith(("http://", "https://")):
        parsed = urlparse(spec)
        host = (parsed.hostname or "").lower()
        return host in _GIT_HOSTS or parsed.path.endswith(".git")
    return bool(_SHORTCUT_RE.match(spec))


def _is_url_spec(spec: str) -> bool:
    return spec.startswith(("http://", "https://"))


def _file_fetch_spec(spec: str, context_dir: Optional[str]) -> str:
    path = spec
    if path.startswith("file://"):
        path = urlparse(path).path
    elif path.startswith("file:"):
        path = path[len("file:"):]
    path = os.path.expanduser(path)
    if not os.path.isabs(path):
        path = os.path.join(context_dir or os.getcwd(), path)
    return os.path.normpath(path)


def _classify_non_registry(spec: str, context_dir: Optional[str]) -> Optional[Tuple[SpecType, str]]:
    """Classify git/url/path specs; None means the spec is registry-style."""
    if _is_file_spec(spec):
        fetch_spec = _file_fetch_spec(spec, context_dir)
        if fetch_spec.endswith(_TARBALL_SUFFIXES):
            return SpecType.FILE, fetch_spec
        return SpecType.DIRECTORY, fetch_spec
    if _is_git_spec(spec):
        return SpecType.GIT, spec
    if _is_url_spec(spec):
        return SpecType.REMOTE, spec
    return None


def _split_name(spec: str) -> Tuple[str, str]:
    """Split ``name@rest`` honoring the leading ``@`` of scoped names."""
    start = 1 if spec.startswith("@") else 0
    at = spec.find("@", start)
    if at == -1:
        return spec, ""
    return spec[:at], spec[at + 1:]


def _classify_registry_spec(name: str, raw_spec: str) -> SpecType:
    if is_exact_version(raw_spec):
        return SpecType.VERSION
    if is_valid_range(raw_spec):
        return SpecType.RANGE
    if _TAG_RE.match(raw_spec):
        return SpecType.TAG
    raise InvalidSpecifierError(f"Invalid version, range or tag '{raw_spec}' for package {name}")


def parse_specifier(spec: str, context_dir: Optional[str] = None) -> ParsedSpecifier:
    """Parse ``spec`` into a ParsedSpecifier.

    Args:
        spec: Anything ``npm install`` accepts.
        context_dir: Directory relative paths are resolved against.

    Returns:
        ParsedSpecifier; ``name`` is None for git/url/path specifiers.

    Raises:
        InvalidSpecifierError: Empty spec, bad package name or bad range.
    """
    raw = (spec or "").strip()
    if not raw:
        raise InvalidSpecifierError("Package specifier must not be empty")

    if not raw.startswith("@"):
        unnamed = _classify_non_registry(raw, context_dir)
        if unnamed is not None:
            spec_type, fetch_spec = unnamed
            return ParsedSpecifier(raw=raw, name=None, raw_spec=raw, spec_type=spec_type, fetch_spec=fetch_spec)

    name, rest = _split_name(raw)
    if not is_valid_name(name):
        raise InvalidSpecifierError(f"Invalid package name '{name}' in specifier {raw}")
    rest = rest.strip()

    if rest.startswith("npm:"):
        return ParsedSpecifier(raw=raw, name=name, raw_spec=rest, spec_type=SpecType.ALIAS, fetch_spec=rest[len("npm:"):])

    if rest:
        unnamed = _classify_non_registry(rest, context_dir)
        if unnamed is not None:
            spec_type, fetch_spec = unnamed
            return ParsedSpecifier(raw=raw, name=name, raw_spec=rest, spec_type=spec_type, fetch_spec=fetch_spec)

    raw_spec = rest or Constants.DEFAULT_RANGE
    spec_type = _classify_registry_spec(name, raw_spec)
    return ParsedSpecifier(
        raw=raw, name=name, raw_spec=raw_spec, spec_type=spec_type, fetch_spec=raw_spec, explicit=bool(rest)
    )


def require_name(parsed: ParsedSpecifier) -> str:
    """Return the specifier's name or raise InvalidSpecifierError."""
    if not parsed.name:
        raise InvalidSpecifierError(f"Cannot determine package name from spec {parsed.raw}")
    return parsed.name


def split_installed_specifier(spec: str) -> Tuple[str, str]:
    """Split a concrete ``name@version`` as reported by the installer."""
    parsed = parse_specifier(spec)
    name = require_name(parsed)
    if parsed.spec_type != SpecType.VERSION:
        raise InvalidSpecifierError(f"Expected name@version, got {spec}")
    return name, parsed.raw_spec
