"""Installed-package resolution across the dependency-store chain."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from typing import Any, Dict, Iterable, Optional

from common.errors import InvalidSpecifierError, PackageNotFoundError
from common.logging_utils import extra_context, is_debug_enabled, safe_path
from constants import Constants
from versioning.models import ResolvedPackage
from versioning.parser import is_valid_name

from .chain import build_store_chain

logger = logging.getLogger(__name__)


def _manifest_path(store: str, name: str) -> str:
    # "@scope/name" occupies node_modules/@scope/name
    return os.path.join(store, *name.split("/"), Constants.PACKAGE_JSON_FILE)


def _read_manifest(path: str) -> Optional[Dict[str, Any]]:
    """Return the parsed manifest at ``path`` or None if it is unusable."""
    if not os.path.isfile(path):
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Skipping unreadable manifest %s: %s", safe_path(path), e)
        return None
    if not isinstance(data, dict):
        logger.warning("Skipping manifest %s: not a JSON object", safe_path(path))
        return None
    return data


async def resolve(name: str, start_dir: str, search_paths: Optional[Iterable[str]] = None) -> ResolvedPackage:
    """Find the installed package ``name`` starting from ``start_dir``.

    Args:
        name: Exact package name, scoped names included.
        start_dir: Directory whose node_modules (and ancestors') are searched.
        search_paths: Auxiliary stores; ``NODE_PATH`` is read when None.

    Returns:
        ResolvedPackage for the first store holding ``name/package.json``.

    Raises:
        InvalidSpecifierError: ``name`` is not a valid package name.
        PackageNotFoundError: No store in the chain holds the package.
    """
    if not is_valid_name(name or ""):
        raise InvalidSpecifierError(f"Invalid package name '{name}'")

    chain = build_store_chain(start_dir, search_paths)
    for store in chain:
        path = _manifest_path(store, name)
        manifest = await asyncio.to_thread(_read_manifest, path)
        if manifest is None:
            continue
        installed_path = os.path.dirname(path)
        if is_debug_enabled(logger):
            logger.debug(
                "Resolved installed package",
                extra=extra_context(
                    event="resolve",
                    component="resolver",
                    action="lookup",
                    outcome="found",
                    package=name,
                    target=safe_path(installed_path),
                ),
            )
        return ResolvedPackage(installed_path=installed_path, manifest=manifest, manifest_path=path)

    if is_debug_enabled(logger):
        logger.debug(
            "Package not found in any store",
            extra=extra_context(
                event="resolve",
                component="resolver",
                action="lookup",
                outcome="not_found",
                package=name,
                count=len(chain),
            ),
        )
    raise PackageNotFoundError(name, chain)


async def find_installation_path(name: str, start_dir: str, search_paths: Optional[Iterable[str]] = None) -> str:
    """Return only the installation directory of ``name``."""
    resolved = await resolve(name, start_dir, search_paths)
    return resolved.installed_path
