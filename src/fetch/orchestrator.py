"""Fetch and uninstall packages through npm.

``fetch`` first looks for an installation that already satisfies the target
and only runs ``npm install`` on a miss. After installing, the concrete
``name@version`` npm reports is resolved again and validated, so the caller
always receives the directory of a verified installation.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any, Iterable, List, Mapping, Optional, Union

from common.errors import (
    DepfetchError,
    FetchError,
    InvalidSpecifierError,
    MissingArgumentError,
    SubprocessFailureError,
)
from common.logging_utils import extra_context, is_debug_enabled, safe_path
from constants import Constants
from resolution import resolve
from versioning.constraints import ensure_satisfies
from versioning.parser import parse_specifier, require_name, split_installed_specifier

from .invoker import InvocationResult, PackageManagerInvoker, SubprocessInvoker, is_package_manager_available
from .npm_args import FetchOptions, build_install_args, build_uninstall_args
from .output_parsers import OutputDialect, extract_installed_specifier

logger = logging.getLogger(__name__)

OptionsArg = Union[FetchOptions, Mapping[str, Any], None]


def _invoker_command(invoker: PackageManagerInvoker) -> str:
    return getattr(invoker, "command", None) or Constants.NPM_COMMAND


async def _run_package_manager(invoker: PackageManagerInvoker, args: List[str], cwd: str) -> InvocationResult:
    result = await invoker.invoke(args, cwd)
    if result.exit_code != 0:
        raise SubprocessFailureError(
            [_invoker_command(invoker)] + args, result.exit_code, result.stdout, result.stderr
        )
    return result


def _requested_constraint(target: str, installed_name: str, dest: str) -> Optional[str]:
    """Return the range the caller wrote for ``installed_name``, if any."""
    try:
        requested = parse_specifier(target, dest)
    except InvalidSpecifierError:
        return None
    if not requested.explicit or not requested.is_registry or requested.name != installed_name:
        return None
    return requested.raw_spec


async def path_to_installed_package(
    spec: str,
    dest: str,
    search_paths: Optional[Iterable[str]] = None,
    constraint: Optional[str] = None,
) -> str:
    """Return the installation path of ``spec`` if a satisfying version is installed.

    Raises:
        InvalidSpecifierError: ``spec`` carries no package name.
        PackageNotFoundError: The package is not installed.
        VersionMismatchError: The installed version does not satisfy ``spec``
            (or the extra ``constraint``).
    """
    parsed = parse_specifier(spec, dest)
    name = require_name(parsed)
    resolved = await resolve(name, dest, search_paths)
    version = str(resolved.version or "")
    ensure_satisfies(name, version, parsed.raw_spec)
    if constraint:
        ensure_satisfies(name, version, constraint)
    return resolved.installed_path


async def install_package(
    target: str,
    dest: str,
    opts: FetchOptions,
    invoker: Optional[PackageManagerInvoker] = None,
    search_paths: Optional[Iterable[str]] = None,
    dialect: Optional[OutputDialect] = None,
) -> str:
    """Install ``target`` into ``dest`` and return the verified installation path."""
    invoker = invoker or SubprocessInvoker()
    await is_package_manager_available(_invoker_command(invoker))

    # Keep npm from installing into a node_modules of an ancestor
    await asyncio.to_thread(os.makedirs, os.path.join(dest, Constants.NODE_MODULES_DIR), exist_ok=True)

    args = build_install_args(target, opts)
    logger.debug("fetch: Installing %s to %s", target, safe_path(dest))
    result = await _run_package_manager(invoker, args, dest)

    installed = extract_installed_specifier(result.stdout, dialect)
    installed_name, _ = split_installed_specifier(installed)
    if is_debug_enabled(logger):
        logger.debug(
            "Installer reported package",
            extra=extra_context(
                event="install",
                component="orchestrator",
                action="parse_output",
                outcome="success",
                package=installed,
            ),
        )

    constraint = _requested_constraint(target, installed_name, dest)
    return await path_to_installed_package(installed, dest, search_paths, constraint)


async def fetch(
    target: str,
    dest: str,
    opts: OptionsArg = None,
    *,
    invoker: Optional[PackageManagerInvoker] = None,
    search_paths: Optional[Iterable[str]] = None,
    dialect: Optional[OutputDialect] = None,
) -> str:
    """Install a module from npm, a git url or the local file system.

    Args:
        target: Anything supported by ``npm install``.
        dest: Location where to install the package.
        opts: ``save`` / ``save_exact`` persistence options.
        invoker: Package-manager runner; the real npm when None.
        search_paths: Auxiliary stores; ``NODE_PATH`` when None.
        dialect: Install-output dialect; the configured one when None.

    Returns:
        Absolute path to the installed package.

    Raises:
        FetchError: Any failure, with ``kind`` naming the original error.
    """
    try:
        if not target or not dest:
            raise MissingArgumentError("Need to supply a target and destination")

        dest = os.path.abspath(dest)
        await asyncio.to_thread(os.makedirs, dest, exist_ok=True)

        try:
            return await path_to_installed_package(target, dest, search_paths)
        except DepfetchError as e:
            logger.debug("fetch: %s not usable from existing installation: %s", target, e)

        return await install_package(
            target, dest, FetchOptions.coerce(opts), invoker, search_paths, dialect
        )
    except FetchError:
        raise
    except Exception as e:  # pylint: disable=broad-exception-caught
        raise FetchError.wrap(e) from e


async def uninstall(
    target: str,
    dest: str,
    opts: OptionsArg = None,
    *,
    invoker: Optional[PackageManagerInvoker] = None,
) -> None:
    """Uninstall the package ``target`` from ``dest``.

    With ``save`` the dependency is also removed from the project manifest.

    Raises:
        FetchError: Any failure, with ``kind`` naming the original error.
    """
    try:
        if not target or not dest:
            raise MissingArgumentError("Need to supply a target and destination")

        invoker = invoker or SubprocessInvoker()
        await is_package_manager_available(_invoker_command(invoker))

        args = build_uninstall_args(target, opts)
        logger.debug("fetch: Uninstalling %s from %s", target, safe_path(dest))
        await _run_package_manager(invoker, args, dest)
    except FetchError:
        raise
    except Exception as e:  # pylint: disable=broad-exception-caught
        raise FetchError.wrap(e) from e
