"""Fetch packages into a project's node_modules and remove them again."""

from .invoker import InvocationResult, PackageManagerInvoker, SubprocessInvoker, is_package_manager_available
from .npm_args import FetchOptions, build_install_args, build_uninstall_args
from .orchestrator import fetch, uninstall
from .output_parsers import OutputDialect, PlusMarkerDialect, extract_installed_specifier, get_dialect

__all__ = [
    "fetch",
    "uninstall",
    "is_package_manager_available",
    "FetchOptions",
    "build_install_args",
    "build_uninstall_args",
    "InvocationResult",
    "PackageManagerInvoker",
    "SubprocessInvoker",
    "OutputDialect",
    "PlusMarkerDialect",
    "extract_installed_specifier",
    "get_dialect",
]
