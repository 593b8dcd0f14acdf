"""Locate installed packages in node_modules dependency stores."""

from .chain import build_store_chain, read_search_paths
from .resolver import find_installation_path, resolve

__all__ = [
    "build_store_chain",
    "read_search_paths",
    "resolve",
    "find_installation_path",
]
