"""Construction of the ordered dependency-store chain.

The chain is an immutable tuple of ``node_modules`` directories: the one
under the start directory, then one per ancestor up to the filesystem root,
then the auxiliary stores from ``NODE_PATH`` and configuration. Earlier
entries win.
"""

from __future__ import annotations

import os
from typing import Iterable, List, Mapping, Optional, Tuple

from constants import Constants


def read_search_paths(environ: Optional[Mapping[str, str]] = None) -> List[str]:
    """Split ``NODE_PATH`` into store directories, dropping empty segments."""
    env = os.environ if environ is None else environ
    raw = env.get(Constants.NODE_PATH_ENV, "") or ""
    paths = [p.strip() for p in raw.split(os.pathsep)]
    return [p for p in paths if p] + [p for p in Constants.EXTRA_SEARCH_PATHS if p]


def _ancestor_stores(start_dir: str) -> List[str]:
    stores: List[str] = []
    current = os.path.abspath(start_dir)
    while True:
        if os.path.basename(current) == Constants.NODE_MODULES_DIR:
            stores.append(current)
        else:
            stores.append(os.path.join(current, Constants.NODE_MODULES_DIR))
        parent = os.path.dirname(current)
        if parent == current:
            break
        current = parent
    return stores


def build_store_chain(start_dir: str, search_paths: Optional[Iterable[str]] = None) -> Tuple[str, ...]:
    """Return the ordered, de-duplicated stores to search for ``start_dir``.

    Args:
        start_dir: Directory resolution starts from.
        search_paths: Auxiliary stores; read from the environment when None.
    """
    extra = read_search_paths() if search_paths is None else list(search_paths)
    seen = set()
    chain: List[str] = []
    for store in _ancestor_stores(start_dir) + [os.path.abspath(p) for p in extra if p]:
        key = os.path.normcase(store)
        if key in seen:
            continue
        seen.add(key)
        chain.append(store)
    return tuple(chain)
