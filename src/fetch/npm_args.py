"""npm argument construction for install and uninstall."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Union

from constants import Constants, PersistenceFlags


@dataclass(frozen=True)
class FetchOptions:
    """Persistence options for fetch/uninstall."""

    save: bool = False
    save_exact: bool = False

    @classmethod
    def coerce(cls, opts: Union["FetchOptions", Mapping[str, Any], None]) -> "FetchOptions":
        """Accept a FetchOptions, a plain mapping or None."""
        if opts is None:
            return cls()
        if isinstance(opts, cls):
            return opts
        save_exact = opts.get("save_exact", opts.get("saveExact", False))
        return cls(save=bool(opts.get("save", False)), save_exact=bool(save_exact))


def persistence_flag(opts: Optional[FetchOptions] = None, allow_exact: bool = True) -> str:
    """Return the single persistence flag implied by ``opts``."""
    opts = opts or FetchOptions()
    if allow_exact and opts.save_exact:
        return PersistenceFlags.SAVE_EXACT.value
    if opts.save:
        return PersistenceFlags.SAVE.value
    return PersistenceFlags.NO_SAVE.value


def build_install_args(target: str, opts: Union[FetchOptions, Mapping[str, Any], None] = None) -> List[str]:
    """Build ``npm install`` arguments; ``save_exact`` wins over ``save``."""
    return [Constants.INSTALL_VERB, target, persistence_flag(FetchOptions.coerce(opts))]


def build_uninstall_args(name: str, opts: Union[FetchOptions, Mapping[str, Any], None] = None) -> List[str]:
    """Build ``npm uninstall`` arguments; only ``save`` is honored."""
    return [Constants.UNINSTALL_VERB, name, persistence_flag(FetchOptions.coerce(opts), allow_exact=False)]
