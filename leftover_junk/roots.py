"""
Mirrored software roots.

The software namespace is replicated under up to four prefixes: machine and user
scope, each with a native and a secondary-bitness (Wow6432Node) copy. A path under
one root corresponds to the path with the same suffix under every other root.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .store import SEPARATOR, join_path


@dataclass(frozen=True)
class MirroredRoot:
    """One structurally-equivalent top-level software prefix."""

    name: str
    prefix: str
    user_scope: bool
    secondary_bitness: bool

    @property
    def specificity(self) -> int:
        """Higher for roots whose prefix can extend another root's prefix."""
        return (2 if self.secondary_bitness else 0) + (1 if self.user_scope else 0)

    def contains(self, path: str) -> bool:
        folded = path.rstrip(SEPARATOR).casefold()
        prefix = self.prefix.casefold()
        return folded == prefix or folded.startswith(prefix + SEPARATOR)


MACHINE_ROOT = MirroredRoot("machine", r"HKEY_LOCAL_MACHINE\SOFTWARE", user_scope=False, secondary_bitness=False)
USER_ROOT = MirroredRoot("user", r"HKEY_CURRENT_USER\SOFTWARE", user_scope=True, secondary_bitness=False)
MACHINE_WOW_ROOT = MirroredRoot(
    "machine-wow64", r"HKEY_LOCAL_MACHINE\SOFTWARE\Wow6432Node", user_scope=False, secondary_bitness=True
)
USER_WOW_ROOT = MirroredRoot(
    "user-wow64", r"HKEY_CURRENT_USER\SOFTWARE\Wow6432Node", user_scope=True, secondary_bitness=True
)


def default_roots(include_secondary_bitness: bool) -> tuple[MirroredRoot, ...]:
    """Scan order used by the namespace scanner."""
    if include_secondary_bitness:
        return (MACHINE_ROOT, USER_ROOT, MACHINE_WOW_ROOT, USER_WOW_ROOT)
    return (MACHINE_ROOT, USER_ROOT)


def match_order(roots: Sequence[MirroredRoot]) -> list[MirroredRoot]:
    """Most specific roots first, so a shorter prefix never shadows a longer one."""
    return sorted(roots, key=lambda root: root.specificity, reverse=True)


def find_root(path: str, roots: Sequence[MirroredRoot]) -> MirroredRoot | None:
    for root in match_order(roots):
        if root.contains(path):
            return root
    return None


def strip_root(path: str, root: MirroredRoot) -> str:
    """Root-relative suffix of path ('' for the root itself)."""
    if not root.contains(path):
        raise ValueError(f"{path} is not under {root.prefix}")
    return path.rstrip(SEPARATOR)[len(root.prefix) :].strip(SEPARATOR)


def rebase(suffix: str, root: MirroredRoot) -> str:
    return join_path(root.prefix, suffix)
