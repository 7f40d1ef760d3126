"""Name derivation helpers for branches, directories and tmux sessions."""

import re
from typing import Iterable

# Characters that cannot appear in a single directory name on common filesystems
_UNSAFE_PATH_CHARS = re.compile(r'[/\\:*?"<>|]')
_UNSAFE_SESSION_CHARS = re.compile(r'[^a-zA-Z0-9_-]')


def next_available_name(base: str, taken: Iterable[str]) -> str:
    """Return `base`, or the first `base-N` (N = 1, 2, ...) not in `taken`.

    A trailing numeric suffix already present on `base` is not parsed:
    `feature-1` resolves to `feature-1-1`, not `feature-2`.

    Args:
        base: Desired name
        taken: Names already in use; order is irrelevant

    Returns:
        A name that is not a member of `taken`
    """
    taken_set = set(taken)
    if base not in taken_set:
        return base

    counter = 1
    while f"{base}-{counter}" in taken_set:
        counter += 1
    return f"{base}-{counter}"


def sanitize_branch_name(branch: str) -> str:
    """Filesystem-safe directory name for a branch (`feature/x` -> `feature-x`)."""
    return _UNSAFE_PATH_CHARS.sub("-", branch)


def sanitize_session_name(name: str) -> str:
    """tmux session name: anything outside [a-zA-Z0-9_-] becomes `-`."""
    return _UNSAFE_SESSION_CHARS.sub("-", name)


def with_prefix(name: str, prefix: str) -> str:
    """Prepend `prefix` unless `name` already carries it."""
    if not prefix or name.startswith(prefix):
        return name
    return f"{prefix}{name}"


def ref_namespace_names(branches: Iterable[str]) -> set:
    """Branch names plus every parent namespace they occupy.

    git cannot create `a` while `a/b` exists, so `a` counts as taken.
    """
    names = set()
    for branch in branches:
        names.add(branch)
        parts = branch.split("/")
        for i in range(1, len(parts)):
            names.add("/".join(parts[:i]))
    return names
