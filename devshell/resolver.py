"""Path lookups over a node tree mounted at the project home."""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .nodes import Folder, Node

HOME_PATH_PARTS: Tuple[str, ...] = ("home", "project")
HOME_PATH = "/" + "/".join(HOME_PATH_PARTS)


def split_path(path: str) -> List[str]:
    """Split on '/' and drop empty segments, so '//' and a trailing '/' are harmless."""
    return [part for part in (path or "").split("/") if part]


def join_path(cwd: str, target: Optional[str]) -> str:
    """Join a shell argument onto the working directory without normalizing it."""
    return f"{cwd}/{target}" if target else cwd


def tree_path(path: str, mount: Sequence[str] = HOME_PATH_PARTS) -> Optional[str]:
    """
    Map an absolute shell path onto the tree by stripping the mount segments.
    Returns None when ``path`` lies outside the mount.
    """
    parts = split_path(path)
    if tuple(parts[: len(mount)]) != tuple(mount):
        return None
    return "/" + "/".join(parts[len(mount) :])


def resolve_folder(tree: Sequence[Node], path: str) -> Optional[Tuple[Node, ...]]:
    """
    Walk ``path`` from the tree root and return the children of the folder it
    names. The root itself ('/') resolves to the tree's top-level sequence.
    """
    items: Tuple[Node, ...] = tuple(tree)
    for part in split_path(path):
        folder = next(
            (n for n in items if n.name == part and isinstance(n, Folder)), None
        )
        if folder is None:
            return None
        items = folder.children
    return items


def resolve_node(tree: Sequence[Node], path: str) -> Optional[Node]:
    """Resolve the containing folder, then look up the final segment in it."""
    parts = split_path(path)
    if not parts:
        return None
    name = parts.pop()
    items = resolve_folder(tree, "/" + "/".join(parts))
    if items is None:
        return None
    return next((n for n in items if n.name == name), None)
