# python
"""
devshell/handlers/cd.py
Handler for `cd <path>`. Only a successful change touches ``session.cwd``.
"""
from ..errors import PathNotFound
from ..resolver import (
    HOME_PATH,
    HOME_PATH_PARTS,
    join_path,
    resolve_folder,
    split_path,
    tree_path,
)


def run(session, terminal, args):
    if not args:
        session.cwd = HOME_PATH
        return
    dest = args[0]
    if dest == "..":
        parts = split_path(session.cwd)
        # never pop above the project home
        if len(parts) > len(HOME_PATH_PARTS):
            parts.pop()
            session.cwd = "/" + "/".join(parts)
        return
    target = join_path(session.cwd, dest)
    rel = tree_path(target)
    if rel is None or resolve_folder(session.tree, rel) is None:
        raise PathNotFound("directory", target)
    session.cwd = "/" + "/".join(split_path(target))
