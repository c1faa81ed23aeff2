# python
"""
devshell/handlers/ls.py
Handler for `ls [path]` listing a folder as `d <name>` / `- <name>` lines.
"""
from ..errors import PathNotFound
from ..resolver import join_path, resolve_folder, tree_path


def format_entry(node) -> str:
    return f"{'d' if node.is_folder else '-'} {node.name}"


def run(session, terminal, args):
    target = join_path(session.cwd, args[0] if args else None)
    rel = tree_path(target)
    items = resolve_folder(session.tree, rel) if rel is not None else None
    if items is None:
        raise PathNotFound("directory", target)
    for node in items:
        terminal.writeln(format_entry(node))
