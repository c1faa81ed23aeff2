# python
"""
devshell/handlers/cat.py
Handler for `cat <file>` printing a file's content in a single write.
"""
from ..errors import PathNotFound
from ..nodes import File
from ..resolver import join_path, resolve_node, tree_path


def run(session, terminal, args):
    target = join_path(session.cwd, args[0] if args else None)
    rel = tree_path(target)
    node = resolve_node(session.tree, rel) if rel is not None else None
    if not isinstance(node, File):
        raise PathNotFound("file", target)
    terminal.writeln(node.content)
