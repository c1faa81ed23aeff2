# python
"""
devshell/workspace.py
The top-level owner of the project tree. Wires the tree view and the editor
to the node store; shell sessions only ever read ``workspace.tree``.
"""
import logging
from dataclasses import replace
from typing import Callable, Optional, Protocol, Sequence

from .nodes import File, Node, Tree, filter_tree, make_tree, replace_file_content
from .seed import seed_tree

logger = logging.getLogger(__name__)

LANGUAGE_BY_EXTENSION = {
    "js": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "html": "html",
    "css": "css",
    "json": "json",
}


def language_for(file_name: str) -> str:
    """Editor language hint derived from the file extension."""
    extension = file_name.rsplit(".", 1)[-1].lower() if "." in file_name else ""
    return LANGUAGE_BY_EXTENSION.get(extension, "plaintext")


class Editor(Protocol):
    def open(self, name: str, content: str, language: str) -> None: ...


class TreeView(Protocol):
    def show(self, tree: Tree, on_select: Callable[[Node], None]) -> None: ...


class Workspace:
    def __init__(self, tree: Optional[Sequence[Node]] = None, chat=None):
        self.tree: Tree = make_tree(tree) if tree is not None else seed_tree()
        self.selected_file: Optional[File] = None
        self.chat = chat
        self._editors = []
        self._tree_views = []
        self.search_term = ""

    def attach_editor(self, editor: Editor) -> None:
        self._editors.append(editor)
        if self.selected_file is not None:
            self._open_in(editor, self.selected_file)

    def attach_tree_view(self, view: TreeView) -> None:
        self._tree_views.append(view)
        view.show(self.visible_tree(), self.select)

    def select(self, node: Node) -> None:
        """
        Selection callback for tree views. Folders are expanded by the view
        itself, so only files change the selection.
        """
        if not isinstance(node, File):
            return
        self.selected_file = node
        logger.debug("selected %s", node.name)
        for editor in self._editors:
            self._open_in(editor, node)

    def on_content_change(self, new_content: str) -> None:
        """
        Editor callback. Replaces the tree with a copy carrying the new content;
        a no-op when nothing is selected.
        """
        if self.selected_file is None:
            return
        name = self.selected_file.name
        self.tree = replace_file_content(self.tree, name, new_content)
        self.selected_file = replace(self.selected_file, content=new_content)
        logger.debug("updated content of %s (%d chars)", name, len(new_content))
        self._refresh_views()

    def visible_tree(self) -> Tree:
        """The tree as tree views should render it, narrowed by the search term."""
        if not self.search_term:
            return self.tree
        return filter_tree(self.tree, self.search_term)

    def search(self, term: str) -> Tree:
        """Search-box callback. An empty term shows the whole tree again."""
        self.search_term = term
        self._refresh_views()
        return self.visible_tree()

    def _refresh_views(self) -> None:
        visible = self.visible_tree()
        for view in self._tree_views:
            view.show(visible, self.select)

    @staticmethod
    def _open_in(editor: Editor, file: File) -> None:
        editor.open(file.name, file.content, language_for(file.name))
