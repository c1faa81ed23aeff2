# python
"""
devshell/nodes.py
Immutable file/folder nodes and the copy-on-write edits applied to a tree of them.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterator, Mapping, Sequence, Tuple, Union

import jsonschema

NODE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "type": {"type": "string", "enum": ["file", "folder"]},
        "content": {"type": "string"},
        "children": {"type": "array", "items": {"$ref": "#/definitions/node"}},
    },
    "required": ["name", "type"],
    "additionalProperties": False,
}

TREE_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "$id": "tree.schema.json",
    "definitions": {"node": NODE_SCHEMA},
    "type": "array",
    "items": {"$ref": "#/definitions/node"},
}


class NodeKind(str, Enum):
    FILE = "file"
    FOLDER = "folder"


@dataclass(frozen=True)
class File:
    name: str
    content: str = ""

    def __post_init__(self):
        if not self.name:
            raise ValueError("node name must be non-empty")

    @property
    def kind(self) -> NodeKind:
        return NodeKind.FILE

    @property
    def is_folder(self) -> bool:
        return False


@dataclass(frozen=True)
class Folder:
    name: str
    children: Tuple["Node", ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.name:
            raise ValueError("node name must be non-empty")
        # accept any sequence but always store a tuple
        object.__setattr__(self, "children", tuple(self.children))
        _check_unique(self.children, self.name)

    @property
    def kind(self) -> NodeKind:
        return NodeKind.FOLDER

    @property
    def is_folder(self) -> bool:
        return True


Node = Union[File, Folder]
Tree = Tuple[Node, ...]


def _check_unique(nodes: Sequence[Node], where: str) -> None:
    seen = set()
    for node in nodes:
        if node.name in seen:
            raise ValueError(f"duplicate name {node.name!r} in {where!r}")
        seen.add(node.name)


def make_tree(nodes: Sequence[Node]) -> Tree:
    tree = tuple(nodes)
    _check_unique(tree, "/")
    return tree


def _build_node(data: Mapping[str, Any]) -> Node:
    if data["type"] == NodeKind.FOLDER.value:
        if "content" in data:
            raise ValueError(f"folder {data['name']!r} cannot have content")
        return Folder(data["name"], tuple(_build_node(c) for c in data.get("children", [])))
    if "children" in data:
        raise ValueError(f"file {data['name']!r} cannot have children")
    return File(data["name"], data.get("content", ""))


def build_tree(data: Sequence[Mapping[str, Any]]) -> Tree:
    """
    Build a frozen tree from plain ``{name, type, content|children}`` mappings.

    The literal is validated against TREE_SCHEMA first; a ValueError is raised
    for schema violations, content on folders, children on files and duplicate
    sibling names.
    """
    try:
        jsonschema.validate(instance=list(data), schema=TREE_SCHEMA)
    except jsonschema.ValidationError as exc:
        raise ValueError(f"invalid tree literal: {exc.message}") from exc
    return make_tree([_build_node(item) for item in data])


def replace_file_content(tree: Sequence[Node], file_name: str, new_content: str) -> Tree:
    """
    Return a new tree where every file named ``file_name`` carries ``new_content``.

    Matching is by name only, so same-named files in different folders are all
    updated. Subtrees without a match are returned as the same objects.
    """
    return tuple(_replace_in(node, file_name, new_content) for node in tree)


def _replace_in(node: Node, file_name: str, new_content: str) -> Node:
    if isinstance(node, File):
        if node.name == file_name:
            return replace(node, content=new_content)
        return node
    children = tuple(_replace_in(c, file_name, new_content) for c in node.children)
    if all(new is old for new, old in zip(children, node.children)):
        return node
    return replace(node, children=children)


def filter_tree(tree: Sequence[Node], term: str) -> Tree:
    """
    Keep nodes whose name contains ``term`` (case-insensitive) or that have a
    matching descendant. Kept folders only carry their filtered children.
    """
    needle = term.lower()
    out = []
    for node in tree:
        if isinstance(node, Folder):
            children = filter_tree(node.children, term)
            if needle in node.name.lower() or children:
                out.append(replace(node, children=children))
        elif needle in node.name.lower():
            out.append(node)
    return tuple(out)


def walk(tree: Sequence[Node], prefix: str = "") -> Iterator[Tuple[str, Node]]:
    """Yield ``(path, node)`` pairs depth-first in store order."""
    for node in tree:
        path = f"{prefix}/{node.name}"
        yield path, node
        if isinstance(node, Folder):
            yield from walk(node.children, path)
