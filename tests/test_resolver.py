from devshell.nodes import File, Folder
from devshell.resolver import (
    HOME_PATH,
    join_path,
    resolve_folder,
    resolve_node,
    split_path,
    tree_path,
)
from devshell.seed import seed_tree


def test_split_path_collapses_slashes():
    assert split_path("//src///components/") == ["src", "components"]
    assert split_path("/") == []
    assert split_path("") == []


def test_join_path_does_not_normalize():
    assert join_path(HOME_PATH, "src") == "/home/project/src"
    assert join_path(HOME_PATH, "../x") == "/home/project/../x"
    assert join_path(HOME_PATH, None) == HOME_PATH


def test_tree_path_strips_the_mount():
    assert tree_path("/home/project") == "/"
    assert tree_path("/home/project/src/") == "/src"
    assert tree_path("/home") is None
    assert tree_path("/etc/passwd") is None


def test_root_resolves_to_top_level_sequence():
    tree = seed_tree()
    assert resolve_folder(tree, "/") == tree


def test_resolve_folder_walks_folders_only():
    tree = seed_tree()
    items = resolve_folder(tree, "/src//components/")
    assert [n.name for n in items] == [
        "Sidebar.tsx", "Terminal.tsx", "CodeEditor.tsx", "AIChatPopup.tsx",
    ]
    assert resolve_folder(tree, "/package.json") is None
    assert resolve_folder(tree, "/missing") is None
    assert resolve_folder(tree, "/src/missing") is None


def test_resolve_node_finds_files_and_folders():
    tree = seed_tree()
    node = resolve_node(tree, "/src/App.tsx")
    assert isinstance(node, File)
    assert node.content == "// App component code"
    assert isinstance(resolve_node(tree, "/src/components"), Folder)


def test_resolve_node_not_found():
    tree = seed_tree()
    assert resolve_node(tree, "/") is None
    assert resolve_node(tree, "/src/nope.tsx") is None
    assert resolve_node(tree, "/package.json/inner") is None


def test_dot_segments_are_literal_names():
    tree = seed_tree()
    assert resolve_folder(tree, "/src/..") is None
    assert resolve_node(tree, "/./package.json") is None
