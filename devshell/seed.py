"""Fixed project tree every workspace starts from."""
from typing import Any, Dict, List

from .nodes import Tree, build_tree

SEED_TREE: List[Dict[str, Any]] = [
    {
        "name": "src",
        "type": "folder",
        "children": [
            {
                "name": "components",
                "type": "folder",
                "children": [
                    {"name": "Sidebar.tsx", "type": "file", "content": "// Sidebar component code"},
                    {"name": "Terminal.tsx", "type": "file", "content": "// Terminal component code"},
                    {"name": "CodeEditor.tsx", "type": "file", "content": "// CodeEditor component code"},
                    {"name": "AIChatPopup.tsx", "type": "file", "content": "// AIChatPopup component code"},
                ],
            },
            {"name": "App.tsx", "type": "file", "content": "// App component code"},
            {"name": "main.tsx", "type": "file", "content": "// Main entry point"},
            {"name": "index.css", "type": "file", "content": "/* Global styles */"},
        ],
    },
    {"name": "package.json", "type": "file", "content": '{\n  "name": "zai-ide",\n  "version": "1.0.0"\n}'},
    {"name": "tsconfig.json", "type": "file", "content": '{\n  "compilerOptions": {\n    "strict": true\n  }\n}'},
    {"name": "vite.config.ts", "type": "file", "content": 'import { defineConfig } from "vite";\n\nexport default defineConfig({});'},
]


def seed_tree() -> Tree:
    return build_tree(SEED_TREE)
