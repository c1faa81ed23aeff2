# python
"""
devshell/handlers/help.py
Handler for `help` that prints the static usage text.
"""

HELP_LINES = (
    "Available commands:",
    "  help - Show this help message",
    "  ls [path] - List files and directories",
    "  cd <path> - Change current directory",
    "  cat <file> - Display file contents",
    "  pwd - Print working directory",
    "  echo <message> - Display a message",
    "  clear - Clear the terminal screen",
)


def run(session, terminal, args):
    for line in HELP_LINES:
        terminal.writeln(line)
