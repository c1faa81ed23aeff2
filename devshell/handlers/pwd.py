# python
"""
devshell/handlers/pwd.py
Handler for `pwd`.
"""


def run(session, terminal, args):
    terminal.writeln(session.cwd)
