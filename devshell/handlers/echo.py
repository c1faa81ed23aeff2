# python
"""
devshell/handlers/echo.py
Handler for `echo`: arguments are rejoined with single spaces.
"""


def run(session, terminal, args):
    terminal.writeln(" ".join(args))
