# python
"""
devshell/errors.py
Recoverable shell errors. The interpreter turns each into a single output line.
"""


class ShellError(Exception):
    pass


class PathNotFound(ShellError):
    KINDS = {"directory", "file"}

    def __init__(self, kind: str, path: str):
        if kind not in self.KINDS:
            raise ValueError(f"unknown path kind: {kind}")
        self.kind = kind
        self.path = path
        super().__init__(f"No such {kind}: {path}")


class UnknownCommand(ShellError):
    def __init__(self, verb: str):
        self.verb = verb
        super().__init__(f"Command not found: {verb}")
