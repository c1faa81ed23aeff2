# python
"""
devshell/interpreter.py
Command interpreter: tokenizes a submitted line, dispatches the verb to its
handler module and re-emits the prompt. Nothing raised by a handler escapes.
"""
import logging
from enum import Enum
from typing import Callable, Dict, List, Optional

from .errors import ShellError, UnknownCommand
from .handlers import cat, cd, clear, echo, help, ls, pwd
from .session import Session
from .terminal import Terminal

logger = logging.getLogger(__name__)

WELCOME_LINES = (
    "Welcome to ZAI-IDE Terminal",
    'Type "help" for available commands',
)


class Verb(str, Enum):
    HELP = "help"
    LS = "ls"
    CD = "cd"
    CAT = "cat"
    PWD = "pwd"
    ECHO = "echo"
    CLEAR = "clear"

    @classmethod
    def parse(cls, token: str) -> Optional["Verb"]:
        try:
            return cls(token.lower())
        except ValueError:
            return None


Handler = Callable[[Session, Terminal, List[str]], None]

HANDLERS: Dict[Verb, Handler] = {
    Verb.HELP: help.run,
    Verb.LS: ls.run,
    Verb.CD: cd.run,
    Verb.CAT: cat.run,
    Verb.PWD: pwd.run,
    Verb.ECHO: echo.run,
    Verb.CLEAR: clear.run,
}


def tokenize(line: str) -> List[str]:
    return (line or "").split()


def prompt(session: Session) -> str:
    return f"{session.cwd} $ "


class Interpreter:
    def __init__(self, terminal: Terminal):
        self.terminal = terminal

    def welcome(self, session: Session) -> None:
        for line in WELCOME_LINES:
            self.terminal.writeln(line)
        self.terminal.write(prompt(session))

    def dispatch(self, session: Session, line: str) -> Optional[Verb]:
        """
        Execute one submitted line and re-emit the prompt. Returns the verb that
        ran, or None for blank and unrecognized input.
        """
        argv = tokenize(line)
        verb = None
        if argv:
            verb = Verb.parse(argv[0])
            try:
                if verb is None:
                    raise UnknownCommand(argv[0])
                HANDLERS[verb](session, self.terminal, argv[1:])
            except ShellError as exc:
                logger.debug("%s: %s", argv[0], exc)
                self.terminal.writeln(str(exc))
            except Exception:
                logger.exception("handler for %s failed", argv[0])
                self.terminal.writeln(str(UnknownCommand(argv[0])))
        self.terminal.write(prompt(session))
        return verb
