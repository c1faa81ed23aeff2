# python
"""
devshell/line_editor.py
Accumulates key events into a command line. The editor owns the in-progress
text; the terminal is only ever written to.
"""
from dataclasses import dataclass
from typing import Callable

from .terminal import Terminal

ENTER_KEYS = ("\r", "\n")
BACKSPACE_KEYS = ("\x7f", "\b")


@dataclass(frozen=True)
class KeyEvent:
    key: str
    alt: bool = False
    ctrl: bool = False
    meta: bool = False

    @property
    def is_enter(self) -> bool:
        return self.key in ENTER_KEYS

    @property
    def is_backspace(self) -> bool:
        return self.key in BACKSPACE_KEYS

    @property
    def printable(self) -> bool:
        return not (self.alt or self.ctrl or self.meta)

    @classmethod
    def from_char(cls, ch: str) -> "KeyEvent":
        """
        Classify a raw character read from the wire. Enter and backspace pass
        through unmodified; any other control character counts as ctrl-held.
        """
        if ch in ENTER_KEYS or ch in BACKSPACE_KEYS:
            return cls(ch)
        if len(ch) == 1 and (ord(ch) < 0x20 or ord(ch) == 0x7F):
            return cls(ch, ctrl=True)
        return cls(ch)


class LineEditor:
    def __init__(self, terminal: Terminal, submit: Callable[[str], None]):
        self.terminal = terminal
        self.submit = submit
        self.buffer = ""

    def on_key(self, event: KeyEvent) -> None:
        if not event.printable:
            return
        if event.is_enter:
            line = self.buffer.strip()
            self.buffer = ""
            # newline before submitting so command output starts on its own line
            self.terminal.writeln("")
            self.submit(line)
        elif event.is_backspace:
            if self.buffer:
                self.buffer = self.buffer[:-1]
                self.terminal.write("\b \b")
        else:
            self.buffer += event.key
            self.terminal.write(event.key)
