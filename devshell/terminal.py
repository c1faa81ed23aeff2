# python
"""
devshell/terminal.py
Terminal collaborators: the protocol the shell writes to, a telnet adapter and
an in-memory screen.
"""
from typing import List, Protocol

CLEAR_SEQUENCE = "\x1b[2J\x1b[H"


class Terminal(Protocol):
    def write(self, text: str) -> None: ...
    def writeln(self, text: str) -> None: ...
    def clear(self) -> None: ...


def normalize_for_terminal(text: str) -> str:
    """
    Convert newline usage to CRLF sequences that telnet clients expect.
    """
    if not text:
        return ""
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    return normalized.replace("\n", "\r\n")


class TelnetTerminal:
    """Write-only view over a telnetlib3 writer."""

    def __init__(self, writer):
        self.writer = writer
        self.bytes_out = 0
        # raw text written since the caller last reset it, for tty transcripts
        self.captured: List[str] = []

    def _send(self, data: str) -> None:
        self.bytes_out += len(data.encode())
        self.writer.write(data)

    def write(self, text: str) -> None:
        self.captured.append(text)
        self._send(normalize_for_terminal(text))

    def writeln(self, text: str) -> None:
        self.captured.append(text + "\n")
        self._send(normalize_for_terminal(text) + "\r\n")

    def clear(self) -> None:
        self._send(CLEAR_SEQUENCE)


class ScreenBuffer:
    """
    In-memory terminal that keeps rendered lines. The last entry of ``lines``
    is the line currently being written.
    """

    def __init__(self):
        self.lines: List[str] = [""]
        self.clears = 0

    def write(self, text: str) -> None:
        for ch in text:
            if ch == "\n":
                self.lines.append("")
            elif ch == "\b":
                # cursor-left; the following space/backspace pair erases
                self.lines[-1] = self.lines[-1][:-1]
            else:
                self.lines[-1] += ch

    def writeln(self, text: str) -> None:
        self.write(text + "\n")

    def clear(self) -> None:
        self.lines = [""]
        self.clears += 1

    @property
    def text(self) -> str:
        return "\n".join(self.lines)
