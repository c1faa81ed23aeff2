# python
"""
devshell/server.py
Asyncio telnet server using telnetlib3. Every connection gets its own session,
seeded workspace and interpreter.
"""
import argparse
import asyncio
import datetime
import logging
import pathlib
import uuid
from typing import AsyncIterator, List, Optional

import telnetlib3
from telnetlib3.telopt import ECHO, SGA, WILL

from .interpreter import Interpreter
from .line_editor import KeyEvent, LineEditor
from .session import Session
from .terminal import TelnetTerminal
from .workspace import Workspace

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "server": {"host": "0.0.0.0", "port": 2323},
    "paths": {
        "logs_dir": "logs",
        "tty_dir": "logs/tty",
        "events_file": "logs/events.jsonl",
    },
    "version": "0.1",
}

CONFIG = DEFAULT_CONFIG


def _ensure_dirs():
    pathlib.Path(CONFIG["paths"]["logs_dir"]).mkdir(parents=True, exist_ok=True)
    pathlib.Path(CONFIG["paths"]["tty_dir"]).mkdir(parents=True, exist_ok=True)


async def _read_escape(reader) -> Optional[KeyEvent]:
    nxt = await reader.read(1)
    if not nxt:
        return None
    if nxt not in ("[", "O"):
        return KeyEvent(nxt, alt=True)
    seq = "\x1b" + nxt
    while True:
        ch = await reader.read(1)
        if not ch:
            break
        seq += ch
        # CSI/SS3 sequences end with a byte in '@'..'~'
        if "@" <= ch <= "~":
            break
    return KeyEvent(seq, meta=True)


async def read_key_events(reader) -> AsyncIterator[KeyEvent]:
    """
    Decode characters from a telnet reader into key events. CR LF and CR NUL
    collapse to a single Enter; ESC sequences become modified (dropped) keys.
    """
    after_cr = False
    while True:
        ch = await reader.read(1)
        if not ch:
            return
        if after_cr:
            after_cr = False
            if ch in ("\n", "\x00"):
                continue
        if ch == "\r":
            after_cr = True
        if ch == "\x1b":
            event = await _read_escape(reader)
            if event is None:
                return
            after_cr = event.key == "\r"
            yield event
            continue
        yield KeyEvent.from_char(ch)


async def _run_line(session: Session, interpreter: Interpreter, terminal: TelnetTerminal, line: str) -> None:
    argv = line.split()
    await session.log("command.input", "shell", raw=line, argv=argv)
    await session.write_tty("in", line)
    before = terminal.bytes_out
    terminal.captured.clear()
    verb = interpreter.dispatch(session, line)
    await session.write_tty("out", "".join(terminal.captured).rstrip("\n"))
    await session.log(
        "command.output",
        "shell",
        verb=verb.value if verb else None,
        bytes=terminal.bytes_out - before,
    )


async def shell(reader, writer) -> None:
    peer = writer.get_extra_info("peername") or ("0.0.0.0", 0)
    session_id = str(uuid.uuid4())
    tty_path = str(pathlib.Path(CONFIG["paths"]["tty_dir"]) / f"{session_id}.log")
    session = Session(
        session_id=session_id,
        remote_ip=peer[0],
        remote_port=peer[1],
        # use timezone-aware UTC ISO timestamps to avoid naive/aware datetime arithmetic
        started_ts=datetime.datetime.now(datetime.timezone.utc).isoformat(),
        tty_path=tty_path,
        _events_file=CONFIG["paths"]["events_file"],
        workspace=Workspace(),
    )
    if hasattr(writer, "iac"):
        # character-at-a-time input with server-side echo
        writer.iac(WILL, ECHO)
        writer.iac(WILL, SGA)

    terminal = TelnetTerminal(writer)
    interpreter = Interpreter(terminal)
    submitted: List[str] = []
    editor = LineEditor(terminal, submitted.append)

    await session.log("session.connect", "connect")
    try:
        interpreter.welcome(session)
        await writer.drain()
        async for event in read_key_events(reader):
            session.bytes_in += len(event.key.encode())
            editor.on_key(event)
            while submitted:
                await _run_line(session, interpreter, terminal, submitted.pop(0))
            await writer.drain()
    except (ConnectionError, asyncio.IncompleteReadError) as exc:
        logger.info("session %s dropped: %s", session_id, exc)
    except Exception:
        logger.exception("session %s failed", session_id)
    finally:
        # compute duration using timezone-aware datetimes
        started = datetime.datetime.fromisoformat(session.started_ts)
        now = datetime.datetime.now(datetime.timezone.utc)
        session.bytes_out = terminal.bytes_out
        await session.log(
            "session.close",
            "close",
            duration_ms=int((now - started).total_seconds() * 1000),
            tty_path=session.tty_path,
            bytes_in=session.bytes_in,
            bytes_out=session.bytes_out,
        )
        writer.close()


async def start_server(config: Optional[dict] = None):
    global CONFIG
    if config:
        # shallow merge; caller may pass full config
        CONFIG = {**DEFAULT_CONFIG, **config}
    _ensure_dirs()
    host = CONFIG["server"]["host"]
    port = CONFIG["server"]["port"]
    server = await telnetlib3.create_server(shell=shell, host=host, port=port)

    # Derive the actual bound address/port so callers can connect when port=0.
    actual_host = host
    actual_port = port
    socks = getattr(server, "sockets", None)
    if socks:
        sockname = socks[0].getsockname()
        actual_host, actual_port = sockname[0], sockname[1]
        if actual_host in ("0.0.0.0", "", None, "::"):
            actual_host = "127.0.0.1"

    print(f"Listening on {actual_host}:{actual_port}", flush=True)
    try:
        # block forever until cancelled (e.g., Ctrl+C)
        await asyncio.Event().wait()
    finally:
        server.close()
        await server.wait_closed()
    return server


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="devshell")
    parser.add_argument("--host", default=DEFAULT_CONFIG["server"]["host"])
    parser.add_argument("--port", type=int, default=DEFAULT_CONFIG["server"]["port"])
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = {"server": {"host": args.host, "port": args.port}}
    try:
        asyncio.run(start_server(config))
    except KeyboardInterrupt:
        print("shutting down")


if __name__ == "__main__":
    main()
