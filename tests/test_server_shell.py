# python
"""
tests/test_server_shell.py
Drives the telnet shell coroutine with in-memory reader/writer stand-ins, so no
socket or subprocess is needed.
"""
import json
from pathlib import Path

import pytest

from devshell import server
from devshell.line_editor import KeyEvent


class FakeReader:
    def __init__(self, data: str):
        self.data = data

    async def read(self, n: int = 1) -> str:
        chunk, self.data = self.data[:n], self.data[n:]
        return chunk


class FakeWriter:
    def __init__(self):
        self.chunks = []
        self.closed = False

    def write(self, data):
        self.chunks.append(data)

    async def drain(self):
        return None

    def get_extra_info(self, name, default=None):
        return ("127.0.0.1", 40000) if name == "peername" else default

    def close(self):
        self.closed = True

    @property
    def text(self) -> str:
        return "".join(self.chunks)


@pytest.fixture
def config(tmp_path: Path, monkeypatch):
    cfg = {
        **server.DEFAULT_CONFIG,
        "paths": {
            "logs_dir": str(tmp_path),
            "tty_dir": str(tmp_path / "tty"),
            "events_file": str(tmp_path / "events.jsonl"),
        },
    }
    monkeypatch.setattr(server, "CONFIG", cfg)
    return cfg


async def _collect(data: str):
    return [event async for event in server.read_key_events(FakeReader(data))]


@pytest.mark.asyncio
async def test_crlf_and_crnul_collapse_to_one_enter():
    events = await _collect("a\r\nb\r\x00c\n")
    assert [e.key for e in events] == ["a", "\r", "b", "\r", "c", "\n"]


@pytest.mark.asyncio
async def test_escape_sequences_become_modified_keys():
    events = await _collect("\x1b[A\x1bfx")
    assert events[0] == KeyEvent("\x1b[A", meta=True)
    assert events[1] == KeyEvent("f", alt=True)
    assert events[2] == KeyEvent("x")
    assert not events[0].printable and not events[1].printable


@pytest.mark.asyncio
async def test_alt_enter_swallows_the_following_lf():
    events = await _collect("\x1b\r\nx")
    assert events == [KeyEvent("\r", alt=True), KeyEvent("x")]


@pytest.mark.asyncio
async def test_shell_session_round_trip(config, tmp_path: Path):
    writer = FakeWriter()
    await server.shell(FakeReader("ls\r\ncd src\r\npwd\r\nnope\r\n"), writer)

    text = writer.text
    assert text.startswith("Welcome to ZAI-IDE Terminal\r\n")
    assert "/home/project $ ls\r\nd src\r\n- package.json\r\n" in text
    assert "/home/project/src $ pwd\r\n/home/project/src\r\n" in text
    assert "Command not found: nope\r\n/home/project/src $ " in text
    assert writer.closed

    events = [
        json.loads(line)
        for line in (tmp_path / "events.jsonl").read_text(encoding="utf-8").splitlines()
    ]
    names = [e["event"] for e in events]
    assert names[0] == "session.connect"
    assert names[-1] == "session.close"
    inputs = [e["payload"]["raw"] for e in events if e["event"] == "command.input"]
    assert inputs == ["ls", "cd src", "pwd", "nope"]
    outputs = [e["payload"]["verb"] for e in events if e["event"] == "command.output"]
    assert outputs == ["ls", "cd", "pwd", None]
    assert events[-1]["payload"]["bytes_out"] == len(text.encode())

    tty_files = list((tmp_path / "tty").glob("*.log"))
    assert len(tty_files) == 1
    assert "< cd src" in tty_files[0].read_text(encoding="utf-8")


@pytest.mark.asyncio
async def test_cat_output_uses_crlf(config):
    writer = FakeWriter()
    await server.shell(FakeReader("cat package.json\r"), writer)
    assert '{\r\n  "name": "zai-ide",\r\n  "version": "1.0.0"\r\n}\r\n' in writer.text


@pytest.mark.asyncio
async def test_alt_enter_does_not_run_a_command(config):
    writer = FakeWriter()
    await server.shell(FakeReader("pwd\x1b\r\n"), writer)
    assert writer.text.endswith("/home/project $ pwd")
    assert writer.text.count("/home/project $ ") == 1


@pytest.mark.asyncio
async def test_sessions_get_a_workspace_without_chat(config, monkeypatch):
    created = []

    class RecordingWorkspace(server.Workspace):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            created.append(self)

    monkeypatch.setattr(server, "Workspace", RecordingWorkspace)
    await server.shell(FakeReader("ls\r\n"), FakeWriter())
    assert len(created) == 1
    assert created[0].chat is None
