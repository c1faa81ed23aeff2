# python
"""
tests/test_chat.py
pytest-asyncio tests for the assistant chat panel's delayed replies.
"""
import asyncio

import pytest

from devshell import chat
from devshell.chat import (
    DETAILS_REPLY,
    GREETING_REPLY,
    HELP_REPLY,
    ChatPanel,
    LLMResponder,
    create_chat_panel,
    scripted_reply,
)
from devshell.workspace import Workspace


def test_scripted_reply():
    assert scripted_reply("Hello there") == GREETING_REPLY
    assert scripted_reply("I need HELP") == HELP_REPLY
    assert scripted_reply("how do hooks work?") == DETAILS_REPLY


@pytest.mark.asyncio
async def test_reply_arrives_after_delay():
    panel = ChatPanel(delay=0.05)
    task = panel.send("hello")
    assert [m.text for m in panel.messages] == ["hello"]
    assert panel.messages[0].is_user
    await asyncio.sleep(0)
    assert len(panel.messages) == 1
    reply = await task
    assert reply.text == GREETING_REPLY
    assert not reply.is_user
    assert panel.messages[-1] is reply


@pytest.mark.asyncio
async def test_blank_input_is_ignored():
    panel = ChatPanel(delay=0)
    assert panel.send("   ") is None
    assert panel.messages == []


@pytest.mark.asyncio
async def test_close_does_not_cancel_pending_reply():
    panel = ChatPanel(delay=0.05)
    panel.send("help me")
    panel.close()
    await panel.wait_pending()
    assert not panel.is_open
    assert [m.text for m in panel.messages] == ["help me", HELP_REPLY]


@pytest.mark.asyncio
async def test_responder_sees_prior_conversation():
    seen = []

    def responder(text, conversation):
        seen.append(list(conversation))
        return "ok"

    panel = ChatPanel(responder=responder, delay=0)
    await panel.send("first")
    await panel.send("second")
    assert seen == [[], ["first", "ok"]]


class StubClient:
    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.trees = []

    def assist(self, message, tree, conversation, *, model=None):
        self.trees.append(tree)
        if self.error:
            raise self.error
        return self.reply


def test_llm_responder_uses_current_tree():
    workspace = Workspace()
    client = StubClient(reply="from model")
    responder = LLMResponder(client, workspace)
    assert responder("anything", []) == "from model"
    assert client.trees == [workspace.tree]


def test_llm_responder_falls_back_on_error():
    responder = LLMResponder(StubClient(error=RuntimeError("down")), Workspace())
    assert responder("hello", []) == GREETING_REPLY


def test_llm_responder_falls_back_on_unparsed_reply():
    responder = LLMResponder(StubClient(reply=None), Workspace())
    assert responder("something", []) == DETAILS_REPLY


def test_chat_panel_is_scripted_without_llm(monkeypatch):
    monkeypatch.setattr(chat, "create_configured_llm_client", lambda: None)
    workspace = Workspace()
    panel = create_chat_panel(workspace)
    assert workspace.chat is panel
    assert panel.responder is scripted_reply
    assert panel.delay == 1.0


def test_chat_panel_uses_configured_client(monkeypatch):
    client = StubClient(reply="from model")
    monkeypatch.setattr(chat, "create_configured_llm_client", lambda: client)
    workspace = Workspace()
    panel = create_chat_panel(workspace, delay=0)
    assert isinstance(panel.responder, LLMResponder)
    assert panel.responder("anything", []) == "from model"
    assert client.trees == [workspace.tree]
