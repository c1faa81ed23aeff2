# python
"""
devshell/chat.py
Assistant chat panel. Replies arrive after a fixed delay and are appended even
if the panel was closed in the meantime; closing never cancels them.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Set

from .llm import create_configured_llm_client

logger = logging.getLogger(__name__)

RESPONSE_DELAY_SECONDS = 1.0

GREETING_REPLY = "Hello! How can I assist you with your coding today?"
HELP_REPLY = "I'm here to help! What specific coding question do you have?"
DETAILS_REPLY = (
    "I understand you're asking about coding. "
    "Could you please provide more details or specify your question?"
)


@dataclass
class Message:
    text: str
    is_user: bool


Responder = Callable[[str, List[str]], str]


def scripted_reply(text: str, conversation: Optional[List[str]] = None) -> str:
    lowered = text.lower()
    if "hello" in lowered:
        return GREETING_REPLY
    if "help" in lowered:
        return HELP_REPLY
    return DETAILS_REPLY


class LLMResponder:
    """Ask an LLM client about the workspace; fall back to the scripted reply."""

    def __init__(self, client, workspace):
        self.client = client
        self.workspace = workspace

    def __call__(self, text: str, conversation: List[str]) -> str:
        try:
            reply = self.client.assist(text, self.workspace.tree, conversation)
        except Exception:
            logger.exception("LLM assist failed")
            reply = None
        return reply or scripted_reply(text)


class ChatPanel:
    def __init__(self, responder: Optional[Responder] = None, delay: float = RESPONSE_DELAY_SECONDS):
        self.responder = responder or scripted_reply
        self.delay = delay
        self.messages: List[Message] = []
        self.is_open = True
        self._pending: Set[asyncio.Task] = set()

    def send(self, text: str) -> Optional[asyncio.Task]:
        """
        Append the user's message and schedule the reply. Must be called from
        a running event loop. Whitespace-only input is ignored.
        """
        if not text.strip():
            return None
        conversation = [m.text for m in self.messages]
        self.messages.append(Message(text, is_user=True))
        task = asyncio.get_running_loop().create_task(self._respond(text, conversation))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _respond(self, text: str, conversation: List[str]) -> Message:
        await asyncio.sleep(self.delay)
        reply = await asyncio.to_thread(self.responder, text, conversation)
        message = Message(reply, is_user=False)
        self.messages.append(message)
        if not self.is_open:
            logger.debug("reply delivered to closed chat panel")
        return message

    def close(self) -> None:
        self.is_open = False

    async def wait_pending(self) -> None:
        if self._pending:
            await asyncio.gather(*list(self._pending))


def create_chat_panel(workspace, delay: float = RESPONSE_DELAY_SECONDS) -> ChatPanel:
    """
    Build the workspace's chat panel. Replies come from the configured LLM
    provider when there is one, otherwise from ``scripted_reply``.
    """
    client = create_configured_llm_client()
    responder = LLMResponder(client, workspace) if client is not None else scripted_reply
    panel = ChatPanel(responder=responder, delay=delay)
    workspace.chat = panel
    return panel
