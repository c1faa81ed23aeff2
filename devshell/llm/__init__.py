"""
Lightweight LLM client wrapper supporting OpenAI-compatible endpoints and Google Gemini.
BaseLLMClient centralizes the assistant prompt and reply validation; providers
only implement _raw_generate.
"""
from typing import Protocol, Any, Dict, Optional, List, Sequence
import os
import json
import jsonschema
import logging

from devshell.env import load_env
from devshell.nodes import Node, walk

logger = logging.getLogger(__name__)
load_env()

ASSIST_PROMPT_TEMPLATE = """You are a coding assistant embedded in a small web IDE. The user is working on the project whose files are listed below. Answer the user's message and return a JSON object ONLY (no commentary) with the following field:
- reply: string (your answer, plain text)

Project files:
{files}

Conversation so far (oldest first):
{conversation}

User message:
{message}

Return JSON only.
"""

REPLY_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "reply": {"type": "string", "minLength": 1},
    },
    "required": ["reply"],
    "additionalProperties": False,
}


class LLMClient(Protocol):
    def assist(self, message: str, tree: Sequence[Node], conversation: List[str], *, model: Optional[str] = None) -> Optional[str]: ...


def _validate_and_parse_json(text: str, schema: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    if not text or not text.strip():
        return None
    try:
        obj = json.loads(text)
    except Exception:
        start = text.find("{")
        end = text.rfind("}")
        if start == -1 or end == -1 or end <= start:
            logger.debug("No JSON object found in text")
            return None
        try:
            obj = json.loads(text[start : end + 1])
        except Exception as e:
            logger.debug("Failed to parse extracted JSON: %s", e)
            return None
    try:
        jsonschema.validate(instance=obj, schema=schema)
    except Exception as e:
        logger.debug("JSON schema validation failed: %s", e)
        return None
    return obj


class BaseLLMClient:
    """
    Common implementation for higher-level ops that are provider-agnostic.
    Providers must implement _raw_generate(prompt, model, **kwargs) -> str.
    """

    model: Optional[str] = None

    def _raw_generate(self, prompt: str, model: Optional[str] = None, **kwargs) -> str:
        raise NotImplementedError

    def assist(self, message: str, tree: Sequence[Node], conversation: List[str], *, model: Optional[str] = None) -> Optional[str]:
        """
        Ask the model about ``message``. Returns None when the response does not
        parse or validate, so callers can fall back to a canned answer.
        """
        files = "\n".join(path for path, _ in walk(tree))
        prompt = ASSIST_PROMPT_TEMPLATE.format(
            files=files,
            conversation=json.dumps(conversation),
            message=message,
        )
        text = self._raw_generate(prompt, model=model or self.model)
        parsed = _validate_and_parse_json(text, REPLY_SCHEMA)
        if parsed is None:
            logger.warning("assist: failed to parse/validate LLM response")
            return None
        return parsed["reply"]


class OpenAICompatClient(BaseLLMClient):
    def __init__(self, base_url: Optional[str] = None, api_key: Optional[str] = None, model: Optional[str] = None):
        self.base_url = base_url or os.getenv("OPENAI_BASE_URL")
        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        self.model = model or os.getenv("OPENAI_MODEL")
        try:
            from openai import OpenAI
        except Exception as e:
            raise RuntimeError("openai package required for OpenAICompatClient") from e
        self._client = OpenAI(base_url=self.base_url, api_key=self.api_key)

    def _raw_generate(self, prompt: str, model: Optional[str] = None, temperature: float = 0.0) -> str:
        model = model or self.model
        if not model:
            raise ValueError("model must be provided")
        resp = self._client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
        )
        try:
            return resp.choices[0].message.content
        except Exception:
            return getattr(resp, "text", str(resp))


class GeminiClient(BaseLLMClient):
    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self.api_key = api_key or os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
        self.model = model or os.getenv("GEMINI_MODEL")
        try:
            from google import genai
        except Exception as e:
            raise RuntimeError("google-genai package required for GeminiClient") from e
        self._client = genai.Client(api_key=self.api_key) if self.api_key else genai.Client()

    def _raw_generate(self, prompt: str, model: Optional[str] = None, **kwargs) -> str:
        model = model or self.model or "gemini-2.0-flash"
        resp = self._client.models.generate_content(model=model, contents=prompt, **kwargs)
        return getattr(resp, "text", str(resp))


def create_llm_client(kind: str, **kwargs) -> LLMClient:
    kind = kind.lower()
    if kind in ("openai", "openai-compat"):
        return OpenAICompatClient(**kwargs)
    if kind in ("gemini", "google", "google-gemini"):
        return GeminiClient(**kwargs)
    raise ValueError(f"unknown llm client kind: {kind}")


def create_configured_llm_client() -> Optional[LLMClient]:
    """
    Build a client from OPENAI_* or GEMINI_* environment settings, or return
    None when neither provider is configured.
    """
    load_env()
    openai_api_key = os.getenv("OPENAI_API_KEY")
    openai_model = os.getenv("OPENAI_MODEL")
    if openai_api_key and openai_model:
        try:
            client = create_llm_client(
                "openai-compat",
                base_url=os.getenv("OPENAI_BASE_URL"),
                api_key=openai_api_key,
                model=openai_model,
            )
            logger.info("Using OpenAI-compatible LLM model %s for the assistant", openai_model)
            return client
        except Exception as exc:
            logger.warning("Failed to initialize OpenAI LLM client: %s", exc)

    gemini_model = os.getenv("GEMINI_MODEL")
    gemini_api_key = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
    if gemini_model and gemini_api_key:
        try:
            client = create_llm_client("gemini", api_key=gemini_api_key, model=gemini_model)
            logger.info("Using Gemini LLM model %s for the assistant", gemini_model)
            return client
        except Exception as exc:
            logger.warning("Failed to initialize Gemini LLM client: %s", exc)
    logger.debug("No LLM provider configured; assistant uses scripted replies")
    return None
