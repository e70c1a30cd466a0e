# tommyzki/services/llm_client.py
from __future__ import annotations

import ast
import json
import logging
import re
from dataclasses import dataclass
from typing import Optional

import httpx

from tommyzki.config.settings import AppSettings
from tommyzki.services.exceptions import LLMRequestError

logger = logging.getLogger(__name__)


# A whole line holding a markdown fence, e.g. ```json or ```
_RE_FENCE_LINE = re.compile(r"^[ \t]*```[\w-]*[ \t]*$", re.MULTILINE)
_RE_TRAILING_COMMAS = re.compile(r",(\s*[}\]])")


def _strip_code_fences(text: str) -> str:
    return _RE_FENCE_LINE.sub("", text).strip()


def _outermost_object(text: str) -> Optional[str]:
    """Slice from the first '{' to the last '}', dropping chatter around the object."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]


def loads_json_loose(text: str) -> Optional[object]:
    """Parse a model answer that should be a single JSON object.

    Both prompts ask for a bare object, yet models still wrap it in a
    ```json fence, add a sentence of preamble, leave trailing commas or use
    single quotes. Non-object JSON (a bare "en", []) is returned as parsed
    so callers can reject or reinterpret it.

    Returns:
        The parsed value, or None when nothing parseable is left.
    """
    cleaned = _strip_code_fences(text)
    candidate = _outermost_object(cleaned) or cleaned
    if not candidate:
        return None

    for attempt in (candidate, _RE_TRAILING_COMMAS.sub(r"\1", candidate)):
        try:
            return json.loads(attempt)
        except json.JSONDecodeError:
            continue

    # Single-quoted pseudo-JSON: accept only a literal dict
    try:
        obj = ast.literal_eval(candidate)
    except (ValueError, SyntaxError):
        return None
    return obj if isinstance(obj, dict) else None


def _parse_openai_chat_content(payload: object) -> str:
    if not isinstance(payload, dict):
        raise LLMRequestError("Malformed model response (not an object)")
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        raise LLMRequestError("Malformed model response (missing choices)")
    first = choices[0]
    if not isinstance(first, dict):
        raise LLMRequestError("Malformed model response (choices[0])")
    message = first.get("message")
    if isinstance(message, dict):
        content = message.get("content")
        if isinstance(content, str):
            return content
    text = first.get("text")
    if isinstance(text, str):
        return text
    raise LLMRequestError("Malformed model response (missing content)")


@dataclass(frozen=True)
class LLMRequestResult:
    content: str
    model_id: Optional[str]


class LLMClient:
    """Async client for an OpenAI-compatible chat-completions endpoint."""

    def __init__(
        self,
        settings: AppSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            headers = {"Accept": "application/json"}
            if self._settings.llm_api_key:
                headers["Authorization"] = f"Bearer {self._settings.llm_api_key}"
            self._client = httpx.AsyncClient(
                base_url=self._settings.llm_base_url,
                headers=headers,
                timeout=httpx.Timeout(float(self._settings.request_timeout), connect=10.0),
                transport=self._transport,
            )
        return self._client

    async def complete(self, prompt: str, *, json_mode: Optional[bool] = None) -> LLMRequestResult:
        """Send one user prompt and return the assistant content.

        Raises:
            LLMRequestError: On transport failure, non-200 status or a
                malformed response envelope.
        """
        if json_mode is None:
            json_mode = self._settings.llm_json_mode
        payload: dict[str, object] = {
            "model": self._settings.llm_model,
            "messages": [
                {"role": "user", "content": prompt},
            ],
            "stream": False,
            "temperature": float(self._settings.llm_temperature),
        }
        if json_mode:
            payload["response_format"] = {"type": "json_object"}

        client = self._get_client()
        try:
            response = await client.post("/chat/completions", json=payload)
        except httpx.TimeoutException as e:
            raise LLMRequestError(f"Model request timed out: {e}") from e
        except httpx.HTTPError as e:
            raise LLMRequestError(f"Could not reach model endpoint: {e}") from e

        if response.status_code != 200:
            body_text = response.text[:200]
            raise LLMRequestError(
                f"Model endpoint error (HTTP {response.status_code}): {body_text}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except json.JSONDecodeError as e:
            raise LLMRequestError(f"Model endpoint returned invalid JSON: {e}") from e

        content = _parse_openai_chat_content(data)
        model_id = data.get("model") if isinstance(data.get("model"), str) else None
        logger.debug("Model response (%s): %d chars", model_id or self._settings.llm_model, len(content))
        return LLMRequestResult(content=content, model_id=model_id)

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
