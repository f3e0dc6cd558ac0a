"""Chat passthrough to an OpenAI-compatible completion API.

The client never raises to its caller: any transport, HTTP or payload problem
is logged and answered with ``CHAT_FAILURE_REPLY``.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

import httpx

from core.config import Settings
from core.validators import ChatTurn

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are the Pathfinder performance coach. Give concise, practical advice on "
    "hybrid strength and endurance training, recovery and readiness. Do not give "
    "medical diagnoses; suggest seeing a professional for pain or injury."
)
CHAT_FAILURE_REPLY = "Sorry, I couldn't reach the coach right now. Please try again in a moment."


class ChatClient:
    def __init__(self, settings: Settings, transport: Optional[httpx.BaseTransport] = None):
        self.settings = settings
        self._transport = transport

    def _messages(self, turns: Iterable[ChatTurn]) -> list[dict[str, str]]:
        messages = [{"role": "system", "content": SYSTEM_PROMPT}]
        messages.extend({"role": t.role, "content": t.content} for t in turns)
        return messages

    def _post(self, body: dict[str, Any]) -> dict[str, Any]:
        headers = {"Authorization": f"Bearer {self.settings.openai_api_key}"}
        with httpx.Client(
            base_url=self.settings.openai_base_url,
            timeout=self.settings.chat_timeout_seconds,
            transport=self._transport,
        ) as client:
            resp = client.post("/chat/completions", json=body, headers=headers)
            resp.raise_for_status()
            return resp.json()

    def reply(self, turns: Iterable[ChatTurn]) -> str:
        if not self.settings.openai_api_key:
            logger.warning("chat_unconfigured", extra={"reason": "missing_api_key"})
            return CHAT_FAILURE_REPLY

        body = {"model": self.settings.openai_model, "messages": self._messages(turns)}
        try:
            payload = self._post(body)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("chat_request_failed", extra={"error": type(exc).__name__, "model": self.settings.openai_model})
            return CHAT_FAILURE_REPLY

        try:
            content = payload["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            logger.warning("chat_bad_payload", extra={"model": self.settings.openai_model})
            return CHAT_FAILURE_REPLY
        if not isinstance(content, str) or not content.strip():
            return CHAT_FAILURE_REPLY
        return content.strip()
