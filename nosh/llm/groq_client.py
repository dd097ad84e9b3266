from __future__ import annotations

import logging
from typing import Any

from groq import Groq

from .config import LLMConfig, load_llm_config

logger = logging.getLogger(__name__)

APOLOGY_TEXT = "Sorry, I'm having trouble answering right now. Please try again in a moment."

SYSTEM_PROMPT = (
    "You are Nosh, a friendly food-ordering assistant for a delivery app. "
    "Keep answers short and practical. You can suggest dishes and cuisines, "
    "but ordering happens through the app's cart."
)


def _to_messages(messages: list[dict[str, Any]]) -> list[dict[str, str]]:
    out = [{"role": "system", "content": SYSTEM_PROMPT}]
    for m in messages:
        role = str(m.get("role", "")).strip()
        content = str(m.get("content", ""))
        if role:
            out.append({"role": role, "content": content})
    return out


def complete_chat(
    messages: list[dict[str, Any]],
    config: LLMConfig | None = None,
) -> str:
    """
    Send a role/content conversation to Groq and return the reply text.

    Returns ``APOLOGY_TEXT`` on any failure (disabled, missing key, timeout,
    API error, empty reply) so callers always have something to show.
    """
    config = config or load_llm_config()
    if not config.enabled or not config.api_key:
        return APOLOGY_TEXT

    if not messages:
        return APOLOGY_TEXT

    try:
        client = Groq(api_key=config.api_key, timeout=config.timeout)
        response = client.chat.completions.create(
            model=config.model,
            messages=_to_messages(messages),
            max_tokens=config.max_tokens,
            temperature=0.5,
        )

        text = (response.choices[0].message.content or "").strip()
        return text or APOLOGY_TEXT

    except Exception:
        logger.warning("Groq completion failed, returning apology", exc_info=True)
        return APOLOGY_TEXT
