from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# .env at the project root feeds GROQ_API_KEY
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _env_api_key() -> str:
    return os.getenv("GROQ_API_KEY", "")


@dataclass(frozen=True)
class LLMConfig:
    api_key: str = field(default_factory=_env_api_key)
    model: str = "llama-3.3-70b-versatile"
    timeout: float = 10.0
    max_tokens: int = 350
    enabled: bool = True


def load_llm_config() -> LLMConfig:
    """Build a config from the environment as it is right now."""
    return LLMConfig()
