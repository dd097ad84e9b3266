from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from ..geo.models import Coordinate
from ..recommendations.models import RankedResult


class Intent(str, Enum):
    clear = "clear"
    help = "help"
    view_cart = "view_cart"
    add_to_cart = "add_to_cart"
    search = "search"


class Signal(str, Enum):
    navigate_cart = "navigate_cart"
    clear_history = "clear_history"


class ChatRequest(BaseModel):
    message: str = Field(..., max_length=1000)
    location: Coordinate | None = None


class ChatReply(BaseModel):
    message: str
    intent: Intent
    signals: list[Signal] = Field(default_factory=list)
    results: list[RankedResult] = Field(default_factory=list)
    turn: int = 0


class ChatResponse(ChatReply):
    cart_count: int = 0


class ConversationTurn(BaseModel):
    role: str
    content: str


class ConversationState(BaseModel):
    turns: list[ConversationTurn] = Field(default_factory=list)
    last_results_ids: list[int] = Field(default_factory=list)


class AssistantMessage(BaseModel):
    role: str = Field(..., min_length=1)
    content: str


class AssistantRequest(BaseModel):
    messages: list[AssistantMessage]


class AssistantResponse(BaseModel):
    text: str
