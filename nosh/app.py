from __future__ import annotations

import os

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import StreamingResponse
from starlette.middleware.sessions import SessionMiddleware

from .auth.dependencies import require_user
from .auth.models import LoginRequest, RegisterRequest
from .auth.users import AuthError, authenticate, register
from .cart.checkout import EmptyCartError, place_order, totals
from .cart.models import AddItemRequest, CartView, OrderConfirmation, QuantityChange
from .chat.intent import process_message
from .chat.models import (
    AssistantRequest,
    AssistantResponse,
    ChatReply,
    ChatRequest,
    ChatResponse,
)
from .chat.reveal import reveal
from .geo.locate import resolve_location, static_provider
from .geo.models import Coordinate
from .llm.groq_client import complete_chat
from .recommendations.models import RestaurantOut
from .recommendations.retrieval import catalog_with_distances
from .sessions import SessionContext, get_session, new_session_id

app = FastAPI(title="Nosh Navigator API", version="0.3.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "nosh-navigator-secret-change-in-production"),
)


def get_context(request: Request) -> SessionContext:
    """Per-browser state, keyed by an id kept in the signed session cookie."""
    sid = request.session.get("sid")
    if not sid:
        sid = new_session_id()
        request.session["sid"] = sid
    return get_session(sid)


def _cart_view(ctx: SessionContext) -> CartView:
    return CartView(
        items=ctx.cart.items,
        count=ctx.cart.count,
        totals=totals(ctx.cart.subtotal()),
    )


async def _run_chat(body: ChatRequest, ctx: SessionContext) -> ChatReply:
    await resolve_location(ctx.geo, static_provider(body.location))
    return process_message(body.message, ctx)


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/restaurants", response_model=list[RestaurantOut])
def restaurants(
    lat: float | None = Query(default=None, ge=-90.0, le=90.0),
    lng: float | None = Query(default=None, ge=-180.0, le=180.0),
    ctx: SessionContext = Depends(get_context),
) -> list[RestaurantOut]:
    if lat is not None and lng is not None:
        location = Coordinate(lat=lat, lng=lng)
    else:
        location = ctx.geo.get()
    return catalog_with_distances(location)


@app.post("/location")
def set_location(body: Coordinate, ctx: SessionContext = Depends(get_context)) -> dict:
    ctx.geo.set(body)
    return {"status": "ok", "location": body}


# ── Chat endpoints ───────────────────────────────────────────────────────


@app.post("/chat", response_model=ChatResponse)
async def chat(body: ChatRequest, ctx: SessionContext = Depends(get_context)) -> ChatResponse:
    reply = await _run_chat(body, ctx)
    return ChatResponse(**reply.model_dump(), cart_count=ctx.cart.count)


@app.post("/chat/stream")
async def chat_stream(body: ChatRequest, ctx: SessionContext = Depends(get_context)):
    reply = await _run_chat(body, ctx)
    return StreamingResponse(
        reveal(reply.message, reply.turn, ctx.turns),
        media_type="text/plain; charset=utf-8",
        headers={
            "X-Intent": reply.intent.value,
            "X-Signals": ",".join(s.value for s in reply.signals),
            "X-Turn": str(reply.turn),
        },
    )


@app.post("/chat/clear")
def chat_clear(ctx: SessionContext = Depends(get_context)) -> dict:
    ctx.turns.advance()
    ctx.reset_conversation()
    return {"status": "cleared"}


@app.post("/assistant", response_model=AssistantResponse)
def assistant(body: AssistantRequest) -> AssistantResponse:
    text = complete_chat([m.model_dump() for m in body.messages])
    return AssistantResponse(text=text)


# ── Cart endpoints ───────────────────────────────────────────────────────


@app.get("/cart", response_model=CartView)
def cart(ctx: SessionContext = Depends(get_context)) -> CartView:
    return _cart_view(ctx)


@app.post("/cart/items", response_model=CartView)
def cart_add(body: AddItemRequest, ctx: SessionContext = Depends(get_context)) -> CartView:
    ctx.cart.add(body.restaurant, body.item, body.price)
    return _cart_view(ctx)


@app.patch("/cart/items/{line_id}", response_model=CartView)
def cart_update(
    line_id: str,
    body: QuantityChange,
    ctx: SessionContext = Depends(get_context),
) -> CartView:
    ctx.cart.update_quantity(line_id, body.delta)
    return _cart_view(ctx)


@app.delete("/cart/items/{line_id}", response_model=CartView)
def cart_remove(line_id: str, ctx: SessionContext = Depends(get_context)) -> CartView:
    ctx.cart.remove(line_id)
    return _cart_view(ctx)


@app.post("/checkout", response_model=OrderConfirmation)
def checkout(ctx: SessionContext = Depends(get_context)) -> OrderConfirmation:
    try:
        return place_order(ctx.cart)
    except EmptyCartError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/register")
def auth_register(body: RegisterRequest, request: Request) -> dict:
    try:
        user = register(body.name, body.username, body.email, body.password)
    except AuthError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.code) from exc
    request.session["user_id"] = user["id"]
    return {"ok": True, "user": user}


@app.post("/auth/login")
def auth_login(body: LoginRequest, request: Request) -> dict:
    try:
        user = authenticate(body.login, body.password)
    except AuthError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.code) from exc
    request.session["user_id"] = user["id"]
    return {"ok": True, "user": user}


@app.get("/auth/me")
def auth_me(user: dict = Depends(require_user)) -> dict:
    return {"auth": True, "user": user}


@app.post("/auth/logout")
def auth_logout(request: Request) -> dict:
    request.session.pop("user_id", None)
    return {"status": "logged_out"}
