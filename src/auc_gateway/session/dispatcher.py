"""EventDispatcher — routes inbound WebSocket events to the engine and hub.

Per event: admin check (silent drop on failure) -> payload validation ->
engine transition (persisted inside the engine) -> broadcasts.

All events, from every connection, are handled one at a time under one
asyncio.Lock, so a transition and its broadcasts complete before the next
event is looked at.

Error policy:
  - AuthorizationDeniedError   -> dropped, DEBUG log, no reply
  - Invalid{Admin,Team}Password -> auth:fail to the requester
  - BusinessRuleViolation       -> action:rejected to the requester
  - ValidationError             -> action:rejected for admins, dropped otherwise
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError

from src.auc_auction.engine.state_machine import AuctionEngine
from src.auc_broadcast.hub import Connection, ConnectionHub
from src.auc_common.enums import InboundEvent, OutboundEvent, ToastType
from src.auc_common.errors import (
    AuthorizationDeniedError,
    BusinessRuleViolation,
    InvalidAdminPasswordError,
    InvalidPayloadError,
    InvalidTeamPasswordError,
)
from src.auc_gateway.auth.guard import authenticate, require_admin
from src.auc_gateway.session.schemas import (
    BidRequest,
    CategoryRef,
    LoginRequest,
    PlaceBidRequest,
    PlayerRef,
    PlayersClearRequest,
    PlayersSaveRequest,
    SellPlayerRequest,
    TeamRef,
    UpdateConfigRequest,
)
from src.auc_ledger.application.schemas import ledger_payload, public_roster, teams_payload

logger = logging.getLogger(__name__)

Handler = Callable[[Connection, Any], Awaitable[None]]


@dataclass(frozen=True)
class _Route:
    handler: Handler
    schema: type[BaseModel] | None = None
    admin_only: bool = True


class EventDispatcher:
    def __init__(self, engine: AuctionEngine, hub: ConnectionHub) -> None:
        self._engine = engine
        self._hub = hub
        self._lock = asyncio.Lock()
        self._routes: dict[str, _Route] = {
            InboundEvent.AUTH_LOGIN: _Route(self._login, LoginRequest, admin_only=False),
            InboundEvent.UPDATE_CONFIG: _Route(self._update_config, UpdateConfigRequest),
            InboundEvent.DELETE_CATEGORY: _Route(self._delete_category, CategoryRef),
            InboundEvent.RESET_PLAYER: _Route(self._reset_player, PlayerRef),
            InboundEvent.RESET_CATEGORY: _Route(self._reset_category, CategoryRef),
            InboundEvent.RESET_TEAM: _Route(self._reset_team, TeamRef),
            InboundEvent.RESET_ALL: _Route(self._reset_all),
            InboundEvent.BID_REQUEST: _Route(self._bid_request, BidRequest, admin_only=False),
            InboundEvent.PLAYER_BID: _Route(self._player_bid, PlaceBidRequest),
            InboundEvent.PLAYER_SOLD: _Route(self._player_sold, SellPlayerRequest),
            InboundEvent.PLAYERS_SAVE: _Route(self._players_save, PlayersSaveRequest),
            InboundEvent.PLAYERS_LOAD: _Route(self._players_load, admin_only=False),
            InboundEvent.PLAYERS_CLEAR: _Route(self._players_clear, PlayersClearRequest),
            InboundEvent.TEXTAREA_UPDATE: _Route(self._textarea_update),
        }

    @property
    def engine(self) -> AuctionEngine:
        return self._engine

    async def on_connect(self, conn: Connection) -> None:
        """Public roster (id + name) so the client can render team selection."""
        async with self._lock:
            await self._hub.send(
                conn, OutboundEvent.INIT_AUTH, {"teams": public_roster(self._engine.ledger)}
            )

    async def dispatch(self, conn: Connection, event: str, data: Any) -> None:
        async with self._lock:
            await self._dispatch(conn, event, data)

    async def _dispatch(self, conn: Connection, event: str, data: Any) -> None:
        route = self._routes.get(event)
        if route is None:
            logger.debug("Ignoring unknown event %r from %s", event, conn.id)
            return

        if route.admin_only:
            try:
                require_admin(conn.identity, event)
            except AuthorizationDeniedError as e:
                logger.debug("Dropped %s from %s: %s", event, conn.id, e.message)
                return

        payload: Any = data
        if route.schema is not None:
            try:
                payload = route.schema.model_validate(data if data is not None else {})
            except ValidationError as e:
                err = InvalidPayloadError(event, _first_error(e))
                logger.warning("%s (from %s)", err.message, conn.id)
                if route.admin_only:
                    await self._hub.send(conn, OutboundEvent.ACTION_REJECTED, err.message)
                return

        try:
            await route.handler(conn, payload)
        except BusinessRuleViolation as e:
            logger.info("Rejected %s from %s: %s", event, conn.id, e.message)
            await self._hub.send(conn, OutboundEvent.ACTION_REJECTED, e.message)

    # ------------------------------------------------------------------
    # Broadcast helpers
    # ------------------------------------------------------------------

    async def _broadcast_state(self) -> None:
        ledger = self._engine.ledger
        await self._hub.broadcast_by_role(
            OutboundEvent.STATE_UPDATED, lambda secrets: ledger_payload(ledger, secrets)
        )

    async def _toast(self, kind: ToastType, msg: str) -> None:
        await self._hub.broadcast(OutboundEvent.ADMIN_TOAST, {"type": kind.value, "msg": msg})

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    async def _login(self, conn: Connection, req: LoginRequest) -> None:
        ledger = self._engine.ledger
        try:
            identity = authenticate(req, ledger)
        except (InvalidAdminPasswordError, InvalidTeamPasswordError) as e:
            logger.info("Login failed for %s (type=%s)", conn.id, req.type)
            await self._hub.send(conn, OutboundEvent.AUTH_FAIL, e.message)
            return

        if conn.identity.is_admin and not identity.is_admin:
            # Admin is never downgraded on this connection.
            logger.debug("Keeping admin role for %s on re-login", conn.id)
            identity = conn.identity
        conn.identity = identity
        reply: dict[str, Any] = {
            "role": identity.role.value,
            "state": ledger_payload(ledger, include_secrets=identity.is_admin),
        }
        if identity.team_id is not None:
            reply["teamId"] = identity.team_id
        if identity.admin_token is not None:
            reply["token"] = identity.admin_token
        logger.info("Login %s as %s", conn.id, identity.role.value)
        await self._hub.send(conn, OutboundEvent.AUTH_SUCCESS, reply)

    async def _update_config(self, conn: Connection, req: UpdateConfigRequest) -> None:
        teams = [t.to_domain() for t in req.teams] if req.teams is not None else None
        self._engine.update_config(teams=teams, categories=req.categories)
        await self._broadcast_state()

    async def _delete_category(self, conn: Connection, req: CategoryRef) -> None:
        self._engine.delete_category(req.id)
        await self._broadcast_state()

    async def _reset_player(self, conn: Connection, req: PlayerRef) -> None:
        self._engine.reset_player(req.key)
        await self._broadcast_state()
        await self._toast(ToastType.SUCCESS, f"Player {req.name} reset.")

    async def _reset_category(self, conn: Connection, req: CategoryRef) -> None:
        self._engine.reset_category(req.id)
        await self._broadcast_state()
        await self._toast(ToastType.SUCCESS, f"Category {req.id} reset.")

    async def _reset_team(self, conn: Connection, req: TeamRef) -> None:
        team = self._engine.reset_team(req.id)
        if team is None:
            return
        await self._broadcast_state()
        await self._toast(ToastType.SUCCESS, f"Team {team.name} reset.")

    async def _reset_all(self, conn: Connection, _: Any) -> None:
        self._engine.reset_all()
        await self._broadcast_state()
        await self._toast(ToastType.ERROR, "System FULL RESET.")

    async def _bid_request(self, conn: Connection, req: BidRequest) -> None:
        await self._toast(
            ToastType.INFO, f"Bid Request: {req.team_name} for {req.player_name}"
        )

    async def _player_bid(self, conn: Connection, req: PlaceBidRequest) -> None:
        self._engine.place_bid(req.key, req.price)
        await self._hub.broadcast(OutboundEvent.PLAYER_BID, req.model_dump(by_alias=True))

    async def _player_sold(self, conn: Connection, req: SellPlayerRequest) -> None:
        self._engine.finalize_sale(req.key, req.price, req.team_id)
        ledger = self._engine.ledger
        sale = req.model_dump(by_alias=True)
        await self._hub.broadcast_by_role(
            OutboundEvent.PLAYER_SOLD,
            lambda secrets: {"payload": sale, "teams": teams_payload(ledger, secrets)},
        )

    async def _players_save(self, conn: Connection, req: PlayersSaveRequest) -> None:
        self._engine.save_players(req.category, req.players)
        await self._hub.broadcast(OutboundEvent.PLAYERS_LOAD, req.model_dump())

    async def _players_load(self, conn: Connection, data: Any) -> None:
        await self._hub.broadcast(OutboundEvent.PLAYERS_LOAD, data)

    async def _players_clear(self, conn: Connection, req: PlayersClearRequest) -> None:
        self._engine.clear_players(req.category)
        await self._hub.broadcast(OutboundEvent.PLAYERS_CLEAR, req.model_dump())

    async def _textarea_update(self, conn: Connection, data: Any) -> None:
        await self._hub.broadcast(OutboundEvent.TEXTAREA_UPDATE, data, exclude=conn)


def _first_error(exc: ValidationError) -> str:
    err = exc.errors()[0]
    loc = ".".join(str(p) for p in err.get("loc", ()))
    return f"{loc}: {err.get('msg')}" if loc else str(err.get("msg"))
