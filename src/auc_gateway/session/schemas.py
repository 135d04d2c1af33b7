"""Pydantic schemas for inbound WebSocket payloads.

Field aliases follow the client page (camelCase). Validation happens at the
gateway boundary, after the admin check, before anything reaches the engine.
"""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.auc_ledger.domain.models import PlayerKey, Team

NonNegativeAmount = Annotated[int | float, Field(ge=0)]


class _Payload(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )


class LoginRequest(_Payload):
    type: str = "other"
    password: str | None = None
    team_id: str | None = Field(None, alias="teamId")
    token: str | None = None


class TeamConfig(_Payload):
    """A team as edited by the admin. Purchases are never taken from here."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., min_length=1)
    name: str = ""
    purse: NonNegativeAmount = 0
    password: str = ""

    def to_domain(self) -> Team:
        extra = {k: v for k, v in (self.model_extra or {}).items() if k != "purchases"}
        return Team(
            id=self.id,
            name=self.name,
            purse=self.purse,
            password=self.password,
            extra=extra,
        )


class UpdateConfigRequest(_Payload):
    teams: list[TeamConfig] | None = None
    categories: list[dict[str, Any]] | None = None

    @field_validator("teams")
    @classmethod
    def unique_team_ids(cls, v: list[TeamConfig] | None) -> list[TeamConfig] | None:
        if v is not None:
            ids = [t.id for t in v]
            if len(ids) != len(set(ids)):
                raise ValueError("Team ids must be unique")
        return v


class CategoryRef(_Payload):
    """{id} — deleteCategory / resetCategory."""

    id: str = Field(..., min_length=1)


class TeamRef(_Payload):
    """{id} — resetTeam."""

    id: str = Field(..., min_length=1)


class PlayerRef(_Payload):
    category: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)

    @property
    def key(self) -> PlayerKey:
        return PlayerKey(category=self.category, name=self.name)


class PlaceBidRequest(PlayerRef):
    price: NonNegativeAmount


class SellPlayerRequest(PlayerRef):
    price: NonNegativeAmount
    team_id: str = Field(..., alias="teamId", min_length=1)


class BidRequest(_Payload):
    """Advisory only; relayed as a toast, never applied."""

    team_name: str = Field("", alias="teamName")
    player_name: str = Field("", alias="playerName")


class PlayersSaveRequest(_Payload):
    category: str = Field(..., min_length=1)
    players: Any = None


class PlayersClearRequest(_Payload):
    category: str = Field(..., min_length=1)
