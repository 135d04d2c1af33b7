"""Pydantic schema of the persisted snapshot, also used for state payloads.

Field aliases match the on-disk JSON and the client page (camelCase).
Composite keys are encoded as "<categoryId>:<playerName>" only here.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from src.auc_ledger.domain.models import Amount, Ledger, PlayerKey, Team

_TEAM_FIELDS = frozenset({"id", "name", "purse", "password", "purchases"})


class TeamRecord(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: str
    name: str = ""
    purse: Amount = 0
    password: str = ""
    purchases: dict[str, str] = Field(default_factory=dict)

    @field_validator("purchases", mode="before")
    @classmethod
    def drop_empty_slots(cls, v: Any) -> Any:
        """Older snapshots store cleared slots as null or ""; treat them as absent."""
        if v is None:
            return {}
        if isinstance(v, dict):
            return {cat: name for cat, name in v.items() if name}
        return v

    def to_domain(self) -> Team:
        return Team(
            id=self.id,
            name=self.name,
            purse=self.purse,
            password=self.password,
            purchases=dict(self.purchases),
            extra=dict(self.model_extra or {}),
        )

    @classmethod
    def from_domain(cls, team: Team) -> "TeamRecord":
        extra = {k: v for k, v in team.extra.items() if k not in _TEAM_FIELDS}
        return cls(
            id=team.id,
            name=team.name,
            purse=team.purse,
            password=team.password,
            purchases=dict(team.purchases),
            **extra,
        )


class LedgerSnapshot(BaseModel):
    """On-disk schema. Missing collections default to empty."""

    model_config = ConfigDict(populate_by_name=True)

    teams: list[TeamRecord] = Field(default_factory=list)
    categories: list[dict[str, Any]] = Field(default_factory=list)
    players_snapshot: dict[str, Any] = Field(default_factory=dict, alias="playersSnapshot")
    active_bids: dict[str, Amount] = Field(default_factory=dict, alias="activeBids")
    sold_prices: dict[str, Amount] = Field(default_factory=dict, alias="soldPrices")
    pass_records: dict[str, Any] = Field(default_factory=dict, alias="passRecords")

    @field_validator(
        "teams", "categories", "players_snapshot", "active_bids", "sold_prices", "pass_records",
        mode="before",
    )
    @classmethod
    def null_as_empty(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            return [] if info.field_name in ("teams", "categories") else {}
        return v

    def to_domain(self) -> Ledger:
        teams = [t.to_domain() for t in self.teams]
        known = {str(c["id"]) for c in self.categories if c.get("id") is not None}
        known.update(category for team in teams for category in team.purchases)
        return Ledger(
            teams=teams,
            categories=[dict(c) for c in self.categories],
            players_snapshot=dict(self.players_snapshot),
            active_bids={PlayerKey.decode(k, known): v for k, v in self.active_bids.items()},
            sold_prices={PlayerKey.decode(k, known): v for k, v in self.sold_prices.items()},
            pass_records=dict(self.pass_records),
        )

    @classmethod
    def from_domain(cls, ledger: Ledger) -> "LedgerSnapshot":
        return cls(
            teams=[TeamRecord.from_domain(t) for t in ledger.teams],
            categories=ledger.categories,
            players_snapshot=ledger.players_snapshot,
            active_bids={k.encode(): v for k, v in ledger.active_bids.items()},
            sold_prices={k.encode(): v for k, v in ledger.sold_prices.items()},
            pass_records=ledger.pass_records,
        )


def ledger_payload(ledger: Ledger, include_secrets: bool = False) -> dict[str, Any]:
    """Full ledger as sent in auth:success / state:updated.

    Team passwords are only included for admin connections.
    """
    data = LedgerSnapshot.from_domain(ledger).model_dump(by_alias=True)
    if not include_secrets:
        for team in data["teams"]:
            team.pop("password", None)
    return data


def teams_payload(ledger: Ledger, include_secrets: bool = False) -> list[dict[str, Any]]:
    return ledger_payload(ledger, include_secrets)["teams"]


def public_roster(ledger: Ledger) -> list[dict[str, str]]:
    """id + name only, sent in init:auth before login."""
    return [{"id": t.id, "name": t.name} for t in ledger.teams]
