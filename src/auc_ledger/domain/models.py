"""Domain models for auc_ledger — pure dataclasses, no pydantic dependency."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

Amount = int | float

KEY_SEPARATOR = ":"


@dataclass(frozen=True)
class PlayerKey:
    """(category, player name) — key of active bids and sold prices."""

    category: str
    name: str

    def encode(self) -> str:
        return f"{self.category}{KEY_SEPARATOR}{self.name}"

    @classmethod
    def decode(cls, raw: str, categories: Iterable[str] = ()) -> "PlayerKey":
        """Parse "<category>:<name>".

        Category ids may themselves contain ':', so the longest known category
        id followed by the separator wins. With no match, split at the first
        separator.
        """
        for category in sorted(categories, key=len, reverse=True):
            prefix = f"{category}{KEY_SEPARATOR}"
            if category and raw.startswith(prefix):
                return cls(category=category, name=raw[len(prefix):])
        category, sep, name = raw.partition(KEY_SEPARATOR)
        if not sep:
            raise ValueError(f"Malformed player key: {raw!r}")
        return cls(category=category, name=name)


@dataclass
class Team:
    id: str
    name: str
    purse: Amount
    password: str
    purchases: dict[str, str] = field(default_factory=dict)   # category_id -> player name
    extra: dict[str, Any] = field(default_factory=dict)       # client-owned fields, opaque

    def owns(self, key: PlayerKey) -> bool:
        return self.purchases.get(key.category) == key.name


@dataclass
class Ledger:
    """The whole auction state. One instance per process, owned by the engine."""

    teams: list[Team] = field(default_factory=list)
    categories: list[dict[str, Any]] = field(default_factory=list)
    players_snapshot: dict[str, Any] = field(default_factory=dict)
    active_bids: dict[PlayerKey, Amount] = field(default_factory=dict)
    sold_prices: dict[PlayerKey, Amount] = field(default_factory=dict)
    pass_records: dict[str, Any] = field(default_factory=dict)

    def find_team(self, team_id: str) -> Team | None:
        for team in self.teams:
            if team.id == team_id:
                return team
        return None

    @property
    def sold_players(self) -> frozenset[str]:
        """Names owned by any team in any category, derived from purchases."""
        return frozenset(
            name for team in self.teams for name in team.purchases.values() if name
        )

    def keys_in_category(self, category: str) -> set[PlayerKey]:
        keys = {k for k in self.active_bids if k.category == category}
        keys.update(k for k in self.sold_prices if k.category == category)
        return keys
