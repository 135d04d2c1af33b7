"""AuctionEngine — the single owner of the in-memory ledger.

Per player key the lifecycle is UNSOLD -> BIDDING -> SOLD; SOLD -> UNSOLD only
through one of the resets. Every public method either raises before touching
the ledger or applies its whole effect, then commits (save + invariant check).
Nothing here awaits, so a transition can never interleave with another.
"""

import logging
from typing import Any

from src.auc_auction.rules.sale_checks import (
    check_category_slot_free,
    check_not_sold,
    check_purse,
    require_team,
)
from src.auc_common.errors import PlayerAlreadySoldError
from src.auc_ledger.domain.defaults import bootstrap_ledger, empty_ledger
from src.auc_ledger.domain.invariants import verify_ledger_invariants
from src.auc_ledger.domain.models import Amount, Ledger, PlayerKey, Team
from src.auc_ledger.domain.repository import LedgerStoreProtocol

logger = logging.getLogger(__name__)


class AuctionEngine:
    def __init__(
        self,
        store: LedgerStoreProtocol,
        default_purse: int,
        ledger: Ledger | None = None,
    ) -> None:
        self._store = store
        self._default_purse = default_purse
        self._ledger = ledger if ledger is not None else bootstrap_ledger(default_purse)

    @classmethod
    def from_store(cls, store: LedgerStoreProtocol, default_purse: int) -> "AuctionEngine":
        """Resume from the persisted snapshot, or start from the seeded default."""
        return cls(store, default_purse, ledger=store.load())

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    # ------------------------------------------------------------------
    # Bidding and sale
    # ------------------------------------------------------------------

    def place_bid(self, key: PlayerKey, price: Amount) -> None:
        """Last writer wins; no monotonicity check."""
        if key in self._ledger.sold_prices:
            raise PlayerAlreadySoldError(key.name)
        self._ledger.active_bids[key] = price
        self._commit("player:bid")

    def finalize_sale(self, key: PlayerKey, price: Amount, team_id: str) -> Team:
        check_not_sold(self._ledger, key.name)
        team = require_team(self._ledger, team_id)
        check_category_slot_free(team, key.category)
        check_purse(team, price)

        team.purse = team.purse - price
        team.purchases[key.category] = key.name
        self._ledger.sold_prices[key] = price
        self._ledger.active_bids.pop(key, None)
        logger.info(
            "Sold %s to %s for %s (purse left %s)", key.encode(), team.id, price, team.purse
        )
        self._commit("player:sold")
        return team

    # ------------------------------------------------------------------
    # Resets
    # ------------------------------------------------------------------

    def reset_player(self, key: PlayerKey) -> Team | None:
        """Refund the owner (if any) and forget the bid and sale of one player."""
        owner = next((t for t in self._ledger.teams if t.owns(key)), None)
        if owner is not None:
            self._refund(owner, key)
        self._ledger.active_bids.pop(key, None)
        self._ledger.sold_prices.pop(key, None)
        self._commit("admin:resetPlayer")
        return owner

    def reset_category(self, category: str) -> list[Team]:
        refunded = self._refund_category(category)
        self._drop_category_keys(category)
        self._commit("admin:resetCategory")
        return refunded

    def reset_team(self, team_id: str) -> Team | None:
        """Release every purchase of the team and restore the default purse.

        Returns None (and changes nothing) for an unknown team id.
        """
        team = self._ledger.find_team(team_id)
        if team is None:
            logger.warning("resetTeam ignored: unknown team %s", team_id)
            return None
        for category, name in team.purchases.items():
            self._ledger.sold_prices.pop(PlayerKey(category, name), None)
        team.purchases = {}
        team.purse = self._default_purse
        self._commit("admin:resetTeam")
        return team

    def reset_all(self) -> None:
        self._ledger = empty_ledger()
        logger.warning("Ledger fully reset")
        self._commit("admin:resetAll")

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def update_config(
        self,
        teams: list[Team] | None = None,
        categories: list[dict[str, Any]] | None = None,
    ) -> None:
        """Replace categories and/or teams. Existing purchases survive team edits."""
        if categories is not None:
            self._ledger.categories = categories
        if teams is not None:
            incoming_ids = {t.id for t in teams}
            for old in self._ledger.teams:
                if old.id in incoming_ids:
                    continue
                # A removed team takes its sales with it.
                for category, name in old.purchases.items():
                    self._ledger.sold_prices.pop(PlayerKey(category, name), None)
            merged: list[Team] = []
            for new in teams:
                existing = self._ledger.find_team(new.id)
                new.purchases = dict(existing.purchases) if existing is not None else {}
                merged.append(new)
            self._ledger.teams = merged
        self._commit("admin:updateConfig")

    def delete_category(self, category: str) -> list[Team]:
        """Remove a category and cascade: snapshot, bids, prices and owned slots.

        Owners of a player in the category are refunded and their slot is
        cleared, as in reset_category, so no purchase outlives its price.
        """
        self._ledger.categories = [
            c for c in self._ledger.categories if c.get("id") != category
        ]
        self._ledger.players_snapshot.pop(category, None)
        refunded = self._refund_category(category)
        self._drop_category_keys(category)
        self._commit("admin:deleteCategory")
        return refunded

    # ------------------------------------------------------------------
    # Player snapshots
    # ------------------------------------------------------------------

    def save_players(self, category: str, players: Any) -> None:
        self._ledger.players_snapshot[category] = players
        self._commit("players:save")

    def clear_players(self, category: str) -> None:
        self._ledger.players_snapshot.pop(category, None)
        self._commit("players:clear")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _refund(self, team: Team, key: PlayerKey) -> None:
        paid = self._ledger.sold_prices.get(key, 0)
        team.purse = team.purse + paid
        team.purchases.pop(key.category, None)
        logger.info("Refunded %s to %s for %s", paid, team.id, key.encode())

    def _refund_category(self, category: str) -> list[Team]:
        refunded: list[Team] = []
        for team in self._ledger.teams:
            name = team.purchases.get(category)
            if name:
                self._refund(team, PlayerKey(category, name))
                refunded.append(team)
        return refunded

    def _drop_category_keys(self, category: str) -> None:
        for key in self._ledger.keys_in_category(category):
            self._ledger.active_bids.pop(key, None)
            self._ledger.sold_prices.pop(key, None)

    def _commit(self, reason: str) -> None:
        """Write-through persistence, then invariant check. Neither raises."""
        if not self._store.save(self._ledger):
            logger.warning("%s applied in memory but not persisted", reason)
        verify_ledger_invariants(self._ledger)
