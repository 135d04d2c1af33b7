"""Ledger invariant verification after each accepted transition.

INV-1: purse >= 0 for every team
INV-2: a team holds at most one player per category (structural: dict keyed by category)
INV-3: a player name appears in at most one team's purchases
INV-4: sold_prices[key] exists iff some team's purchases maps key.category -> key.name
INV-5: active_bids[key] exists only when sold_prices[key] does not
"""

import logging
from collections import Counter

from src.auc_ledger.domain.models import Ledger, PlayerKey

logger = logging.getLogger(__name__)


def verify_ledger_invariants(ledger: Ledger) -> list[str]:
    """Check INV-1..INV-5. Returns list of violation strings (empty when healthy)."""
    violations: list[str] = []

    for team in ledger.teams:
        if team.purse < 0:
            violations.append(f"INV-1 violated: team {team.id} purse={team.purse} < 0")

    owned = Counter(
        name for team in ledger.teams for name in team.purchases.values() if name
    )
    for name, count in owned.items():
        if count > 1:
            violations.append(f"INV-3 violated: player {name!r} owned {count} times")

    owned_keys = {
        PlayerKey(category=cat, name=name)
        for team in ledger.teams
        for cat, name in team.purchases.items()
        if name
    }
    for key in owned_keys - ledger.sold_prices.keys():
        violations.append(f"INV-4 violated: {key.encode()!r} owned but has no sold price")
    for key in ledger.sold_prices.keys() - owned_keys:
        violations.append(f"INV-4 violated: {key.encode()!r} has a sold price but no owner")

    for key in ledger.active_bids.keys() & ledger.sold_prices.keys():
        violations.append(f"INV-5 violated: {key.encode()!r} is both bidding and sold")

    for msg in violations:
        logger.error(msg)
    return violations
