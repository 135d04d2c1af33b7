"""Pre-sale checks, run in this order before any mutation.

Each check raises a BusinessRuleViolation; the engine lets it propagate
unchanged so the gateway can reply action:rejected to the originator.
"""

from src.auc_common.errors import (
    CategorySlotTakenError,
    InsufficientPurseError,
    PlayerAlreadySoldError,
    TeamNotFoundError,
)
from src.auc_ledger.domain.models import Amount, Ledger, Team


def check_not_sold(ledger: Ledger, name: str) -> None:
    """A player name may be sold once across all categories."""
    if name in ledger.sold_players:
        raise PlayerAlreadySoldError(name)


def require_team(ledger: Ledger, team_id: str) -> Team:
    team = ledger.find_team(team_id)
    if team is None:
        raise TeamNotFoundError(team_id)
    return team


def check_category_slot_free(team: Team, category: str) -> None:
    if team.purchases.get(category):
        raise CategorySlotTakenError(team.name, category)


def check_purse(team: Team, price: Amount) -> None:
    if team.purse < price:
        raise InsufficientPurseError(required=price, available=team.purse)
