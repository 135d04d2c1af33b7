"""Bootstrap ledger used when nothing has been persisted yet."""

from src.auc_ledger.domain.models import Ledger, Team

_SEED_TEAMS: tuple[tuple[str, str], ...] = (
    ("t1", "Royal Challengers"),
    ("t2", "Chennai Kings"),
    ("t3", "Mumbai Indians"),
)
SEED_PASSWORD = "123"


def bootstrap_ledger(purse: int) -> Ledger:
    """Three seeded teams with a full purse, no categories."""
    return Ledger(
        teams=[
            Team(id=team_id, name=name, purse=purse, password=SEED_PASSWORD)
            for team_id, name in _SEED_TEAMS
        ]
    )


def empty_ledger() -> Ledger:
    """State after a full reset: no teams, categories, snapshots, bids or prices."""
    return Ledger()
