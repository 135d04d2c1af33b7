"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth (login, admin authority)
  2xxx: Business rules (sale checks) -> action:rejected
  4xxx: Payload validation
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


# --- 1xxx: Auth ---

class AuthorizationDeniedError(AppError):
    """Missing or invalid admin token. Never reported to the caller."""

    def __init__(self, event: str) -> None:
        super().__init__(1001, f"Admin authority required for {event}")


class InvalidAdminPasswordError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "Invalid Admin Password")


class InvalidTeamPasswordError(AppError):
    def __init__(self) -> None:
        super().__init__(1003, "Invalid Team Password")


# --- 2xxx: Business rules ---

class BusinessRuleViolation(AppError):
    """Rejected transition; the ledger is left untouched."""


class PlayerAlreadySoldError(BusinessRuleViolation):
    def __init__(self, name: str) -> None:
        super().__init__(2001, "Player already sold!")
        self.player_name = name


class TeamNotFoundError(BusinessRuleViolation):
    def __init__(self, team_id: str) -> None:
        super().__init__(2002, "Team not found")
        self.team_id = team_id


class CategorySlotTakenError(BusinessRuleViolation):
    def __init__(self, team_name: str, category: str) -> None:
        super().__init__(2003, f"Team {team_name} already has a player in {category}!")


class InsufficientPurseError(BusinessRuleViolation):
    def __init__(self, required: float, available: float) -> None:
        super().__init__(2004, "Insufficient funds")
        self.required = required
        self.available = available


# --- 4xxx: Payload ---

class InvalidPayloadError(AppError):
    def __init__(self, event: str, detail: str) -> None:
        super().__init__(4001, f"Invalid payload for {event}: {detail}")


# --- 9xxx: System ---

class PersistenceError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(9001, f"Save Error: {detail}")
