"""Identity & authority: role assignment at login, admin checks afterwards.

Roles are fixed at login. Admin connections also get a capability token
for reconnecting; require_admin() is the single gate in front of every
mutating event.
"""

import logging
import secrets
from dataclasses import dataclass

from config.settings import settings
from src.auc_common.enums import Role
from src.auc_common.errors import (
    AuthorizationDeniedError,
    InvalidAdminPasswordError,
    InvalidTeamPasswordError,
)
from src.auc_gateway.auth.jwt_handler import create_admin_token, decode_admin_token
from src.auc_gateway.session.schemas import LoginRequest
from src.auc_ledger.domain.models import Ledger

logger = logging.getLogger(__name__)


@dataclass
class Identity:
    role: Role
    team_id: str | None = None
    admin_token: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


def _matches(supplied: str | None, expected: str) -> bool:
    if supplied is None:
        return False
    return secrets.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))


def authenticate(request: LoginRequest, ledger: Ledger) -> Identity:
    """Resolve a login request to an Identity.

    Raises:
        InvalidAdminPasswordError: admin login with wrong password and no valid token.
        InvalidTeamPasswordError: unknown team or wrong team password (not distinguished).
    """
    if request.type == Role.ADMIN.value:
        if _matches(request.password, settings.ADMIN_PASSWORD):
            return Identity(role=Role.ADMIN, admin_token=create_admin_token())
        if request.token:
            # Reconnect with a previously issued token; keep it as-is.
            try:
                decode_admin_token(request.token, "auth:login")
            except AuthorizationDeniedError:
                raise InvalidAdminPasswordError() from None
            return Identity(role=Role.ADMIN, admin_token=request.token)
        raise InvalidAdminPasswordError()

    if request.type == Role.TEAM.value:
        team = ledger.find_team(request.team_id or "")
        if team is None or not _matches(request.password, team.password):
            raise InvalidTeamPasswordError()
        return Identity(role=Role.TEAM, team_id=team.id)

    logger.debug("Login type %r granted listener role", request.type)
    return Identity(role=Role.LISTENER)


def require_admin(identity: Identity, event: str) -> None:
    """Raises AuthorizationDeniedError unless the connection logged in as admin.

    Admin authority lasts for the life of the connection. The token's expiry
    only matters when it is presented again on a reconnect.
    """
    if not identity.is_admin:
        raise AuthorizationDeniedError(event)
