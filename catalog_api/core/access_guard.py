# catalog_api/core/access_guard.py
"""
Role checks over already-validated token claims.

Roles are flat tags: ADMIN does not imply MODERATOR and MODERATOR does not
imply USER. Every call site lists each role it accepts.
"""

from typing import Iterable

from catalog_api.core.exceptions import ForbiddenError
from catalog_api.entities.role import Role
from catalog_api.entities.token import TokenClaims

ANY_ROLE: frozenset[Role] = frozenset(Role)


def is_allowed(claims: TokenClaims, required_roles: Iterable[Role]) -> bool:
    return Role(claims.role) in {Role(r) for r in required_roles}


def authorize(claims: TokenClaims, required_roles: Iterable[Role]) -> None:
    if not is_allowed(claims, required_roles):
        raise ForbiddenError()


def authorize_owner_or(claims: TokenClaims, owner_id: str, required_roles: Iterable[Role]) -> None:
    if str(claims.user_id) == str(owner_id):
        return
    authorize(claims, required_roles)
