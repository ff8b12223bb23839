from typing import Any, Callable, Dict, Optional, Protocol

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pymongo.database import Database

from forumflow.core.errors import Forbidden, Unauthorized
from forumflow.core.permissions import Capability, policy
from forumflow.db.session import get_db
from forumflow.modules.auth.schemas.auth import VerifiedIdentity
from forumflow.modules.user_management.services.user import get_user, sync_user

bearer_scheme = HTTPBearer(auto_error=False)


class TokenVerifier(Protocol):
    def initialize(self, attempts: Optional[int] = None) -> bool: ...

    def verify(self, token: str) -> VerifiedIdentity: ...


def get_token_verifier(request: Request) -> TokenVerifier:
    return request.app.state.verifier


def get_verified_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> VerifiedIdentity:
    """
    Dependency for verifying the bearer token of the request
    """
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Missing or malformed authorization header")
    return verifier.verify(credentials.credentials)


def get_current_user(
    db: Database = Depends(get_db),
    identity: VerifiedIdentity = Depends(get_verified_identity),
) -> Dict[str, Any]:
    """
    Dependency for getting the current user, synced into the user directory
    """
    return sync_user(db, identity)


def require_capability(capability: Capability) -> Callable[..., Dict[str, Any]]:
    """
    Build a dependency that only lets callers whose stored role grants ``capability`` through
    """
    def access_guard(
        db: Database = Depends(get_db),
        current_user: Dict[str, Any] = Depends(get_current_user),
    ) -> Dict[str, Any]:
        user = get_user(db, current_user["uid"])
        if not policy.allows(user, capability):
            raise Forbidden("Insufficient permissions", details={"required": capability.value})
        return user

    return access_guard
