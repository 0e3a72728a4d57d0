"""FastAPI dependencies that resolve the caller's identity."""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from apps.accounts.service import IdentityService
from apps.shared.auth import get_bearer_token
from apps.shared.database import get_db


def get_identity_service(request: Request, db: Session = Depends(get_db)) -> IdentityService:
    return IdentityService(db, request.app.state.settings)


def get_current_user_id(
    token: str = Depends(get_bearer_token),
    identity: IdentityService = Depends(get_identity_service),
) -> str:
    """
    Dependency returning the verified id of the calling user.

    Usage in endpoints:
    @router.post("/protected")
    def protected_endpoint(caller_id: str = Depends(get_current_user_id)):
        # caller_id is a user id that exists in the store
        pass
    """
    return identity.verify_token(token)
