"""
Accounts API

Signup, login and the public author listing.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from apps.accounts.deps import get_identity_service
from apps.accounts.schemas import AuthorResponse, Credentials, LoginResponse, SignupResponse
from apps.accounts.service import IdentityService, list_authors
from apps.shared.database import get_db

auth_router = APIRouter(prefix="/auth", tags=["auth"])
authors_router = APIRouter(prefix="/authors", tags=["authors"])


@auth_router.post("/signup", response_model=SignupResponse, status_code=201)
def signup(
    credentials: Credentials,
    identity: IdentityService = Depends(get_identity_service),
):
    """Register a new user. Does not log the user in."""
    identity.signup(credentials.email, credentials.password)
    return SignupResponse(message="User created successfully")


@auth_router.post("/login", response_model=LoginResponse)
def login(
    credentials: Credentials,
    identity: IdentityService = Depends(get_identity_service),
):
    """Exchange email and password for a bearer token."""
    token, user = identity.login(credentials.email, credentials.password)
    return LoginResponse(token=token, user=AuthorResponse.model_validate(user))


@authors_router.get("", response_model=list[AuthorResponse])
def get_authors(db: Session = Depends(get_db)):
    """List every registered author (public fields only)."""
    return list_authors(db)
