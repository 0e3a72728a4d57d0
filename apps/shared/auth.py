"""
Bearer Token Authentication

Signs and verifies the JWT session tokens handed out at login, and extracts
the bearer credential from the Authorization header.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from apps.shared.errors import Unauthenticated

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is reported through our own error payload
bearer_scheme = HTTPBearer(auto_error=False, description="JWT issued by POST /auth/login")


def create_access_token(subject: str, secret: str, algorithm: str = "HS256", ttl_seconds: int = 86400) -> str:
    """
    Create a signed JWT access token for a given subject.

    Args:
        subject: User identifier embedded as the "sub" claim
        secret: Signing secret
        algorithm: JWT signing algorithm
        ttl_seconds: Lifetime of the token

    Returns:
        Encoded token string
    """
    now = datetime.now(timezone.utc)
    payload = {
        "sub": subject,
        "iat": now,
        "exp": now + timedelta(seconds=ttl_seconds),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(token: str, secret: str, algorithm: str = "HS256") -> str:
    """
    Decode a JWT token and return its subject.

    Raises:
        Unauthenticated: If the token is malformed, expired, badly signed
            or carries no subject
    """
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired token")
        raise Unauthenticated("Token has expired")
    except jwt.PyJWTError as e:
        logger.info(f"Rejected invalid token: {type(e).__name__}")
        raise Unauthenticated("Invalid authentication token")

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise Unauthenticated("Token payload missing subject")
    return subject


async def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> str:
    """
    Dependency returning the raw bearer token from the Authorization header.

    Raises:
        Unauthenticated: If the header is missing or not a Bearer credential
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated("Missing bearer token")
    return credentials.credentials
