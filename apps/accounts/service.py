"""
Identity service: signup, login and token verification.

Passwords are hashed with passlib and tokens are signed JWTs carrying the
user id as their subject.
"""
import logging

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from apps.accounts.models import User
from apps.shared.auth import create_access_token, decode_access_token
from apps.shared.config import Settings
from apps.shared.errors import ConflictError, InvalidCredentials, Unauthenticated, ValidationError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    """
    Hash a password for storing.
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed one.
    """
    return pwd_context.verify(plain_password, hashed_password)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class IdentityService:
    """Establishes who a caller is."""

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings

    def get_user_by_email(self, email: str):
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def signup(self, email: str, password: str) -> User:
        """
        Register a new user.

        Raises:
            ValidationError: If email or password is empty
            ConflictError: If the email is already registered
        """
        email = normalize_email(email)
        if not email or not password:
            raise ValidationError("Email and password are required")

        if self.get_user_by_email(email) is not None:
            raise ConflictError("Email is already registered")

        user = User(email=email, password_hash=hash_password(password))
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race against a concurrent signup for the same email
            self.db.rollback()
            raise ConflictError("Email is already registered")
        self.db.refresh(user)

        logger.info(f"Created user {user.id}")
        return user

    def login(self, email: str, password: str) -> tuple[str, User]:
        """
        Check credentials and issue a session token.

        Returns:
            Tuple of (token, user)

        Raises:
            InvalidCredentials: If the email is unknown or the password is wrong
        """
        user = self.get_user_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning(f"Failed login attempt for {normalize_email(email)}")
            raise InvalidCredentials("Invalid credentials")

        token = create_access_token(
            subject=user.id,
            secret=self.settings.jwt_secret,
            algorithm=self.settings.jwt_algorithm,
            ttl_seconds=self.settings.token_ttl_seconds,
        )
        return token, user

    def verify_token(self, token: str) -> str:
        """
        Verify a session token and return the user id it carries.

        Raises:
            Unauthenticated: If the token is invalid or its user does not exist
        """
        if not token:
            raise Unauthenticated("Missing bearer token")

        user_id = decode_access_token(
            token,
            secret=self.settings.jwt_secret,
            algorithm=self.settings.jwt_algorithm,
        )
        if self.db.get(User, user_id) is None:
            logger.warning(f"Token references unknown user {user_id}")
            raise Unauthenticated("Invalid authentication token")
        return user_id


def list_authors(db: Session) -> list[User]:
    """All registered users, ordered by email."""
    return db.query(User).order_by(User.email.asc()).all()
