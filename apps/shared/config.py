"""
Service configuration

Reads every setting from environment variables into one immutable object
that is passed to the app factory. Nothing else in the code base reads the
environment directly.
"""

import os
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

# Settings the service refuses to start without
REQUIRED_ENV_VARS = ("DATABASE_URL", "JWT_SECRET")

DEFAULT_TOKEN_TTL_SECONDS = 24 * 60 * 60


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the blog API."""
    database_url: str
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    token_ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS
    environment: str = "development"
    log_level: str = "INFO"
    frontend_url: Optional[str] = None

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from. Defaults to os.environ.

        Returns:
            Populated Settings instance

        Raises:
            RuntimeError: If a required variable is missing or a value is invalid
        """
        env = os.environ if environ is None else environ

        missing = [name for name in REQUIRED_ENV_VARS if not env.get(name)]
        if missing:
            for name in missing:
                logger.error(f"Missing required environment variable: {name}")
            raise RuntimeError(
                "Missing required environment variables: "
                + ", ".join(missing)
                + ". Generate a JWT_SECRET with: "
                "python -c 'import secrets; print(secrets.token_urlsafe(32))'"
            )

        raw_ttl = env.get("TOKEN_TTL_SECONDS", str(DEFAULT_TOKEN_TTL_SECONDS))
        try:
            token_ttl = int(raw_ttl)
        except ValueError:
            raise RuntimeError(f"TOKEN_TTL_SECONDS must be an integer, got {raw_ttl!r}")
        if token_ttl <= 0:
            raise RuntimeError("TOKEN_TTL_SECONDS must be positive")

        return cls(
            database_url=env["DATABASE_URL"],
            jwt_secret=env["JWT_SECRET"],
            jwt_algorithm=env.get("JWT_ALGORITHM", "HS256"),
            token_ttl_seconds=token_ttl,
            environment=env.get("ENVIRONMENT", "development"),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
            frontend_url=env.get("FRONTEND_URL") or None,
        )


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
