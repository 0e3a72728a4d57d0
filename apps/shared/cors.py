"""Centralized CORS configuration for the blog API."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apps.shared.config import Settings


# Development origins (dev environment only)
DEV_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:3000",
    "https://localhost:3000",
]


def get_allowed_origins(settings: Settings) -> list[str]:
    """Return the allowed CORS origins for the configured environment."""
    origins = []

    # Frontend deployment from env, if set
    if settings.frontend_url:
        origins.append(settings.frontend_url.rstrip("/"))

    if not settings.is_production:
        for origin in DEV_ORIGINS:
            if origin not in origins:
                origins.append(origin)

    return origins


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """Add the CORS middleware to a FastAPI app."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_allowed_origins(settings),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
