"""
Account database models.

Stores registered users. The password hash never leaves this layer.
"""
from uuid import uuid4

from sqlalchemy import Column, String, DateTime

from apps.shared.database import Base, utcnow


class User(Base):
    """
    Registered author.

    - email is the login handle and is unique
    - password_hash is a passlib hash string, never serialized
    """
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    email = Column(String(320), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    def to_public_dict(self) -> dict:
        """Public fields only, safe for API responses."""
        return {"id": self.id, "email": self.email}

    def __repr__(self):
        return f"<User {self.email}>"
