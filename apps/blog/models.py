"""
Blog database models.

Posts belong to exactly one author, fixed at creation.
"""
from uuid import uuid4

from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from apps.accounts.models import User
from apps.shared.database import Base, utcnow


class Post(Base):
    """
    Blog post.

    - content may contain HTML from the rich-text editor
    - author_id never changes after creation
    """
    __tablename__ = "posts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    author_id = Column(String(36), ForeignKey("users.id"), index=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, index=True, nullable=False)

    author = relationship(User, lazy="joined")

    def __repr__(self):
        return f"<Post {self.id} by {self.author_id}>"
