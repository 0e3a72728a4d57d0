"""
Post service: CRUD over posts with author-only mutation.

Every update and delete goes through the same ownership check: the verified
caller id must equal the post's author id.
"""
import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from apps.accounts.models import User
from apps.blog.models import Post
from apps.shared.database import utcnow
from apps.shared.errors import Forbidden, NotFound, ValidationError

logger = logging.getLogger(__name__)


def _require_text(title: str, content: str) -> None:
    if not title or not title.strip():
        raise ValidationError("Title is required")
    if not content or not content.strip():
        raise ValidationError("Content is required")


def _next_timestamp(previous: Optional[datetime]) -> datetime:
    """Current time, nudged forward so it is strictly after ``previous``."""
    now = utcnow()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now


class PostService:
    """Post operations on behalf of a caller."""

    def __init__(self, db: Session):
        self.db = db

    def _require_owner(self, post: Post, caller_id: str, action: str) -> None:
        if post.author_id != caller_id:
            logger.warning(f"User {caller_id} tried to {action} post {post.id} owned by {post.author_id}")
            raise Forbidden(f"Not authorized to {action} this post")

    def create_post(self, title: str, content: str, caller_id: str, author_id: Optional[str] = None) -> Post:
        """
        Create a post authored by the caller.

        Args:
            title: Post title
            content: Post body, may contain markup
            caller_id: Verified id of the requesting user
            author_id: Client-supplied author id; must match caller_id when given

        Raises:
            Forbidden: If author_id names someone other than the caller
            ValidationError: If title or content is empty, or the caller is unknown
        """
        if author_id is not None and author_id != caller_id:
            logger.warning(f"User {caller_id} tried to create a post as {author_id}")
            raise Forbidden("Cannot create a post on behalf of another author")
        _require_text(title, content)

        if self.db.get(User, caller_id) is None:
            raise ValidationError("Author does not exist")

        now = utcnow()
        post = Post(title=title, content=content, author_id=caller_id, created_at=now, updated_at=now)
        self.db.add(post)
        self.db.commit()
        self.db.refresh(post)

        logger.info(f"User {caller_id} created post {post.id}")
        return post

    def list_posts(self, author_id: Optional[str] = None) -> list[Post]:
        """All posts, or one author's posts, most recently updated first."""
        query = self.db.query(Post)
        if author_id:
            query = query.filter(Post.author_id == author_id)
        return query.order_by(Post.updated_at.desc(), Post.created_at.desc()).all()

    def get_post(self, post_id: str) -> Post:
        post = self.db.get(Post, post_id)
        if post is None:
            raise NotFound("Post not found")
        return post

    def update_post(self, post_id: str, title: str, content: str, caller_id: str) -> Post:
        """
        Overwrite title and content of the caller's post.

        Raises:
            NotFound: If the post does not exist
            Forbidden: If the caller is not the author
            ValidationError: If title or content is empty
        """
        post = self.get_post(post_id)
        self._require_owner(post, caller_id, "update")
        _require_text(title, content)

        post.title = title
        post.content = content
        post.updated_at = _next_timestamp(post.updated_at)
        self.db.commit()
        self.db.refresh(post)

        logger.info(f"User {caller_id} updated post {post.id}")
        return post

    def delete_post(self, post_id: str, caller_id: str) -> None:
        """
        Permanently delete the caller's post.

        Raises:
            NotFound: If the post does not exist
            Forbidden: If the caller is not the author
        """
        post = self.get_post(post_id)
        self._require_owner(post, caller_id, "delete")

        self.db.delete(post)
        self.db.commit()

        logger.info(f"User {caller_id} deleted post {post_id}")
