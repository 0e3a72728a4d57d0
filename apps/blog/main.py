"""
Posts API

Public reads, author-only writes. Mutations require a bearer token.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from apps.accounts.deps import get_current_user_id
from apps.blog.schemas import MessageResponse, PostCreate, PostResponse, PostUpdate
from apps.blog.service import PostService
from apps.shared.database import get_db

router = APIRouter(prefix="/posts", tags=["posts"])


def get_post_service(db: Session = Depends(get_db)) -> PostService:
    return PostService(db)


# ──────────────────────────────────────────────────────────────────────────────
# Public endpoints (no auth required)
# ──────────────────────────────────────────────────────────────────────────────

@router.get("", response_model=list[PostResponse])
def list_posts(
    author: Optional[str] = Query(None, description="Only posts by this author id"),
    posts: PostService = Depends(get_post_service),
):
    """
    List posts, optionally filtered by author.
    Sorted by last update, newest first.
    """
    return posts.list_posts(author_id=author)


@router.get("/{post_id}", response_model=PostResponse)
def get_post(post_id: str, posts: PostService = Depends(get_post_service)):
    """Get a single post by id."""
    return posts.get_post(post_id)


# ──────────────────────────────────────────────────────────────────────────────
# Author endpoints (bearer token required)
# ──────────────────────────────────────────────────────────────────────────────

@router.post("", response_model=PostResponse, status_code=201)
def create_post(
    post_data: PostCreate,
    caller_id: str = Depends(get_current_user_id),
    posts: PostService = Depends(get_post_service),
):
    """Create a new post authored by the caller."""
    return posts.create_post(
        title=post_data.title,
        content=post_data.content,
        caller_id=caller_id,
        author_id=post_data.author_id,
    )


@router.put("/{post_id}", response_model=PostResponse)
def update_post(
    post_id: str,
    post_data: PostUpdate,
    caller_id: str = Depends(get_current_user_id),
    posts: PostService = Depends(get_post_service),
):
    """Replace title and content of one of the caller's posts."""
    return posts.update_post(post_id, post_data.title, post_data.content, caller_id)


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: str,
    caller_id: str = Depends(get_current_user_id),
    posts: PostService = Depends(get_post_service),
):
    """Delete one of the caller's posts."""
    posts.delete_post(post_id, caller_id)
    return MessageResponse(message="Post deleted successfully")
