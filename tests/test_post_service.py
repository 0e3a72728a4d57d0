"""Post CRUD and the author-only mutation rule."""
from datetime import datetime

import pytest

from apps.blog import service as post_service_module
from apps.blog.models import Post
from apps.shared.errors import Forbidden, NotFound, ValidationError


def test_create_then_get_round_trips(posts, alice):
    created = posts.create_post("T1", "<p>C1</p>", caller_id=alice.id)

    fetched = posts.get_post(created.id)

    assert fetched.title == "T1"
    assert fetched.content == "<p>C1</p>"
    assert fetched.author_id == alice.id
    assert fetched.author.email == "alice@example.com"
    assert fetched.created_at == fetched.updated_at


def test_create_binds_author_to_caller(posts, alice):
    post = posts.create_post("T", "C", caller_id=alice.id, author_id=alice.id)
    assert post.author_id == alice.id


def test_create_on_behalf_of_someone_else_is_forbidden(posts, alice, bob, db_session):
    with pytest.raises(Forbidden):
        posts.create_post("T", "C", caller_id=bob.id, author_id=alice.id)

    assert db_session.query(Post).count() == 0


@pytest.mark.parametrize("title,content", [("", "C"), ("T", ""), ("   ", "C"), ("T", " \n ")])
def test_create_requires_title_and_content(posts, alice, title, content):
    with pytest.raises(ValidationError):
        posts.create_post(title, content, caller_id=alice.id)


def test_create_for_unknown_author_is_rejected(posts):
    with pytest.raises(ValidationError):
        posts.create_post("T", "C", caller_id="ghost")


def test_get_missing_post(posts):
    with pytest.raises(NotFound):
        posts.get_post("missing")


def test_author_can_update(posts, alice):
    post = posts.create_post("T1", "C1", caller_id=alice.id)
    before = post.updated_at

    updated = posts.update_post(post.id, "T2", "C2", caller_id=alice.id)

    assert updated.title == "T2"
    assert updated.content == "C2"
    assert updated.author_id == alice.id
    assert updated.updated_at > before
    assert updated.created_at == post.created_at


def test_update_timestamp_is_strictly_increasing_within_one_clock_tick(posts, alice, monkeypatch):
    frozen = datetime(2024, 1, 1, 12, 0, 0)
    monkeypatch.setattr(post_service_module, "utcnow", lambda: frozen)

    post = posts.create_post("T1", "C1", caller_id=alice.id)
    first = posts.update_post(post.id, "T2", "C2", caller_id=alice.id).updated_at
    second = posts.update_post(post.id, "T3", "C3", caller_id=alice.id).updated_at

    assert frozen < first < second


def test_non_author_cannot_update(posts, alice, bob):
    post = posts.create_post("T1", "C1", caller_id=alice.id)
    before = post.updated_at

    with pytest.raises(Forbidden):
        posts.update_post(post.id, "hacked", "hacked", caller_id=bob.id)

    unchanged = posts.get_post(post.id)
    assert unchanged.title == "T1"
    assert unchanged.content == "C1"
    assert unchanged.updated_at == before


def test_ownership_is_checked_before_input(posts, alice, bob):
    post = posts.create_post("T1", "C1", caller_id=alice.id)

    with pytest.raises(Forbidden):
        posts.update_post(post.id, "", "", caller_id=bob.id)


def test_update_missing_post(posts, alice):
    with pytest.raises(NotFound):
        posts.update_post("missing", "T", "C", caller_id=alice.id)


def test_author_update_requires_content(posts, alice):
    post = posts.create_post("T1", "C1", caller_id=alice.id)
    with pytest.raises(ValidationError):
        posts.update_post(post.id, "T2", "", caller_id=alice.id)
    assert posts.get_post(post.id).title == "T1"


def test_non_author_cannot_delete(posts, alice, bob):
    post = posts.create_post("T1", "C1", caller_id=alice.id)

    with pytest.raises(Forbidden):
        posts.delete_post(post.id, caller_id=bob.id)

    assert posts.get_post(post.id).id == post.id


def test_author_can_delete(posts, alice):
    post = posts.create_post("T1", "C1", caller_id=alice.id)

    posts.delete_post(post.id, caller_id=alice.id)

    with pytest.raises(NotFound):
        posts.get_post(post.id)


def test_delete_missing_post(posts, alice):
    with pytest.raises(NotFound):
        posts.delete_post("missing", caller_id=alice.id)


def test_list_filters_by_author(posts, alice, bob):
    a1 = posts.create_post("A1", "C", caller_id=alice.id)
    posts.create_post("B1", "C", caller_id=bob.id)
    a2 = posts.create_post("A2", "C", caller_id=alice.id)

    alice_posts = posts.list_posts(author_id=alice.id)

    assert {p.id for p in alice_posts} == {a1.id, a2.id}
    assert all(p.author_id == alice.id for p in alice_posts)
    assert len(posts.list_posts()) == 3
    assert posts.list_posts(author_id="nobody") == []


def test_list_orders_by_most_recent_update(posts, alice):
    first = posts.create_post("first", "C", caller_id=alice.id)
    posts.create_post("second", "C", caller_id=alice.id)
    posts.update_post(first.id, "first, edited", "C", caller_id=alice.id)

    listed = posts.list_posts()

    assert listed[0].id == first.id
    stamps = [p.updated_at for p in listed]
    assert stamps == sorted(stamps, reverse=True)
