from datetime import timedelta

import pytest

from safespace.controllers.connect import POST_LIMIT, ConnectController
from safespace.core.timezone import utc_now
from safespace.store import StoreError


@pytest.fixture
def connect(session, store, notifier):
    controller = ConnectController(session, store, notifier)
    controller.select_topic("anxiety")
    return controller


def test_create_post_is_anonymous_share(connect, store, notifier):
    post = connect.create_post("  exams are coming  ")

    assert post.content == "exams are coming"
    assert post.topic == "anxiety"
    assert post.is_professional is False
    assert [p.id for p in connect.posts] == [post.id]
    assert (notifier.last.title, notifier.last.description) == (
        "Shared", "Your thoughts have been shared anonymously."
    )


def test_verified_professional_posts_are_flagged(make_session, store, notifier, make_professional):
    make_professional("pro-1")
    controller = ConnectController(make_session("pro-1"), store, notifier)
    assert controller.create_post("You are not alone.").is_professional is True


def test_pending_professional_is_not_flagged(make_session, store, notifier, make_professional):
    make_professional("pro-2", status="pending")
    controller = ConnectController(make_session("pro-2"), store, notifier)
    assert controller.create_post("hello").is_professional is False


def test_anonymous_cannot_post(anonymous, store, notifier):
    controller = ConnectController(anonymous, store, notifier)
    assert controller.create_post("hi") is None
    assert notifier.last.title == "Sign in required"
    assert store.table("connect_posts").count() == 0


def test_load_posts_by_topic_newest_first(connect, store):
    start = utc_now() - timedelta(hours=2)
    for i in range(POST_LIMIT + 2):
        store.table("connect_posts").insert({
            "user_id": "user-9", "content": f"post {i}", "topic": "anxiety",
            "created_at": start + timedelta(minutes=i),
        })
    store.table("connect_posts").insert({"user_id": "user-9", "content": "other", "topic": "family"})

    posts = connect.load_posts()

    assert len(posts) == POST_LIMIT
    assert posts[0].content == f"post {POST_LIMIT + 1}"
    assert {p.topic for p in posts} == {"anxiety"}


def test_unknown_topic(connect):
    with pytest.raises(ValueError):
        connect.select_topic("sports")


def test_toggle_like_round_trip(connect, store):
    post = connect.create_post("first")

    assert connect.toggle_like(post.id) is True
    assert post.id in connect.user_likes
    assert connect.posts[0].likes_count == 1
    assert store.count_likes(post.id) == 1

    assert connect.toggle_like(post.id) is True
    assert post.id not in connect.user_likes
    assert connect.posts[0].likes_count == 0
    assert store.count_likes(post.id) == 0


def test_like_counter_matches_like_rows(make_session, store, notifier):
    author = ConnectController(make_session("author"), store, notifier)
    post = author.create_post("count me")

    users = [ConnectController(make_session(f"u{i}"), store, notifier) for i in range(5)]
    for controller in users:
        controller.load_posts()
        controller.toggle_like(post.id)
    users[1].toggle_like(post.id)
    users[3].toggle_like(post.id)

    stored = store.table("connect_posts").get(post.id).likes_count
    assert stored == store.count_likes(post.id) == 3


def test_like_failure_rolls_back(connect, store, notifier, monkeypatch):
    post = connect.create_post("first")

    def refuse(post_id, user_id):
        raise StoreError("post_likes", "permission denied")

    monkeypatch.setattr(store, "add_like", refuse)

    assert connect.toggle_like(post.id) is False
    assert post.id not in connect.user_likes
    assert connect.posts[0].likes_count == 0
    assert notifier.last.variant == "destructive"


def test_unlike_failure_rolls_back(connect, store, monkeypatch):
    post = connect.create_post("first")
    connect.toggle_like(post.id)

    def refuse(post_id, user_id):
        raise StoreError("post_likes", "permission denied")

    monkeypatch.setattr(store, "remove_like", refuse)

    assert connect.toggle_like(post.id) is False
    assert post.id in connect.user_likes
    assert connect.posts[0].likes_count == 1


def test_user_likes_are_loaded(connect, store, make_session, notifier):
    post = connect.create_post("first")
    connect.toggle_like(post.id)

    fresh = ConnectController(connect.session, store, notifier)
    assert fresh.load_user_likes() == {post.id}
    assert ConnectController(make_session("user-2"), store, notifier).load_user_likes() == set()


def test_comments_oldest_first(connect, make_session, store, notifier):
    post = connect.create_post("first")
    connect.add_comment(post.id, "one")
    ConnectController(make_session("user-2"), store, notifier).add_comment(post.id, "two")

    assert connect.expand(post.id) == post.id
    assert [c.content for c in connect.comments[post.id]] == ["one", "two"]
    assert connect.expand(post.id) is None


def test_blank_comment_is_ignored(connect, store):
    post = connect.create_post("first")
    assert connect.add_comment(post.id, "  ") is None
    assert store.table("post_comments").count() == 0
