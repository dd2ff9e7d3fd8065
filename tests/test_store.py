import pytest
from sqlalchemy.exc import OperationalError

from safespace.db.session import process_database_url
from safespace.models import MoodEntry
from safespace.store import RowNotFound, StoreError


def test_insert_and_select_filters(store):
    moods = store.table("mood_entries")
    moods.insert_many([
        {"user_id": "a", "mood": "happy"},
        {"user_id": "a", "mood": "sad", "note": "long day"},
        {"user_id": "b", "mood": "calm"},
    ])

    assert {r.mood for r in moods.select(user_id="a")} == {"happy", "sad"}
    assert {r.mood for r in moods.select(mood=["happy", "calm"])} == {"happy", "calm"}
    assert [r.mood for r in moods.select(note=None, user_id="a")] == ["happy"]
    assert [r.mood for r in moods.select(where=[MoodEntry.note.is_not(None)])] == ["sad"]
    assert moods.count(user_id="a") == 2


def test_insert_many_keeps_order(store):
    rows = store.table("chat_messages").insert_many([
        {"user_id": "a", "role": "user", "content": "q"},
        {"user_id": "a", "role": "assistant", "content": "a"},
    ])
    assert [r.role for r in rows] == ["user", "assistant"]
    assert rows[0].id != rows[1].id
    assert rows[0].created_at.tzinfo is not None


def test_unknown_column_and_table(store):
    with pytest.raises(StoreError):
        store.table("mood_entries").select(colour="blue")
    with pytest.raises(StoreError):
        store.table("mood_entries").insert({"user_id": "a", "mood": "happy", "colour": "blue"})
    with pytest.raises(StoreError):
        store.table("secrets")


def test_update_and_delete_need_a_filter(store):
    moods = store.table("mood_entries")
    moods.insert({"user_id": "a", "mood": "happy"})
    with pytest.raises(StoreError):
        moods.update({"mood": "sad"})
    with pytest.raises(StoreError):
        moods.delete()
    assert moods.count() == 1


def test_update_is_visible_on_next_read(store):
    moods = store.table("mood_entries")
    row = moods.insert({"user_id": "a", "mood": "happy"})
    assert moods.update({"mood": "tired"}, id=row.id) == 1
    assert moods.get(row.id).mood == "tired"


def test_get_missing_row(store):
    with pytest.raises(RowNotFound):
        store.table("stories").get("missing")


def test_constraint_violation_is_store_error_and_rolls_back(store):
    post = store.table("connect_posts").insert({"user_id": "a", "content": "x", "topic": "general"})
    store.add_like(post.id, "b")

    with pytest.raises(StoreError):
        store.add_like(post.id, "b")

    # The session is usable again and the counter was not bumped twice
    assert store.table("connect_posts").get(post.id).likes_count == 1
    assert store.count_likes(post.id) == 1


def test_like_missing_post(store):
    with pytest.raises(RowNotFound):
        store.add_like("missing", "b")
    assert store.count_likes("missing") == 0


def test_remove_like_never_goes_negative(store):
    post = store.table("connect_posts").insert({"user_id": "a", "content": "x", "topic": "general"})
    assert store.remove_like(post.id, "nobody") == 0


def test_driver_errors_are_wrapped(store, db, monkeypatch):
    def broken(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(db, "execute", broken)
    with pytest.raises(StoreError) as info:
        store.table("mood_entries").select()
    assert info.value.table == "mood_entries"


@pytest.mark.parametrize(
    "url, expected",
    [
        ("", "sqlite:///./safespace.db"),
        ("sqlite://", "sqlite://"),
        ("postgres://u:p@db.example.com/app", "postgresql://u:p@db.example.com/app?sslmode=require"),
        ("postgresql://u:p@db/app?x=1", "postgresql://u:p@db/app?x=1&sslmode=require"),
        ("postgresql://u:p@db/app?sslmode=disable", "postgresql://u:p@db/app?sslmode=disable"),
    ],
)
def test_process_database_url(url, expected):
    assert process_database_url(url) == expected
