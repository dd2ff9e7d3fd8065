import asyncio
from datetime import timedelta

import pytest

from safespace.catalog import REFLECTION_PROMPTS
from safespace.controllers.reflect import ENTRY_LIMIT, ReflectController
from safespace.core.timezone import utc_now
from safespace.relay import REFLECT_PROMPT


@pytest.fixture
def reflect(session, store, notifier, relay):
    return ReflectController(session, store, notifier, relay)


def test_save_entry_stores_reflection(reflect, store, notifier, gateway):
    gateway.reply("I ", "hear you.")
    reflect.draft = "I feel anxious"
    reflect.toggle_tag("worried")
    reflect.toggle_tag("hopeful")

    entry = asyncio.run(reflect.save_entry())

    assert entry.ai_response == "I hear you."
    assert entry.emotion_tags == ["worried", "hopeful"]
    assert gateway.last_payload["messages"] == [
        {"role": "system", "content": REFLECT_PROMPT},
        {"role": "user", "content": "I feel anxious"},
    ]
    assert reflect.entries[0].id == entry.id
    assert reflect.expanded_entry == entry.id
    assert reflect.draft == ""
    assert reflect.selected_tags == []
    assert notifier.last.title == "Reflection saved"
    assert store.table("journal_entries").get(entry.id).ai_response == "I hear you."


def test_failed_reflection_still_saves_entry(reflect, store, gateway):
    gateway.fail(500)
    reflect.draft = "rough day"

    entry = asyncio.run(reflect.save_entry())

    assert entry is not None
    assert entry.ai_response is None
    assert store.table("journal_entries").count(user_id="user-1") == 1


def test_empty_reflection_is_stored_as_null(reflect, gateway):
    gateway.reply()
    reflect.draft = "nothing much"
    assert asyncio.run(reflect.save_entry()).ai_response is None


def test_unreachable_relay_saves_nothing(session, store, notifier, unreachable_relay):
    reflect = ReflectController(session, store, notifier, unreachable_relay)
    reflect.draft = "hello"

    assert asyncio.run(reflect.save_entry()) is None
    assert store.table("journal_entries").count() == 0
    assert notifier.last.variant == "destructive"
    assert reflect.draft == "hello"


def test_blank_draft_is_ignored(reflect, gateway):
    reflect.draft = "   "
    assert asyncio.run(reflect.save_entry()) is None
    assert gateway.requests == []


def test_anonymous_cannot_save(anonymous, store, notifier, relay, gateway):
    reflect = ReflectController(anonymous, store, notifier, relay)
    reflect.draft = "hi"
    assert asyncio.run(reflect.save_entry()) is None
    assert notifier.last.title == "Sign in required"
    assert gateway.requests == []


def test_toggle_tag(reflect):
    assert reflect.toggle_tag("proud") == ["proud"]
    assert reflect.toggle_tag("proud") == []
    with pytest.raises(ValueError):
        reflect.toggle_tag("meh")


def test_use_prompt(reflect):
    prompt = REFLECTION_PROMPTS[2]
    assert reflect.use_prompt(prompt) == prompt + " "
    with pytest.raises(ValueError):
        reflect.use_prompt("Write anything")


def test_toggle_expanded(reflect):
    assert reflect.toggle_expanded("a") == "a"
    assert reflect.toggle_expanded("b") == "b"
    assert reflect.toggle_expanded("b") is None


def test_load_entries_newest_first(reflect, store):
    start = utc_now() - timedelta(days=1)
    for i in range(ENTRY_LIMIT + 3):
        store.table("journal_entries").insert({
            "user_id": "user-1",
            "content": f"entry {i}",
            "created_at": start + timedelta(minutes=i),
        })
    store.table("journal_entries").insert({"user_id": "user-2", "content": "someone else"})

    entries = reflect.load_entries()

    assert len(entries) == ENTRY_LIMIT
    assert entries[0].content == f"entry {ENTRY_LIMIT + 2}"
    assert all(e.user_id == "user-1" for e in entries)


def test_delete_entry_is_owner_only(reflect, store, notifier):
    mine = store.table("journal_entries").insert({"user_id": "user-1", "content": "mine"})
    theirs = store.table("journal_entries").insert({"user_id": "user-2", "content": "theirs"})
    reflect.load_entries()

    assert reflect.delete_entry(theirs.id) is False
    assert store.table("journal_entries").first(id=theirs.id) is not None

    assert reflect.delete_entry(mine.id) is True
    assert reflect.entries == []
    assert store.table("journal_entries").first(id=mine.id) is None
