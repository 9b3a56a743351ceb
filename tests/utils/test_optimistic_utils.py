from datetime import datetime, timezone

from models.models import Message
from utils.optimistic_utils import (
    append_optimistic,
    confirm_optimistic,
    discard_optimistic,
    is_temp_id,
    make_temp_id,
    remove_by_id,
    restore,
)


def _message(message_id, content="hello"):
    return Message(
        id=message_id,
        content=content,
        category_id="cat-1",
        created_at=datetime(2025, 3, 1, tzinfo=timezone.utc),
    )


def test_make_temp_id_is_unique_and_recognisable():
    a, b = make_temp_id(), make_temp_id()
    assert a != b
    assert is_temp_id(a)
    assert not is_temp_id("5f1c9a")


def test_append_then_confirm_replaces_placeholder_in_place():
    existing = [_message("m1")]
    temp = _message(make_temp_id(), "draft")
    items = append_optimistic(existing, temp)
    assert [m.id for m in items] == ["m1", temp.id]
    assert len(existing) == 1

    saved = _message("m2", "draft")
    items = confirm_optimistic(items, temp.id, saved)

    assert [m.id for m in items] == ["m1", "m2"]


def test_discard_rolls_back_the_placeholder():
    temp = _message(make_temp_id())
    items = append_optimistic([_message("m1")], temp)

    assert [m.id for m in discard_optimistic(items, temp.id)] == ["m1"]


def test_remove_and_restore_keeps_position():
    items = [_message("m1"), _message("m2"), _message("m3")]

    remaining, removed = remove_by_id(items, "m2")
    assert [m.id for m in remaining] == ["m1", "m3"]
    assert removed[0] == 1

    assert [m.id for m in restore(remaining, removed)] == ["m1", "m2", "m3"]


def test_remove_unknown_id_is_a_noop():
    items = [_message("m1")]

    remaining, removed = remove_by_id(items, "nope")

    assert removed is None
    assert [m.id for m in restore(remaining, removed)] == ["m1"]


def test_restore_does_not_duplicate():
    items = [_message("m1")]
    assert len(restore(items, (0, items[0]))) == 1
