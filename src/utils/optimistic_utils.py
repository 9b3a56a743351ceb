import secrets
from typing import List, Optional, Tuple, TypeVar
from pydantic import BaseModel
from utils.constants import OPTIMISTIC_ID_PREFIX

T = TypeVar("T", bound=BaseModel)


def make_temp_id() -> str:
    return OPTIMISTIC_ID_PREFIX + secrets.token_hex(6)


def is_temp_id(item_id: str) -> bool:
    return item_id.startswith(OPTIMISTIC_ID_PREFIX)


def append_optimistic(items: List[T], item: T) -> List[T]:
    return [*items, item]


def confirm_optimistic(items: List[T], temp_id: str, saved: T) -> List[T]:
    """Swap the placeholder for the server row, keeping its position."""
    return [saved if x.id == temp_id else x for x in items]


def discard_optimistic(items: List[T], temp_id: str) -> List[T]:
    return [x for x in items if x.id != temp_id]


def remove_by_id(items: List[T], item_id: str) -> Tuple[List[T], Optional[Tuple[int, T]]]:
    """Drop an item ahead of a delete call.

    Returns the remaining items and ``(index, item)`` so a failed delete can
    be rolled back with :func:`restore`.
    """
    for idx, x in enumerate(items):
        if x.id == item_id:
            return items[:idx] + items[idx + 1 :], (idx, x)
    return list(items), None


def restore(items: List[T], removed: Optional[Tuple[int, T]]) -> List[T]:
    if removed is None:
        return list(items)
    idx, item = removed
    if any(x.id == item.id for x in items):
        return list(items)
    return items[:idx] + [item] + items[idx:]
