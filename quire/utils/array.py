"""Small list helpers shared by the hook registry and the project model."""

from typing import Any, Protocol, TypeVar


class _Ordered(Protocol):
    order: int


T = TypeVar("T", bound=_Ordered)


def insert_order_sorted(items: list[T], item: T) -> list[T]:
    """Insert ``item`` into ``items`` keeping ascending ``order``.

    The item lands before the first element whose order is strictly
    greater, so equal orders keep their insertion order.

    Returns:
        The same list, mutated in place.
    """
    index = len(items)
    for i, existing in enumerate(items):
        if existing.order > item.order:
            index = i
            break
    items.insert(index, item)
    return items


def remove_if_present(items: list[Any], item: Any) -> bool:
    """Remove the first element that *is* ``item``.

    Returns:
        True if an element was removed.
    """
    for i, existing in enumerate(items):
        if existing is item:
            del items[i]
            return True
    return False
