"""quire utilities."""

from .array import insert_order_sorted, remove_if_present
from .hooks import EventHooks

__all__ = ["EventHooks", "insert_order_sorted", "remove_if_present"]
