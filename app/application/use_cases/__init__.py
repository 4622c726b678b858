"""Aggregate application use cases."""

from .notifications import create_and_send, list_for_user, mark_all_read, mark_read

__all__ = [
    "create_and_send",
    "list_for_user",
    "mark_all_read",
    "mark_read",
]
