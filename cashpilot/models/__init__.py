"""Domain models for transaction analytics."""

from cashpilot.models.base import ChangeEvent

__all__ = ["ChangeEvent"]
