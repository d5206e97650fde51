"""PDF.co action definitions."""

from .base import BaseAction, PreparedRequest
from .registry import ACTION_TYPES, create_action, list_actions

__all__ = [
    "ACTION_TYPES",
    "BaseAction",
    "PreparedRequest",
    "create_action",
    "list_actions",
]
