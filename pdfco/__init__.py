"""
PDF.co actions.

Typed PDF.co operations (conversion, editing, security, OCR, search/replace,
invoice parsing) on top of a shared submit/poll/materialize core.
"""

from .config.settings import ClientConfig
from .runner import ActionResult, ActionRunner

__version__ = "1.0.0"

__all__ = [
    "ActionResult",
    "ActionRunner",
    "ClientConfig",
]
