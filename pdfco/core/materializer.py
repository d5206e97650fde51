"""
Inline result materialization.

When an action asked for inline output but the API answered with a result
URL, the content at that URL is downloaded and attached under ``body``.
"""

import json
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Dict

from .errors import FetchError

logger = logging.getLogger(__name__)

Fetch = Callable[[str], Awaitable[str]]


class InlineMode(str, Enum):
    """How fetched result content is decoded."""
    NONE = "none"   # binary output (PDF, TIFF, XLS); leave the URL alone
    TEXT = "text"   # attach the body as text
    JSON = "json"   # parse the body as JSON (e.g. lists of page image URLs)


async def materialize(
    envelope: Dict[str, Any],
    inline: bool,
    mode: InlineMode,
    fetch: Fetch,
) -> Dict[str, Any]:
    """
    Attach fetched result content to an envelope.

    Args:
        envelope: Immediate response or terminal status record
        inline: Whether the request asked for inline output
        mode: Decode strategy chosen by the action
        fetch: Coroutine function downloading a URL as text

    Returns:
        A new envelope with ``body`` set, or the input envelope when nothing
        needs fetching

    Raises:
        FetchError: Download failed, or JSON mode got non-JSON content
    """
    url = envelope.get("url")
    if not inline or mode is InlineMode.NONE or not url:
        return envelope

    content = await fetch(url)

    if mode is InlineMode.JSON:
        try:
            body = json.loads(content)
        except ValueError as e:
            raise FetchError(url, f"content is not valid JSON: {e}") from e
    else:
        body = content

    logger.debug(f"Materialized {len(content)} chars from {url}")
    return {**envelope, "body": body}
