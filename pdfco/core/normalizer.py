"""
Custom profile sanitization.

The ``profiles`` option is typed by hand in a workflow editor and often uses
relaxed JSON (single quotes, bare keys, trailing commas). The remote API wants
a JSON-encoded string, so the text is rewritten into strict JSON when that is
possible and forwarded unchanged when it is not.
"""

import json
import logging
import warnings
from typing import Any, Dict, MutableMapping

from .errors import NormalizationWarning

logger = logging.getLogger(__name__)

PROFILES_KEY = "profiles"

# Python literals people paste from notebooks
_BARE_WORDS = {"True": "true", "False": "false", "None": "null"}


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _is_json(text: str) -> bool:
    try:
        json.loads(text, parse_constant=_reject_constant)
    except ValueError:
        return False
    return True


def _next_significant(text: str, start: int) -> str:
    """Return the next non-whitespace character at or after start ('' at end)."""
    for ch in text[start:]:
        if not ch.isspace():
            return ch
    return ""


def coerce_relaxed_json(text: str) -> str:
    """
    Rewrite relaxed JSON into strict JSON syntax.

    Handles single-quoted strings, unquoted object keys, Python literals
    and trailing commas. Double-quoted strings are copied verbatim. The
    result is not guaranteed to parse; callers must check.
    """
    out = []
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]

        if ch == '"':
            # Copy a double-quoted string as-is, honouring escapes
            j = i + 1
            while j < n and text[j] != '"':
                j += 2 if text[j] == "\\" else 1
            out.append(text[i:j + 1])
            i = j + 1

        elif ch == "'":
            out.append('"')
            i += 1
            while i < n and text[i] != "'":
                c = text[i]
                if c == "\\" and i + 1 < n:
                    nxt = text[i + 1]
                    out.append("'" if nxt == "'" else c + nxt)
                    i += 2
                    continue
                out.append('\\"' if c == '"' else c)
                i += 1
            out.append('"')
            i += 1

        elif ch.isalpha() or ch in "_$":
            j = i
            while j < n and (text[j].isalnum() or text[j] in "_$-"):
                j += 1
            word = text[i:j]
            if _next_significant(text, j) == ":":
                out.append(f'"{word}"')
            else:
                out.append(_BARE_WORDS.get(word, word))
            i = j

        elif ch == "," and _next_significant(text, i + 1) in ("}", "]"):
            i += 1

        else:
            out.append(ch)
            i += 1

    return "".join(out)


def normalize_profiles(value: str) -> str:
    """
    Normalize a non-empty profiles string.

    Returns the stripped text when it is already JSON, the coerced text when
    coercion yields JSON, and the original value otherwise.
    """
    text = value.strip()
    if _is_json(text):
        return text

    coerced = coerce_relaxed_json(text)
    if _is_json(coerced):
        logger.debug("Coerced relaxed profiles JSON into strict JSON")
        return coerced

    warnings.warn(
        "Custom profiles are not valid JSON and were forwarded unchanged",
        NormalizationWarning,
        stacklevel=3,
    )
    logger.warning(f"Forwarding unparseable profiles unchanged: {value[:80]!r}")
    return value


def sanitize_profiles(payload: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """
    Sanitize the ``profiles`` field of a request payload in place.

    Empty, whitespace-only, None or absent values are removed from the
    payload. Anything else is normalized with normalize_profiles(). Never
    raises for malformed input.

    Returns:
        The same payload, for chaining
    """
    value = payload.get(PROFILES_KEY)

    if value is None or (isinstance(value, str) and not value.strip()):
        payload.pop(PROFILES_KEY, None)
        return payload

    if not isinstance(value, str):
        # Already structured (e.g. a dict from a JSON params file)
        payload[PROFILES_KEY] = json.dumps(value)
        return payload

    payload[PROFILES_KEY] = normalize_profiles(value)
    return payload


def profiles_to_object(payload: Dict[str, Any], target_key: str) -> Dict[str, Any]:
    """
    Move sanitized profiles into a nested JSON object under target_key.

    Used by endpoints that take their custom configuration as an object
    rather than a JSON-encoded string. Unparseable text stays under
    ``profiles`` for the remote API to reject.
    """
    sanitize_profiles(payload)
    value = payload.get(PROFILES_KEY)
    if value is None:
        return payload

    try:
        payload[target_key] = json.loads(value, parse_constant=_reject_constant)
    except ValueError:
        return payload

    del payload[PROFILES_KEY]
    return payload
