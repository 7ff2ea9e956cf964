"""
Lenient parsing of model output into suggestions.

Models frequently wrap JSON in markdown fences or surround it with prose.
``parse_suggestions`` tolerates both and never raises: anything it cannot
recover becomes an empty list, logged as a warning.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, List, Optional

from .models import Suggestion

logger = logging.getLogger("linksuggest.parsing")

_LEADING_FENCE = re.compile(r"^\s*```[A-Za-z0-9_-]*[ \t]*\n?")
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```\s*$")
_ARRAY = re.compile(r"\[[\s\S]*\]")


def strip_code_fence(text: str) -> str:
    """Remove one leading and one trailing markdown code fence."""
    cleaned = _LEADING_FENCE.sub("", text, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def _load_list(text: str) -> Optional[List[Any]]:
    try:
        data = json.loads(text)
    except (ValueError, RecursionError):
        # Deeply nested input exhausts the decoder stack
        return None
    return data if isinstance(data, list) else None


def _is_suggestion(entry: Any) -> bool:
    return (
        isinstance(entry, dict)
        and isinstance(entry.get("originalText"), str)
        and isinstance(entry.get("suggestedChange"), str)
    )


def parse_suggestions(raw: str, limit: int = 3) -> List[Suggestion]:
    """
    Recover up to ``limit`` suggestions from raw model text.

    Order of attempts: direct JSON parse of the fence-stripped text, then the
    first bracket-delimited array found in the text. Entries without string
    ``originalText`` and ``suggestedChange`` are dropped.
    """
    if not isinstance(raw, str) or not raw.strip():
        logger.warning("Model returned empty output; no suggestions")
        return []

    cleaned = strip_code_fence(raw)
    entries = _load_list(cleaned)

    if entries is None:
        match = _ARRAY.search(cleaned)
        if match:
            entries = _load_list(match.group(0))
        if entries is None:
            logger.warning(
                "Could not parse model output as a JSON array (%d chars); "
                "falling back to no suggestions",
                len(raw),
            )
            return []
        logger.info("Recovered suggestions array embedded in model output")

    valid = [entry for entry in entries if _is_suggestion(entry)]
    dropped = len(entries) - len(valid)
    if dropped:
        logger.debug("Dropped %d malformed suggestion entries", dropped)

    return [
        Suggestion(
            original_text=entry["originalText"],
            suggested_change=entry["suggestedChange"],
        )
        for entry in valid[:limit]
    ]
