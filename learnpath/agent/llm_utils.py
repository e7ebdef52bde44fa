"""Recovery of JSON documents from loosely formatted LLM output."""

import json
import re
from typing import Any

from learnpath.core.logging import get_logger

logger = get_logger(__name__)

OBJECT = "{"
ARRAY = "["
_CLOSERS = {OBJECT: "}", ARRAY: "]"}
_PYTHON_TYPES = {OBJECT: dict, ARRAY: list}

_CODE_BLOCK = re.compile(
    r"```(?:json|javascript|js|text)?\s*\n(.*?)\n\s*```", re.DOTALL | re.IGNORECASE
)


def _fix_trailing_commas(text: str) -> str:
    """Remove trailing commas before closing brackets."""
    return re.sub(r",(\s*[}\]])", r"\1", text)


def _try_parse_json(text: str) -> dict[str, Any] | list[Any] | None:
    """Attempt to parse JSON after trailing-comma repair.

    Returns:
        Parsed JSON or None if parsing fails
    """
    try:
        return json.loads(_fix_trailing_commas(text.strip()))
    except (json.JSONDecodeError, ValueError):
        return None


def _extract_from_code_block(text: str) -> str | None:
    """Extract content from the first markdown code block."""
    match = _CODE_BLOCK.search(text)
    if match:
        return match.group(1)
    return None


def _extract_balanced_region(text: str, containers: tuple[str, ...]) -> str | None:
    """Extract the first balanced region opened by one of ``containers``.

    Brackets inside JSON strings (including escaped quotes) are ignored, so
    prose such as ``"Use [brackets] carefully"`` does not end the region early.

    Args:
        text: Text potentially containing JSON
        containers: Opening characters to look for, ``"{"`` and/or ``"["``

    Returns:
        First complete bracketed substring or None if not found
    """
    start_idx = -1
    for i, char in enumerate(text):
        if char in containers:
            start_idx = i
            break

    if start_idx == -1:
        return None

    depth = 0
    in_string = False
    escape_next = False

    for i in range(start_idx, len(text)):
        char = text[i]

        if escape_next:
            escape_next = False
            continue

        if char == "\\":
            escape_next = True
            continue

        if char == '"':
            in_string = not in_string
            continue

        if in_string:
            continue

        if char in _CLOSERS:
            depth += 1
        elif char in ("}", "]"):
            depth -= 1
            if depth == 0:
                return text[start_idx : i + 1]

    return None


def parse_llm_json_response(
    content: str | None,
    containers: tuple[str, ...] = (OBJECT, ARRAY),
) -> dict[str, Any] | list[Any]:
    """Parse an LLM JSON response with a three-strategy cascade.

    1. Direct parse (fast path for clean JSON)
    2. Contents of the first markdown code block
    3. First balanced bracketed region in mixed text

    A strategy only succeeds if it yields one of the allowed ``containers``
    (``OBJECT`` -> dict, ``ARRAY`` -> list).

    Raises:
        ValueError: If content is empty or all strategies fail
    """
    if not content:
        raise ValueError("Empty LLM response")

    allowed = tuple(_PYTHON_TYPES[c] for c in containers)

    result = _try_parse_json(content)
    if isinstance(result, allowed):
        logger.debug("Parsed JSON using direct strategy")
        return result

    code_block = _extract_from_code_block(content)
    if code_block:
        result = _try_parse_json(code_block)
        if isinstance(result, allowed):
            logger.debug("Parsed JSON using code block strategy")
            return result

    region = _extract_balanced_region(content.strip(), containers)
    if region:
        result = _try_parse_json(region)
        if isinstance(result, allowed):
            logger.debug("Parsed JSON using substring extraction strategy")
            return result

    logger.warning("Failed to parse LLM JSON response", content_preview=content[:200])
    raise ValueError("Failed to parse LLM JSON response: no valid JSON found")
