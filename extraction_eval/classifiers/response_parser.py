"""
Fail-soft parsing of judge replies.

Judges are asked for a bare JSON object but often wrap it in a code fence
or a sentence of preamble. extract_json runs an ordered tuple of pure
extraction strategies and returns the first hit; parse_classification_response
decodes the result and coerces the pairs for the task.

Nothing in this module raises on bad judge output. Anything unusable
degrades to an empty ClassificationResult, which the pipeline treats as
"no semantic or partial matches found".

Example:
    >>> raw = 'Here is the result:\\n```json\\n{"semantic_match_pairs": [], "partial_match_pairs": []}\\n```'
    >>> extract_json(raw)
    '{"semantic_match_pairs": [], "partial_match_pairs": []}'
"""

import json
import logging
import re
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from extraction_eval.config.constants import TASK_RELATIONSHIP
from extraction_eval.matching.models import (
    CausalRelationship,
    ClassificationResult,
    ClassifiedPair,
    ExtractionItem,
)

logger = logging.getLogger(__name__)

SEMANTIC_KEY = "semantic_match_pairs"
PARTIAL_KEY = "partial_match_pairs"

_FENCE_PATTERN = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)

_PREFIX_PATTERN = re.compile(
    r"(?:Here is|Here's|The output is|Output:|Result:|The result is|Below is)",
    re.IGNORECASE,
)


def _balanced_object_at(text: str, start: int) -> str | None:
    """
    Return the balanced {...} starting at text[start], or None.

    Braces inside JSON string literals are ignored.
    """
    depth = 0
    in_string = False
    escaped = False

    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start : index + 1]

    return None


def _first_object_from(text: str, offset: int = 0) -> str | None:
    """First balanced object at or after offset that contains a quote."""
    start = text.find("{", offset)
    while start != -1:
        candidate = _balanced_object_at(text, start)
        if candidate is not None and '"' in candidate:
            return candidate
        start = text.find("{", start + 1)
    return None


def _from_code_fence(text: str) -> str | None:
    match = _FENCE_PATTERN.search(text)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return None


def _from_bare_object(text: str) -> str | None:
    return _first_object_from(text)


def _from_prefix_phrase(text: str) -> str | None:
    match = _PREFIX_PATTERN.search(text)
    if match is None:
        return None
    return _first_object_from(text, match.end())


EXTRACTION_STRATEGIES: tuple[Callable[[str], str | None], ...] = (
    _from_code_fence,
    _from_bare_object,
    _from_prefix_phrase,
)


def extract_json(raw_text: str) -> str | None:
    """
    Extract a JSON object string from free-form judge output.

    Tries, in order: a fenced code block (``` or ```json), the first
    balanced top-level {...} containing a quote, and a {...} following a
    known prefix phrase ("Here is", "Output:", ...).

    Returns:
        The extracted text, or None when no strategy matches
    """
    if not raw_text:
        return None

    for strategy in EXTRACTION_STRATEGIES:
        extracted = strategy(raw_text)
        if extracted is not None:
            return extracted
    return None


def _load_object(text: str | None) -> dict[str, Any] | None:
    if not text:
        return None
    try:
        value = json.loads(text)
    except json.JSONDecodeError:
        return None
    return value if isinstance(value, dict) else None


def _coerce_relationship(value: Any) -> CausalRelationship | None:
    if isinstance(value, str):
        value = _load_object(value)
    if not isinstance(value, dict):
        return None
    try:
        return CausalRelationship(cause=value.get("cause"), effect=value.get("effect"))
    except ValidationError:
        return None


def _coerce_item(value: Any, task: str) -> ExtractionItem | None:
    if task == TASK_RELATIONSHIP:
        return _coerce_relationship(value)
    if isinstance(value, str) and value.strip():
        return value
    return None


def _coerce_pairs(raw_pairs: Any, task: str) -> list[ClassifiedPair]:
    if not isinstance(raw_pairs, list):
        return []

    pairs: list[ClassifiedPair] = []
    for raw_pair in raw_pairs:
        if not isinstance(raw_pair, dict):
            continue
        gold = _coerce_item(raw_pair.get("gold"), task)
        predicted = _coerce_item(raw_pair.get("predicted"), task)
        if gold is None or predicted is None:
            logger.debug(f"Skipping malformed judge pair: {raw_pair!r}")
            continue
        pairs.append(ClassifiedPair(gold=gold, predicted=predicted))
    return pairs


def parse_classification_response(raw_text: str, task: str) -> ClassificationResult:
    """
    Turn a judge reply into a ClassificationResult.

    The extracted JSON is tried first, then the raw text as a whole. The
    first one that decodes to a JSON object wins. Malformed pairs are
    skipped individually.

    Args:
        raw_text: Judge reply text
        task: "entity_extraction" or "relationship_extraction"; controls
            whether pair members are coerced to strings or relationships

    Returns:
        ClassificationResult, empty when nothing usable was found
    """
    data = _load_object(extract_json(raw_text)) or _load_object(raw_text)

    if data is None:
        logger.warning("Judge response contained no parseable JSON object")
        return ClassificationResult.empty()

    return ClassificationResult(
        semantic_pairs=_coerce_pairs(data.get(SEMANTIC_KEY), task),
        partial_pairs=_coerce_pairs(data.get(PARTIAL_KEY), task),
    )
