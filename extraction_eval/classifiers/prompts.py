"""
Judge prompt templates for semantic match classification.

Both templates take the leftover gold and predicted items as JSON arrays
via the {gold} and {predicted} placeholders. Placeholders are substituted
with a regex rather than str.format so the JSON braces in the instructions
need no escaping.
"""

import json
import re

from extraction_eval.config.constants import TASK_RELATIONSHIP
from extraction_eval.matching.models import CausalRelationship, ExtractionItem

ENTITY_SEMANTIC_PROMPT = """You are evaluating entity extraction output against a gold standard.

All exact matches have already been removed. Compare the remaining items.

Gold entities:
{gold}

Predicted entities:
{predicted}

Instructions:
1. Normalize casing, punctuation and common abbreviations before comparing.
2. A SEMANTIC match is a predicted entity that names the same concept as a
   gold entity: a synonym, an abbreviation or expansion, or a
   hypernym/hyponym of it.
3. A PARTIAL match is a predicted entity where one string is a substring of
   the other and both denote the same concept.
4. Each gold and each predicted entity may appear in at most one pair.
5. Copy entity strings exactly as they appear in the lists above.

Return ONLY a JSON object with exactly these keys, in this order:
{
  "semantic_match_pairs": [{"gold": "...", "predicted": "..."}],
  "partial_match_pairs": [{"gold": "...", "predicted": "..."}]
}
Use empty arrays when there are no matches. Do not add any other text."""

RELATIONSHIP_SEMANTIC_PROMPT = """You are evaluating causal relationship extraction output against a gold standard.

All exact matches have already been removed. Each relationship is an object
with a "cause" and an "effect". Compare the remaining items.

Gold relationships:
{gold}

Predicted relationships:
{predicted}

Instructions:
1. Normalize casing, punctuation and common abbreviations before comparing.
2. A SEMANTIC match is a predicted relationship whose cause and effect
   express the same concepts as a gold relationship, with the same causal
   direction and polarity (synonyms, abbreviations, hypernyms/hyponyms).
3. A PARTIAL match is a predicted relationship where the cause or effect
   strings are substrings of the gold ones (or the reverse) and the
   relationship denotes the same causal link.
4. Each gold and each predicted relationship may appear in at most one pair.
5. Copy cause and effect strings exactly as they appear in the lists above.

Return ONLY a JSON object with exactly these keys, in this order:
{
  "semantic_match_pairs": [
    {"gold": {"cause": "...", "effect": "..."}, "predicted": {"cause": "...", "effect": "..."}}
  ],
  "partial_match_pairs": [
    {"gold": {"cause": "...", "effect": "..."}, "predicted": {"cause": "...", "effect": "..."}}
  ]
}
Use empty arrays when there are no matches. Do not add any other text."""


_PLACEHOLDER = re.compile(r"\{(gold|predicted)\}")


def _serialize(items: list[ExtractionItem]) -> str:
    payload = [
        {"cause": item.cause, "effect": item.effect}
        if isinstance(item, CausalRelationship)
        else item
        for item in items
    ]
    return json.dumps(payload, indent=2, ensure_ascii=False)


def build_judge_prompt(
    task: str,
    unmatched_gold: list[ExtractionItem],
    unmatched_predicted: list[ExtractionItem],
) -> str:
    """
    Render the judge prompt for a task.

    Relationships are sent as {cause, effect} only; location and confidence
    play no part in identity and are left out.
    """
    template = (
        RELATIONSHIP_SEMANTIC_PROMPT
        if task == TASK_RELATIONSHIP
        else ENTITY_SEMANTIC_PROMPT
    )
    values = {
        "gold": _serialize(unmatched_gold),
        "predicted": _serialize(unmatched_predicted),
    }
    # Single pass so placeholder-like text inside items is left alone
    return _PLACEHOLDER.sub(lambda m: values[m.group(1)], template)
