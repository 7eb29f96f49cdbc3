"""
Built-in sample data for the offline demo command.

Two short sentences annotated with entities and one causal relationship
each, plus predictions that exercise every match type. The entity task is
scored with a MockJudgeClient whose canned verdict plays the judge; the
relationship task uses the lexical overlap classifier.
"""

import json

from ..judge.mock_client import MockJudgeClient
from ..matching.models import CausalRelationship
from .schema import EvaluationRun, SentenceResult

DEMO_PROMPT_NAME = "causal-extraction-v1"
DEMO_MODEL = "demo-model"

DEMO_SENTENCES = {
    "s1": "The heavy rain caused flooding in the city.",
    "s2": "Smoking increases the risk of lung cancer.",
}

# Verdict for the leftovers of the entity run after the exact prefilter
DEMO_JUDGMENT = json.dumps(
    {
        "semantic_match_pairs": [{"gold": "flooding", "predicted": "floods"}],
        "partial_match_pairs": [{"gold": "lung cancer", "predicted": "cancer"}],
    },
    indent=2,
)


def build_demo_runs() -> list[EvaluationRun]:
    entity_run = EvaluationRun(
        prompt_name=DEMO_PROMPT_NAME,
        model=DEMO_MODEL,
        task="entity_extraction",
        dataset="demo",
        sentence_results=[
            SentenceResult(
                sentence_id="s1",
                text=DEMO_SENTENCES["s1"],
                predictions=["Heavy Rain", "floods", "city"],
                gold_data=["heavy rain", "flooding"],
            ),
            SentenceResult(
                sentence_id="s2",
                text=DEMO_SENTENCES["s2"],
                predictions=["smoking", "cancer"],
                gold_data=["Smoking", "lung cancer"],
            ),
        ],
    )

    relationship_run = EvaluationRun(
        prompt_name=DEMO_PROMPT_NAME,
        model=DEMO_MODEL,
        task="relationship_extraction",
        dataset="demo",
        sentence_results=[
            SentenceResult(
                sentence_id="s1",
                text=DEMO_SENTENCES["s1"],
                predictions=[
                    CausalRelationship(cause="heavy rain", effect="urban flooding")
                ],
                gold_data=[CausalRelationship(cause="heavy rain", effect="flooding")],
            ),
            SentenceResult(
                sentence_id="s2",
                text=DEMO_SENTENCES["s2"],
                predictions=[
                    CausalRelationship(cause="Smoking", effect="lung cancer"),
                    CausalRelationship(cause="risk", effect="smoking habit"),
                ],
                gold_data=[CausalRelationship(cause="smoking", effect="lung cancer")],
            ),
        ],
    )

    return [entity_run, relationship_run]


def build_demo_judge() -> MockJudgeClient:
    """Mock judge answering every prompt with DEMO_JUDGMENT in a code fence."""
    return MockJudgeClient(
        default_response=f"Here is the result:\n```json\n{DEMO_JUDGMENT}\n```",
        model_name="demo-judge",
        provider="demo",
    )
