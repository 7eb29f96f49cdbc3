"""
Pydantic schema models for evaluation runs.

- SentenceResult: One text block with its predicted and gold items
- EvaluationRun: One prompt x model x task run to score
- EvaluationMetrics: Exact-match TP/FP/FN metrics (per text block)
- EvaluationRecord: Everything computed for one run, or the error that stopped it
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from ..config.constants import TASK_ENTITY, TASK_RELATIONSHIP
from ..matching.models import (
    CausalRelationship,
    ExtractionItem,
    StandardSemanticMetricsResult,
)


class SentenceResult(BaseModel):
    """
    Predictions and gold data for one text block.

    Entities are plain strings; relationships are {cause, effect} mappings
    with optional location and confidence.
    """

    sentence_id: str = Field(..., description="Identifier of the text block")
    text: str = Field("", description="Source text of the block")
    predictions: list[ExtractionItem] = Field(default_factory=list)
    gold_data: list[ExtractionItem] = Field(default_factory=list)

    @field_validator("sentence_id")
    @classmethod
    def validate_sentence_id(cls, v: str) -> str:
        """Ensure sentence_id is not empty."""
        if not v or v.strip() == "":
            raise ValueError("sentence_id cannot be empty")
        return v.strip()


def _items_match_task(items: list[ExtractionItem], task: str) -> bool:
    expected = CausalRelationship if task == TASK_RELATIONSHIP else str
    return all(isinstance(item, expected) for item in items)


class EvaluationRun(BaseModel):
    """
    One prompt x model x task run whose predictions should be scored.

    Every prediction and gold item must be of the kind the task extracts.
    """

    prompt_name: str = Field(..., description="Prompt used to produce predictions")
    model: str = Field(..., description="Model that produced predictions")
    task: Literal["entity_extraction", "relationship_extraction"]
    dataset: str | None = Field(None, description="Dataset the blocks came from")
    sentence_results: list[SentenceResult] = Field(default_factory=list)

    @field_validator("prompt_name", "model")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v or v.strip() == "":
            raise ValueError("prompt_name and model cannot be empty")
        return v.strip()

    @model_validator(mode="after")
    def validate_item_kinds(self) -> "EvaluationRun":
        """Reject entity strings in relationship runs and vice versa."""
        kind = "strings" if self.task == TASK_ENTITY else "cause/effect objects"
        for block in self.sentence_results:
            for field_name in ("predictions", "gold_data"):
                if not _items_match_task(getattr(block, field_name), self.task):
                    raise ValueError(
                        f"{block.sentence_id}.{field_name}: {self.task} items must be {kind}"
                    )
        return self

    @property
    def label(self) -> str:
        return f"{self.prompt_name}/{self.model}/{self.task}"


class EvaluationMetrics(BaseModel):
    """Exact-match metrics counted within each text block."""

    precision: float = Field(..., ge=0.0, le=1.0)
    recall: float = Field(..., ge=0.0, le=1.0)
    f1: float = Field(..., ge=0.0, le=1.0)
    true_positives: int = Field(..., ge=0)
    false_positives: int = Field(..., ge=0)
    false_negatives: int = Field(..., ge=0)


class EvaluationRecord(BaseModel):
    """
    Result of scoring one EvaluationRun.

    A run whose judge call failed keeps its standard metrics (they need no
    judge) and carries the error message instead of semantic metrics.
    """

    run_id: str
    prompt_name: str
    model: str
    task: str
    timestamp_utc: str
    classifier: str
    matching_scope: str
    standard_metrics: EvaluationMetrics | None = None
    semantic_metrics: StandardSemanticMetricsResult | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None
