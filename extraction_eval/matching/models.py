"""
Data models for weighted bipartite matching of extracted items.

An ExtractionItem is either an entity (plain string) or a CausalRelationship.
Gold and predicted pools are plain lists; an item's position in its list is
its stable original index for the whole evaluation.

Intermediate results are frozen dataclasses. Values that cross the package
boundary (relationships, final metrics) are Pydantic models so they
validate on input and serialize for the CLI.
"""

from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

MatchType = Literal["exact", "semantic", "partial"]


class CausalRelationship(BaseModel):
    """
    A cause -> effect relationship extracted from text.

    Identity for matching is the normalized (cause, effect) pair only;
    location and confidence are carried along as payload.
    """

    model_config = ConfigDict(frozen=True)

    cause: str
    effect: str
    location: str | None = None
    confidence: float | None = None

    @field_validator("cause", "effect")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        """Validate cause/effect are non-empty."""
        if not v or v.isspace():
            raise ValueError("cause and effect cannot be empty")
        return v

    def __str__(self) -> str:
        return f"{self.cause} -> {self.effect}"


ExtractionItem = str | CausalRelationship

# Dense G x P matrix, values in {0, 0.5, 0.75, 1.0}
WeightMatrix = list[list[float]]


@dataclass(frozen=True)
class MatchPair:
    """One accepted gold/predicted assignment."""

    gold_index: int
    pred_index: int
    weight: float
    match_type: MatchType
    gold_item: ExtractionItem
    pred_item: ExtractionItem


@dataclass(frozen=True)
class ExactMatchResult:
    """
    Output of the exact-match prefilter.

    exact_matches holds (gold_index, pred_index) tuples in gold order.
    unmatched_gold / unmatched_predicted keep pool order.
    """

    exact_matches: list[tuple[int, int]]
    unmatched_gold: list[ExtractionItem]
    unmatched_predicted: list[ExtractionItem]
    matched_gold_indices: frozenset[int]
    matched_pred_indices: frozenset[int]


@dataclass(frozen=True)
class ClassifiedPair:
    """A gold/predicted pair asserted by a semantic classifier."""

    gold: ExtractionItem
    predicted: ExtractionItem


@dataclass(frozen=True)
class ClassificationResult:
    """Semantic and partial pairs returned by a classifier."""

    semantic_pairs: list[ClassifiedPair] = field(default_factory=list)
    partial_pairs: list[ClassifiedPair] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "ClassificationResult":
        return cls()

    def is_empty(self) -> bool:
        return not self.semantic_pairs and not self.partial_pairs


@dataclass(frozen=True)
class MatchingResult:
    """
    Output of a matching engine.

    total_weight is TPw. Every gold and predicted index appears at most once
    across matches, and every index not in a match is listed as unmatched.
    """

    total_weight: float
    matches: list[MatchPair]
    unmatched_gold_indices: list[int]
    unmatched_pred_indices: list[int]


class StandardSemanticMetricsResult(BaseModel):
    """
    Weighted precision/recall/F1 plus the predicted pool split by match type.

    The four buckets partition the predicted pool. Serialized names follow
    the report format (TPw, FPw, FNw, noMatch); use
    model_dump(by_alias=True) when writing JSON.
    """

    model_config = ConfigDict(populate_by_name=True)

    precision: float
    recall: float
    f1: float
    tp_weighted: float = Field(alias="TPw")
    fp_weighted: float = Field(alias="FPw")
    fn_weighted: float = Field(alias="FNw")
    exact: list[ExtractionItem] = Field(default_factory=list)
    semantic: list[ExtractionItem] = Field(default_factory=list)
    partial: list[ExtractionItem] = Field(default_factory=list)
    no_match: list[ExtractionItem] = Field(default_factory=list, alias="noMatch")

    @property
    def gold_count(self) -> float:
        return self.tp_weighted + self.fn_weighted

    @property
    def predicted_count(self) -> float:
        return self.tp_weighted + self.fp_weighted
