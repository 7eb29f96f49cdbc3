"""
Configuration schema models for Extraction Eval.

Pydantic v2 models that validate eval.config.yaml. The YAML only ever names
the environment variable holding the judge API key; the loader resolves it
into the runtime models at the bottom of this module.

Models:
    JudgeModelConfig: Which judge model to call and where its key lives
    RetrySettings: Backoff policy for judge calls
    TaskSettings: Classifier and matching scope for one extraction task
    TasksConfig: Per-task settings (entities and relationships)
    EvalConfig: Root configuration model (validates entire YAML)
    RuntimeJudgeModel: Judge configuration with the resolved API key
    RuntimeConfig: Runtime configuration handed to the evaluation runner

Example YAML:
    judge:
      provider: openai
      model_name: gpt-4o-mini
      env_api_key: OPENAI_API_KEY
    retry:
      max_retries: 3
    tasks:
      entity_extraction:
        classifier: judge
        matching_scope: global
      relationship_extraction:
        classifier: lexical_overlap
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from .constants import JUDGE_MAX_TOKENS, JUDGE_TEMPERATURE, TASK_ENTITY, TASK_RELATIONSHIP

ClassifierKind = Literal["judge", "lexical_overlap"]
MatchingScope = Literal["global", "per_text_block"]
TaskName = Literal["entity_extraction", "relationship_extraction"]


class JudgeModelConfig(BaseModel):
    """
    Judge model configuration from eval.config.yaml.

    Attributes:
        provider: Judge provider (openai or anthropic)
        model_name: Model identifier (e.g., "gpt-4o-mini")
        env_api_key: Environment variable name containing the API key
        temperature: Sampling temperature, 0.0 for reproducible judgments
        max_tokens: Upper bound on the judge reply length
        cache_results: Reuse judgments for identical normalized pools
    """

    provider: Literal["openai", "anthropic"]
    model_name: str
    env_api_key: str
    temperature: float = Field(default=JUDGE_TEMPERATURE, ge=0.0, le=2.0)
    max_tokens: int = Field(default=JUDGE_MAX_TOKENS, gt=0)
    cache_results: bool = False

    @field_validator("model_name")
    @classmethod
    def validate_model_name(cls, v: str) -> str:
        """Validate model_name is non-empty."""
        if not v or v.isspace():
            raise ValueError("model_name cannot be empty")
        return v

    @field_validator("env_api_key")
    @classmethod
    def validate_env_api_key(cls, v: str) -> str:
        """Validate env_api_key is non-empty."""
        if not v or v.isspace():
            raise ValueError("env_api_key cannot be empty")
        return v


class RetrySettings(BaseModel):
    """
    Exponential backoff with jitter for judge calls.

    Wait before retry n (0-based) is
    base_delay_seconds * multiplier**n + uniform(0, max_jitter_seconds).
    """

    max_retries: int = Field(default=3, ge=0)
    base_delay_seconds: float = Field(default=1.0, ge=0.0)
    multiplier: float = Field(default=2.0, ge=1.0)
    max_jitter_seconds: float = Field(default=1.0, ge=0.0)


class TaskSettings(BaseModel):
    """
    How semantic matching is performed for one extraction task.

    Attributes:
        classifier: "judge" asks the judge model, "lexical_overlap" uses
            word-set Jaccard similarity and never leaves the process
        matching_scope: "global" pools every text block of a run into one
            matching problem, "per_text_block" matches each block separately
    """

    classifier: ClassifierKind
    matching_scope: MatchingScope = "global"


class TasksConfig(BaseModel):
    """Per-task settings; tasks omitted from the YAML keep their defaults."""

    entity_extraction: TaskSettings = Field(
        default_factory=lambda: TaskSettings(classifier="judge")
    )
    relationship_extraction: TaskSettings = Field(
        default_factory=lambda: TaskSettings(classifier="lexical_overlap")
    )

    def for_task(self, task: str) -> TaskSettings:
        """Return the settings for a task name."""
        if task == TASK_ENTITY:
            return self.entity_extraction
        if task == TASK_RELATIONSHIP:
            return self.relationship_extraction
        raise ValueError(f"Unknown task: {task}")

    def uses_judge(self) -> bool:
        return "judge" in (
            self.entity_extraction.classifier,
            self.relationship_extraction.classifier,
        )


class EvalConfig(BaseModel):
    """
    Root configuration model for eval.config.yaml.

    The judge section is only required when at least one task is configured
    to use the judge classifier.
    """

    judge: JudgeModelConfig | None = None
    retry: RetrySettings = Field(default_factory=RetrySettings)
    tasks: TasksConfig = Field(default_factory=TasksConfig)

    @model_validator(mode="after")
    def validate_judge_present(self) -> "EvalConfig":
        """
        Require a judge section when any task selects the judge classifier.

        Raises:
            ValueError: If a task uses "judge" but no judge is configured
        """
        if self.judge is None and self.tasks.uses_judge():
            raise ValueError(
                "judge configuration is required when a task uses the 'judge' classifier"
            )
        return self


class RuntimeJudgeModel(BaseModel):
    """
    Judge model configuration with its resolved API key.

    Attributes:
        api_key: Resolved from the environment (NEVER log this)
    """

    provider: str
    model_name: str
    api_key: str
    temperature: float = JUDGE_TEMPERATURE
    max_tokens: int = JUDGE_MAX_TOKENS
    cache_results: bool = False

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate api_key is non-empty."""
        if not v or v.isspace():
            raise ValueError("api_key cannot be empty")
        return v


class RuntimeConfig(BaseModel):
    """
    Runtime configuration with resolved API keys.

    Created by config.loader; this is the contract passed to the runner.
    """

    judge: RuntimeJudgeModel | None = None
    retry: RetrySettings = Field(default_factory=RetrySettings)
    tasks: TasksConfig = Field(default_factory=TasksConfig)
