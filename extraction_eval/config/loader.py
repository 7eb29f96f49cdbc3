"""
Configuration loader for Extraction Eval.

Loads eval.config.yaml, validates it with the Pydantic models in
config.schema and resolves the judge API key from the environment into a
RuntimeConfig. Secrets only ever live in the environment and in memory.

Functions:
    load_config: Main entrypoint to load and validate eval.config.yaml
    resolve_judge_model: Resolve the judge API key from its env variable
"""

import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from extraction_eval.exceptions import (
    APIKeyMissingError,
    ConfigFileNotFoundError,
    ConfigValidationError,
)

from .schema import EvalConfig, JudgeModelConfig, RuntimeConfig, RuntimeJudgeModel


def format_validation_error(error: ValidationError) -> str:
    """Render pydantic errors as one '  - loc: msg' line each."""
    lines = []
    for item in error.errors():
        loc = ".".join(str(x) for x in item["loc"]) or "<root>"
        lines.append(f"  - {loc}: {item['msg']}")
    return "\n".join(lines)


def load_config(config_path: str | Path) -> RuntimeConfig:
    """
    Load eval.config.yaml and resolve the judge API key.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        RuntimeConfig ready for the evaluation runner

    Raises:
        ConfigFileNotFoundError: If the file doesn't exist
        ConfigValidationError: If the YAML is invalid or fails validation
        APIKeyMissingError: If the judge API key variable is not set

    Example:
        >>> config = load_config("examples/eval.config.yaml")
        >>> config.tasks.entity_extraction.classifier
        'judge'
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigFileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with config_path.open(encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigValidationError(
            f"Failed to read configuration file {config_path}: {e}"
        ) from e

    if raw_config is None:
        raise ConfigValidationError(f"Configuration file is empty: {config_path}")

    if not isinstance(raw_config, dict):
        raise ConfigValidationError(
            f"Configuration root must be a mapping in {config_path}"
        )

    try:
        eval_config = EvalConfig.model_validate(raw_config)
    except ValidationError as e:
        raise ConfigValidationError(
            f"Configuration validation failed in {config_path}:\n"
            + format_validation_error(e)
        ) from e

    # Only resolve the key when some task will actually call the judge
    judge = None
    if eval_config.judge is not None and eval_config.tasks.uses_judge():
        judge = resolve_judge_model(eval_config.judge)

    return RuntimeConfig(
        judge=judge,
        retry=eval_config.retry,
        tasks=eval_config.tasks,
    )


def resolve_judge_model(judge_config: JudgeModelConfig) -> RuntimeJudgeModel:
    """
    Resolve the judge's env_api_key reference to the actual key.

    Raises:
        APIKeyMissingError: If the variable is unset, empty or whitespace

    Security:
        The key is never logged, not even partially.
    """
    env_var_name = judge_config.env_api_key
    api_key = os.environ.get(env_var_name)

    if not api_key or api_key.isspace():
        raise APIKeyMissingError(
            f"Environment variable ${env_var_name} not set "
            f"(required for judge {judge_config.provider}/{judge_config.model_name})"
        )

    return RuntimeJudgeModel(
        provider=judge_config.provider,
        model_name=judge_config.model_name,
        api_key=api_key,
        temperature=judge_config.temperature,
        max_tokens=judge_config.max_tokens,
        cache_results=judge_config.cache_results,
    )
