"""
Custom exceptions for Extraction Eval.

Every error raised on purpose by the package derives from ExtractionEvalError,
so callers (the CLI in particular) can map whole families of failures onto
exit codes with a single except clause.

Exception Hierarchy:
    ExtractionEvalError (base)
    ├── ConfigurationError
    │   ├── ConfigFileNotFoundError
    │   ├── ConfigValidationError
    │   └── APIKeyMissingError
    ├── InputError
    │   ├── InputFileNotFoundError
    │   └── InputValidationError
    ├── LLMProviderError
    │   ├── LLMAuthenticationError
    │   ├── LLMRateLimitError
    │   ├── LLMTimeoutError
    │   ├── LLMPromptTooLongError
    │   └── LLMResponseError
    └── EvaluationError

Malformed judge replies are not represented here: the response parser
degrades them to empty match sets instead of raising.

Usage:
    from extraction_eval.exceptions import ConfigurationError

    try:
        config = load_config(path)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)
"""


class ExtractionEvalError(Exception):
    """
    Base exception for all Extraction Eval errors.

    Example:
        try:
            records = await run_evaluation_suite(runs, config)
        except ExtractionEvalError as e:
            logger.error(f"Evaluation aborted: {e}")
    """

    pass


# ============================================================================
# Configuration Errors
# ============================================================================


class ConfigurationError(ExtractionEvalError):
    """
    Base class for configuration-related errors.

    Maps to exit code 1 in the CLI.
    """

    pass


class ConfigFileNotFoundError(ConfigurationError):
    """
    Configuration file does not exist at the specified path.

    Example:
        raise ConfigFileNotFoundError("Configuration file not found: eval.yaml")
    """

    pass


class ConfigValidationError(ConfigurationError):
    """
    Configuration file failed YAML parsing or schema validation.

    Example:
        raise ConfigValidationError("tasks.entity_extraction.classifier: invalid value")
    """

    pass


class APIKeyMissingError(ConfigurationError):
    """
    The environment variable that should hold the judge API key is unset.

    Example:
        raise APIKeyMissingError("OPENAI_API_KEY environment variable not set")
    """

    pass


# ============================================================================
# Input Errors
# ============================================================================


class InputError(ExtractionEvalError):
    """Base class for problems with evaluation input files."""

    pass


class InputFileNotFoundError(InputError):
    """Evaluation runs file does not exist."""

    pass


class InputValidationError(InputError):
    """
    Evaluation runs file is not valid YAML/JSON or does not match the schema.

    Example:
        raise InputValidationError("runs[0].task: must be entity_extraction or ...")
    """

    pass


# ============================================================================
# LLM Provider Errors
# ============================================================================


class LLMProviderError(ExtractionEvalError):
    """
    Base class for judge provider API errors.

    Raised once retries are exhausted, or immediately for errors that are
    never retried. The runner records it against the failing run only.
    """

    pass


class LLMAuthenticationError(LLMProviderError):
    """
    Judge provider rejected the API key (401/403). Never retried.

    Example:
        raise LLMAuthenticationError("OpenAI API key is invalid")
    """

    pass


class LLMRateLimitError(LLMProviderError):
    """Judge provider rate limit still exceeded after all retries."""

    pass


class LLMTimeoutError(LLMProviderError):
    """Judge request timed out on every attempt."""

    pass


class LLMPromptTooLongError(LLMProviderError):
    """
    Rendered judge prompt is longer than the provider clients accept.

    Raised before any request is sent. Large runs in global matching scope
    pool every leftover item into one prompt and can reach this limit.
    """

    pass


class LLMResponseError(LLMProviderError):
    """
    Judge provider returned an unusable HTTP response.

    Covers non-retryable client errors (400/404) and response bodies
    missing the expected structure. Judge replies whose *text* is not
    valid JSON are not errors; they fail soft in the response parser.

    Example:
        raise LLMResponseError("OpenAI response missing 'choices' field")
    """

    pass


# ============================================================================
# Evaluation Errors
# ============================================================================


class EvaluationError(ExtractionEvalError):
    """
    An evaluation could not be performed for a reason other than the judge.

    Example:
        raise EvaluationError("Unknown matching scope: per_paragraph")
    """

    pass
