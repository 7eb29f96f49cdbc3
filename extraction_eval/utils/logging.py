"""
Structured JSON logging for Extraction Eval.

Log lines are JSON objects written to stderr so that stdout stays free for
the evaluation report (rich tables or JSON in agent mode). Judge API keys
pass through a redaction filter before anything is emitted.

Examples:
    >>> from extraction_eval.utils.logging import setup_logging, get_logger
    >>> setup_logging(verbose=True)
    >>> logger = get_logger("matching.engine")
    >>> logger.debug("Accepted pair", extra={"context": {"gold": 0, "pred": 2}})
"""

import json
import logging
import re
import sys
from typing import Any

from extraction_eval.utils.time import utc_timestamp


class JSONFormatter(logging.Formatter):
    """
    Render a log record as a single JSON line.

    Fields: timestamp, level, component, message, plus optional context
    (from extra={'context': {...}}), run_id and exception text.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": utc_timestamp(),
            "level": record.levelname,
            "component": record.name,
            "message": record.getMessage(),
        }

        context = getattr(record, "context", None)
        if isinstance(context, dict):
            entry["context"] = context

        run_id = getattr(record, "run_id", None)
        if run_id is not None:
            entry["run_id"] = run_id

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class SecretRedactingFilter(logging.Filter):
    """
    Mask API keys and bearer tokens in log messages and context.

    Only the last four characters survive:
    "sk-proj-abcdef123456..." -> "sk-...3456"
    """

    SECRET_PATTERNS = [
        (re.compile(r"\bsk-[a-zA-Z0-9_-]{20,}\b"), "sk-...{last4}"),
        (re.compile(r"\bBearer\s+[a-zA-Z0-9_-]{20,}\b"), "Bearer ***{last4}"),
        (re.compile(r"\b[a-zA-Z0-9_-]{32,}\b"), "***{last4}"),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        # Format first so secrets hidden in %-args are caught too
        record.msg = self.redact(record.getMessage())
        record.args = None

        context = getattr(record, "context", None)
        if isinstance(context, dict):
            record.context = self._redact_mapping(context)

        return True

    def redact(self, text: str) -> str:
        """Return text with every secret-looking token masked."""
        for pattern, template in self.SECRET_PATTERNS:
            text = pattern.sub(
                lambda match, tpl=template: tpl.format(last4=match.group(0)[-4:]),
                text,
            )
        return text

    def _redact_mapping(self, data: dict[str, Any]) -> dict[str, Any]:
        redacted: dict[str, Any] = {}
        for key, value in data.items():
            if isinstance(value, str):
                redacted[key] = self.redact(value)
            elif isinstance(value, dict):
                redacted[key] = self._redact_mapping(value)
            elif isinstance(value, list):
                redacted[key] = [
                    self.redact(v) if isinstance(v, str) else v for v in value
                ]
            else:
                redacted[key] = value
        return redacted


def setup_logging(verbose: bool = False, quiet_logs: bool = False) -> None:
    """
    Configure root logging for the CLI.

    Installs one stderr handler with JSONFormatter and SecretRedactingFilter,
    replacing any handlers already attached to the root logger.

    Args:
        verbose: DEBUG level when True (per-pair matching decisions become
            visible), INFO otherwise.
        quiet_logs: Only WARNING and above unless verbose. Used in human
            output mode so JSON log lines don't interleave with Rich output.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet_logs:
        level = logging.WARNING
    else:
        level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(SecretRedactingFilter())

    root_logger.addHandler(handler)

    # httpx logs every request at INFO; keep that out of evaluation output
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


def get_logger(component: str) -> logging.Logger:
    """Return the logger for a component name such as 'classifiers.judge'."""
    return logging.getLogger(component)


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    context: dict[str, Any] | None = None,
    run_id: str | None = None,
) -> None:
    """
    Log a message carrying structured context and an optional run_id.

    Example:
        >>> log_with_context(
        ...     logger,
        ...     logging.INFO,
        ...     "Evaluation finished",
        ...     context={"task": "entity_extraction", "f1": 0.82},
        ...     run_id="2025-11-02T08-30-00Z",
        ... )
    """
    extra: dict[str, Any] = {}

    if context is not None:
        extra["context"] = context

    if run_id is not None:
        extra["run_id"] = run_id

    logger.log(level, message, extra=extra or None)
