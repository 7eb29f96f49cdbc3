"""
Judge clients used by the judge-backed semantic classifier.
"""

from .mock_client import MockJudgeClient
from .models import JudgeClient, LLMResponse, build_client

__all__ = [
    "JudgeClient",
    "LLMResponse",
    "MockJudgeClient",
    "build_client",
]
