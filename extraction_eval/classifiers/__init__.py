"""
Semantic classifiers: judge-backed and lexical-overlap implementations.
"""

from .base import SemanticClassifier, build_classifier
from .heuristic_classifier import LexicalOverlapClassifier
from .judge_classifier import JudgeClassifier
from .response_parser import extract_json, parse_classification_response

__all__ = [
    "JudgeClassifier",
    "LexicalOverlapClassifier",
    "SemanticClassifier",
    "build_classifier",
    "extract_json",
    "parse_classification_response",
]
