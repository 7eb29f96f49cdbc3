"""
Evaluation constants for Extraction Eval.

Weight tiers, heuristic thresholds and judge call defaults shared across the
matching, classifier and judge layers.
"""

# Weight tiers assigned to a (gold, predicted) cell in the weight matrix
EXACT_WEIGHT = 1.0
SEMANTIC_WEIGHT = 0.75
PARTIAL_WEIGHT = 0.5
NO_MATCH_WEIGHT = 0.0

# Lexical-overlap heuristic: similarity strictly above these values qualifies
SEMANTIC_SIMILARITY_THRESHOLD = 0.7
PARTIAL_SIMILARITY_THRESHOLD = 0.4

# Tokens of this many characters or fewer are ignored by the heuristic
MIN_TOKEN_LENGTH = 2

# Judge calls are deterministic and short
JUDGE_TEMPERATURE = 0.0
JUDGE_MAX_TOKENS = 1000

# Guard against sending an enormous unmatched pool to the judge
# (~25k tokens at 4 chars/token)
MAX_PROMPT_LENGTH = 100_000

TASK_ENTITY = "entity_extraction"
TASK_RELATIONSHIP = "relationship_extraction"
