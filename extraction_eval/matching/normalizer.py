"""
Case- and whitespace-insensitive comparison of extracted items.
"""

from .models import CausalRelationship, ExtractionItem


def normalize(text: str) -> str:
    """Lowercase and strip surrounding whitespace."""
    return text.strip().lower()


def strings_equal(a: str, b: str) -> bool:
    return normalize(a) == normalize(b)


def relationships_equal(a: CausalRelationship, b: CausalRelationship) -> bool:
    """Cause and effect must both match; location and confidence are ignored."""
    return strings_equal(a.cause, b.cause) and strings_equal(a.effect, b.effect)


def items_equal(a: ExtractionItem, b: ExtractionItem) -> bool:
    """
    Compare two extraction items under normalization.

    An entity never equals a relationship.
    """
    if isinstance(a, str) and isinstance(b, str):
        return strings_equal(a, b)
    if isinstance(a, CausalRelationship) and isinstance(b, CausalRelationship):
        return relationships_equal(a, b)
    return False


def item_key(item: ExtractionItem) -> tuple[str, ...]:
    """
    Hashable normalized identity of an item.

    Entities map to a 1-tuple, relationships to (cause, effect), so the two
    kinds never collide.
    """
    if isinstance(item, CausalRelationship):
        return (normalize(item.cause), normalize(item.effect))
    return (normalize(item),)
