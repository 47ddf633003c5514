"""Turn aggregated scores into per-user rankings."""

from decimal import Decimal
from typing import NamedTuple


class RankedEntry(NamedTuple):
    product_id: str
    score: Decimal


def rank_products(product_scores: dict[str, Decimal]) -> list[RankedEntry]:
    """Sort one user's products by score, highest first.

    Equal scores fall back to productId ascending so rankings are
    reproducible regardless of input order.
    """
    entries = [RankedEntry(pid, score) for pid, score in product_scores.items()]
    entries.sort(key=lambda e: (-e.score, e.product_id))
    return entries


def rank(aggregation: dict[str, dict[str, Decimal]]) -> dict[str, list[RankedEntry]]:
    """Build user -> ordered [RankedEntry] for every aggregated user."""
    return {user_id: rank_products(products) for user_id, products in aggregation.items()}
