"""Fold interaction events into per-user, per-product decayed scores.

    contribution = base * (raw * weight) + base

A later event for the same (user, product) pair replaces the earlier
contribution instead of adding to it. Rankings built from the reference data
depend on that, so it is kept as is.
"""

import time
from decimal import Decimal
from typing import Iterable

from decayrec.decay import DecayTable, day_offset
from decayrec.errors import MalformedRecordError, UnknownProductError
from decayrec.product_index import ProductScoreIndex
from decayrec.records import InteractionEvent


def contribution(base_score: int, raw_score: Decimal, weight: Decimal) -> Decimal:
    """Score one event contributes for its product."""
    return base_score * (raw_score * weight) + base_score


def aggregate(
    events: Iterable[InteractionEvent],
    decay_table: DecayTable,
    product_index: ProductScoreIndex,
    now: int = None,
) -> dict[str, dict[str, Decimal]]:
    """Build user -> (product -> score) from an event stream.

    Future-dated events are clamped to day 0 and get full weight. Any bad
    row or unknown product aborts the whole run; the partial result is
    discarded with the exception.
    """
    if now is None:
        now = int(time.time())

    scores: dict[str, dict[str, Decimal]] = {}
    for event in events:
        weight = decay_table.weight_for(max(0, day_offset(now, event.timestamp)))
        if event.product_id not in product_index:
            raise UnknownProductError(event.product_id, event.source, event.line_no)
        base = product_index[event.product_id]
        user_scores = scores.setdefault(event.user_id, {})
        try:
            score = contribution(base, event.raw_score, weight)
        except ArithmeticError as e:
            raise MalformedRecordError(
                event.source, event.line_no, f"raw score {event.raw_score} is out of range"
            ) from e
        user_scores[event.product_id] = score

    return scores
