"""Serve top-N recommendations from a persisted ranking snapshot."""

from typing import Optional

from decayrec.errors import UnknownUserError
from decayrec.ranking import RankedEntry
from decayrec.store import RankingStore

DEFAULT_LIMIT = 5


class RecommendationServer:
    """Read-only view over one ranking snapshot."""

    def __init__(self, store: RankingStore, limit: int = DEFAULT_LIMIT):
        if limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")
        self.store = store
        self.limit = limit
        self._ranking: Optional[dict[str, list[RankedEntry]]] = None

    @property
    def ranking(self) -> dict[str, list[RankedEntry]]:
        if self._ranking is None:
            self._ranking = self.store.load()
        return self._ranking

    def ranked_entries(self, user_id: str) -> list[RankedEntry]:
        """Full ranking for a user, best first."""
        try:
            return self.ranking[user_id]
        except KeyError:
            raise UnknownUserError(user_id) from None

    def recommend(self, user_id: str) -> list[str]:
        """Up to `limit` product ids for the user, in ranked order."""
        return [entry.product_id for entry in self.ranked_entries(user_id)[:self.limit]]
