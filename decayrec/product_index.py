"""Static per-product base scores, loaded once per initialize run."""

from collections.abc import Mapping
from types import MappingProxyType

from decayrec.errors import MalformedRecordError, UnknownProductError
from decayrec.records import Source, iter_rows, parse_int, source_name

# Base scores are stored as signed 16-bit values in the reference data.
MIN_BASE_SCORE = -32768
MAX_BASE_SCORE = 32767


class ProductScoreIndex(Mapping):
    """Read-only productId -> base score mapping."""

    def __init__(self, scores: dict = None):
        self._scores = MappingProxyType(dict(scores or {}))

    @classmethod
    def load(cls, source: Source) -> "ProductScoreIndex":
        """Build the index from `productId<TAB>baseScore` rows.

        A repeated productId silently replaces the earlier score.
        """
        name = source_name(source)
        scores = {}
        for line_no, columns in iter_rows(source, 2):
            product_id, raw = columns[0], columns[1]
            score = parse_int(raw, name, line_no, "base score")
            if not MIN_BASE_SCORE <= score <= MAX_BASE_SCORE:
                raise MalformedRecordError(
                    name, line_no,
                    f"base score {score} outside {MIN_BASE_SCORE}..{MAX_BASE_SCORE}",
                )
            scores[product_id] = score
        return cls(scores)

    def __getitem__(self, product_id: str) -> int:
        try:
            return self._scores[product_id]
        except KeyError:
            raise UnknownProductError(product_id) from None

    def get(self, product_id: str, default=None):
        return self._scores.get(product_id, default)

    def __contains__(self, product_id) -> bool:
        return product_id in self._scores

    def __iter__(self):
        return iter(self._scores)

    def __len__(self) -> int:
        return len(self._scores)
