"""decayrec — time-decayed product recommendations from interaction logs.

Builds a per-user ranking snapshot from tab-delimited event and product-score
files, then serves the top products for a user from that snapshot.
"""

__version__ = "1.0.0"
