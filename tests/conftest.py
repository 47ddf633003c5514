"""Shared fixtures for the decayrec test suite."""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))

# Fixed reference time so decay offsets are reproducible
NOW = 1_700_000_000
DAY = 86400


def write_tsv(path: Path, rows) -> Path:
    path.write_text("".join("\t".join(str(c) for c in row) + "\n" for row in rows))
    return path


# ---------------------------------------------------------------------------
# Input files
# ---------------------------------------------------------------------------
@pytest.fixture
def product_scores_file(tmp_path):
    """Product score file with a handful of products."""
    return write_tsv(tmp_path / "product_score.txt", [
        ("p1", 10),
        ("p2", 5),
        ("p3", 8),
        ("p4", 1),
    ])


@pytest.fixture
def user_events_file(tmp_path):
    """Events for two users; u1 has a repeated (user, product) pair."""
    return write_tsv(tmp_path / "user_preference.txt", [
        ("u1", "p1", "1.0", NOW),
        ("u1", "p2", "2.0", NOW),
        ("u2", "p3", "0.5", NOW - 3 * DAY),
        ("u2", "p4", "4", NOW - 200 * DAY),
        ("u1", "p3", "1.0", NOW - DAY),
        ("u1", "p3", "0.0", NOW),
    ])


@pytest.fixture
def scenario_files(tmp_path):
    """The two-event end-to-end scenario: p1=10, p2=5, both events at now."""
    products = write_tsv(tmp_path / "products.txt", [("p1", 10), ("p2", 5)])
    events = write_tsv(tmp_path / "events.txt", [
        ("u1", "p1", "1.0", NOW),
        ("u1", "p2", "2.0", NOW),
    ])
    return events, products


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "user_product_order.db"


@pytest.fixture
def big_ranking():
    """One user with 20 ranked products plus a short-list user."""
    from decimal import Decimal
    from decayrec.ranking import RankedEntry

    return {
        "heavy": [RankedEntry(f"p{i:02d}", Decimal(100 - i)) for i in range(20)],
        "light": [RankedEntry("only", Decimal("1.5"))],
    }
