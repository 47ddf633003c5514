"""End-to-end: input files -> snapshot -> recommendations."""

import sys
from decimal import Decimal
from pathlib import Path

ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))

from tests.conftest import NOW, DAY, write_tsv
from decayrec.pipeline import run_initialize, run_recommend, run_status
from decayrec.store import RankingStore


class TestScenario:

    def test_two_event_scenario(self, scenario_files, store_path, capsys):
        events, products = scenario_files
        summary = run_initialize(events, products, store_path, now=NOW)
        assert summary["users"] == 1
        assert summary["entries"] == 2

        ranking = RankingStore(store_path).load()
        assert [(e.product_id, e.score) for e in ranking["u1"]] == [
            ("p1", Decimal(20)),
            ("p2", Decimal(15)),
        ]

        capsys.readouterr()
        assert run_recommend(store_path, "u1") == ["p1", "p2"]
        assert capsys.readouterr().out == "p1\np2\n"

    def test_repeated_pair_uses_last_event(self, tmp_path, store_path):
        products = write_tsv(tmp_path / "products.txt", [("p1", 10), ("p2", 5)])
        events = write_tsv(tmp_path / "events.txt", [
            ("u1", "p1", "9.0", NOW),   # would be 100, but is overwritten
            ("u1", "p2", "2.0", NOW),   # 15
            ("u1", "p1", "0.0", NOW),   # 10
        ])
        run_initialize(events, products, store_path, now=NOW)
        assert run_recommend(store_path, "u1") == ["p2", "p1"]

    def test_decay_reorders(self, tmp_path, store_path):
        products = write_tsv(tmp_path / "products.txt", [("old", 10), ("new", 10)])
        events = write_tsv(tmp_path / "events.txt", [
            ("u1", "old", "1", NOW - 30 * DAY),
            ("u1", "new", "1", NOW),
        ])
        run_initialize(events, products, store_path, now=NOW)
        assert run_recommend(store_path, "u1") == ["new", "old"]

    def test_top_five_of_many(self, tmp_path, store_path):
        products = write_tsv(tmp_path / "products.txt", [(f"p{i:02d}", i + 1) for i in range(20)])
        events = write_tsv(tmp_path / "events.txt", [("u1", f"p{i:02d}", "1", NOW) for i in range(20)])
        run_initialize(events, products, store_path, now=NOW)
        assert run_recommend(store_path, "u1") == ["p19", "p18", "p17", "p16", "p15"]

    def test_status_after_initialize(self, user_events_file, product_scores_file, store_path):
        run_initialize(user_events_file, product_scores_file, store_path, now=NOW)
        stats = run_status(store_path)
        assert stats["user_count"] == 2
        assert stats["entry_count"] == 5
