"""Pipeline entry points behind the CLI commands.

initialize: product scores + events -> aggregate -> rank -> snapshot
recommend:  snapshot -> top-N product ids on stdout
"""

import time
from pathlib import Path

import click

from decayrec.aggregator import aggregate
from decayrec.decay import DecayConfig, build_decay_table
from decayrec.product_index import ProductScoreIndex
from decayrec.ranking import rank
from decayrec.records import read_events
from decayrec.server import DEFAULT_LIMIT, RecommendationServer
from decayrec.store import RankingStore


def run_initialize(user_events: Path, product_scores: Path, store_path: Path,
                   now: int = None, config: DecayConfig = None) -> dict:
    """Build the ranking snapshot from the two input files.

    Nothing is written unless every row of both files is valid; a failed
    run leaves any previous snapshot in place.
    """
    if now is None:
        now = int(time.time())

    click.echo("=== decayrec initialize ===")
    decay_table = build_decay_table(config)

    click.echo(f"Loading product scores from {product_scores}...")
    index = ProductScoreIndex.load(product_scores)
    click.echo(f"  {len(index)} product(s)")

    click.echo(f"Aggregating events from {user_events} (now={now})...")
    aggregation = aggregate(read_events(user_events), decay_table, index, now=now)
    pair_count = sum(len(products) for products in aggregation.values())
    click.echo(f"  {len(aggregation)} user(s), {pair_count} user/product score(s)")

    ranking = rank(aggregation)
    store = RankingStore(store_path)
    store.save(ranking)
    click.echo(f"Ranking snapshot written to {store.path}")

    return {
        "products": len(index),
        "users": len(aggregation),
        "entries": pair_count,
        "store_path": str(store.path),
    }


def run_recommend(store_path: Path, user_id: str, limit: int = DEFAULT_LIMIT) -> list[str]:
    """Print the user's top products, one id per line."""
    server = RecommendationServer(RankingStore(store_path), limit=limit)
    product_ids = server.recommend(user_id)
    for product_id in product_ids:
        click.echo(product_id)
    return product_ids


def run_status(store_path: Path):
    """Print snapshot health."""
    stats = RankingStore(store_path).stats()
    click.echo("=== decayrec status ===")
    click.echo(f"  Snapshot:      {store_path}")
    click.echo(f"  Schema:        v{stats['schema_version']}")
    click.echo(f"  Built at:      {stats['built_at']}")
    click.echo(f"  Generator:     {stats['generator']}")
    click.echo(f"  Users:         {stats['user_count']}")
    click.echo(f"  Ranked pairs:  {stats['entry_count']}")
    click.echo(f"  Size:          {stats['size_mb']:.1f} MB")
    return stats
