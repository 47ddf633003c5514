#!/usr/bin/env python3
"""decayrec CLI — time-decayed product recommendations.

Commands:
    initialize    Build the ranking snapshot from events + product scores
    recommend     Print the top products for a user
    status        Show snapshot health
"""

from pathlib import Path

import click

# Fixed snapshot location, relative to the working directory
STORE_PATH = Path("user_product_order.db")

# Exit code for "user has no ranking" so callers can tell it from failures
EXIT_UNKNOWN_USER = 3


@click.group()
@click.option("--store", default=str(STORE_PATH), type=click.Path(dir_okay=False),
              help="Path to the ranking snapshot")
@click.pass_context
def cli(ctx, store):
    """decayrec — decayed-score product recommendations."""
    ctx.ensure_object(dict)
    ctx.obj["store_path"] = Path(store)


@cli.command()
@click.argument("user_events", type=click.Path(exists=True, dir_okay=False))
@click.argument("product_scores", type=click.Path(exists=True, dir_okay=False))
@click.option("--now", type=int, default=None, help="Reference unix time (default: current time)")
@click.pass_context
def initialize(ctx, user_events, product_scores, now):
    """Build the ranking snapshot.

    USER_EVENTS holds userId, productId, rawScore, unixTimestamp per line;
    PRODUCT_SCORES holds productId, baseScore per line. Both tab-separated.
    The previous snapshot is replaced only if the whole run succeeds.
    """
    import sqlite3

    from decayrec.errors import DecayrecError
    from decayrec.pipeline import run_initialize

    try:
        run_initialize(Path(user_events), Path(product_scores), ctx.obj["store_path"], now=now)
    except (DecayrecError, OSError, sqlite3.Error) as e:
        raise click.ClickException(str(e))


@cli.command()
@click.argument("user_id")
@click.option("--limit", type=click.IntRange(min=0), default=5, help="Maximum products to print")
@click.pass_context
def recommend(ctx, user_id, limit):
    """Print up to LIMIT product ids for USER_ID, best first."""
    from decayrec.errors import DecayrecError, UnknownUserError
    from decayrec.pipeline import run_recommend

    try:
        run_recommend(ctx.obj["store_path"], user_id, limit=limit)
    except UnknownUserError as e:
        click.echo(str(e), err=True)
        ctx.exit(EXIT_UNKNOWN_USER)
    except DecayrecError as e:
        raise click.ClickException(str(e))


@cli.command()
@click.pass_context
def status(ctx):
    """Show snapshot schema, build time, and size."""
    from decayrec.errors import DecayrecError
    from decayrec.pipeline import run_status

    try:
        run_status(ctx.obj["store_path"])
    except DecayrecError as e:
        raise click.ClickException(str(e))


if __name__ == "__main__":
    cli()
