#!/usr/bin/env python3
"""
CLI for the feed monitor core

Commands:
    acquire       - Run one acquisition cycle and show feeds with their thresholds
    check-config  - Load the operator config and print the parsed values

Usage:
    feedwatch acquire --config Config.yaml
    feedwatch acquire --json
    feedwatch check-config Config.yaml

The timer loop and the statistics engine live outside this package; acquire
runs exactly one cycle.
"""
import json
import logging
import sys
from dataclasses import asdict, replace

import click

from . import __version__
from . import config as runtime
from .scrapers import AcquireError, FeedAcquirer
from .services.display import select_for_display
from .services.notify import NotifyError, get_notifier, notify_error
from .settings import ConfigError, Sorting, SortType, Weekday, get_feed_spike, load_config


def _configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else runtime.get_log_level(),
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S"
    )


def _load_or_exit(config_path):
    try:
        return load_config(config_path)
    except ConfigError as e:
        click.secho(f"Error: {e}", fg="red")
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="feedwatch")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
def cli(verbose):
    """Broadcastify feed monitor - acquisition and threshold resolution."""
    _configure_logging(verbose)


@cli.command("acquire")
@click.option("--config", "config_path", type=click.Path(), default=None,
              help="Operator YAML config (default: FEEDWATCH_CONFIG_PATH)")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.option("--notify-errors", is_flag=True, help="Send a notification when the cycle fails")
def acquire(config_path, output_json, notify_errors):
    """
    Run one acquisition cycle.

    Shows the feeds selected for display with the Spike thresholds that
    apply to each of them today.
    """
    config = _load_or_exit(config_path or runtime.get_config_path())

    acquirer = FeedAcquirer()
    try:
        with acquirer:
            feeds = acquirer.acquire(config)
    except AcquireError as e:
        click.secho(f"Error: {e}", fg="red")
        if notify_errors:
            try:
                notify_error(get_notifier(), str(e))
            except NotifyError as notify_e:
                click.secho(f"Notification failed: {notify_e}", fg="yellow")
        sys.exit(1)

    display_config = config
    if config.sorting.sort_type is SortType.JUMP:
        # Jump ratios come from the statistics engine, not available here
        click.secho("Sorting by jump needs listener history, sorting by listeners", fg="yellow")
        display_config = replace(
            config, sorting=Sorting(SortType.LISTENERS, config.sorting.sort_order)
        )

    today = Weekday.today()
    shown = select_for_display(feeds, display_config)

    if output_json:
        payload = [
            {**feed.to_dict(), "spike": asdict(get_feed_spike(config, feed, today))}
            for feed in shown
        ]
        click.echo(json.dumps(payload, indent=2))
        return

    click.echo("=" * 60)
    click.secho(f"FEEDS ({len(shown)} of {len(feeds)}) - {today.value}", fg="cyan", bold=True)
    click.echo("=" * 60)

    for feed in shown:
        spike = get_feed_spike(config, feed, today)
        click.echo(
            click.style(f"  [{feed.id}] ", fg="white")
            + click.style(feed.name, bold=True)
            + f" ({feed.state.abbreviation}, {feed.county})"
        )
        click.echo(f"    Listeners: {feed.listeners}  Jump required: {spike.jump}")
        if feed.alert:
            click.secho(f"    Alert: {feed.alert}", fg="red")


@cli.command("check-config")
@click.argument("config_path", type=click.Path(), required=False)
def check_config(config_path):
    """
    Load the operator config and print the parsed values.

    CONFIG_PATH: YAML file (default: FEEDWATCH_CONFIG_PATH)
    """
    config = _load_or_exit(config_path or runtime.get_config_path())
    click.echo(json.dumps(asdict(config), indent=2, default=_enum_value))
    click.secho("Config OK", fg="green", bold=True)


def _enum_value(value):
    return getattr(value, "value", str(value))


if __name__ == "__main__":
    cli()
