"""Command-line interface for ResoSorter."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import click
import structlog
import yaml
from pydantic import ValidationError
from rich.console import Console

from resosorter import __version__
from resosorter.config.config import Config, load_config
from resosorter.observability.logging import configure_logging
from resosorter.observability.metrics import export_prometheus
from resosorter.pipeline import ResolutionPipeline
from resosorter.preferences import THEMES, PreferenceStore
from resosorter.presentation.table import RichTablePresenter, render_json
from resosorter.ranking.ranker import SortKey
from resosorter.source.fetch import PageFetchError, fetch_html
from resosorter.source.soup_source import SoupFragmentSource

logger = structlog.get_logger(__name__)

SORT_CHOICES = [key.value for key in SortKey]


def _config(ctx: click.Context) -> Config:
    return ctx.obj["config"]


def _preferences(ctx: click.Context) -> PreferenceStore:
    return PreferenceStore(_config(ctx).preferences.path)


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", type=click.Path(exists=True, dir_okay=False), help="Configuration file path")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level (overrides the configuration file)",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], log_level: Optional[str]) -> None:
    """ResoSorter - find, validate and rank display resolutions on a page."""
    ctx.ensure_object(dict)
    try:
        loaded = load_config(Path(config) if config else None)
    except (ValidationError, ValueError, FileNotFoundError, yaml.YAMLError) as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e

    if log_level:
        loaded.monitoring.log_level = log_level.upper()
    configure_logging(loaded.monitoring)
    ctx.obj["config"] = loaded


@cli.command()
@click.argument("source", type=click.File("r", encoding="utf-8"), required=False)
@click.option("--url", help="Fetch the page from this URL instead of reading SOURCE")
@click.option("--base-url", help="URL used to resolve relative links (defaults to --url)")
@click.option(
    "--sort",
    "sort_keys",
    multiple=True,
    type=click.Choice(SORT_CHOICES),
    help="Sort by column; repeat to click the same header again",
)
@click.option("--ascending/--descending", default=None, help="Force the direction of the last sort")
@click.option("--json", "as_json", is_flag=True, help="Print records as JSON instead of a table")
@click.option("--print-metrics", is_flag=True, help="Print Prometheus metrics after the scan")
@click.pass_context
def scan(
    ctx: click.Context,
    source: Optional[Any],
    url: Optional[str],
    base_url: Optional[str],
    sort_keys: tuple[str, ...],
    ascending: Optional[bool],
    as_json: bool,
    print_metrics: bool,
) -> None:
    """Scan an HTML page (file, '-' for stdin, or --url) for resolutions."""
    config = _config(ctx)

    if url and source:
        raise click.UsageError("Pass either SOURCE or --url, not both")
    if not url and not source:
        raise click.UsageError("Nothing to scan: pass SOURCE, '-' for stdin, or --url")

    if url:
        try:
            html = fetch_html(url, config.fetch)
        except PageFetchError as e:
            raise click.ClickException(str(e)) from e
    else:
        html = source.read()

    fragment_source = SoupFragmentSource(parser=config.source.parser, skip_tags=config.source.skip_tags)
    result = ResolutionPipeline(config).run(fragment_source.fragments(html, base_url=base_url or url))

    ranker = result.ranker
    for index, key in enumerate(sort_keys):
        is_last = index == len(sort_keys) - 1
        ranker.sort_by(key, ascending if is_last else None)
    if ascending is not None and not sort_keys:
        ranker.sort_by(config.ranking.default_key, ascending)

    if as_json:
        click.echo(render_json(ranker.records))
    else:
        preferences = _preferences(ctx)
        presenter = RichTablePresenter(
            Console(),
            theme=preferences.theme,
            collapsed=preferences.collapsed,
            sort_key=ranker.current_key,
            ascending=ranker.ascending,
        )
        presenter.render(ranker.records)

    if print_metrics:
        click.echo(export_prometheus())


@cli.command()
@click.argument("name", type=click.Choice(list(THEMES)), required=False)
@click.pass_context
def theme(ctx: click.Context, name: Optional[str]) -> None:
    """Show or set the table theme."""
    preferences = _preferences(ctx)
    if name:
        preferences.theme = name
    click.echo(preferences.theme)


@cli.command()
@click.option("--on", "state", flag_value="on", help="Collapse the table")
@click.option("--off", "state", flag_value="off", help="Expand the table")
@click.option("--toggle", "state", flag_value="toggle", default=True, help="Flip the collapsed state")
@click.pass_context
def collapse(ctx: click.Context, state: str) -> None:
    """Collapse or expand the result table."""
    preferences = _preferences(ctx)
    if state == "on":
        preferences.collapsed = True
    elif state == "off":
        preferences.collapsed = False
    else:
        preferences.toggle_collapsed()
    click.echo("collapsed" if preferences.collapsed else "expanded")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
