"""Command-line interface for readpeace."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import IO, Optional

import click
import structlog
from pydantic import ValidationError

from readpeace import __version__
from readpeace.config import Config, find_config_file
from readpeace.extractor import Readability
from readpeace.observability import configure_logging

logger = structlog.get_logger(__name__)


def load_config(path: Optional[Path]) -> Config:
    """Load config from ``path``, a readpeace.yaml in the working directory, or defaults."""
    config_path = path or find_config_file()
    if config_path is None:
        return Config()
    try:
        return Config.from_yaml(config_path)
    except (FileNotFoundError, ValidationError, OSError) as e:
        raise click.BadParameter(str(e), param_hint="--config") from e


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", type=click.Path(exists=True, dir_okay=False), help="Configuration file path")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level (overrides the configuration file)",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], log_level: Optional[str]) -> None:
    """readpeace - pull the readable article out of an HTML page."""
    ctx.ensure_object(dict)
    settings = load_config(Path(config) if config else None)
    if log_level:
        settings.monitoring.log_level = log_level
    configure_logging(settings.monitoring)
    ctx.obj["settings"] = settings


@cli.command()
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--url", default=None, help="URL the page was retrieved from")
@click.option(
    "--format",
    "output_format",
    default="html",
    type=click.Choice(["html", "text", "json"]),
    help="Output format",
)
@click.option("--standard-clean", is_flag=True, help="Use the stricter conditional-cleaning rules")
@click.option("--keep-forced-paragraphs", is_flag=True, help="Keep paragraphs synthesized around loose div text")
@click.option("--footnotes", is_flag=True, help="Convert links into numbered footnotes")
@click.option("--debug", is_flag=True, help="Trace extraction decisions to the log")
@click.pass_context
def extract(
    ctx: click.Context,
    source: IO[str],
    url: Optional[str],
    output_format: str,
    standard_clean: bool,
    keep_forced_paragraphs: bool,
    footnotes: bool,
    debug: bool,
) -> None:
    """Extract the article from SOURCE (a file, or - for stdin)."""
    settings: Config = ctx.obj["settings"]
    overrides = {}
    if standard_clean:
        overrides["light_clean"] = False
    if keep_forced_paragraphs:
        overrides["revert_forced_paragraphs"] = False
    if footnotes:
        overrides["convert_links_to_footnotes"] = True
    if debug:
        overrides["debug"] = True
    config = settings.readability.model_copy(update=overrides)

    html = source.read()
    structlog.contextvars.bind_contextvars(source_url=url)
    try:
        result = Readability(html, url=url, config=config).extract()
    finally:
        structlog.contextvars.unbind_contextvars("source_url")

    if output_format == "json":
        click.echo(
            json.dumps(
                {
                    "success": result.success,
                    "title": result.title_text,
                    "content": result.content_html,
                    "text": result.text,
                },
                indent=2,
                ensure_ascii=False,
            )
        )
    elif output_format == "text":
        click.echo(result.title_text)
        click.echo()
        click.echo(result.text)
    else:
        click.echo(str(result.title))
        click.echo(result.content_html)

    if not result.success:
        logger.warning("No article content found", url=url)
        sys.exit(1)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
