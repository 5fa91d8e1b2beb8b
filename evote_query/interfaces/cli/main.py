"""Entry point for the ``evote-query`` command."""

import click

from evote_query import __version__
from evote_query.common.logging import setup_logging
from evote_query.infrastructure.config import get_settings
from evote_query.interfaces.cli.commands.elections import options, query, suggest


@click.group()
@click.version_option(__version__, prog_name="evote-query")
@click.option("--log-level", default=None, help="Override EVOTE_LOG_LEVEL")
@click.option("--json-logs/--console-logs", default=None, help="Log format")
def cli(log_level: str | None, json_logs: bool | None):
    """Query election snapshots: filter, search, paginate and summarize."""
    settings = get_settings()
    setup_logging(
        log_level=log_level or settings.log_level,
        json_logs=settings.json_logs if json_logs is None else json_logs,
    )


cli.add_command(query)
cli.add_command(options)
cli.add_command(suggest)


if __name__ == "__main__":
    cli()
