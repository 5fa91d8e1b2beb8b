"""Shared helpers for CLI commands."""

import functools
import sys

from collections.abc import Callable
from typing import Any

import click

from evote_query.common.logging import get_logger
from evote_query.domain.exceptions import EngineError
from evote_query.infrastructure.external.election_api import ElectionApiError
from evote_query.infrastructure.importers.json_election_source import (
    ElectionSourceError,
)


logger = get_logger(__name__)


def with_error_handling(func: Callable[..., Any]) -> Callable[..., Any]:
    """Report known failures as a one-line message and exit with status 1.

    click's own exceptions (usage errors, ``Abort``) pass through unchanged.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except click.ClickException:
            raise
        except (ElectionSourceError, ElectionApiError, EngineError) as e:
            logger.error("command_failed", command=func.__name__, error=str(e))
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
        except Exception as e:
            logger.exception("command_crashed", command=func.__name__)
            click.echo(f"Unexpected error: {e}", err=True)
            sys.exit(1)

    return wrapper
