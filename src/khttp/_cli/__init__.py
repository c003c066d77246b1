import logging

import click
from dotenv import find_dotenv, load_dotenv

from .._config import config
from .cli_request import request


@click.group()
@click.version_option(package_name="khttp")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """khttp - send HTTP requests from the command line."""
    load_dotenv(find_dotenv(usecwd=True))
    config.refresh_from_env()
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)


cli.add_command(request)

__all__ = ["cli"]
