"""
Command-line interface for db2yaml.

Connects to a MySQL server, reads one schema's catalog and prints it as YAML
on stdout. Logs and errors go to stderr.
"""

from __future__ import annotations

import logging
import sys

import click
import pymysql
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from db2yaml import __version__
from db2yaml.exceptions import Db2YamlError
from db2yaml.metadata import MySQLMetadataExtractor
from db2yaml.models import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_USER, ConnectionSettings
from db2yaml.output import YamlWriter

logger = logging.getLogger(__name__)

console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with Rich handler."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


@click.command(context_settings={"help_option_names": ["--help"]})
@click.version_option(version=__version__, prog_name="db2yaml")
@click.option("-u", "--user", type=str, default=DEFAULT_USER, show_default=True, help="MySQL user name")
@click.option("-h", "--host", type=str, default=DEFAULT_HOST, show_default=True, help="MySQL server host name")
@click.option("-P", "--port", type=int, default=DEFAULT_PORT, show_default=True, help="MySQL server port number")
@click.option("-D", "--database", type=str, required=True, help="Database to use")
@click.option("-p", "--password", type=str, default="", help="Password to connect to the MySQL server")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def cli(
    user: str,
    host: str,
    port: int,
    database: str,
    password: str,
    verbose: bool,
) -> None:
    """
    Generate YAML file from database tables.

    Examples:

        db2yaml -u root -h localhost -D app_production > schema.yml
    """
    setup_logging(verbose)

    settings = ConnectionSettings(
        database=database,
        user=user,
        password=password,
        host=host,
        port=port,
    )

    try:
        with MySQLMetadataExtractor(settings) as extractor:
            schema = extractor.load_database(database)
    except (Db2YamlError, pymysql.MySQLError) as e:
        logger.debug("Extraction failed", exc_info=True)
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    YamlWriter(sys.stdout).write(schema)


if __name__ == "__main__":
    cli()
