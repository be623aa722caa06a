"""
db2yaml - Dump MySQL table definitions as YAML

Reads tables, columns, indexes and DDL of one schema from information_schema
and renders them as a stable YAML document, suitable for keeping schemas
under version control.
"""

__version__ = "0.1.0"

from typing import Any

from db2yaml.exceptions import Db2YamlError, ExtractionError
from db2yaml.models import (
    Column,
    ConnectionSettings,
    Database,
    Index,
    IndexColumn,
    Table,
)
from db2yaml.metadata import MySQLMetadataExtractor
from db2yaml.output import YamlWriter, render_yaml


def generate_yaml(connection: Any, database_name: str) -> str:
    """Introspect a schema over an open connection and render it as YAML."""
    extractor = MySQLMetadataExtractor(connection=connection)
    return render_yaml(extractor.load_database(database_name))


__all__ = [
    # Models
    "Column",
    "ConnectionSettings",
    "Database",
    "Index",
    "IndexColumn",
    "Table",
    # Errors
    "Db2YamlError",
    "ExtractionError",
    # Extraction / output
    "MySQLMetadataExtractor",
    "YamlWriter",
    "render_yaml",
    "generate_yaml",
]
