"""
YAML writer for the schema model.

Renders a Database as a YAML mapping of table name to table definition.
Tables are ordered by name and fields keep the model's declaration order,
so the same schema always renders to the same text.
"""

from __future__ import annotations

import logging
from typing import TextIO

import yaml

from db2yaml.models import Database

logger = logging.getLogger(__name__)

# No line folding: long DDL lines and comments stay on one line.
MAX_WIDTH = 2 ** 31 - 1


class SchemaDumper(yaml.SafeDumper):
    """SafeDumper that writes multi-line strings as literal blocks."""


def _represent_str(dumper: yaml.SafeDumper, data: str) -> yaml.Node:
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_str(data)


SchemaDumper.add_representer(str, _represent_str)


def render_yaml(database: Database) -> str:
    """Render the database's tables as a YAML document ending in a newline."""
    return yaml.dump(
        database.to_dict(),
        Dumper=SchemaDumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        width=MAX_WIDTH,
    )


class YamlWriter:
    """Writes rendered schema documents to a text stream."""

    def __init__(self, stream: TextIO):
        self.stream = stream

    def write(self, database: Database) -> str:
        """
        Render and write a database.

        Returns:
            The rendered document
        """
        document = render_yaml(database)
        self.stream.write(document)
        self.stream.flush()
        logger.debug(f"Wrote {len(database.tables)} tables ({len(document)} bytes)")
        return document
