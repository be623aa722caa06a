"""
Metadata introspection module for MySQL databases.

Extracts tables, columns, indexes and DDL from the information_schema
catalog into the schema model.
"""

from db2yaml.metadata.mysql import MySQLMetadataExtractor, remove_auto_increment

__all__ = [
    "MySQLMetadataExtractor",
    "remove_auto_increment",
]
