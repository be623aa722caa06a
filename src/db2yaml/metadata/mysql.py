"""
MySQL metadata extractor using PyMySQL.

Extracts tables, columns, and indexes of one schema from the
information_schema catalog views, plus each table's SHOW CREATE TABLE DDL.
"""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional, Tuple

import pymysql

from db2yaml.exceptions import ExtractionError
from db2yaml.models import (
    Column,
    ConnectionSettings,
    Database,
    Index,
    Table,
)

logger = logging.getLogger(__name__)


AUTO_INCREMENT_RE = re.compile(r"AUTO_INCREMENT=\d+ ")

TABLES_SQL = """
    SELECT `TABLES`.`TABLE_NAME`, `TABLES`.`TABLE_COMMENT`
    FROM `information_schema`.`TABLES`
    LEFT JOIN `information_schema`.`VIEWS`
        ON `TABLES`.`TABLE_SCHEMA` = `VIEWS`.`TABLE_SCHEMA`
        AND `TABLES`.`TABLE_NAME` = `VIEWS`.`TABLE_NAME`
    WHERE `TABLES`.`TABLE_SCHEMA` = %s
        AND `VIEWS`.`TABLE_NAME` IS NULL
"""

COLUMNS_SQL = """
    SELECT
        `TABLE_NAME`,
        `COLUMN_NAME`,
        `IS_NULLABLE`,
        `DATA_TYPE`,
        `CHARACTER_MAXIMUM_LENGTH`,
        `COLUMN_DEFAULT`,
        `COLUMN_COMMENT`,
        `EXTRA`,
        `ORDINAL_POSITION`
    FROM `information_schema`.`COLUMNS`
    WHERE `TABLE_SCHEMA` = %s
    ORDER BY `TABLE_NAME`, `ORDINAL_POSITION`
"""

INDEXES_SQL = """
    SELECT
        `TABLE_NAME`,
        `INDEX_NAME`,
        `NON_UNIQUE`,
        `COLUMN_NAME`,
        `SEQ_IN_INDEX`
    FROM `information_schema`.`STATISTICS`
    WHERE `INDEX_SCHEMA` = %s
    ORDER BY `TABLE_NAME`, `NON_UNIQUE`, `INDEX_NAME` != 'PRIMARY', `INDEX_NAME`, `SEQ_IN_INDEX`
"""


def remove_auto_increment(ddl: str) -> str:
    """Strip the AUTO_INCREMENT=<n> counter so DDL is stable across inserts."""
    return AUTO_INCREMENT_RE.sub("", ddl)


def quote_identifier(name: str) -> str:
    """Backtick-quote a MySQL identifier."""
    return "`" + name.replace("`", "``") + "`"


class MySQLMetadataExtractor:
    """
    Extracts metadata from a MySQL schema catalog.

    Uses information_schema views:
    - TABLES (joined against VIEWS to skip views)
    - COLUMNS
    - STATISTICS

    The schema name is always passed as a bound parameter.
    """

    def __init__(
        self,
        settings: Optional[ConnectionSettings] = None,
        connection: Optional[Any] = None,
    ):
        """
        Initialize extractor with connection settings or an open connection.

        Args:
            settings: Settings used to open a PyMySQL connection on connect()
            connection: Existing DB-API connection (not closed by disconnect())
        """
        if settings is None and connection is None:
            raise ValueError("either settings or connection is required")
        self.settings = settings
        self._conn = connection
        self._owns_conn = False

    def connect(self) -> None:
        """Establish database connection."""
        if self._conn is not None:
            return
        self._conn = pymysql.connect(**self.settings.connect_kwargs())
        self._owns_conn = True
        logger.info(f"Connected to MySQL at {self.settings.dsn}")

    def disconnect(self) -> None:
        """Close database connection if we opened it."""
        if self._owns_conn and self._conn:
            self._conn.close()
            self._conn = None
            self._owns_conn = False

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()

    @property
    def connection(self):
        """Get the database connection."""
        if self._conn is None:
            self.connect()
        return self._conn

    @contextmanager
    def _phase(self, phase: str) -> Iterator[None]:
        try:
            yield
        except pymysql.MySQLError as e:
            raise ExtractionError(phase, e) from e

    def load_database(self, database_name: str) -> Database:
        """
        Load tables, columns and indexes of a schema.

        Args:
            database_name: Schema to introspect

        Returns:
            Populated Database

        Raises:
            ExtractionError: if any phase fails; no partial result is returned
        """
        database = Database()
        self.load_tables(database_name, database)
        self.load_columns(database_name, database)
        self.load_indexes(database_name, database)
        return database

    def load_tables(self, database_name: str, database: Database) -> None:
        """Add a Table for every base table in the schema."""
        with self._phase("tables"):
            with self.connection.cursor() as cursor:
                cursor.execute(TABLES_SQL, (database_name,))
                rows = cursor.fetchall()

            for table_name, table_comment in rows:
                ddl = self._get_ddl(database_name, table_name)
                database.add_table(Table(
                    name=table_name,
                    comment=table_comment or "",
                    ddl=remove_auto_increment(ddl),
                ))

        logger.info(f"Loaded {len(database.tables)} tables from {database_name}")

    def _get_ddl(self, database_name: str, table_name: str) -> str:
        """Get the CREATE TABLE statement for a table."""
        sql = f"SHOW CREATE TABLE {quote_identifier(database_name)}.{quote_identifier(table_name)}"
        with self.connection.cursor() as cursor:
            cursor.execute(sql)
            row = cursor.fetchone()
        if row is None:
            return ""
        return row[1] or ""

    def load_columns(self, database_name: str, database: Database) -> None:
        """Attach columns to their tables, ordered by ordinal position."""
        count = 0
        with self._phase("columns"):
            with self.connection.cursor() as cursor:
                cursor.execute(COLUMNS_SQL, (database_name,))
                for row in cursor:
                    (table_name, column_name, is_nullable, data_type, length,
                     default, comment, extra, position) = row

                    table = database.get_table(table_name)
                    if table is None:
                        logger.debug(f"Skipping column {column_name} of unknown table {table_name}")
                        continue

                    table.add_column(Column(
                        name=column_name,
                        type=data_type,
                        length=int(length or 0),
                        auto_increment=extra == "auto_increment",
                        nullable=is_nullable == "YES",
                        default=default if default is not None else "",
                        comment=comment if comment is not None else "",
                        position=int(position or 0),
                    ))
                    count += 1

        for table in database.tables.values():
            table.sort_columns()

        logger.info(f"Loaded {count} columns from {database_name}")

    def load_indexes(self, database_name: str, database: Database) -> None:
        """
        Attach indexes to their tables.

        STATISTICS returns one row per (index, column). Rows are grouped by
        (table, index name) explicitly, so the grouping does not depend on
        the order rows arrive in.
        """
        indexes: Dict[Tuple[str, str], Index] = {}
        with self._phase("indexes"):
            with self.connection.cursor() as cursor:
                cursor.execute(INDEXES_SQL, (database_name,))
                for table_name, index_name, non_unique, column_name, seq_in_index in cursor:
                    table = database.get_table(table_name)
                    if table is None:
                        logger.debug(f"Skipping index {index_name} of unknown table {table_name}")
                        continue

                    key = (table_name, index_name)
                    index = indexes.get(key)
                    if index is None:
                        index = Index(name=index_name, unique=int(non_unique) == 0)
                        indexes[key] = index
                        table.add_index(index)

                    # Functional indexes have no COLUMN_NAME
                    index.add_column(column_name or "", int(seq_in_index or 0))

        for table in database.tables.values():
            table.sort_indexes()

        logger.info(f"Loaded {len(indexes)} indexes from {database_name}")
