"""Shared fixtures: an in-memory stand-in for a PyMySQL connection."""

from typing import Dict, List, Optional, Tuple

import pymysql
import pytest


USERS_DDL = (
    "CREATE TABLE `users` (\n"
    "  `id` int(11) unsigned NOT NULL AUTO_INCREMENT COMMENT 'User ID',\n"
    "  PRIMARY KEY (`id`)\n"
    ") ENGINE=InnoDB AUTO_INCREMENT=42 DEFAULT CHARSET=utf8 COMMENT='Users table'"
)

USERS2_DDL = (
    "CREATE TABLE `users2` (\n"
    "  `id` int(11) unsigned NOT NULL AUTO_INCREMENT COMMENT 'User ID',\n"
    "  PRIMARY KEY (`id`)\n"
    ") ENGINE=InnoDB AUTO_INCREMENT=7 DEFAULT CHARSET=utf8 COMMENT='Users table 2'"
)


class FakeCursor:
    """Cursor that answers catalog queries from canned rows."""

    def __init__(self, conn: "FakeConnection"):
        self.conn = conn
        self.rows: List[tuple] = []
        self.closed = False

    def execute(self, sql: str, args: Optional[tuple] = None) -> int:
        self.conn.executed.append((sql, args))
        for marker, error in self.conn.failures.items():
            if marker in sql:
                raise error

        if "SHOW CREATE TABLE" in sql:
            name = sql.rsplit(".", 1)[1].strip("`")
            ddl = self.conn.ddl.get(name)
            self.rows = [(name, ddl)] if ddl is not None else []
        elif "`information_schema`.`TABLES`" in sql:
            self.rows = list(self.conn.tables)
        elif "`information_schema`.`COLUMNS`" in sql:
            self.rows = list(self.conn.columns)
        elif "`information_schema`.`STATISTICS`" in sql:
            self.rows = list(self.conn.indexes)
        else:
            raise AssertionError(f"unexpected query: {sql}")
        return len(self.rows)

    def fetchall(self) -> List[tuple]:
        rows, self.rows = self.rows, []
        return rows

    def fetchone(self) -> Optional[tuple]:
        return self.rows.pop(0) if self.rows else None

    def __iter__(self):
        while self.rows:
            yield self.rows.pop(0)

    def close(self) -> None:
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class FakeConnection:
    """Connection holding catalog rows for one schema."""

    def __init__(
        self,
        tables: Optional[List[Tuple[str, str]]] = None,
        ddl: Optional[Dict[str, str]] = None,
        columns: Optional[List[tuple]] = None,
        indexes: Optional[List[tuple]] = None,
    ):
        self.tables = tables or []
        self.ddl = ddl or {}
        self.columns = columns or []
        self.indexes = indexes or []
        self.failures: Dict[str, Exception] = {}
        self.executed: List[Tuple[str, Optional[tuple]]] = []
        self.cursors: List[FakeCursor] = []
        self.closed = False

    def fail_on(self, marker: str, message: str = "boom") -> None:
        """Make any query containing marker raise an OperationalError."""
        self.failures[marker] = pymysql.err.OperationalError(2013, message)

    def cursor(self) -> FakeCursor:
        cursor = FakeCursor(self)
        self.cursors.append(cursor)
        return cursor

    def close(self) -> None:
        self.closed = True


def column_row(table, name, position, data_type="int", nullable="NO",
               length=None, default=None, comment=None, extra=""):
    """Build an information_schema.COLUMNS row."""
    return (table, name, nullable, data_type, length, default, comment, extra, position)


@pytest.fixture
def empty_connection():
    return FakeConnection()


@pytest.fixture
def users_connection():
    """One table with an auto-increment primary key."""
    return FakeConnection(
        tables=[("users", "Users table")],
        ddl={"users": USERS_DDL},
        columns=[
            column_row("users", "id", 1, extra="auto_increment", comment="User ID"),
        ],
        indexes=[
            ("users", "PRIMARY", 0, "id", 1),
        ],
    )


@pytest.fixture
def two_tables_connection():
    """Two structurally identical tables."""
    return FakeConnection(
        tables=[("users2", "Users table 2"), ("users", "Users table")],
        ddl={"users": USERS_DDL, "users2": USERS2_DDL},
        columns=[
            column_row("users", "id", 1, extra="auto_increment", comment="User ID"),
            column_row("users2", "id", 1, extra="auto_increment", comment="User ID"),
        ],
        indexes=[
            ("users", "PRIMARY", 0, "id", 1),
            ("users2", "PRIMARY", 0, "id", 1),
        ],
    )
