"""
Core data models for the db2yaml package.

Defines the in-memory schema model populated from the MySQL catalog, and the
connection settings used to reach the server.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 3306
DEFAULT_USER = "root"
PRIMARY_INDEX_NAME = "PRIMARY"


@dataclass
class ConnectionSettings:
    """Settings for a single MySQL connection."""
    database: str
    user: str = DEFAULT_USER
    password: str = ""
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    charset: str = "utf8"

    @property
    def dsn(self) -> str:
        """Return a printable connection target (password omitted)."""
        return f"{self.user}@{self.host}:{self.port}/{self.database}"

    def connect_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for pymysql.connect()."""
        return {
            "user": self.user,
            "password": self.password,
            "host": self.host,
            "port": self.port,
            "database": self.database,
            "charset": self.charset,
        }


@dataclass
class Column:
    """Metadata for a single column."""
    name: str
    type: str
    length: int = 0
    auto_increment: bool = False
    nullable: bool = False
    default: str = ""
    comment: str = ""
    position: int = 0  # ORDINAL_POSITION, not rendered

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, dropping zero-valued optional fields."""
        data: Dict[str, Any] = {
            "name": self.name,
            "type": self.type,
        }
        if self.length:
            data["length"] = self.length
        if self.auto_increment:
            data["auto_increment"] = True
        if self.nullable:
            data["nullable"] = True
        if self.default:
            data["default"] = self.default
        if self.comment:
            data["comment"] = self.comment
        return data


@dataclass
class IndexColumn:
    """A column participating in an index."""
    name: str
    seq_in_index: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name}


@dataclass
class Index:
    """An index over one or more columns of a table."""
    name: str
    unique: bool = False
    columns: List[IndexColumn] = field(default_factory=list)

    @property
    def is_primary(self) -> bool:
        return self.name == PRIMARY_INDEX_NAME

    @property
    def sort_key(self) -> Tuple[bool, bool, str, str]:
        """Unique first, then PRIMARY, then by name as MySQL collates it."""
        return (not self.unique, not self.is_primary, self.name.casefold(), self.name)

    @property
    def column_names(self) -> List[str]:
        return [c.name for c in self.columns]

    def add_column(self, name: str, seq_in_index: int = 0) -> IndexColumn:
        """Append a column to the index."""
        column = IndexColumn(name=name, seq_in_index=seq_in_index)
        self.columns.append(column)
        return column

    def sort_columns(self) -> None:
        """Order columns by their position within the index."""
        self.columns.sort(key=lambda c: c.seq_in_index)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "unique": self.unique,
            "columns": [c.to_dict() for c in self.columns],
        }


@dataclass
class Table:
    """Metadata for a database table."""
    name: str
    comment: str = ""
    ddl: str = ""
    columns: List[Column] = field(default_factory=list)
    indexes: List[Index] = field(default_factory=list)

    @property
    def column_names(self) -> List[str]:
        """Return list of column names."""
        return [c.name for c in self.columns]

    def add_column(self, column: Column) -> None:
        self.columns.append(column)

    def add_index(self, index: Index) -> None:
        self.indexes.append(index)

    def get_index(self, name: str) -> Optional[Index]:
        """Get index by name."""
        for index in self.indexes:
            if index.name == name:
                return index
        return None

    def sort_columns(self) -> None:
        """Order columns by ordinal position."""
        self.columns.sort(key=lambda c: c.position)

    def sort_indexes(self) -> None:
        """Order indexes and their columns the way they are rendered."""
        for index in self.indexes:
            index.sort_columns()
        self.indexes.sort(key=lambda i: i.sort_key)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        data: Dict[str, Any] = {
            "name": self.name,
            "columns": [c.to_dict() for c in self.columns],
            "indexes": [i.to_dict() for i in self.indexes],
            "comment": self.comment,
        }
        if self.ddl:
            data["ddl"] = self.ddl
        return data


@dataclass
class Database:
    """All tables of one schema, keyed by table name."""
    tables: Dict[str, Table] = field(default_factory=dict)

    def add_table(self, table: Table) -> None:
        self.tables[table.name] = table

    def get_table(self, name: str) -> Optional[Table]:
        """Get table by exact name."""
        return self.tables.get(name)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, tables ordered by name."""
        return {name: self.tables[name].to_dict() for name in sorted(self.tables)}
