from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .exceptions import ParsingException


__all__ = ['UNSET_INT_VALUE',
           'Nullability',
           'DataType',
           'TableId',
           'TablePrimaryKey',
           'Column',
           'ColumnBuilder',
           'Table',
           'TableBuilder']

UNSET_INT_VALUE = -1


class Nullability(Enum):
    UNSPECIFIED = 0
    NULLABLE = 1
    NOT_NULL = 2

    @staticmethod
    def from_optional(optional: bool) -> 'Nullability':
        return Nullability.NULLABLE if optional else Nullability.NOT_NULL


@dataclass(frozen=True)
class DataType:
    name: str
    jdbc_type: int
    length: int = UNSET_INT_VALUE
    scale: int = UNSET_INT_VALUE


@dataclass(frozen=True)
class TableId:
    table: str
    schema: Optional[str] = None
    catalog: Optional[str] = None

    def __str__(self):
        return '.'.join(part for part in (self.catalog, self.schema, self.table) if part)


@dataclass(frozen=True)
class TablePrimaryKey:
    """A table level PRIMARY KEY (...) clause."""
    column_names: Tuple[str, ...]


@dataclass(frozen=True)
class Column:
    name: str
    type_name: str
    jdbc_type: int
    position: int = 1
    length: Optional[int] = None
    scale: Optional[int] = None
    charset_name: Optional[str] = None
    nullability: Nullability = Nullability.UNSPECIFIED
    unique: bool = False
    auto_incremented: bool = False
    generated: bool = False
    enum_values: Tuple[str, ...] = ()
    comment: Optional[str] = None
    has_default_value: bool = False
    default_value_expression: Optional[str] = None

    @property
    def optional(self) -> bool:
        return self.nullability != Nullability.NOT_NULL

    def as_dict(self) -> Dict[str, Any]:
        return {'name': self.name,
                'position': self.position,
                'type': self.type_name,
                'jdbc_type': self.jdbc_type,
                'length': self.length,
                'scale': self.scale,
                'charset': self.charset_name,
                'optional': self.optional,
                'unique': self.unique,
                'auto_incremented': self.auto_incremented,
                'generated': self.generated,
                'enum_values': list(self.enum_values),
                'comment': self.comment,
                'has_default_value': self.has_default_value,
                'default_value': self.default_value_expression}


@dataclass
class ColumnBuilder:
    """In-progress column. Turned into an immutable Column by create()."""
    name: str
    type_name: str = ''
    jdbc_type: int = 0
    position: int = 1
    length: int = UNSET_INT_VALUE
    scale: Optional[int] = None
    charset_name: Optional[str] = None
    nullability: Nullability = Nullability.UNSPECIFIED
    unique: bool = False
    auto_incremented: bool = False
    generated: bool = False
    enum_values: List[str] = field(default_factory=list)
    comment: Optional[str] = None
    has_default_value: bool = False
    default_value_expression: Optional[str] = None

    def set_default_value_expression(self, expression: Optional[str]):
        self.has_default_value = True
        self.default_value_expression = expression

    def create(self) -> Column:
        return Column(name=self.name,
                      type_name=self.type_name,
                      jdbc_type=self.jdbc_type,
                      position=self.position,
                      length=None if self.length == UNSET_INT_VALUE else self.length,
                      scale=self.scale,
                      charset_name=self.charset_name,
                      nullability=self.nullability,
                      unique=self.unique,
                      auto_incremented=self.auto_incremented,
                      generated=self.generated,
                      enum_values=tuple(self.enum_values),
                      comment=self.comment,
                      has_default_value=self.has_default_value,
                      default_value_expression=self.default_value_expression)


@dataclass(frozen=True)
class Table:
    table_id: TableId
    columns: Tuple[Column, ...] = ()
    primary_key_column_names: Tuple[str, ...] = ()

    def column_with_name(self, name: str) -> Optional[Column]:
        for column in self.columns:
            if column.name.lower() == name.lower():
                return column
        return None

    def as_dict(self) -> Dict[str, Any]:
        return {'table': str(self.table_id),
                'columns': [c.as_dict() for c in self.columns],
                'primary_key': list(self.primary_key_column_names)}


@dataclass
class TableBuilder:
    table_id: TableId
    columns: List[Column] = field(default_factory=list)
    primary_key_column_names: List[str] = field(default_factory=list)

    def has_primary_key(self) -> bool:
        return bool(self.primary_key_column_names)

    def column_with_name(self, name: str) -> Optional[Column]:
        for column in self.columns:
            if column.name.lower() == name.lower():
                return column
        return None

    def add_column(self, column: Column):
        """Append a column, or replace the column with the same name keeping its position."""
        for index, existing in enumerate(self.columns):
            if existing.name.lower() == column.name.lower():
                self.columns[index] = _with_position(column, index + 1)
                return
        self.columns.append(_with_position(column, len(self.columns) + 1))

    def set_primary_key_names(self, *names: str):
        """Replace the primary key with the given column names."""
        for name in names:
            if self.column_with_name(name) is None:
                raise ParsingException(
                    f"Primary key column '{name}' is not a column of table '{self.table_id}'")
        self.primary_key_column_names = list(names)

    def set_table_primary_key(self, primary_key: TablePrimaryKey):
        """Replace the primary key with a table level key. Its columns become NOT NULL."""
        self.set_primary_key_names(*primary_key.column_names)
        for index, column in enumerate(self.columns):
            if (column.name.lower() in {name.lower() for name in primary_key.column_names}
                    and column.nullability != Nullability.NOT_NULL):
                self.columns[index] = replace(column, nullability=Nullability.NOT_NULL)

    def create(self) -> Table:
        return Table(table_id=self.table_id,
                     columns=tuple(self.columns),
                     primary_key_column_names=tuple(self.primary_key_column_names))


def _with_position(column: Column, position: int) -> Column:
    if column.position == position:
        return column
    return replace(column, position=position)
