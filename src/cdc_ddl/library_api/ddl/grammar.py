"""Grammar nodes of a MariaDB/MySQL column definition.

The node set is closed: every type shape and every column constraint the
resolvers react to has its own frozen dataclass. Front ends (see
extensions/sql.py) build these nodes and a walker feeds them, in document
order, to the listeners as enter/exit events.
"""
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union


__all__ = ['GrammarNode',
           'LengthOneDimension',
           'LengthTwoDimension',
           'LengthTwoOptionalDimension',
           'CollectionOptions',
           'StringDataType',
           'LongVarcharDataType',
           'NationalStringDataType',
           'NationalVaryingStringDataType',
           'DimensionDataType',
           'CollectionDataType',
           'SimpleDataType',
           'DataTypeNode',
           'NullNotnull',
           'NullColumnConstraint',
           'DefaultValue',
           'DefaultColumnConstraint',
           'AutoIncrementColumnConstraint',
           'PrimaryKeyColumnConstraint',
           'UniqueKeyColumnConstraint',
           'CommentColumnConstraint',
           'SerialDefaultColumnConstraint',
           'ColumnConstraint',
           'ColumnDefinition']


class GrammarNode:
    def children(self) -> Iterator['GrammarNode']:
        return iter(())


# Dimensions keep the literal text as written in the statement, e.g. '10' or '7.3'

@dataclass(frozen=True)
class LengthOneDimension(GrammarNode):
    decimal_literal: str


@dataclass(frozen=True)
class LengthTwoDimension(GrammarNode):
    first: str
    second: str


@dataclass(frozen=True)
class LengthTwoOptionalDimension(GrammarNode):
    first: str
    second: Optional[str] = None

    @property
    def decimal_literals(self) -> Tuple[str, ...]:
        if self.second is None:
            return (self.first,)
        return (self.first, self.second)


@dataclass(frozen=True)
class CollectionOptions(GrammarNode):
    options: Tuple[str, ...] = ()


# Type shapes

@dataclass(frozen=True)
class StringDataType(GrammarNode):
    """CHAR, VARCHAR, the TEXT family, BINARY and VARBINARY with an optional single dimension."""
    type_name: str
    length: Optional[LengthOneDimension] = None
    charset_name: Optional[str] = None
    collation_name: Optional[str] = None

    def children(self):
        if self.length is not None:
            yield self.length


@dataclass(frozen=True)
class LongVarcharDataType(GrammarNode):
    """LONG and LONG VARCHAR, never dimensioned."""
    type_name: str = 'LONG VARCHAR'
    charset_name: Optional[str] = None
    collation_name: Optional[str] = None


@dataclass(frozen=True)
class NationalStringDataType(GrammarNode):
    """NCHAR, NATIONAL CHAR and NATIONAL VARCHAR."""
    type_name: str
    length: Optional[LengthOneDimension] = None

    def children(self):
        if self.length is not None:
            yield self.length


@dataclass(frozen=True)
class NationalVaryingStringDataType(GrammarNode):
    """NVARCHAR and NATIONAL CHAR VARYING."""
    type_name: str
    length: Optional[LengthOneDimension] = None

    def children(self):
        if self.length is not None:
            yield self.length


@dataclass(frozen=True)
class DimensionDataType(GrammarNode):
    """Numeric and temporal types. At most one of the three dimensions is set."""
    type_name: str
    length_one: Optional[LengthOneDimension] = None
    length_two: Optional[LengthTwoDimension] = None
    length_two_optional: Optional[LengthTwoOptionalDimension] = None
    unsigned: bool = False
    zerofill: bool = False

    def children(self):
        for dimension in (self.length_one, self.length_two, self.length_two_optional):
            if dimension is not None:
                yield dimension


@dataclass(frozen=True)
class CollectionDataType(GrammarNode):
    """ENUM and SET."""
    type_name: str
    collection_options: CollectionOptions = CollectionOptions()
    charset_name: Optional[str] = None

    def children(self):
        yield self.collection_options


@dataclass(frozen=True)
class SimpleDataType(GrammarNode):
    """Any other type: DATE, BOOL, JSON, SERIAL, BLOB, spatial types..."""
    type_name: str
    unsigned: bool = False
    zerofill: bool = False


DataTypeNode = Union[StringDataType,
                     LongVarcharDataType,
                     NationalStringDataType,
                     NationalVaryingStringDataType,
                     DimensionDataType,
                     CollectionDataType,
                     SimpleDataType]


# Column constraints

@dataclass(frozen=True)
class NullNotnull(GrammarNode):
    not_: bool = False


@dataclass(frozen=True)
class NullColumnConstraint(GrammarNode):
    null_notnull: NullNotnull = NullNotnull()

    def children(self):
        yield self.null_notnull


@dataclass(frozen=True)
class DefaultValue(GrammarNode):
    # literal text as written, quotes included, e.g. "'abc'", 'NULL', 'CURRENT_TIMESTAMP(3)'
    text: str


@dataclass(frozen=True)
class DefaultColumnConstraint(GrammarNode):
    default_value: DefaultValue

    def children(self):
        yield self.default_value


@dataclass(frozen=True)
class AutoIncrementColumnConstraint(GrammarNode):
    pass


@dataclass(frozen=True)
class PrimaryKeyColumnConstraint(GrammarNode):
    pass


@dataclass(frozen=True)
class UniqueKeyColumnConstraint(GrammarNode):
    pass


@dataclass(frozen=True)
class CommentColumnConstraint(GrammarNode):
    string_literal: Optional[str] = None


@dataclass(frozen=True)
class SerialDefaultColumnConstraint(GrammarNode):
    pass


ColumnConstraint = Union[NullColumnConstraint,
                         DefaultColumnConstraint,
                         AutoIncrementColumnConstraint,
                         PrimaryKeyColumnConstraint,
                         UniqueKeyColumnConstraint,
                         CommentColumnConstraint,
                         SerialDefaultColumnConstraint]


@dataclass(frozen=True)
class ColumnDefinition(GrammarNode):
    data_type: DataTypeNode
    constraints: Tuple[ColumnConstraint, ...] = ()

    def children(self):
        yield self.data_type
        yield from self.constraints
