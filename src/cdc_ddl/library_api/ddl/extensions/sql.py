import re
from typing import Iterator, List, Optional, Set, Tuple, Union

import sqlglot
from sqlglot import exp
from sqlglot.errors import ParseError

from ..common_intermediate_representation import TableId, TablePrimaryKey
from ..exceptions import ParsingException, UnsupportedStatementException
from ..grammar import (AutoIncrementColumnConstraint,
                       CollectionDataType,
                       CollectionOptions,
                       ColumnConstraint,
                       ColumnDefinition,
                       CommentColumnConstraint,
                       DataTypeNode,
                       DefaultColumnConstraint,
                       DefaultValue,
                       DimensionDataType,
                       LengthOneDimension,
                       LengthTwoDimension,
                       LengthTwoOptionalDimension,
                       LongVarcharDataType,
                       NationalStringDataType,
                       NationalVaryingStringDataType,
                       NullColumnConstraint,
                       NullNotnull,
                       PrimaryKeyColumnConstraint,
                       SerialDefaultColumnConstraint,
                       SimpleDataType,
                       StringDataType,
                       UniqueKeyColumnConstraint)
from ..interfaces import SourceToColumnDefinitionsProcessor


__all__ = ['SqlColumnDefinitionsProcessor']

_STRING_TYPES = {'CHAR', 'VARCHAR', 'TINYTEXT', 'TEXT', 'MEDIUMTEXT', 'LONGTEXT',
                 'BINARY', 'VARBINARY'}
_LONG_VARCHAR_TYPES = {'LONG', 'LONG VARCHAR'}
_COLLECTION_TYPES = {'ENUM', 'SET'}
_TWO_OPTIONAL_DIMENSION_TYPES = {'DECIMAL', 'DEC', 'FIXED', 'NUMERIC', 'FLOAT'}
_DIMENSION_TYPES = {'BIT', 'TINYINT', 'SMALLINT', 'MEDIUMINT', 'INT', 'INTEGER', 'BIGINT',
                    'REAL', 'DOUBLE', 'TIME', 'DATETIME', 'TIMESTAMP', 'YEAR'}

# sqlglot folds UNSIGNED into the type and uses its own names for a few MySQL types
_SQLGLOT_TYPE_NAMES = {
    'UTINYINT': ('TINYINT', True),
    'USMALLINT': ('SMALLINT', True),
    'UMEDIUMINT': ('MEDIUMINT', True),
    'UINT': ('INT', True),
    'UBIGINT': ('BIGINT', True),
    'UDECIMAL': ('DECIMAL', True),
    'UDOUBLE': ('DOUBLE', True),
    'TIMESTAMPTZ': ('TIMESTAMP', False),
    'TIMESTAMPLTZ': ('TIMESTAMP', False),
}

# MariaDB forms sqlglot cannot read are rewritten before parsing. Modifiers with
# no sqlglot counterpart become CHECK constraints on a marker column name.
_SERIAL_DEFAULT_MARKER = 'cdc_ddl_serial_default_value'
_ZEROFILL_MARKER = 'cdc_ddl_zerofill'
_LONG_VARCHAR_MARKER = 'cdc_ddl_long_varchar'
_MARKERS = {_SERIAL_DEFAULT_MARKER, _ZEROFILL_MARKER, _LONG_VARCHAR_MARKER}

_SOURCE_REWRITES = [
    (re.compile(r'\bSERIAL\s+DEFAULT\s+VALUE\b', re.IGNORECASE),
     f'CHECK ({_SERIAL_DEFAULT_MARKER})'),
    # ZEROFILL UNSIGNED is legal too, keep UNSIGNED next to the type
    (re.compile(r'\bZEROFILL((?:\s+UNSIGNED)?)\b', re.IGNORECASE),
     rf'\1 CHECK ({_ZEROFILL_MARKER})'),
    (re.compile(r'\bNATIONAL\s+(?:CHARACTER|CHAR)\s+VARYING\b', re.IGNORECASE), 'NVARCHAR'),
    (re.compile(r'\b(?:NATIONAL|NCHAR)\s+VARCHAR\b', re.IGNORECASE), 'NVARCHAR'),
    (re.compile(r'\bNCHAR\s+VARYING\b', re.IGNORECASE), 'NVARCHAR'),
    (re.compile(r'\bNATIONAL\s+(?:CHARACTER|CHAR)\b', re.IGNORECASE), 'NCHAR'),
    # LONG VARCHAR takes no length, so a column named `long` of type VARCHAR(n) is left alone
    (re.compile(r'\bLONG\s+VARCHAR\b(?!\s*\()', re.IGNORECASE),
     f'MEDIUMTEXT CHECK ({_LONG_VARCHAR_MARKER})'),
]

# string literals and quoted identifiers are never rewritten
_QUOTED = re.compile(r"""('(?:[^'\\]|\\.|'')*'|"(?:[^"\\]|\\.|"")*"|`(?:[^`]|``)*`)""")


def normalize_source_ddl(source_ddl: str) -> str:
    parts = _QUOTED.split(source_ddl)
    for index in range(0, len(parts), 2):
        for pattern, replacement in _SOURCE_REWRITES:
            parts[index] = pattern.sub(replacement, parts[index])
    return ''.join(parts)


def _marker_name(kind: exp.Expression) -> Optional[str]:
    if not isinstance(kind, exp.CheckColumnConstraint):
        return None
    checked = kind.this
    if isinstance(checked, exp.Paren):
        checked = checked.this
    if isinstance(checked, exp.Column) and checked.name.lower() in _MARKERS:
        return checked.name.lower()
    return None


def _text(node) -> Optional[str]:
    if node is None:
        return None
    if isinstance(node, str):
        return node
    return node.name


def _type_name(data_type: exp.DataType) -> Tuple[str, bool]:
    if data_type.this == exp.DataType.Type.USERDEFINED:
        name = str(data_type.args.get('kind') or 'USERDEFINED').upper()
    else:
        name = data_type.this.value
    return _SQLGLOT_TYPE_NAMES.get(name, (name, False))


def _type_parameters(data_type: exp.DataType) -> List[str]:
    parameters = []
    for param in data_type.expressions:
        expression = param.this if isinstance(param, exp.DataTypeParam) else param
        parameters.append(_text(expression))
    return parameters


def _data_type_node(data_type: exp.DataType,
                    charset_name: Optional[str],
                    collation_name: Optional[str],
                    markers: Set[str]) -> DataTypeNode:
    name, unsigned = _type_name(data_type)
    parameters = _type_parameters(data_type)
    length = LengthOneDimension(parameters[0]) if parameters else None
    zerofill = _ZEROFILL_MARKER in markers

    if _LONG_VARCHAR_MARKER in markers:
        return LongVarcharDataType(charset_name=charset_name, collation_name=collation_name)
    if name in _STRING_TYPES:
        return StringDataType(name, length=length,
                              charset_name=charset_name, collation_name=collation_name)
    if name in _LONG_VARCHAR_TYPES:
        return LongVarcharDataType(name, charset_name=charset_name, collation_name=collation_name)
    if name == 'NCHAR':
        return NationalStringDataType(name, length=length)
    if name == 'NVARCHAR':
        return NationalVaryingStringDataType(name, length=length)
    if name in _COLLECTION_TYPES:
        return CollectionDataType(name,
                                  collection_options=CollectionOptions(tuple(parameters)),
                                  charset_name=charset_name)
    if name in _TWO_OPTIONAL_DIMENSION_TYPES:
        two_optional = None
        if parameters:
            two_optional = LengthTwoOptionalDimension(*parameters[:2])
        return DimensionDataType(name, length_two_optional=two_optional,
                                 unsigned=unsigned, zerofill=zerofill)
    if name in _DIMENSION_TYPES:
        if len(parameters) > 1:
            return DimensionDataType(name, length_two=LengthTwoDimension(*parameters[:2]),
                                     unsigned=unsigned, zerofill=zerofill)
        return DimensionDataType(name, length_one=length, unsigned=unsigned, zerofill=zerofill)
    return SimpleDataType(name, unsigned=unsigned, zerofill=zerofill)


def _column_constraint_node(kind: exp.Expression) -> Optional[ColumnConstraint]:
    if isinstance(kind, exp.NotNullColumnConstraint):
        return NullColumnConstraint(NullNotnull(not_=not kind.args.get('allow_null')))
    if isinstance(kind, exp.PrimaryKeyColumnConstraint):
        return PrimaryKeyColumnConstraint()
    if isinstance(kind, exp.UniqueColumnConstraint):
        return UniqueKeyColumnConstraint()
    if isinstance(kind, exp.AutoIncrementColumnConstraint):
        return AutoIncrementColumnConstraint()
    if isinstance(kind, exp.CommentColumnConstraint):
        return CommentColumnConstraint(kind.this.sql(dialect='mysql'))
    if isinstance(kind, exp.DefaultColumnConstraint):
        return DefaultColumnConstraint(DefaultValue(kind.this.sql(dialect='mysql')))
    return None


def column_def_to_column_definition(column_def: exp.ColumnDef) -> ColumnDefinition:
    charset_name = None
    collation_name = None
    markers = set()
    constraints = []
    for constraint in column_def.args.get('constraints') or []:
        kind = constraint.args.get('kind') if isinstance(constraint, exp.ColumnConstraint) else constraint
        if isinstance(kind, exp.CharacterSetColumnConstraint):
            charset_name = _text(kind.this)
        elif isinstance(kind, exp.CollateColumnConstraint):
            collation_name = _text(kind.this)
        elif (marker := _marker_name(kind)) is not None:
            markers.add(marker)
            if marker == _SERIAL_DEFAULT_MARKER:
                constraints.append(SerialDefaultColumnConstraint())
        elif (node := _column_constraint_node(kind)) is not None:
            constraints.append(node)

    data_type = column_def.args.get('kind')
    if data_type is None:
        raise ParsingException(f'Column {column_def.name} has no data type')
    return ColumnDefinition(_data_type_node(data_type, charset_name, collation_name, markers),
                            tuple(constraints))


def _primary_key_names(primary_key: exp.PrimaryKey) -> Tuple[str, ...]:
    names = []
    for part in primary_key.expressions:
        identifier = part if isinstance(part, exp.Identifier) else part.find(exp.Identifier)
        if identifier is None:
            raise ParsingException(f'Unsupported primary key part: {part.sql()}')
        names.append(identifier.name)
    return tuple(names)


def _table_id(table: exp.Table) -> TableId:
    return TableId(table=table.name,
                   schema=table.db or None,
                   catalog=table.catalog or None)


# pylint: disable=R0903
class SqlColumnDefinitionsProcessor(SourceToColumnDefinitionsProcessor):
    def __init__(self, dialect: str = 'mysql'):
        self._dialect = dialect

    def yield_column_definitions(self, source_ddl: str) -> Iterator[
            Union[TableId, Tuple[str, ColumnDefinition], TablePrimaryKey]]:
        try:
            statement = sqlglot.parse_one(normalize_source_ddl(source_ddl), read=self._dialect)
        except ParseError as parse_error:
            raise ParsingException(f'Could not parse ddl: {parse_error}') from parse_error

        primary_keys: List[exp.PrimaryKey] = []
        if isinstance(statement, exp.Create) and str(statement.args.get('kind', '')).upper() == 'TABLE':
            column_defs = []
            if isinstance(statement.this, exp.Schema):
                column_defs = statement.this.expressions
                primary_keys = list(statement.this.find_all(exp.PrimaryKey))
        elif isinstance(statement, exp.Alter):
            column_defs = statement.args.get('actions') or []
        else:
            raise UnsupportedStatementException(
                f'Only CREATE TABLE and ALTER TABLE ... ADD COLUMN are supported, got: {statement.key}')

        table = statement.find(exp.Table)
        if table is None:
            raise ParsingException('No table found in ddl')
        yield _table_id(table)
        for column_def in column_defs:
            if isinstance(column_def, exp.ColumnDef):
                yield column_def.name, column_def_to_column_definition(column_def)
        # table level keys come last so every named column already exists
        for primary_key in primary_keys:
            yield TablePrimaryKey(_primary_key_names(primary_key))
