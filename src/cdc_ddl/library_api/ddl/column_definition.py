from typing import Optional

from ..common.context import DdlParserContext, LengthClampDiagnostic
from ..common.logging import get_logger
from .common_intermediate_representation import (Column,
                                                 ColumnBuilder,
                                                 DataType,
                                                 Nullability,
                                                 TableBuilder,
                                                 UNSET_INT_VALUE)
from .data_types import JdbcType
from .default_value import MariaDbDefaultValueListener
from .exceptions import GrammarInvariantException
from .grammar import (AutoIncrementColumnConstraint,
                      CollectionDataType,
                      ColumnDefinition,
                      CommentColumnConstraint,
                      DataTypeNode,
                      DimensionDataType,
                      GrammarNode,
                      LongVarcharDataType,
                      NationalStringDataType,
                      NationalVaryingStringDataType,
                      NullNotnull,
                      PrimaryKeyColumnConstraint,
                      SerialDefaultColumnConstraint,
                      StringDataType,
                      UniqueKeyColumnConstraint)
from .interfaces import DataTypeResolver, DefaultValueListener, ParseTreeListener


__all__ = ['ColumnDefinitionResolver', 'MAX_LENGTH']

logger = get_logger()

MAX_LENGTH = 2**31 - 1
_MAX_LITERAL = 2**63 - 1

# MariaDB uses this precision when the first literal of (M,D) is written as '.D' or '0.D'
_MALFORMED_PRECISION_DEFAULT_LENGTH = 10


class ColumnDefinitionResolver(ParseTreeListener):
    """Builds one column from the enter/exit events of its column definition.

    The table builder is optional. Without one, only the column is resolved:
    no default value listener is attached and key clauses only affect
    nullability.
    """
    def __init__(self,
                 column_builder: ColumnBuilder,
                 data_type_resolver: DataTypeResolver,
                 context: DdlParserContext,
                 table_builder: Optional[TableBuilder] = None):
        self._column_builder = column_builder
        self._data_type_resolver = data_type_resolver
        self._context = context
        self._table_builder = table_builder
        self._unique_column = False
        self._observed_nullability = Nullability.UNSPECIFIED
        self._default_value_listener: Optional[DefaultValueListener] = None

    @property
    def column_builder(self) -> ColumnBuilder:
        return self._column_builder

    @property
    def observed_nullability(self) -> Nullability:
        return self._observed_nullability

    def column(self) -> Column:
        return self._column_builder.create()

    def enter(self, node: GrammarNode):
        match node:
            case ColumnDefinition(data_type=data_type):
                self._enter_column_definition(data_type)
            case UniqueKeyColumnConstraint():
                # consumed on exit, see _exit_column_definition
                self._unique_column = True
            case PrimaryKeyColumnConstraint():
                self._enter_primary_key()
            case CommentColumnConstraint(string_literal=string_literal):
                if not self._context.skip_comments and string_literal is not None:
                    self._column_builder.comment = self._context.without_quotes(string_literal)
            case NullNotnull(not_=not_):
                self._observed_nullability = Nullability.from_optional(not not_)
            case AutoIncrementColumnConstraint():
                self._column_builder.auto_incremented = True
                self._column_builder.generated = True
            case SerialDefaultColumnConstraint():
                self._serial_column()
            case _:
                pass
        if self._default_value_listener is not None:
            self._default_value_listener.enter(node)

    def exit(self, node: GrammarNode):
        if self._default_value_listener is not None:
            self._default_value_listener.exit(node)
        match node:
            case ColumnDefinition():
                self._exit_column_definition()
            case _:
                pass

    def _enter_column_definition(self, data_type: DataTypeNode):
        self._unique_column = False
        self._observed_nullability = Nullability.UNSPECIFIED
        self._resolve_column_data_type(data_type)
        if self._table_builder is not None:
            self._default_value_listener = MariaDbDefaultValueListener(
                self._column_builder, lambda: self._observed_nullability)

    def _exit_column_definition(self):
        if self._observed_nullability != Nullability.UNSPECIFIED:
            self._column_builder.nullability = self._observed_nullability
        if (self._unique_column and self._table_builder is not None
                and not self._table_builder.has_primary_key()):
            # the first unique column stands in for a missing primary key
            logger.debug(f'Promoting unique column {self._column_builder.name} '
                         f'to primary key of {self._table_builder.table_id}')
            self._table_builder.add_column(self._column_builder.create())
            self._table_builder.set_primary_key_names(self._column_builder.name)
        listener, self._default_value_listener = self._default_value_listener, None
        if listener is not None:
            listener.flush(force=True)

    def _enter_primary_key(self):
        # at most one primary key clause per table, the grammar rejects the rest
        self._observed_nullability = Nullability.NOT_NULL
        self._column_builder.nullability = Nullability.NOT_NULL
        if self._table_builder is not None:
            self._table_builder.add_column(self._column_builder.create())
            self._table_builder.set_primary_key_names(self._column_builder.name)

    def _serial_column(self):
        if self._observed_nullability == Nullability.UNSPECIFIED:
            self._observed_nullability = Nullability.NOT_NULL
        self._unique_column = True
        self._column_builder.unique = True
        self._column_builder.auto_incremented = True
        self._column_builder.generated = True

    def _resolve_column_data_type(self, data_type_node: DataTypeNode):
        charset_name = None
        data_type = self._data_type_resolver.resolve(data_type_node)
        builder = self._column_builder

        match data_type_node:
            case StringDataType(length=length, charset_name=charset, collation_name=collation):
                if length is not None:
                    builder.length = self._parse_length(length.decimal_literal)
                charset_name = self._context.extract_charset(charset, collation)
            case LongVarcharDataType(charset_name=charset, collation_name=collation):
                charset_name = self._context.extract_charset(charset, collation)
            case NationalStringDataType(length=length) | NationalVaryingStringDataType(length=length):
                if length is not None:
                    builder.length = self._parse_length(length.decimal_literal)
            case DimensionDataType():
                self._resolve_dimensions(data_type_node)
            case CollectionDataType(collection_options=collection_options, charset_name=charset):
                if charset is not None:
                    charset_name = charset
                if data_type.name.upper() == 'SET':
                    # options plus the commas separating them
                    builder.length = max(0, 2 * len(collection_options.options) - 1)
                elif data_type.name.upper() == 'ENUM':
                    builder.length = 1
                else:
                    raise GrammarInvariantException(
                        f'Collection type of column {builder.name} resolved to {data_type.name}, '
                        'expected ENUM or SET')
            case _:
                pass

        self._apply_resolved_type(data_type_node, data_type, charset_name)

    def _apply_resolved_type(self, data_type_node: DataTypeNode,
                             data_type: DataType,
                             charset_name: Optional[str]):
        builder = self._column_builder
        data_type_name = data_type.name.upper()

        if data_type_name in ('ENUM', 'SET'):
            if not isinstance(data_type_node, CollectionDataType):
                raise GrammarInvariantException(
                    f'{data_type_name} column {builder.name} has no value list')
            # value conversion needs the legal values
            builder.type_name = data_type_name
            builder.enum_values = list(data_type_node.collection_options.options)
        elif data_type_name == 'SERIAL':
            # SERIAL is BIGINT UNSIGNED NOT NULL AUTO_INCREMENT UNIQUE
            builder.type_name = 'BIGINT UNSIGNED'
            self._serial_column()
        else:
            builder.type_name = data_type_name

        builder.jdbc_type = data_type.jdbc_type

        if builder.length == UNSET_INT_VALUE:
            builder.length = data_type.length
        if builder.scale is None and data_type.scale != UNSET_INT_VALUE:
            builder.scale = data_type.scale

        if data_type.jdbc_type in (JdbcType.NCHAR, JdbcType.NVARCHAR):
            builder.charset_name = 'utf8'
            if data_type.jdbc_type == JdbcType.NCHAR and builder.length == UNSET_INT_VALUE:
                builder.length = 1
        else:
            builder.charset_name = charset_name

    def _resolve_dimensions(self, data_type_node: DimensionDataType):
        length = None
        scale = None
        if data_type_node.length_one is not None:
            length = self._parse_length(data_type_node.length_one.decimal_literal)
        if data_type_node.length_two is not None:
            length = self._parse_length(data_type_node.length_two.first)
            scale = self._parse_scale(data_type_node.length_two.second)
        if data_type_node.length_two_optional is not None:
            literals = data_type_node.length_two_optional.decimal_literals
            if '.' in literals[0]:
                integer_part = literals[0].split('.', 1)[0]
                if not integer_part or self._parse_int(integer_part) == 0:
                    length = _MALFORMED_PRECISION_DEFAULT_LENGTH
                else:
                    length = self._parse_length(integer_part)
            else:
                length = self._parse_length(literals[0])
            if len(literals) > 1:
                scale = self._parse_scale(literals[1])
        if length is not None:
            self._column_builder.length = length
        if scale is not None:
            self._column_builder.scale = scale

    def _parse_length(self, length_literal: str) -> int:
        length = self._parse_int(length_literal)
        if length > MAX_LENGTH:
            table_id = str(self._table_builder.table_id) if self._table_builder is not None else None
            logger.warning(f"The length '{length}' of the column `{table_id}`.`{self._column_builder.name}` "
                           f"is too large to be supported, truncating it to '{MAX_LENGTH}'")
            self._context.report(LengthClampDiagnostic(component=type(self).__name__,
                                                       table_id=table_id,
                                                       column_name=self._column_builder.name,
                                                       attempted_length=length,
                                                       clamped_length=MAX_LENGTH))
            length = MAX_LENGTH
        return length

    def _parse_scale(self, scale_literal: str) -> int:
        scale = self._parse_int(scale_literal)
        if scale > MAX_LENGTH:
            raise GrammarInvariantException(
                f"Scale '{scale_literal}' of column {self._column_builder.name} is out of range")
        return scale

    def _parse_int(self, literal: str) -> int:
        try:
            value = int(literal.strip())
        except ValueError as value_error:
            raise GrammarInvariantException(
                f"Invalid numeric literal '{literal}' in column {self._column_builder.name}") from value_error
        if value > _MAX_LITERAL:
            raise GrammarInvariantException(
                f"Numeric literal '{literal}' in column {self._column_builder.name} is out of range")
        return value
