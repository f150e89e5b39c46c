from typing import Optional

from ..common.context import DdlParserContext
from ..common.logging import get_logger
from .column_definition import ColumnDefinitionResolver
from .common_intermediate_representation import (Column,
                                                 ColumnBuilder,
                                                 Table,
                                                 TableBuilder,
                                                 TableId,
                                                 TablePrimaryKey)
from .data_types import MariaDbDataTypeResolver
from .exceptions import ParsingException
from .grammar import ColumnDefinition
from .interfaces import DataTypeResolver, SourceToColumnDefinitionsProcessor
from .walker import ParseTreeWalker

# pylint: disable=wildcard-import
# pylint: disable=unused-wildcard-import
# Processors from .extensions are looked up by ddl name from globals(), so the
# top-level import keeps the dependency visible.
from .extensions import *  # noqa: F403


__all__ = ['ddl_to_table', 'resolve_column_definition', 'column_definition_to_column']

logger = get_logger()


def _processor_for(ddl_name: str, context: DdlParserContext) -> SourceToColumnDefinitionsProcessor:
    try:
        processor_type = globals()[ddl_name.lower().capitalize() + 'ColumnDefinitionsProcessor']
    except KeyError as key_error:
        raise ParsingException(f'No column definitions processor for {ddl_name}') from key_error
    return processor_type(dialect=context.settings.dialect)


def resolve_column_definition(column_definition: ColumnDefinition,
                              column_name: str,
                              context: DdlParserContext,
                              *,
                              table_builder: Optional[TableBuilder] = None,
                              data_type_resolver: Optional[DataTypeResolver] = None) -> Column:
    """
    Resolves a single column definition. When a table builder is given the
    finished column is added to it, which also picks up primary key changes.
    """
    column_builder = ColumnBuilder(name=column_name)
    resolver = ColumnDefinitionResolver(column_builder,
                                        data_type_resolver or MariaDbDataTypeResolver(),
                                        context,
                                        table_builder)
    ParseTreeWalker.walk(resolver, column_definition)
    column = resolver.column()
    if table_builder is not None:
        table_builder.add_column(column)
    logger.debug(f'Resolved column {column}')
    return column


def ddl_to_table(source_ddl: str,
                 context: Optional[DdlParserContext] = None,
                 *,
                 ddl_name: str = 'sql',
                 data_type_resolver: Optional[DataTypeResolver] = None) -> Table:
    context = context or DdlParserContext()
    data_type_resolver = data_type_resolver or MariaDbDataTypeResolver()
    table_builder: Optional[TableBuilder] = None
    for token in _processor_for(ddl_name, context).yield_column_definitions(source_ddl):
        if isinstance(token, TableId):
            table_builder = TableBuilder(table_id=token)
            continue
        if isinstance(token, TablePrimaryKey):
            logger.debug(f'Table primary key of {table_builder.table_id}: {token.column_names}')
            table_builder.set_table_primary_key(token)
            continue
        column_name, column_definition = token
        resolve_column_definition(column_definition, column_name, context,
                                  table_builder=table_builder,
                                  data_type_resolver=data_type_resolver)
    if table_builder is None:
        raise ParsingException('No table found in ddl')
    return table_builder.create()


def column_definition_to_column(definition: str,
                                context: Optional[DdlParserContext] = None,
                                *,
                                table_name: str = 'cdc_ddl_column') -> Column:
    """Resolves a column definition given as text, e.g. "price DECIMAL(10,2) NOT NULL"."""
    table = ddl_to_table(f'CREATE TABLE {table_name} ({definition})', context)
    if len(table.columns) != 1:
        raise ParsingException(f"Expected exactly one column definition in '{definition}', "
                               f'got {len(table.columns)}')
    return table.columns[0]
