"""Column level commands"""
import click

from ...library_api.common.context import DdlParserContext
from ...library_api.common.exceptions import CommandLineException
from ...library_api.common.logging import get_logger
from ...library_api.ddl.common_algo import column_definition_to_column
from ...library_api.utility.decorators import report_error_and_exit, with_parser_context
from ...library_api.utility.json_util import to_json

logger = get_logger()


@click.group(help='Column-related operations')
@click.pass_context
def column(ctx: click.Context):
    pass


@click.command(help="Resolve a single column definition, e.g. \"price DECIMAL(10,2) NOT NULL\".")
@click.option('--table', 'table_name', metavar='TABLENAME', default='cdc_ddl_column',
              help='Table name used in diagnostics.')
@click.option('--indent', type=int, default=None,
              help='Indent the json output with this number of spaces.')
@click.argument('definition')
@click.pass_context
@report_error_and_exit(exctype=Exception)
@with_parser_context
def resolve(ctx: click.Context,
            parser_context: DdlParserContext,
            definition: str,
            table_name: str,
            indent):
    if not definition.strip():
        raise CommandLineException("Missing column definition, e.g. \"price DECIMAL(10,2)\".")
    the_column = column_definition_to_column(definition, parser_context, table_name=table_name)
    logger.info(to_json(the_column.as_dict(), indent=indent))
    for diagnostic in parser_context.diagnostics:
        logger.debug(f'Diagnostic: {diagnostic}')


column.add_command(resolve)
